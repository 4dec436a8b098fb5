"""One-shot deferred notifications on the asyncio event loop.

A NotificationHandle is the ownership token for a single pending fire.
Cancelling it is idempotent: a handle that already fired or was cancelled
is simply inert.

All methods are synchronous, so replace() cancels the old handle and
registers the new one without yielding to the loop in between.
"""
import asyncio
import itertools
import logging
from datetime import timedelta
from enum import Enum
from typing import Callable, Dict, Optional

from errors import SchedulingError
from events import event_bus, AppEvent

logger = logging.getLogger(__name__)


class HandleStatus(Enum):
    PENDING = "pending"
    FIRED = "fired"
    CANCELED = "canceled"


class NotificationHandle:
    """A single registered deferred fire."""

    def __init__(self, handle_id: int, delay_seconds: float, on_fire: Callable[[], None]) -> None:
        self.id = handle_id
        self.delay_seconds = delay_seconds
        self._on_fire = on_fire
        self._timer: Optional[asyncio.TimerHandle] = None
        self._status = HandleStatus.PENDING

    @property
    def status(self) -> HandleStatus:
        return self._status

    @property
    def active(self) -> bool:
        return self._status == HandleStatus.PENDING

    def _fire(self) -> None:
        if not self.active:
            return
        # Inert before the callback runs so a re-target inside it sees no live handle
        self._status = HandleStatus.FIRED
        self._timer = None
        self._on_fire()

    def _cancel(self) -> bool:
        if not self.active:
            return False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._status = HandleStatus.CANCELED
        return True

    def __repr__(self) -> str:
        return f"NotificationHandle(id={self.id}, status={self._status.value}, delay={self.delay_seconds:.0f}s)"


class NotificationScheduler:
    """Registers one-shot callbacks with loop.call_later().

    The loop is resolved at schedule time unless one is injected, so the
    scheduler can be built before the Flet page starts its loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._ids = itertools.count(1)
        self._live: Dict[int, NotificationHandle] = {}

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            loop = self._loop
        else:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                raise SchedulingError("No running event loop to schedule on") from None
        if loop.is_closed():
            raise SchedulingError("Event loop is closed")
        return loop

    def _register(self, handle: NotificationHandle) -> None:
        """Hand the handle to the timer facility."""
        loop = self._get_loop()
        try:
            handle._timer = loop.call_later(handle.delay_seconds, self._dispatch, handle)
        except RuntimeError as e:
            raise SchedulingError(f"Event loop refused registration: {e}") from e

    def _dispatch(self, handle: NotificationHandle) -> None:
        self._live.pop(handle.id, None)
        if not handle.active:
            return
        logger.info(f"Notification {handle.id} firing")
        handle._fire()

    def schedule(self, delay: timedelta, on_fire: Callable[[], None]) -> NotificationHandle:
        """Register `on_fire` to run once after `delay`.

        Raises:
            SchedulingError: If the delay is not positive or the loop refuses it.
        """
        seconds = delay.total_seconds()
        if seconds <= 0:
            raise SchedulingError(f"Delay must be positive, got {seconds}s")

        handle = NotificationHandle(next(self._ids), seconds, on_fire)
        self._register(handle)
        self._live[handle.id] = handle
        logger.debug(f"Scheduled {handle!r}")
        event_bus.emit(AppEvent.NOTIFICATION_SCHEDULED, {
            "handle_id": handle.id,
            "delay_seconds": seconds,
        })
        return handle

    def cancel(self, handle: Optional[NotificationHandle]) -> None:
        """Cancel a pending handle. No-op for None, fired or cancelled handles."""
        if handle is None:
            return
        self._live.pop(handle.id, None)
        if handle._cancel():
            logger.debug(f"Canceled {handle!r}")
            event_bus.emit(AppEvent.NOTIFICATION_CANCELED, {"handle_id": handle.id})

    def replace(
        self,
        old: Optional[NotificationHandle],
        delay: timedelta,
        on_fire: Callable[[], None],
    ) -> NotificationHandle:
        """Cancel `old` and register a new handle in one step.

        If registration fails, `old` stays cancelled and SchedulingError
        propagates, leaving zero live handles.
        """
        self.cancel(old)
        return self.schedule(delay, on_fire)

    def cancel_all(self) -> None:
        for handle in list(self._live.values()):
            self.cancel(handle)

    @property
    def live_count(self) -> int:
        """Number of registered handles that have not fired or been cancelled."""
        return len(self._live)
