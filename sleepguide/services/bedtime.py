import logging
from datetime import datetime
from typing import Callable, Optional

from config import BedtimeState
from errors import SchedulingError
from events import event_bus, AppEvent
from models.entities import BedtimeDisplay, ScheduledBedtime, TimeSpecification
from services import occurrence, progress
from services.scheduler import NotificationScheduler

logger = logging.getLogger(__name__)


class BedtimeController:
    """Keeps one bedtime and its single pending notification.

    Framework-agnostic: the periodic tick is driven from outside
    (TickService or a test) through on_periodic_tick(), and the one-shot
    fire belongs to the injected scheduler. Once a target is set the
    controller stays active for the life of the process.
    """

    def __init__(
        self,
        scheduler: NotificationScheduler,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._current: Optional[ScheduledBedtime] = None
        self._display: Optional[BedtimeDisplay] = None

    @property
    def state(self) -> BedtimeState:
        return BedtimeState.IDLE if self._current is None else BedtimeState.ACTIVE

    @property
    def current(self) -> Optional[ScheduledBedtime]:
        return self._current

    @property
    def display(self) -> Optional[BedtimeDisplay]:
        """Last display tuple produced by set_target() or a tick."""
        return self._display

    def set_target(self, spec: TimeSpecification, now: Optional[datetime] = None) -> BedtimeDisplay:
        """Make `spec` the bedtime and (re)arm its notification.

        Any previously pending notification is replaced. A scheduling failure
        is logged and leaves the controller active with no pending handle,
        so the next tick retries.
        """
        if now is None:
            now = self._clock()
        next_occurrence = occurrence.resolve(spec, now)
        delay = next_occurrence - now

        old_handle = self._current.handle if self._current else None
        handle = None
        if delay.total_seconds() > 0:
            try:
                handle = self._scheduler.replace(old_handle, delay, self._on_bedtime_reached)
            except SchedulingError as e:
                logger.error(f"Could not schedule bedtime notification: {e}")
                event_bus.emit(AppEvent.SCHEDULING_FAILED, {"target": spec, "error": str(e)})
        else:
            self._scheduler.cancel(old_handle)

        self._current = ScheduledBedtime(target=spec, next_occurrence=next_occurrence, handle=handle)
        self._display = BedtimeDisplay(
            progress_percentage=progress.estimate(now),
            display_string=spec.display(),
            next_occurrence=next_occurrence,
            seconds_until=int(delay.total_seconds()),
        )
        logger.info(f"Bedtime set to {spec.display()}, next at {next_occurrence.isoformat()}")
        event_bus.emit(AppEvent.BEDTIME_SET, self._display)
        return self._display

    def on_periodic_tick(self, now: Optional[datetime] = None) -> Optional[BedtimeDisplay]:
        """Recompute the next occurrence and progress. Ignored while idle."""
        if self._current is None:
            return None
        display = self.set_target(self._current.target, now)
        event_bus.emit(AppEvent.PROGRESS_UPDATED, display)
        return display

    def _on_bedtime_reached(self) -> None:
        current = self._current
        if current is None:
            return
        logger.info(f"Bedtime reached: {current.target.display()}")
        event_bus.emit(AppEvent.BEDTIME_REACHED, current)

    def cleanup(self) -> None:
        """Cancel the pending notification, if any."""
        if self._current is not None:
            self._scheduler.cancel(self._current.handle)
