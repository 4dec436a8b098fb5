"""
Bedtime notification delivery.

The BedtimeController only announces AppEvent.BEDTIME_REACHED; this service
turns that event into something the user sees outside the app window:
- plyer (desktop): native notification on Windows/Linux/Mac
- none: nothing beyond the in-app alert the view shows

Every delivery, successful or not, is followed by AppEvent.NOTIFICATION_FIRED
so the view can show its own alert.
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Callable, List, Optional

from config import APP_NAME, DESKTOP_NOTIFICATIONS, NotificationType
from events import event_bus, AppEvent, Subscription
from i18n import t
from models.entities import ScheduledBedtime

logger = logging.getLogger(__name__)

PLYER_TIMEOUT_SECONDS = 10


class NotificationBackend(Enum):
    """Available notification backends."""
    PLYER = "plyer"
    NONE = "none"


PLYER_AVAILABLE = False

try:
    from plyer import notification as plyer_notification
    PLYER_AVAILABLE = True
    logger.info("plyer available for desktop")
except ImportError:
    logger.info("plyer not available")


def _detect_notification_backend() -> NotificationBackend:
    if DESKTOP_NOTIFICATIONS and PLYER_AVAILABLE:
        return NotificationBackend.PLYER
    return NotificationBackend.NONE


class NotificationService:
    """Delivers the "bedtime reached" notification."""

    def __init__(self, backend: Optional[NotificationBackend] = None) -> None:
        self._backend = backend or _detect_notification_backend()
        logger.info(f"Notification backend: {self._backend.value}")

        self._schedule_async: Optional[Callable[..., asyncio.Task]] = None
        self._subscriptions: List[Subscription] = []
        self.delivered_count: int = 0

    def inject_dependencies(self, async_scheduler: Callable[..., asyncio.Task]) -> None:
        """Inject dependencies after construction.

        Args:
            async_scheduler: Function to schedule async work (page.run_task)
        """
        self._schedule_async = async_scheduler

    def start(self) -> None:
        """Start listening for bedtime events."""
        if self._subscriptions:
            return
        if self._schedule_async is None:
            raise RuntimeError("NotificationService dependencies not injected")
        self._subscriptions.append(
            event_bus.subscribe(AppEvent.BEDTIME_REACHED, self._on_bedtime_reached)
        )

    def stop(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions.clear()

    def _on_bedtime_reached(self, data: Any) -> None:
        if not isinstance(data, ScheduledBedtime) or self._schedule_async is None:
            return

        title = t("bedtime_reached_title")
        body = t("bedtime_reached_body").replace("{time}", data.target.display())

        async def deliver_wrapper() -> None:
            await self.show_immediate(title, body)
        self._schedule_async(deliver_wrapper)

    async def show_immediate(self, title: str, body: str) -> bool:
        """Show a notification now through the active backend.

        Returns:
            True if the backend reported success.
        """
        logger.info(f"Delivering notification: {title}")
        delivered = False
        if self._backend == NotificationBackend.PLYER:
            delivered = await self._deliver_plyer_notification(title, body)

        if delivered:
            self.delivered_count += 1

        event_bus.emit(AppEvent.NOTIFICATION_FIRED, {
            "ntype": NotificationType.BEDTIME_REACHED.value,
            "title": title,
            "body": body,
            "delivered": delivered,
        })
        return delivered

    async def _deliver_plyer_notification(self, title: str, body: str) -> bool:
        if not PLYER_AVAILABLE:
            return False

        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                lambda: plyer_notification.notify(
                    title=title,
                    message=body,
                    app_name=APP_NAME,
                    timeout=PLYER_TIMEOUT_SECONDS,
                )
            )
            return True
        except (OSError, RuntimeError) as e:
            logger.error(f"Error showing plyer notification: {e}")
            return False

    @property
    def backend(self) -> NotificationBackend:
        return self._backend

    @property
    def is_running(self) -> bool:
        return bool(self._subscriptions)
