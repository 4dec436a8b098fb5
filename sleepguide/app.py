import flet as ft
import logging

from typing import Any, List

from config import COLORS, PADDING_3XL, SPACING_3XL, Period
from core import bootstrap, shutdown, start
from errors import NoTargetError, ValidationError
from events import event_bus, AppEvent, Subscription
from i18n import t
from models.entities import BedtimeDisplay, TimeSpecification
from ui.bedtime_view import BedtimeView
from ui.helpers import AlertBanner
from ui.time_picker import TimePicker

logger = logging.getLogger(__name__)


class SleepGuideApp:
    """Main application class wiring the bedtime engine to the Flet page."""

    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self.event_bus = event_bus
        self._subscriptions: List[Subscription] = []

        self.svc = bootstrap(async_scheduler=page.run_task)

        self.alert = AlertBanner(page)
        self.picker = TimePicker(self._on_time_confirmed)
        self.view = BedtimeView(lambda e: self.picker.show())

        self._subscribe_to_events()
        self._build_layout()

        start(self.svc)

        # Register cleanup on page close
        self.page.on_close = self._on_page_close

    def _subscribe_to_events(self) -> None:
        """Subscribe to engine events and track subscriptions for cleanup."""
        self._subscriptions.append(
            self.event_bus.subscribe(AppEvent.BEDTIME_SET, self._on_bedtime_set)
        )
        self._subscriptions.append(
            self.event_bus.subscribe(AppEvent.NOTIFICATION_FIRED, self._on_notification_fired)
        )
        self._subscriptions.append(
            self.event_bus.subscribe(AppEvent.SCHEDULING_FAILED, self._on_scheduling_failed)
        )

    def _unsubscribe_all(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()

    def _on_page_close(self, e: ft.ControlEvent) -> None:
        self._unsubscribe_all()
        shutdown(self.svc)

    def _on_time_confirmed(self, hour: int, minute: int, second: int, period: Period) -> None:
        try:
            spec = TimeSpecification.from_input(hour, minute, second, period)
        except NoTargetError:
            self.view.show_message(t("set_valid_bedtime"))
            self.page.update()
            return
        except ValidationError as e:
            logger.warning(f"Rejected bedtime input: {e}")
            self.view.show_message(t("set_valid_bedtime"))
            self.page.update()
            return

        self.svc.bedtime.set_target(spec)

    def _on_bedtime_set(self, display: Any) -> None:
        if not isinstance(display, BedtimeDisplay):
            return
        self.view.render(display)
        self.page.update()

    def _on_notification_fired(self, data: Any) -> None:
        data = data or {}
        self.alert.show(data.get("title", t("bedtime_reached_title")), data.get("body", ""))

    def _on_scheduling_failed(self, data: Any) -> None:
        self.view.show_message(t("scheduling_failed"), COLORS["danger"])
        self.page.update()

    def _build_layout(self) -> None:
        self.page.add(
            ft.Container(
                content=ft.Column(
                    [self.alert, self.view, self.picker],
                    spacing=SPACING_3XL,
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                ),
                padding=PADDING_3XL,
                expand=True,
            )
        )


def create_app(page: ft.Page) -> SleepGuideApp:
    """Factory function to create the application."""
    return SleepGuideApp(page)
