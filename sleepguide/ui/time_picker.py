"""Bedtime picker - hour/minute/second fields with an AM/PM toggle.

Raw digit entry is clamped on every change (hours 1-12, minutes and seconds
0-59) so the values handed to on_confirm are always in range. An all-empty
entry comes through as zeros and is rejected by TimeSpecification.from_input().
"""
import flet as ft
from typing import Callable

from config import (
    BORDER_RADIUS_LG,
    COLORS,
    DEFAULT_PERIOD,
    FIELD_WIDTH,
    FONT_SIZE_2XL,
    HOUR_MAX,
    HOUR_MIN,
    MINUTE_MAX,
    MINUTE_MIN,
    PADDING_3XL,
    SECOND_MAX,
    SECOND_MIN,
    SPACING_MD,
    Period,
)
from i18n import t
from ui.helpers import accent_btn, clamp_field, pad_field

ConfirmHandler = Callable[[int, int, int, Period], None]


class TimePicker(ft.Container):
    def __init__(self, on_confirm: ConfirmHandler) -> None:
        self._on_confirm = on_confirm
        self.period = DEFAULT_PERIOD

        self.hours = self._make_field(t("hours"), HOUR_MIN, HOUR_MAX)
        self.minutes = self._make_field(t("minutes"), MINUTE_MIN, MINUTE_MAX)
        self.seconds = self._make_field(t("seconds"), SECOND_MIN, SECOND_MAX)
        self.am_btn = ft.Button(Period.AM.value, on_click=lambda e: self.set_period(Period.AM))
        self.pm_btn = ft.Button(Period.PM.value, on_click=lambda e: self.set_period(Period.PM))
        self._paint_period()

        super().__init__(
            content=ft.Column(
                [
                    ft.Text(t("set_sleep_timer"), size=FONT_SIZE_2XL, weight="bold"),
                    ft.Row([self.hours, ft.Text(":"), self.minutes, ft.Text(":"), self.seconds], tight=True),
                    ft.Row([self.am_btn, self.pm_btn], spacing=SPACING_MD, tight=True),
                    ft.Row(
                        [
                            ft.TextButton(t("cancel"), on_click=lambda e: self.hide()),
                            accent_btn(t("set_time"), self._on_set_clicked),
                        ],
                        alignment=ft.MainAxisAlignment.END,
                    ),
                ],
                tight=True,
                spacing=SPACING_MD,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            bgcolor=COLORS["card"],
            padding=PADDING_3XL,
            border_radius=BORDER_RADIUS_LG,
            visible=False,
        )

    def _make_field(self, hint: str, low: int, high: int) -> ft.TextField:
        field = ft.TextField(
            hint_text=hint,
            width=FIELD_WIDTH,
            text_align=ft.TextAlign.CENTER,
            border_color=COLORS["border"],
            keyboard_type=ft.KeyboardType.NUMBER,
            max_length=2,
        )

        def on_change(e: ft.ControlEvent) -> None:
            if not field.value:
                return
            field.value = pad_field(clamp_field(field.value, low, high))
            field.update()

        field.on_change = on_change
        return field

    def set_period(self, period: Period) -> None:
        self.period = period
        self._paint_period()
        self.update()

    def _paint_period(self) -> None:
        for btn, period in ((self.am_btn, Period.AM), (self.pm_btn, Period.PM)):
            selected = self.period == period
            btn.bgcolor = COLORS["accent"] if selected else COLORS["bg"]
            btn.color = COLORS["white"] if selected else COLORS["muted"]

    def show(self) -> None:
        self.visible = True
        self.update()

    def hide(self) -> None:
        self.visible = False
        self.update()

    async def _on_set_clicked(self, e: ft.ControlEvent) -> None:
        # Async so on_confirm runs on the event loop the scheduler registers with.
        # Empty fields read as zero so an empty picker reaches the "no target" path
        hour = clamp_field(self.hours.value, 0, HOUR_MAX)
        minute = clamp_field(self.minutes.value, MINUTE_MIN, MINUTE_MAX)
        second = clamp_field(self.seconds.value, SECOND_MIN, SECOND_MAX)
        self.hide()
        self._on_confirm(hour, minute, second, self.period)
