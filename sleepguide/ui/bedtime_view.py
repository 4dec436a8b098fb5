"""Bedtime panel - day progress bar plus the bedtime status line.

render() takes the BedtimeDisplay the controller emits on every set-target
and tick. The bar shows how much of the calendar day has passed, not how
close the bedtime is.
"""
import flet as ft
from typing import Callable

from config import (
    BORDER_RADIUS_LG,
    COLORS,
    FONT_SIZE_LG,
    FONT_SIZE_MD,
    FONT_SIZE_5XL,
    PADDING_4XL,
    PROGRESS_BAR_HEIGHT,
    SPACING_3XL,
)
from formatters import TimeFormatter
from i18n import t
from models.entities import BedtimeDisplay
from ui.helpers import accent_btn


class BedtimeView(ft.Container):
    def __init__(self, on_open_picker: Callable[[ft.ControlEvent], None]) -> None:
        self.percent_text = ft.Text("0%", size=FONT_SIZE_5XL, weight="bold")
        self.progress_bar = ft.ProgressBar(
            value=0,
            bar_height=PROGRESS_BAR_HEIGHT,
            color=COLORS["accent"],
            bgcolor=COLORS["border"],
        )
        self.progress_caption = ft.Text("", size=FONT_SIZE_MD, color=COLORS["muted"])
        self.status = ft.Text(t("no_bedtime_set"), size=FONT_SIZE_LG)
        self.countdown = ft.Text("", size=FONT_SIZE_MD, color=COLORS["muted"])
        super().__init__(
            content=ft.Column(
                [
                    ft.Icon(ft.Icons.BEDTIME, size=48, color=COLORS["accent"]),
                    self.percent_text,
                    self.progress_bar,
                    self.progress_caption,
                    self.status,
                    self.countdown,
                    accent_btn(t("set_sleep_timer"), on_open_picker),
                ],
                spacing=SPACING_3XL,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            bgcolor=COLORS["card"],
            padding=PADDING_4XL,
            border_radius=BORDER_RADIUS_LG,
        )

    def render(self, display: BedtimeDisplay) -> None:
        percent = TimeFormatter.percent_to_display(display.progress_percentage)
        self.percent_text.value = percent
        self.progress_bar.value = display.progress_percentage / 100
        self.progress_caption.value = t("day_progress").replace("{percent}", percent)
        self.status.value = t("bedtime_at").replace("{time}", display.display_string)
        self.status.color = None
        self.countdown.value = t("bedtime_in").replace(
            "{countdown}", TimeFormatter.seconds_to_countdown(display.seconds_until)
        )

    def show_message(self, message: str, color: str = COLORS["danger"]) -> None:
        self.status.value = message
        self.status.color = color
