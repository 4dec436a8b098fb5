import asyncio
import flet as ft
from typing import Optional

from config import ALERT_SECONDS, BORDER_RADIUS, COLORS, FONT_SIZE_LG, FONT_SIZE_MD


def clamp_field(raw: Optional[str], low: int, high: int) -> int:
    """Parse a digit field, treating junk as 0, and clamp it to [low, high]."""
    try:
        value = int((raw or "").strip())
    except ValueError:
        value = 0
    return max(low, min(high, value))


def pad_field(value: int) -> str:
    return f"{value:02d}"


def accent_btn(text: str, on_click) -> ft.Button:
    return ft.Button(
        text,
        on_click=on_click,
        bgcolor=COLORS["accent"],
        color=COLORS["white"],
    )


class AlertBanner(ft.Container):
    """In-app "time for bed" alert that hides itself after ALERT_SECONDS."""

    def __init__(self, page: ft.Page, duration_seconds: float = ALERT_SECONDS) -> None:
        self._page = page
        self._duration = duration_seconds
        self._shown = 0
        self.title = ft.Text("", size=FONT_SIZE_LG, weight="bold", color=COLORS["white"])
        self.body = ft.Text("", size=FONT_SIZE_MD, color=COLORS["white"])
        super().__init__(
            content=ft.Row(
                [ft.Icon(ft.Icons.BEDTIME, color=COLORS["white"]), ft.Column([self.title, self.body], tight=True)],
                tight=True,
            ),
            bgcolor=COLORS["night"],
            padding=15,
            border_radius=BORDER_RADIUS,
            visible=False,
        )

    def show(self, title: str, body: str, color: Optional[str] = None) -> None:
        self.title.value = title
        self.body.value = body
        self.bgcolor = color or COLORS["night"]
        self.visible = True
        self._shown += 1
        shown = self._shown
        self._page.update()

        async def auto_dismiss() -> None:
            await asyncio.sleep(self._duration)
            # A newer alert restarts the countdown
            if shown == self._shown:
                self.visible = False
                self._page.update()
        self._page.run_task(auto_dismiss)
