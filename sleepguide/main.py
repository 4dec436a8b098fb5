import flet as ft
import logging

from app import create_app
from config import COLORS, LOG_LEVEL
from i18n import t


def main(page: ft.Page):
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    page.title = t("app_title")
    page.theme_mode = ft.ThemeMode.DARK
    page.bgcolor = COLORS["bg"]
    page.padding = 0
    create_app(page)


if __name__ == "__main__":
    ft.app(target=main)
