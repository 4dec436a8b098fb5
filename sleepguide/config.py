"""Application configuration - single source of truth for all constants.

Contains enums (Period, BedtimeState, NotificationType), timing values and colors.
Import from here instead of hardcoding values elsewhere to ensure consistency across the app.
"""
import os
from enum import Enum
from pathlib import Path

# Load .env if available (desktop only - not bundled in mobile builds)
try:
    from dotenv import load_dotenv
    load_dotenv(Path(__file__).parent / ".env")
except ImportError:
    pass  # dotenv not available on mobile, skip loading .env


class Period(Enum):
    """Half of the day on a 12-hour clock."""
    AM = "AM"
    PM = "PM"


class BedtimeState(Enum):
    """Lifecycle of the bedtime controller."""
    IDLE = "idle"
    ACTIVE = "active"


class NotificationType(Enum):
    """Enum for notification types."""
    BEDTIME_REACHED = "bedtime_reached"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


HOUR_MIN = 1
HOUR_MAX = 12
MINUTE_MIN = 0
MINUTE_MAX = 59
SECOND_MIN = 0
SECOND_MAX = 59

MINUTES_PER_DAY = 24 * 60

# Recurring recomputation while a bedtime is active
TICK_INTERVAL_SECONDS = _env_float("SLEEPGUIDE_TICK_SECONDS", 60.0)

# In-app "time for bed" alert stays visible this long
ALERT_SECONDS = _env_float("SLEEPGUIDE_ALERT_SECONDS", 3.0)

DEFAULT_PERIOD = Period.__members__.get(
    os.getenv("SLEEPGUIDE_DEFAULT_PERIOD", "PM").strip().upper(), Period.PM
)
DEFAULT_LANGUAGE = os.getenv("SLEEPGUIDE_LANGUAGE", "en").strip().lower() or "en"
LOG_LEVEL = os.getenv("SLEEPGUIDE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
DESKTOP_NOTIFICATIONS = os.getenv("SLEEPGUIDE_DESKTOP_NOTIFICATIONS", "1") == "1"

APP_NAME = "Sleep Guide"

BORDER_RADIUS = 10
BORDER_RADIUS_LG = 20

FONT_SIZE_MD = 12
FONT_SIZE_LG = 14
FONT_SIZE_2XL = 18
FONT_SIZE_5XL = 32

SPACING_MD = 8
SPACING_3XL = 20

PADDING_3XL = 20
PADDING_4XL = 40

FIELD_WIDTH = 70
PROGRESS_BAR_HEIGHT = 12
DIALOG_WIDTH_LG = 320

COLORS = {
    "bg": "#1e1e1e",
    "card": "#2d2d2d",
    "accent": "#4a9eff",
    "border": "#333",
    "danger": "#ff6b6b",
    "white": "white",
    "muted": "#888888",
    "night": "#3f51b5",
}
