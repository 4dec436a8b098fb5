"""Time formatting utilities for the bedtime display.

Turns bedtimes, countdowns and day progress into strings like "10:30:00 PM",
"7h 30m" and "58%".
"""
from models.entities import TimeSpecification


class TimeFormatter:
    """Unified time formatting utilities for the application."""

    @staticmethod
    def spec_to_display(spec: TimeSpecification) -> str:
        """Bedtime as HH:MM:SS AM|PM."""
        return spec.display()

    @staticmethod
    def seconds_to_countdown(seconds: int) -> str:
        """Convert seconds to a short countdown like '45s', '5m' or '7h 30m'."""
        if seconds < 60:
            return f"{seconds}s"
        minutes = seconds // 60
        hours, mins = divmod(minutes, 60)
        if hours > 0:
            return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
        return f"{mins}m"

    @staticmethod
    def percent_to_display(percentage: float) -> str:
        return f"{int(percentage)}%"
