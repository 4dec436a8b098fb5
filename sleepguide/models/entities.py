from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union, TYPE_CHECKING

from config import (
    HOUR_MAX,
    HOUR_MIN,
    MINUTE_MAX,
    MINUTE_MIN,
    SECOND_MAX,
    SECOND_MIN,
    Period,
)
from errors import NoTargetError, ValidationError

if TYPE_CHECKING:
    from services.scheduler import NotificationHandle


def _coerce_period(value: Union[Period, str]) -> Period:
    if isinstance(value, Period):
        return value
    try:
        return Period(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Period must be AM or PM, got {value!r}") from None


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ValidationError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class TimeSpecification:
    """A bedtime on the 12-hour wall clock.

    Built fresh every time the user confirms a target and never mutated.
    Out-of-range fields are rejected here; clamping raw digit entry is the
    time picker's job.
    """
    hour: int
    minute: int
    second: int
    period: Period

    def __post_init__(self) -> None:
        _check_range("hour", self.hour, HOUR_MIN, HOUR_MAX)
        _check_range("minute", self.minute, MINUTE_MIN, MINUTE_MAX)
        _check_range("second", self.second, SECOND_MIN, SECOND_MAX)
        if not isinstance(self.period, Period):
            object.__setattr__(self, "period", _coerce_period(self.period))

    @classmethod
    def from_input(
        cls,
        hour: int,
        minute: int,
        second: int,
        period: Union[Period, str],
    ) -> "TimeSpecification":
        """Build a specification from time picker values.

        Raises:
            NoTargetError: If every field is zero.
            ValidationError: If any field is out of range.
        """
        if hour == 0 and minute == 0 and second == 0:
            raise NoTargetError("No bedtime entered")
        return cls(hour=hour, minute=minute, second=second, period=_coerce_period(period))

    @property
    def hour24(self) -> int:
        """Hour on the 24-hour clock (12 AM is 0, 12 PM is 12)."""
        if self.period == Period.AM and self.hour == 12:
            return 0
        if self.period == Period.PM and self.hour != 12:
            return self.hour + 12
        return self.hour

    def display(self) -> str:
        """Format as HH:MM:SS AM|PM."""
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d} {self.period.value}"


@dataclass
class ScheduledBedtime:
    """Controller-owned bedtime state.

    `handle` is the notification registered for `next_occurrence`. It turns
    inert once it fires, and is None when registration failed or was skipped.
    """
    target: TimeSpecification
    next_occurrence: datetime
    handle: Optional["NotificationHandle"] = None

    @property
    def has_pending_notification(self) -> bool:
        return self.handle is not None and self.handle.active


@dataclass(frozen=True)
class BedtimeDisplay:
    """What the view renders after every set-target or tick."""
    progress_percentage: float
    display_string: str
    next_occurrence: datetime
    seconds_until: int = 0
