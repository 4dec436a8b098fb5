class BedtimeError(Exception):
    """Base exception for bedtime scheduling."""
    pass


class ValidationError(BedtimeError, ValueError):
    """Raised when a time field is outside its 12-hour clock range."""
    pass


class NoTargetError(ValidationError):
    """Raised when the entered time is all zeros and names no bedtime.

    Lets the view show a "please set a valid bedtime" state instead of
    falling through to a default.
    """
    pass


class SchedulingError(BedtimeError):
    """Raised when the event loop refuses a deferred notification."""
    pass
