from datetime import datetime

from config import MINUTES_PER_DAY


def estimate(now: datetime) -> float:
    """Percentage of the current calendar day already elapsed, in [0, 100).

    Minute resolution. Measures the day clock only; it does not look at the
    bedtime target.
    """
    passed_minutes = now.hour * 60 + now.minute
    return passed_minutes / MINUTES_PER_DAY * 100
