from datetime import datetime, timedelta

from models.entities import TimeSpecification


def _candidate_for_day(spec: TimeSpecification, now: datetime) -> datetime:
    """Bedtime on the same calendar day as `now`."""
    return now.replace(
        hour=spec.hour24,
        minute=spec.minute,
        second=spec.second,
        microsecond=0,
    )


def resolve(spec: TimeSpecification, now: datetime) -> datetime:
    """Return the next instant the bedtime refers to.

    Today's occurrence is used while it is still ahead of `now`; a candidate
    at or before `now` rolls forward by exactly one calendar day.
    """
    candidate = _candidate_for_day(spec, now)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def time_until(spec: TimeSpecification, now: datetime) -> timedelta:
    """Delay from `now` until the next occurrence (always positive)."""
    return resolve(spec, now) - now
