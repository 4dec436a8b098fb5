"""Shared fixtures for Sleep Guide tests."""
from datetime import datetime, timedelta
from typing import Any, List, Tuple

import pytest

from errors import SchedulingError
from events import AppEvent, event_bus
from registry import registry
from services.bedtime import BedtimeController
from services.scheduler import NotificationHandle, NotificationScheduler


class FakeScheduler(NotificationScheduler):
    """Scheduler that never touches the event loop.

    Handles are recorded instead of registered; tests fire them by hand.
    """

    def __init__(self) -> None:
        super().__init__()
        self.registered: List[NotificationHandle] = []
        self.fail_next = False

    def _register(self, handle: NotificationHandle) -> None:
        if self.fail_next:
            self.fail_next = False
            raise SchedulingError("timer facility refused registration")
        self.registered.append(handle)

    def fire(self, handle: NotificationHandle) -> None:
        self._dispatch(handle)

    @property
    def last(self) -> NotificationHandle:
        return self.registered[-1]


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class EventCollector:
    """Subscribe to events and record them for assertions."""

    def __init__(self, *events: AppEvent):
        self.received: List[Tuple[AppEvent, Any]] = []
        self._subs = []
        for ev in events:
            sub = event_bus.subscribe(ev, lambda data, _ev=ev: self.received.append((_ev, data)))
            self._subs.append(sub)

    def count(self, event: AppEvent) -> int:
        return sum(1 for ev, _ in self.received if ev == event)

    def last(self, event: AppEvent) -> Any:
        matching = [data for ev, data in self.received if ev == event]
        return matching[-1] if matching else None

    def cleanup(self):
        for sub in self._subs:
            sub.unsubscribe()


@pytest.fixture(autouse=True)
def reset_singletons():
    """Clear event subscriptions and service registrations between tests."""
    event_bus.clear()
    registry.clear()
    yield
    event_bus.clear()
    registry.clear()


@pytest.fixture
def collect():
    """Factory for EventCollectors that are cleaned up after the test."""
    collectors: List[EventCollector] = []

    def _make(*events: AppEvent) -> EventCollector:
        collector = EventCollector(*events)
        collectors.append(collector)
        return collector

    yield _make
    for collector in collectors:
        collector.cleanup()


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 3, 10, 14, 0, 0))


@pytest.fixture
def controller(fake_scheduler: FakeScheduler, clock: FixedClock) -> BedtimeController:
    return BedtimeController(fake_scheduler, clock=clock)
