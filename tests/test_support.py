"""Tests for formatting, translations, the event bus and the time picker helpers."""
from datetime import datetime

import pytest

from config import Period
from events import AppEvent, event_bus
from formatters import TimeFormatter
from i18n import get_language, set_language, t
from models.entities import TimeSpecification
from ui.helpers import clamp_field, pad_field


class TestTimeFormatter:
    def test_spec_to_display(self):
        assert TimeFormatter.spec_to_display(TimeSpecification(7, 0, 5, Period.AM)) == "07:00:05 AM"

    @pytest.mark.parametrize("seconds, expected", [
        (45, "45s"),
        (300, "5m"),
        (3600, "1h"),
        (27000, "7h 30m"),
    ])
    def test_seconds_to_countdown(self, seconds, expected):
        assert TimeFormatter.seconds_to_countdown(seconds) == expected

    def test_percent_truncates(self):
        assert TimeFormatter.percent_to_display(58.9) == "58%"


class TestTranslations:
    def test_english_default(self):
        assert t("bedtime_reached_title") == "Time for bed!"

    def test_switch_language(self):
        previous = get_language()
        try:
            set_language("ro")
            assert t("bedtime_reached_title") == "E timpul de culcare!"
        finally:
            set_language(previous)

    def test_unknown_language_ignored(self):
        previous = get_language()
        set_language("xx")
        assert get_language() == previous

    def test_unknown_key_returns_key(self):
        assert t("no_such_key") == "no_such_key"


class TestEventBus:
    def test_bound_method_dropped_when_owner_collected(self):
        class Listener:
            def __init__(self):
                self.calls = 0

            def on_tick(self, data):
                self.calls += 1

        listener = Listener()
        event_bus.subscribe(AppEvent.TICK, listener.on_tick)
        event_bus.emit(AppEvent.TICK, datetime(2026, 3, 10))
        assert listener.calls == 1

        del listener
        event_bus.emit(AppEvent.TICK, datetime(2026, 3, 10))
        assert event_bus.subscriber_count(AppEvent.TICK) == 0

    def test_failing_handler_does_not_block_others(self):
        received = []

        def broken(data):
            raise RuntimeError("boom")

        sub_a = event_bus.subscribe(AppEvent.TICK, broken, strong=True)
        sub_b = event_bus.subscribe(AppEvent.TICK, lambda data: received.append(data))
        event_bus.emit(AppEvent.TICK, 1)

        assert received == [1]
        sub_a.unsubscribe()
        sub_b.unsubscribe()

    def test_unsubscribe(self):
        received = []
        sub = event_bus.subscribe(AppEvent.TICK, lambda data: received.append(data))
        sub.unsubscribe()
        event_bus.emit(AppEvent.TICK, 1)
        assert received == []
        assert not sub.active


class TestClampField:
    @pytest.mark.parametrize("raw, low, high, expected", [
        ("7", 1, 12, 7),
        ("13", 1, 12, 12),
        ("0", 1, 12, 1),
        ("", 0, 59, 0),
        (None, 0, 59, 0),
        ("ab", 0, 59, 0),
        ("75", 0, 59, 59),
    ])
    def test_clamp(self, raw, low, high, expected):
        assert clamp_field(raw, low, high) == expected

    def test_pad(self):
        assert pad_field(5) == "05"
