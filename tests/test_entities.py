"""Tests for TimeSpecification validation and formatting."""
import dataclasses

import pytest

from config import Period
from errors import NoTargetError, ValidationError
from models.entities import TimeSpecification


class TestConstruction:
    def test_valid_spec(self):
        spec = TimeSpecification(10, 30, 0, Period.PM)
        assert (spec.hour, spec.minute, spec.second, spec.period) == (10, 30, 0, Period.PM)

    @pytest.mark.parametrize("hour", [0, 13, -1])
    def test_hour_out_of_range(self, hour):
        with pytest.raises(ValidationError):
            TimeSpecification(hour, 0, 0, Period.AM)

    @pytest.mark.parametrize("field", ["minute", "second"])
    @pytest.mark.parametrize("value", [-1, 60])
    def test_minute_and_second_out_of_range(self, field, value):
        kwargs = {"hour": 9, "minute": 0, "second": 0, "period": Period.PM, field: value}
        with pytest.raises(ValidationError):
            TimeSpecification(**kwargs)

    def test_bounds_are_inclusive(self):
        TimeSpecification(1, 0, 0, Period.AM)
        TimeSpecification(12, 59, 59, Period.PM)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError):
            TimeSpecification("10", 0, 0, Period.PM)

    def test_string_period_is_coerced(self):
        assert TimeSpecification(10, 0, 0, "pm").period == Period.PM

    def test_unknown_period_rejected(self):
        with pytest.raises(ValidationError):
            TimeSpecification(10, 0, 0, "noon")

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            TimeSpecification(13, 0, 0, Period.PM)

    def test_immutable(self):
        spec = TimeSpecification(10, 30, 0, Period.PM)
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.hour = 11


class TestFromInput:
    def test_all_zero_is_no_target(self):
        with pytest.raises(NoTargetError):
            TimeSpecification.from_input(0, 0, 0, Period.PM)

    def test_no_target_is_also_a_validation_error(self):
        with pytest.raises(ValidationError):
            TimeSpecification.from_input(0, 0, 0, "AM")

    def test_zero_hour_with_minutes_is_invalid_not_no_target(self):
        with pytest.raises(ValidationError) as exc_info:
            TimeSpecification.from_input(0, 30, 0, Period.PM)
        assert not isinstance(exc_info.value, NoTargetError)

    def test_builds_spec(self):
        spec = TimeSpecification.from_input(7, 5, 9, "am")
        assert spec == TimeSpecification(7, 5, 9, Period.AM)


class TestHour24:
    def test_twelve_am_is_midnight(self):
        assert TimeSpecification(12, 0, 0, Period.AM).hour24 == 0

    def test_twelve_pm_is_noon(self):
        assert TimeSpecification(12, 0, 0, Period.PM).hour24 == 12

    @pytest.mark.parametrize("hour", range(1, 12))
    def test_am_hours_unchanged(self, hour):
        assert TimeSpecification(hour, 0, 0, Period.AM).hour24 == hour

    @pytest.mark.parametrize("hour", range(1, 12))
    def test_pm_hours_add_twelve(self, hour):
        assert TimeSpecification(hour, 0, 0, Period.PM).hour24 == hour + 12


class TestDisplay:
    def test_zero_padded(self):
        assert TimeSpecification(9, 5, 7, Period.PM).display() == "09:05:07 PM"

    def test_twelve_am(self):
        assert TimeSpecification(12, 0, 0, Period.AM).display() == "12:00:00 AM"
