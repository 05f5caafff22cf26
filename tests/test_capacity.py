"""
Tests for the sprint capacity calculator.
"""

import pytest
from datetime import date

from sprint_planner.capacity import (
    FormatError,
    SprintCapacity,
    daily_hours_from_string,
    planned_hours_for_sprint,
    calculate_sprint_capacity
)
from sprint_planner.models import Holiday, Sprint


def make_sprint(start: str = "2025-01-06", end: str = "2025-01-12") -> Sprint:
    return Sprint(
        id="s1",
        name="Sprint 1",
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end)
    )


def make_holiday(day: str) -> Holiday:
    return Holiday(id=day, name="Holiday", start_date=date.fromisoformat(day), end_date=date.fromisoformat(day))


class TestDailyHours:
    """Tests for HH:mm parsing."""

    def test_whole_hours(self):
        assert daily_hours_from_string("08:00") == 8

    def test_minutes(self):
        assert daily_hours_from_string("07:30") == 7.5
        assert daily_hours_from_string("06:45") == 6.75

    @pytest.mark.parametrize("value", ["8:00", "08:0", "0800", "08:00:00", "ab:cd", "", "24:00", "08:60"])
    def test_malformed_values(self, value):
        with pytest.raises(FormatError):
            daily_hours_from_string(value)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            daily_hours_from_string("eight")


class TestPlannedHours:
    """Tests for planned hours per sprint."""

    def test_five_business_days(self):
        """A Monday-to-Sunday sprint at 8h/day gives 40 hours."""
        assert planned_hours_for_sprint(make_sprint(), 8, [], include_holidays=True) == 40

    def test_include_holidays_counts_them_as_working_days(self):
        holidays = [make_holiday("2025-01-08")]
        assert planned_hours_for_sprint(make_sprint(), 8, holidays, include_holidays=True) == 40

    def test_excluding_holidays_removes_them(self):
        holidays = [make_holiday("2025-01-08")]
        assert planned_hours_for_sprint(make_sprint(), 8, holidays, include_holidays=False) == 32

    def test_weekend_holiday_changes_nothing(self):
        holidays = [make_holiday("2025-01-11")]
        assert planned_hours_for_sprint(make_sprint(), 8, holidays, include_holidays=False) == 40

    def test_reversed_sprint_has_no_hours(self):
        sprint = make_sprint("2025-01-12", "2025-01-06")
        assert planned_hours_for_sprint(sprint, 8) == 0

    def test_fractional_daily_hours(self):
        assert planned_hours_for_sprint(make_sprint(), 7.5) == 37.5


class TestSprintCapacity:
    """Tests for the capacity breakdown."""

    def test_breakdown_with_holidays_excluded(self):
        capacity = calculate_sprint_capacity(
            make_sprint("2025-05-12", "2025-05-23"),
            "08:00",
            [make_holiday("2025-05-19")],
            include_holidays=False
        )

        assert capacity.business_days == 9
        assert capacity.holiday_days == 1
        assert capacity.planned_hours == 72

    def test_breakdown_with_holidays_included(self):
        capacity = calculate_sprint_capacity(
            make_sprint("2025-05-12", "2025-05-23"),
            "08:00",
            [make_holiday("2025-05-19")]
        )

        assert capacity.business_days == 10
        assert capacity.holiday_days == 0
        assert capacity.planned_hours == 80

    def test_malformed_hour(self):
        with pytest.raises(FormatError):
            calculate_sprint_capacity(make_sprint(), "8h")

    def test_to_dict(self):
        capacity = SprintCapacity(
            sprint_id="s1",
            sprint_name="Sprint 1",
            business_days=5,
            daily_hours=7.5
        )

        data = capacity.to_dict()

        assert data["sprint_id"] == "s1"
        assert data["business_days"] == 5
        assert data["planned_hours"] == 37.5
        assert data["include_holidays"] is True
