"""
Tests for calendar utilities.
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from sprint_planner.calendar import (
    is_weekend,
    iter_days,
    business_day_count,
    business_day_count_excluding,
    expand_holiday_dates,
    holiday_templates
)
from sprint_planner.models import Holiday, to_date


def make_holiday(start: str, end: str, name: str = "Holiday") -> Holiday:
    return Holiday(id=name, name=name, start_date=date.fromisoformat(start), end_date=date.fromisoformat(end))


class TestWeekend:
    """Tests for weekend detection."""

    def test_saturday_and_sunday(self):
        assert is_weekend(date(2025, 1, 11))
        assert is_weekend(date(2025, 1, 12))

    def test_weekdays(self):
        for day in range(6, 11):
            assert not is_weekend(date(2025, 1, day))

    def test_accepts_iso_string(self):
        assert is_weekend("2025-05-17")
        assert not is_weekend("2025-05-19")


class TestToDate:
    """Tests for reducing date-like values to calendar days."""

    def test_naive_datetime_keeps_its_day(self):
        assert to_date(datetime(2025, 1, 6, 23, 59)) == date(2025, 1, 6)

    def test_aware_datetime_uses_utc_day(self):
        evening_in_new_york = datetime(2025, 1, 6, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert to_date(evening_in_new_york) == date(2025, 1, 7)

    def test_offset_string_uses_utc_day(self):
        evening_in_new_york = "2025-01-10T23:30:00-05:00"

        assert to_date(evening_in_new_york) == date(2025, 1, 11)
        assert business_day_count(evening_in_new_york, evening_in_new_york) == 0

    def test_zulu_string(self):
        assert to_date("2025-01-06T23:30:00Z") == date(2025, 1, 6)

    def test_iso_datetime_string(self):
        assert to_date("2025-01-06T00:00:00") == date(2025, 1, 6)

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            to_date(20250106)


class TestBusinessDayCount:
    """Tests for business-day counting."""

    def test_full_week(self):
        """Monday through Sunday has five business days."""
        assert business_day_count(date(2025, 1, 6), date(2025, 1, 12)) == 5

    def test_two_weeks(self):
        assert business_day_count(date(2025, 1, 6), date(2025, 1, 17)) == 10

    def test_single_day(self):
        assert business_day_count(date(2025, 1, 6), date(2025, 1, 6)) == 1
        assert business_day_count(date(2025, 1, 11), date(2025, 1, 11)) == 0

    def test_reversed_range_is_empty(self):
        assert business_day_count(date(2025, 1, 12), date(2025, 1, 6)) == 0
        assert list(iter_days(date(2025, 1, 12), date(2025, 1, 6))) == []

    def test_time_of_day_is_ignored(self):
        start = datetime(2025, 1, 6, 18, 0)
        end = datetime(2025, 1, 10, 6, 0)
        assert business_day_count(start, end) == 5

    def test_string_range(self):
        assert business_day_count("2025-01-06", "2025-01-10") == 5


class TestHolidayExpansion:
    """Tests for expanding holiday intervals."""

    def test_weekend_days_are_dropped(self):
        """A Saturday-to-Monday holiday only removes the Monday."""
        holidays = [make_holiday("2025-05-17", "2025-05-19")]
        assert expand_holiday_dates(holidays) == {date(2025, 5, 19)}

    def test_overlapping_holidays_are_merged(self):
        holidays = [
            make_holiday("2025-04-21", "2025-04-23", "a"),
            make_holiday("2025-04-23", "2025-04-24", "b"),
        ]
        assert expand_holiday_dates(holidays) == {
            date(2025, 4, 21), date(2025, 4, 22), date(2025, 4, 23), date(2025, 4, 24)
        }

    def test_no_holidays(self):
        assert expand_holiday_dates([]) == set()

    def test_count_excluding_holidays(self):
        holiday_dates = expand_holiday_dates([make_holiday("2025-05-19", "2025-05-19")])
        assert business_day_count_excluding(date(2025, 5, 12), date(2025, 5, 23), holiday_dates) == 9

    def test_count_excluding_ignores_outside_dates(self):
        holiday_dates = {date(2025, 6, 2)}
        assert business_day_count_excluding(date(2025, 5, 12), date(2025, 5, 23), holiday_dates) == 10

    def test_count_excluding_reversed_range(self):
        assert business_day_count_excluding(date(2025, 5, 23), date(2025, 5, 12), set()) == 0


class TestHolidayTemplates:
    """Tests for national holiday templates."""

    def test_templates_for_year(self):
        templates = holiday_templates(2025)

        assert len(templates) == 6
        assert templates[0] == {
            "name": "Yılbaşı",
            "startDate": "2025-01-01",
            "endDate": "2025-01-01",
            "weekend": False
        }

    def test_weekend_flag(self):
        by_name = {t["name"]: t for t in holiday_templates(2025)}
        assert by_name["30 Ağustos"]["weekend"] is True
        assert by_name["29 Ekim"]["weekend"] is False
