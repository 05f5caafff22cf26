"""
Sprint Capacity Calculator

Turns a sprint's date range and the team's daily planning hours into the
number of hours available in the sprint.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .calendar import business_day_count, business_day_count_excluding, expand_holiday_dates
from .models import Holiday, Sprint


HOUR_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


class FormatError(ValueError):
    """Raised when a daily planning hour is not in HH:mm form."""


def validate_hour_string(hour_str: str) -> str:
    """Return hour_str unchanged if it is a valid HH:mm value."""
    match = HOUR_PATTERN.match(hour_str or "")
    if not match:
        raise FormatError(f"Daily planning hour must be HH:mm, got {hour_str!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise FormatError(f"Daily planning hour out of range: {hour_str!r}")
    return hour_str


def daily_hours_from_string(hour_str: str) -> float:
    """
    Parse an HH:mm planning hour into a number of hours.

    Example:
        daily_hours_from_string("07:30")  # 7.5
    """
    validate_hour_string(hour_str)
    hours, minutes = hour_str.split(":")
    return int(hours) + int(minutes) / 60


def sprint_business_days(
    sprint: Sprint,
    holidays: Optional[Iterable[Holiday]] = None,
    include_holidays: bool = True
) -> int:
    """
    Business days in a sprint.

    include_holidays=True counts holidays as ordinary working days;
    False removes every weekday covered by a holiday.
    """
    if include_holidays:
        return business_day_count(sprint.start_date, sprint.end_date)

    holiday_dates = expand_holiday_dates(holidays or [])
    return business_day_count_excluding(sprint.start_date, sprint.end_date, holiday_dates)


def planned_hours_for_sprint(
    sprint: Sprint,
    daily_hours: float,
    holidays: Optional[Iterable[Holiday]] = None,
    include_holidays: bool = True
) -> float:
    """
    Total planned hours for a sprint.

    Args:
        sprint: Sprint with start and end dates
        daily_hours: Planning hours per business day
        holidays: Holiday intervals, only used when include_holidays is False
        include_holidays: True leaves holidays in the count as working days

    Returns:
        business_days * daily_hours
    """
    return sprint_business_days(sprint, holidays, include_holidays) * daily_hours


@dataclass
class SprintCapacity:
    """Capacity of a single sprint."""
    sprint_id: str
    sprint_name: str
    business_days: int
    daily_hours: float
    include_holidays: bool = True
    holiday_days: int = 0

    @property
    def planned_hours(self) -> float:
        return self.business_days * self.daily_hours

    def to_dict(self) -> dict:
        return {
            "sprint_id": self.sprint_id,
            "sprint_name": self.sprint_name,
            "business_days": self.business_days,
            "holiday_days": self.holiday_days,
            "daily_hours": round(self.daily_hours, 2),
            "planned_hours": round(self.planned_hours, 2),
            "include_holidays": self.include_holidays
        }


def calculate_sprint_capacity(
    sprint: Sprint,
    daily_planning_hour: str,
    holidays: Optional[list[Holiday]] = None,
    include_holidays: bool = True
) -> SprintCapacity:
    """
    Compute the capacity breakdown for a sprint from the configured HH:mm hour.

    Raises:
        FormatError: If daily_planning_hour is malformed
    """
    daily_hours = daily_hours_from_string(daily_planning_hour)
    holidays = holidays or []

    all_days = business_day_count(sprint.start_date, sprint.end_date)
    business_days = sprint_business_days(sprint, holidays, include_holidays)

    return SprintCapacity(
        sprint_id=sprint.id,
        sprint_name=sprint.name,
        business_days=business_days,
        daily_hours=daily_hours,
        include_holidays=include_holidays,
        holiday_days=all_days - business_days
    )
