"""
Calendar Utilities for Sprint Planner

Weekend detection, business-day counting and holiday expansion.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, Optional

from .models import DateLike, Holiday, to_date


# Fixed-date national holidays offered as one-click templates
HOLIDAY_TEMPLATES = [
    {"name": "Yılbaşı", "month": 1, "day": 1},
    {"name": "23 Nisan", "month": 4, "day": 23},
    {"name": "1 Mayıs", "month": 5, "day": 1},
    {"name": "19 Mayıs", "month": 5, "day": 19},
    {"name": "30 Ağustos", "month": 8, "day": 30},
    {"name": "29 Ekim", "month": 10, "day": 29},
]


def is_weekend(day: DateLike) -> bool:
    """Saturday or Sunday."""
    return to_date(day).isoweekday() >= 6


def iter_days(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar day in the inclusive range, nothing if end < start."""
    current = to_date(start)
    last = to_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def business_day_count(start: DateLike, end: DateLike) -> int:
    """
    Count weekdays in the inclusive range [start, end].

    Returns 0 when end falls before start.
    """
    return sum(1 for day in iter_days(start, end) if not is_weekend(day))


def expand_holiday_dates(holidays: Iterable[Holiday]) -> set[date]:
    """
    Expand holiday intervals into the set of weekdays they cover.

    Weekend days are left out since business-day counting already
    skips them.
    """
    dates = set()
    for holiday in holidays:
        for day in iter_days(holiday.start_date, holiday.end_date):
            if not is_weekend(day):
                dates.add(day)
    return dates


def business_day_count_excluding(
    start: DateLike,
    end: DateLike,
    holiday_dates: Optional[set[date]] = None
) -> int:
    """Count weekdays in [start, end] that are not in holiday_dates."""
    excluded = holiday_dates or set()
    return sum(
        1 for day in iter_days(start, end)
        if not is_weekend(day) and day not in excluded
    )


def holiday_templates(year: int) -> list[dict]:
    """
    Build holiday payloads for the template dates of a given year.

    Example:
        for tpl in holiday_templates(2025):
            print(tpl["name"], tpl["startDate"])
    """
    templates = []
    for tpl in HOLIDAY_TEMPLATES:
        day = date(year, tpl["month"], tpl["day"]).isoformat()
        templates.append({
            "name": tpl["name"],
            "startDate": day,
            "endDate": day,
            "weekend": is_weekend(day)
        })
    return templates
