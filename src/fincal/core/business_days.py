"""
Business days calculation module.

Weekday, weekend and business-day classification on top of a market's
holiday set, plus holiday calendar generation.
Pure business logic with no external dependencies.
"""

from calendar import isleap
from itertools import islice
from typing import List

from fincal.core.arithmetic import add_datetime, days_from
from fincal.core.calendar import Datetime, Weekday, normalize
from fincal.core.deltas import days
from fincal.core.holidays import HolidayGen, is_holiday


WEEKEND = frozenset([Weekday.SATURDAY, Weekday.SUNDAY])


def is_weekday(dt: Datetime) -> bool:
    """Check if a datetime falls Monday to Friday."""
    return normalize(dt).weekday not in WEEKEND


def is_weekend(dt: Datetime) -> bool:
    """Check if a datetime falls on Saturday or Sunday."""
    return not is_weekday(dt)


def is_business(holidays: HolidayGen, dt: Datetime) -> bool:
    """
    Check if a datetime is a business day (not weekend, not a holiday).

    Args:
        holidays: The market holiday set.
        dt: The datetime to check.

    Returns:
        True if the datetime is a business day.
    """
    return not is_holiday(holidays, dt) and not is_weekend(dt)


def next_business_day(holidays: HolidayGen, dt: Datetime) -> Datetime:
    """
    Get the next business day strictly after a datetime.

    Always moves at least one day forward, even when ``dt`` is already a
    business day. Preserves the time of day and offset.

    Args:
        holidays: The market holiday set.
        dt: The starting datetime.

    Returns:
        The next business day datetime.
    """
    current = add_datetime(dt, days(1))
    while not is_business(holidays, current):
        current = add_datetime(current, days(1))
    return current


def holidays_in_year(holidays: HolidayGen, year: int) -> List[Datetime]:
    """
    Materialize the holiday calendar of a year.

    Args:
        holidays: The market holiday set.
        year: The calendar year.

    Returns:
        Midnight UTC datetimes of every holiday in the year, ascending.
    """
    year_days = islice(days_from(Datetime(year, 1, 1)), 366 if isleap(year) else 365)
    return [dt for dt in year_days if is_holiday(holidays, dt)]
