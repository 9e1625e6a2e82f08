"""
Holiday recurrence engine.

Holidays are declared as data: a fixed calendar date with a weekend
observance rule, an nth-weekday-of-month rule, or a date materialized from
Easter for a given year. A market is a function from a year to its list of
holidays; matching a Datetime against that list decides holiday status.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Callable, Dict, Sequence, Tuple, Union

from fincal.core.arithmetic import add_datetime, sub_datetime
from fincal.core.calendar import (
    UTC,
    Datetime,
    Month,
    Weekday,
    month_length,
    normalize,
)
from fincal.core.deltas import days
from fincal.core.exceptions import UnknownMarketError


class Observance(str, Enum):
    """How a fixed holiday landing near a weekend is observed."""
    NEAREST_WORKDAY = "nearest_workday"
    SUNDAY_TO_MONDAY = "sunday_to_monday"
    NEXT_MONDAY_OR_TUESDAY = "next_monday_or_tuesday"
    PREVIOUS_FRIDAY = "previous_friday"
    NEXT_MONDAY = "next_monday"
    NONE = "none"


# Day shift applied to the holiday date, keyed by the weekday it falls on.
OBSERVANCE_SHIFTS: Dict[Observance, Dict[Weekday, int]] = {
    # Saturday to Friday, Sunday to Monday
    Observance.NEAREST_WORKDAY: {Weekday.SATURDAY: -1, Weekday.SUNDAY: 1},
    Observance.SUNDAY_TO_MONDAY: {Weekday.SUNDAY: 1},
    # Saturday to Monday, Sunday and Monday to Tuesday
    Observance.NEXT_MONDAY_OR_TUESDAY: {
        Weekday.SATURDAY: 2,
        Weekday.SUNDAY: 2,
        Weekday.MONDAY: 1,
    },
    Observance.PREVIOUS_FRIDAY: {Weekday.SATURDAY: -1, Weekday.SUNDAY: -2},
    Observance.NEXT_MONDAY: {Weekday.SATURDAY: 2, Weekday.SUNDAY: 1},
    Observance.NONE: {},
}


class WeekdayPos(IntEnum):
    """Occurrence of a weekday within its month."""
    FIRST = 0
    SECOND = 1
    THIRD = 2
    FOURTH = 3
    LAST = 4


@dataclass(frozen=True)
class FixedHoliday:
    """
    A holiday recurring every year on the same calendar date.

    Attributes:
        day: Day of the month.
        month: Month of the year.
        observance: Weekend shift policy.
        timezone: Reference UTC offset of the market, in minutes.
    """
    day: int
    month: Month
    observance: Observance = Observance.NONE
    timezone: int = UTC


@dataclass(frozen=True)
class HolidayRule:
    """A holiday on the nth given weekday of a month, e.g. last Monday of May."""
    month: Month
    position: WeekdayPos
    weekday: Weekday


@dataclass(frozen=True)
class EasterHoliday:
    """An Easter-relative holiday, materialized for one year."""
    date: Datetime


Holiday = Union[FixedHoliday, HolidayRule, EasterHoliday]
HolidayGen = Callable[[int], Sequence[Holiday]]


# =============================================================================
# Observance and matching
# =============================================================================

def observed_shift(observance: Observance, dt: Datetime) -> Datetime:
    """Move a datetime to the day its holiday is observed on."""
    shift = OBSERVANCE_SHIFTS[observance].get(dt.weekday, 0)
    if shift > 0:
        return add_datetime(dt, days(shift))
    if shift < 0:
        return sub_datetime(dt, days(-shift))
    return dt


def match_fixed_holiday(dt: Datetime, fixed: FixedHoliday) -> bool:
    """
    A datetime matches a fixed holiday when its month and day equal the
    observed date of that holiday in the datetime's year.
    """
    observed = observed_shift(
        fixed.observance, Datetime(dt.year, fixed.month, fixed.day)
    )
    return (dt.month, dt.day) == (observed.month, observed.day)


def weekday_position(dt: Datetime) -> WeekdayPos:
    """Which occurrence of its weekday in the month ``dt`` is (FIRST..LAST)."""
    return WeekdayPos((dt.day - 1) // 7)


def is_last_weekday_of_month(dt: Datetime) -> bool:
    return dt.day + 7 > month_length(dt.year, dt.month)


def match_holiday_rule(dt: Datetime, rule: HolidayRule) -> bool:
    """
    A datetime matches a rule when the weekday and month agree and the
    datetime is the right occurrence of its weekday in the month.
    """
    if dt.weekday != rule.weekday or dt.month != rule.month:
        return False
    if rule.position is WeekdayPos.LAST:
        return is_last_weekday_of_month(dt)
    return weekday_position(dt) == rule.position


def match_easter_holiday(dt: Datetime, easter: EasterHoliday) -> bool:
    holiday = easter.date
    return (dt.year, dt.month, dt.day) == (holiday.year, holiday.month, holiday.day)


def match_holiday(dt: Datetime, holiday: Holiday) -> bool:
    """Match a datetime against any holiday variant."""
    if isinstance(holiday, FixedHoliday):
        return match_fixed_holiday(dt, holiday)
    if isinstance(holiday, HolidayRule):
        return match_holiday_rule(dt, holiday)
    if isinstance(holiday, EasterHoliday):
        return match_easter_holiday(dt, holiday)
    raise TypeError(f"Unknown holiday variant: {type(holiday).__name__}")


def is_holiday(holidays: HolidayGen, dt: Datetime) -> bool:
    """Query if a datetime falls on a holiday of the given set."""
    local = normalize(dt)
    return any(match_holiday(local, holiday) for holiday in holidays(local.year))


# =============================================================================
# Easter
# =============================================================================

def calculate_easter(year: int) -> Datetime:
    """
    Calculate Easter Sunday using the Meeus/Jones/Butcher algorithm.

    Args:
        year: The calendar year.

    Returns:
        Midnight UTC on Easter Sunday.
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1

    return Datetime(year, month, day)


def easter_sunday(year: int) -> EasterHoliday:
    return EasterHoliday(calculate_easter(year))


def good_friday(year: int) -> EasterHoliday:
    return EasterHoliday(sub_datetime(calculate_easter(year), days(2)))


def easter_monday(year: int) -> EasterHoliday:
    return EasterHoliday(add_datetime(calculate_easter(year), days(1)))


# =============================================================================
# United States (NYSE)
# =============================================================================

NYC_OFFSET = -300

NEW_YEARS_DAY = FixedHoliday(1, Month.JANUARY, Observance.NEXT_MONDAY, NYC_OFFSET)
MARTIN_LUTHER_KING_DAY = HolidayRule(Month.JANUARY, WeekdayPos.THIRD, Weekday.MONDAY)
PRESIDENTS_DAY = HolidayRule(Month.FEBRUARY, WeekdayPos.THIRD, Weekday.MONDAY)
MEMORIAL_DAY = HolidayRule(Month.MAY, WeekdayPos.LAST, Weekday.MONDAY)
INDEPENDENCE_DAY = FixedHoliday(4, Month.JULY, Observance.NEAREST_WORKDAY, NYC_OFFSET)
LABOR_DAY = HolidayRule(Month.SEPTEMBER, WeekdayPos.FIRST, Weekday.MONDAY)
THANKSGIVING_DAY = HolidayRule(Month.NOVEMBER, WeekdayPos.FOURTH, Weekday.THURSDAY)
CHRISTMAS_DAY = FixedHoliday(25, Month.DECEMBER, Observance.NEAREST_WORKDAY, NYC_OFFSET)


@lru_cache(maxsize=10)
def nyse_holidays(year: int) -> Tuple[Holiday, ...]:
    """
    New York Stock Exchange holidays.

    <https://www.nyse.com/markets/hours-calendars>
    """
    return (
        NEW_YEARS_DAY,
        MARTIN_LUTHER_KING_DAY,
        PRESIDENTS_DAY,
        good_friday(year),
        MEMORIAL_DAY,
        INDEPENDENCE_DAY,
        LABOR_DAY,
        THANKSGIVING_DAY,
        CHRISTMAS_DAY,
    )


# =============================================================================
# United Kingdom
# =============================================================================

LONDON_OFFSET = 0

UK_NEW_YEARS_DAY = FixedHoliday(1, Month.JANUARY, Observance.NEXT_MONDAY, LONDON_OFFSET)
EARLY_MAY_BANK_HOLIDAY = HolidayRule(Month.MAY, WeekdayPos.FIRST, Weekday.MONDAY)
SPRING_BANK_HOLIDAY = HolidayRule(Month.MAY, WeekdayPos.LAST, Weekday.MONDAY)
SUMMER_BANK_HOLIDAY = HolidayRule(Month.AUGUST, WeekdayPos.LAST, Weekday.MONDAY)
# Weekend Christmas and Boxing Day are substituted by the following
# Monday and Tuesday, never by the preceding Friday.
UK_CHRISTMAS_DAY = FixedHoliday(25, Month.DECEMBER, Observance.NEXT_MONDAY, LONDON_OFFSET)
BOXING_DAY = FixedHoliday(
    26, Month.DECEMBER, Observance.NEXT_MONDAY_OR_TUESDAY, LONDON_OFFSET
)


@lru_cache(maxsize=10)
def uk_holidays(year: int) -> Tuple[Holiday, ...]:
    """
    United Kingdom bank holidays (England and Wales).

    <https://www.gov.uk/bank-holidays>
    """
    return (
        UK_NEW_YEARS_DAY,
        good_friday(year),
        easter_monday(year),
        EARLY_MAY_BANK_HOLIDAY,
        SPRING_BANK_HOLIDAY,
        SUMMER_BANK_HOLIDAY,
        UK_CHRISTMAS_DAY,
        BOXING_DAY,
    )


# =============================================================================
# Market registry
# =============================================================================

MARKETS: Dict[str, HolidayGen] = {
    "NYSE": nyse_holidays,
    "UK": uk_holidays,
}


def get_market(code: str) -> HolidayGen:
    """
    Look up the holiday set of a market.

    Raises:
        UnknownMarketError: If no market is registered under ``code``.
    """
    try:
        return MARKETS[code.upper()]
    except KeyError:
        raise UnknownMarketError(code) from None


def is_nyse_holiday(dt: Datetime) -> bool:
    return is_holiday(nyse_holidays, dt)


def is_uk_holiday(dt: Datetime) -> bool:
    return is_holiday(uk_holidays, dt)
