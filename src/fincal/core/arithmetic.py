"""
Calendar arithmetic between Datetimes and Deltas.

Adding a Delta applies the Duration first as plain time arithmetic, then
shifts the resulting date by the Period with month-length clamping
(Jan 31 + 1mo = Feb 28). All date arithmetic happens on the UTC view of a
Datetime; the input offset is reattached at the end.

``diff`` is a greedy approximate inverse of ``add_datetime``: because
clamping is lossy at month ends, re-applying a diff does not always land
exactly on the other endpoint.
"""

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from itertools import takewhile
from typing import Iterator, List, Tuple

from fincal.core.calendar import (
    EPOCH_ORDINAL,
    SECONDS_PER_DAY,
    Datetime,
    Month,
    from_absolute,
    month_length,
    to_absolute,
)
from fincal.core.deltas import Delta, Duration, Period, days
from fincal.core.exceptions import DatetimeValidationError, NegativePeriodError


CivilDate = Tuple[int, int, int]


@dataclass(frozen=True)
class Interval:
    """
    An inclusive range between two Datetimes.

    No ordering is enforced between start and stop.
    """
    start: Datetime
    stop: Datetime


# =============================================================================
# Date helpers
# =============================================================================

_MIN_ORDINAL = date.min.toordinal()
_MAX_ORDINAL = date.max.toordinal()


def _out_of_range(value: int) -> DatetimeValidationError:
    return DatetimeValidationError("year", "Date arithmetic left the supported years", value)


def _from_ordinal(ordinal: int) -> date:
    if not _MIN_ORDINAL <= ordinal <= _MAX_ORDINAL:
        raise _out_of_range(ordinal)
    return date.fromordinal(ordinal)


def _split_instant(instant: int) -> Tuple[CivilDate, int]:
    day_count, seconds_of_day = divmod(instant, SECONDS_PER_DAY)
    civil = _from_ordinal(EPOCH_ORDINAL + day_count)
    return (civil.year, civil.month, civil.day), seconds_of_day


def _join_instant(civil: CivilDate, seconds_of_day: int) -> int:
    if not MINYEAR <= civil[0] <= MAXYEAR:
        raise _out_of_range(civil[0])
    day_count = date(*civil).toordinal() - EPOCH_ORDINAL
    return day_count * SECONDS_PER_DAY + seconds_of_day


def date_add_period(year: int, month: int, day: int, period: Period) -> CivilDate:
    """
    Shift a calendar date forward by a Period.

    Years and months move first. If the day then overshoots the target
    month, a pure year/month shift clamps it to the month's last day,
    while a shift with days rolls the excess into the following months.
    Negative day totals borrow from the preceding months.
    """
    year_carry, month_index = divmod(month - 1 + period.months, 12)
    year = year + period.years + year_carry
    day = day + period.days

    while True:
        if day <= 0:
            if month_index == 0:
                year, month_index = year - 1, 11
            else:
                month_index -= 1
            day += month_length(year, month_index + 1)
            continue

        length = month_length(year, month_index + 1)
        if day <= length:
            return year, month_index + 1, day
        if period.days == 0:
            return year, month_index + 1, length

        day -= length
        if month_index == 11:
            year, month_index = year + 1, 0
        else:
            month_index += 1


def date_sub_period(year: int, month: int, day: int, period: Period) -> CivilDate:
    """
    Shift a calendar date backward by a non-negative Period.

    Days are taken off first, then months, then years, and the day is
    finally clamped to the length of the month it lands in
    (Mar 31 - 1mo = Feb 28, Feb 29 2016 - 1y = Feb 28 2015).

    Raises:
        NegativePeriodError: If the period has negative days or months.
    """
    if period.days < 0:
        raise NegativePeriodError("days", period.days)
    if period.months < 0:
        raise NegativePeriodError("months", period.months)

    civil = _from_ordinal(date(year, month, day).toordinal() - period.days)
    year, month, day = civil.year, civil.month, civil.day

    for _ in range(period.months):
        if month == 1:
            year, month = year - 1, 12
        else:
            month -= 1

    year -= period.years
    return year, month, min(day, month_length(year, month))


# =============================================================================
# Datetime arithmetic
# =============================================================================

def add_datetime(dt: Datetime, delta: Delta) -> Datetime:
    """Add a delta to a datetime, keeping its UTC offset."""
    instant, offset = to_absolute(dt)
    civil, seconds_of_day = _split_instant(instant + delta.duration.total_seconds)
    shifted = date_add_period(*civil, delta.period)
    return from_absolute(offset, _join_instant(shifted, seconds_of_day))


def sub_datetime(dt: Datetime, delta: Delta) -> Datetime:
    """Subtract a non-negative delta from a datetime, keeping its UTC offset."""
    instant, offset = to_absolute(dt)
    civil, seconds_of_day = _split_instant(instant - delta.duration.total_seconds)
    shifted = date_sub_period(*civil, delta.period)
    return from_absolute(offset, _join_instant(shifted, seconds_of_day))


add = add_datetime
sub = sub_datetime


_PERIOD_STEPS = (Period(years=1), Period(months=1), Period(days=1))


def diff(d1: Datetime, d2: Datetime) -> Delta:
    """
    Calendar difference between two datetimes, in either order.

    Greedily grows a Period one year, month or day at a time (trying the
    largest unit first at every step) while the earlier datetime plus the
    Period does not pass the later one. The remaining gap is expressed in
    hours, minutes and seconds. The result is not re-canonicalized, so
    the hours may exceed a day after a clamped month step.
    """
    start, end = sorted((to_absolute(d1)[0], to_absolute(d2)[0]))
    civil, seconds_of_day = _split_instant(start)

    def shifted(period: Period) -> int:
        return _join_instant(date_add_period(*civil, period), seconds_of_day)

    period = Period()
    while True:
        for step in _PERIOD_STEPS:
            candidate = period + step
            if shifted(candidate) <= end:
                period = candidate
                break
        else:
            break

    remainder = end - shifted(period)
    hours, rest = divmod(remainder, 3600)
    minutes, seconds = divmod(rest, 60)
    return Delta(period, Duration(hours, minutes, seconds))


def days_between(d1: Datetime, d2: Datetime) -> Delta:
    """Whole days between two datetimes, regardless of order."""
    gap = abs(to_absolute(d1)[0] - to_absolute(d2)[0])
    return days(gap // SECONDS_PER_DAY)


def within(dt: Datetime, interval: Interval) -> bool:
    """Check whether a datetime lies within an interval, bounds included."""
    return interval.start <= dt <= interval.stop


def days_from(dt: Datetime) -> Iterator[Datetime]:
    """Endless daily steps starting at ``dt``."""
    current = dt
    while True:
        yield current
        current = add_datetime(current, days(1))


def between(start: Datetime, end: Datetime) -> List[Datetime]:
    """
    Daily steps from ``start`` up to, not including, ``end``.

    The wall-clock fields of ``end`` are read at ``start``'s offset.
    """
    stop = Datetime(
        end.year, end.month, end.day,
        end.hour, end.minute, end.second, start.offset,
    )
    return list(takewhile(lambda dt: dt < stop, days_from(start)))


# =============================================================================
# Months and fiscal quarters
# =============================================================================

def fomonth(year: int, month: int) -> Datetime:
    """Midnight UTC on the first day of a month."""
    return Datetime(year, month, 1)


def eomonth(year: int, month: int) -> Datetime:
    """Midnight UTC on the last day of a month."""
    return Datetime(year, month, month_length(year, month))


def q1(year: int) -> Interval:
    return Interval(fomonth(year, Month.JANUARY), eomonth(year, Month.MARCH))


def q2(year: int) -> Interval:
    return Interval(fomonth(year, Month.APRIL), eomonth(year, Month.JUNE))


def q3(year: int) -> Interval:
    return Interval(fomonth(year, Month.JULY), eomonth(year, Month.SEPTEMBER))


def q4(year: int) -> Interval:
    return Interval(fomonth(year, Month.OCTOBER), eomonth(year, Month.DECEMBER))


def fiscal_quarters(year: int) -> Tuple[Interval, Interval, Interval, Interval]:
    """The four calendar-aligned fiscal quarters of a year."""
    return q1(year), q2(year), q3(year), q4(year)
