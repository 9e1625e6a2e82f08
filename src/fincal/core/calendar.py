"""
Civil datetime value and calendar conversion layer.

A Datetime is a flat record of local wall-clock fields plus a fixed UTC
offset in minutes. Its weekday is always derived from the date, never
supplied by the caller. Conversions go through an absolute instant
(elapsed seconds since the POSIX epoch) paired with the local offset.
"""

import re
import time
from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from functools import total_ordering
from typing import Optional, Protocol, Tuple

from fincal.core.exceptions import DatetimeValidationError


MIN_YEAR = 1
MAX_YEAR = 2999
MAX_OFFSET_MINUTES = 1440
SECONDS_PER_DAY = 86400
EPOCH_ORDINAL = date(1970, 1, 1).toordinal()
UTC = 0


class Weekday(IntEnum):
    """Day of the week, counted from Sunday."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class Month(IntEnum):
    """Month of the year, human numbering."""
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


def month_length(year: int, month: int) -> int:
    """Number of days in a month of the proleptic Gregorian calendar."""
    return monthrange(year, month)[1]


def _day_ordinal(year: int, month: int, day: int) -> int:
    # Days past the end of the month roll forward linearly.
    return date(year, month, 1).toordinal() + day - 1


def weekday_of(year: int, month: int, day: int) -> Weekday:
    """Weekday of a calendar date (0=Sunday)."""
    # Ordinal 1 (0001-01-01) is a Monday.
    return Weekday(_day_ordinal(year, month, day) % 7)


def _check(condition: bool, field_name: str, message: str, value: int) -> None:
    if not condition:
        raise DatetimeValidationError(field_name, message, value)


def validate_fields(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    offset: int,
    weekday: Optional[int] = None,
) -> None:
    """
    Check that raw Datetime fields are in range.

    Day is only checked against 1..31; month lengths are enforced when a
    value comes out of arithmetic.

    Raises:
        DatetimeValidationError: On the first out-of-range field.
    """
    _check(year >= MIN_YEAR, "year", "Year is invalid", year)
    _check(year <= MAX_YEAR, "year", "Year is not in current millenium", year)
    _check(1 <= month <= 12, "month", "Month range is invalid", month)
    _check(1 <= day <= 31, "day", "Day range is invalid", day)
    _check(0 <= hour <= 23, "hour", "Hour range is invalid", hour)
    _check(0 <= minute <= 59, "minute", "Minute range is invalid", minute)
    _check(0 <= second <= 59, "second", "Second range is invalid", second)
    _check(
        -MAX_OFFSET_MINUTES < offset < MAX_OFFSET_MINUTES,
        "offset",
        "Zone offset must be within a day",
        offset,
    )
    if weekday is not None:
        _check(0 <= weekday <= 6, "weekday", "Week day range is invalid", weekday)


@total_ordering
@dataclass(frozen=True, eq=False)
class Datetime:
    """
    A civil datetime with an explicit UTC offset.

    Attributes:
        year: The complete year, 1..2999.
        month: 1..12.
        day: 1..31.
        hour: Hours since midnight, 0..23.
        minute: 0..59.
        second: 0..59.
        offset: Local offset in minutes ahead of UTC.
        weekday: Derived day of week, 0=Sunday.

    Equality, hashing and ordering compare the absolute instant, so the
    same moment expressed with two offsets compares equal.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    offset: int = UTC
    weekday: Weekday = field(init=False)

    def __post_init__(self) -> None:
        validate_fields(
            self.year, self.month, self.day,
            self.hour, self.minute, self.second, self.offset,
        )
        object.__setattr__(
            self, "weekday", weekday_of(self.year, self.month, self.day)
        )

    @property
    def instant(self) -> int:
        """Elapsed POSIX seconds of this moment."""
        return to_absolute(self)[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Datetime):
            return NotImplemented
        return self.instant == other.instant

    def __lt__(self, other: "Datetime") -> bool:
        if not isinstance(other, Datetime):
            return NotImplemented
        return self.instant < other.instant

    def __hash__(self) -> int:
        return hash(self.instant)

    def __str__(self) -> str:
        return format_datetime(self)


# =============================================================================
# Conversion
# =============================================================================

def to_absolute(dt: Datetime) -> Tuple[int, int]:
    """
    Convert a Datetime to its absolute instant.

    Returns:
        Tuple of (elapsed seconds since the epoch, offset in minutes).
    """
    days = _day_ordinal(dt.year, dt.month, dt.day) - EPOCH_ORDINAL
    local_seconds = days * SECONDS_PER_DAY + dt.hour * 3600 + dt.minute * 60 + dt.second
    return local_seconds - dt.offset * 60, dt.offset


def from_absolute(offset: int, instant: int) -> Datetime:
    """
    Build the Datetime showing an absolute instant at a given offset.

    Args:
        offset: Local offset in minutes ahead of UTC.
        instant: Elapsed seconds since the epoch.

    Returns:
        A normalized Datetime with a consistent weekday.

    Raises:
        DatetimeValidationError: If the local date is out of range.
    """
    days, seconds = divmod(instant + offset * 60, SECONDS_PER_DAY)
    ordinal = EPOCH_ORDINAL + days
    if not date.min.toordinal() <= ordinal <= date.max.toordinal():
        raise DatetimeValidationError("year", "Instant is outside the supported years", instant)
    civil = date.fromordinal(ordinal)
    hour, rest = divmod(seconds, 3600)
    minute, second = divmod(rest, 60)
    return Datetime(civil.year, civil.month, civil.day, hour, minute, second, offset)


def alter_timezone(offset: int, dt: Datetime) -> Datetime:
    """Show the same instant at another UTC offset."""
    instant, _ = to_absolute(dt)
    return from_absolute(offset, instant)


def to_utc(dt: Datetime) -> Datetime:
    """Show a Datetime at UTC."""
    return alter_timezone(UTC, dt)


def normalize(dt: Datetime) -> Datetime:
    """Fold overflowing days (e.g. February 30) into a real calendar date."""
    return alter_timezone(dt.offset, dt)


def from_posix(seconds: int) -> Datetime:
    """UTC Datetime from elapsed POSIX seconds."""
    return from_absolute(UTC, int(seconds))


def before(d1: Datetime, d2: Datetime) -> bool:
    """Check if the first datetime occurs before the second."""
    return d1 < d2


def after(d1: Datetime, d2: Datetime) -> bool:
    """Check if the first datetime occurs after the second."""
    return d1 > d2


# =============================================================================
# ISO-8601 text form
# =============================================================================

_ISO8601 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:(Z)|([+-])(\d{2}):([0-5]\d))$"
)


def format_datetime(dt: Datetime) -> str:
    """
    Format as ISO-8601 date-and-time with a numeric offset.

    Example:
        2014-04-05T17:25:04+05:00
    """
    local = normalize(dt)
    sign = "-" if local.offset < 0 else "+"
    offset_hours, offset_minutes = divmod(abs(local.offset), 60)
    return (
        f"{local.year:04d}-{local.month:02d}-{local.day:02d}"
        f"T{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
        f"{sign}{offset_hours:02d}:{offset_minutes:02d}"
    )


def parse_datetime(text: str) -> Optional[Datetime]:
    """
    Parse an ISO-8601 date-and-time string.

    Returns:
        The Datetime, or None if the text is malformed or out of range.
    """
    match = _ISO8601.match(text.strip())
    if match is None:
        return None

    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    zulu, sign, offset_hours, offset_minutes = match.groups()[6:]
    offset = 0
    if not zulu:
        offset = int(offset_hours) * 60 + int(offset_minutes)
        if sign == "-":
            offset = -offset

    try:
        dt = Datetime(year, month, day, hour, minute, second, offset)
    except DatetimeValidationError:
        return None
    if day > month_length(year, month):
        return None
    return dt


# =============================================================================
# System time
# =============================================================================

class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> float:
        """Elapsed POSIX seconds."""
        ...


class SystemClock:
    """Clock reading the host's system time."""

    def now(self) -> float:
        return time.time()


def now(clock: Optional[Clock] = None) -> Datetime:
    """Current instant as a UTC Datetime."""
    source = clock or SystemClock()
    return from_posix(int(source.now()))
