"""
Period, Duration and Delta values.

A Period is a calendar-relative amount (years, months, days) whose fields
never overflow into each other: 20y30mo40d is a valid Period. A Duration
is a wall-clock amount (hours, minutes, seconds, nanoseconds). A Delta
pairs both; combining Deltas keeps the Duration under 24 hours and carries
whole days into the Period.
"""

from dataclasses import dataclass, field
from typing import Optional


NANOS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True, order=True)
class Period:
    """Calendar-relative offset in years, months and days."""
    years: int = 0
    months: int = 0
    days: int = 0

    def __add__(self, other: "Period") -> "Period":
        if not isinstance(other, Period):
            return NotImplemented
        return Period(
            self.years + other.years,
            self.months + other.months,
            self.days + other.days,
        )

    def __neg__(self) -> "Period":
        return Period(-self.years, -self.months, -self.days)


@dataclass(frozen=True, order=True)
class Duration:
    """Wall-clock offset in hours, minutes, seconds and nanoseconds."""
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    nanoseconds: int = 0

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(
            self.hours + other.hours,
            self.minutes + other.minutes,
            self.seconds + other.seconds,
            self.nanoseconds + other.nanoseconds,
        )

    def __neg__(self) -> "Duration":
        return Duration(-self.hours, -self.minutes, -self.seconds, -self.nanoseconds)

    @property
    def total_seconds(self) -> int:
        """Whole seconds spanned, sub-second part truncated toward minus infinity."""
        whole = self.hours * 3600 + self.minutes * 60 + self.seconds
        return whole + self.nanoseconds // NANOS_PER_SECOND


@dataclass(frozen=True, order=True)
class Delta:
    """
    A calendar amount plus a sub-day amount.

    Ordering is structural (period first, then duration) and only meant
    for magnitude comparisons between deltas.
    """
    period: Period = field(default_factory=Period)
    duration: Duration = field(default_factory=Duration)

    def __add__(self, other: "Delta") -> "Delta":
        if not isinstance(other, Delta):
            return NotImplemented
        return add_deltas(self, other)

    def __str__(self) -> str:
        return display_delta(self)


ZERO = Delta()


def canonicalize_delta(delta: Delta) -> Delta:
    """
    Keep the Duration within a day, carrying whole days into the Period.

    Seconds, minutes and hours are floor-divided by 60, 60 and 24 in turn.
    Years and months are left untouched. Idempotent.
    """
    period, duration = delta.period, delta.duration
    carry_seconds, nanoseconds = divmod(duration.nanoseconds, NANOS_PER_SECOND)
    carry_minutes, seconds = divmod(duration.seconds + carry_seconds, 60)
    carry_hours, minutes = divmod(duration.minutes + carry_minutes, 60)
    extra_days, hours = divmod(duration.hours + carry_hours, 24)
    return Delta(
        Period(period.years, period.months, period.days + extra_days),
        Duration(hours, minutes, seconds, nanoseconds),
    )


def add_deltas(d1: Delta, d2: Delta) -> Delta:
    """Add two deltas component-wise and canonicalize."""
    return canonicalize_delta(
        Delta(d1.period + d2.period, d1.duration + d2.duration)
    )


def negate_delta(delta: Delta) -> Delta:
    return Delta(-delta.period, -delta.duration)


def sub_deltas(d1: Delta, d2: Delta) -> Delta:
    """
    Subtract the second delta from the first.

    Deltas have no negative fields: when ``d1 < d2`` the result is the zero
    delta, and any field left negative after canonicalization is trimmed
    to 0.
    """
    if d1 < d2:
        return ZERO
    raw = add_deltas(d1, negate_delta(d2))
    period, duration = raw.period, raw.duration
    return canonicalize_delta(Delta(
        Period(max(0, period.years), max(0, period.months), max(0, period.days)),
        Duration(
            max(0, duration.hours),
            max(0, duration.minutes),
            max(0, duration.seconds),
            max(0, duration.nanoseconds),
        ),
    ))


def scale_delta(n: int, delta: Delta) -> Optional[Delta]:
    """
    Scale every field of a delta by a natural number.

    Returns:
        The canonicalized scaled delta, or None when ``n < 1``.
    """
    if n < 1:
        return None
    period, duration = delta.period, delta.duration
    return canonicalize_delta(Delta(
        Period(n * period.years, n * period.months, n * period.days),
        Duration(
            n * duration.hours,
            n * duration.minutes,
            n * duration.seconds,
            n * duration.nanoseconds,
        ),
    ))


# =============================================================================
# Constructors
# =============================================================================

def secs(n: int) -> Delta:
    return canonicalize_delta(Delta(duration=Duration(seconds=n)))


def mins(n: int) -> Delta:
    return canonicalize_delta(Delta(duration=Duration(minutes=n)))


def hours(n: int) -> Delta:
    return canonicalize_delta(Delta(duration=Duration(hours=n)))


def days(n: int) -> Delta:
    return Delta(period=Period(days=n))


def weeks(n: int) -> Delta:
    return days(7 * n)


def months(n: int) -> Delta:
    return Delta(period=Period(months=n))


def years(n: int) -> Delta:
    return Delta(period=Period(years=n))


def display_delta(delta: Delta) -> str:
    """
    Render a delta compactly, e.g. ``1y2mo3d4h5m6s``.

    Zero fields are omitted; nanoseconds are not shown.
    """
    parts = [
        (delta.period.years, "y"),
        (delta.period.months, "mo"),
        (delta.period.days, "d"),
        (delta.duration.hours, "h"),
        (delta.duration.minutes, "m"),
        (delta.duration.seconds, "s"),
    ]
    return "".join(f"{value}{suffix}" for value, suffix in parts if value != 0)
