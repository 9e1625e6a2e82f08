"""Core package - Pure calendar logic with no external dependencies."""

from fincal.core.arithmetic import (
    Interval,
    add,
    add_datetime,
    between,
    days_between,
    days_from,
    diff,
    eomonth,
    fiscal_quarters,
    fomonth,
    q1,
    q2,
    q3,
    q4,
    sub,
    sub_datetime,
    within,
)
from fincal.core.business_days import (
    holidays_in_year,
    is_business,
    is_weekday,
    is_weekend,
    next_business_day,
)
from fincal.core.calendar import (
    Clock,
    Datetime,
    Month,
    SystemClock,
    Weekday,
    after,
    alter_timezone,
    before,
    format_datetime,
    from_absolute,
    from_posix,
    now,
    parse_datetime,
    to_absolute,
    to_utc,
    validate_fields,
)
from fincal.core.deltas import (
    Delta,
    Duration,
    Period,
    add_deltas,
    canonicalize_delta,
    days,
    display_delta,
    hours,
    mins,
    months,
    scale_delta,
    secs,
    sub_deltas,
    weeks,
    years,
)
from fincal.core.exceptions import (
    BusinessError,
    CalendarError,
    DatetimeValidationError,
    DecodeError,
    InternalInvariantError,
    NegativePeriodError,
    UnknownMarketError,
)
from fincal.core.holidays import (
    MARKETS,
    EasterHoliday,
    FixedHoliday,
    Holiday,
    HolidayGen,
    HolidayRule,
    Observance,
    WeekdayPos,
    get_market,
    is_holiday,
    is_nyse_holiday,
    is_uk_holiday,
    nyse_holidays,
    observed_shift,
    uk_holidays,
)

__all__ = [
    # Datetime and conversion
    "Clock",
    "Datetime",
    "Month",
    "SystemClock",
    "Weekday",
    "after",
    "alter_timezone",
    "before",
    "format_datetime",
    "from_absolute",
    "from_posix",
    "now",
    "parse_datetime",
    "to_absolute",
    "to_utc",
    "validate_fields",
    # Deltas
    "Delta",
    "Duration",
    "Period",
    "add_deltas",
    "canonicalize_delta",
    "days",
    "display_delta",
    "hours",
    "mins",
    "months",
    "scale_delta",
    "secs",
    "sub_deltas",
    "weeks",
    "years",
    # Arithmetic
    "Interval",
    "add",
    "add_datetime",
    "between",
    "days_between",
    "days_from",
    "diff",
    "eomonth",
    "fiscal_quarters",
    "fomonth",
    "q1",
    "q2",
    "q3",
    "q4",
    "sub",
    "sub_datetime",
    "within",
    # Holidays
    "MARKETS",
    "EasterHoliday",
    "FixedHoliday",
    "Holiday",
    "HolidayGen",
    "HolidayRule",
    "Observance",
    "WeekdayPos",
    "get_market",
    "is_holiday",
    "is_nyse_holiday",
    "is_uk_holiday",
    "nyse_holidays",
    "observed_shift",
    "uk_holidays",
    # Business days
    "holidays_in_year",
    "is_business",
    "is_weekday",
    "is_weekend",
    "next_business_day",
    # Exceptions
    "BusinessError",
    "CalendarError",
    "DatetimeValidationError",
    "DecodeError",
    "InternalInvariantError",
    "NegativePeriodError",
    "UnknownMarketError",
]
