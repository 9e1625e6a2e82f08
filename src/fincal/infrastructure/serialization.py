"""
Wire forms for Datetime, Period, Duration and Delta.

Binary: consecutive big-endian signed 64-bit integers.
- Datetime: year, month, day, hour, minute, second, zone offset, weekday
- Period: years, months, days
- Duration: hours, minutes, seconds, nanoseconds
- Delta: a Period followed by a Duration

JSON: a Datetime is a single ISO-8601 string; Period and Duration are
objects with explicit field names (pydantic models below).
"""

import struct
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    TypeAdapter,
    ValidationError as PydanticValidationError,
)

from fincal.core.calendar import Datetime, format_datetime, parse_datetime, validate_fields
from fincal.core.deltas import Delta, Duration, Period
from fincal.core.exceptions import DecodeError
from fincal.infrastructure.logging import get_logger


logger = get_logger(__name__)


_DATETIME = struct.Struct(">8q")
_PERIOD = struct.Struct(">3q")
_DURATION = struct.Struct(">4q")


# =============================================================================
# Binary
# =============================================================================

def _unpack(layout: struct.Struct, payload: bytes, format_name: str) -> tuple:
    try:
        return layout.unpack(payload)
    except struct.error as e:
        logger.warning(
            f"Rejected {format_name} payload",
            extra={"extra_fields": {"format": format_name, "size": len(payload)}}
        )
        raise DecodeError(format_name, str(e)) from e


def encode_datetime(dt: Datetime) -> bytes:
    return _DATETIME.pack(
        dt.year, dt.month, dt.day,
        dt.hour, dt.minute, dt.second,
        dt.offset, int(dt.weekday),
    )


def decode_datetime(payload: bytes) -> Datetime:
    """
    Decode a binary Datetime.

    The fields are validated again; the stored weekday is range-checked
    but the value's weekday is recomputed from the date.

    Raises:
        DecodeError: If the payload has the wrong size.
        DatetimeValidationError: If a field is out of range.
    """
    year, month, day, hour, minute, second, offset, weekday = _unpack(
        _DATETIME, payload, "Datetime"
    )
    validate_fields(year, month, day, hour, minute, second, offset, weekday)
    return Datetime(year, month, day, hour, minute, second, offset)


def encode_period(period: Period) -> bytes:
    return _PERIOD.pack(period.years, period.months, period.days)


def decode_period(payload: bytes) -> Period:
    return Period(*_unpack(_PERIOD, payload, "Period"))


def encode_duration(duration: Duration) -> bytes:
    return _DURATION.pack(
        duration.hours, duration.minutes, duration.seconds, duration.nanoseconds
    )


def decode_duration(payload: bytes) -> Duration:
    return Duration(*_unpack(_DURATION, payload, "Duration"))


def encode_delta(delta: Delta) -> bytes:
    return encode_period(delta.period) + encode_duration(delta.duration)


def decode_delta(payload: bytes) -> Delta:
    if len(payload) != _PERIOD.size + _DURATION.size:
        raise DecodeError(
            "Delta", f"expected {_PERIOD.size + _DURATION.size} bytes, got {len(payload)}"
        )
    return Delta(
        decode_period(payload[:_PERIOD.size]),
        decode_duration(payload[_PERIOD.size:]),
    )


# =============================================================================
# JSON
# =============================================================================

def _validate_iso_datetime(value: Any) -> Datetime:
    if isinstance(value, Datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("Datetime must be an ISO-8601 string")
    dt = parse_datetime(value)
    if dt is None:
        raise ValueError("could not parse ISO-8601 datetime")
    return dt


IsoDatetime = Annotated[
    Datetime,
    PlainValidator(_validate_iso_datetime),
    PlainSerializer(format_datetime, return_type=str),
]


class PeriodModel(BaseModel):
    """JSON object form of a Period."""

    model_config = ConfigDict(populate_by_name=True)

    years: int = Field(alias="periodYears")
    months: int = Field(alias="periodMonths")
    days: int = Field(alias="periodDays")

    @classmethod
    def from_period(cls, period: Period) -> "PeriodModel":
        return cls(years=period.years, months=period.months, days=period.days)

    def to_period(self) -> Period:
        return Period(self.years, self.months, self.days)


class DurationModel(BaseModel):
    """JSON object form of a Duration."""

    model_config = ConfigDict(populate_by_name=True)

    hours: int = Field(alias="durationHours")
    minutes: int = Field(alias="durationMinutes")
    seconds: int = Field(alias="durationSeconds")
    nanoseconds: int = Field(alias="durationNs")

    @classmethod
    def from_duration(cls, duration: Duration) -> "DurationModel":
        return cls(
            hours=duration.hours,
            minutes=duration.minutes,
            seconds=duration.seconds,
            nanoseconds=duration.nanoseconds,
        )

    def to_duration(self) -> Duration:
        return Duration(self.hours, self.minutes, self.seconds, self.nanoseconds)


class DeltaModel(BaseModel):
    """JSON object form of a Delta."""

    model_config = ConfigDict(populate_by_name=True)

    period: PeriodModel = Field(alias="dPeriod")
    duration: DurationModel = Field(alias="dDuration")

    @classmethod
    def from_delta(cls, delta: Delta) -> "DeltaModel":
        return cls(
            period=PeriodModel.from_period(delta.period),
            duration=DurationModel.from_duration(delta.duration),
        )

    def to_delta(self) -> Delta:
        return Delta(self.period.to_period(), self.duration.to_duration())


_DATETIME_ADAPTER = TypeAdapter(IsoDatetime)


def _decode_json(format_name: str, decode):
    try:
        return decode()
    except PydanticValidationError as e:
        raise DecodeError(format_name, str(e.errors()[0]["msg"])) from e


def datetime_to_json(dt: Datetime) -> str:
    return _DATETIME_ADAPTER.dump_json(dt).decode()


def datetime_from_json(text: str) -> Datetime:
    return _decode_json("Datetime", lambda: _DATETIME_ADAPTER.validate_json(text))


def period_to_json(period: Period) -> str:
    return PeriodModel.from_period(period).model_dump_json(by_alias=True)


def period_from_json(text: str) -> Period:
    return _decode_json("Period", lambda: PeriodModel.model_validate_json(text).to_period())


def duration_to_json(duration: Duration) -> str:
    return DurationModel.from_duration(duration).model_dump_json(by_alias=True)


def duration_from_json(text: str) -> Duration:
    return _decode_json(
        "Duration", lambda: DurationModel.model_validate_json(text).to_duration()
    )


def delta_to_json(delta: Delta) -> str:
    return DeltaModel.from_delta(delta).model_dump_json(by_alias=True)


def delta_from_json(text: str) -> Delta:
    return _decode_json("Delta", lambda: DeltaModel.model_validate_json(text).to_delta())
