"""
Tests for the binary and JSON wire forms.
"""

import json
import struct

import pytest

from fincal.core.calendar import Datetime
from fincal.core.deltas import Delta, Duration, Period
from fincal.core.exceptions import DatetimeValidationError, DecodeError
from fincal.infrastructure.serialization import (
    DeltaModel,
    datetime_from_json,
    datetime_to_json,
    decode_datetime,
    decode_delta,
    decode_duration,
    decode_period,
    delta_from_json,
    delta_to_json,
    duration_to_json,
    encode_datetime,
    encode_delta,
    encode_duration,
    encode_period,
    period_from_json,
    period_to_json,
)


class TestBinaryDatetime:
    """Tests for the 64-byte Datetime encoding."""

    def test_layout(self):
        dt = Datetime(2017, 3, 31, 10, 20, 30, -300)
        payload = encode_datetime(dt)

        assert len(payload) == 64
        assert payload == struct.pack(">8q", 2017, 3, 31, 10, 20, 30, -300, 5)

    def test_decode_restores_offset(self):
        dt = Datetime(2017, 3, 31, 10, 20, 30, -300)
        decoded = decode_datetime(encode_datetime(dt))

        assert decoded == dt
        assert decoded.offset == -300
        assert decoded.hour == 10

    def test_stored_weekday_is_recomputed(self):
        payload = struct.pack(">8q", 2017, 3, 31, 0, 0, 0, 0, 1)
        assert int(decode_datetime(payload).weekday) == 5

    @pytest.mark.parametrize(
        "fields, bad_field",
        [
            ((2017, 13, 1, 0, 0, 0, 0, 0), "month"),
            ((2017, 1, 1, 25, 0, 0, 0, 0), "hour"),
            ((3000, 1, 1, 0, 0, 0, 0, 0), "year"),
            ((2017, 1, 1, 0, 0, 0, 0, 7), "weekday"),
        ],
    )
    def test_out_of_range_field(self, fields, bad_field):
        with pytest.raises(DatetimeValidationError) as exc_info:
            decode_datetime(struct.pack(">8q", *fields))
        assert exc_info.value.field == bad_field

    def test_short_payload(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_datetime(b"\x00" * 10)
        assert exc_info.value.format_name == "Datetime"


class TestBinaryDeltas:
    """Tests for Period, Duration and Delta encodings."""

    def test_period_layout(self):
        assert encode_period(Period(1, 2, 3)) == struct.pack(">3q", 1, 2, 3)
        assert decode_period(struct.pack(">3q", 1, 2, 3)) == Period(1, 2, 3)

    def test_duration_keeps_negative_fields(self):
        duration = Duration(-1, 2, -3, 4)
        assert decode_duration(encode_duration(duration)) == duration

    def test_delta_is_period_then_duration(self):
        delta = Delta(Period(1, 2, 3), Duration(4, 5, 6, 7))
        payload = encode_delta(delta)

        assert len(payload) == 56
        assert payload == struct.pack(">7q", 1, 2, 3, 4, 5, 6, 7)
        assert decode_delta(payload) == delta

    def test_delta_wrong_size(self):
        with pytest.raises(DecodeError):
            decode_delta(struct.pack(">3q", 1, 2, 3))


class TestJson:
    """Tests for the JSON forms."""

    def test_datetime_is_iso_string(self):
        assert datetime_to_json(Datetime(2014, 4, 5, 17, 25, 4, 300)) == '"2014-04-05T17:25:04+05:00"'

    def test_datetime_from_json(self):
        dt = datetime_from_json('"2014-04-05T17:25:04+05:00"')
        assert dt == Datetime(2014, 4, 5, 12, 25, 4)
        assert dt.offset == 300

    @pytest.mark.parametrize("text", ['"yesterday"', "20140405", "{"])
    def test_datetime_from_bad_json(self, text):
        with pytest.raises(DecodeError):
            datetime_from_json(text)

    def test_period_field_names(self):
        assert json.loads(period_to_json(Period(1, 2, 3))) == {
            "periodYears": 1,
            "periodMonths": 2,
            "periodDays": 3,
        }

    def test_duration_field_names(self):
        assert json.loads(duration_to_json(Duration(4, 5, 6, 7))) == {
            "durationHours": 4,
            "durationMinutes": 5,
            "durationSeconds": 6,
            "durationNs": 7,
        }

    def test_delta_nests_both_parts(self):
        data = json.loads(delta_to_json(Delta(Period(days=1), Duration(hours=2))))
        assert set(data) == {"dPeriod", "dDuration"}
        assert data["dPeriod"]["periodDays"] == 1
        assert data["dDuration"]["durationHours"] == 2

    def test_delta_from_json(self):
        text = (
            '{"dPeriod": {"periodYears": 1, "periodMonths": 0, "periodDays": 2},'
            ' "dDuration": {"durationHours": 3, "durationMinutes": 0,'
            ' "durationSeconds": 0, "durationNs": 0}}'
        )
        assert delta_from_json(text) == Delta(Period(1, 0, 2), Duration(3, 0, 0, 0))

    def test_missing_field(self):
        with pytest.raises(DecodeError) as exc_info:
            period_from_json('{"periodYears": 1}')
        assert exc_info.value.format_name == "Period"

    def test_delta_model_accepts_field_names(self):
        model = DeltaModel(
            period={"years": 1, "months": 0, "days": 0},
            duration={"hours": 0, "minutes": 0, "seconds": 0, "nanoseconds": 0},
        )
        assert model.to_delta() == Delta(Period(years=1))
