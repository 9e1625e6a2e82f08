"""
API Request Validation.

Uses Pydantic for request payload validation.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from fincal.infrastructure.serialization import DeltaModel, IsoDatetime


def _clean_market(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip().upper()
    if not v:
        raise ValueError("market cannot be empty or whitespace")
    return v


class BusinessDayRequest(BaseModel):
    """Request body for /business-day endpoint."""

    datetime: IsoDatetime = Field(
        ...,
        description="ISO-8601 datetime with numeric offset",
    )
    market: Optional[str] = Field(
        default=None,
        max_length=16,
        description="Market code; the configured default when omitted",
    )

    @field_validator("market")
    @classmethod
    def validate_market(cls, v: Optional[str]) -> Optional[str]:
        return _clean_market(v)


class ApplyDeltaRequest(BaseModel):
    """Request body for /deltas/apply endpoint."""

    datetime: IsoDatetime
    delta: DeltaModel
    operation: Literal["add", "sub"] = "add"

    @model_validator(mode="after")
    def check_subtracted_period(self) -> "ApplyDeltaRequest":
        """Subtraction only accepts non-negative day and month counts."""
        period = self.delta.period
        if self.operation == "sub" and (period.days < 0 or period.months < 0):
            raise ValueError("cannot subtract a period with negative months or days")
        return self


class DiffRequest(BaseModel):
    """Request body for /deltas/diff endpoint."""

    start: IsoDatetime
    end: IsoDatetime
