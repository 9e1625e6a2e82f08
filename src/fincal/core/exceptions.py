"""
Custom exceptions for the fincal calendar engine.

Provides a hierarchy of boundary errors (bad input at decode or request
time) and internal invariant failures.
"""

from typing import Any, Optional


class CalendarError(Exception):
    """Base exception for all fincal errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Business Errors (4xx)
# =============================================================================

class BusinessError(CalendarError):
    """Base exception for invalid input reaching the engine (typically 4xx)."""
    pass


class DatetimeValidationError(BusinessError):
    """Raised when a Datetime field is out of its valid range."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid datetime field '{field}': {message}",
            {"field": field, "value": value}
        )
        self.field = field
        self.value = value


class UnknownMarketError(BusinessError):
    """Raised when a holiday calendar is requested for an unknown market."""

    def __init__(self, market: str):
        super().__init__(
            f"Unknown market: {market}",
            {"market": market}
        )
        self.market = market


class DecodeError(BusinessError):
    """Raised when a binary or JSON payload cannot be decoded."""

    def __init__(self, format_name: str, message: str):
        super().__init__(
            f"Could not decode {format_name}: {message}",
            {"format": format_name}
        )
        self.format_name = format_name


# =============================================================================
# Internal Errors
# =============================================================================

class InternalInvariantError(CalendarError):
    """Base exception for broken internal contracts. Not meant to be caught."""
    pass


class NegativePeriodError(InternalInvariantError):
    """Raised when period subtraction is handed a negative day or month count."""

    def __init__(self, field: str, value: int):
        super().__init__(
            f"Negative {field} in period subtraction: {value}",
            {"field": field, "value": value}
        )
        self.field = field
        self.value = value
