"""
Flask API Routes.

HTTP endpoints over the calendar engine.
"""

from typing import Any, Dict, Tuple

from flask import Blueprint, request
from pydantic import ValidationError as PydanticValidationError

from fincal import __version__
from fincal.api.validation import (
    ApplyDeltaRequest,
    BusinessDayRequest,
    DiffRequest,
)
from fincal.core import (
    MARKETS,
    add_datetime,
    diff,
    display_delta,
    fiscal_quarters,
    format_datetime,
    sub_datetime,
)
from fincal.core.exceptions import BusinessError, UnknownMarketError
from fincal.infrastructure.logging import get_logger
from fincal.infrastructure.serialization import DeltaModel
from fincal.services import BusinessDayStatus, CalendarService


logger = get_logger(__name__)


api_bp = Blueprint("api", __name__)


def _error_response(
    message: str,
    status_code: int,
    error_type: str = "error",
) -> Tuple[Dict[str, Any], int]:
    """Create standardized error response."""
    return {
        "success": False,
        "error": message,
        "error_type": error_type,
    }, status_code


def _success_response(
    data: Dict[str, Any],
    status_code: int = 200,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized success response."""
    return {
        "success": True,
        **data,
    }, status_code


def _validation_error(e: PydanticValidationError) -> Tuple[Dict[str, Any], int]:
    return _error_response(
        str(e.errors()[0]["msg"]),
        400,
        "validation_error",
    )


def _status_payload(market: str, status: BusinessDayStatus) -> Dict[str, Any]:
    return {
        "market": market,
        "datetime": format_datetime(status.datetime),
        "is_business": status.is_business,
        "is_holiday": status.is_holiday,
        "is_weekend": status.is_weekend,
        "next_business_day": format_datetime(status.next_business_day),
    }


# ============================================================================
# Health Check
# ============================================================================

@api_bp.route("/health", methods=["GET"])
def health_check() -> Tuple[Dict[str, Any], int]:
    """Health check endpoint."""
    return _success_response({
        "status": "healthy",
        "service": "fincal",
        "version": __version__,
    })


# ============================================================================
# Market Calendars
# ============================================================================

@api_bp.route("/markets", methods=["GET"])
def list_markets() -> Tuple[Dict[str, Any], int]:
    """List the market codes with a holiday calendar."""
    return _success_response({"markets": sorted(MARKETS)})


@api_bp.route("/markets/<market>/holidays/<int:year>", methods=["GET"])
def market_holidays(market: str, year: int) -> Tuple[Dict[str, Any], int]:
    """
    Holiday calendar of a market for one year.

    Returns:
        Observed holiday dates as ISO-8601 strings.
    """
    service = CalendarService(market)
    holidays = service.holidays_for_year(year)
    return _success_response({
        "market": service.market,
        "year": year,
        "holidays": [format_datetime(dt) for dt in holidays],
    })


@api_bp.route("/markets/<market>/today", methods=["GET"])
def market_today(market: str) -> Tuple[Dict[str, Any], int]:
    """Business-day status of the current instant."""
    service = CalendarService(market)
    return _success_response(_status_payload(service.market, service.today()))


@api_bp.route("/business-day", methods=["POST"])
def business_day() -> Tuple[Dict[str, Any], int]:
    """
    Classify a datetime on a market calendar.

    Request Body:
        datetime (str): ISO-8601 datetime.
        market (str, optional): Market code.

    Returns:
        Business-day status and the next business day.
    """
    data = request.get_json(silent=True) or {}

    try:
        validated = BusinessDayRequest(**data)
    except PydanticValidationError as e:
        return _validation_error(e)

    service = CalendarService(validated.market)
    return _success_response(_status_payload(service.market, service.status(validated.datetime)))


# ============================================================================
# Delta Arithmetic
# ============================================================================

@api_bp.route("/deltas/apply", methods=["POST"])
def apply_delta() -> Tuple[Dict[str, Any], int]:
    """
    Add a delta to, or subtract it from, a datetime.

    Request Body:
        datetime (str): ISO-8601 datetime.
        delta (object): {"dPeriod": {...}, "dDuration": {...}}.
        operation (str): "add" or "sub".
    """
    data = request.get_json(silent=True) or {}

    try:
        validated = ApplyDeltaRequest(**data)
    except PydanticValidationError as e:
        return _validation_error(e)

    delta = validated.delta.to_delta()
    if validated.operation == "sub":
        result = sub_datetime(validated.datetime, delta)
    else:
        result = add_datetime(validated.datetime, delta)

    return _success_response({
        "operation": validated.operation,
        "result": format_datetime(result),
    })


@api_bp.route("/deltas/diff", methods=["POST"])
def diff_datetimes() -> Tuple[Dict[str, Any], int]:
    """
    Calendar difference between two datetimes.

    Request Body:
        start (str): ISO-8601 datetime.
        end (str): ISO-8601 datetime.
    """
    data = request.get_json(silent=True) or {}

    try:
        validated = DiffRequest(**data)
    except PydanticValidationError as e:
        return _validation_error(e)

    delta = diff(validated.start, validated.end)
    return _success_response({
        "delta": DeltaModel.from_delta(delta).model_dump(by_alias=True),
        "display": display_delta(delta),
    })


# ============================================================================
# Fiscal Quarters
# ============================================================================

@api_bp.route("/quarters/<int:year>", methods=["GET"])
def quarters(year: int) -> Tuple[Dict[str, Any], int]:
    """The four fiscal quarters of a year."""
    return _success_response({
        "year": year,
        "quarters": [
            {
                "start": format_datetime(interval.start),
                "stop": format_datetime(interval.stop),
            }
            for interval in fiscal_quarters(year)
        ],
    })


# ============================================================================
# Error Handlers
# ============================================================================

@api_bp.errorhandler(UnknownMarketError)
def handle_unknown_market(error: UnknownMarketError) -> Tuple[Dict[str, Any], int]:
    """Handle requests for markets without a calendar."""
    return _error_response(str(error), 404, "unknown_market")


@api_bp.errorhandler(BusinessError)
def handle_business_error(error: BusinessError) -> Tuple[Dict[str, Any], int]:
    """Handle invalid input reaching the engine (4xx)."""
    logger.warning(
        f"Business error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__, **error.details}}
    )
    return _error_response(str(error), 400, type(error).__name__)


@api_bp.errorhandler(Exception)
def handle_unexpected_error(error: Exception) -> Tuple[Dict[str, Any], int]:
    """Handle unexpected errors (500)."""
    logger.exception(
        f"Unexpected error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(
        "An unexpected error occurred",
        500,
        "internal_error",
    )
