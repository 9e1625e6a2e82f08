"""
Infrastructure Layer.

Adapters around the pure core:
- Logging configuration
- Binary and JSON wire forms
"""

from fincal.infrastructure.logging import (
    get_logger,
    log_duration,
    log_request_context,
    logger,
    StructuredLogger,
)


__all__ = [
    "get_logger",
    "log_duration",
    "log_request_context",
    "logger",
    "StructuredLogger",
]
