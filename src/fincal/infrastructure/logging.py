"""
Structured JSON logging.

One JSON object per line on stdout:
- Severity, message, timestamp and logger name
- Request context (request_id, market, endpoint) when serving HTTP
- Extra structured fields passed through ``extra_fields``
"""

import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, TypeVar

from flask import Flask, g, request


F = TypeVar("F", bound=Callable[..., Any])


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    CONTEXT_FIELDS = ("request_id", "market", "endpoint")

    MAX_VALUE_LENGTH = 1000

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "logger": record.name,
        }

        self._add_request_context(log_entry)
        self._add_extra_fields(record, log_entry)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        if record.levelno >= logging.WARNING:
            log_entry["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def _add_request_context(self, log_entry: Dict[str, Any]) -> None:
        try:
            for attr in self.CONTEXT_FIELDS:
                value = getattr(g, attr, None)
                if value:
                    log_entry[attr] = value
        except RuntimeError:
            pass  # outside an application context

    def _add_extra_fields(self, record: logging.LogRecord, log_entry: Dict[str, Any]) -> None:
        extra_fields = getattr(record, "extra_fields", None)
        if not extra_fields:
            return
        for key, value in extra_fields.items():
            if isinstance(value, str) and len(value) > self.MAX_VALUE_LENGTH:
                value = value[:self.MAX_VALUE_LENGTH] + "... [truncated]"
            log_entry[key] = value


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter merging bound fields into ``extra_fields``."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        extra_fields = extra.pop("extra_fields", {})

        if self.extra:
            extra_fields = {**self.extra, **extra_fields}

        kwargs["extra"] = {**extra, "extra_fields": extra_fields}
        return msg, kwargs

    def with_fields(self, **fields: Any) -> "StructuredLogger":
        """Create a new logger with additional bound fields."""
        return StructuredLogger(self.logger, {**self.extra, **fields})


def get_logger(name: str = "fincal") -> StructuredLogger:
    """
    Create and configure a structured JSON logger.

    Args:
        name: Logger name.

    Returns:
        Configured StructuredLogger instance.
    """
    base_logger = logging.getLogger(name)

    if not base_logger.handlers:
        base_logger.setLevel(logging.DEBUG)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(JsonFormatter())

        base_logger.addHandler(handler)
        base_logger.propagate = False

    return StructuredLogger(base_logger, {})


def log_request_context(app: Flask) -> None:
    """
    Flask middleware tagging each request and logging its outcome.

    Args:
        app: Flask application instance.
    """
    @app.before_request
    def before_request() -> None:
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        g.endpoint = request.endpoint
        g.market = (request.view_args or {}).get("market")
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration_ms = None
        if hasattr(g, "start_time"):
            duration_ms = int((time.time() - g.start_time) * 1000)

        get_logger("fincal.request").info(
            f"{request.method} {request.path} -> {response.status_code}",
            extra={"extra_fields": {
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }}
        )
        response.headers["X-Request-ID"] = g.request_id
        return response


def log_duration(operation: str) -> Callable[[F], F]:
    """
    Decorator to measure and log operation duration.

    Args:
        operation: Operation name for logging.
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = get_logger(func.__module__)
            start = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{operation} failed: {e}",
                    extra={"extra_fields": {
                        "operation": operation,
                        "duration_ms": int((time.time() - start) * 1000),
                        "status": "error",
                        "error_type": type(e).__name__,
                    }}
                )
                raise
            logger.debug(
                f"{operation} completed",
                extra={"extra_fields": {
                    "operation": operation,
                    "duration_ms": int((time.time() - start) * 1000),
                    "status": "success",
                }}
            )
            return result
        return wrapper  # type: ignore
    return decorator


# Global application logger
logger = get_logger("fincal")
