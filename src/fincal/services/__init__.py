"""
Services Layer.

Calendar query orchestration over the pure core.
"""

from fincal.services.calendar_service import (
    BusinessDayStatus,
    CalendarService,
)


__all__ = [
    "BusinessDayStatus",
    "CalendarService",
]
