"""Configuration package."""

from fincal.config.settings import (
    CalendarSettings,
    Settings,
    settings,
)

__all__ = [
    "CalendarSettings",
    "Settings",
    "settings",
]
