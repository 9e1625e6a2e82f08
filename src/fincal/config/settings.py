"""
Application configuration.

Centralizes environment variables, constants, and settings
using dataclasses for type safety and immutability.
"""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CalendarSettings:
    """Holiday calendar query settings."""

    default_market: str = field(
        default_factory=lambda: os.environ.get("FINCAL_DEFAULT_MARKET", "NYSE").upper()
    )


@dataclass(frozen=True)
class Settings:
    """Main application settings."""

    calendar: CalendarSettings = field(default_factory=CalendarSettings)
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", 8080)))
    debug: bool = field(default_factory=lambda: os.environ.get("DEBUG", "false").lower() == "true")


# Singleton settings instance
settings = Settings()
