"""
Financial calendar engine.

Civil datetimes with fixed UTC offsets, calendar-aware delta arithmetic
and market holiday calendars (NYSE, UK).
"""

__version__ = "1.0.0"
