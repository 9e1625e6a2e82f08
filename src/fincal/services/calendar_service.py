"""
Market Calendar Service.

Answers holiday and business-day questions for one market, reading the
current instant from an injected clock.
"""

from dataclasses import dataclass
from typing import List, Optional

from fincal.config import settings
from fincal.core import (
    Clock,
    Datetime,
    SystemClock,
    get_market,
    holidays_in_year,
    is_business,
    is_holiday,
    is_weekend,
    next_business_day,
    now,
)
from fincal.infrastructure.logging import get_logger, log_duration


logger = get_logger(__name__)


@dataclass(frozen=True)
class BusinessDayStatus:
    """
    Classification of one datetime on a market calendar.

    Attributes:
        datetime: The datetime that was classified.
        is_business: Neither a weekend nor a holiday.
        is_holiday: Matches one of the market's holidays.
        is_weekend: Falls on Saturday or Sunday.
        next_business_day: First business day strictly after ``datetime``.
    """
    datetime: Datetime
    is_business: bool
    is_holiday: bool
    is_weekend: bool
    next_business_day: Datetime


class CalendarService:
    """
    Service for market calendar queries.

    Responsible for:
    - Resolving the market holiday set
    - Classifying datetimes as business days
    - Materializing yearly holiday calendars
    """

    def __init__(
        self,
        market: Optional[str] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.market = (market or settings.calendar.default_market).upper()
        self._holidays = get_market(self.market)
        self._clock = clock or SystemClock()

    def status(self, dt: Datetime) -> BusinessDayStatus:
        """
        Classify a datetime on this market's calendar.

        Args:
            dt: The datetime to classify.

        Returns:
            BusinessDayStatus for the datetime.
        """
        return BusinessDayStatus(
            datetime=dt,
            is_business=is_business(self._holidays, dt),
            is_holiday=is_holiday(self._holidays, dt),
            is_weekend=is_weekend(dt),
            next_business_day=next_business_day(self._holidays, dt),
        )

    def today(self) -> BusinessDayStatus:
        """Classify the current instant, read from the clock, at UTC."""
        current = now(self._clock)
        logger.debug(
            "Classifying current instant",
            extra={"extra_fields": {"market": self.market, "instant": str(current)}}
        )
        return self.status(current)

    @log_duration("holidays_for_year")
    def holidays_for_year(self, year: int) -> List[Datetime]:
        """
        Materialize this market's holidays for a year.

        Args:
            year: The calendar year.

        Returns:
            Holiday datetimes, ascending.
        """
        holidays = holidays_in_year(self._holidays, year)
        logger.info(
            f"Generated {len(holidays)} holidays",
            extra={"extra_fields": {"market": self.market, "year": year}}
        )
        return holidays
