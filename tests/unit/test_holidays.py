"""
Tests for the holiday recurrence engine.
"""

import pytest

from fincal.core.calendar import Datetime, Month, Weekday
from fincal.core.exceptions import UnknownMarketError
from fincal.core.holidays import (
    BOXING_DAY,
    CHRISTMAS_DAY,
    INDEPENDENCE_DAY,
    MEMORIAL_DAY,
    THANKSGIVING_DAY,
    UK_CHRISTMAS_DAY,
    EasterHoliday,
    FixedHoliday,
    HolidayRule,
    Observance,
    WeekdayPos,
    calculate_easter,
    easter_monday,
    easter_sunday,
    get_market,
    good_friday,
    is_holiday,
    is_nyse_holiday,
    is_uk_holiday,
    match_fixed_holiday,
    match_holiday,
    match_holiday_rule,
    nyse_holidays,
    observed_shift,
    uk_holidays,
    weekday_position,
)


class TestObservance:
    """Tests for weekend observance shifts."""

    def test_nearest_workday(self):
        assert observed_shift(Observance.NEAREST_WORKDAY, Datetime(2017, 7, 1)) == Datetime(2017, 6, 30)
        assert observed_shift(Observance.NEAREST_WORKDAY, Datetime(2017, 7, 2)) == Datetime(2017, 7, 3)
        assert observed_shift(Observance.NEAREST_WORKDAY, Datetime(2017, 7, 4)) == Datetime(2017, 7, 4)

    def test_sunday_to_monday_leaves_saturday(self):
        assert observed_shift(Observance.SUNDAY_TO_MONDAY, Datetime(2017, 7, 1)) == Datetime(2017, 7, 1)
        assert observed_shift(Observance.SUNDAY_TO_MONDAY, Datetime(2017, 7, 2)) == Datetime(2017, 7, 3)

    def test_next_monday_or_tuesday(self):
        assert observed_shift(Observance.NEXT_MONDAY_OR_TUESDAY, Datetime(2017, 7, 1)) == Datetime(2017, 7, 3)
        assert observed_shift(Observance.NEXT_MONDAY_OR_TUESDAY, Datetime(2017, 7, 2)) == Datetime(2017, 7, 4)
        assert observed_shift(Observance.NEXT_MONDAY_OR_TUESDAY, Datetime(2017, 7, 3)) == Datetime(2017, 7, 4)

    def test_previous_friday(self):
        assert observed_shift(Observance.PREVIOUS_FRIDAY, Datetime(2017, 7, 1)) == Datetime(2017, 6, 30)
        assert observed_shift(Observance.PREVIOUS_FRIDAY, Datetime(2017, 7, 2)) == Datetime(2017, 6, 30)

    def test_next_monday(self):
        assert observed_shift(Observance.NEXT_MONDAY, Datetime(2017, 7, 1)) == Datetime(2017, 7, 3)
        assert observed_shift(Observance.NEXT_MONDAY, Datetime(2017, 7, 2)) == Datetime(2017, 7, 3)

    @pytest.mark.parametrize("day", [1, 2, 3, 4])
    def test_none_never_shifts(self, day):
        assert observed_shift(Observance.NONE, Datetime(2017, 7, day)) == Datetime(2017, 7, day)


class TestFixedHoliday:
    """Tests for fixed-date holiday matching."""

    def test_saturday_holiday_observed_on_friday(self):
        # July 4th 2020 is a Saturday
        assert match_fixed_holiday(Datetime(2020, 7, 3), INDEPENDENCE_DAY)
        assert not match_fixed_holiday(Datetime(2020, 7, 4), INDEPENDENCE_DAY)

    def test_uk_christmas_and_boxing_day_on_weekend(self):
        # Christmas 2021 is a Saturday, Boxing Day a Sunday. Substitute days
        # follow the bank holiday rule (Monday, then Tuesday), not the
        # nearest workday: a Saturday Christmas is never moved to Friday.
        assert match_fixed_holiday(Datetime(2021, 12, 27), UK_CHRISTMAS_DAY)
        assert match_fixed_holiday(Datetime(2021, 12, 28), BOXING_DAY)
        assert not match_fixed_holiday(Datetime(2021, 12, 27), BOXING_DAY)
        assert not match_fixed_holiday(Datetime(2021, 12, 24), UK_CHRISTMAS_DAY)

    def test_ignores_time_of_day(self):
        assert match_fixed_holiday(Datetime(2017, 12, 25, 16, 30), CHRISTMAS_DAY)

    def test_defaults(self):
        holiday = FixedHoliday(14, Month.JULY)
        assert holiday.observance is Observance.NONE
        assert holiday.timezone == 0


class TestHolidayRule:
    """Tests for nth-weekday-of-month matching."""

    def test_weekday_position(self):
        # Mondays of July 2017: 3, 10, 17, 24, 31
        assert weekday_position(Datetime(2017, 7, 3)) is WeekdayPos.FIRST
        assert weekday_position(Datetime(2017, 7, 10)) is WeekdayPos.SECOND
        assert weekday_position(Datetime(2017, 7, 17)) is WeekdayPos.THIRD
        assert weekday_position(Datetime(2017, 7, 24)) is WeekdayPos.FOURTH
        assert weekday_position(Datetime(2017, 7, 31)) is WeekdayPos.LAST

    def test_fourth_thursday_can_also_be_last(self):
        thanksgiving = Datetime(2019, 11, 28)
        last_thursday = HolidayRule(Month.NOVEMBER, WeekdayPos.LAST, Weekday.THURSDAY)

        assert match_holiday_rule(thanksgiving, THANKSGIVING_DAY)
        assert match_holiday_rule(thanksgiving, last_thursday)

    def test_last_monday_of_may(self):
        assert match_holiday_rule(Datetime(2017, 5, 29), MEMORIAL_DAY)
        assert not match_holiday_rule(Datetime(2017, 5, 22), MEMORIAL_DAY)

    def test_wrong_weekday_or_month(self):
        assert not match_holiday_rule(Datetime(2017, 11, 24), THANKSGIVING_DAY)
        assert not match_holiday_rule(Datetime(2017, 10, 26), THANKSGIVING_DAY)


class TestEaster:
    """Tests for Easter-relative holidays."""

    @pytest.mark.parametrize(
        "year, month, day",
        [(2017, 4, 16), (2021, 4, 4), (2024, 3, 31), (2025, 4, 20)],
    )
    def test_calculate_easter(self, year, month, day):
        assert calculate_easter(year) == Datetime(year, month, day)

    def test_relative_holidays(self):
        assert easter_sunday(2017) == EasterHoliday(Datetime(2017, 4, 16))
        assert good_friday(2017).date == Datetime(2017, 4, 14)
        assert easter_monday(2017).date == Datetime(2017, 4, 17)

    def test_good_friday_across_month(self):
        assert good_friday(2024).date == Datetime(2024, 3, 29)
        assert easter_monday(2024).date == Datetime(2024, 4, 1)


class TestMatchHoliday:
    """Tests for variant dispatch."""

    def test_dispatches_every_variant(self):
        assert match_holiday(Datetime(2017, 12, 25), CHRISTMAS_DAY)
        assert match_holiday(Datetime(2017, 5, 29), MEMORIAL_DAY)
        assert match_holiday(Datetime(2017, 4, 14), good_friday(2017))

    def test_unknown_variant(self):
        with pytest.raises(TypeError):
            match_holiday(Datetime(2017, 12, 25), "christmas")


class TestMarkets:
    """Tests for the market holiday sets."""

    def test_nyse_holidays_are_cached(self):
        assert nyse_holidays(2017) is nyse_holidays(2017)
        assert len(nyse_holidays(2017)) == 9

    def test_nyse_2017(self, nyse_2017_holidays):
        for dt in nyse_2017_holidays:
            assert is_nyse_holiday(dt), dt

    def test_uk_2017(self, uk_2017_holidays):
        for dt in uk_2017_holidays:
            assert is_uk_holiday(dt), dt

    @pytest.mark.parametrize(
        "month, day",
        [(1, 1), (4, 2), (4, 5), (5, 3), (5, 31), (8, 30), (12, 27), (12, 28)],
    )
    def test_uk_2021(self, month, day):
        assert is_holiday(uk_holidays, Datetime(2021, month, day))

    def test_uk_2021_weekend_christmas_not_observed_on_the_day(self):
        assert not is_uk_holiday(Datetime(2021, 12, 29))

    def test_business_days_are_not_holidays(self):
        assert not is_nyse_holiday(Datetime(2017, 12, 26))
        assert not is_nyse_holiday(Datetime(2017, 4, 17))

    def test_matches_local_date(self):
        # 22:00 in New York on Christmas Eve is already Christmas Day at UTC
        assert not is_nyse_holiday(Datetime(2017, 12, 24, 22, 0, 0, -300))
        assert is_nyse_holiday(Datetime(2017, 12, 25, 22, 0, 0, -300))

    def test_get_market_is_case_insensitive(self):
        assert get_market("nyse") is nyse_holidays
        assert get_market("UK") is uk_holidays

    def test_get_unknown_market(self):
        with pytest.raises(UnknownMarketError) as exc_info:
            get_market("XETRA")
        assert exc_info.value.market == "XETRA"
