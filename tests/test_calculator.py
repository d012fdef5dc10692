"""
Tests for the business calendar core.
"""

from datetime import date, datetime, timedelta

import pytest

from business_calendar.core.calculator import (
    BusinessCalendar,
    BusinessDayCalculator,
    InvalidRangeError,
    add_work_days,
    business_days_until,
    is_weekend_day,
    is_working_day,
)
from business_calendar.core.easter import (
    EASTER_CORRECTIONS,
    FALLBACK_CORRECTION,
    easter_correction,
    easter_sunday,
    in_validity_window,
)
from business_calendar.core.holiday_provider import (
    HolidayProvider,
    holiday_entries_for_year,
    holidays_for_year,
)
from business_calendar.data.schemas import BusinessDaysRequest, Config, Weekday


@pytest.fixture
def holiday_provider():
    """Create a HolidayProvider instance."""
    return HolidayProvider(language="pt")


@pytest.fixture
def calculator(holiday_provider):
    """Create a BusinessDayCalculator using the national holidays."""
    return BusinessDayCalculator(holiday_provider)


@pytest.fixture
def holidays_2017():
    """National holiday dates for 2017."""
    return holidays_for_year(2017)


class TestEasterSunday:
    """Tests for the Easter computus."""

    @pytest.mark.parametrize(
        "year, expected",
        [
            (2000, date(2000, 4, 23)),
            (2008, date(2008, 3, 23)),
            (2017, date(2017, 4, 16)),
            (2024, date(2024, 3, 31)),
            (2025, date(2025, 4, 20)),
            (2026, date(2026, 4, 5)),
        ],
    )
    def test_known_dates(self, year, expected):
        """Test Easter Sunday for years with a known date."""
        assert easter_sunday(year) == expected

    def test_april_26_exception(self):
        """Test that d=29, e=6 years move back to April 19."""
        assert easter_sunday(1981) == date(1981, 4, 19)
        assert easter_sunday(2076) == date(2076, 4, 19)

    def test_april_25_exception(self):
        """Test that d=28, e=6 years move back to April 18."""
        assert easter_sunday(1954) == date(1954, 4, 18)
        assert easter_sunday(2049) == date(2049, 4, 18)

    def test_always_sunday_within_window(self):
        """Test every year of 1900-2099 falls on a Sunday between March 22 and April 25."""
        for year in range(1900, 2100):
            easter = easter_sunday(year)
            assert easter.weekday() == 6, year
            assert date(year, 3, 22) <= easter <= date(year, 4, 25), year

    def test_correction_table_lookup(self):
        """Test the correction table is checked in range order."""
        assert easter_correction(1650)[2:] == (22, 2)
        assert easter_correction(1750)[2:] == (23, 3)
        assert easter_correction(1850)[2:] == (24, 4)
        assert easter_correction(2017)[2:] == (24, 5)
        assert easter_correction(2150)[2:] == (24, 6)
        assert easter_correction(2250)[2:] == (25, 7)
        assert [c.first_year for c in EASTER_CORRECTIONS] == sorted(
            c.first_year for c in EASTER_CORRECTIONS
        )

    def test_out_of_window_years_use_fallback(self):
        """Test years outside the table still get a date from the fallback constants."""
        assert easter_correction(1500) == FALLBACK_CORRECTION
        assert easter_correction(2400) == FALLBACK_CORRECTION
        assert not in_validity_window(1500)
        assert in_validity_window(1582)
        assert in_validity_window(2299)
        assert easter_sunday(2400).month in (3, 4)


class TestHolidaysForYear:
    """Tests for the national holiday set."""

    def test_twelve_entries(self):
        """Test that every year has exactly twelve holidays."""
        for year in (1, 1500, 1900, 2017, 2100, 2299, 9999):
            assert len(holidays_for_year(year)) == 12

    def test_2017_movable_holidays(self, holidays_2017):
        """Test the Easter-based holidays of 2017."""
        assert date(2017, 4, 16) in holidays_2017  # Easter
        assert date(2017, 2, 28) in holidays_2017  # Carnival
        assert date(2017, 4, 14) in holidays_2017  # Good Friday
        assert date(2017, 6, 15) in holidays_2017  # Corpus Christi

    def test_fixed_holidays_first(self, holidays_2017):
        """Test that fixed holidays come first, in insertion order."""
        assert holidays_2017[:8] == [
            date(2017, 1, 1),
            date(2017, 4, 21),
            date(2017, 5, 1),
            date(2017, 9, 7),
            date(2017, 10, 12),
            date(2017, 11, 2),
            date(2017, 11, 15),
            date(2017, 12, 25),
        ]
        assert holidays_2017[8] == easter_sunday(2017)

    def test_entries_are_labelled(self):
        """Test the labelled entries carry names, kind and country."""
        entries = holiday_entries_for_year(2017)
        labour_day = entries[2]
        assert labour_day.name == "Dia do Trabalho"
        assert labour_day.label("en") == "Labour Day"
        assert labour_day.country == "BR"
        assert labour_day.kind == "fixed"
        assert {e.kind for e in entries[8:]} == {"easter"}

    def test_entries_are_immutable(self):
        """Test HolidayEntry cannot be modified."""
        entry = holiday_entries_for_year(2017)[0]
        with pytest.raises(Exception):
            entry.name = "Other"


class TestHolidayProvider:
    """Tests for HolidayProvider."""

    def test_is_holiday(self, holiday_provider):
        """Test is_holiday ignores the time of day."""
        assert holiday_provider.is_holiday(date(2017, 9, 7)) is True
        assert holiday_provider.is_holiday(datetime(2017, 9, 7, 15, 30)) is True
        assert holiday_provider.is_holiday(date(2017, 9, 8)) is False

    def test_range_spans_years(self, holiday_provider):
        """Test holidays of a range crossing the year boundary."""
        holidays = holiday_provider.get_holidays_for_range(date(2016, 12, 1), date(2017, 1, 31))
        assert [h.holiday_date for h in holidays] == [date(2016, 12, 25), date(2017, 1, 1)]

    def test_cache(self, holiday_provider):
        """Test the provider caches per year and can be cleared."""
        first = holiday_provider.get_holidays_for_year(2017)
        assert holiday_provider.get_holidays_for_year(2017) is first
        holiday_provider.clear_cache()
        assert holiday_provider.get_holidays_for_year(2017) is not first

    def test_language(self):
        """Test holiday names follow the provider language."""
        provider = HolidayProvider(language="en")
        entry = provider.get_holidays_for_year(2017)[-1]
        assert provider.name_of(entry) == "Corpus Christi"
        assert provider.name_of(provider.get_holidays_for_year(2017)[0]) == "New Year's Day"


class TestIsWorkingDay:
    """Tests for the business-day predicate."""

    def test_weekends_never_work(self, holidays_2017):
        """Test Saturdays and Sundays are never business days."""
        saturday = date(2017, 1, 7)
        for offset in range(0, 70, 7):
            assert not is_working_day(saturday + timedelta(days=offset))
            assert not is_working_day(saturday + timedelta(days=offset + 1), holidays_2017)
            assert not is_working_day(saturday + timedelta(days=offset), [])

    def test_holiday(self, holidays_2017):
        """Test a weekday holiday is not a business day."""
        good_friday = date(2017, 4, 14)
        assert is_working_day(good_friday, holidays_2017) is False
        assert is_working_day(good_friday) is True

    def test_time_of_day_ignored(self, holidays_2017):
        """Test datetimes are compared by their date only."""
        assert is_working_day(datetime(2017, 4, 14, 9, 0), holidays_2017) is False
        assert is_working_day(date(2017, 4, 14), [datetime(2017, 4, 14, 23, 59)]) is False
        assert is_working_day(datetime(2017, 4, 13, 23, 59), holidays_2017) is True

    def test_custom_weekend(self):
        """Test a configurable weekend policy."""
        weekend = {Weekday.FRIDAY, Weekday.SATURDAY}
        assert is_working_day(date(2017, 4, 28), weekend=weekend) is False  # Friday
        assert is_working_day(date(2017, 4, 30), weekend=weekend) is True  # Sunday
        assert is_weekend_day(date(2017, 4, 28), weekend) is True
        assert is_weekend_day(date(2017, 4, 29)) is True

    def test_whole_week_weekend_rejected(self):
        """Test a weekend covering every day is rejected."""
        with pytest.raises(ValueError):
            is_working_day(date(2017, 4, 26), weekend=list(Weekday))


class TestAddWorkDays:
    """Tests for the business-day stepper."""

    def test_skips_labour_day(self, holidays_2017):
        """Test the documented example: May 1 2017 is skipped."""
        assert add_work_days(date(2017, 4, 26), 3, holidays_2017) == date(2017, 5, 2)

    def test_zero_is_identity(self, holidays_2017):
        """Test zero days returns the start, even on a weekend."""
        saturday = date(2017, 4, 29)
        assert add_work_days(saturday, 0, holidays_2017) == saturday
        assert add_work_days(date(2017, 5, 1), 0, holidays_2017) == date(2017, 5, 1)

    def test_backward(self, holidays_2017):
        """Test negative counts step backward over weekends and holidays."""
        assert add_work_days(date(2017, 5, 2), -3, holidays_2017) == date(2017, 4, 26)
        assert add_work_days(date(2017, 4, 17), -1, holidays_2017) == date(2017, 4, 13)

    def test_start_not_counted(self, holidays_2017):
        """Test that a non-business start day is not counted."""
        assert add_work_days(date(2017, 4, 29), 1, holidays_2017) == date(2017, 5, 2)
        assert add_work_days(date(2017, 4, 29), 1) == date(2017, 5, 1)

    def test_result_is_business_day_and_round_trips(self, holidays_2017):
        """Test results are business days and round-trip from a business day."""
        start = date(2017, 1, 2)
        for n in range(1, 40):
            result = add_work_days(start, n, holidays_2017)
            assert is_working_day(result, holidays_2017)
            assert add_work_days(result, -n, holidays_2017) == start

    def test_datetime_start(self, holidays_2017):
        """Test a datetime start is truncated to its date."""
        assert add_work_days(datetime(2017, 4, 26, 17, 45), 3, holidays_2017) == date(2017, 5, 2)

    def test_custom_weekend(self):
        """Test stepping with Friday and Saturday as the weekend."""
        weekend = {Weekday.FRIDAY, Weekday.SATURDAY}
        assert add_work_days(date(2017, 4, 26), 2, weekend=weekend) == date(2017, 4, 30)


class TestBusinessDaysUntil:
    """Tests for the business-day counter."""

    def test_full_week(self):
        """Test a full week has five business days."""
        assert business_days_until(date(2017, 1, 1), date(2017, 1, 7), []) == 5

    def test_single_days(self):
        """Test one-day ranges."""
        assert business_days_until(date(2017, 1, 2), date(2017, 1, 2)) == 1
        assert business_days_until(date(2017, 1, 7), date(2017, 1, 7)) == 0
        assert business_days_until(date(2017, 1, 8), date(2017, 1, 8)) == 0

    def test_across_weekend(self):
        """Test a Friday to Monday range."""
        assert business_days_until(date(2017, 1, 6), date(2017, 1, 9)) == 2

    def test_matches_day_by_day_count(self):
        """Test the analytic count against iterating day by day."""
        for weekend in ({Weekday.SATURDAY, Weekday.SUNDAY}, {Weekday.FRIDAY, Weekday.SATURDAY}, {Weekday.SUNDAY}):
            for start_offset in range(14):
                first = date(2017, 1, 1) + timedelta(days=start_offset)
                for length in range(30):
                    last = first + timedelta(days=length)
                    expected = sum(
                        1
                        for i in range(length + 1)
                        if is_working_day(first + timedelta(days=i), weekend=weekend)
                    )
                    assert business_days_until(first, last, weekend=weekend) == expected

    def test_national_holidays(self, holidays_2017):
        """Test a month with a weekday holiday."""
        assert business_days_until(date(2017, 5, 1), date(2017, 5, 31), holidays_2017) == 22

    def test_weekend_holiday_is_subtracted(self, holidays_2017):
        """Test a holiday falling on a weekend is subtracted as well."""
        # January 1 2017 is a Sunday
        assert business_days_until(date(2017, 1, 1), date(2017, 1, 31), holidays_2017) == 21

    def test_duplicates_subtract_twice(self):
        """Test each matching holiday entry subtracts one."""
        holidays = [date(2017, 1, 3), date(2017, 1, 3)]
        assert business_days_until(date(2017, 1, 2), date(2017, 1, 6), holidays) == 3

    def test_not_clamped(self):
        """Test the count can go below zero."""
        assert business_days_until(date(2017, 1, 7), date(2017, 1, 7), [date(2017, 1, 7)]) == -1

    def test_invalid_range(self):
        """Test first after last raises InvalidRangeError."""
        with pytest.raises(InvalidRangeError) as exc_info:
            business_days_until(date(2017, 1, 8), date(2017, 1, 7))
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.first == date(2017, 1, 8)
        assert exc_info.value.last == date(2017, 1, 7)

    def test_datetimes_truncated(self):
        """Test the same day with a later start time is a valid range."""
        assert business_days_until(datetime(2017, 1, 2, 18), datetime(2017, 1, 2, 8)) == 1


class TestBusinessCalendar:
    """Tests for the BusinessCalendar configuration object."""

    def test_national(self):
        """Test a calendar built from the national holidays."""
        cal = BusinessCalendar.national([2017])
        assert len(cal.holidays) == 12
        assert cal.add_work_days(date(2017, 4, 26), 3) == date(2017, 5, 2)
        assert cal.is_working_day(date(2017, 6, 15)) is False
        assert cal.business_days_until(date(2017, 5, 1), date(2017, 5, 31)) == 22

    def test_custom_holidays(self):
        """Test a calendar with only custom holidays."""
        cal = BusinessCalendar(holidays=[datetime(2017, 5, 2, 10)])
        assert cal.holidays == (date(2017, 5, 2),)
        assert cal.add_work_days(date(2017, 4, 26), 3) == date(2017, 5, 1)

    def test_default_is_weekend_only(self):
        """Test an empty calendar checks weekends only."""
        cal = BusinessCalendar()
        assert cal.is_working_day(date(2017, 5, 1)) is True
        assert cal.is_working_day(date(2017, 4, 30)) is False


class TestBusinessDayCalculator:
    """Tests for the BusinessDayCalculator service."""

    def test_calculate(self, calculator):
        """Test counting May 2017."""
        result = calculator.calculate(
            BusinessDaysRequest(start_date=date(2017, 5, 1), end_date=date(2017, 5, 31))
        )
        assert result.calendar_days == 31
        assert result.weekend_days == 8
        assert result.holidays_count == 1
        assert result.working_days == 22
        assert result.holidays[0].name == "Dia do Trabalho"
        assert result.warnings == []

    def test_calculate_monthly_breakdown(self, calculator):
        """Test the per-month breakdown."""
        result = calculator.calculate(
            BusinessDaysRequest(
                start_date=date(2017, 4, 15),
                end_date=date(2017, 5, 31),
                monthly_breakdown=True,
            )
        )
        assert [(m.month, m.first_day, m.last_day) for m in result.months] == [
            (4, date(2017, 4, 15), date(2017, 4, 30)),
            (5, date(2017, 5, 1), date(2017, 5, 31)),
        ]
        assert result.months[1].working_days == 22
        assert sum(m.working_days for m in result.months) == result.working_days

    def test_calculate_warns_for_weekend_holiday(self, calculator):
        """Test a weekend holiday produces a warning."""
        result = calculator.calculate(
            BusinessDaysRequest(start_date=date(2017, 1, 1), end_date=date(2017, 1, 31))
        )
        assert result.working_days == 21
        assert any("weekend" in w for w in result.warnings)

    def test_calculate_without_national_holidays(self, calculator):
        """Test disabling the national holidays and adding custom ones."""
        result = calculator.calculate(
            BusinessDaysRequest(
                start_date=date(2017, 5, 1),
                end_date=date(2017, 5, 31),
                include_national_holidays=False,
                extra_holidays=[date(2017, 5, 2)],
            )
        )
        assert result.working_days == 22
        assert [h.country for h in result.holidays] == ["custom"]

    def test_calculate_invalid_range(self, calculator):
        """Test that a reversed range raises InvalidRangeError."""
        with pytest.raises(InvalidRangeError):
            calculator.calculate(
                BusinessDaysRequest(start_date=date(2017, 5, 31), end_date=date(2017, 5, 1))
            )

    def test_step(self, calculator):
        """Test stepping reports the skipped days."""
        result = calculator.step(date(2017, 4, 26), 3)
        assert result.result_date == date(2017, 5, 2)
        assert result.start_is_working_day is True
        assert result.skipped == {"weekend_days": 2, "holidays": 1}

    def test_step_across_year(self, calculator):
        """Test stepping past the end of the year uses next year's holidays."""
        # Dec 29 2017 is a Friday; Jan 1 2018 is a holiday
        assert calculator.step(date(2017, 12, 29), 1).result_date == date(2018, 1, 2)

    def test_step_at_first_representable_year(self, calculator):
        """Test stepping in year 1 does not look up holidays for year 0."""
        # June 1 of year 1 is a Friday
        result = calculator.step(date(1, 6, 1), 1)
        assert result.result_date == date(1, 6, 4)
        assert result.result_date == add_work_days(date(1, 6, 1), 1)

    def test_step_at_last_representable_year(self, calculator):
        """Test stepping in year 9999 does not look up holidays for year 10000."""
        # June 1 9999 is a Tuesday
        assert calculator.step(date(9999, 6, 1), 1).result_date == date(9999, 6, 2)

    def test_calculate_default_follows_calculator_setting(self, holiday_provider):
        """Test a request without the flag uses the calculator's holiday setting."""
        calculator = BusinessDayCalculator(holiday_provider, include_national_holidays=False)
        result = calculator.calculate(
            BusinessDaysRequest(start_date=date(2017, 5, 1), end_date=date(2017, 5, 31))
        )
        assert result.working_days == 23
        assert result.holidays_count == 0
        assert result.holidays == []

    def test_calculate_request_flag_overrides_calculator(self, holiday_provider):
        """Test an explicit request flag wins over the calculator's setting."""
        calculator = BusinessDayCalculator(holiday_provider, include_national_holidays=False)
        result = calculator.calculate(
            BusinessDaysRequest(
                start_date=date(2017, 5, 1),
                end_date=date(2017, 5, 31),
                include_national_holidays=True,
            )
        )
        assert result.working_days == 22
        assert result.holidays_count == 1

    def test_check(self, calculator):
        """Test checking single days."""
        assert calculator.check(date(2017, 6, 15)) is False
        assert calculator.check(date(2017, 6, 16)) is True

    def test_extra_holidays(self, holiday_provider):
        """Test custom holidays are skipped as well."""
        calculator = BusinessDayCalculator(holiday_provider, extra_holidays=[date(2017, 5, 2)])
        assert calculator.step(date(2017, 4, 26), 3).result_date == date(2017, 5, 3)

    def test_from_config(self):
        """Test building a calculator from configuration."""
        config = Config(weekend_days=[Weekday.SUNDAY], include_national_holidays=False)
        calculator = BusinessDayCalculator.from_config(config)
        assert calculator.check(date(2017, 4, 29)) is True
        assert calculator.check(date(2017, 5, 1)) is True
        assert calculator.check(date(2017, 4, 30)) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
