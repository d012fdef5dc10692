"""
Holiday provider for the Brazilian national holidays.
"""

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Set

from business_calendar.core.easter import easter_sunday, in_validity_window
from business_calendar.core.ranges import DateLike, as_date
from business_calendar.data.holiday_data import COUNTRY_CODE, EASTER_HOLIDAYS, FIXED_HOLIDAYS
from business_calendar.data.schemas import HolidayEntry

logger = logging.getLogger(__name__)


def holiday_entries_for_year(year: int) -> List[HolidayEntry]:
    """
    Build the national holidays of a year.

    Args:
        year: Year to build the holidays for.

    Returns:
        Twelve entries: the eight fixed-date holidays followed by Easter
        Sunday, Carnival, Good Friday and Corpus Christi. Coinciding dates
        are not merged.
    """
    entries = [
        HolidayEntry(
            holiday_date=date(year, month, day),
            name=name,
            name_english=name_english,
            country=COUNTRY_CODE,
            kind="fixed",
        )
        for month, day, name, name_english in FIXED_HOLIDAYS
    ]

    easter = easter_sunday(year)
    entries.extend(
        HolidayEntry(
            holiday_date=easter + timedelta(days=offset),
            name=name,
            name_english=name_english,
            country=COUNTRY_CODE,
            kind="easter",
        )
        for offset, name, name_english in EASTER_HOLIDAYS
    )
    return entries


def holidays_for_year(year: int) -> List[date]:
    """Return the twelve national holiday dates of a year, in insertion order."""
    return [entry.holiday_date for entry in holiday_entries_for_year(year)]


class HolidayProvider:
    """Provides the national holidays, caching them per year."""

    def __init__(self, language: str = "pt"):
        """
        Initialize the holiday provider.

        Args:
            language: Language for holiday names ('pt' or 'en').
        """
        self.language = language
        self._cache: Dict[int, List[HolidayEntry]] = {}

    def get_holidays_for_year(self, year: int) -> List[HolidayEntry]:
        """
        Get all holidays for a specific year.

        Args:
            year: Year to get holidays for.

        Returns:
            List of HolidayEntry objects for the year.
        """
        if year not in self._cache:
            if not in_validity_window(year):
                logger.warning(
                    f"Easter date for {year} is outside the 1582-2299 table, "
                    "movable holidays are approximate"
                )
            logger.debug(f"Building holidays for {year}")
            self._cache[year] = holiday_entries_for_year(year)
        return self._cache[year]

    def get_holidays_for_range(self, start: DateLike, end: DateLike) -> List[HolidayEntry]:
        """
        Get all holidays within a date range, sorted by date.

        Args:
            start: Start date of the range.
            end: End date of the range.

        Returns:
            List of HolidayEntry objects within the range.
        """
        first = as_date(start)
        last = as_date(end)
        result = []
        for year in range(first.year, last.year + 1):
            result.extend(
                entry
                for entry in self.get_holidays_for_year(year)
                if first <= entry.holiday_date <= last
            )
        return sorted(result, key=lambda entry: entry.holiday_date)

    def get_holiday_dates(self, years: Iterable[int]) -> List[date]:
        """
        Get the holiday dates of several years.

        Args:
            years: Years to include.

        Returns:
            Holiday dates, twelve per year, in year order.
        """
        dates: List[date] = []
        for year in sorted(set(years)):
            dates.extend(entry.holiday_date for entry in self.get_holidays_for_year(year))
        return dates

    def is_holiday(self, check_date: DateLike) -> bool:
        """
        Check if a specific date is a national holiday.

        Args:
            check_date: Date to check; the time of day is ignored.

        Returns:
            True if the date is a holiday, False otherwise.
        """
        day = as_date(check_date)
        holiday_dates: Set[date] = {
            entry.holiday_date for entry in self.get_holidays_for_year(day.year)
        }
        return day in holiday_dates

    def name_of(self, entry: HolidayEntry) -> str:
        """Holiday name in the provider's language."""
        return entry.label(self.language)

    def clear_cache(self) -> None:
        """Clear the holiday cache."""
        self._cache.clear()
