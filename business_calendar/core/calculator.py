"""
Business-day logic: working-day check, stepping and counting.
"""

import logging
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Collection, FrozenSet, Iterable, List, Optional, Set, Tuple

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, field_validator

from business_calendar.core.easter import in_validity_window
from business_calendar.core.holiday_provider import HolidayProvider
from business_calendar.core.ranges import DateLike, as_date, each_day, each_month
from business_calendar.data.schemas import (
    DEFAULT_WEEKEND,
    BusinessDaysRequest,
    BusinessDaysResult,
    Config,
    HolidayEntry,
    MonthSummary,
    Weekday,
    WorkDayStepResult,
)

logger = logging.getLogger(__name__)

HolidaySet = Optional[Iterable[DateLike]]


class InvalidRangeError(ValueError):
    """Raised when the first day of a range comes after the last day."""

    def __init__(self, first: date, last: date):
        self.first = first
        self.last = last
        super().__init__(f"Incorrect last day {last.isoformat()}: it is before {first.isoformat()}")


def _weekend_set(weekend: Collection[int]) -> FrozenSet[Weekday]:
    days = frozenset(Weekday(day) for day in weekend)
    if len(days) >= 7:
        raise ValueError("The weekend cannot cover the whole week")
    return days


def _holiday_set(holidays: HolidaySet) -> Set[date]:
    return {as_date(holiday) for holiday in holidays or ()}


def is_weekend_day(day: DateLike, weekend: Collection[int] = DEFAULT_WEEKEND) -> bool:
    """Whether the day falls on the weekend (Saturday or Sunday by default)."""
    return as_date(day).weekday() in _weekend_set(weekend)


def is_working_day(
    day: DateLike,
    holidays: HolidaySet = None,
    weekend: Collection[int] = DEFAULT_WEEKEND,
) -> bool:
    """
    Check whether a day is a business day.

    Args:
        day: Date to check; the time of day is ignored.
        holidays: Holiday dates. None or empty checks the weekend only.
        weekend: Weekdays that are never business days.

    Returns:
        False for weekend days and holidays, True otherwise.
    """
    current = as_date(day)
    if current.weekday() in _weekend_set(weekend):
        return False
    return current not in _holiday_set(holidays)


def add_work_days(
    start: DateLike,
    count: int,
    holidays: HolidaySet = None,
    weekend: Collection[int] = DEFAULT_WEEKEND,
) -> date:
    """
    Move a number of business days forward or backward.

    The start day is never counted: each step lands on the next calendar
    day and only business days bring the target closer. A count of zero
    returns the start date, even when it is not a business day.

    Args:
        start: Date to start from; the time of day is ignored.
        count: Business days to move, negative to move backward.
        holidays: Holiday dates to skip. None skips weekends only.
        weekend: Weekdays that are never business days.

    Returns:
        The business day reached after ``abs(count)`` business days.
    """
    current = as_date(start)
    if count == 0:
        return current

    weekend_days = _weekend_set(weekend)
    holiday_dates = _holiday_set(holidays)
    direction = 1 if count > 0 else -1
    remaining = abs(count)

    while remaining:
        current += timedelta(days=direction)
        if current.weekday() not in weekend_days and current not in holiday_dates:
            remaining -= 1

    return current


def _weekend_days_in_remainder(first: date, last: date, weekend: FrozenSet[Weekday]) -> int:
    # Positions run Monday = 1 .. Sunday = 7; the last position wraps past 7
    # when the partial week crosses a Sunday.
    first_position = Weekday(first.weekday()).iso_position
    last_position = Weekday(last.weekday()).iso_position
    if last_position < first_position:
        last_position += 7

    return sum(
        1
        for day in weekend
        if first_position <= day.iso_position <= last_position
        or first_position <= day.iso_position + 7 <= last_position
    )


def business_days_until(
    first: DateLike,
    last: DateLike,
    holidays: HolidaySet = None,
    weekend: Collection[int] = DEFAULT_WEEKEND,
) -> int:
    """
    Count the business days between two dates, both inclusive.

    Runs in constant time for the weekends plus one pass over the holidays.
    Every holiday entry inside the range is subtracted once, including
    duplicates and holidays falling on a weekend, and the result is not
    clamped at zero.

    Args:
        first: First day of the range.
        last: Last day of the range.
        holidays: Holiday dates. None counts weekends only.
        weekend: Weekdays that are never business days.

    Returns:
        Number of business days.

    Raises:
        InvalidRangeError: If first is after last.
    """
    first_day = as_date(first)
    last_day = as_date(last)
    if first_day > last_day:
        raise InvalidRangeError(first_day, last_day)

    weekend_days = _weekend_set(weekend)
    business_days = (last_day - first_day).days + 1
    full_week_count = business_days // 7

    if business_days > full_week_count * 7:
        business_days -= _weekend_days_in_remainder(first_day, last_day, weekend_days)

    business_days -= full_week_count * len(weekend_days)

    for holiday in holidays or ():
        if first_day <= as_date(holiday) <= last_day:
            business_days -= 1

    return business_days


class BusinessCalendar(BaseModel):
    """A holiday set and weekend policy bundled together."""

    model_config = ConfigDict(frozen=True)

    holidays: Tuple[date, ...] = ()
    weekend: FrozenSet[Weekday] = DEFAULT_WEEKEND

    @field_validator("holidays", mode="before")
    @classmethod
    def truncate_holidays(cls, v):
        return tuple(as_date(day) for day in v or ())

    @classmethod
    def national(
        cls,
        years: Iterable[int],
        extra: Iterable[DateLike] = (),
        weekend: Collection[int] = DEFAULT_WEEKEND,
        provider: Optional[HolidayProvider] = None,
    ) -> "BusinessCalendar":
        """Build a calendar from the national holidays of the given years."""
        provider = provider or HolidayProvider()
        dates = provider.get_holiday_dates(years) + [as_date(day) for day in extra]
        return cls(holidays=dates, weekend=frozenset(Weekday(day) for day in weekend))

    def is_working_day(self, day: DateLike) -> bool:
        return is_working_day(day, self.holidays, self.weekend)

    def add_work_days(self, start: DateLike, count: int) -> date:
        return add_work_days(start, count, self.holidays, self.weekend)

    def business_days_until(self, first: DateLike, last: DateLike) -> int:
        return business_days_until(first, last, self.holidays, self.weekend)


class BusinessDayCalculator:
    """Calculates business days using the national holidays plus custom ones."""

    def __init__(
        self,
        holiday_provider: HolidayProvider,
        extra_holidays: Iterable[DateLike] = (),
        weekend: Collection[int] = DEFAULT_WEEKEND,
        include_national_holidays: bool = True,
    ):
        """
        Initialize the business day calculator.

        Args:
            holiday_provider: Provider for the national holidays.
            extra_holidays: Custom non-business dates.
            weekend: Weekdays that are never business days.
            include_national_holidays: Whether national holidays are skipped.
        """
        self.holiday_provider = holiday_provider
        self.extra_holidays: List[date] = [as_date(day) for day in extra_holidays]
        self.weekend = _weekend_set(weekend)
        self.include_national_holidays = include_national_holidays

    @classmethod
    def from_config(
        cls, config: Config, holiday_provider: Optional[HolidayProvider] = None
    ) -> "BusinessDayCalculator":
        """Create a calculator from a loaded configuration."""
        return cls(
            holiday_provider or HolidayProvider(language=config.holiday_language),
            extra_holidays=config.extra_holidays,
            weekend=config.weekend_days,
            include_national_holidays=config.include_national_holidays,
        )

    def holiday_dates(
        self,
        years: Iterable[int],
        extra: Iterable[date] = (),
        include_national: Optional[bool] = None,
    ) -> List[date]:
        """Holiday dates of the given years, custom dates included."""
        if include_national is None:
            include_national = self.include_national_holidays
        dates = self.holiday_provider.get_holiday_dates(years) if include_national else []
        return dates + self.extra_holidays + [as_date(day) for day in extra]

    def calendar_for(self, start: DateLike, end: DateLike) -> BusinessCalendar:
        """Calendar covering every year between start and end."""
        years = range(as_date(start).year, as_date(end).year + 1)
        return BusinessCalendar(holidays=self.holiday_dates(years), weekend=self.weekend)

    def check(self, day: DateLike) -> bool:
        """Whether the day is a business day."""
        current = as_date(day)
        return is_working_day(current, self.holiday_dates([current.year]), self.weekend)

    def step(self, start: DateLike, count: int) -> WorkDayStepResult:
        """
        Move a number of business days from a date.

        Args:
            start: Date to start from.
            count: Business days to move, negative to move backward.

        Returns:
            WorkDayStepResult with the reached date and the skipped days.
        """
        first = as_date(start)
        # Generous margin: even a six-day weekend leaves ~40 business days a year
        span = abs(count) // 40 + 1
        years = range(max(MINYEAR, first.year - span), min(MAXYEAR, first.year + span) + 1)
        holidays = self.holiday_dates(years)
        result_date = add_work_days(first, count, holidays, self.weekend)
        logger.debug(f"Stepped {count} business days from {first} to {result_date}")

        walked_from, walked_to = sorted((first, result_date))
        holiday_set = set(holidays)
        weekend_skipped = 0
        holidays_skipped = 0
        for day in each_day(walked_from, walked_to):
            if day == first:
                continue
            if day.weekday() in self.weekend:
                weekend_skipped += 1
            elif day in holiday_set:
                holidays_skipped += 1

        return WorkDayStepResult(
            start_date=first,
            days=count,
            result_date=result_date,
            start_is_working_day=is_working_day(first, holidays, self.weekend),
            skipped={"weekend_days": weekend_skipped, "holidays": holidays_skipped},
        )

    def calculate(self, request: BusinessDaysRequest) -> BusinessDaysResult:
        """
        Count business days for a request.

        Args:
            request: BusinessDaysRequest with the date range and holiday options.

        Returns:
            BusinessDaysResult with the counts and the holidays in the range.

        Raises:
            InvalidRangeError: If the start date is after the end date.
        """
        first = request.start_date
        last = request.end_date
        if first > last:
            raise InvalidRangeError(first, last)

        include_national = request.include_national_holidays
        if include_national is None:
            include_national = self.include_national_holidays

        years = range(first.year, last.year + 1)
        holidays = self.holiday_dates(years, request.extra_holidays, include_national)

        working_days = business_days_until(first, last, holidays, self.weekend)
        calendar_days = (last - first).days + 1
        weekend_days = calendar_days - business_days_until(first, last, None, self.weekend)

        entries = self._entries_in_range(first, last, request.extra_holidays, include_national)
        logger.debug(
            f"{first} - {last}: {calendar_days} days, {weekend_days} weekend, "
            f"{len(entries)} holidays, {working_days} working"
        )

        months = []
        if request.monthly_breakdown:
            months = self._monthly_breakdown(first, last, holidays)

        warnings = []
        outside = [year for year in years if not in_validity_window(year)]
        if outside and include_national:
            warnings.append(
                f"Easter-based holidays are approximate for years outside 1582-2299: {outside}"
            )
        on_weekend = [entry for entry in entries if entry.holiday_date.weekday() in self.weekend]
        if on_weekend:
            warnings.append(
                f"{len(on_weekend)} holiday(s) fall on a weekend day and are subtracted as well."
            )
        if working_days <= 0:
            warnings.append(f"Calculated working days is {working_days}; the value is not clamped.")

        return BusinessDaysResult(
            start_date=first,
            end_date=last,
            calendar_days=calendar_days,
            weekend_days=weekend_days,
            holidays_count=len(entries),
            working_days=working_days,
            holidays=entries,
            weekend=sorted(self.weekend),
            months=months,
            warnings=warnings,
        )

    def _entries_in_range(
        self, first: date, last: date, extra: Iterable[date], include_national: bool
    ) -> List[HolidayEntry]:
        entries: List[HolidayEntry] = []
        if include_national:
            entries.extend(self.holiday_provider.get_holidays_for_range(first, last))
        for day in self.extra_holidays + list(extra):
            if first <= day <= last:
                entries.append(
                    HolidayEntry(
                        holiday_date=day,
                        name="Feriado personalizado",
                        name_english="Custom holiday",
                        country="custom",
                    )
                )
        return sorted(entries, key=lambda entry: entry.holiday_date)

    def _monthly_breakdown(
        self, first: date, last: date, holidays: List[date]
    ) -> List[MonthSummary]:
        summaries = []
        for month_start in each_month(first.replace(day=1), last):
            month_end = month_start + relativedelta(day=31)
            period_start = max(first, month_start)
            period_end = min(last, month_end)
            summaries.append(
                MonthSummary(
                    year=month_start.year,
                    month=month_start.month,
                    first_day=period_start,
                    last_day=period_end,
                    working_days=business_days_until(
                        period_start, period_end, holidays, self.weekend
                    ),
                )
            )
        return summaries
