"""
Core business logic for the business calendar.
"""

from business_calendar.core.calculator import (
    BusinessCalendar,
    BusinessDayCalculator,
    InvalidRangeError,
    add_work_days,
    business_days_until,
    is_weekend_day,
    is_working_day,
)
from business_calendar.core.easter import easter_sunday
from business_calendar.core.holiday_provider import (
    HolidayProvider,
    holiday_entries_for_year,
    holidays_for_year,
)
from business_calendar.core.ranges import each_day, each_hour, each_month, next_weekday

__all__ = [
    "BusinessCalendar",
    "BusinessDayCalculator",
    "HolidayProvider",
    "InvalidRangeError",
    "add_work_days",
    "business_days_until",
    "each_day",
    "each_hour",
    "each_month",
    "easter_sunday",
    "holiday_entries_for_year",
    "holidays_for_year",
    "is_weekend_day",
    "is_working_day",
    "next_weekday",
]
