"""
Business Calendar - Brazilian national holidays and business-day arithmetic.
"""

from business_calendar.core import (
    BusinessCalendar,
    InvalidRangeError,
    add_work_days,
    business_days_until,
    easter_sunday,
    holidays_for_year,
    is_working_day,
)

__version__ = "0.1.0"

__all__ = [
    "BusinessCalendar",
    "InvalidRangeError",
    "add_work_days",
    "business_days_until",
    "easter_sunday",
    "holidays_for_year",
    "is_working_day",
]
