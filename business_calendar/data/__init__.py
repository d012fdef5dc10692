"""
Data models and schemas for the business calendar.
"""

from business_calendar.data.schemas import (
    DEFAULT_WEEKEND,
    BusinessDaysRequest,
    BusinessDaysResult,
    Config,
    HolidayEntry,
    MonthSummary,
    WorkDayStepResult,
    Weekday,
)

__all__ = [
    "DEFAULT_WEEKEND",
    "BusinessDaysRequest",
    "BusinessDaysResult",
    "Config",
    "HolidayEntry",
    "MonthSummary",
    "WorkDayStepResult",
    "Weekday",
]
