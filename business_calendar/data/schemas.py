"""
Data models for the business calendar using Pydantic.
"""

from datetime import date, datetime
from enum import IntEnum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Weekday(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def iso_position(self) -> int:
        """Position in the week with Monday = 1 and Sunday = 7."""
        return self.value + 1

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Parse a weekday from its name, a 3-letter abbreviation or a number (0-6)."""
        text = value.strip().upper()
        if text.isdigit():
            return cls(int(text))
        for weekday in cls:
            if weekday.name == text or weekday.name[:3] == text:
                return weekday
        raise ValueError(f"Invalid weekday: {value}")


DEFAULT_WEEKEND = frozenset({Weekday.SATURDAY, Weekday.SUNDAY})


class HolidayEntry(BaseModel):
    """A single public holiday."""

    model_config = ConfigDict(frozen=True)

    holiday_date: date = Field(..., description="Date of the holiday")
    name: str = Field(..., description="Name of the holiday in Portuguese")
    name_english: Optional[str] = Field(default=None, description="Name in English")
    country: str = Field(default="BR", description="Jurisdiction the holiday belongs to")
    kind: Literal["fixed", "easter"] = Field(
        default="fixed", description="Fixed date or relative to Easter Sunday"
    )

    def label(self, language: str = "pt") -> str:
        """Return the holiday name in the requested language."""
        if language == "en" and self.name_english:
            return self.name_english
        return self.name


class BusinessDaysRequest(BaseModel):
    """Request model for counting business days in a period."""

    start_date: date = Field(..., description="First day of the period (inclusive)")
    end_date: date = Field(..., description="Last day of the period (inclusive)")
    include_national_holidays: Optional[bool] = Field(
        default=None,
        description="Whether the Brazilian national holidays are excluded (default: from the calculator)",
    )
    extra_holidays: List[date] = Field(
        default_factory=list, description="Additional non-business dates"
    )
    monthly_breakdown: bool = Field(
        default=False, description="Whether to report working days per month"
    )


class MonthSummary(BaseModel):
    """Working days of a single month within a period."""

    year: int
    month: int
    first_day: date
    last_day: date
    working_days: int


class BusinessDaysResult(BaseModel):
    """Complete result of a business-day count."""

    start_date: date = Field(..., description="First day of the period")
    end_date: date = Field(..., description="Last day of the period")
    calendar_days: int = Field(..., ge=1, description="Total calendar days in range")
    weekend_days: int = Field(..., ge=0, description="Number of weekend days in range")
    holidays_count: int = Field(..., ge=0, description="Number of holiday entries in range")
    working_days: int = Field(..., description="Calculated working days (not clamped)")
    holidays: List[HolidayEntry] = Field(
        default_factory=list, description="Holidays falling in the range"
    )
    weekend: List[Weekday] = Field(
        default_factory=lambda: sorted(DEFAULT_WEEKEND), description="Weekend policy used"
    )
    months: List[MonthSummary] = Field(
        default_factory=list, description="Per-month breakdown, when requested"
    )
    calculation_timestamp: datetime = Field(
        default_factory=datetime.now, description="When the calculation was performed"
    )
    warnings: List[str] = Field(default_factory=list, description="Any warnings generated")


class WorkDayStepResult(BaseModel):
    """Result of stepping a number of business days from a date."""

    start_date: date
    days: int
    result_date: date
    start_is_working_day: bool
    skipped: Dict[str, int] = Field(
        default_factory=dict, description="Weekend days and holidays stepped over"
    )


class Config(BaseModel):
    """Configuration for the business calendar."""

    holiday_language: str = Field(default="pt", description="Language for holiday names")
    weekend_days: List[Weekday] = Field(
        default_factory=lambda: sorted(DEFAULT_WEEKEND),
        description="Days of the week that are never business days",
    )
    include_national_holidays: bool = Field(
        default=True, description="Exclude the Brazilian national holidays"
    )
    extra_holidays: List[date] = Field(
        default_factory=list, description="Custom holidays added to the national set"
    )
    output_format: str = Field(default="json", description="Default output format: json or csv")
    output_directory: str = Field(default="results", description="Directory for output files")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("holiday_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Only Portuguese and English names are available."""
        if v not in ("pt", "en"):
            raise ValueError("holiday_language must be 'pt' or 'en'")
        return v

    @field_validator("weekend_days")
    @classmethod
    def validate_weekend(cls, v: List[Weekday]) -> List[Weekday]:
        """A week needs at least one business day."""
        if len(set(v)) >= 7:
            raise ValueError("weekend_days cannot cover the whole week")
        return sorted(set(v))
