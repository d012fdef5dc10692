"""
FastAPI REST API for the business calendar.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from business_calendar.config.manager import ConfigManager
from business_calendar.core.calculator import BusinessDayCalculator, InvalidRangeError
from business_calendar.core.easter import easter_sunday, in_validity_window
from business_calendar.core.holiday_provider import HolidayProvider
from business_calendar.data.schemas import (
    BusinessDaysRequest,
    BusinessDaysResult,
    WorkDayStepResult,
)

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
holiday_provider = HolidayProvider(language=config.holiday_language)
calculator = BusinessDayCalculator.from_config(config, holiday_provider)


# API Models
class StepRequest(BaseModel):
    """Request model for adding business days to a date."""

    start_date: date = Field(..., description="Date to start from")
    days: int = Field(..., description="Business days to add, negative to subtract")


class EasterResponse(BaseModel):
    """Response model for the Easter date of a year."""

    year: int
    easter_sunday: date
    approximate: bool


class HolidayResponse(BaseModel):
    """Response model for a single holiday."""

    date: date
    name: str
    kind: str


class WorkdayResponse(BaseModel):
    """Response model for a business-day check."""

    date: date
    is_working_day: bool
    holiday: Optional[str] = None


app = FastAPI(
    title="Business Calendar API",
    description="Brazilian national holidays and business-day arithmetic",
    version="0.1.0",
)


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Business Calendar API",
        "version": "0.1.0",
        "endpoints": {
            "POST /calculate": "Count business days in a period",
            "POST /add-workdays": "Add business days to a date",
            "GET /workday/{day}": "Check whether a date is a business day",
            "GET /holidays/{year}": "National holidays of a year",
            "GET /easter/{year}": "Easter Sunday of a year",
        },
    }


@app.post("/calculate", response_model=BusinessDaysResult)
async def calculate_business_days(request: BusinessDaysRequest):
    """
    Count business days between two dates, both inclusive.

    National holidays follow the server configuration unless the request
    sets include_national_holidays; extra_holidays adds custom dates.
    """
    try:
        return calculator.calculate(request)
    except InvalidRangeError as e:
        logger.debug(f"Rejected range: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/add-workdays", response_model=WorkDayStepResult)
async def add_workdays(request: StepRequest):
    """Move a number of business days forward or backward from a date."""
    try:
        return calculator.step(request.start_date, request.days)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/workday/{day}", response_model=WorkdayResponse)
async def check_workday(day: date):
    """Check whether a date is a business day."""
    working = calculator.check(day)
    holiday = None
    if not working:
        matches = holiday_provider.get_holidays_for_range(day, day)
        if matches:
            holiday = holiday_provider.name_of(matches[0])
    return WorkdayResponse(date=day, is_working_day=working, holiday=holiday)


@app.get("/holidays/{year}", response_model=List[HolidayResponse])
async def get_holidays(year: int):
    """
    Get the national holidays of a year.

    Args:
        year: Year (e.g., 2017, 2026)
    """
    if year < 1 or year > 9999:
        raise HTTPException(status_code=400, detail="Year must be between 1 and 9999")

    return [
        HolidayResponse(
            date=h.holiday_date,
            name=holiday_provider.name_of(h),
            kind=h.kind,
        )
        for h in holiday_provider.get_holidays_for_year(year)
    ]


@app.get("/easter/{year}", response_model=EasterResponse)
async def get_easter(year: int):
    """Get the date of Easter Sunday."""
    if year < 1 or year > 9999:
        raise HTTPException(status_code=400, detail="Year must be between 1 and 9999")

    return EasterResponse(
        year=year,
        easter_sunday=easter_sunday(year),
        approximate=not in_validity_window(year),
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}
