"""
MCP Server for the Business Calendar.

This module provides an MCP (Model Context Protocol) server that exposes
the business calendar functionality to Claude Desktop and other MCP clients.

Supports two transport modes:
- stdio: For local Claude Desktop integration
- sse: For HTTP-based integration (Docker, remote servers)
"""

import argparse
import logging
import os
from datetime import date
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from business_calendar.config.manager import ConfigManager
from business_calendar.core.calculator import BusinessDayCalculator
from business_calendar.core.easter import easter_sunday as compute_easter
from business_calendar.core.easter import in_validity_window
from business_calendar.core.holiday_provider import HolidayProvider
from business_calendar.data.schemas import BusinessDaysRequest

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
holiday_provider = HolidayProvider(language=config.holiday_language)
calculator = BusinessDayCalculator.from_config(config, holiday_provider)


def _parse_dates(values: Optional[List[str]]) -> List[date]:
    return [date.fromisoformat(value) for value in values or []]


def create_mcp_server(host: str = "127.0.0.1", port: int = 8000) -> FastMCP:
    """Create and configure the MCP server with tools."""
    mcp = FastMCP("Business Calendar", host=host, port=port)

    @mcp.tool()
    def business_days_until(
        start_date: str,
        end_date: str,
        include_national_holidays: Optional[bool] = None,
        extra_holidays: Optional[List[str]] = None,
    ) -> dict:
        """
        Count the business days between two dates (both inclusive) in Brazil.

        Weekends and the Brazilian national holidays (including Carnival,
        Good Friday and Corpus Christi) are excluded.

        Args:
            start_date: Start date in format YYYY-MM-DD (e.g., "2017-01-01")
            end_date: End date in format YYYY-MM-DD (e.g., "2017-01-31")
            include_national_holidays: Exclude national holidays (default: server configuration)
            extra_holidays: Additional holiday dates in format YYYY-MM-DD

        Returns:
            Dictionary with working_days, calendar_days, weekend_days,
            holidays_count, the holidays in the period and any warnings.
        """
        try:
            request = BusinessDaysRequest(
                start_date=date.fromisoformat(start_date),
                end_date=date.fromisoformat(end_date),
                include_national_holidays=include_national_holidays,
                extra_holidays=_parse_dates(extra_holidays),
            )
            result = calculator.calculate(request)
        except ValueError as e:
            return {"error": str(e)}

        return {
            "working_days": result.working_days,
            "calendar_days": result.calendar_days,
            "weekend_days": result.weekend_days,
            "holidays_count": result.holidays_count,
            "holidays": [
                {"date": h.holiday_date.isoformat(), "name": holiday_provider.name_of(h)}
                for h in result.holidays
            ],
            "start_date": result.start_date.isoformat(),
            "end_date": result.end_date.isoformat(),
            "warnings": result.warnings,
        }

    @mcp.tool()
    def add_work_days(start_date: str, days: int) -> dict:
        """
        Add (or subtract, when negative) business days to a date.

        The start date itself is not counted. Adding 0 returns the start date.

        Args:
            start_date: Date in format YYYY-MM-DD (e.g., "2017-04-26")
            days: Number of business days to move

        Returns:
            Dictionary with result_date and the weekend days and holidays skipped.

        Example:
            >>> add_work_days("2017-04-26", 3)  # May 1 is Labour Day
            {"result_date": "2017-05-02", ...}
        """
        try:
            result = calculator.step(date.fromisoformat(start_date), days)
        except ValueError as e:
            return {"error": str(e)}

        return {
            "start_date": result.start_date.isoformat(),
            "days": result.days,
            "result_date": result.result_date.isoformat(),
            "skipped": result.skipped,
        }

    @mcp.tool()
    def is_working_day(day: str) -> dict:
        """
        Check whether a date is a business day in Brazil.

        Args:
            day: Date in format YYYY-MM-DD

        Returns:
            Dictionary with is_working_day and the holiday name, if any.
        """
        try:
            current = date.fromisoformat(day)
        except ValueError as e:
            return {"error": f"Invalid date format. Use YYYY-MM-DD. Details: {str(e)}"}

        matches = holiday_provider.get_holidays_for_range(current, current)
        return {
            "date": current.isoformat(),
            "is_working_day": calculator.check(current),
            "holiday": holiday_provider.name_of(matches[0]) if matches else None,
        }

    @mcp.tool()
    def get_holidays(year: int) -> dict:
        """
        Get the Brazilian national holidays of a year.

        Args:
            year: Year to get holidays for (e.g., 2026)

        Returns:
            Dictionary with the year and its twelve holidays.
        """
        if year < 1 or year > 9999:
            return {"error": "Year must be between 1 and 9999"}

        holidays = holiday_provider.get_holidays_for_year(year)
        return {
            "year": year,
            "holiday_count": len(holidays),
            "holidays": [
                {"date": h.holiday_date.isoformat(), "name": holiday_provider.name_of(h)}
                for h in holidays
            ],
        }

    @mcp.tool()
    def easter_sunday(year: int) -> dict:
        """
        Get the date of Easter Sunday.

        Args:
            year: Year (exact for 1582-2299)

        Returns:
            Dictionary with the date and whether it is approximate.
        """
        if year < 1 or year > 9999:
            return {"error": "Year must be between 1 and 9999"}

        return {
            "year": year,
            "easter_sunday": compute_easter(year).isoformat(),
            "approximate": not in_validity_window(year),
        }

    return mcp


def main():
    """Run the MCP server with configurable transport.

    Transport can be set via:
    - Command line: --transport sse --port 8080
    - Environment: MCP_TRANSPORT=sse MCP_PORT=8080 MCP_HOST=0.0.0.0
    """
    parser = argparse.ArgumentParser(description="Business Calendar MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=os.environ.get("MCP_TRANSPORT", "stdio"),
        help="Transport mode: stdio (default) or sse for HTTP",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", os.environ.get("FASTMCP_HOST", "0.0.0.0")),
        help="Host to bind to (SSE mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", os.environ.get("FASTMCP_PORT", "8080"))),
        help="Port to listen on (SSE mode only, default: 8080)",
    )

    args = parser.parse_args()

    mcp = create_mcp_server(host=args.host, port=args.port)
    logger.info(f"Starting Business Calendar MCP server ({args.transport})")

    if args.transport == "sse":
        mcp.run(transport="sse")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
