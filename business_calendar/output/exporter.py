"""
Export functionality for business calendar results.
"""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from business_calendar.data.schemas import BusinessDaysResult, HolidayEntry

logger = logging.getLogger(__name__)


class ResultExporter:
    """Exports business-day results to various formats."""

    def __init__(
        self,
        output_directory: str = "results",
        timestamp_format: str = "%Y%m%d_%H%M%S",
    ):
        """
        Initialize the result exporter.

        Args:
            output_directory: Directory for output files.
            timestamp_format: Format string for timestamps in filenames.
        """
        self.output_directory = output_directory
        self.timestamp_format = timestamp_format

    def _resolve_path(self, prefix: str, extension: str, output_path: Optional[str]) -> Path:
        """Use the given path, or a timestamped file in the output directory."""
        if output_path:
            file_path = Path(output_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            return file_path

        output_dir = Path(self.output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime(self.timestamp_format)
        return output_dir / f"{prefix}_{timestamp}.{extension}"

    def export_json(
        self, result: BusinessDaysResult, output_path: Optional[str] = None
    ) -> str:
        """
        Export result to JSON file.

        Args:
            result: BusinessDaysResult to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path("business_days", "json", output_path)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self._result_to_dict(result), f, indent=2, ensure_ascii=False)

        logger.debug(f"Exported JSON result to {file_path}")
        return str(file_path)

    def export_csv(
        self, result: BusinessDaysResult, output_path: Optional[str] = None
    ) -> str:
        """
        Export result to CSV file.

        Args:
            result: BusinessDaysResult to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path("business_days", "csv", output_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([
                "Start Date",
                "End Date",
                "Calendar Days",
                "Weekend Days",
                "Holidays Count",
                "Working Days",
            ])
            writer.writerow([
                result.start_date.isoformat(),
                result.end_date.isoformat(),
                result.calendar_days,
                result.weekend_days,
                result.holidays_count,
                result.working_days,
            ])

        logger.debug(f"Exported CSV result to {file_path}")
        return str(file_path)

    def export_holidays_csv(
        self, holidays: List[HolidayEntry], output_path: Optional[str] = None
    ) -> str:
        """
        Export holidays list to CSV file.

        Args:
            holidays: List of holidays to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path("holidays", "csv", output_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Date", "Name", "Name (English)", "Country", "Kind"])
            for holiday in holidays:
                writer.writerow([
                    holiday.holiday_date.isoformat(),
                    holiday.name,
                    holiday.name_english or "",
                    holiday.country,
                    holiday.kind,
                ])

        return str(file_path)

    def export_both(self, result: BusinessDaysResult) -> Tuple[str, str]:
        """
        Export result to both JSON and CSV.

        Args:
            result: BusinessDaysResult to export.

        Returns:
            Tuple of (json_path, csv_path).
        """
        return self.export_json(result), self.export_csv(result)

    def _result_to_dict(self, result: BusinessDaysResult) -> dict:
        """Convert BusinessDaysResult to a JSON-serializable dictionary."""
        return {
            "start_date": result.start_date.isoformat(),
            "end_date": result.end_date.isoformat(),
            "calculation": {
                "calendar_days": result.calendar_days,
                "weekend_days": result.weekend_days,
                "holidays_count": result.holidays_count,
                "working_days": result.working_days,
                "weekend": [int(day) for day in result.weekend],
            },
            "months": [
                {
                    "year": month.year,
                    "month": month.month,
                    "working_days": month.working_days,
                }
                for month in result.months
            ],
            "holidays": [
                {
                    "date": h.holiday_date.isoformat(),
                    "name": h.name,
                    "name_english": h.name_english,
                    "country": h.country,
                }
                for h in result.holidays
            ],
            "metadata": {
                "calculation_timestamp": result.calculation_timestamp.isoformat(),
                "warnings": result.warnings,
            },
        }
