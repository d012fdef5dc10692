"""
Output formatting and export functionality.
"""

from business_calendar.output.formatter import ConsoleFormatter
from business_calendar.output.exporter import ResultExporter

__all__ = ["ConsoleFormatter", "ResultExporter"]
