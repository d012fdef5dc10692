"""
Configuration loading for the business calendar.
"""

from business_calendar.config.manager import ConfigManager

__all__ = ["ConfigManager"]
