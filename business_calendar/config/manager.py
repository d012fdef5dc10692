"""
Configuration manager for loading and validating settings.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from business_calendar.data.schemas import Config, Weekday

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading from YAML files and environment variables."""

    ENV_PREFIX = "BUSINESS_CALENDAR_"

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config manager.

        Args:
            config_path: Optional path to config file. If not provided, uses default.
        """
        self.config_path = config_path or self._get_default_config_path()

    def _get_default_config_path(self) -> str:
        """Get the default configuration file path."""
        return str(Path(__file__).parent / "settings.yaml")

    def load_config(self) -> Config:
        """
        Load configuration from YAML file with environment variable overrides.

        Returns:
            Config: Validated configuration object.

        Raises:
            ValueError: If config is invalid.
        """
        config_dict = self._load_yaml()
        config_dict = self._apply_env_overrides(config_dict)

        try:
            return Config(**config_dict)
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}")

    def _load_yaml(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return {}

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML config file: {e}")

        logger.debug(f"Loaded config from: {config_path}")
        return self._flatten_config(config) if config else {}

    def _flatten_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten nested YAML config to match Config model fields.

        Args:
            config: Nested configuration dictionary.

        Returns:
            Flattened configuration dictionary.
        """
        result = {}

        if "calendar" in config:
            cal = config["calendar"] or {}
            if "weekend_days" in cal:
                result["weekend_days"] = self._parse_weekdays(cal["weekend_days"])
            if "include_national_holidays" in cal:
                result["include_national_holidays"] = cal["include_national_holidays"]
            if cal.get("extra_holidays"):
                result["extra_holidays"] = cal["extra_holidays"]

        if "holidays" in config:
            hol = config["holidays"] or {}
            if "language" in hol:
                result["holiday_language"] = hol["language"]

        if "output" in config:
            out = config["output"] or {}
            if "format" in out:
                result["output_format"] = out["format"]
            if "directory" in out:
                result["output_directory"] = out["directory"]

        if "api" in config:
            api = config["api"] or {}
            if "host" in api:
                result["api_host"] = api["host"]
            if "port" in api:
                result["api_port"] = api["port"]

        if "logging" in config:
            log = config["logging"] or {}
            if "level" in log:
                result["log_level"] = log["level"]

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables:
        - BUSINESS_CALENDAR_HOLIDAY_LANGUAGE -> holiday_language
        - BUSINESS_CALENDAR_WEEKEND_DAYS -> weekend_days (comma separated, e.g. "SAT,SUN")
        - BUSINESS_CALENDAR_INCLUDE_NATIONAL_HOLIDAYS -> include_national_holidays
        - BUSINESS_CALENDAR_EXTRA_HOLIDAYS -> extra_holidays (comma separated ISO dates)
        - BUSINESS_CALENDAR_OUTPUT_FORMAT -> output_format
        - BUSINESS_CALENDAR_OUTPUT_DIRECTORY -> output_directory
        - BUSINESS_CALENDAR_API_HOST -> api_host
        - BUSINESS_CALENDAR_API_PORT -> api_port
        - BUSINESS_CALENDAR_LOG_LEVEL -> log_level

        Args:
            config_dict: Configuration dictionary from YAML.

        Returns:
            Updated configuration dictionary.
        """
        env_mappings = {
            "HOLIDAY_LANGUAGE": "holiday_language",
            "WEEKEND_DAYS": ("weekend_days", self._parse_weekdays),
            "INCLUDE_NATIONAL_HOLIDAYS": ("include_national_holidays", self._parse_bool),
            "EXTRA_HOLIDAYS": ("extra_holidays", self._parse_dates),
            "OUTPUT_FORMAT": "output_format",
            "OUTPUT_DIRECTORY": "output_directory",
            "API_HOST": "api_host",
            "API_PORT": ("api_port", int),
            "LOG_LEVEL": "log_level",
        }

        for suffix, mapping in env_mappings.items():
            env_value = os.environ.get(self.ENV_PREFIX + suffix)
            if env_value is None:
                continue
            if isinstance(mapping, tuple):
                config_key, type_converter = mapping
                try:
                    config_dict[config_key] = type_converter(env_value)
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {self.ENV_PREFIX}{suffix}: {env_value}")
            else:
                config_dict[mapping] = env_value

        return config_dict

    def _parse_bool(self, value: str) -> bool:
        """Parse a boolean from string."""
        return value.lower() in ("true", "1", "yes", "on")

    def _parse_weekdays(self, value: Any) -> List[Weekday]:
        """Parse weekdays from a comma separated string or a list of names/numbers."""
        items = value.split(",") if isinstance(value, str) else value
        return [Weekday.parse(str(item)) for item in items if str(item).strip()]

    def _parse_dates(self, value: str) -> List[date]:
        """Parse a comma separated list of ISO dates."""
        return [date.fromisoformat(item.strip()) for item in value.split(",") if item.strip()]

    def save_config(self, config: Config, output_path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration object to save.
            output_path: Optional output path. If not provided, uses default.
        """
        output_path = output_path or self.config_path

        config_dict = {
            "calendar": {
                "weekend_days": [day.name for day in config.weekend_days],
                "include_national_holidays": config.include_national_holidays,
                "extra_holidays": [day.isoformat() for day in config.extra_holidays],
            },
            "holidays": {
                "language": config.holiday_language,
            },
            "output": {
                "format": config.output_format,
                "directory": config.output_directory,
            },
            "api": {
                "host": config.api_host,
                "port": config.api_port,
            },
            "logging": {
                "level": config.log_level,
            },
        }

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
