"""
Configuration module for tide prediction reporting.

Loads configuration from built-in defaults, an optional JSON file and
environment variables.
"""

import copy
import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants
from .date_utils import DateUtils


DEFAULT_CONFIG: Dict[str, Any] = {
    "api": {
        "base_url": constants.DEFAULT_BASE_URL,
        "timeout": constants.DEFAULT_TIMEOUT,
        "max_retries": constants.DEFAULT_MAX_RETRIES,
    },
    "station": {
        "id": constants.DEFAULT_STATION_ID,
    },
    "query": {
        "lookback_days": constants.DEFAULT_LOOKBACK_DAYS,
        "format": constants.FORMAT_JSON,
    },
    "processing": {
        "timezone": constants.DEFAULT_TIMEZONE,
    },
    "report": {
        "sample_stride": constants.DEFAULT_SAMPLE_STRIDE,
        "show_std_dev": True,
    },
    "fallback": {
        "on_transport_error": True,
        "on_empty_payload": False,
        "seed": constants.MOCK_DEFAULT_SEED,
    },
    "plot": {
        "file": constants.DEFAULT_PLOT_FILE,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base (in place) and return base."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or runs on built-in defaults only
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        if not self.config_file:
            return

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {self.config_file}")

        _deep_merge(self.config, loaded)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("TIDE_API_BASE_URL"):
            self.config["api"]["base_url"] = os.getenv("TIDE_API_BASE_URL")

        if os.getenv("TIDE_STATION_ID"):
            self.config["station"]["id"] = os.getenv("TIDE_STATION_ID")

        if os.getenv("TIDE_TIMEZONE"):
            self.config["processing"]["timezone"] = os.getenv("TIDE_TIMEZONE")

        if os.getenv("LOG_LEVEL"):
            self.config.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("LOG_FILE"):
            self.config.setdefault("logging", {})["file"] = os.getenv("LOG_FILE")

    def _validate_config(self) -> None:
        """Validate value types and ranges."""
        errors = []

        if not self.api_base_url:
            errors.append("api.base_url must not be empty")

        if not isinstance(self.api_timeout, (int, float)) or self.api_timeout <= 0:
            errors.append(f"api.timeout must be a positive number, got {self.api_timeout!r}")

        if not isinstance(self.api_max_retries, int) or self.api_max_retries < 0:
            errors.append(f"api.max_retries must be a non-negative integer, got {self.api_max_retries!r}")

        if not str(self.station_id).strip():
            errors.append("station.id must not be empty")

        if not isinstance(self.lookback_days, int) or self.lookback_days < 1:
            errors.append(f"query.lookback_days must be a positive integer, got {self.lookback_days!r}")

        if self.response_format not in constants.SUPPORTED_FORMATS:
            errors.append(
                f"query.format must be one of {', '.join(constants.SUPPORTED_FORMATS)}, "
                f"got {self.response_format!r}"
            )

        try:
            DateUtils.parse_timezone(self.timezone)
        except ValueError as e:
            errors.append(f"processing.timezone: {e}")

        if not isinstance(self.sample_stride, int) or self.sample_stride < 1:
            errors.append(f"report.sample_stride must be a positive integer, got {self.sample_stride!r}")

        if errors:
            raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by dot-notation key and revalidate.

        Used to apply command-line overrides on top of file and environment values.
        """
        keys = key.split(".")
        target = self.config
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value
        self._validate_config()

    @property
    def api_base_url(self) -> str:
        """Get API base URL."""
        return self.get("api.base_url", constants.DEFAULT_BASE_URL)

    @property
    def api_timeout(self) -> float:
        """Get API timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", constants.DEFAULT_MAX_RETRIES)

    @property
    def station_id(self) -> str:
        """Get the NOAA station id."""
        return str(self.get("station.id", constants.DEFAULT_STATION_ID))

    @property
    def lookback_days(self) -> int:
        """Get the number of days to look back from the end date."""
        return self.get("query.lookback_days", constants.DEFAULT_LOOKBACK_DAYS)

    @property
    def response_format(self) -> str:
        """Get the response format requested from the API."""
        return self.get("query.format", constants.FORMAT_JSON)

    @property
    def timezone(self) -> str:
        """Get processing timezone."""
        return self.get("processing.timezone", constants.DEFAULT_TIMEZONE)

    @property
    def sample_stride(self) -> int:
        """Get the per-day sampling stride for the report."""
        return self.get("report.sample_stride", constants.DEFAULT_SAMPLE_STRIDE)

    @property
    def show_std_dev(self) -> bool:
        """Check if the summary includes the standard deviation."""
        return bool(self.get("report.show_std_dev", True))

    @property
    def fallback_on_transport_error(self) -> bool:
        """Check if mock data replaces a failed network call."""
        return bool(self.get("fallback.on_transport_error", True))

    @property
    def fallback_on_empty_payload(self) -> bool:
        """Check if mock data replaces a response without usable rows."""
        return bool(self.get("fallback.on_empty_payload", False))

    @property
    def mock_seed(self) -> Optional[int]:
        """Get the random seed for synthetic data."""
        return self.get("fallback.seed")

    @property
    def plot_file(self) -> str:
        """Get the default plot output path."""
        return self.get("plot.file", constants.DEFAULT_PLOT_FILE)

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, station={self.station_id})"
