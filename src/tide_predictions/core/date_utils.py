"""
Date and timezone utilities.

Centralizes date parsing and "today" resolution with proper timezone handling.
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'America/Los_Angeles', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def today(
        self,
        timezone_str: str,
        reference_time: Optional[datetime] = None
    ) -> date:
        """
        Get the current calendar date in the specified timezone.

        Args:
            timezone_str: Timezone string
            reference_time: Reference time (defaults to now in UTC)

        Returns:
            Local calendar date
        """
        tz = self.parse_timezone(timezone_str)

        if reference_time is None:
            reference_time = datetime.now(pytz.UTC)
        elif reference_time.tzinfo is None:
            # Assume UTC if no timezone
            reference_time = pytz.UTC.localize(reference_time)

        local_time = reference_time.astimezone(tz)
        self.logger.debug(
            f"Reference time: {reference_time.isoformat()} -> "
            f"Local time: {local_time.isoformat()}"
        )
        return local_time.date()

    @staticmethod
    def parse_input_date(value: str) -> date:
        """
        Parse a user-supplied YYYY-MM-DD date.

        The value must match the pattern exactly and name a real calendar day.

        Raises:
            ValueError: If the value is malformed
        """
        if value is None or not re.match(constants.INPUT_DATE_PATTERN, value.strip()):
            raise ValueError(f"Invalid date format: {value!r}. Use YYYY-MM-DD")
        try:
            return datetime.strptime(value.strip(), constants.INPUT_DATE_FORMAT).date()
        except ValueError:
            raise ValueError(f"Invalid calendar date: {value!r}")

    @staticmethod
    def lookback_range(end_date: date, lookback_days: int) -> Tuple[date, date]:
        """
        Get the (start, end) date window ending at end_date.

        Args:
            end_date: Last day of the window
            lookback_days: Number of days to look back

        Returns:
            Tuple of (start_date, end_date)
        """
        if lookback_days < 0:
            raise ValueError(f"lookback_days must be >= 0, got {lookback_days}")
        return end_date - timedelta(days=lookback_days), end_date

    @staticmethod
    def format_api_date(day: date) -> str:
        """Format a date as YYYYMMDD for the API."""
        return day.strftime(constants.API_DATE_FORMAT)

    @staticmethod
    def parse_api_date(value: str) -> date:
        """Parse a YYYYMMDD API date."""
        return datetime.strptime(value, constants.API_DATE_FORMAT).date()
