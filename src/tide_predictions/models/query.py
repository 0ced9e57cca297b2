"""
Prediction query model.

Describes one request to the NOAA CO-OPS datagetter endpoint.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional
from urllib.parse import urlencode

from ..core import constants
from ..core.date_utils import DateUtils


@dataclass(frozen=True)
class PredictionQuery:
    """Immutable request descriptor for hourly tide predictions."""

    station_id: str
    start_date: date
    end_date: date
    product: str = constants.PRODUCT_PREDICTIONS
    datum: str = constants.DATUM_MLLW
    units: str = constants.UNITS_ENGLISH
    time_zone: str = constants.TIME_ZONE_LOCAL
    interval: str = constants.INTERVAL_HOURLY
    format: str = constants.FORMAT_JSON
    application: str = constants.DEFAULT_APPLICATION

    @property
    def lookback_days(self) -> int:
        return (self.end_date - self.start_date).days

    def to_params(self) -> Dict[str, str]:
        """
        Render the query as datagetter parameters.

        Returns:
            Ordered mapping of query parameter names to values
        """
        return {
            "product": self.product,
            "application": self.application,
            "begin_date": DateUtils.format_api_date(self.start_date),
            "end_date": DateUtils.format_api_date(self.end_date),
            "datum": self.datum,
            "station": self.station_id,
            "time_zone": self.time_zone,
            "units": self.units,
            "interval": self.interval,
            "format": self.format,
        }

    def to_url(self, base_url: str = constants.DEFAULT_BASE_URL) -> str:
        """Full GET URL for logging and manual inspection."""
        return f"{base_url}?{urlencode(self.to_params())}"

    @classmethod
    def from_params(cls, params: Dict[str, str]) -> "PredictionQuery":
        """
        Rebuild a query from datagetter parameters.

        Raises:
            KeyError: If station or date parameters are missing
            ValueError: If dates are malformed
        """
        optional: Dict[str, Optional[str]] = {
            "product": params.get("product"),
            "datum": params.get("datum"),
            "units": params.get("units"),
            "time_zone": params.get("time_zone"),
            "interval": params.get("interval"),
            "format": params.get("format"),
            "application": params.get("application"),
        }
        return cls(
            station_id=params["station"],
            start_date=DateUtils.parse_api_date(params["begin_date"]),
            end_date=DateUtils.parse_api_date(params["end_date"]),
            **{key: value for key, value in optional.items() if value is not None}
        )
