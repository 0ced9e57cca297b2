"""
Query construction for prediction requests.
"""

from datetime import date
from typing import Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import PredictionQuery


def build_query(
    station_id: str = constants.DEFAULT_STATION_ID,
    end_date: Optional[date] = None,
    lookback_days: int = constants.DEFAULT_LOOKBACK_DAYS,
    response_format: str = constants.FORMAT_JSON,
    timezone_str: str = constants.DEFAULT_TIMEZONE
) -> PredictionQuery:
    """
    Build an hourly MLLW prediction query ending at end_date.

    Args:
        station_id: NOAA station id
        end_date: Last day of the window (defaults to today in timezone_str)
        lookback_days: Days before end_date at which the window starts
        response_format: "json" or "csv"
        timezone_str: Timezone used to resolve "today"

    Returns:
        PredictionQuery covering [end_date - lookback_days, end_date]

    Raises:
        ValueError: If the station id, window or format is invalid
    """
    station_id = str(station_id).strip()
    if not station_id:
        raise ValueError("Station id must not be empty")

    if response_format not in constants.SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported response format: {response_format!r} "
            f"(expected one of {', '.join(constants.SUPPORTED_FORMATS)})"
        )

    if end_date is None:
        end_date = DateUtils().today(timezone_str)

    start_date, end_date = DateUtils.lookback_range(end_date, lookback_days)

    return PredictionQuery(
        station_id=station_id,
        start_date=start_date,
        end_date=end_date,
        format=response_format
    )
