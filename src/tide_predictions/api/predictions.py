"""
Tide prediction operations for the NOAA CO-OPS data API.

Issues the datagetter request for a query and hands back the raw payload.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING

from ..models import PredictionQuery

if TYPE_CHECKING:
    import requests  # type: ignore


@dataclass(frozen=True)
class RawResponse:
    """Undecoded HTTP response."""

    status_code: int
    body: str
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class PredictionsAPI:
    """Prediction-related API operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger
    base_url: str

    def _make_request(
        self,
        method: str,
        raise_for_status: bool = True,
        **kwargs: Any
    ) -> "requests.Response":
        """Method provided by APIClient base class."""
        ...

    def get_predictions(self, query: PredictionQuery) -> RawResponse:
        """
        Fetch predictions for a query.

        Non-2xx responses are returned rather than raised so the caller can
        tell a service rejection from a transport failure.

        Args:
            query: Prediction query

        Returns:
            Raw status code and body

        Raises:
            requests.exceptions.RequestException: On DNS, connection or timeout failure
        """
        self.logger.info(
            f"Fetching {query.product} for station {query.station_id} "
            f"({query.start_date} to {query.end_date}, format={query.format})"
        )
        self.logger.debug(f"API URL: {query.to_url(self.base_url)}")

        response = self._make_request(
            "GET",
            params=query.to_params(),
            raise_for_status=False
        )
        response.encoding = response.encoding or "utf-8"

        self.logger.debug(f"Received HTTP {response.status_code}, {len(response.text)} characters")
        return RawResponse(
            status_code=response.status_code,
            body=response.text,
            content_type=response.headers.get("Content-Type")
        )
