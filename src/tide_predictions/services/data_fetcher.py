"""
Data fetching service for tide predictions.

Runs query -> transport -> parser and applies the mock fallback policy.
"""

import logging
from typing import Optional, TYPE_CHECKING

import requests  # type: ignore

from ..models import FetchResult, FetchStatus, PredictionQuery
from ..processing import (
    PayloadParser,
    PayloadFormatError,
    EmptyPayloadError,
    ServiceError,
)
from .mock_generator import MockDataGenerator

if TYPE_CHECKING:
    from ..api import NOAAPredictionsAPI, RawResponse


class DataFetcher:
    """Fetch tide predictions, falling back to synthetic data when allowed."""

    def __init__(
        self,
        api_client: "NOAAPredictionsAPI",
        parser: Optional[PayloadParser] = None,
        mock_generator: Optional[MockDataGenerator] = None,
        fallback_on_transport_error: bool = True,
        fallback_on_empty_payload: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize data fetcher.

        Args:
            api_client: API client instance
            parser: Payload parser (a default one is created if omitted)
            mock_generator: Synthetic data source used for fallback
            fallback_on_transport_error: Use mock data when the request or decoding fails
            fallback_on_empty_payload: Use mock data when the response has no usable rows
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or PayloadParser(self.logger)
        self.mock_generator = mock_generator or MockDataGenerator(logger=self.logger)
        self.fallback_on_transport_error = fallback_on_transport_error
        self.fallback_on_empty_payload = fallback_on_empty_payload

        # Last raw response, kept for --save-raw
        self.last_response: Optional["RawResponse"] = None

    def fetch(self, query: PredictionQuery, use_mock: bool = False) -> FetchResult:
        """
        Fetch and parse predictions for a query.

        Service rejections (an error payload or a 4xx status) never fall back
        to mock data, so a bad station id is reported as such.

        Args:
            query: Prediction query
            use_mock: Skip the network and return synthetic data

        Returns:
            FetchResult describing the outcome
        """
        self.last_response = None

        if use_mock:
            self.logger.info("Mock data requested, skipping network call")
            return self._mock_result(query, reason="mock data requested")

        try:
            raw = self.api_client.get_predictions(query)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Error fetching data: {e}")
            return self._transport_failure(query, str(e))

        self.last_response = raw

        if raw.status_code >= 500:
            message = f"API request failed with status code: {raw.status_code}"
            self.logger.error(message)
            return self._transport_failure(query, message, http_status=raw.status_code)

        if not raw.ok:
            message = f"API request failed with status code: {raw.status_code}"
            self.logger.error(message)
            self.logger.debug(f"Response: {raw.body[:500]}")
            return FetchResult(
                status=FetchStatus.FAILED,
                error=message,
                http_status=raw.status_code
            )

        try:
            observation_set = self.parser.parse(raw.body, query.format)
        except ServiceError as e:
            self.logger.error(str(e))
            return FetchResult(
                status=FetchStatus.FAILED,
                error=str(e),
                http_status=raw.status_code
            )
        except EmptyPayloadError as e:
            self.logger.warning(str(e))
            if self.fallback_on_empty_payload:
                return self._mock_result(query, reason=str(e), http_status=raw.status_code)
            return FetchResult(
                status=FetchStatus.EMPTY,
                error=str(e),
                http_status=raw.status_code
            )
        except PayloadFormatError as e:
            self.logger.error(f"Could not decode response: {e}")
            return self._transport_failure(query, str(e), http_status=raw.status_code)

        self.logger.info(f"Successfully retrieved {len(observation_set)} tide predictions")
        self.logger.info(f"Data covers: {observation_set.start} to {observation_set.end}")
        return FetchResult(
            status=FetchStatus.SUCCESS,
            observation_set=observation_set,
            http_status=raw.status_code
        )

    def _transport_failure(
        self,
        query: PredictionQuery,
        message: str,
        http_status: Optional[int] = None
    ) -> FetchResult:
        """Fall back to mock data or report the failure, per policy."""
        if self.fallback_on_transport_error:
            self.logger.warning("Falling back to mock data")
            return self._mock_result(query, reason=message, http_status=http_status)

        return FetchResult(
            status=FetchStatus.FAILED,
            error=message,
            http_status=http_status
        )

    def _mock_result(
        self,
        query: PredictionQuery,
        reason: str,
        http_status: Optional[int] = None
    ) -> FetchResult:
        return FetchResult(
            status=FetchStatus.MOCK,
            observation_set=self.mock_generator.generate(query),
            error=reason,
            http_status=http_status
        )
