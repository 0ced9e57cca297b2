"""
API layer for the NOAA CO-OPS data API.

Provides the HTTP client and the prediction request builder.
"""

import logging
from typing import Optional

from ..core import constants
from .client import APIClient
from .predictions import PredictionsAPI, RawResponse
from .query import build_query


class NOAAPredictionsAPI(APIClient, PredictionsAPI):
    """
    Unified API client for NOAA tide predictions.

    Combines session handling with the prediction operations.
    """

    def __init__(
        self,
        base_url: str = constants.DEFAULT_BASE_URL,
        timeout: float = constants.DEFAULT_TIMEOUT,
        max_retries: int = constants.DEFAULT_MAX_RETRIES,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            logger: Logger instance
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            logger=logger
        )


__all__ = [
    "APIClient",
    "PredictionsAPI",
    "RawResponse",
    "NOAAPredictionsAPI",
    "build_query",
]
