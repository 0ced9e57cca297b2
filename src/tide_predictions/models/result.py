"""
Fetch outcome model.

Lets callers branch on success, empty result and failure without parsing log text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .observation import ObservationSet


class FetchStatus(Enum):
    """Outcome of a prediction fetch."""

    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"
    MOCK = "mock"


@dataclass(frozen=True)
class FetchResult:
    """Result of fetching predictions, with the data when there is any."""

    status: FetchStatus
    observation_set: Optional[ObservationSet] = None
    error: Optional[str] = None
    http_status: Optional[int] = None

    @property
    def has_data(self) -> bool:
        return self.observation_set is not None and not self.observation_set.is_empty

    @property
    def is_synthetic(self) -> bool:
        return self.status is FetchStatus.MOCK
