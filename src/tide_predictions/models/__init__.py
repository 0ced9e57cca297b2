"""
Data models for tide prediction reporting.

Contains DTOs for queries, observations and fetch results.
"""

from .observation import Observation, StationMetadata, ObservationSet
from .query import PredictionQuery
from .result import FetchStatus, FetchResult

__all__ = [
    "Observation",
    "StationMetadata",
    "ObservationSet",
    "PredictionQuery",
    "FetchStatus",
    "FetchResult",
]
