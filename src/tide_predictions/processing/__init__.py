"""
Data processing module for tide prediction reporting.

Provides payload parsing, daily grouping and summary statistics.
"""

from .aggregator import DataAggregator, SummaryStatistics, EmptySeriesError, round_half_up
from .parser import (
    PayloadParser,
    PayloadError,
    PayloadFormatError,
    EmptyPayloadError,
    ServiceError,
    serialize_json,
    serialize_csv,
)


__all__ = [
    "DataAggregator",
    "SummaryStatistics",
    "EmptySeriesError",
    "round_half_up",
    "PayloadParser",
    "PayloadError",
    "PayloadFormatError",
    "EmptyPayloadError",
    "ServiceError",
    "serialize_json",
    "serialize_csv",
]
