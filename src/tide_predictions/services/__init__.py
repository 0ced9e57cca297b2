"""
Business logic services for tide prediction reporting.

Services orchestrate API operations and provide higher-level functionality.
"""

from .data_fetcher import DataFetcher
from .mock_generator import MockDataGenerator

__all__ = [
    "DataFetcher",
    "MockDataGenerator",
]
