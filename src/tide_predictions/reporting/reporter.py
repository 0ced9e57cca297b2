"""
Text report for tide predictions.

Prints the station header, per-day tables and summary statistics.
"""

import logging
import sys
from typing import Optional, TextIO

from ..core import constants
from ..models import ObservationSet
from ..processing import DataAggregator, SummaryStatistics, round_half_up

NO_DATA_MESSAGE = "No data to display."
SYNTHETIC_NOTICE = "Note: This is simulated data for demonstration purposes"


def format_height(height: float) -> str:
    """Height rounded half-up to 2 decimals, e.g. '6.26'."""
    # + 0.0 turns -0.0 into 0.0
    return f"{round_half_up(height, 2) + 0.0:.2f}"


class TideReporter:
    """Render an observation set as a plain-text report."""

    def __init__(
        self,
        aggregator: Optional[DataAggregator] = None,
        stream: Optional[TextIO] = None,
        show_std_dev: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            aggregator: Aggregator used for grouping and statistics
            stream: Output stream (defaults to stdout at write time)
            show_std_dev: Include the standard deviation in the summary
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.aggregator = aggregator or DataAggregator(self.logger)
        self.stream = stream
        self.show_std_dev = show_std_dev

    def _write(self, line: str = "") -> None:
        print(line, file=self.stream or sys.stdout)

    def report(self, observation_set: Optional[ObservationSet], stride: int = 1) -> Optional[SummaryStatistics]:
        """
        Print the full report.

        Args:
            observation_set: Observations to report (None is treated as empty)
            stride: Show every stride-th observation per day

        Returns:
            Summary statistics, or None when there was nothing to report
        """
        if observation_set is None or observation_set.is_empty:
            self._write(NO_DATA_MESSAGE)
            return None

        self.write_header(observation_set)
        self.write_days(observation_set, stride)
        summary = self.aggregator.summarize(observation_set)
        self.write_summary(summary)
        return summary

    def write_header(self, observation_set: ObservationSet) -> None:
        """Print station metadata and the synthetic-data notice when they apply."""
        metadata = observation_set.metadata
        if metadata is not None:
            latitude = "n/a" if metadata.latitude is None else metadata.latitude
            longitude = "n/a" if metadata.longitude is None else metadata.longitude
            self._write("=== NOAA Tide Predictions ===")
            self._write(f"Station: {metadata.name} ({metadata.id})")
            self._write(f"Latitude: {latitude} Longitude: {longitude}")
            self._write(f"Total predictions: {len(observation_set)}")
            self._write()

        if observation_set.synthetic:
            self._write(SYNTHETIC_NOTICE)
            self._write()

    def write_days(self, observation_set: ObservationSet, stride: int = 1) -> None:
        """Print one block per calendar day."""
        for day, observations in self.aggregator.group_by_day(observation_set).items():
            self._write(f"=== {day:%A, %B %d, %Y} ===")
            for obs in self.aggregator.sample(observations, stride):
                self._write(
                    f"{obs.timestamp:%H:%M} - {format_height(obs.height)} {constants.HEIGHT_UNIT}"
                )
            self._write()

    def write_summary(self, summary: SummaryStatistics) -> None:
        unit = constants.HEIGHT_UNIT
        values = summary.rounded(2)
        self._write("=== Summary ===")
        self._write(f"Highest tide: {values['max']:.2f} {unit}")
        self._write(f"Lowest tide: {values['min']:.2f} {unit}")
        self._write(f"Average height: {values['mean']:.2f} {unit}")
        if self.show_std_dev:
            self._write(f"Standard deviation: {values['std_dev']:.2f} {unit}")
        self._write(f"Range: {values['range']:.2f} {unit}")
