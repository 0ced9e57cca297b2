"""
Data aggregation module.

Groups tide observations by calendar day and calculates summary statistics.
"""

import logging
import statistics
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, List, Optional, Sequence

from ..models import Observation, ObservationSet


def round_half_up(value: float, digits: int = 2) -> float:
    """
    Round half away from zero, ignoring binary representation noise.

    6.255 rounds to 6.26 here, while round() gives 6.25.
    """
    with localcontext() as ctx:
        # Enough digits for any finite float quantized to 1e-9
        ctx.prec = 400
        # Snap to 9 decimals first so 6.2549999999999999 counts as 6.255
        snapped = Decimal(repr(value)).quantize(Decimal("1e-9"))
        quantum = Decimal(1).scaleb(-digits)
        return float(snapped.quantize(quantum, rounding=ROUND_HALF_UP))


class EmptySeriesError(ValueError):
    """Statistics were requested for a series without observations."""


@dataclass(frozen=True)
class SummaryStatistics:
    """Descriptive statistics over a whole tide series (feet)."""

    count: int
    maximum: float
    minimum: float
    mean: float
    std_dev: float

    @property
    def range(self) -> float:
        return self.maximum - self.minimum

    def rounded(self, digits: int = 2) -> Dict[str, float]:
        """Statistics rounded half-up for display."""
        values = {
            "max": self.maximum,
            "min": self.minimum,
            "mean": self.mean,
            "std_dev": self.std_dev,
            "range": self.range,
        }
        # + 0.0 turns -0.0 into 0.0
        return {key: round_half_up(value, digits) + 0.0 for key, value in values.items()}


class DataAggregator:
    """Group and summarize tide observations."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize data aggregator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def group_by_day(self, observation_set: ObservationSet) -> "OrderedDict[date, List[Observation]]":
        """
        Partition observations by the calendar date of their timestamp.

        Groups are in date order and each keeps chronological order, so every
        observation lands in exactly one group.

        Args:
            observation_set: Observations to group

        Returns:
            Ordered mapping of date to that day's observations
        """
        groups: Dict[date, List[Observation]] = {}
        for obs in sorted(observation_set.observations, key=lambda o: o.timestamp):
            groups.setdefault(obs.timestamp.date(), []).append(obs)

        ordered = OrderedDict(sorted(groups.items()))
        self.logger.debug(f"Grouped {len(observation_set)} observations into {len(ordered)} days")
        return ordered

    @staticmethod
    def sample(observations: Sequence[Observation], stride: int = 1) -> List[Observation]:
        """
        Take every stride-th observation, starting with the first.

        Args:
            observations: Observations of one day
            stride: Sampling step (1 keeps everything)

        Returns:
            Sampled observations
        """
        if stride < 1:
            raise ValueError(f"stride must be >= 1, got {stride}")
        return list(observations[::stride])

    def summarize(self, observation_set: ObservationSet) -> SummaryStatistics:
        """
        Calculate max, min, mean and sample standard deviation of heights.

        Args:
            observation_set: Observations to summarize

        Returns:
            SummaryStatistics over the full series

        Raises:
            EmptySeriesError: If there are no observations
        """
        heights = list(observation_set.heights)
        if not heights:
            raise EmptySeriesError("Cannot summarize an empty series")

        # Single observation has no spread
        std_dev = statistics.stdev(heights) if len(heights) > 1 else 0.0

        summary = SummaryStatistics(
            count=len(heights),
            maximum=max(heights),
            minimum=min(heights),
            mean=statistics.mean(heights),
            std_dev=std_dev
        )
        self.logger.debug(
            f"Heights: n={summary.count}, min={summary.minimum:.2f}, "
            f"max={summary.maximum:.2f}, mean={summary.mean:.2f}, sd={summary.std_dev:.2f}"
        )
        return summary
