"""
Synthetic tide data generator.

Produces a plausible tide series for the requested window when live data
is unavailable. Results are always flagged as synthetic.
"""

import logging
import math
import random
from datetime import datetime, timedelta
from typing import Optional

from ..core import constants
from ..models import Observation, ObservationSet, PredictionQuery, StationMetadata


class MockDataGenerator:
    """Generate hourly synthetic tide heights."""

    def __init__(
        self,
        seed: Optional[int] = constants.MOCK_DEFAULT_SEED,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize mock data generator.

        Args:
            seed: Random seed for the jitter (None for non-deterministic output)
            logger: Logger instance
        """
        self.seed = seed
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def tide_height(hour: float) -> float:
        """
        Noise-free model height at a number of hours since the window start.

        Semi-diurnal (12.5 h) plus diurnal (24 h) components around the mean level.
        """
        semidiurnal = constants.MOCK_SEMIDIURNAL_AMPLITUDE * math.sin(
            2 * math.pi * hour / constants.MOCK_SEMIDIURNAL_PERIOD
        )
        diurnal = constants.MOCK_DIURNAL_AMPLITUDE * math.sin(
            2 * math.pi * hour / constants.MOCK_DIURNAL_PERIOD
        )
        return constants.MOCK_MEAN_LEVEL + semidiurnal + diurnal

    def generate(self, query: PredictionQuery, seed: Optional[int] = None) -> ObservationSet:
        """
        Generate one observation per hour covering the query window.

        The window starts at start_date 00:00 and spans lookback_days * 24
        hours; a zero-day window yields a single day.

        Args:
            query: Query whose station and window are mirrored
            seed: Overrides the generator seed for this call

        Returns:
            ObservationSet flagged as synthetic
        """
        rng = random.Random(self.seed if seed is None else seed)

        start = datetime.combine(query.start_date, datetime.min.time())
        hours = max(query.lookback_days, 1) * 24

        observations = []
        for hour in range(hours):
            height = self.tide_height(hour) + rng.gauss(0, constants.MOCK_JITTER_SIGMA)
            height = min(max(height, constants.MOCK_MIN_HEIGHT), constants.MOCK_MAX_HEIGHT)
            observations.append(
                Observation(
                    timestamp=start + timedelta(hours=hour),
                    height=round(height, 2)
                )
            )

        self.logger.warning(
            f"Using synthetic tide data for station {query.station_id}: "
            f"{len(observations)} hourly points from {start:%Y-%m-%d %H:%M}"
        )

        return ObservationSet(
            observations=tuple(observations),
            metadata=StationMetadata(
                id=query.station_id,
                name=constants.MOCK_STATION_NAME
            ),
            synthetic=True,
            source_format=query.format
        )
