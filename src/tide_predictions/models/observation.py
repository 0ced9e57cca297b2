"""
Tide observation data models.

Contains DTOs for prediction points, station metadata and parsed result sets.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Observation:
    """Single tide height at a point in time."""

    timestamp: datetime
    height: float  # feet above MLLW


@dataclass(frozen=True)
class StationMetadata:
    """Station information attached to a JSON response."""

    id: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class ObservationSet:
    """
    Ordered tide series produced by the parser or the mock generator.

    Observations are chronological and every height is finite.
    """

    observations: Tuple[Observation, ...] = field(default_factory=tuple)
    metadata: Optional[StationMetadata] = None
    synthetic: bool = False
    source_format: Optional[str] = None

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self):
        return iter(self.observations)

    @property
    def is_empty(self) -> bool:
        return not self.observations

    @property
    def heights(self) -> Tuple[float, ...]:
        return tuple(obs.height for obs in self.observations)

    @property
    def start(self) -> Optional[datetime]:
        return self.observations[0].timestamp if self.observations else None

    @property
    def end(self) -> Optional[datetime]:
        return self.observations[-1].timestamp if self.observations else None

    @property
    def dates(self) -> Tuple[date, ...]:
        """Distinct calendar dates covered, in order."""
        seen = []
        for obs in self.observations:
            day = obs.timestamp.date()
            if day not in seen:
                seen.append(day)
        return tuple(seen)
