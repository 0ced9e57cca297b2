"""
Payload parsing module.

Decodes datagetter JSON and CSV bodies into observation sets.
"""

import io
import json
import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from ..core import constants
from ..models import Observation, ObservationSet, StationMetadata


TIMESTAMP_FORMATS = (
    constants.PREDICTION_TIME_FORMAT,
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
)

CSV_COLUMNS = ["datetime", "height"]


class PayloadError(ValueError):
    """Base class for payloads that cannot be turned into observations."""


class PayloadFormatError(PayloadError):
    """Body is not valid JSON/CSV or does not have the expected shape."""


class EmptyPayloadError(PayloadError):
    """Body is well formed but holds no usable rows."""


class ServiceError(PayloadError):
    """The service answered with an error message instead of data."""


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a prediction timestamp.

    Returns:
        Naive local datetime, or None if the value is missing or unparseable
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_height(value: Any) -> Optional[float]:
    """
    Coerce a height to a finite float.

    Returns:
        Height in feet, or None if the value is missing, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        height = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(height):
        return None
    return height


def _parse_coordinate(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class PayloadParser:
    """Turn datagetter responses into observation sets."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize payload parser.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, body: str, response_format: str) -> ObservationSet:
        """
        Parse a response body in the declared format.

        Args:
            body: Raw response text
            response_format: "json" or "csv"

        Returns:
            ObservationSet with chronological, finite observations

        Raises:
            PayloadFormatError: If the body cannot be decoded
            EmptyPayloadError: If no usable rows remain
            ServiceError: If the service reported an error
        """
        if response_format == constants.FORMAT_JSON:
            return self.parse_json(body)
        if response_format == constants.FORMAT_CSV:
            return self.parse_csv(body)
        raise ValueError(f"Unsupported response format: {response_format!r}")

    def parse_json(self, body: str) -> ObservationSet:
        """
        Parse a JSON body of the form {"metadata": {...}, "predictions": [{"t", "v"}]}.
        """
        try:
            payload = json.loads(body)
        except (TypeError, json.JSONDecodeError) as e:
            raise PayloadFormatError(f"Response is not valid JSON: {e}")

        if not isinstance(payload, dict):
            raise PayloadFormatError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        if "error" in payload:
            error = payload["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise ServiceError(f"API returned error: {message}")

        predictions = payload.get("predictions")
        if not predictions:
            raise EmptyPayloadError("No tide prediction data found for the specified period")

        if not isinstance(predictions, list):
            raise PayloadFormatError(
                f"'predictions' must be a list, got {type(predictions).__name__}"
            )

        rows: List[Tuple[Any, Any]] = []
        for entry in predictions:
            if isinstance(entry, dict):
                rows.append((entry.get("t"), entry.get("v")))
            else:
                rows.append((None, None))

        observations = self._build_observations(rows)
        if not observations:
            raise EmptyPayloadError("No usable predictions after dropping incomplete rows")

        return ObservationSet(
            observations=observations,
            metadata=self._parse_metadata(payload.get("metadata")),
            source_format=constants.FORMAT_JSON
        )

    def parse_csv(self, body: str) -> ObservationSet:
        """
        Parse a CSV body with a header row and (timestamp, value) columns.

        Columns are renamed to datetime/height whatever the source header says.
        """
        if body is None or not body.strip():
            raise EmptyPayloadError("Empty CSV response")

        if body.lstrip().lower().startswith("error"):
            raise ServiceError(f"API returned error: {body.strip().splitlines()[0]}")

        try:
            frame = pd.read_csv(
                io.StringIO(body),
                dtype=str,
                skipinitialspace=True,
                keep_default_na=False
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise PayloadFormatError(f"Response is not valid CSV: {e}")

        if frame.shape[1] < 2:
            raise PayloadFormatError(
                f"Expected at least 2 CSV columns, got {frame.shape[1]}"
            )

        frame = frame.iloc[:, :2].copy()
        frame.columns = CSV_COLUMNS
        self.logger.debug(f"Read {len(frame)} CSV rows")

        frame["height"] = pd.to_numeric(frame["height"].str.strip(), errors="coerce")

        rows = list(zip(frame["datetime"], frame["height"]))
        observations = self._build_observations(rows)
        if not observations:
            raise EmptyPayloadError("No data rows remain after dropping incomplete rows")

        return ObservationSet(
            observations=observations,
            source_format=constants.FORMAT_CSV
        )

    def _build_observations(self, rows: List[Tuple[Any, Any]]) -> Tuple[Observation, ...]:
        """Coerce (timestamp, height) rows, drop incomplete ones and sort by time."""
        observations = []
        dropped = 0

        for raw_time, raw_height in rows:
            timestamp = parse_timestamp(raw_time)
            height = parse_height(raw_height)

            if timestamp is None or height is None:
                dropped += 1
                continue

            observations.append(Observation(timestamp=timestamp, height=height))

        if dropped:
            self.logger.warning(f"Dropped {dropped} incomplete or non-numeric rows")

        observations.sort(key=lambda obs: obs.timestamp)
        return tuple(observations)

    def _parse_metadata(self, metadata: Any) -> Optional[StationMetadata]:
        """Extract station metadata; missing or malformed metadata yields None."""
        if not isinstance(metadata, dict):
            return None

        station_id = metadata.get("id")
        if station_id is None:
            self.logger.debug("Metadata without station id ignored")
            return None

        return StationMetadata(
            id=str(station_id),
            name=str(metadata.get("name") or ""),
            latitude=_parse_coordinate(metadata.get("lat")),
            longitude=_parse_coordinate(metadata.get("lon"))
        )


def serialize_json(observation_set: ObservationSet) -> str:
    """
    Render an observation set in the datagetter JSON shape.

    Heights are written with three decimals as the service does.
    """
    payload: Dict[str, Any] = {}
    metadata = observation_set.metadata
    if metadata is not None:
        payload["metadata"] = {
            "id": metadata.id,
            "name": metadata.name,
            "lat": "" if metadata.latitude is None else f"{metadata.latitude:.4f}",
            "lon": "" if metadata.longitude is None else f"{metadata.longitude:.4f}",
        }
    payload["predictions"] = [
        {
            "t": obs.timestamp.strftime(constants.PREDICTION_TIME_FORMAT),
            "v": f"{obs.height:.3f}",
        }
        for obs in observation_set.observations
    ]
    return json.dumps(payload)


def serialize_csv(observation_set: ObservationSet) -> str:
    """Render an observation set in the datagetter CSV shape."""
    lines = ["Date Time, Prediction"]
    for obs in observation_set.observations:
        lines.append(
            f"{obs.timestamp.strftime(constants.PREDICTION_TIME_FORMAT)}, {obs.height:.3f}"
        )
    return "\n".join(lines) + "\n"
