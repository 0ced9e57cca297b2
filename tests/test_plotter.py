"""
Tests for plot rendering.
"""

from datetime import date, datetime
from unittest.mock import Mock, patch

import pytest

from src.tide_predictions.models import Observation, ObservationSet, PredictionQuery, StationMetadata
from src.tide_predictions.reporting import TidePlotter
from src.tide_predictions.services import MockDataGenerator


@pytest.fixture
def observation_set():
    query = PredictionQuery(station_id="9411340", start_date=date(2024, 9, 4), end_date=date(2024, 9, 7))
    return MockDataGenerator(logger=Mock()).generate(query)


class TestTidePlotter:
    """Test cases for TidePlotter."""

    def test_plot_written(self, tmp_path, observation_set):
        output = tmp_path / "plots" / "tide_plot.png"

        result = TidePlotter(logger=Mock()).plot(observation_set, output_path=output)

        assert result == output
        assert output.exists()
        assert output.stat().st_size > 0

    def test_plot_without_saving(self, observation_set):
        assert TidePlotter(logger=Mock()).plot(observation_set, output_path=None, markers=False) is None

    def test_empty_series_not_plotted(self, tmp_path):
        logger = Mock()
        output = tmp_path / "tide_plot.png"

        result = TidePlotter(logger=logger).plot(ObservationSet(), output_path=output)

        assert result is None
        assert not output.exists()
        logger.warning.assert_called_once()

    def test_render_failure_is_not_fatal(self, tmp_path, observation_set):
        logger = Mock()

        with patch("src.tide_predictions.reporting.plotter.plt.subplots", side_effect=RuntimeError("no backend")):
            result = TidePlotter(logger=logger).plot(observation_set, output_path=tmp_path / "x.png")

        assert result is None
        logger.error.assert_called_once()
        assert "no backend" in logger.error.call_args[0][0]

    def test_title(self):
        observation_set = ObservationSet(
            observations=(
                Observation(datetime(2024, 9, 4, 0, 0), 1.0),
                Observation(datetime(2024, 9, 6, 23, 0), 2.0),
            ),
            metadata=StationMetadata(id="9414290", name="San Francisco")
        )

        title = TidePlotter.build_title(observation_set)

        assert title == "Tide Heights for Station 9414290\n2024-09-04 to 2024-09-06"

    def test_title_marks_synthetic(self, observation_set):
        assert TidePlotter.build_title(observation_set).endswith("(synthetic)")
