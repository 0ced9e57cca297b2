"""
Tests for the application entry point.

Network access is replaced by mocks throughout.
"""

import io
import json
from datetime import date
from unittest.mock import Mock, patch

import pytest
import requests  # type: ignore

from src.tide_predictions.api import RawResponse
from src.tide_predictions.core import Config
from src.tide_predictions.main import TidePredictionApp, main, EXIT_OK, EXIT_NO_DATA, EXIT_USAGE
from src.tide_predictions.models import FetchResult, FetchStatus


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("CONFIG_FILE", "TIDE_API_BASE_URL", "TIDE_STATION_ID", "TIDE_TIMEZONE", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestTidePredictionApp:
    """Test cases for TidePredictionApp."""

    def test_run_with_live_response(self, predictions_json):
        stream = io.StringIO()
        app = TidePredictionApp(config=Config(), stream=stream)

        with patch("src.tide_predictions.api.NOAAPredictionsAPI.get_predictions",
                   return_value=RawResponse(200, predictions_json)) as get_predictions:
            code = app.run(end_date=date(2024, 9, 7))

        assert code == EXIT_OK
        query = get_predictions.call_args[0][0]
        assert query.start_date == date(2024, 9, 4)
        output = stream.getvalue()
        assert "Station: Point Reyes (9411340)" in output
        assert "=== Friday, September 06, 2024 ===" in output
        assert "Highest tide: 6.88 ft" in output

    def test_run_timeout_uses_mock(self):
        stream = io.StringIO()
        app = TidePredictionApp(config=Config(), stream=stream)

        with patch("src.tide_predictions.api.NOAAPredictionsAPI.get_predictions",
                   side_effect=requests.exceptions.Timeout("timed out")):
            code = app.run(end_date=date(2024, 9, 7))

        assert code == EXIT_OK
        assert "simulated data" in stream.getvalue()
        assert "Total predictions: 72" in stream.getvalue()

    def test_run_with_plot_and_raw_dump(self, tmp_path, predictions_json):
        app = TidePredictionApp(config=Config(), stream=io.StringIO())
        plot_file = tmp_path / "out.png"
        raw_file = tmp_path / "raw" / "response.json"

        with patch("src.tide_predictions.api.NOAAPredictionsAPI.get_predictions",
                   return_value=RawResponse(200, predictions_json)):
            code = app.run(
                end_date=date(2024, 9, 7),
                plot=True,
                plot_file=str(plot_file),
                save_raw=str(raw_file)
            )

        assert code == EXIT_OK
        assert plot_file.exists()
        assert json.loads(raw_file.read_text(encoding="utf-8"))["metadata"]["id"] == "9411340"

    def test_mock_run_dumps_serialized_series(self, tmp_path):
        app = TidePredictionApp(config=Config(), stream=io.StringIO())
        raw_file = tmp_path / "mock.json"

        code = app.run(end_date=date(2024, 9, 7), use_mock=True, save_raw=str(raw_file))

        assert code == EXIT_OK
        payload = json.loads(raw_file.read_text(encoding="utf-8"))
        assert len(payload["predictions"]) == 72
        assert payload["predictions"][0]["t"] == "2024-09-04 00:00"

    def test_handle_failed_result(self):
        stream = io.StringIO()
        app = TidePredictionApp(config=Config(), stream=stream)
        app.initialize_components()
        app.plotter = Mock()

        code = app.handle_result(FetchResult(status=FetchStatus.FAILED, error="boom"), plot=True)

        assert code == EXIT_NO_DATA
        assert stream.getvalue() == ""
        app.plotter.plot.assert_not_called()

    def test_handle_empty_result(self):
        stream = io.StringIO()
        app = TidePredictionApp(config=Config(), stream=stream)
        app.initialize_components()

        code = app.handle_result(FetchResult(status=FetchStatus.EMPTY, error="no rows"))

        assert code == EXIT_NO_DATA
        assert stream.getvalue().strip() == "No data to display."

    def test_session_closed(self):
        app = TidePredictionApp(config=Config(), stream=io.StringIO())

        with patch("src.tide_predictions.api.NOAAPredictionsAPI.close") as close:
            app.run(end_date=date(2024, 9, 7), use_mock=True)

        close.assert_called_once()


class TestMain:
    """Test cases for the command-line entry point."""

    def test_invalid_date_aborts_before_network(self, capsys):
        with patch("src.tide_predictions.main.TidePredictionApp") as app_cls:
            with pytest.raises(SystemExit) as exc_info:
                main(["--date", "09/07/2024"])

        assert exc_info.value.code == EXIT_USAGE
        assert "YYYY-MM-DD" in capsys.readouterr().err
        app_cls.assert_not_called()

    def test_impossible_date_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--date", "2024-02-30"])

        assert exc_info.value.code == EXIT_USAGE

    def test_empty_date_rejected(self, capsys):
        with patch("src.tide_predictions.main.TidePredictionApp") as app_cls:
            with pytest.raises(SystemExit) as exc_info:
                main(["--date", ""])

        assert exc_info.value.code == EXIT_USAGE
        assert "YYYY-MM-DD" in capsys.readouterr().err
        app_cls.assert_not_called()

    def test_missing_config_file(self, capsys):
        assert main(["--config", "missing.json"]) == EXIT_USAGE
        assert "Configuration error" in capsys.readouterr().err

    def test_invalid_override(self):
        assert main(["--stride", "0", "--mock"]) == EXIT_USAGE

    def test_mock_run(self, capsys):
        code = main(["--mock", "--date", "2024-09-07", "--stride", "3"])

        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "=== Wednesday, September 04, 2024 ===" in out
        assert "=== Summary ===" in out
        # 72 points, every third shown
        assert len([line for line in out.splitlines() if line.endswith(" ft") and " - " in line]) == 24

    def test_no_fallback_reports_failure(self, capsys):
        with patch("src.tide_predictions.api.NOAAPredictionsAPI.get_predictions",
                   side_effect=requests.exceptions.ConnectionError("unreachable")):
            code = main(["--no-fallback", "--date", "2024-09-07"])

        assert code == EXIT_NO_DATA
        assert "=== Summary ===" not in capsys.readouterr().out

    def test_overrides_reach_query(self):
        with patch("src.tide_predictions.api.NOAAPredictionsAPI.get_predictions",
                   return_value=RawResponse(200, "Date Time, Prediction\n2024-09-07 00:00,1.0\n")) as get_predictions:
            code = main(["--station", "9414290", "--days", "1", "--format", "csv", "--date", "2024-09-07"])

        query = get_predictions.call_args[0][0]
        assert code == EXIT_OK
        assert query.station_id == "9414290"
        assert query.start_date == date(2024, 9, 6)
        assert query.format == "csv"

    def test_unexpected_error_is_reported(self, capsys):
        with patch("src.tide_predictions.main.TidePredictionApp.run", side_effect=RuntimeError("kaboom")):
            code = main(["--mock"])

        assert code == EXIT_NO_DATA
        assert "kaboom" in capsys.readouterr().err
