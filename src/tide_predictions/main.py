"""
Main entry point for tide prediction reporting.

Orchestrates the fetch, report and plot workflow.
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional, TextIO

from .core import Config, setup_logger, LoggerContext, DateUtils, constants
from .api import NOAAPredictionsAPI, build_query
from .models import FetchResult, FetchStatus
from .processing import DataAggregator, PayloadParser, serialize_csv, serialize_json
from .services import DataFetcher, MockDataGenerator
from .reporting import TideReporter, TidePlotter

EXIT_OK = 0
EXIT_NO_DATA = 1
EXIT_USAGE = 2


class TidePredictionApp:
    """Main application for tide prediction reporting."""

    def __init__(self, config: Optional[Config] = None, stream: Optional[TextIO] = None):
        """
        Initialize application.

        Args:
            config: Loaded configuration (built-in defaults if None)
            stream: Output stream for the report (stdout if None)
        """
        self.config = config or Config()
        self.stream = stream

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.info("NOAA Tide Prediction Data Fetcher")
        self.logger.debug(f"Configuration: {self.config}")

        # Initialize components (will be set in initialize_components)
        self.api_client: Optional[NOAAPredictionsAPI] = None
        self.parser: Optional[PayloadParser] = None
        self.aggregator: Optional[DataAggregator] = None
        self.data_fetcher: Optional[DataFetcher] = None
        self.reporter: Optional[TideReporter] = None
        self.plotter: Optional[TidePlotter] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.debug("Initializing components...")

        self.api_client = NOAAPredictionsAPI(
            base_url=self.config.api_base_url,
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            logger=self.logger
        )

        self.parser = PayloadParser(logger=self.logger)
        self.aggregator = DataAggregator(logger=self.logger)

        self.data_fetcher = DataFetcher(
            api_client=self.api_client,
            parser=self.parser,
            mock_generator=MockDataGenerator(seed=self.config.mock_seed, logger=self.logger),
            fallback_on_transport_error=self.config.fallback_on_transport_error,
            fallback_on_empty_payload=self.config.fallback_on_empty_payload,
            logger=self.logger
        )

        self.reporter = TideReporter(
            aggregator=self.aggregator,
            stream=self.stream,
            show_std_dev=self.config.show_std_dev,
            logger=self.logger
        )

        self.plotter = TidePlotter(logger=self.logger)

    def run(
        self,
        end_date: Optional[date] = None,
        use_mock: bool = False,
        plot: bool = False,
        plot_file: Optional[str] = None,
        save_raw: Optional[str] = None
    ) -> int:
        """
        Fetch, report and optionally plot predictions.

        Args:
            end_date: Last day of the window (today if None)
            use_mock: Skip the network and use synthetic data
            plot: Render the plot image
            plot_file: Plot output path (config default if None)
            save_raw: Write the raw response body to this path

        Returns:
            Process exit code
        """
        try:
            self.initialize_components()

            query = build_query(
                station_id=self.config.station_id,
                end_date=end_date,
                lookback_days=self.config.lookback_days,
                response_format=self.config.response_format,
                timezone_str=self.config.timezone
            )
            self.logger.info(f"Station: {query.station_id}")
            self.logger.info(f"Date range: {query.start_date} to {query.end_date}")

            with LoggerContext(self.logger, "prediction fetch"):
                result = self.data_fetcher.fetch(query, use_mock=use_mock)

            if save_raw:
                self._save_raw(save_raw, result)

            return self.handle_result(result, plot=plot, plot_file=plot_file)

        finally:
            if self.api_client:
                self.api_client.close()

    def handle_result(
        self,
        result: FetchResult,
        plot: bool = False,
        plot_file: Optional[str] = None
    ) -> int:
        """
        Report a fetch result and plot it when requested.

        Returns:
            Process exit code
        """
        if result.status is FetchStatus.FAILED:
            self.logger.error(
                f"Failed to fetch tide data: {result.error}. "
                "Please check your internet connection and station id and try again."
            )
            return EXIT_NO_DATA

        summary = self.reporter.report(result.observation_set, stride=self.config.sample_stride)
        if summary is None:
            return EXIT_NO_DATA

        if plot:
            self.plotter.plot(
                result.observation_set,
                output_path=plot_file or self.config.plot_file,
                station_id=self.config.station_id
            )

        return EXIT_OK

    def _save_raw(self, path: str, result: FetchResult) -> None:
        """
        Write the last raw response body to a file.

        Synthetic results have no response body and are written in the wire
        format the query asked for.
        """
        if self.data_fetcher.last_response is not None:
            body = self.data_fetcher.last_response.body
        elif result.has_data:
            if self.config.response_format == constants.FORMAT_CSV:
                body = serialize_csv(result.observation_set)
            else:
                body = serialize_json(result.observation_set)
        else:
            return

        try:
            output = Path(path)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(body, encoding="utf-8")
            self.logger.info(f"Raw response saved as '{output}'")
        except OSError as e:
            self.logger.error(f"Could not save raw response to {path}: {e}")


def build_parser() -> argparse.ArgumentParser:
    """Command-line interface definition."""
    parser = argparse.ArgumentParser(
        prog="tide-predictions",
        description="Fetch and summarize NOAA tide predictions"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="End date of the window (YYYY-MM-DD). Default: today"
    )
    parser.add_argument("--station", type=str, default=None, help="NOAA station id")
    parser.add_argument("--days", type=int, default=None, help="Days to look back from the end date")
    parser.add_argument(
        "--format",
        choices=constants.SUPPORTED_FORMATS,
        default=None,
        help="Response format requested from the API"
    )
    parser.add_argument("--stride", type=int, default=None, help="Show every Nth prediction per day")
    parser.add_argument("--plot", action="store_true", help="Save a plot of the series")
    parser.add_argument("--plot-file", type=str, default=None, help="Plot output path")
    parser.add_argument("--mock", action="store_true", help="Use synthetic data instead of the API")
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Do not fall back to synthetic data when the request fails"
    )
    parser.add_argument("--save-raw", type=str, default=None, help="Write the raw response body to a file")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """
    Load configuration and apply command-line overrides.

    Raises:
        FileNotFoundError: If an explicit config file is missing
        ValueError: If a value is invalid
    """
    config = Config(args.config)

    overrides = {
        "station.id": args.station,
        "query.lookback_days": args.days,
        "query.format": args.format,
        "report.sample_stride": args.stride,
        "logging.level": args.log_level,
    }
    for key, value in overrides.items():
        if value is not None:
            config.set(key, value)

    if args.no_fallback:
        config.set("fallback.on_transport_error", False)
        config.set("fallback.on_empty_payload", False)

    return config


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate input before any network access
    end_date = None
    if args.date is not None:
        try:
            end_date = DateUtils.parse_input_date(args.date)
        except ValueError as e:
            parser.error(str(e))

    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        app = TidePredictionApp(config=config)
        return app.run(
            end_date=end_date,
            use_mock=args.mock,
            plot=args.plot,
            plot_file=args.plot_file,
            save_raw=args.save_raw
        )
    except Exception as e:
        print(f"Application failed: {e}", file=sys.stderr)
        return EXIT_NO_DATA


if __name__ == "__main__":
    sys.exit(main())
