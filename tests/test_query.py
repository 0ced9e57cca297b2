"""
Tests for query construction and date handling.
"""

from datetime import date, datetime, timedelta
from urllib.parse import urlparse, parse_qs

import pytest
import pytz

from src.tide_predictions.api import build_query
from src.tide_predictions.core import DateUtils
from src.tide_predictions.models import PredictionQuery


class TestBuildQuery:
    """Test cases for build_query."""

    def test_default_window(self):
        query = build_query(end_date=date(2024, 9, 7))

        assert query.station_id == "9411340"
        assert query.start_date == date(2024, 9, 4)
        assert query.end_date == date(2024, 9, 7)
        assert query.lookback_days == 3

    def test_fixed_fields(self):
        query = build_query(end_date=date(2024, 9, 7))

        assert query.product == "predictions"
        assert query.datum == "MLLW"
        assert query.time_zone == "lst_ldt"
        assert query.units == "english"
        assert query.interval == "h"
        assert query.format == "json"

    def test_csv_format(self):
        query = build_query(end_date=date(2024, 9, 7), response_format="csv")
        assert query.to_params()["format"] == "csv"

    def test_params(self):
        params = build_query(station_id="9414290", end_date=date(2024, 1, 2)).to_params()

        assert params["station"] == "9414290"
        assert params["begin_date"] == "20231230"
        assert params["end_date"] == "20240102"
        assert params["application"] == "NOS.COOPS.TAC.WL"

    @pytest.mark.parametrize("end_date,lookback_days", [
        (date(2024, 9, 7), 3),
        (date(2024, 3, 1), 1),
        (date(2024, 1, 1), 0),
        (date(2023, 12, 31), 30),
    ])
    def test_params_round_trip(self, end_date, lookback_days):
        query = build_query(end_date=end_date, lookback_days=lookback_days)

        parsed = PredictionQuery.from_params(query.to_params())

        assert parsed == query
        assert parsed.start_date == end_date - timedelta(days=lookback_days)
        assert parsed.end_date == end_date

    def test_url_round_trip(self):
        query = build_query(end_date=date(2024, 9, 7))

        url = query.to_url("https://example.test/datagetter")
        parsed = urlparse(url)
        params = {key: values[0] for key, values in parse_qs(parsed.query).items()}

        assert parsed.path == "/datagetter"
        assert PredictionQuery.from_params(params) == query

    def test_default_end_date_is_today_in_timezone(self):
        query = build_query(timezone_str="UTC")
        assert query.end_date == datetime.now(pytz.UTC).date()

    def test_empty_station_rejected(self):
        with pytest.raises(ValueError, match="Station id"):
            build_query(station_id="  ", end_date=date(2024, 9, 7))

    def test_negative_lookback_rejected(self):
        with pytest.raises(ValueError):
            build_query(end_date=date(2024, 9, 7), lookback_days=-1)

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError, match="Unsupported response format"):
            build_query(end_date=date(2024, 9, 7), response_format="xml")


class TestDateUtils:
    """Test cases for DateUtils."""

    def test_parse_input_date(self):
        assert DateUtils.parse_input_date("2024-09-07") == date(2024, 9, 7)

    @pytest.mark.parametrize("value", ["2024-9-7", "20240907", "09/07/2024", "", "2024-09-07x"])
    def test_parse_input_date_bad_pattern(self, value):
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            DateUtils.parse_input_date(value)

    def test_parse_input_date_bad_calendar_day(self):
        with pytest.raises(ValueError, match="Invalid calendar date"):
            DateUtils.parse_input_date("2024-02-30")

    def test_today_uses_timezone(self):
        reference = pytz.UTC.localize(datetime(2024, 9, 7, 3, 0))

        utils = DateUtils()
        assert utils.today("UTC", reference) == date(2024, 9, 7)
        assert utils.today("America/Los_Angeles", reference) == date(2024, 9, 6)

    def test_today_naive_reference_assumed_utc(self):
        assert DateUtils().today("Asia/Tokyo", datetime(2024, 9, 7, 20, 0)) == date(2024, 9, 8)

    def test_invalid_timezone(self):
        with pytest.raises(ValueError, match="Invalid timezone"):
            DateUtils.parse_timezone("Mars/Olympus_Mons")

    def test_api_date_format(self):
        assert DateUtils.format_api_date(date(2024, 9, 7)) == "20240907"
        assert DateUtils.parse_api_date("20240907") == date(2024, 9, 7)
