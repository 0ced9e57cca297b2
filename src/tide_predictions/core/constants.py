"""
Application-wide constants for tide prediction reporting.

This module defines the NOAA CO-OPS request defaults and the parameters of
the synthetic tide model used when live data is unavailable.
"""

# NOAA CO-OPS data API
DEFAULT_BASE_URL = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"
DEFAULT_STATION_ID = "9411340"  # Point Reyes, CA
DEFAULT_APPLICATION = "NOS.COOPS.TAC.WL"
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_MAX_RETRIES = 0

# Fixed query fields
PRODUCT_PREDICTIONS = "predictions"
DATUM_MLLW = "MLLW"
TIME_ZONE_LOCAL = "lst_ldt"  # local standard/daylight time
UNITS_ENGLISH = "english"  # feet
INTERVAL_HOURLY = "h"

FORMAT_JSON = "json"
FORMAT_CSV = "csv"
SUPPORTED_FORMATS = (FORMAT_JSON, FORMAT_CSV)

# Date formats
API_DATE_FORMAT = "%Y%m%d"
INPUT_DATE_FORMAT = "%Y-%m-%d"
INPUT_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
PREDICTION_TIME_FORMAT = "%Y-%m-%d %H:%M"

# Reporting defaults
DEFAULT_LOOKBACK_DAYS = 3
DEFAULT_SAMPLE_STRIDE = 1
DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_PLOT_FILE = "tide_plot.png"
HEIGHT_UNIT = "ft"

# Synthetic tide model (heights in feet)
MOCK_MEAN_LEVEL = 4.0
MOCK_SEMIDIURNAL_AMPLITUDE = 3.0
MOCK_SEMIDIURNAL_PERIOD = 12.5  # hours
MOCK_DIURNAL_AMPLITUDE = 0.5
MOCK_DIURNAL_PERIOD = 24.0  # hours
MOCK_JITTER_SIGMA = 0.1
MOCK_MIN_HEIGHT = 0.0
MOCK_MAX_HEIGHT = 8.0
MOCK_DEFAULT_SEED = 42
MOCK_STATION_NAME = "Synthetic station"
