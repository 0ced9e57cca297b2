"""
NOAA Tide Prediction Reporter

This package fetches hourly tide predictions from the NOAA CO-OPS data API,
prints per-day tables and summary statistics, and optionally plots the series.
"""

__version__ = "0.1.0"
__description__ = "Tide prediction reports from the NOAA CO-OPS data API"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "TidePredictionApp":
        from .main import TidePredictionApp
        return TidePredictionApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "TidePredictionApp",
]
