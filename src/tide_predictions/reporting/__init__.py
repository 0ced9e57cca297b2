"""
Reporting for tide prediction results.

Provides the text report and the optional plot.
"""

from .reporter import TideReporter, NO_DATA_MESSAGE, SYNTHETIC_NOTICE, format_height
from .plotter import TidePlotter

__all__ = [
    "TideReporter",
    "TidePlotter",
    "NO_DATA_MESSAGE",
    "SYNTHETIC_NOTICE",
    "format_height",
]
