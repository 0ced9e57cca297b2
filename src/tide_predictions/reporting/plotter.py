"""
Tide plot rendering.

Draws the series as a line chart with matplotlib and optionally saves it.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import matplotlib
import matplotlib.dates as mdates
import matplotlib.pyplot as plt

from ..core import constants
from ..models import ObservationSet

PLOT_SIZE_INCHES = (8, 6)
PLOT_DPI = 100  # 800x600 px


class TidePlotter:
    """Render tide series; failures are logged, never raised."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize plotter.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def build_title(observation_set: ObservationSet, station_id: Optional[str] = None) -> str:
        """Chart title naming the station and the covered dates."""
        if station_id is None:
            metadata = observation_set.metadata
            station_id = metadata.id if metadata is not None else constants.DEFAULT_STATION_ID

        title = f"Tide Heights for Station {station_id}"
        if not observation_set.is_empty:
            title += f"\n{observation_set.start:%Y-%m-%d} to {observation_set.end:%Y-%m-%d}"
        if observation_set.synthetic:
            title += " (synthetic)"
        return title

    def plot(
        self,
        observation_set: Optional[ObservationSet],
        output_path: Optional[Union[str, Path]] = constants.DEFAULT_PLOT_FILE,
        show: bool = False,
        markers: bool = True,
        station_id: Optional[str] = None
    ) -> Optional[Path]:
        """
        Plot height against time.

        Args:
            observation_set: Series to plot
            output_path: Image file to write (None to skip saving)
            show: Open an interactive window
            markers: Overlay point markers on the line
            station_id: Station id for the title (defaults to the metadata id)

        Returns:
            Path of the written image, or None if nothing was saved
        """
        if observation_set is None or observation_set.is_empty:
            self.logger.warning("No data available for plotting")
            return None

        fig = None
        try:
            if not show:
                plt.switch_backend("Agg")

            times = [obs.timestamp for obs in observation_set.observations]
            heights = list(observation_set.heights)

            fig, ax = plt.subplots(figsize=PLOT_SIZE_INCHES, dpi=PLOT_DPI)
            ax.plot(times, heights, color="blue", linewidth=2)
            if markers:
                ax.scatter(times, heights, color="red", s=6, zorder=3)

            ax.set_title(self.build_title(observation_set, station_id))
            ax.set_xlabel("Time")
            ax.set_ylabel(f"Tide Height ({constants.HEIGHT_UNIT})")
            ax.grid(True, alpha=0.4)
            ax.xaxis.set_major_formatter(mdates.DateFormatter("%m-%d %H:%M"))
            fig.autofmt_xdate()
            fig.tight_layout()

            saved = None
            if output_path is not None:
                saved = Path(output_path)
                saved.parent.mkdir(parents=True, exist_ok=True)
                fig.savefig(saved)
                self.logger.info(f"Plot saved as '{saved}'")

            if show:
                plt.show()

            return saved

        except Exception as e:
            self.logger.error(
                f"Could not create plot (backend {matplotlib.get_backend()}): {e}",
                exc_info=True
            )
            return None

        finally:
            if fig is not None:
                plt.close(fig)
