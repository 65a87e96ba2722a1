from __future__ import annotations

# Re-export widget classes for convenience so callers can do:
#   from gui.widgets import ProfilePlotWidget, FileControlPanel, DesignPanel, DimensionsPanel, AnalysisPanel, CombPanelWidget, StatusLogWidget
#
# Individual modules define each widget class. Importing them here avoids deep import paths outside this package.

from .profile_plot_widget import ProfilePlotWidget  # noqa: F401
from .flight_path_widget import FlightPathWidget  # noqa: F401
from .file_control_panel import FileControlPanel  # noqa: F401
from .design_panel import DesignPanel  # noqa: F401
from .dimensions_panel import DimensionsPanel  # noqa: F401
from .analysis_panel import AnalysisPanel  # noqa: F401
from .comb_panel import CombPanelWidget  # noqa: F401
from .status_log import StatusLogWidget  # noqa: F401
