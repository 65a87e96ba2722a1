"""Main window layout for the Disc Designer GUI.

This module purposefully holds *only* the Qt layout code – no business
logic. All interactions are delegated to :pyclass:`gui.controllers.MainController`.
"""

from __future__ import annotations

from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QHBoxLayout,
    QVBoxLayout,
)
from PySide6.QtCore import Qt

from gui.widgets import (
    FileControlPanel,
    DesignPanel,
    DimensionsPanel,
    AnalysisPanel,
    CombPanelWidget,
    StatusLogWidget,
    ProfilePlotWidget,
)


__all__ = ["MainWindow"]


class MainWindow(QMainWindow):
    """Top-level window that arranges all GUI widgets."""

    def __init__(self) -> None:
        super().__init__()

        self.setWindowTitle("Disc Designer")
        self.resize(1400, 900)

        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)

        # ------------------------------------------------------------------
        # Left-hand control panel
        # ------------------------------------------------------------------
        control_layout = QVBoxLayout()
        control_layout.setAlignment(Qt.AlignmentFlag.AlignTop)

        self.file_panel = FileControlPanel(self)
        self.design_panel = DesignPanel(self)
        self.dimensions_panel = DimensionsPanel(self)
        self.comb_panel = CombPanelWidget(self)

        control_layout.addWidget(self.file_panel)
        control_layout.addWidget(self.design_panel)
        control_layout.addWidget(self.dimensions_panel)
        control_layout.addWidget(self.comb_panel)

        main_layout.addLayout(control_layout, 1)

        # ------------------------------------------------------------------
        # Right-hand plot area with analysis and log underneath
        # ------------------------------------------------------------------
        plot_layout = QVBoxLayout()
        self.plot_widget = ProfilePlotWidget(self)
        plot_layout.addWidget(self.plot_widget, 3)

        bottom_layout = QHBoxLayout()
        self.analysis_panel = AnalysisPanel(self)
        self.status_log = StatusLogWidget(self)
        bottom_layout.addWidget(self.analysis_panel, 1)
        bottom_layout.addWidget(self.status_log, 1)
        plot_layout.addLayout(bottom_layout, 2)

        main_layout.addLayout(plot_layout, 3)
