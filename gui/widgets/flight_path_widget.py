"""Top-down view of the approximate flight path for the current flight numbers."""

from __future__ import annotations

import numpy as np
import pyqtgraph as pg


class FlightPathWidget(pg.PlotWidget):
    """Small plot of lateral drift against downrange distance."""

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setMinimumHeight(180)
        self.showGrid(x=True, y=True)
        self.setLabel("bottom", "Lateral (m)")
        self.setLabel("left", "Distance (m)")
        self.setMouseEnabled(x=False, y=False)

    def plot_path(self, path) -> None:
        self.clear()
        if not path:
            return
        lateral = np.array([p.y for p in path], dtype=float)
        downrange = np.array([p.x for p in path], dtype=float)
        self.plot(lateral, downrange, pen=pg.mkPen((0, 200, 120), width=2))
        self.plot([lateral[-1]], [downrange[-1]], pen=None, symbol="o", symbolSize=8,
                  symbolBrush=pg.mkBrush(255, 165, 0))
        span = max(float(np.max(np.abs(lateral))), 5.0)
        self.setXRange(-span * 1.2, span * 1.2)
        self.setYRange(0, max(float(downrange[-1]), 1.0) * 1.05)
