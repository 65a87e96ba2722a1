"""Interactive disc profile editor canvas.

Anchors and control handles can be dragged directly on the plot. A double
click inserts an anchor on the nearest segment and a right click on an
anchor deletes it. The widget only reports these gestures through signals;
the controller decides what happens to the model.
"""

from __future__ import annotations

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt, Signal


class ProfilePointsItem(pg.GraphItem):
    """Scatter of profile points that turns mouse drags into index/position pairs."""

    def __init__(self, owner: "ProfilePlotWidget") -> None:
        super().__init__()
        self._owner = owner
        self._pos = np.zeros((0, 2))
        self._drag_index: int | None = None
        self._drag_offset = np.zeros(2)
        self.scatter.sigClicked.connect(self._on_clicked)

    def set_points(self, points) -> None:
        self._pos = np.array([[p.x, p.y] for p in points], dtype=float).reshape(-1, 2)
        symbols = ["s" if p.is_anchor else "o" for p in points]
        sizes = [11 if p.is_anchor else 8 for p in points]
        brushes = []
        for p in points:
            if p.is_constrained:
                brushes.append(pg.mkBrush(255, 80, 80, 230))
            elif p.is_anchor:
                brushes.append(pg.mkBrush(255, 255, 255, 230))
            else:
                brushes.append(pg.mkBrush(255, 20, 147, 200))
        self.setData(
            pos=self._pos,
            symbol=symbols,
            size=sizes,
            symbolBrush=brushes,
            symbolPen=pg.mkPen((30, 30, 30), width=1),
            pxMode=True,
            data=list(range(len(self._pos))),
        )

    def mouseDragEvent(self, ev):
        if ev.button() != Qt.MouseButton.LeftButton:
            ev.ignore()
            return

        if ev.isStart():
            pos = ev.buttonDownPos()
            hits = self.scatter.pointsAt(pos)
            if len(hits) == 0:
                ev.ignore()
                return
            self._drag_index = int(hits[0].data())
            self._drag_offset = self._pos[self._drag_index] - np.array([pos.x(), pos.y()])
            self._owner.drag_started.emit()
        elif ev.isFinish():
            self._drag_index = None
            self._owner.drag_finished.emit()
            return
        elif self._drag_index is None:
            ev.ignore()
            return

        new_pos = np.array([ev.pos().x(), ev.pos().y()]) + self._drag_offset
        self._owner.point_dragged.emit(self._drag_index, float(new_pos[0]), float(new_pos[1]))
        ev.accept()

    def _on_clicked(self, _scatter, hits, ev=None):
        if ev is None or ev.button() != Qt.MouseButton.RightButton or len(hits) == 0:
            return
        self._owner.point_delete_requested.emit(int(hits[0].data()))
        ev.accept()


class ProfilePlotWidget(pg.PlotWidget):
    """Custom `pyqtgraph.PlotWidget` that shows and edits one disc half-profile."""

    point_dragged = Signal(int, float, float)
    drag_started = Signal()
    drag_finished = Signal()
    point_delete_requested = Signal(int)
    insert_requested = Signal(float, float)

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setSizePolicy(
            pg.QtWidgets.QSizePolicy.Policy.Expanding,
            pg.QtWidgets.QSizePolicy.Policy.Expanding,
        )
        self.updateGeometry()

        pg.setConfigOptions(antialias=True)
        self.setAspectLocked(True)
        self.showGrid(x=True, y=True)
        # Profile y grows downwards (dome at negative y); show the dome on top.
        self.getPlotItem().invertY(True)
        self.setLabel("bottom", "Radius (mm)")
        self.setLabel("left", "Height (mm)")

        self.addLegend(offset=(30, 10))
        self.plot_items: dict[str, object] = {}
        self._first_plot_done = False
        # Kept alive across redraws so an in-progress drag keeps its mouse grab
        self._points_item = ProfilePointsItem(self)
        self._points_item.setZValue(10)
        self.addItem(self._points_item)
        self.scene().sigMouseClicked.connect(self._on_scene_clicked)
        self.getViewBox().sigRangeChanged.connect(self._update_text_positions)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def plot_profile(
        self,
        curve,
        points,
        metrics=None,
        warnings=None,
        comb=None,
        **_ignored,
    ):
        """Render the sampled curve, control net, curvature comb and text overlays."""
        self._remove_overlays()
        self.plot_items = {"Points": self._points_item}

        COLOR_CURVE = pg.mkPen((0, 170, 255), width=2.5)
        COLOR_HANDLES = pg.mkPen((255, 20, 147), width=1.2, style=Qt.PenStyle.DashLine)
        COLOR_COMB = pg.mkPen((180, 180, 180), width=1)
        COLOR_COMB_OUTLINE = pg.mkPen("yellow", width=1.5, style=Qt.PenStyle.DotLine)

        # --------------------------------------------------------------
        # 1) Curvature comb (drawn first so it sits under the profile)
        # --------------------------------------------------------------
        if comb:
            teeth = np.concatenate([np.asarray(seg).reshape(-1, 2) for seg in comb if len(seg)])
            if len(teeth):
                self.plot_items["Curvature Comb"] = self.plot(
                    teeth[:, 0], teeth[:, 1], pen=COLOR_COMB, connect="pairs", name="Curvature Comb"
                )
            outline_items = []
            for seg in comb:
                if len(seg) < 2:
                    continue
                tips = np.array([tooth[1] for tooth in seg])
                outline_items.append(self.plot(tips[:, 0], tips[:, 1], pen=COLOR_COMB_OUTLINE))
            self.plot_items["Comb Outline"] = outline_items

        # --------------------------------------------------------------
        # 2) Profile curve
        # --------------------------------------------------------------
        curve = np.asarray(curve, dtype=float).reshape(-1, 2)
        if len(curve):
            closed = np.vstack([curve, curve[:1]])
            self.plot_items["Profile"] = self.plot(closed[:, 0], closed[:, 1], pen=COLOR_CURVE, name="Profile")

        # --------------------------------------------------------------
        # 3) Handle lines and draggable points
        # --------------------------------------------------------------
        handle_segments = self._handle_segments(points)
        if len(handle_segments):
            self.plot_items["Handles"] = self.plot(
                handle_segments[:, 0], handle_segments[:, 1], pen=COLOR_HANDLES, connect="pairs", name="Handles"
            )

        self._points_item.set_points(points)

        # --------------------------------------------------------------
        # 4) Metrics and PDGA warnings (top-right)
        # --------------------------------------------------------------
        if metrics:
            geo_html = (
                '<div style="text-align: right; color: #F0E68C; font-size: 10pt;">'
                f"Diameter: {metrics['diameter_str']} mm<br/>"
                f"Height: {metrics['height_str']} mm<br/>"
                f"Rim width: {metrics['rim_width_str']} mm<br/>"
                f"Rim depth: {metrics['rim_depth_str']} mm<br/>"
                f"Nose radius: {metrics['nose_radius_str']} mm<br/>"
                f"Dome radius: {metrics['dome_radius_str']}<br/>"
                f"Shoulder slant: {metrics['shoulder_slant_deg_str']}"
                "</div>"
            )
            geo_item = pg.TextItem(html=geo_html, anchor=(1, 0))
            self.addItem(geo_item)
            self.plot_items["Metrics Text"] = geo_item

        if warnings:
            warn_html = (
                '<div style="text-align: right; color: #FF6B6B; font-size: 10pt;">'
                + "<br/>".join(warnings)
                + "</div>"
            )
            warn_item = pg.TextItem(html=warn_html, anchor=(1, 1))
            self.addItem(warn_item)
            self.plot_items["Warnings Text"] = warn_item

        self._update_text_positions()

        # --------------------------------------------------------------
        # 5) Initial view range
        # --------------------------------------------------------------
        if not self._first_plot_done and len(curve):
            x_min, x_max = float(np.min(curve[:, 0])), float(np.max(curve[:, 0]))
            y_min, y_max = float(np.min(curve[:, 1])), float(np.max(curve[:, 1]))
            x_padding = (x_max - x_min) * 0.1
            y_padding = (y_max - y_min) * 0.5
            self.setXRange(x_min - x_padding, x_max + x_padding)
            self.setYRange(y_min - y_padding, y_max + y_padding)
            self._first_plot_done = True

    def reset_view(self) -> None:
        """Re-fit the view on the next plot."""
        self._first_plot_done = False

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _remove_overlays(self) -> None:
        for name, item in self.plot_items.items():
            if name == "Points":
                continue
            for sub_item in item if isinstance(item, list) else [item]:
                self.removeItem(sub_item)

    @staticmethod
    def _handle_segments(points) -> np.ndarray:
        """Anchor-to-handle line pairs for every control point."""
        n = len(points)
        pairs = []
        for i, p in enumerate(points):
            if not p.is_anchor:
                continue
            for j in ((i - 1) % n, (i + 1) % n):
                if j != i and points[j].is_control:
                    pairs.extend([(p.x, p.y), (points[j].x, points[j].y)])
        return np.array(pairs, dtype=float).reshape(-1, 2)

    def _on_scene_clicked(self, ev) -> None:
        if not ev.double() or ev.button() != Qt.MouseButton.LeftButton:
            return
        vb = self.getViewBox()
        if not vb.sceneBoundingRect().contains(ev.scenePos()):
            return
        pos = vb.mapSceneToView(ev.scenePos())
        self.insert_requested.emit(float(pos.x()), float(pos.y()))

    def _update_text_positions(self):
        """Keep overlay text anchored to the right edge on zoom/pan."""
        vb = self.getViewBox()
        if not vb:
            return

        x_range, y_range = vb.viewRange()
        x_padding = (x_range[1] - x_range[0]) * 0.02
        y_padding = (y_range[1] - y_range[0]) * 0.02
        right_x = x_range[1] - x_padding

        # y axis is inverted: the smallest y value is drawn at the top.
        text_geo = self.plot_items.get("Metrics Text")
        if text_geo:
            text_geo.setPos(right_x, y_range[0] + y_padding)
        text_warn = self.plot_items.get("Warnings Text")
        if text_warn:
            text_warn.setPos(right_x, y_range[1] - y_padding)
