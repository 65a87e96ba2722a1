"""Controls for the curvature comb drawn along the disc profile."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QSlider,
    QWidget,
)
from core.config import (
    COMB_DENSITY_MIN,
    COMB_DENSITY_MAX,
    COMB_DENSITY_DEFAULT,
    COMB_SCALE_MIN,
    COMB_SCALE_MAX,
    COMB_SCALE_DEFAULT,
)


class CombPanelWidget(QGroupBox):
    """Tooth length and tooth count of the profile curvature comb."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Profile Curvature", parent)
        self.setToolTip(
            "Teeth stand out from the profile in proportion to its curvature.\n"
            "Long teeth mark a tight nose or shoulder; a smooth comb outline means a fair rim."
        )

        # Tooth length: mm drawn per 1/mm of curvature
        self.comb_scale_slider = QSlider(Qt.Orientation.Horizontal)
        self.comb_scale_slider.setMinimum(COMB_SCALE_MIN)
        self.comb_scale_slider.setMaximum(COMB_SCALE_MAX)
        self.comb_scale_slider.setValue(int(COMB_SCALE_DEFAULT))
        self.comb_scale_slider.setFixedWidth(120)
        self.comb_scale_slider.setToolTip("Millimetres of tooth drawn per 1/mm of curvature")
        self.comb_scale_label = QLabel(f"{COMB_SCALE_DEFAULT:.0f}×")
        self.comb_scale_label.setFixedWidth(50)

        # Tooth count per Bezier segment
        self.comb_density_slider = QSlider(Qt.Orientation.Horizontal)
        self.comb_density_slider.setMinimum(COMB_DENSITY_MIN)
        self.comb_density_slider.setMaximum(COMB_DENSITY_MAX)
        self.comb_density_slider.setValue(COMB_DENSITY_DEFAULT)
        self.comb_density_slider.setFixedWidth(120)
        self.comb_density_slider.setToolTip("Teeth drawn on each segment between two anchors")
        self.comb_density_label = QLabel(str(COMB_DENSITY_DEFAULT))
        self.comb_density_label.setFixedWidth(50)

        layout = QVBoxLayout()

        scale_row = QHBoxLayout()
        scale_row.addWidget(QLabel("Tooth length:"))
        scale_row.addWidget(self.comb_scale_slider)
        scale_row.addWidget(self.comb_scale_label)
        layout.addLayout(scale_row)

        density_row = QHBoxLayout()
        density_row.addWidget(QLabel("Teeth per segment:"))
        density_row.addWidget(self.comb_density_slider)
        density_row.addWidget(self.comb_density_label)
        layout.addLayout(density_row)

        self.setLayout(layout)

    def values(self) -> tuple[int, float]:
        """Current ``(density, scale)``."""
        return self.comb_density_slider.value(), float(self.comb_scale_slider.value())

    def update_labels(self) -> None:
        density, scale = self.values()
        self.comb_scale_label.setText(f"{scale:.0f}×")
        self.comb_density_label.setText(str(density))
