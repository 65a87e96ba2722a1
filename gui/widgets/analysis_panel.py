"""Aerodynamic analysis controls and the flight-number readout."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDoubleSpinBox,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.config import DEFAULT_AIRSPEED_MS, DEFAULT_ANGLE_OF_ATTACK_DEG

from .flight_path_widget import FlightPathWidget


class AnalysisPanel(QGroupBox):
    """Buttons for each analysis plus the inputs they share."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Analysis", parent)

        # --- Widgets -----------------------------------------------------
        self.aoa_input = QDoubleSpinBox()
        self.aoa_input.setRange(-20.0, 20.0)
        self.aoa_input.setSingleStep(0.5)
        self.aoa_input.setSuffix(" °")
        self.aoa_input.setValue(DEFAULT_ANGLE_OF_ATTACK_DEG)

        self.speed_input = QDoubleSpinBox()
        self.speed_input.setRange(1.0, 60.0)
        self.speed_input.setSingleStep(1.0)
        self.speed_input.setSuffix(" m/s")
        self.speed_input.setValue(DEFAULT_AIRSPEED_MS)

        self.lift_button = QPushButton("Lift (Cl)")
        self.drag_button = QPushButton("Drag (Cd)")
        self.ld_button = QPushButton("L/D")
        self.flight_button = QPushButton("Flight Numbers")

        self.flight_labels: dict[str, QLabel] = {}
        numbers_layout = QGridLayout()
        for col, name in enumerate(("Speed", "Glide", "Turn", "Fade")):
            title = QLabel(name)
            value = QLabel("—")
            value.setStyleSheet("font-size: 14pt; font-weight: bold;")
            numbers_layout.addWidget(title, 0, col)
            numbers_layout.addWidget(value, 1, col)
            self.flight_labels[name.lower()] = value

        self.result_label = QLabel("")
        self.result_label.setWordWrap(True)

        self.flight_path_plot = FlightPathWidget(self)

        # --- Layout ------------------------------------------------------
        input_layout = QHBoxLayout()
        input_layout.addWidget(QLabel("AoA:"))
        input_layout.addWidget(self.aoa_input)
        input_layout.addWidget(QLabel("Speed:"))
        input_layout.addWidget(self.speed_input)
        input_layout.addStretch(1)

        button_layout = QHBoxLayout()
        button_layout.addWidget(self.lift_button)
        button_layout.addWidget(self.drag_button)
        button_layout.addWidget(self.ld_button)
        button_layout.addWidget(self.flight_button)

        main_layout = QVBoxLayout()
        main_layout.addLayout(input_layout)
        main_layout.addLayout(button_layout)
        main_layout.addLayout(numbers_layout)
        main_layout.addWidget(self.result_label)
        main_layout.addWidget(self.flight_path_plot)
        self.setLayout(main_layout)

    def show_flight_numbers(self, numbers) -> None:
        for name, value in zip(("speed", "glide", "turn", "fade"), numbers.as_tuple()):
            self.flight_labels[name].setText(f"{value:g}")

    def set_buttons_enabled(self, enabled: bool) -> None:
        for button in (self.lift_button, self.drag_button, self.ld_button, self.flight_button):
            button.setEnabled(enabled)
