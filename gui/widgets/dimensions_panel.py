"""Target-dimension entry form for reshaping the profile."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.dimension_solver import DIMENSION_LABELS, DIMENSION_ORDER


class DimensionsPanel(QGroupBox):
    """One line edit per solvable dimension; empty fields are left alone."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Target Dimensions", parent)

        # --- Widgets -----------------------------------------------------
        self.inputs: dict[str, QLineEdit] = {}
        form = QFormLayout()
        for key, _attr, _tol in DIMENSION_ORDER:
            field = QLineEdit()
            field.setPlaceholderText("—")
            self.inputs[key] = field
            unit = "°" if key == "shoulder_slant_deg" else "mm"
            form.addRow(f"{DIMENSION_LABELS[key]} ({unit}):", field)

        self.apply_button = QPushButton("Apply Dimensions")
        self.clear_button = QPushButton("Clear")

        # --- Layout ------------------------------------------------------
        button_layout = QHBoxLayout()
        button_layout.addWidget(self.apply_button)
        button_layout.addWidget(self.clear_button)
        button_layout.addStretch(1)

        main_layout = QVBoxLayout()
        main_layout.addLayout(form)
        main_layout.addLayout(button_layout)
        self.setLayout(main_layout)

    def field_texts(self) -> dict[str, str]:
        return {key: field.text() for key, field in self.inputs.items()}

    def show_current(self, metrics: dict | None) -> None:
        """Show the measured values as placeholders so the user sees what they are changing."""
        for key, field in self.inputs.items():
            text = metrics.get(f"{key}_str", "—") if metrics else "—"
            field.setPlaceholderText(text)

    def clear(self) -> None:
        for field in self.inputs.values():
            field.clear()
