"""Design-level settings: name, starting template, NACA seed, PDGA mode and history."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDoubleSpinBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.config import DEFAULT_DESIGN_NAME, DEFAULT_TEMPLATE, NACA_DEFAULT_CHORD_MM
from core.disc_templates import TEMPLATES


class DesignPanel(QGroupBox):
    """Panel for choosing how the profile starts and how edits are constrained."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Design", parent)

        # --- Widgets -----------------------------------------------------
        self.name_input = QLineEdit(DEFAULT_DESIGN_NAME)

        self.template_combo = QComboBox()
        for key, template in TEMPLATES.items():
            self.template_combo.addItem(template.title, key)
        self.template_combo.setCurrentIndex(self.template_combo.findData(DEFAULT_TEMPLATE))
        self.apply_template_button = QPushButton("Reset to Template")

        self.naca_input = QLineEdit()
        self.naca_input.setPlaceholderText("e.g. 2412 or 23012")
        self.naca_input.setMaximumWidth(110)
        self.naca_chord_input = QDoubleSpinBox()
        self.naca_chord_input.setRange(10.0, 300.0)
        self.naca_chord_input.setDecimals(1)
        self.naca_chord_input.setSuffix(" mm")
        self.naca_chord_input.setValue(NACA_DEFAULT_CHORD_MM)
        self.naca_button = QPushButton("Generate NACA")

        self.pdga_checkbox = QCheckBox("PDGA mode (clamp to regulation limits)")

        self.undo_button = QPushButton("Undo")
        self.redo_button = QPushButton("Redo")

        self.hint_label = QLabel("Drag points to edit. Double-click to add an anchor, right-click to remove one.")
        self.hint_label.setWordWrap(True)

        # --- Layout ------------------------------------------------------
        name_layout = QHBoxLayout()
        name_layout.addWidget(QLabel("Name:"))
        name_layout.addWidget(self.name_input, 1)

        template_layout = QHBoxLayout()
        template_layout.addWidget(QLabel("Template:"))
        template_layout.addWidget(self.template_combo, 1)
        template_layout.addWidget(self.apply_template_button)

        naca_layout = QHBoxLayout()
        naca_layout.addWidget(QLabel("NACA:"))
        naca_layout.addWidget(self.naca_input)
        naca_layout.addWidget(self.naca_chord_input)
        naca_layout.addWidget(self.naca_button)

        history_layout = QHBoxLayout()
        history_layout.addWidget(self.undo_button)
        history_layout.addWidget(self.redo_button)
        history_layout.addStretch(1)

        main_layout = QVBoxLayout()
        main_layout.addLayout(name_layout)
        main_layout.addLayout(template_layout)
        main_layout.addLayout(naca_layout)
        main_layout.addWidget(self.pdga_checkbox)
        main_layout.addLayout(history_layout)
        main_layout.addWidget(self.hint_label)

        self.setLayout(main_layout)

    def current_template(self) -> str:
        return self.template_combo.currentData()
