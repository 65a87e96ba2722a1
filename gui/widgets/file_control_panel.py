"""Widgets related to file operations: projects and STL / DXF export."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QVBoxLayout,
    QPushButton,
    QLabel,
    QWidget,
)

from core.config import DEFAULT_RESOLUTION, RESOLUTION_TIERS


class FileControlPanel(QGroupBox):
    """Panel containing project *New/Load/Save* and mesh/drawing export actions."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("File Operations", parent)

        # --- Widgets -----------------------------------------------------
        self.new_button = QPushButton("New")
        self.load_button = QPushButton("Load Project")
        self.load_button.setMinimumWidth(110)
        self.save_button = QPushButton("Save Project")
        self.save_button.setMinimumWidth(110)
        self.file_path_label = QLabel("No project file")

        self.export_stl_button = QPushButton("Export STL")
        self.export_stl_button.setMinimumWidth(110)
        self.export_dxf_button = QPushButton("Export DXF")
        self.export_dxf_button.setMinimumWidth(110)

        self.resolution_label = QLabel("Resolution:")
        self.resolution_combo = QComboBox()
        self.resolution_combo.addItems(list(RESOLUTION_TIERS))
        self.resolution_combo.setCurrentText(DEFAULT_RESOLUTION)

        # --- Layout ------------------------------------------------------
        project_layout = QHBoxLayout()
        project_layout.setSpacing(10)
        project_layout.addWidget(self.new_button)
        project_layout.addWidget(self.load_button)
        project_layout.addWidget(self.save_button)

        label_layout = QHBoxLayout()
        label_layout.addWidget(self.file_path_label, 1)

        export_layout = QHBoxLayout()
        export_layout.setSpacing(10)
        export_layout.addWidget(self.export_stl_button)
        export_layout.addWidget(self.export_dxf_button)
        export_layout.addStretch(1)

        resolution_layout = QHBoxLayout()
        resolution_layout.addWidget(self.resolution_label)
        resolution_layout.addWidget(self.resolution_combo)
        resolution_layout.addStretch(1)

        main_layout = QVBoxLayout()
        main_layout.addLayout(project_layout)
        main_layout.addLayout(label_layout)
        main_layout.addLayout(export_layout)
        main_layout.addLayout(resolution_layout)

        self.setLayout(main_layout)
