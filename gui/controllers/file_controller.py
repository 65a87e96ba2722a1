"""File operations controller for the Disc Designer GUI.

Handles project load/save and STL / DXF export dialogs.
"""

from __future__ import annotations

import os
import re
from typing import Any

from PySide6.QtWidgets import QFileDialog

from core import config
from core.disc_processor import DiscProcessor
from utils.project_io import default_project_filename
from utils.stl_exporter import design_stl_filename


class FileController:
    """Handles project persistence and export operations."""

    def __init__(self, processor: DiscProcessor, window: Any, main_controller: Any = None):
        self.processor = processor
        self.window = window
        self.main_controller = main_controller

    def new_design(self) -> None:
        self.processor.new_design()
        self.window.file_panel.file_path_label.setText("No project file")
        self.window.plot_widget.reset_view()
        if self.main_controller:
            self.main_controller.sync_design_inputs()

    def load_project(self) -> None:
        """Ask for a project file and replace the current design with it."""
        file_path, _ = QFileDialog.getOpenFileName(
            self.window,
            "Load Disc Project",
            "",
            f"Disc Projects (*{config.PROJECT_EXTENSION});;JSON Files (*.json);;All Files (*)",
        )
        if not file_path:
            return

        self.window.plot_widget.reset_view()
        if self.processor.load_project(file_path):
            self.window.file_panel.file_path_label.setText(os.path.basename(file_path))
            if self.main_controller:
                self.main_controller.sync_design_inputs()

    def save_project(self) -> None:
        self.processor.set_design_name(self.window.design_panel.name_input.text())
        file_path, _ = QFileDialog.getSaveFileName(
            self.window,
            "Save Disc Project",
            default_project_filename(self.processor.design_name),
            f"Disc Projects (*{config.PROJECT_EXTENSION});;All Files (*)",
        )
        if not file_path:
            self.processor.log_message.emit("Project save cancelled by user.")
            return

        if self.processor.save_project(file_path):
            self.window.file_panel.file_path_label.setText(os.path.basename(file_path))

    def export_stl(self) -> None:
        """Revolve the profile and save it as an ASCII STL mesh."""
        self.processor.set_design_name(self.window.design_panel.name_input.text())
        self.processor.set_resolution(self.window.file_panel.resolution_combo.currentText())
        file_path, _ = QFileDialog.getSaveFileName(
            self.window,
            "Save STL Mesh",
            design_stl_filename(self.processor.design_name),
            "STL Files (*.stl)",
        )
        if not file_path:
            self.processor.log_message.emit("STL export cancelled by user.")
            return
        self.processor.export_stl(file_path)

    def export_dxf(self) -> None:
        """Export the profile outline as DXF splines."""
        self.processor.set_design_name(self.window.design_panel.name_input.text())
        file_path, _ = QFileDialog.getSaveFileName(
            self.window,
            "Save Profile DXF File",
            self._get_default_dxf_filename(),
            "DXF Files (*.dxf)",
        )
        if not file_path:
            self.processor.log_message.emit("DXF export cancelled by user.")
            return

        if self.processor.export_dxf(file_path):
            self.processor.log_message.emit(
                "Note: For correct scale in CAD software, ensure import settings are configured for millimeters."
            )

    def _get_default_dxf_filename(self) -> str:
        """Return a safe default filename based on the design name."""
        sanitized = re.sub(r"[^A-Za-z0-9\-_]+", "_", self.processor.design_name)
        if sanitized:
            return f"{sanitized}.dxf"
        return "disc_profile.dxf"
