"""Main controller for the Disc Designer GUI.

Orchestrates the other controllers and handles signal routing between GUI and processor.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject

from core.disc_processor import DiscProcessor
from gui.main_window import MainWindow

from .analysis_controller import AnalysisController
from .design_controller import DesignController
from .file_controller import FileController


class MainController(QObject):
    """Main controller that orchestrates all other controllers and handles signal routing."""

    def __init__(self, window: MainWindow):
        super().__init__(window)

        self.window = window
        setattr(self.window, "main_controller", self)
        self.processor = DiscProcessor(self)
        self.processor.install_log_handler()

        # Initialize sub-controllers
        self.design_controller = DesignController(self.processor, self.window)
        self.file_controller = FileController(self.processor, self.window, self)
        self.analysis_controller = AnalysisController(self.processor, self.window)

        # ------------------------------------------------------------------
        # Wire up processor signals
        # ------------------------------------------------------------------
        self.processor.log_message.connect(self.window.status_log.append)
        self.processor.plot_update_requested.connect(self._update_plot_from_processor)

        # ------------------------------------------------------------------
        # Connect widget signals → controller slots
        # ------------------------------------------------------------------
        self._connect_signals()

        # ------------------------------------------------------------------
        # Initial UI state
        # ------------------------------------------------------------------
        self.window.comb_panel.update_labels()
        self.sync_design_inputs()
        self.processor.log_message.emit("Application started. Drag points to shape the profile.")
        self.processor.request_plot_update()

    def _connect_signals(self) -> None:
        """Connect all GUI signals to their respective controller methods."""
        # File operations
        fp = self.window.file_panel
        fp.new_button.clicked.connect(self.file_controller.new_design)
        fp.load_button.clicked.connect(self.file_controller.load_project)
        fp.save_button.clicked.connect(self.file_controller.save_project)
        fp.export_stl_button.clicked.connect(self.file_controller.export_stl)
        fp.export_dxf_button.clicked.connect(self.file_controller.export_dxf)
        fp.resolution_combo.currentTextChanged.connect(self.processor.set_resolution)

        # Canvas gestures
        plot = self.window.plot_widget
        plot.drag_started.connect(self.design_controller.handle_drag_started)
        plot.point_dragged.connect(self.design_controller.handle_point_dragged)
        plot.drag_finished.connect(self.design_controller.handle_drag_finished)
        plot.insert_requested.connect(self.design_controller.handle_insert_requested)
        plot.point_delete_requested.connect(self.design_controller.handle_delete_requested)

        # Design settings
        design = self.window.design_panel
        design.name_input.editingFinished.connect(self.design_controller.handle_name_changed)
        design.apply_template_button.clicked.connect(self.design_controller.handle_template_reset)
        design.naca_button.clicked.connect(self.design_controller.handle_generate_naca)
        design.naca_input.returnPressed.connect(self.design_controller.handle_generate_naca)
        design.pdga_checkbox.toggled.connect(self.design_controller.handle_pdga_toggled)
        design.undo_button.clicked.connect(self.design_controller.handle_undo)
        design.redo_button.clicked.connect(self.design_controller.handle_redo)

        # Dimensions
        dims = self.window.dimensions_panel
        dims.apply_button.clicked.connect(self.design_controller.handle_apply_dimensions)
        dims.clear_button.clicked.connect(self.design_controller.handle_clear_dimensions)

        # Analysis
        analysis = self.window.analysis_panel
        analysis.lift_button.clicked.connect(self.analysis_controller.run_lift)
        analysis.drag_button.clicked.connect(self.analysis_controller.run_drag)
        analysis.ld_button.clicked.connect(self.analysis_controller.run_lift_to_drag)
        analysis.flight_button.clicked.connect(self.analysis_controller.run_flight)

        # Comb parameters
        comb = self.window.comb_panel
        comb.comb_scale_slider.valueChanged.connect(self.handle_comb_params_changed)
        comb.comb_density_slider.valueChanged.connect(self.handle_comb_params_changed)

    def sync_design_inputs(self) -> None:
        """Push processor settings back into the inputs after a load or reset."""
        design = self.window.design_panel
        design.name_input.setText(self.processor.design_name)
        index = design.template_combo.findData(self.processor.disc_template)
        if index >= 0:
            design.template_combo.setCurrentIndex(index)
        design.pdga_checkbox.blockSignals(True)
        design.pdga_checkbox.setChecked(self.processor.pdga_mode)
        design.pdga_checkbox.blockSignals(False)
        fp = self.window.file_panel
        fp.resolution_combo.blockSignals(True)
        fp.resolution_combo.setCurrentText(self.processor.resolution)
        fp.resolution_combo.blockSignals(False)

    def handle_comb_params_changed(self) -> None:
        """Handle changes in comb scale/density sliders."""
        comb = self.window.comb_panel
        comb.update_labels()
        density, scale = comb.values()
        self.processor.set_comb_params(density, scale)

    def _update_plot_from_processor(self, plot_data: dict[str, Any]) -> None:
        """Receive plot data from the processor and forward to the widgets."""
        self._last_plot_data = plot_data
        self.window.plot_widget.plot_profile(**plot_data)
        self.window.dimensions_panel.show_current(plot_data.get("metrics"))
        self.update_button_states(plot_data)

    def update_button_states(self, plot_data: dict[str, Any]) -> None:
        """Enable/disable buttons based on current processor state."""
        design = self.window.design_panel
        design.undo_button.setEnabled(plot_data.get("can_undo", False))
        design.redo_button.setEnabled(plot_data.get("can_redo", False))

        has_profile = plot_data.get("metrics") is not None
        self.window.analysis_panel.set_buttons_enabled(has_profile)
        fp = self.window.file_panel
        fp.export_stl_button.setEnabled(has_profile)
        fp.export_dxf_button.setEnabled(has_profile)
        self.window.dimensions_panel.apply_button.setEnabled(has_profile)
