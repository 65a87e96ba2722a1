"""Design editing controller: point drags, topology edits, templates and dimensions."""

from __future__ import annotations

from typing import Any

from core.dimension_solver import parse_dimension_targets
from core.disc_processor import DiscProcessor


class DesignController:
    """Translates canvas gestures and design-panel actions into processor edits."""

    def __init__(self, processor: DiscProcessor, window: Any):
        self.processor = processor
        self.window = window
        self._dragging = False

    # ------------------------------------------------------------------
    # Canvas gestures
    # ------------------------------------------------------------------
    def handle_drag_started(self) -> None:
        self._dragging = True
        self.processor.begin_drag()

    def handle_point_dragged(self, index: int, x: float, y: float) -> None:
        # Only the drag start is recorded; intermediate positions are not undo steps
        self.processor.move_point(index, x, y, record_history=not self._dragging)

    def handle_drag_finished(self) -> None:
        self._dragging = False
        self.processor.request_plot_update()

    def handle_insert_requested(self, x: float, y: float) -> None:
        self.processor.insert_anchor_at(x, y)

    def handle_delete_requested(self, index: int) -> None:
        point = self.processor.points[index] if 0 <= index < len(self.processor.points) else None
        if point is None or not point.is_anchor:
            return
        self.processor.delete_anchor_at(index)

    # ------------------------------------------------------------------
    # Design panel
    # ------------------------------------------------------------------
    def handle_name_changed(self) -> None:
        self.processor.set_design_name(self.window.design_panel.name_input.text())

    def handle_template_reset(self) -> None:
        self.window.plot_widget.reset_view()
        self.processor.reset_to_template(self.window.design_panel.current_template())

    def handle_generate_naca(self) -> None:
        panel = self.window.design_panel
        self.window.plot_widget.reset_view()
        self.processor.load_naca(panel.naca_input.text(), panel.naca_chord_input.value())

    def handle_pdga_toggled(self, checked: bool) -> None:
        self.processor.set_pdga_mode(checked)

    def handle_undo(self) -> None:
        self.processor.undo()

    def handle_redo(self) -> None:
        self.processor.redo()

    # ------------------------------------------------------------------
    # Dimensions panel
    # ------------------------------------------------------------------
    def handle_apply_dimensions(self) -> None:
        panel = self.window.dimensions_panel
        targets, error = parse_dimension_targets(panel.field_texts())
        if error:
            self.processor.log_message.emit(f"Dimension error: {error}")
            return
        if self.processor.apply_dimensions(targets):
            panel.clear()

    def handle_clear_dimensions(self) -> None:
        self.window.dimensions_panel.clear()
