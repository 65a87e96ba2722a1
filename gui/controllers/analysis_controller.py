"""Analysis controller: runs the aerodynamic estimates and shows their derivations."""

from __future__ import annotations

from typing import Any

from core.disc_processor import DiscProcessor


class AnalysisController:
    """Bridges the analysis panel buttons to the processor."""

    def __init__(self, processor: DiscProcessor, window: Any):
        self.processor = processor
        self.window = window

    def _inputs(self) -> tuple[float, float]:
        panel = self.window.analysis_panel
        return panel.aoa_input.value(), panel.speed_input.value()

    def _show_steps(self, steps) -> None:
        self.window.status_log.append_steps(steps)

    def run_lift(self) -> None:
        aoa, _speed = self._inputs()
        result = self.processor.run_lift_analysis(aoa)
        self._show_steps(result.steps)
        if result.error:
            self.window.analysis_panel.result_label.setText("Lift analysis failed.")
            return
        self.window.analysis_panel.result_label.setText(
            f"Cl = {result.cl:.4f} at {aoa:g}° (α₀ = {result.alpha_zero_lift:.2f}°)"
        )

    def run_drag(self) -> None:
        _aoa, speed = self._inputs()
        result = self.processor.run_drag_analysis(speed)
        self._show_steps(result.steps)
        if result.error:
            self.window.analysis_panel.result_label.setText("Drag analysis failed.")
            return
        self.window.analysis_panel.result_label.setText(
            f"Cd = {result.cd:.4f} at {speed:g} m/s (Re = {result.re:,.0f})"
        )

    def run_lift_to_drag(self) -> None:
        aoa, speed = self._inputs()
        result = self.processor.run_lift_to_drag(aoa, speed)
        self._show_steps(result.steps)
        if result.error or result.ld is None:
            self.window.analysis_panel.result_label.setText("L/D could not be computed.")
            return
        text = f"L/D = {result.ld:.2f}"
        if result.interpretation.message:
            text += f"\n{result.interpretation.message}\n{result.interpretation.hint}"
        self.window.analysis_panel.result_label.setText(text)

    def run_flight(self) -> None:
        numbers, path = self.processor.run_flight_analysis()
        self._show_steps(numbers.steps)
        panel = self.window.analysis_panel
        panel.show_flight_numbers(numbers)
        panel.flight_path_plot.plot_path(path)
        if numbers.error:
            panel.result_label.setText("Flight numbers fell back to defaults.")
        else:
            speed, glide, turn, fade = numbers.as_tuple()
            panel.result_label.setText(f"{speed:g} | {glide:g} | {turn:g} | {fade:g}")
