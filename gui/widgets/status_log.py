"""Read-only log output box used by the application to display messages."""

from __future__ import annotations

from html import escape

from PySide6.QtWidgets import QTextEdit, QVBoxLayout, QWidget
from PySide6.QtGui import QFont
from PySide6.QtCore import QTimer

from core.analysis.calculation_steps import format_step
from core.config import CALC_STEP_REVEAL_MS

STEP_COLORS = {
    "header": "#4FC3F7",
    "divider": "#666666",
    "info": "#CCCCCC",
    "code": "#B0BEC5",
    "formula": "#CE93D8",
    "calc": "#E0E0E0",
    "result": "#FFD54F",
    "final": "#81C784",
    "success": "#66BB6A",
    "error": "#FF6B6B",
}


class StatusLogWidget(QWidget):
    """Simple wrapper around ``QTextEdit`` that defaults to monospaced, read-only."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self._text_edit = QTextEdit()
        self._text_edit.setReadOnly(True)
        self._text_edit.setFont(QFont("Monospace", 9))

        # Calculation steps are revealed one per tick
        self._pending_steps = []
        self._reveal_timer = QTimer(self)
        self._reveal_timer.timeout.connect(self._reveal_next_step)

        layout = QVBoxLayout()
        layout.addWidget(self._text_edit)
        self.setLayout(layout)

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    def append(self, text: str) -> None:  # noqa: D401 (docstring style)
        """Append *text* to the log display."""
        self._text_edit.append(text)

    def clear(self) -> None:
        """Clear the log widget and drop any steps still waiting to be shown."""
        self._reveal_timer.stop()
        self._pending_steps.clear()
        self._text_edit.clear()

    def widget(self) -> QTextEdit:  # pragma: no cover
        """Return the underlying ``QTextEdit`` instance."""
        return self._text_edit

    # ------------------------------------------------------------------
    # Calculation steps
    # ------------------------------------------------------------------
    def append_steps(self, steps, interval_ms: int = CALC_STEP_REVEAL_MS) -> None:
        """Queue calculation *steps*; they appear one at a time every *interval_ms*."""
        self._pending_steps.extend(steps)
        if interval_ms <= 0:
            while self._pending_steps:
                self._reveal_next_step()
            return
        if not self._reveal_timer.isActive():
            self._reveal_timer.start(interval_ms)

    def is_revealing(self) -> bool:
        return self._reveal_timer.isActive()

    def _reveal_next_step(self) -> None:
        if not self._pending_steps:
            self._reveal_timer.stop()
            return
        step = self._pending_steps.pop(0)
        color = STEP_COLORS.get(step.kind, "#CCCCCC")
        weight = "bold" if step.kind in ("header", "final") else "normal"
        text = escape(format_step(step)).replace(" ", "&nbsp;")
        self._text_edit.append(f'<span style="color: {color}; font-weight: {weight};">{text}</span>')

        cursor = self._text_edit.textCursor()
        cursor.movePosition(cursor.MoveOperation.End)
        self._text_edit.setTextCursor(cursor)
