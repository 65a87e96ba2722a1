"""Labelled derivation traces shared by the analysis pipelines."""
from __future__ import annotations

from typing import NamedTuple

STEP_KINDS = ("header", "divider", "info", "code", "formula", "calc", "result", "final", "success", "error")


class CalculationStep(NamedTuple):
    kind: str
    text: str = ""


class StepLog:
    """Append-only list of :class:`CalculationStep` with one helper per kind."""

    def __init__(self) -> None:
        self.steps: list[CalculationStep] = []

    def add(self, kind: str, text: str = "") -> None:
        if kind not in STEP_KINDS:
            raise ValueError(f"Unknown step kind: {kind}")
        self.steps.append(CalculationStep(kind, text))

    def header(self, text: str) -> None:
        self.add("header", text)

    def divider(self) -> None:
        self.add("divider")

    def info(self, text: str) -> None:
        self.add("info", text)

    def code(self, text: str) -> None:
        self.add("code", text)

    def formula(self, text: str) -> None:
        self.add("formula", text)

    def calc(self, text: str) -> None:
        self.add("calc", text)

    def result(self, text: str) -> None:
        self.add("result", text)

    def final(self, text: str) -> None:
        self.add("final", text)

    def success(self, text: str) -> None:
        self.add("success", text)

    def error(self, text: str) -> None:
        self.add("error", text)


def format_step(step: CalculationStep) -> str:
    """Plain-text rendering used by the console and the status log."""
    if step.kind == "divider":
        return "-" * 60
    if step.kind == "header":
        return f"== {step.text} =="
    if step.kind == "code":
        return f"    {step.text}"
    if step.kind == "final":
        return f">>> {step.text}"
    if step.kind == "error":
        return f"!! {step.text}"
    return step.text
