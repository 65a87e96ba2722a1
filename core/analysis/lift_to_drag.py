"""Lift-to-drag ratio and its rough disc-class reading."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

from core import config
from core.analysis.calculation_steps import CalculationStep, StepLog
from core.analysis.drag_coefficient import DragResult, calculate_drag_coefficient
from core.analysis.thin_airfoil import LiftResult, calculate_lift_coefficient
from core.profile_model import ProfilePoint

# Putters sit below the first threshold, drivers at or above the second.
PUTTER_THRESHOLD = 2.2
DRIVER_THRESHOLD = 3.4


class LdInterpretation(NamedTuple):
    category: str | None
    message: str | None
    hint: str | None


@dataclass(frozen=True)
class LiftToDragResult:
    ld: float | None
    lift: LiftResult
    drag: DragResult
    interpretation: LdInterpretation
    steps: list[CalculationStep] = field(default_factory=list)
    error: bool = False


def get_ld_interpretation(ld: float | None) -> LdInterpretation:
    if ld is None or not math.isfinite(ld):
        return LdInterpretation(None, None, None)
    if ld < PUTTER_THRESHOLD:
        return LdInterpretation(
            "putter",
            "Based on this L/D, this design would most likely behave like a putter.",
            "Putters favor control and shorter, predictable flights.",
        )
    if ld < DRIVER_THRESHOLD:
        return LdInterpretation(
            "midrange",
            "Based on this L/D, this design would most likely behave like a midrange.",
            "Midranges offer a balance of control and distance.",
        )
    return LdInterpretation(
        "driver",
        "Based on this L/D, this design would most likely behave like a driver.",
        "Drivers are optimized for distance and longer flights.",
    )


def calculate_lift_to_drag(
    points: Sequence[ProfilePoint],
    angle_of_attack: float = config.DEFAULT_ANGLE_OF_ATTACK_DEG,
    speed_ms: float = config.DEFAULT_AIRSPEED_MS,
) -> LiftToDragResult:
    """Run the lift and drag pipelines and combine them into L/D."""
    lift = calculate_lift_coefficient(points, angle_of_attack)
    drag = calculate_drag_coefficient(points, speed_ms)

    log = StepLog()
    log.header("LIFT-TO-DRAG RATIO")
    log.divider()
    if lift.error or drag.error or drag.cd <= 0:
        log.error("ERROR: Lift or drag analysis failed; L/D unavailable")
        return LiftToDragResult(None, lift, drag, get_ld_interpretation(None), log.steps, error=True)

    ld = lift.cl / drag.cd
    interpretation = get_ld_interpretation(ld)
    log.formula("L/D = Cₗ / Cd")
    log.calc(f"L/D = {lift.cl:.4f} / {drag.cd:.4f}")
    log.final(f"L/D = {ld:.2f}")
    log.info(interpretation.message)
    log.info(interpretation.hint)
    log.success("Lift-to-drag analysis complete.")
    return LiftToDragResult(ld, lift, drag, interpretation, log.steps, error=False)
