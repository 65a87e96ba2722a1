"""Empirical drag estimate: flat-plate skin friction plus a thickness form term."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core import config
from core.analysis.calculation_steps import CalculationStep, StepLog
from core.profile_model import ProfilePoint


@dataclass(frozen=True)
class DragResult:
    cd: float = 0.0
    cd_friction: float = 0.0
    cd_form: float = 0.0
    re: float = 0.0
    chord_length: float = 0.0  # mm
    thickness_ratio: float = 0.0
    steps: list[CalculationStep] = field(default_factory=list)
    error: bool = False


def calculate_drag_coefficient(
    points: Sequence[ProfilePoint],
    speed_ms: float = config.DEFAULT_AIRSPEED_MS,
) -> DragResult:
    """Approximate Cd of a profile at *speed_ms*; degenerate input gives ``error=True``."""
    nu = config.AIR_KINEMATIC_VISCOSITY
    k = config.FORM_DRAG_FACTOR
    log = StepLog()
    log.header("APPROXIMATE DRAG COEFFICIENT ANALYSIS")
    log.divider()
    log.info(
        f"Assumptions: smooth surface, incompressible air (ν ≈ {nu:g} m²/s), speed = {speed_ms:g} m/s. "
        "Cd is approximate; actual drag depends on surface finish and flight conditions."
    )
    log.divider()

    anchors = [p for p in points if p.is_anchor]
    if len(anchors) < 3:
        log.error("ERROR: Insufficient anchor points for analysis")
        return DragResult(steps=log.steps, error=True)

    log.info(f"Analyzing profile with {len(anchors)} anchor points...")
    log.code("anchors = [p for p in profile if p.is_anchor]")
    log.result(f"  → Found {len(anchors)} anchors, {len(points) - len(anchors)} control handles")

    xs = [p.x for p in anchors]
    ys = [p.y for p in anchors]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    chord_mm = max_x - min_x
    thickness_mm = max_y - min_y

    log.divider()
    log.header("CHORD AND THICKNESS")
    log.code("chord_length = max_x - min_x")
    log.calc(f"c = {max_x:.2f} - {min_x:.2f} = {chord_mm:.3f} mm")
    log.code("thickness = max_y - min_y")
    log.calc(f"t = {max_y:.2f} - {min_y:.2f} = {thickness_mm:.3f} mm")
    if chord_mm <= 0:
        log.error("ERROR: Profile has zero chord length")
        return DragResult(steps=log.steps, error=True)
    thickness_ratio = thickness_mm / chord_mm
    log.result(f"  → Chord (c) = {chord_mm:.3f} mm")
    log.result(f"  → Thickness ratio (t/c) = {thickness_ratio * 100:.2f}%")

    chord_m = chord_mm / 1000
    re = speed_ms * chord_m / nu
    log.divider()
    log.header("REYNOLDS NUMBER")
    log.formula("Re = V × c / ν")
    log.code("re = speed_ms * chord_m / NU_AIR")
    log.calc(f"Re = {speed_ms:g} × {chord_m:.6f} / {nu:g}")
    log.result(f"  → Re = {re:.0f}")

    log.divider()
    log.header("SKIN FRICTION DRAG")
    log.info("Turbulent flat-plate: Cf = 0.0592 × Re^(-0.2); Cd_friction ≈ 2×Cf (both sides)")
    log.formula("Cd_friction = 2 × 0.0592 × Re^(-0.2)")
    cd_friction = 2 * 0.0592 * re ** -0.2 if re > 0 else 0.0
    log.code("cd_friction = 2 * 0.0592 * re ** -0.2")
    log.calc(f"Cd_friction = {cd_friction:.6f}")
    log.result(f"  → Cd_friction = {cd_friction:.4f}")

    log.divider()
    log.header("FORM DRAG")
    log.info(f"Correlation: Cd_form = k × (t/c)², k = {k}")
    log.formula("Cd_form = k × (t/c)²")
    cd_form = k * thickness_ratio ** 2
    log.code("cd_form = k * thickness_ratio ** 2")
    log.calc(f"Cd_form = {k} × ({thickness_ratio:.4f})² = {cd_form:.6f}")
    log.result(f"  → Cd_form = {cd_form:.4f}")

    log.divider()
    log.header("TOTAL DRAG COEFFICIENT")
    log.formula("Cd = Cd_friction + Cd_form")
    cd = cd_friction + cd_form
    log.code("cd = cd_friction + cd_form")
    log.calc(f"Cd = {cd_friction:.4f} + {cd_form:.4f}")
    log.final(f"DRAG COEFFICIENT (Cd) = {cd:.4f}")
    log.divider()
    log.success("Approximate drag analysis complete.")

    return DragResult(
        cd=cd,
        cd_friction=cd_friction,
        cd_form=cd_form,
        re=re,
        chord_length=chord_mm,
        thickness_ratio=thickness_ratio,
        steps=log.steps,
        error=False,
    )
