"""Lift coefficient from thin-airfoil theory applied to the anchor outline.

The zero-lift angle comes from a Glauert-transform integral over a coarse
camber line. The sign flip applied for noticeably cambered profiles is an
empirical correction for the y-down coordinate convention under uneven
sampling; it is a modelling approximation, not an exact result.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from core import config
from core.analysis.calculation_steps import CalculationStep, StepLog
from core.profile_model import ProfilePoint


@dataclass(frozen=True)
class LiftResult:
    cl: float = 0.0
    camber_ratio: float = 0.0
    max_camber_position: float = 0.0
    chord_length: float = 0.0
    alpha_zero_lift: float = 0.0  # degrees
    lift_curve_slope: float = 0.0  # per degree
    center_of_pressure: float = config.CENTER_OF_PRESSURE
    thickness_ratio: float = 0.0
    steps: list[CalculationStep] = field(default_factory=list)
    error: bool = False


def _sample_surfaces(anchors, min_x: float, chord: float):
    """Top (min y) and bottom (max y) anchor heights around evenly spaced stations."""
    window = chord * config.STATION_WINDOW_FRACTION
    top, bottom = [], []
    n = config.AIRFOIL_STATIONS
    for i in range(n + 1):
        x = min_x + chord * i / n
        nearby = [p.y for p in anchors if abs(p.x - x) < window]
        if nearby:
            top.append((x, min(nearby)))
            bottom.append((x, max(nearby)))
    return top, bottom


def _glauert_integral(camber, max_x: float, chord: float) -> float:
    total = 0.0
    for (x0, z0), (x1, z1) in zip(camber, camber[1:]):
        dx = x1 - x0
        if abs(dx) <= config.GLAUERT_MIN_DX:
            continue
        dzdx = (z1 - z0) / dx
        theta_prev = math.acos(max(-1.0, min(1.0, 1 - 2 * (max_x - x0) / chord)))
        theta_curr = math.acos(max(-1.0, min(1.0, 1 - 2 * (max_x - x1) / chord)))
        weight = 1 - math.cos((theta_prev + theta_curr) / 2)
        total += dzdx * weight * (theta_curr - theta_prev)
    return total


def calculate_lift_coefficient(
    points: Sequence[ProfilePoint],
    angle_of_attack: float = config.DEFAULT_ANGLE_OF_ATTACK_DEG,
) -> LiftResult:
    """
    Thin-airfoil lift coefficient of a profile at *angle_of_attack* degrees.

    Never raises: profiles with fewer than three anchors or a zero chord
    yield ``error=True`` with an explanatory trace.
    """
    log = StepLog()
    log.header("THIN AIRFOIL THEORY ANALYSIS")
    log.divider()

    anchors = [p for p in points if p.is_anchor]
    n_controls = len(points) - len(anchors)
    if len(anchors) < 3:
        log.error("ERROR: Insufficient anchor points for analysis")
        return LiftResult(steps=log.steps, error=True)

    log.info(f"Analyzing profile with {len(anchors)} anchor points...")
    log.code("anchors = [p for p in profile if p.is_anchor]")
    log.result(f"  → Found {len(anchors)} anchors, {n_controls} control handles")

    anchors = sorted(anchors, key=lambda p: p.x)
    xs = [p.x for p in anchors]
    ys = [p.y for p in anchors]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    chord = max_x - min_x

    log.divider()
    log.header("CHORD LINE CALCULATION")
    log.code("chord_length = max_x - min_x")
    log.calc(f"c = {max_x:.2f} - {min_x:.2f}")
    log.result(f"  → Chord length (c) = {chord:.3f} units")
    if chord <= 0:
        log.error("ERROR: Profile has zero chord length")
        return LiftResult(steps=log.steps, error=True)

    log.divider()
    log.header("SURFACE SAMPLING")
    log.info("Sampling profile at discrete stations...")
    top, bottom = _sample_surfaces(anchors, min_x, chord)
    log.code(f"for i in range({config.AIRFOIL_STATIONS} + 1):")
    log.code(f"    sample_surface_at(x=min_x + c * i / {config.AIRFOIL_STATIONS})")
    log.result(f"  → Top surface: {len(top)} stations sampled")
    log.result(f"  → Bottom surface: {len(bottom)} stations sampled")

    log.divider()
    log.header("CAMBER LINE COMPUTATION")
    log.info("Computing mean camber line z(x) = (z_upper + z_lower) / 2")
    camber = [(xt, (yt + yb) / 2) for (xt, yt), (_, yb) in zip(top, bottom)]
    camber.reverse()
    log.code("camber_line[i] = (x, (z_top + z_bottom) / 2)")
    log.result(f"  → Generated {len(camber)} camber line stations")

    log.divider()
    log.header("CAMBER LINE SLOPE INTEGRATION")
    log.info("Using Glauert transform: x/c = ½(1 - cos θ), θ ∈ [0,π]")
    log.formula("α₀ = (1/π) ∫₀^π (dz/dx)(1 - cos θ) dθ  (positive camber → α₀ < 0)")
    integral = _glauert_integral(camber, max_x, chord)
    alpha_zero_rad = -integral / math.pi
    log.code("integral_sum += dzdx * (1 - cos(theta_mid)) * d_theta")
    log.code("alpha_0 = -integral_sum / pi  # z positive up vs y positive down")
    log.calc(f"∫(dz/dx)dθ = {integral:.6f}")
    log.result(f"  → α₀ = {math.degrees(alpha_zero_rad):.4f}°")

    log.divider()
    log.header("MAXIMUM CAMBER ANALYSIS")
    leading_y = camber[0][1] if camber else 0.0
    trailing_y = camber[-1][1] if camber else 0.0
    chord_slope = (trailing_y - leading_y) / chord
    max_camber, max_camber_x = 0.0, min_x
    for x, z in camber:
        offset = abs(z - (leading_y + chord_slope * (x - min_x)))
        if offset > max_camber:
            max_camber, max_camber_x = offset, x
    max_camber_position = (max_camber_x - min_x) / chord
    camber_ratio = max_camber / chord
    log.calc(f"h_max = {max_camber:.4f} units")
    log.calc(f"x_camber = {max_camber_position * 100:.1f}% chord")
    log.result(f"  → Max camber (h) = {max_camber:.4f}")
    log.result(f"  → Camber ratio (h/c) = {camber_ratio * 100:.3f}%")

    if camber_ratio > config.CAMBER_SIGN_FLIP_RATIO and alpha_zero_rad > 0:
        alpha_zero_rad = -alpha_zero_rad
        log.info("Camber above 1% with positive α₀: sign corrected for y-down convention")

    log.divider()
    log.header("LIFT CURVE SLOPE")
    log.info("For thin airfoil: dCₗ/dα = 2π per radian")
    a0 = 2 * math.pi
    lift_curve_slope = math.radians(a0)
    log.code("a0 = 2 * pi")
    log.calc(f"a₀ = 2π = {a0:.4f} rad⁻¹")
    log.calc(f"a₀ = {lift_curve_slope:.4f} deg⁻¹")

    alpha_rad = math.radians(angle_of_attack)
    log.divider()
    log.code("# Angle of attack input")
    log.calc(f"α = {angle_of_attack:.1f}° = {alpha_rad:.4f} rad")

    log.divider()
    log.header("LIFT COEFFICIENT COMPUTATION")
    log.formula("Cₗ = a₀ × (α - α₀)")
    cl = a0 * (alpha_rad - alpha_zero_rad)
    log.code("cl = a0 * (alpha - alpha_0)")
    log.calc(f"Cₗ = {a0:.4f} × ({alpha_rad:.4f} - ({alpha_zero_rad:.4f}))")
    log.calc(f"Cₗ = {a0:.4f} × {alpha_rad - alpha_zero_rad:.4f}")
    log.divider()
    log.final(f"LIFT COEFFICIENT (Cₗ) = {cl:.4f}")

    thickness_ratio = (max_y - min_y) / chord
    log.divider()
    log.header("AERODYNAMIC PARAMETERS")
    log.result(f"  → Lift curve slope = {lift_curve_slope:.4f} per degree")
    log.result(f"  → Center of pressure = {config.CENTER_OF_PRESSURE * 100:.1f}% chord (thin airfoil)")
    log.result(f"  → Thickness ratio (t/c) = {thickness_ratio * 100:.2f}%")
    log.divider()
    log.success("Thin airfoil analysis complete.")

    return LiftResult(
        cl=cl,
        camber_ratio=camber_ratio,
        max_camber_position=max_camber_position,
        chord_length=chord,
        alpha_zero_lift=math.degrees(alpha_zero_rad),
        lift_curve_slope=lift_curve_slope,
        center_of_pressure=config.CENTER_OF_PRESSURE,
        thickness_ratio=thickness_ratio,
        steps=log.steps,
        error=False,
    )
