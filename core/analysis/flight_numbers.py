"""Heuristic speed/glide/turn/fade ratings and a toy flight path.

None of this is derived from physics: fixed weighted formulas map simple
shape descriptors of the control polygon onto the usual rating ranges.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

import numpy as np

from core import config
from core.analysis.calculation_steps import CalculationStep, StepLog
from core.profile_model import ProfilePoint, points_to_array
from utils.geometry_utils import bounding_box, pairwise_distances, shoelace_area


@dataclass(frozen=True)
class FlightNumbers:
    speed: float = 1.0
    glide: float = 1.0
    turn: float = 0.0
    fade: float = 0.0
    steps: list[CalculationStep] = field(default_factory=list)
    error: bool = False

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.speed, self.glide, self.turn, self.fade)


class FlightPathPoint(NamedTuple):
    x: float
    y: float
    z: float
    t: float
    rotation: float
    velocity: float


@dataclass(frozen=True)
class ShapeDescriptors:
    width: float
    height: float
    rim_depth: float
    dome_height: float
    edge_sharpness: float
    smoothness: float
    area: float
    asymmetry: float
    anchor_count: int
    control_count: int


def round_to_quarter(value: float) -> float:
    # Half-way cases round up, not to even
    return round(math.floor(value * 4 + 0.5) / 4, 2)


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    return max(bounds[0], min(bounds[1], value))


def _rim_depth_ratio(rim_y: np.ndarray, total_range: float) -> float:
    if len(rim_y) < 2:
        return 0.5
    return float(rim_y.max() - rim_y.min()) / total_range if total_range > 0 else 0.5


def _dome_height_ratio(dome_y: np.ndarray, total_range: float) -> float:
    if len(dome_y) < 1:
        return 0.5
    return float(abs(dome_y.max() - dome_y.min())) / total_range if total_range > 0 else 0.5


def _edge_sharpness(anchors: np.ndarray, controls: np.ndarray, width: float) -> float:
    """Mean anchor-to-handle distance relative to width, pairing the i-th anchor with the i-th handle."""
    if len(controls) < 2 or width <= 0:
        return 0.5
    n = min(len(anchors), len(controls))
    if n == 0:
        return 0.5
    return float(np.mean(pairwise_distances(anchors[:n], controls[:n]) / width))


def _smoothness(controls: np.ndarray, width: float) -> float:
    if len(controls) < 2 or width <= 0:
        return 1.0
    return float(np.sum(pairwise_distances(controls[1:], controls[:-1]) / width) / len(controls))


def _asymmetry(anchors: np.ndarray, center_y: float) -> float:
    ys = anchors[:, 1]
    top = float(np.sum(np.abs(ys[ys < center_y] - center_y)))
    bottom = float(np.sum(np.abs(ys[ys >= center_y] - center_y)))
    if top + bottom == 0:
        return 0.0
    return (top - bottom) / (top + bottom)


def describe_shape(points: Sequence[ProfilePoint]) -> ShapeDescriptors:
    """Normalized shape descriptors of a profile's control polygon."""
    anchors = points_to_array([p for p in points if p.is_anchor])
    controls = points_to_array([p for p in points if p.is_control])
    min_x, max_x, min_y, max_y = bounding_box(points_to_array(points))
    width, height = max_x - min_x, max_y - min_y

    rim_edge = max_x - width * config.RIM_REGION_FRACTION
    rim = anchors[anchors[:, 0] > rim_edge]
    dome = anchors[anchors[:, 0] < rim_edge]

    return ShapeDescriptors(
        width=width,
        height=height,
        rim_depth=_rim_depth_ratio(rim[:, 1], height),
        dome_height=_dome_height_ratio(dome[:, 1], height),
        edge_sharpness=_edge_sharpness(anchors, controls, width),
        smoothness=_smoothness(controls, width),
        area=shoelace_area(anchors) / (width * height + 1),
        asymmetry=_asymmetry(anchors, (min_y + max_y) / 2),
        anchor_count=len(anchors),
        control_count=len(controls),
    )


def _speed(d: ShapeDescriptors) -> float:
    height_ratio = min(d.height / max(d.width, 1), 1)
    speed = 7 + min(d.area * 8, 3) + min(d.smoothness * 5, 2) - height_ratio * 2
    speed += d.anchor_count * 0.18 + d.control_count * 0.11
    return _clamp(speed, config.SPEED_RANGE)


def _glide(d: ShapeDescriptors) -> float:
    glide = 3.5 + min(d.dome_height * 4, 2) + min(d.smoothness * 3, 1.5) - min(d.edge_sharpness * 2, 1)
    glide += d.anchor_count * 0.13 - d.rim_depth * 0.5
    return _clamp(glide, config.GLIDE_RANGE)


def _turn(d: ShapeDescriptors) -> float:
    turn = -0.5 - d.rim_depth * 4 + d.asymmetry * 3 - d.edge_sharpness * 1.5
    turn += d.anchor_count * 0.12 - d.dome_height * 0.8
    return _clamp(turn, config.TURN_RANGE)


def _fade(d: ShapeDescriptors) -> float:
    fade = 1.5 + d.rim_depth * 5 + d.edge_sharpness * 1.2 - d.dome_height * 0.8
    fade += d.anchor_count * 0.14 + d.control_count * 0.07
    return _clamp(fade, config.FADE_RANGE)


def calculate_flight_numbers(points: Sequence[ProfilePoint]) -> FlightNumbers:
    """
    Rate a profile on the four-number flight scale.

    Each rating is clamped to its range (speed 1 to 14.75, glide 1 to 7,
    turn -5 to 1, fade 0 to 5) and rounded to the nearest quarter.
    Profiles with fewer than three anchors return the default ratings with
    ``error=True``.
    """
    log = StepLog()
    log.header("FLIGHT NUMBER HEURISTIC")
    log.divider()

    n_anchors = sum(1 for p in points if p.is_anchor)
    if len(points) < 3 or n_anchors < 3:
        log.error("ERROR: Insufficient anchor points for analysis")
        return FlightNumbers(steps=log.steps, error=True)

    d = describe_shape(points)
    log.info(f"Analyzing profile with {d.anchor_count} anchors, {d.control_count} control handles...")
    log.header("SHAPE DESCRIPTORS")
    log.calc(f"width = {d.width:.2f}, height = {d.height:.2f}")
    log.result(f"  → Rim depth ratio = {d.rim_depth:.3f}")
    log.result(f"  → Dome height ratio = {d.dome_height:.3f}")
    log.result(f"  → Edge sharpness = {d.edge_sharpness:.3f}")
    log.result(f"  → Smoothness = {d.smoothness:.3f}")
    log.result(f"  → Normalized area = {d.area:.3f}")
    log.result(f"  → Asymmetry = {d.asymmetry:.3f}")

    log.divider()
    log.header("RATINGS")
    log.formula("speed = 7 + min(8A, 3) + min(5S, 2) - 2·h/w + 0.18·n_a + 0.11·n_c")
    log.formula("glide = 3.5 + min(4D, 2) + min(3S, 1.5) - min(2E, 1) + 0.13·n_a - 0.5R")
    log.formula("turn = -0.5 - 4R + 3Y - 1.5E + 0.12·n_a - 0.8D")
    log.formula("fade = 1.5 + 5R + 1.2E - 0.8D + 0.14·n_a + 0.07·n_c")
    speed, glide, turn, fade = (round_to_quarter(f(d)) for f in (_speed, _glide, _turn, _fade))
    log.final(f"FLIGHT NUMBERS = {speed:g} | {glide:g} | {turn:g} | {fade:g}")
    log.divider()
    log.success("Flight number estimate complete.")

    return FlightNumbers(speed=speed, glide=glide, turn=turn, fade=fade, steps=log.steps, error=False)


def simulate_flight_path(numbers: FlightNumbers, throw_power: float = 1.0) -> list[FlightPathPoint]:
    """
    Deterministic 101-sample flight path for *numbers*.

    x is downrange distance, y lateral drift (turn first, then fade) and z
    height following a rise, plateau and descent envelope.
    """
    speed, glide, turn, fade = numbers.as_tuple()
    total_distance = (speed * 25 + glide * 15) * throw_power
    max_height = glide * 8 * throw_power
    turn_phase_end, fade_phase_start = 0.6, 0.65

    path = []
    steps = config.FLIGHT_PATH_STEPS
    for i in range(steps + 1):
        t = i / steps
        x = t * total_distance

        if t < turn_phase_end:
            y = turn * 15 * (t / turn_phase_end) ** 1.5 * throw_power
        else:
            fade_progress = max(0.0, (t - fade_phase_start) / (1 - fade_phase_start))
            y = turn * 15 * throw_power - fade * 20 * fade_progress ** 2 * throw_power

        if t < 0.3:
            z = max_height * (t / 0.3)
        elif t < 0.7:
            z = max_height
        else:
            z = max_height * (1 - ((t - 0.7) / 0.3) ** 1.5)

        velocity = 1 - t * 0.6
        path.append(FlightPathPoint(x, y, max(0.0, z), t, 360 * 8 * t * velocity, velocity))
    return path
