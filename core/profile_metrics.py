"""Scalar disc dimensions derived from the evaluated profile curve.

All radii and angles are local finite-difference estimates on the sampled
polyline, not analytic curvature. A feature sample that sits at either end
of the sample sequence has no two-sided neighbourhood and reports ``None``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from core import config
from core.profile_model import ProfilePoint, get_anchors
from utils.bezier_utils import generate_bezier_points


@dataclass(frozen=True)
class ProfileGeometry:
    points: np.ndarray
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    diameter: float
    height: float
    shoulder_idx: int
    shoulder_x: float
    shoulder_y: float
    rim_width: float
    rim_depth: float
    rim_min_y: float
    rim_max_y: float
    inside_rim_diameter: float
    parting_line_height: float | None
    nose_radius: float | None
    dome_radius: float | None
    shoulder_slant_deg: float | None
    shoulder_segment_index: int
    anchors: list[tuple[int, ProfilePoint]]


def _curvature_radius(samples: np.ndarray, idx: int) -> float | None:
    """Radius of curvature at sample *idx* from centered differences, or ``None``."""
    if idx <= 0 or idx >= len(samples) - 1:
        return None
    p0, p1, p2 = samples[idx - 1], samples[idx], samples[idx + 1]
    dx, dy = (p2 - p0) / 2.0
    ddx, ddy = p2 - 2.0 * p1 + p0
    denom = (dx * dx + dy * dy) ** 1.5 or 1e-10
    kappa = (dx * ddy - dy * ddx) / denom
    if abs(kappa) <= config.CURVATURE_EPS:
        return None
    return 1.0 / abs(kappa)


def _within(value: float | None, bounds: tuple[float, float]) -> float | None:
    if value is None or not bounds[0] <= value <= bounds[1]:
        return None
    return value


def _find_shoulder(samples: np.ndarray, max_x: float) -> int:
    """Index of the steepest sample in the outer part of the profile."""
    threshold = config.SHOULDER_SEARCH_FRACTION * max_x
    shoulder_idx = -1
    max_slope = -1.0
    for i in range(1, len(samples) - 1):
        if samples[i, 0] < threshold:
            continue
        dx, dy = samples[i + 1] - samples[i - 1]
        if math.hypot(dx, dy) < 1e-6:
            slope = 0.0
        elif dx == 0:
            slope = math.inf
        else:
            slope = abs(dy / dx)
        if slope > max_slope:
            max_slope = slope
            shoulder_idx = i

    if shoulder_idx < 0:
        outer = np.flatnonzero(samples[:, 0] >= threshold)
        shoulder_idx = int(outer[0]) if outer.size else len(samples) - 1
    return shoulder_idx


def get_profile_geometry(points: Sequence[ProfilePoint]) -> ProfileGeometry | None:
    """
    Extract the geometry snapshot of a profile.

    Returns ``None`` for profiles with fewer than three points or whose
    curve evaluates to fewer than four samples.
    """
    if points is None or len(points) < 3:
        return None
    segments_per_curve = config.SEGMENTS_PER_CURVE_METRICS
    samples = generate_bezier_points(points, segments_per_curve, closed=True)
    if len(samples) < 4:
        return None

    min_x, min_y = samples.min(axis=0)
    max_x, max_y = samples.max(axis=0)
    min_x, max_x, min_y, max_y = float(min_x), float(max_x), float(min_y), float(max_y)

    shoulder_idx = _find_shoulder(samples, max_x)
    shoulder_x, shoulder_y = (float(v) for v in samples[shoulder_idx])

    rim_mask = samples[:, 0] >= shoulder_x - config.SHOULDER_MATCH_TOL_MM
    rim_min_y = float(samples[rim_mask, 1].min()) if rim_mask.any() else min_y
    rim_max_y = float(samples[rim_mask, 1].max()) if rim_mask.any() else max_y

    # Nose: first sample sitting at the maximum radius
    nose_indices = np.flatnonzero(np.abs(samples[:, 0] - max_x) < config.EXTREMUM_MATCH_TOL)
    parting_line_height = float(samples[nose_indices[0], 1]) if nose_indices.size else None
    nose_radius = _curvature_radius(samples, int(nose_indices[0])) if nose_indices.size else None
    nose_radius = _within(nose_radius, config.NOSE_RADIUS_RANGE)

    # Dome: lowest-on-screen (max y) sample between the axis side and the shoulder
    dome_radius = None
    top_indices = np.flatnonzero(
        (samples[:, 0] <= shoulder_x + config.SHOULDER_MATCH_TOL_MM) & (samples[:, 0] >= min_x)
    )
    if top_indices.size >= 3:
        apex_idx = int(top_indices[np.argmax(samples[top_indices, 1])])
        dome_radius = _within(_curvature_radius(samples, apex_idx), config.DOME_RADIUS_RANGE)

    shoulder_slant_deg = None
    if 0 < shoulder_idx < len(samples) - 1:
        dx, dy = samples[shoulder_idx + 1] - samples[shoulder_idx - 1]
        shoulder_slant_deg = math.degrees(math.atan2(dy, dx))

    anchors = get_anchors(points)
    shoulder_segment_index = min(shoulder_idx // (segments_per_curve + 1), len(anchors) - 1)

    return ProfileGeometry(
        points=samples,
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        diameter=2.0 * max_x,
        height=max_y - min_y,
        shoulder_idx=shoulder_idx,
        shoulder_x=shoulder_x,
        shoulder_y=shoulder_y,
        rim_width=max_x - shoulder_x,
        rim_depth=rim_max_y - rim_min_y,
        rim_min_y=rim_min_y,
        rim_max_y=rim_max_y,
        inside_rim_diameter=2.0 * shoulder_x,
        parting_line_height=parting_line_height,
        nose_radius=nose_radius,
        dome_radius=dome_radius,
        shoulder_slant_deg=shoulder_slant_deg,
        shoulder_segment_index=shoulder_segment_index,
        anchors=anchors,
    )


METRIC_KEYS = (
    "diameter",
    "height",
    "rim_width",
    "rim_depth",
    "inside_rim_diameter",
    "nose_radius",
    "parting_line_height",
    "dome_radius",
    "shoulder_slant_deg",
)


def _fmt(value: float | None, decimals: int = 1) -> str:
    if value is None or not math.isfinite(value):
        return "—"
    return f"{value:.{decimals}f}"


def get_profile_metrics(points: Sequence[ProfilePoint]) -> dict | None:
    """Live metrics for display: raw values plus ``*_str`` formatted strings."""
    geo = get_profile_geometry(points)
    if geo is None:
        return None

    metrics = {key: getattr(geo, key) for key in METRIC_KEYS}
    for key in ("diameter", "height", "rim_width", "rim_depth", "inside_rim_diameter", "parting_line_height"):
        metrics[f"{key}_str"] = _fmt(metrics[key])
    metrics["nose_radius_str"] = _fmt(geo.nose_radius, 2)
    if geo.dome_radius is None:
        metrics["dome_radius_str"] = "—"
    elif geo.dome_radius > config.DOME_FLAT_DISPLAY_MM:
        metrics["dome_radius_str"] = "flat"
    else:
        metrics["dome_radius_str"] = _fmt(geo.dome_radius)
    metrics["shoulder_slant_deg_str"] = (
        "—" if geo.shoulder_slant_deg is None else f"{_fmt(geo.shoulder_slant_deg, 0)}°"
    )
    return metrics
