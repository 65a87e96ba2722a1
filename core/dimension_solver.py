"""Inverse edits: reshape a profile so its measured dimensions hit targets.

Targets are applied one feature at a time in a fixed order, re-measuring
the profile between steps. A step is skipped when the measurement is already
within tolerance of the target.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Callable, Mapping, Sequence

from core import config
from core.profile_metrics import ProfileGeometry, get_profile_geometry
from core.profile_model import ProfilePoint, clone_points, get_anchors

# Applied in this order; each entry is (target key, measured attribute, tolerance).
DIMENSION_ORDER: tuple[tuple[str, str, float], ...] = (
    ("diameter", "diameter", config.LENGTH_TOL_MM),
    ("height", "height", config.LENGTH_TOL_MM),
    ("rim_width", "rim_width", config.LENGTH_TOL_MM),
    ("rim_depth", "rim_depth", config.LENGTH_TOL_MM),
    ("inside_rim_diameter", "inside_rim_diameter", config.LENGTH_TOL_MM),
    ("parting_line_height", "parting_line_height", config.LENGTH_TOL_MM),
    ("nose_radius", "nose_radius", config.LENGTH_TOL_MM),
    ("dome_radius", "dome_radius", config.LENGTH_TOL_MM),
    ("shoulder_slant_deg", "shoulder_slant_deg", config.ANGLE_TOL_DEG),
)

DIMENSION_LABELS: dict[str, str] = {
    "diameter": "Diameter",
    "height": "Height",
    "rim_width": "Rim width",
    "rim_depth": "Rim depth",
    "inside_rim_diameter": "Inside rim diameter",
    "parting_line_height": "Parting line height",
    "nose_radius": "Nose radius",
    "dome_radius": "Dome radius",
    "shoulder_slant_deg": "Shoulder slant",
}

POSITIVE_TARGETS = ("diameter", "height", "rim_width", "rim_depth", "inside_rim_diameter", "nose_radius", "dome_radius")


@dataclass
class DimensionResult:
    points: list[ProfilePoint] = field(default_factory=list)
    error: str | None = None


# ---- Per-feature transforms ---------------------------------------------
def _scale_diameter(points, geo: ProfileGeometry, target: float):
    if geo.max_x <= 0:
        return points
    scale = (target / 2.0) / geo.max_x
    return [replace(p, x=p.x * scale) for p in points]


def _scale_height(points, geo: ProfileGeometry, target: float):
    if geo.height <= 0:
        return points
    scale = target / geo.height
    return [replace(p, y=geo.min_y + (p.y - geo.min_y) * scale) for p in points]


def _scale_rim_width(points, geo: ProfileGeometry, target: float):
    if geo.rim_width <= 0:
        return points
    scale = target / geo.rim_width
    sx, tol = geo.shoulder_x, config.SHOULDER_MATCH_TOL_MM
    return [replace(p, x=sx + (p.x - sx) * scale) if p.x >= sx - tol else p for p in points]


def _scale_rim_depth(points, geo: ProfileGeometry, target: float):
    if geo.rim_depth <= 0:
        return points
    scale = target / geo.rim_depth
    sx, base, tol = geo.shoulder_x, geo.rim_min_y, config.SHOULDER_MATCH_TOL_MM
    return [replace(p, y=base + (p.y - base) * scale) if p.x >= sx - tol else p for p in points]


def _scale_inside_rim(points, geo: ProfileGeometry, target: float):
    if geo.shoulder_x <= 0:
        return points
    scale = (target / 2.0) / geo.shoulder_x
    limit = geo.shoulder_x + config.SHOULDER_MATCH_TOL_MM
    return [replace(p, x=p.x * scale) if p.x <= limit else p for p in points]


def _rim_anchor_index(points) -> int | None:
    """Index of the anchor with the largest x (first one on ties)."""
    anchors = get_anchors(points)
    if not anchors:
        return None
    best_idx, best = anchors[0]
    for idx, a in anchors[1:]:
        if a.x > best.x:
            best_idx, best = idx, a
    return best_idx


def _flanking_controls(points, idx: int) -> list[int]:
    flanks = []
    for j in (idx + 1, idx - 1):
        if 0 <= j < len(points) and points[j].is_control:
            flanks.append(j)
    return flanks


def _move_parting_line(points, geo: ProfileGeometry, target: float):
    idx = _rim_anchor_index(points)
    if idx is None:
        return points
    pts = clone_points(points)
    dy = target - pts[idx].y
    pts[idx] = replace(pts[idx], y=target)
    for j in _flanking_controls(pts, idx):
        pts[j] = replace(pts[j], y=pts[j].y + dy)
    return pts


def _scale_handles(points, idx: int, factor: float):
    pts = clone_points(points)
    a = points[idx]
    for j in _flanking_controls(pts, idx):
        h = pts[j]
        pts[j] = replace(h, x=a.x + (h.x - a.x) * factor, y=a.y + (h.y - a.y) * factor)
    return pts


def _scale_nose(points, geo: ProfileGeometry, target: float):
    if geo.nose_radius is None or geo.nose_radius <= 0:
        return points
    idx = _rim_anchor_index(points)
    if idx is None:
        return points
    # Curvature radius grows roughly with the square of handle length
    return _scale_handles(points, idx, math.sqrt(target / geo.nose_radius))


def _scale_dome(points, geo: ProfileGeometry, target: float):
    if geo.dome_radius is None or geo.dome_radius <= 0:
        return points
    limit = geo.shoulder_x + config.SHOULDER_MATCH_TOL_MM
    top = [(i, a) for i, a in get_anchors(points) if geo.min_x <= a.x <= limit]
    if not top:
        return points
    idx, best = top[0]
    for i, a in top[1:]:
        if a.y > best.y:
            idx, best = i, a
    return _scale_handles(points, idx, math.sqrt(target / geo.dome_radius))


def _rotate_shoulder(points, geo: ProfileGeometry, target: float):
    anchors = geo.anchors
    if len(anchors) < 2 or geo.shoulder_slant_deg is None or not math.isfinite(geo.shoulder_slant_deg):
        return points
    seg = geo.shoulder_segment_index
    idx1, a1 = anchors[seg]
    idx2, a2 = anchors[(seg + 1) % len(anchors)]
    delta = math.radians(target - geo.shoulder_slant_deg)
    cx, cy = (a1.x + a2.x) / 2.0, (a1.y + a2.y) / 2.0
    cos_d, sin_d = math.cos(delta), math.sin(delta)

    pts = clone_points(points)
    for j in (idx1 + 1, idx2 - 1):
        if 0 <= j < len(pts) and pts[j].is_control:
            p = pts[j]
            pts[j] = replace(
                p,
                x=cx + (p.x - cx) * cos_d - (p.y - cy) * sin_d,
                y=cy + (p.x - cx) * sin_d + (p.y - cy) * cos_d,
            )
    return pts


TRANSFORMS: dict[str, Callable[[list, ProfileGeometry, float], list]] = {
    "diameter": _scale_diameter,
    "height": _scale_height,
    "rim_width": _scale_rim_width,
    "rim_depth": _scale_rim_depth,
    "inside_rim_diameter": _scale_inside_rim,
    "parting_line_height": _move_parting_line,
    "nose_radius": _scale_nose,
    "dome_radius": _scale_dome,
    "shoulder_slant_deg": _rotate_shoulder,
}


def apply_dimension_targets(points: Sequence[ProfilePoint], targets: Mapping[str, float] | None) -> DimensionResult:
    """
    Reshape *points* towards the requested dimensions.

    Args:
        points: Current profile; never modified.
        targets: Sparse mapping of dimension key to desired value. Keys not
            present (or ``None``) are left alone; unknown keys are ignored.

    Returns:
        DimensionResult: the new point list, or a copy of the input and an
        error string when the profile is degenerate or a target that must be
        positive is not.
    """
    if points is None or len(points) < 3:
        return DimensionResult(list(points or []), "Invalid profile")

    targets = {k: v for k, v in (targets or {}).items() if v is not None}
    for key in POSITIVE_TARGETS:
        value = targets.get(key)
        if value is not None and (not isinstance(value, (int, float)) or not value > 0):
            return DimensionResult(clone_points(points), f"{DIMENSION_LABELS[key]} must be a positive number")

    pts = clone_points(points)
    geo = get_profile_geometry(pts)
    if geo is None:
        return DimensionResult(pts, "Invalid profile")

    for key, attribute, tolerance in DIMENSION_ORDER:
        target = targets.get(key)
        if target is None or not math.isfinite(target):
            continue
        current = getattr(geo, attribute)
        if current is not None and math.isfinite(current) and abs(current - target) <= tolerance:
            continue
        pts = TRANSFORMS[key](pts, geo, float(target))
        geo = get_profile_geometry(pts)
        if geo is None:
            return DimensionResult(pts, "Invalid profile")

    return DimensionResult(pts)


def parse_dimension_targets(fields: Mapping[str, str]) -> tuple[dict[str, float], str | None]:
    """
    Parse text entries into a target mapping.

    Empty, non-numeric and non-finite entries are skipped. Returns the
    targets and an error string when nothing usable was entered.
    """
    targets: dict[str, float] = {}
    for key, raw in fields.items():
        if key not in TRANSFORMS or raw is None:
            continue
        text = str(raw).strip()
        if not text:
            continue
        try:
            value = float(text)
        except ValueError:
            continue
        if math.isfinite(value):
            targets[key] = value
    if not targets:
        return {}, "Enter at least one dimension"
    return targets, None
