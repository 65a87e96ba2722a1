"""PDGA legality envelope: per-point clamping and whole-profile warnings."""
from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from core import config
from core.profile_model import ProfilePoint

PDGA_LIMITS: dict[str, float] = {
    "max_diameter": config.PDGA_MAX_DIAMETER_MM,
    "min_diameter": config.PDGA_MIN_DIAMETER_MM,
    "max_height": config.PDGA_MAX_HEIGHT_MM,
    "min_height": config.PDGA_MIN_HEIGHT_MM,
    "max_rim_depth": config.PDGA_MAX_RIM_DEPTH_MM,
    "min_rim_depth": config.PDGA_MIN_RIM_DEPTH_MM,
    "max_rim_width": config.PDGA_MAX_RIM_WIDTH_MM,
    "min_rim_width": config.PDGA_MIN_RIM_WIDTH_MM,
    "max_weight": config.PDGA_MAX_WEIGHT_G,
}


def constrain_point(
    point: ProfilePoint,
    pdga_enabled: bool,
    points: Sequence[ProfilePoint] | None = None,
) -> ProfilePoint:
    """
    Clamp *point* into the regulatory envelope.

    x is limited to ``[0, max_diameter / 2]`` and y to
    ``[-max_height, max_rim_depth]``. The returned point has
    ``is_constrained`` set when a clamp fired. With PDGA mode off the point
    comes back unchanged apart from ``is_constrained=False``. *points* is
    accepted for call-site symmetry with profile-aware checks and is not
    consulted: the projection is per point.
    """
    if not pdga_enabled:
        return replace(point, is_constrained=False)

    max_radius = PDGA_LIMITS["max_diameter"] / 2
    x = min(max(point.x, 0.0), max_radius)
    y = min(max(point.y, -PDGA_LIMITS["max_height"]), PDGA_LIMITS["max_rim_depth"])
    clamped = x != point.x or y != point.y
    return replace(point, x=x, y=y, is_constrained=clamped)


def validate_profile(points: Sequence[ProfilePoint]) -> list[str]:
    """Human-readable violations of the diameter and height limits."""
    if not points:
        return []
    warnings = []

    diameter = max(p.x for p in points) * 2
    if diameter > PDGA_LIMITS["max_diameter"]:
        warnings.append(f"Diameter {diameter:.1f}mm exceeds PDGA max of {PDGA_LIMITS['max_diameter']:g}mm")

    ys = [p.y for p in points]
    height = max(ys) - min(ys)
    if height > PDGA_LIMITS["max_height"]:
        warnings.append(f"Height {height:.1f}mm exceeds PDGA max of {PDGA_LIMITS['max_height']:g}mm")

    return warnings
