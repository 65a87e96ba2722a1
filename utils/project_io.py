"""Project files (``.dgds``): JSON documents holding one disc design."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field, replace
from typing import NamedTuple

from core import config
from core.disc_templates import TEMPLATE_KEYS
from core.profile_model import PointIdGenerator, PointType, ProfilePoint

logger = logging.getLogger(__name__)

VALID_RESOLUTIONS = tuple(config.RESOLUTION_TIERS)


@dataclass
class ProjectData:
    design_name: str = config.DEFAULT_DESIGN_NAME
    points: list[ProfilePoint] = field(default_factory=list)
    pdga_mode: bool = False
    resolution: str = config.DEFAULT_RESOLUTION
    disc_color: str = config.DEFAULT_DISC_COLOR
    disc_template: str | None = config.DEFAULT_TEMPLATE


class ProjectLoadError(NamedTuple):
    error: str


def point_to_dict(point: ProfilePoint) -> dict:
    return {
        "x": point.x,
        "y": point.y,
        "type": point.type.value,
        "id": point.id,
        "isConstrained": point.is_constrained,
    }


def serialize_project(project: ProjectData) -> str:
    """JSON text for *project*, indented by two spaces. Unknown templates are omitted."""
    payload = {
        "version": config.PROJECT_VERSION,
        "designName": project.design_name or config.DEFAULT_DESIGN_NAME,
        "controlPoints": [point_to_dict(p) for p in project.points],
        "pdgaMode": bool(project.pdga_mode),
        "resolution": project.resolution or config.DEFAULT_RESOLUTION,
        "discColor": project.disc_color or config.DEFAULT_DISC_COLOR,
    }
    if project.disc_template in TEMPLATE_KEYS:
        payload["discTemplate"] = project.disc_template
    return json.dumps(payload, indent=2)


def _parse_points(raw_points: list) -> list[ProfilePoint] | None:
    """Convert JSON point objects; ``None`` if any entry is malformed."""
    parsed = []
    for raw in raw_points:
        if not isinstance(raw, dict):
            return None
        try:
            x, y = float(raw["x"]), float(raw["y"])
            point_type = PointType(raw.get("type", PointType.CONTROL.value))
        except (KeyError, TypeError, ValueError, OverflowError):
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        point_id = raw.get("id")
        parsed.append(ProfilePoint(
            x, y, point_type,
            point_id if isinstance(point_id, int) and not isinstance(point_id, bool) else 0,
            bool(raw.get("isConstrained", False)),
        ))

    # Id-less and repeated ids get fresh ones that do not collide with stored ones
    ids = PointIdGenerator.after(parsed)
    seen = set()
    unique = []
    for p in parsed:
        if p.id <= 0 or p.id in seen:
            p = replace(p, id=ids.next_id())
        seen.add(p.id)
        unique.append(p)
    return unique


def deserialize_project(text: str) -> ProjectData | ProjectLoadError:
    """
    Parse and validate project JSON.

    Missing or invalid optional fields fall back to defaults. Structural
    problems return a :class:`ProjectLoadError` and nothing else.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return ProjectLoadError("Invalid JSON")
    if not isinstance(data, dict):
        return ProjectLoadError("Invalid project format")

    raw_points = data.get("controlPoints")
    if not isinstance(raw_points, list) or len(raw_points) < 3:
        return ProjectLoadError("Invalid or insufficient control points")
    if sum(1 for p in raw_points if isinstance(p, dict) and p.get("type") == "anchor") < 3:
        return ProjectLoadError("At least 3 anchor points required")
    points = _parse_points(raw_points)
    if points is None:
        return ProjectLoadError("Invalid control point data")

    design_name = data.get("designName")
    disc_color = data.get("discColor")
    return ProjectData(
        design_name=design_name if isinstance(design_name, str) else config.DEFAULT_DESIGN_NAME,
        points=points,
        pdga_mode=bool(data.get("pdgaMode")),
        resolution=data.get("resolution") if data.get("resolution") in VALID_RESOLUTIONS else config.DEFAULT_RESOLUTION,
        disc_color=disc_color if isinstance(disc_color, str) else config.DEFAULT_DISC_COLOR,
        disc_template=data.get("discTemplate") if data.get("discTemplate") in TEMPLATE_KEYS else config.DEFAULT_TEMPLATE,
    )


def default_project_filename(design_name: str) -> str:
    base = "".join(c if c.isalnum() or c in "-_" else "_" for c in (design_name or "")).strip("_")
    return f"{base or 'design'}{config.PROJECT_EXTENSION}"


def save_project_file(project: ProjectData, filename: str, logger_func=logger.info) -> bool:
    try:
        with open(filename, "w", encoding="utf-8") as fh:
            fh.write(serialize_project(project))
    except OSError as e:
        logger_func(f"Error saving project '{filename}': {e}")
        return False
    logger_func(f"Project saved to {filename}")
    return True


def load_project_file(filename: str) -> ProjectData | ProjectLoadError:
    try:
        with open(filename, "r", encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        return ProjectLoadError(f"Could not read '{filename}': {e}")
    return deserialize_project(text)
