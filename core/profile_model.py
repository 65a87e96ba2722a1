"""Point and profile primitives for the disc cross-section model.

A profile is an ordered ``list`` of :class:`ProfilePoint` forming one closed
loop. Anchors lie on the curve; the control point immediately after an
anchor is its outgoing handle and the control point immediately before the
next anchor is that anchor's incoming handle. Lists are treated as values:
every editing function returns a new list and leaves its input untouched.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Sequence

import numpy as np


class PointType(str, Enum):
    ANCHOR = "anchor"
    CONTROL = "control"


@dataclass(frozen=True)
class ProfilePoint:
    """A tagged 2D point in millimetres (x radial, y axial)."""

    x: float
    y: float
    type: PointType = PointType.ANCHOR
    id: int = 0
    is_constrained: bool = False

    @property
    def is_anchor(self) -> bool:
        return self.type is PointType.ANCHOR

    @property
    def is_control(self) -> bool:
        return self.type is PointType.CONTROL

    def moved_to(self, x: float, y: float) -> "ProfilePoint":
        return replace(self, x=float(x), y=float(y))

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class PointIdGenerator:
    """Monotonic source of point identifiers.

    Owned by whoever creates points (the session processor, the NACA
    generator, the topology editor's callers) instead of living in a global.
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)

    @classmethod
    def after(cls, points: Iterable[ProfilePoint]) -> "PointIdGenerator":
        """Create a generator whose ids never collide with those in *points*."""
        highest = max((p.id for p in points), default=0)
        return cls(start=highest + 1)


def anchor(x: float, y: float, point_id: int = 0) -> ProfilePoint:
    return ProfilePoint(float(x), float(y), PointType.ANCHOR, point_id)


def control(x: float, y: float, point_id: int = 0) -> ProfilePoint:
    return ProfilePoint(float(x), float(y), PointType.CONTROL, point_id)


def get_anchors(points: Sequence[ProfilePoint]) -> list[tuple[int, ProfilePoint]]:
    """Return ``(original_index, point)`` for every anchor, in profile order."""
    return [(i, p) for i, p in enumerate(points) if p.is_anchor]


def anchor_count(points: Sequence[ProfilePoint]) -> int:
    return sum(1 for p in points if p.is_anchor)


def clone_points(points: Sequence[ProfilePoint]) -> list[ProfilePoint]:
    """Structural copy of a profile. Points are immutable, so a shallow list copy suffices."""
    return list(points)


def points_to_array(points: Sequence[ProfilePoint]) -> np.ndarray:
    """Coordinates of *points* as an ``(N, 2)`` float array."""
    if not points:
        return np.empty((0, 2))
    return np.array([[p.x, p.y] for p in points], dtype=float)


def profile_from_layout(layout, id_generator: PointIdGenerator | None = None) -> list[ProfilePoint]:
    """Build a profile from ``(x, y, is_anchor)`` triples, minting fresh ids."""
    ids = id_generator or PointIdGenerator()
    return [
        ProfilePoint(float(x), float(y), PointType.ANCHOR if is_anchor else PointType.CONTROL, ids.next_id())
        for x, y, is_anchor in layout
    ]


# Anchor, outgoing handle, incoming handle of the next anchor; six times round the loop.
# The nose bulges just past the rim anchor and the inside rim wall is vertical.
DEFAULT_PROFILE_LAYOUT = (
    (0.0, -13.0, True), (35.0, -13.0, False), (70.0, -12.5, False),
    (95.0, -11.0, True), (108.0, -10.2, False), (121.71275, -7.0, False),
    (122.31275, -2.0, True), (122.61275, 0.5, False), (119.81275, 6.0, False),
    (117.91275, 6.0, True), (114.0, 6.0, False), (111.0, 6.5, False),
    (109.0, 6.5, True), (109.0, 3.5, False), (109.0, -0.5, False),
    (109.0, -3.5, True), (75.0, -8.0, False), (30.0, -10.0, False),
)


def default_profile(id_generator: PointIdGenerator | None = None) -> list[ProfilePoint]:
    """The built-in starting profile: 18 points, 6 anchors."""
    return profile_from_layout(DEFAULT_PROFILE_LAYOUT, id_generator)
