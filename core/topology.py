"""Structural edits on a profile: inserting and deleting anchors."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from core import config
from core.profile_model import (
    PointIdGenerator,
    PointType,
    ProfilePoint,
    anchor_count,
    get_anchors,
)


def _mint(x: float, y: float, point_type: PointType, ids: PointIdGenerator) -> ProfilePoint:
    return ProfilePoint(float(x), float(y), point_type, ids.next_id())


def insert_anchor(
    points: Sequence[ProfilePoint],
    position: tuple[float, float],
    nearest_anchor_index: int | None,
    id_generator: PointIdGenerator | None = None,
) -> list[ProfilePoint]:
    """
    Insert a new anchor with synthesized handles after the given anchor.

    The three new points (incoming handle, anchor, outgoing handle, the
    handles offset horizontally by ``HANDLE_OFFSET_MM``) are spliced in right
    after the run of control points following ``nearest_anchor_index``. An
    empty profile is seeded with an anchor and one trailing handle instead.

    Args:
        points: Current profile; not modified.
        position: ``(x, y)`` of the new anchor.
        nearest_anchor_index: Index in *points* of the anchor that starts the
            segment receiving the new anchor, typically from :func:`find_nearest_segment`.
        id_generator: Id source for the new points; defaults to one that
            continues after the largest existing id.

    Returns:
        A new point list.
    """
    ids = id_generator or PointIdGenerator.after(points)
    x, y = float(position[0]), float(position[1])
    offset = config.HANDLE_OFFSET_MM

    if anchor_count(points) == 0:
        return [
            _mint(x, y, PointType.ANCHOR, ids),
            _mint(x + offset, y, PointType.CONTROL, ids),
        ]

    if nearest_anchor_index is None or not 0 <= nearest_anchor_index < len(points):
        nearest_anchor_index = get_anchors(points)[-1][0]

    insert_at = nearest_anchor_index + 1
    while insert_at < len(points) and points[insert_at].is_control:
        insert_at += 1

    new_points = [
        _mint(x - offset, y, PointType.CONTROL, ids),
        _mint(x, y, PointType.ANCHOR, ids),
        _mint(x + offset, y, PointType.CONTROL, ids),
    ]
    return list(points[:insert_at]) + new_points + list(points[insert_at:])


def find_nearest_segment(points: Sequence[ProfilePoint], position: tuple[float, float]) -> int | None:
    """
    Index of the anchor starting the segment whose midpoint is closest to *position*.

    Segments are consecutive anchor pairs, wrapping from the last anchor to
    the first; the midpoint is taken between the two anchors. Ties go to the
    earliest segment. Returns the lone anchor's index for a one-anchor
    profile and ``None`` when there are no anchors.
    """
    anchors = get_anchors(points)
    if not anchors:
        return None
    if len(anchors) == 1:
        return anchors[0][0]

    coords = np.array([p.as_tuple() for _, p in anchors])
    midpoints = (coords + np.roll(coords, -1, axis=0)) / 2.0
    distances = np.hypot(midpoints[:, 0] - position[0], midpoints[:, 1] - position[1])
    # argmin returns the first minimum, preserving iteration-order tie breaks
    return anchors[int(np.argmin(distances))][0]


def delete_anchor(points: Sequence[ProfilePoint], anchor_index: int) -> list[ProfilePoint]:
    """
    Remove an anchor together with its adjacent handles.

    At most one control point directly before and one directly after the
    anchor are removed with it. When the anchor is the first one and the
    profile starts with control points, those leading handles go too.
    Deleting a non-anchor, or deleting while the profile has ``MIN_ANCHORS``
    anchors or fewer, returns an unchanged copy.
    """
    result = list(points)
    if not 0 <= anchor_index < len(points) or not points[anchor_index].is_anchor:
        return result
    if anchor_count(points) <= config.MIN_ANCHORS:
        return result

    first_anchor_index = get_anchors(points)[0][0]
    if anchor_index == first_anchor_index and points[0].is_control:
        start = 0
    else:
        start = anchor_index - 1 if anchor_index >= 1 and points[anchor_index - 1].is_control else anchor_index

    stop = anchor_index + 1
    if stop < len(points) and points[stop].is_control:
        stop += 1

    del result[start:stop]
    return result
