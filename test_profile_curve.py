#!/usr/bin/env python3
"""
Tests for the profile model, Bezier evaluation and anchor insert/delete.
"""

import numpy as np
import pytest

from core import config
from core.disc_templates import TEMPLATE_KEYS, TEMPLATES, template_profile
from core.profile_model import (
    PointIdGenerator,
    anchor,
    anchor_count,
    control,
    default_profile,
    get_anchors,
    points_to_array,
)
from core.topology import delete_anchor, find_nearest_segment, insert_anchor
from utils.bezier_utils import (
    cubic_bezier,
    generate_bezier_points,
    profile_curvature_comb,
    segment_control_polygons,
)


def triangle_profile():
    """Smallest legal profile: three anchors, each followed by one handle."""
    return [
        anchor(0, 0, 1), control(10, -5, 2),
        anchor(40, 0, 3), control(45, 10, 4),
        anchor(20, 20, 5), control(5, 15, 6),
    ]


def test_default_profile_layout():
    points = default_profile()
    assert len(points) == 18
    assert anchor_count(points) == 6
    assert [i for i, _ in get_anchors(points)] == [0, 3, 6, 9, 12, 15]
    assert len({p.id for p in points}) == 18


def test_templates_all_have_six_anchors():
    for key in TEMPLATE_KEYS:
        points = template_profile(key)
        assert anchor_count(points) == 6, key
        assert TEMPLATES[key].hints
    with pytest.raises(KeyError):
        template_profile("frisbee")


def test_curve_sample_count_and_closure():
    points = default_profile()
    curve = generate_bezier_points(points, segments_per_curve=50)
    assert curve.shape == (6 * 51, 2)
    # The wrap-around segment ends on the first anchor
    np.testing.assert_allclose(curve[0], [0.0, -13.0])
    np.testing.assert_allclose(curve[-1], [0.0, -13.0])


def test_curve_is_deterministic():
    points = default_profile()
    a = generate_bezier_points(points)
    b = generate_bezier_points(points)
    np.testing.assert_array_equal(a, b)


def test_open_curve_drops_wrap_segment():
    curve = generate_bezier_points(default_profile(), segments_per_curve=10, closed=False)
    assert curve.shape == (5 * 11, 2)


def test_too_few_anchors_gives_empty_curve():
    assert generate_bezier_points([anchor(1, 1)]).shape == (0, 2)
    assert generate_bezier_points([]).shape == (0, 2)


def test_segment_endpoints_hit_anchors():
    p0, p1, p2, p3 = (0, 0), (1, 2), (3, 2), (4, 0)
    ends = cubic_bezier(p0, p1, p2, p3, np.array([0.0, 1.0]))
    np.testing.assert_allclose(ends, [p0, p3])


def test_missing_handles_fall_back_to_anchors():
    points = [anchor(0, 0), anchor(10, 0), anchor(10, 10)]
    segments = segment_control_polygons(points)
    assert len(segments) == 3
    _, _, polygon = segments[0]
    np.testing.assert_allclose(polygon, [[0, 0], [0, 0], [10, 0], [10, 0]])


def test_wrap_segment_uses_last_control_as_incoming_handle():
    points = triangle_profile()
    idx_a, idx_b, polygon = segment_control_polygons(points)[-1]
    assert (idx_a, idx_b) == (4, 0)
    np.testing.assert_allclose(polygon[2], [5, 15])


def test_curvature_comb_shape():
    comb = profile_curvature_comb(default_profile(), num_points_per_segment=7, scale_factor=10.0)
    assert len(comb) == 6
    assert all(len(seg) == 7 for seg in comb)
    assert comb[0][0].shape == (2, 2)


def test_insert_then_delete_restores_profile():
    points = default_profile()
    ids = PointIdGenerator.after(points)
    position = (50.0, -25.0)

    nearest = find_nearest_segment(points, position)
    assert nearest == 0  # top segment (0,-13) -> (95,-11)

    inserted = insert_anchor(points, position, nearest, ids)
    assert len(inserted) == len(points) + 3
    assert anchor_count(inserted) == 7
    new_anchor_index = next(i for i, p in enumerate(inserted) if p.as_tuple() == position and p.is_anchor)
    assert inserted[new_anchor_index - 1].as_tuple() == (50.0 - config.HANDLE_OFFSET_MM, -25.0)
    assert inserted[new_anchor_index + 1].as_tuple() == (50.0 + config.HANDLE_OFFSET_MM, -25.0)

    restored = delete_anchor(inserted, new_anchor_index)
    assert restored == points


def test_insert_does_not_mutate_input():
    points = default_profile()
    snapshot = list(points)
    insert_anchor(points, (60.0, 0.0), 0)
    assert points == snapshot


def test_insert_into_empty_profile_seeds_anchor_and_handle():
    seeded = insert_anchor([], (5.0, 5.0), None)
    assert len(seeded) == 2
    assert seeded[0].is_anchor and seeded[1].is_control
    assert seeded[1].x == pytest.approx(5.0 + config.HANDLE_OFFSET_MM)


def test_find_nearest_segment_edge_cases():
    assert find_nearest_segment([], (0, 0)) is None
    assert find_nearest_segment([control(1, 1), anchor(3, 3)], (0, 0)) == 1


def test_delete_keeps_minimum_anchor_count():
    points = triangle_profile()
    assert delete_anchor(points, 2) == points


def test_delete_non_anchor_is_noop():
    points = default_profile()
    assert delete_anchor(points, 1) == points
    assert delete_anchor(points, 99) == points


def test_delete_first_anchor():
    points = default_profile()
    result = delete_anchor(points, 0)
    assert len(result) == 16
    assert anchor_count(result) == 5
    assert points_to_array(result).shape == (16, 2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
