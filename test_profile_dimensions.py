#!/usr/bin/env python3
"""
Tests for PDGA clamping, measured profile dimensions and the dimension solver.
"""

import math
from dataclasses import replace

import numpy as np
import pytest

from core import config
from core.dimension_solver import apply_dimension_targets, parse_dimension_targets
from core.disc_templates import TEMPLATE_KEYS, template_profile
from core.pdga_constraints import PDGA_LIMITS, constrain_point, validate_profile
from core.profile_metrics import METRIC_KEYS, _curvature_radius, _within, get_profile_geometry, get_profile_metrics
from core.profile_model import anchor, control, default_profile


# ----------------------------------------------------------------------
# PDGA envelope
# ----------------------------------------------------------------------
def test_constrain_clamps_into_envelope():
    clamped = constrain_point(anchor(120.0, -40.0), True)
    assert clamped.x == PDGA_LIMITS["max_diameter"] / 2
    assert clamped.y == -PDGA_LIMITS["max_height"]
    assert clamped.is_constrained


def test_constrain_is_idempotent_on_coordinates():
    once = constrain_point(control(-3.0, 40.0), True)
    twice = constrain_point(once, True)
    assert (twice.x, twice.y) == (once.x, once.y)
    assert (once.x, once.y) == (0.0, PDGA_LIMITS["max_rim_depth"])


def test_constrain_inside_envelope_is_untouched():
    p = anchor(50.0, -10.0)
    result = constrain_point(p, True)
    assert result.as_tuple() == p.as_tuple()
    assert not result.is_constrained


def test_constrain_disabled_passes_through():
    p = anchor(500.0, 500.0)
    result = constrain_point(p, False)
    assert result.as_tuple() == (500.0, 500.0)
    assert not result.is_constrained


def test_validate_default_profile_reports_both_limits():
    points = default_profile()
    assert validate_profile(points) == ["Diameter 245.2mm exceeds PDGA max of 215mm"]
    stretched = [replace(p, y=p.y * 2) for p in points]
    assert validate_profile(stretched) == [
        "Diameter 245.2mm exceeds PDGA max of 215mm",
        "Height 39.0mm exceeds PDGA max of 30mm",
    ]
    assert validate_profile([]) == []


# ----------------------------------------------------------------------
# Measured geometry
# ----------------------------------------------------------------------
def test_default_profile_diameter_and_height():
    geo = get_profile_geometry(default_profile())
    assert geo is not None
    assert geo.diameter == pytest.approx(244.67, abs=1e-6)
    assert geo.max_x == pytest.approx(122.335)
    assert geo.height == pytest.approx(19.5)
    assert geo.min_x <= geo.shoulder_x <= geo.max_x
    assert geo.rim_width == pytest.approx(geo.max_x - geo.shoulder_x)
    assert geo.inside_rim_diameter == pytest.approx(2 * geo.shoulder_x)


def test_default_profile_rim_and_nose():
    geo = get_profile_geometry(default_profile())
    assert geo.shoulder_x == pytest.approx(109.0, abs=1e-9)
    assert geo.rim_width == pytest.approx(13.335, abs=1e-6)
    assert geo.inside_rim_diameter == pytest.approx(218.0, abs=1e-6)
    assert 15.0 < geo.rim_depth < 16.5
    assert geo.parting_line_height == pytest.approx(-1.6035625, abs=1e-6)
    assert geo.nose_radius == pytest.approx(3.994, rel=0.01)


@pytest.mark.parametrize("key", TEMPLATE_KEYS)
def test_templates_have_a_measurable_rim(key):
    geo = get_profile_geometry(template_profile(key))
    assert geo.rim_width > 0
    assert geo.rim_depth > 0
    assert geo.nose_radius is not None and geo.nose_radius > 0
    assert geo.shoulder_x < geo.max_x


def test_rim_width_grows_from_putter_to_driver():
    widths = [get_profile_geometry(template_profile(key)).rim_width for key in ("putter", "mid", "driver")]
    assert widths == sorted(widths)
    assert widths[0] == pytest.approx(10.0, abs=0.05)
    assert widths[-1] == pytest.approx(20.0, abs=0.05)


def test_curvature_radius_of_sampled_circle():
    theta = np.linspace(0.0, math.pi, 61)
    circle = np.column_stack([4.0 * np.cos(theta), 4.0 * np.sin(theta)])
    assert _curvature_radius(circle, 30) == pytest.approx(4.0, rel=1e-2)


def test_curvature_radius_is_none_at_the_ends_and_on_lines():
    theta = np.linspace(0.0, math.pi, 61)
    circle = np.column_stack([4.0 * np.cos(theta), 4.0 * np.sin(theta)])
    assert _curvature_radius(circle, 0) is None
    assert _curvature_radius(circle, len(circle) - 1) is None
    line = np.column_stack([np.linspace(0.0, 10.0, 11), np.linspace(0.0, 5.0, 11)])
    assert _curvature_radius(line, 5) is None


def test_radius_windows():
    assert _within(3.0, config.NOSE_RADIUS_RANGE) == 3.0
    assert _within(600.0, config.NOSE_RADIUS_RANGE) is None
    assert _within(600.0, config.DOME_RADIUS_RANGE) == 600.0
    assert _within(1500.0, config.DOME_RADIUS_RANGE) is None
    assert _within(0.001, config.NOSE_RADIUS_RANGE) is None
    assert _within(0.001, config.DOME_RADIUS_RANGE) is None
    assert _within(None, config.DOME_RADIUS_RANGE) is None


def test_metrics_dictionary_has_values_and_strings():
    metrics = get_profile_metrics(default_profile())
    for key in METRIC_KEYS:
        assert key in metrics
        assert isinstance(metrics[f"{key}_str"], str)
    assert metrics["diameter_str"] == "244.7"
    # Shoulder sits on the vertical inside rim wall
    assert metrics["shoulder_slant_deg"] == pytest.approx(-90.0, abs=1e-6)
    assert metrics["shoulder_slant_deg_str"].endswith("°")


def test_metrics_for_degenerate_profiles():
    assert get_profile_metrics([]) is None
    assert get_profile_geometry([anchor(0, 0), anchor(1, 1)]) is None


# ----------------------------------------------------------------------
# Dimension solver
# ----------------------------------------------------------------------
def test_diameter_target_scales_x():
    points = default_profile()
    geo = get_profile_geometry(points)
    result = apply_dimension_targets(points, {"diameter": geo.diameter * 2})
    assert result.error is None
    for before, after in zip(points, result.points):
        assert after.x == pytest.approx(before.x * 2)
        assert after.y == pytest.approx(before.y)


def test_diameter_and_height_targets_are_met():
    result = apply_dimension_targets(default_profile(), {"diameter": 212.0, "height": 25.0})
    assert result.error is None
    geo = get_profile_geometry(result.points)
    assert geo.diameter == pytest.approx(212.0, abs=1e-6)
    assert geo.height == pytest.approx(25.0, abs=1e-6)


def test_current_values_as_targets_change_nothing():
    points = default_profile()
    geo = get_profile_geometry(points)
    targets = {"diameter": geo.diameter, "height": geo.height, "rim_width": geo.rim_width}
    result = apply_dimension_targets(points, targets)
    assert result.error is None
    assert result.points == points


def test_input_profile_is_not_modified():
    points = default_profile()
    snapshot = list(points)
    apply_dimension_targets(points, {"diameter": 210.0, "shoulder_slant_deg": 45.0})
    assert points == snapshot


def test_non_positive_target_is_rejected():
    points = default_profile()
    result = apply_dimension_targets(points, {"diameter": -5.0})
    assert result.error == "Diameter must be a positive number"
    assert result.points == points


def test_degenerate_profile_is_rejected():
    result = apply_dimension_targets([anchor(0, 0)], {"diameter": 200.0})
    assert result.error == "Invalid profile"


def test_parse_dimension_targets():
    targets, error = parse_dimension_targets({"diameter": " 211 ", "height": "abc", "rim_width": "", "bogus": "3"})
    assert error is None
    assert targets == {"diameter": 211.0}

    targets, error = parse_dimension_targets({"diameter": "", "height": "nan"})
    assert targets == {}
    assert error == "Enter at least one dimension"


def test_parting_line_moves_rim_anchor():
    points = default_profile()
    before = get_profile_geometry(points).parting_line_height
    result = apply_dimension_targets(points, {"parting_line_height": -4.0})
    assert result.error is None
    rim = result.points[6]  # anchor at the largest radius
    assert rim.y == pytest.approx(-4.0)
    for flank in (5, 7):
        assert result.points[flank].y == pytest.approx(points[flank].y - 2.0)
        assert result.points[flank].x == points[flank].x
    after = get_profile_geometry(result.points).parting_line_height
    assert abs(after + 4.0) < abs(before + 4.0)
    assert after == pytest.approx(-3.589, abs=1e-3)


def test_rim_width_target_keeps_inside_rim_wall():
    points = default_profile()
    result = apply_dimension_targets(points, {"rim_width": 16.0})
    assert result.error is None
    geo = get_profile_geometry(result.points)
    assert geo.rim_width == pytest.approx(16.0, abs=1e-6)
    assert geo.shoulder_x == pytest.approx(109.0, abs=1e-9)
    # Points inboard of the wall are untouched
    assert result.points[:3] == points[:3]


def test_rim_depth_target_moves_towards_request():
    points = default_profile()
    before = get_profile_geometry(points).rim_depth
    result = apply_dimension_targets(points, {"rim_depth": 18.0})
    assert result.error is None
    after = get_profile_geometry(result.points).rim_depth
    assert abs(after - 18.0) < abs(before - 18.0)
    assert after == pytest.approx(18.0, abs=0.5)
    assert [p.x for p in result.points] == [p.x for p in points]


def test_inside_rim_target_moves_the_wall():
    points = default_profile()
    result = apply_dimension_targets(points, {"inside_rim_diameter": 210.0})
    assert result.error is None
    geo = get_profile_geometry(result.points)
    assert geo.inside_rim_diameter == pytest.approx(210.0, abs=1e-6)
    # The rim anchor lies outboard of the wall and stays put
    assert result.points[6] == points[6]


def test_nose_target_shrinks_rim_handles():
    points = default_profile()
    before = get_profile_geometry(points).nose_radius
    result = apply_dimension_targets(points, {"nose_radius": 3.0})
    assert result.error is None
    after = get_profile_geometry(result.points).nose_radius
    assert after is not None
    assert abs(after - 3.0) < abs(before - 3.0)
    rim, handle = result.points[6], result.points[7]
    assert math.hypot(handle.x - rim.x, handle.y - rim.y) < math.hypot(points[7].x - rim.x, points[7].y - rim.y)


def dish_profile():
    """Flat-bottomed profile with a gently domed flight plate and a square rim."""
    return [
        anchor(0, 0), control(20, 0.3), control(40, -2.5),
        anchor(60, -4.4), control(73.33, -4.4), control(86.67, -4.4),
        anchor(100, -4.4), control(100, -7.6), control(100, -10.8),
        anchor(100, -14), control(30, -14), control(0, -5),
    ]


def test_dish_profile_dome_radius():
    geo = get_profile_geometry(dish_profile())
    assert geo.dome_radius == pytest.approx(3600 / 17.4, rel=0.01)


def test_dome_target_moves_towards_request():
    points = dish_profile()
    before = get_profile_geometry(points).dome_radius
    result = apply_dimension_targets(points, {"dome_radius": 150.0})
    assert result.error is None
    after = get_profile_geometry(result.points).dome_radius
    assert after is not None
    assert abs(after - 150.0) < abs(before - 150.0)


def polygon_profile():
    """Straight-sided profile; handles sit at the thirds of each edge."""
    corners = [(0.0, -10.0), (90.0, -10.0), (120.0, 0.0), (110.0, 6.0), (100.0, 6.0)]
    points = []
    for (x0, y0), (x1, y1) in zip(corners, corners[1:] + corners[:1]):
        points.append(anchor(x0, y0))
        points.append(control(x0 + (x1 - x0) / 3, y0 + (y1 - y0) / 3))
        points.append(control(x0 + 2 * (x1 - x0) / 3, y0 + 2 * (y1 - y0) / 3))
    return points


def test_polygon_shoulder_slant():
    geo = get_profile_geometry(polygon_profile())
    assert geo.shoulder_segment_index == 2
    assert geo.shoulder_slant_deg == pytest.approx(math.degrees(math.atan2(6.0, -10.0)), abs=1e-6)


def test_slant_target_rotates_shoulder_handles():
    points = polygon_profile()
    before = get_profile_geometry(points).shoulder_slant_deg
    result = apply_dimension_targets(points, {"shoulder_slant_deg": 120.0})
    assert result.error is None
    after = get_profile_geometry(result.points).shoulder_slant_deg
    assert 120.0 < after < before
    # Only the two handles of the shoulder segment move
    changed = [i for i, (a, b) in enumerate(zip(points, result.points)) if a != b]
    assert changed == [7, 8]


@pytest.mark.parametrize("key,label", [("nose_radius", "Nose radius"), ("dome_radius", "Dome radius")])
def test_radius_targets_must_be_positive(key, label):
    result = apply_dimension_targets(default_profile(), {key: 0.0})
    assert result.error == f"{label} must be a positive number"

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
