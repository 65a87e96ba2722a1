#!/usr/bin/env python3
"""
Tests for the lift, drag, lift-to-drag and flight-number estimates.
"""

import math

import pytest

from core import config
from core.analysis.calculation_steps import STEP_KINDS, StepLog, format_step
from core.analysis.drag_coefficient import calculate_drag_coefficient
from core.analysis.flight_numbers import (
    FlightNumbers,
    calculate_flight_numbers,
    round_to_quarter,
    simulate_flight_path,
)
from core.analysis.lift_to_drag import (
    DRIVER_THRESHOLD,
    PUTTER_THRESHOLD,
    calculate_lift_to_drag,
    get_ld_interpretation,
)
from core.analysis.thin_airfoil import calculate_lift_coefficient
from core.disc_templates import TEMPLATE_KEYS, template_profile
from core.naca_generator import naca_to_control_points
from core.profile_model import anchor, control, default_profile


def naca_points(code):
    return naca_to_control_points(code).points


# ----------------------------------------------------------------------
# Calculation traces
# ----------------------------------------------------------------------
def test_step_log_rejects_unknown_kinds():
    log = StepLog()
    log.header("A")
    log.divider()
    with pytest.raises(ValueError):
        log.add("shout", "no")
    assert [s.kind for s in log.steps] == ["header", "divider"]
    assert format_step(log.steps[0]) == "== A =="


# ----------------------------------------------------------------------
# Lift
# ----------------------------------------------------------------------
def test_symmetric_airfoil_has_no_lift_at_zero_aoa():
    result = calculate_lift_coefficient(naca_points("0012"), 0.0)
    assert not result.error
    assert result.cl == pytest.approx(0.0, abs=1e-9)
    assert result.alpha_zero_lift == pytest.approx(0.0, abs=1e-9)
    assert result.chord_length == pytest.approx(config.NACA_DEFAULT_CHORD_MM)


def test_lift_grows_at_two_pi_per_radian():
    points = default_profile()
    cl0 = calculate_lift_coefficient(points, 0.0).cl
    cl5 = calculate_lift_coefficient(points, 5.0).cl
    assert cl5 - cl0 == pytest.approx(2 * math.pi * math.radians(5.0))


def test_lift_result_fields():
    result = calculate_lift_coefficient(default_profile(), 2.0)
    assert result.lift_curve_slope == pytest.approx(2 * math.pi * math.pi / 180)
    assert result.center_of_pressure == 0.25
    assert result.thickness_ratio > 0
    assert result.steps[0].kind == "header"
    assert result.steps[-1].kind == "success"
    assert all(step.kind in STEP_KINDS for step in result.steps)


def test_cambered_profile_gets_non_positive_zero_lift_angle():
    result = calculate_lift_coefficient(naca_points("4412"), 0.0)
    assert not result.error
    if result.camber_ratio > config.CAMBER_SIGN_FLIP_RATIO:
        assert result.alpha_zero_lift <= 0


def test_lift_needs_three_anchors():
    result = calculate_lift_coefficient([anchor(0, 0), control(1, 1), anchor(2, 0)])
    assert result.error
    assert result.steps[-1].kind == "error"


def test_lift_zero_chord_is_an_error():
    result = calculate_lift_coefficient([anchor(5, 0), anchor(5, 1), anchor(5, 2)])
    assert result.error


# ----------------------------------------------------------------------
# Drag
# ----------------------------------------------------------------------
def test_drag_decreases_with_speed():
    points = default_profile()
    slow = calculate_drag_coefficient(points, 10.0)
    fast = calculate_drag_coefficient(points, 30.0)
    assert slow.cd > fast.cd > 0
    assert slow.cd_form == pytest.approx(fast.cd_form)
    assert fast.re == pytest.approx(3 * slow.re)


def test_drag_components_add_up():
    result = calculate_drag_coefficient(default_profile())
    assert result.cd == pytest.approx(result.cd_friction + result.cd_form)
    assert result.cd_form == pytest.approx(config.FORM_DRAG_FACTOR * result.thickness_ratio ** 2)


def test_thicker_airfoil_has_more_drag():
    thin = calculate_drag_coefficient(naca_points("0008"))
    thick = calculate_drag_coefficient(naca_points("0021"))
    assert thick.cd > thin.cd


def test_drag_needs_three_anchors():
    assert calculate_drag_coefficient([anchor(0, 0), anchor(1, 0)]).error


# ----------------------------------------------------------------------
# Lift-to-drag
# ----------------------------------------------------------------------
def test_ld_interpretation_thresholds():
    assert get_ld_interpretation(None).category is None
    assert get_ld_interpretation(float("nan")).category is None
    assert get_ld_interpretation(PUTTER_THRESHOLD - 0.01).category == "putter"
    assert get_ld_interpretation(PUTTER_THRESHOLD).category == "midrange"
    assert get_ld_interpretation(DRIVER_THRESHOLD).category == "driver"


def test_lift_to_drag_combines_both_results():
    result = calculate_lift_to_drag(default_profile(), 3.0, 25.0)
    assert not result.error
    assert result.ld == pytest.approx(result.lift.cl / result.drag.cd)
    assert result.interpretation.category in ("putter", "midrange", "driver")


def test_lift_to_drag_propagates_failure():
    result = calculate_lift_to_drag([anchor(0, 0)])
    assert result.error
    assert result.ld is None


# ----------------------------------------------------------------------
# Flight numbers
# ----------------------------------------------------------------------
def test_round_to_quarter():
    assert round_to_quarter(7.1) == 7.0
    assert round_to_quarter(7.125) == 7.25
    assert round_to_quarter(-1.3) == -1.25
    assert round_to_quarter(3.9) == 4.0


@pytest.mark.parametrize("key", TEMPLATE_KEYS)
def test_flight_numbers_are_in_range_and_quantized(key):
    numbers = calculate_flight_numbers(template_profile(key))
    assert not numbers.error
    bounds = (config.SPEED_RANGE, config.GLIDE_RANGE, config.TURN_RANGE, config.FADE_RANGE)
    for value, (lo, hi) in zip(numbers.as_tuple(), bounds):
        assert lo <= value <= hi
        assert value * 4 == pytest.approx(round(value * 4))


def test_flight_numbers_default_on_bad_profile():
    numbers = calculate_flight_numbers([anchor(0, 0), anchor(1, 1)])
    assert numbers.error
    assert numbers.as_tuple() == (1.0, 1.0, 0.0, 0.0)


def test_flight_path_shape():
    numbers = FlightNumbers(speed=9, glide=5, turn=-1, fade=2)
    path = simulate_flight_path(numbers)
    assert len(path) == config.FLIGHT_PATH_STEPS + 1
    assert path[0].x == 0.0 and path[0].t == 0.0
    assert path[-1].t == 1.0
    assert path[-1].x == pytest.approx(9 * 25 + 5 * 15)
    assert all(p.z >= 0 for p in path)
    assert path[-1].z == pytest.approx(0.0, abs=1e-9)


def test_flight_path_scales_with_power():
    numbers = FlightNumbers(speed=7, glide=4, turn=0, fade=1)
    full = simulate_flight_path(numbers, 1.0)
    half = simulate_flight_path(numbers, 0.5)
    assert half[-1].x == pytest.approx(full[-1].x / 2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
