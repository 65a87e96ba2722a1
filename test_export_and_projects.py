#!/usr/bin/env python3
"""
Tests for the revolved solid, STL / DXF export, project files and the report plot.
"""

import json

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from core import config
from core.analysis.flight_numbers import calculate_flight_numbers, simulate_flight_path
from core.profile_model import anchor, control, default_profile
from utils.dxf_exporter import export_profile_to_dxf
from utils.lathe_geometry import build_lathe_solid, lathe_profile, resolve_resolution
from utils.plot_flight import plot_design_report
from utils.project_io import (
    ProjectData,
    ProjectLoadError,
    default_project_filename,
    deserialize_project,
    load_project_file,
    save_project_file,
    serialize_project,
)
from utils.stl_exporter import design_stl_filename, export_stl, facet_normals, geometry_to_stl


# ----------------------------------------------------------------------
# Revolved solid
# ----------------------------------------------------------------------
def test_resolution_tiers():
    assert resolve_resolution("low") == (24, 20)
    assert resolve_resolution("high") == (96, 80)
    assert resolve_resolution("ultra") == config.RESOLUTION_TIERS[config.DEFAULT_RESOLUTION]


def test_lathe_profile_flips_y_and_clamps_radius():
    points = [anchor(-5, 10), control(0, 0), anchor(20, -10), anchor(20, 10)]
    outline = lathe_profile(points, 4)
    assert (outline[:, 0] >= 0).all()
    assert outline[0, 1] == -10.0


def test_solid_counts():
    solid = build_lathe_solid(default_profile(), resolution="low")
    radial, curve_segments = 24, 20
    n = 6 * (curve_segments + 1)
    assert solid.vertices.shape == ((radial + 1) * n, 3)
    assert solid.triangle_count == 2 * radial * (n - 1)
    assert solid.normals.shape == solid.vertices.shape


def test_solid_is_a_surface_of_revolution():
    solid = build_lathe_solid(default_profile(), radial_segments=12, resolution="low")
    radii = np.hypot(solid.vertices[:, 0], solid.vertices[:, 2])
    per_ring = radii.reshape(13, -1)
    np.testing.assert_allclose(per_ring, np.broadcast_to(per_ring[0], per_ring.shape), atol=1e-9)


def test_solid_needs_two_points():
    with pytest.raises(ValueError, match="Not enough points for geometry"):
        build_lathe_solid([anchor(1, 1)])


# ----------------------------------------------------------------------
# STL
# ----------------------------------------------------------------------
def test_stl_framing():
    solid = build_lathe_solid(default_profile(), radial_segments=8, resolution="low")
    text = geometry_to_stl(solid, name="test_disc")
    lines = text.splitlines()
    assert lines[0] == "solid test_disc"
    assert lines[-1] == "endsolid test_disc"
    assert text.count("facet normal") == solid.triangle_count
    assert text.count("vertex ") == 3 * solid.triangle_count
    assert text.count("endloop") == solid.triangle_count


def test_facet_normals_are_unit_length():
    solid = build_lathe_solid(default_profile(), radial_segments=8, resolution="low")
    lengths = np.linalg.norm(facet_normals(solid), axis=1)
    np.testing.assert_allclose(lengths, 1.0)


def test_stl_filename_sanitizing():
    assert design_stl_filename("My Disc #1") == "My_Disc__1.stl"
    assert design_stl_filename("") == "disc_design.stl"


def test_export_stl_writes_file(tmp_path):
    messages = []
    solid = build_lathe_solid(default_profile(), radial_segments=6, resolution="low")
    target = tmp_path / "disc.stl"
    assert export_stl(solid, str(target), logger_func=messages.append)
    assert target.read_text().startswith("solid disc")
    assert "triangles" in messages[-1]


def test_export_stl_reports_failure(tmp_path):
    messages = []
    solid = build_lathe_solid(default_profile(), radial_segments=6, resolution="low")
    assert not export_stl(solid, str(tmp_path / "missing" / "disc.stl"), logger_func=messages.append)
    assert messages[0].startswith("Error writing STL file")


# ----------------------------------------------------------------------
# DXF
# ----------------------------------------------------------------------
def test_dxf_has_one_spline_per_segment(tmp_path):
    messages = []
    doc = export_profile_to_dxf(default_profile(), messages.append)
    assert doc is not None
    msp = doc.modelspace()
    splines = msp.query("SPLINE")
    assert len(splines) == 6
    assert all(s.dxf.layer == "DISC_PROFILE" and s.dxf.degree == 3 for s in splines)
    assert len(msp.query("LWPOLYLINE")) == 1
    assert doc.header["$INSUNITS"] == 4
    doc.saveas(tmp_path / "profile.dxf")
    assert (tmp_path / "profile.dxf").exists()


def test_dxf_without_control_polygon():
    doc = export_profile_to_dxf(default_profile(), lambda msg: None, include_control_polygon=False)
    assert len(doc.modelspace().query("LWPOLYLINE")) == 0


def test_dxf_needs_two_anchors():
    messages = []
    assert export_profile_to_dxf([anchor(0, 0), control(1, 1)], messages.append) is None
    assert messages[0].startswith("Error")


# ----------------------------------------------------------------------
# Project files
# ----------------------------------------------------------------------
def make_project():
    return ProjectData(
        design_name="Test Driver",
        points=default_profile(),
        pdga_mode=True,
        resolution="high",
        disc_color="hsl(10, 100%, 50%)",
        disc_template="driver",
    )


def test_project_round_trip():
    project = make_project()
    loaded = deserialize_project(serialize_project(project))
    assert not isinstance(loaded, ProjectLoadError)
    assert loaded == project


def test_serialized_keys():
    data = json.loads(serialize_project(make_project()))
    assert data["version"] == config.PROJECT_VERSION
    assert set(data) == {"version", "designName", "controlPoints", "pdgaMode", "resolution", "discColor", "discTemplate"}
    assert data["controlPoints"][0] == {"x": 0.0, "y": -13.0, "type": "anchor", "id": 1, "isConstrained": False}


def test_unknown_template_is_omitted():
    project = make_project()
    project.disc_template = None
    assert "discTemplate" not in json.loads(serialize_project(project))


@pytest.mark.parametrize(
    "text, message",
    [
        ("{not json", "Invalid JSON"),
        ("[1, 2, 3]", "Invalid project format"),
        ('{"designName": "x"}', "Invalid or insufficient control points"),
        ('{"controlPoints": [{"x": 0, "y": 0, "type": "anchor"}]}', "Invalid or insufficient control points"),
    ],
)
def test_structural_errors(text, message):
    result = deserialize_project(text)
    assert isinstance(result, ProjectLoadError)
    assert result.error == message


def test_too_few_anchors():
    points = [
        {"x": 0, "y": 0, "type": "anchor"},
        {"x": 1, "y": 0, "type": "control"},
        {"x": 2, "y": 0, "type": "anchor"},
    ]
    result = deserialize_project(json.dumps({"controlPoints": points}))
    assert result.error == "At least 3 anchor points required"


def test_malformed_point():
    points = [
        {"x": 0, "y": 0, "type": "anchor"},
        {"x": "far", "y": 0, "type": "anchor"},
        {"x": 2, "y": 0, "type": "anchor"},
    ]
    result = deserialize_project(json.dumps({"controlPoints": points}))
    assert result.error == "Invalid control point data"


def test_coordinate_too_large_for_a_float():
    points = [
        {"x": 0, "y": 0, "type": "anchor"},
        {"x": 10 ** 400, "y": 0, "type": "anchor"},
        {"x": 2, "y": 0, "type": "anchor"},
    ]
    result = deserialize_project(json.dumps({"controlPoints": points}))
    assert isinstance(result, ProjectLoadError)
    assert result.error == "Invalid control point data"


def test_repeated_ids_are_replaced():
    points = [{"x": i, "y": 0, "type": "anchor", "id": point_id} for i, point_id in enumerate((5, 5, 7, 0, 7))]
    loaded = deserialize_project(json.dumps({"controlPoints": points}))
    assert not isinstance(loaded, ProjectLoadError)
    assert [p.id for p in loaded.points] == [5, 8, 7, 9, 10]


def test_optional_fields_fall_back_to_defaults():
    points = [{"x": i, "y": 0, "type": "anchor"} for i in range(3)]
    loaded = deserialize_project(json.dumps({"controlPoints": points, "resolution": "ultra", "discColor": 7}))
    assert loaded.design_name == config.DEFAULT_DESIGN_NAME
    assert loaded.resolution == config.DEFAULT_RESOLUTION
    assert loaded.disc_color == config.DEFAULT_DISC_COLOR
    assert loaded.pdga_mode is False
    # Points without ids get distinct fresh ones
    assert len({p.id for p in loaded.points}) == 3
    assert all(p.id > 0 for p in loaded.points)


def test_project_file_round_trip(tmp_path):
    project = make_project()
    filename = tmp_path / default_project_filename(project.design_name)
    assert filename.name == "Test_Driver.dgds"
    assert save_project_file(project, str(filename), logger_func=lambda msg: None)
    assert load_project_file(str(filename)) == project


def test_loading_missing_file():
    result = load_project_file("/nonexistent/design.dgds")
    assert isinstance(result, ProjectLoadError)


# ----------------------------------------------------------------------
# Report plot
# ----------------------------------------------------------------------
def test_design_report_is_written(tmp_path):
    points = default_profile()
    numbers = calculate_flight_numbers(points)
    target = tmp_path / "report.png"
    plot_design_report(points, numbers, simulate_flight_path(numbers), str(target), title="Report")
    assert target.stat().st_size > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
