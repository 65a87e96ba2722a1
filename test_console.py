#!/usr/bin/env python3
"""
End-to-end tests for the command-line front end.
"""

import json
import sys

import matplotlib
matplotlib.use("Agg")

import pytest

import run_console


def run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["run_console.py", *argv])
    run_console.main()


def test_template_to_stl_and_project(monkeypatch, tmp_path):
    stl = tmp_path / "putter.stl"
    project = tmp_path / "putter.dgds"
    run(monkeypatch, "--template", "putter", "--metrics", "--flight",
        "--stl", str(stl), "--resolution", "low", "--save-project", str(project))
    assert stl.read_text().startswith("solid disc")
    data = json.loads(project.read_text())
    assert data["discTemplate"] == "putter"
    assert data["resolution"] == "low"


def test_naca_with_targets_and_dxf(monkeypatch, tmp_path):
    project = tmp_path / "naca.dgds"
    dxf = tmp_path / "naca.dxf"
    run(monkeypatch, "--naca", "2412", "--chord", "100", "--set", "diameter=200",
        "--lift", "--drag", "--ld", "-v", "--dxf", str(dxf), "--save-project", str(project))
    assert dxf.exists()
    data = json.loads(project.read_text())
    assert data["designName"] == "NACA 2412"
    assert max(p["x"] for p in data["controlPoints"]) == pytest.approx(100.0, abs=0.5)


def test_reload_project_with_pdga(monkeypatch, tmp_path):
    project = tmp_path / "in.dgds"
    out = tmp_path / "out.dgds"
    run(monkeypatch, "--save-project", str(project))
    run(monkeypatch, "--project", str(project), "--pdga", "--name", "Legal", "--save-project", str(out))
    data = json.loads(out.read_text())
    assert data["designName"] == "Legal"
    assert data["pdgaMode"] is True
    assert max(p["x"] for p in data["controlPoints"]) <= 107.5


def test_plot_report(monkeypatch, tmp_path):
    report = tmp_path / "report.png"
    run(monkeypatch, "--template", "driver", "--plot", str(report))
    assert report.exists()


@pytest.mark.parametrize(
    "argv",
    [
        ("--naca", "99999"),
        ("--project", "/nonexistent/file.dgds"),
        ("--set", "diameter"),
        ("--set", "diameter=abc"),
        ("--set", "height=-3"),
    ],
)
def test_failures_exit_with_status_one(monkeypatch, argv):
    with pytest.raises(SystemExit) as excinfo:
        run(monkeypatch, *argv)
    assert excinfo.value.code == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
