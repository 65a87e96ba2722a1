#!/usr/bin/env python3
"""
Tests for the curvature comb controls.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication, QLabel

from core import config
from gui.widgets.comb_panel import CombPanelWidget


@pytest.fixture(scope="module")
def qt_app():
    app = QApplication.instance() or QApplication([])
    if not isinstance(app, QApplication):
        pytest.skip("a non-GUI Qt application is already running")
    yield app


def test_panel_wording(qt_app):
    panel = CombPanelWidget()
    assert panel.title() == "Profile Curvature"
    captions = [label.text() for label in panel.findChildren(QLabel)]
    assert "Tooth length:" in captions
    assert "Teeth per segment:" in captions
    assert "curvature" in panel.comb_scale_slider.toolTip()


def test_defaults_and_label_refresh(qt_app):
    panel = CombPanelWidget()
    assert panel.values() == (config.COMB_DENSITY_DEFAULT, config.COMB_SCALE_DEFAULT)
    assert panel.comb_scale_label.text() == f"{config.COMB_SCALE_DEFAULT:.0f}×"

    panel.comb_scale_slider.setValue(120)
    panel.comb_density_slider.setValue(10)
    panel.update_labels()
    assert panel.values() == (10, 120.0)
    assert panel.comb_scale_label.text() == "120×"
    assert panel.comb_density_label.text() == "10"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
