"""Controllers package for the Disc Designer GUI.

This package contains the controller components that handle
different aspects of the application logic.
"""

from .main_controller import MainController
from .file_controller import FileController
from .design_controller import DesignController
from .analysis_controller import AnalysisController

__all__ = [
    "MainController",
    "FileController",
    "DesignController",
    "AnalysisController",
]
