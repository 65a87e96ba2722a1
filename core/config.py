"""Central project configuration constants.

This module gathers default numeric parameters, regulatory limits and
display settings used across the disc design library so they live in one
place. Import these values instead of hard-coding magic numbers inside
algorithms or UI widgets.
"""
from __future__ import annotations

# ---- Curve sampling ------------------------------------------------------
DEFAULT_SEGMENTS_PER_CURVE: int = 50
SEGMENTS_PER_CURVE_METRICS: int = 80  # Dense sampling for geometry extraction

# ---- Topology editing ----------------------------------------------------
HANDLE_OFFSET_MM: float = 12.0  # x-offset of handles synthesized on insert
MIN_ANCHORS: int = 3

# ---- PDGA regulatory limits (mm / g) -------------------------------------
PDGA_MAX_DIAMETER_MM: float = 215.0
PDGA_MIN_DIAMETER_MM: float = 210.0
PDGA_MAX_HEIGHT_MM: float = 30.0
PDGA_MIN_HEIGHT_MM: float = 10.0
PDGA_MIN_RIM_DEPTH_MM: float = 10.0
PDGA_MAX_RIM_DEPTH_MM: float = 25.0
PDGA_MIN_RIM_WIDTH_MM: float = 5.0
PDGA_MAX_RIM_WIDTH_MM: float = 30.0
PDGA_MAX_WEIGHT_G: float = 200.0  # Not used by the geometric core

# ---- Geometry extraction -------------------------------------------------
SHOULDER_SEARCH_FRACTION: float = 0.6  # Shoulder searched for beyond 60% of max radius
EXTREMUM_MATCH_TOL: float = 1e-4
SHOULDER_MATCH_TOL_MM: float = 1e-4  # Points this close to the shoulder line count as on it
CURVATURE_EPS: float = 1e-6
NOSE_RADIUS_RANGE: tuple[float, float] = (0.01, 500.0)
DOME_RADIUS_RANGE: tuple[float, float] = (0.01, 1000.0)
DOME_FLAT_DISPLAY_MM: float = 200.0  # Dome radii above this are shown as "flat"

# ---- Dimension solver ----------------------------------------------------
LENGTH_TOL_MM: float = 0.05
ANGLE_TOL_DEG: float = 0.5

# ---- Aerodynamics --------------------------------------------------------
AIRFOIL_STATIONS: int = 30
STATION_WINDOW_FRACTION: float = 0.15
GLAUERT_MIN_DX: float = 0.001
CAMBER_SIGN_FLIP_RATIO: float = 0.01
CENTER_OF_PRESSURE: float = 0.25
AIR_KINEMATIC_VISCOSITY: float = 1.5e-5  # m^2/s
FORM_DRAG_FACTOR: float = 0.7
DEFAULT_AIRSPEED_MS: float = 25.0
DEFAULT_ANGLE_OF_ATTACK_DEG: float = 0.0

# ---- Flight heuristic ----------------------------------------------------
RIM_REGION_FRACTION: float = 0.3
SPEED_RANGE: tuple[float, float] = (1.0, 14.75)
GLIDE_RANGE: tuple[float, float] = (1.0, 7.0)
TURN_RANGE: tuple[float, float] = (-5.0, 1.0)
FADE_RANGE: tuple[float, float] = (0.0, 5.0)
FLIGHT_PATH_STEPS: int = 100  # 101 samples including both ends

# ---- NACA generator ------------------------------------------------------
NACA_DEFAULT_CHORD_MM: float = 128.0
NACA_STATIONS: int = 60
NACA_ANCHORS: int = 10
NACA_HANDLE_FRACTION: float = 0.25

# ---- Revolved solid / export ---------------------------------------------
# tier -> (radial segments, curve segments per Bezier segment)
RESOLUTION_TIERS: dict[str, tuple[int, int]] = {
    "low": (24, 20),
    "medium": (48, 40),
    "high": (96, 80),
}
DEFAULT_RESOLUTION: str = "medium"

# ---- Project defaults ----------------------------------------------------
PROJECT_VERSION: int = 1
PROJECT_EXTENSION: str = ".dgds"
DEFAULT_DESIGN_NAME: str = "Untitled Disc"
DEFAULT_DISC_COLOR: str = "hsl(200, 100%, 50%)"
DEFAULT_TEMPLATE: str = "mid"
UNDO_LIMIT: int = 50

# ---- Plot settings -------------------------------------------------------
COMB_DENSITY_DEFAULT: int = 25  # Comb teeth per Bezier segment
COMB_SCALE_DEFAULT: float = 40.0
CALC_STEP_REVEAL_MS: int = 60
COMB_DENSITY_MIN: int = 5
COMB_DENSITY_MAX: int = 80
COMB_SCALE_MIN: int = 1
COMB_SCALE_MAX: int = 200
