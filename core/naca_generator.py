"""NACA 4-digit and standard 5-digit airfoils as disc profiles.

Codes are parsed into mean-line and thickness parameters, sampled into
upper and lower surface ordinates, then reduced to a closed loop of ten
anchors with tangent handles. Reflex 5-digit sections are not supported.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

import numpy as np

from core import config
from core.profile_model import PointIdGenerator, PointType, ProfilePoint

# Half-thickness polynomial: y_t = 5t (a0 sqrt(x) + a1 x + a2 x^2 + a3 x^3 + a4 x^4)
THICKNESS_COEFFS = (0.2969, -0.1260, -0.3516, 0.2843, -0.1015)

# Standard (non-reflex) 5-digit mean lines: key -> (p, m, k)
NACA5_MEAN_LINES: dict[int, tuple[float, float, float]] = {
    210: (0.05, 0.0580, 361.4),
    220: (0.10, 0.1260, 51.64),
    230: (0.15, 0.2025, 15.957),
    240: (0.20, 0.2900, 6.643),
    250: (0.25, 0.3910, 3.230),
}

INVALID_CODE_MESSAGE = (
    "Invalid NACA code. Use 4 digits (0012, 2412) or 5 digits (23012). Reflex 5-digit not supported."
)


@dataclass(frozen=True)
class NacaParams:
    kind: str  # "symmetric", "cambered" or "five_digit"
    t: float
    m: float = 0.0
    p: float = 0.0
    k: float = 0.0

    @property
    def symmetric(self) -> bool:
        return self.kind == "symmetric"


@dataclass
class NacaResult:
    points: list[ProfilePoint] | None = None
    error: str | None = None
    params: NacaParams | None = field(default=None, repr=False)


def parse_naca_code(code: str) -> NacaParams | None:
    """Parse ``"0012"``, ``"NACA 2412"``, ``"23012"`` and the like; ``None`` if unsupported."""
    cleaned = re.sub(r"^NACA", "", re.sub(r"\s+", "", str(code)), flags=re.IGNORECASE)
    digits = [int(c) for c in re.sub(r"\D", "", cleaned)]
    if len(digits) not in (4, 5):
        return None

    t = (digits[-2] * 10 + digits[-1]) / 100
    if t <= 0 or t > 0.4:
        return None

    if len(digits) == 4:
        d1, d2 = digits[0], digits[1]
        if d1 == 0 and d2 == 0:
            return NacaParams("symmetric", t)
        m, p = d1 / 100, d2 / 10
        if p <= 0 or p >= 1:
            return None
        return NacaParams("cambered", t, m=m, p=p)

    lift_index, position, reflex = digits[0], digits[1], digits[2]
    if reflex != 0:
        return None
    if not (1 <= lift_index <= 5 and 1 <= position <= 5):
        return None
    mean_line = NACA5_MEAN_LINES.get(200 + position * 10 + reflex)
    if mean_line is None:
        return None
    p, m, k = mean_line
    return NacaParams("five_digit", t, m=m, p=p, k=k)


def thickness_distribution(x: np.ndarray, t: float) -> np.ndarray:
    """Half-thickness at normalized stations; zero at and beyond both ends."""
    x = np.asarray(x, dtype=float)
    a0, a1, a2, a3, a4 = THICKNESS_COEFFS
    inside = (x > 0) & (x < 1)
    xs = np.where(inside, x, 0.0)
    yt = 5 * t * (a0 * np.sqrt(xs) + a1 * xs + a2 * xs**2 + a3 * xs**3 + a4 * xs**4)
    return np.where(inside, np.maximum(yt, 0.0), 0.0)


def _camber_four_digit(x: np.ndarray, m: float, p: float):
    front = x < p
    yc = np.where(front, m / p**2 * (2 * p * x - x**2), m / (1 - p)**2 * ((1 - 2 * p) + 2 * p * x - x**2))
    dyc = np.where(front, m / p**2 * (2 * p - 2 * x), m / (1 - p)**2 * (2 * p - 2 * x))
    return yc, dyc


def _camber_five_digit(x: np.ndarray, m: float, k: float):
    k6 = k / 6
    front = x <= m
    yc = np.where(front, k6 * (x**3 - 3 * m * x**2 + m**2 * (3 - m) * x), k6 * m**3 * (1 - x))
    dyc = np.where(front, k6 * (3 * x**2 - 6 * m * x + m**2 * (3 - m)), -k6 * m**3)
    return yc, dyc


def camber_line(params: NacaParams, x: np.ndarray):
    """Mean-line height and slope; both zero outside the open interval (0, 1)."""
    x = np.asarray(x, dtype=float)
    if params.symmetric:
        return np.zeros_like(x), np.zeros_like(x)
    if params.kind == "five_digit":
        yc, dyc = _camber_five_digit(x, params.m, params.k)
    else:
        yc, dyc = _camber_four_digit(x, params.m, params.p)
    inside = (x > 0) & (x < 1)
    return np.where(inside, yc, 0.0), np.where(inside, dyc, 0.0)


def naca_ordinates(params: NacaParams, n: int = config.NACA_STATIONS) -> tuple[np.ndarray, np.ndarray]:
    """
    Upper and lower surface coordinates at ``n + 1`` evenly spaced stations.

    Returns:
        tuple[np.ndarray, np.ndarray]: ``(upper, lower)``, each (n + 1, 2),
        running from the leading edge (x = 0) to the trailing edge (x = 1).
    """
    x = np.linspace(0.0, 1.0, n + 1)
    yt = thickness_distribution(x, params.t)
    yc, dyc = camber_line(params, x)
    theta = np.arctan2(dyc, 1.0)
    sin_t, cos_t = np.sin(theta), np.cos(theta)
    upper = np.column_stack([x - yt * sin_t, yc + yt * cos_t])
    lower = np.column_stack([x + yt * sin_t, yc - yt * cos_t])
    return upper, lower


def ordinates_to_control_points(
    upper: np.ndarray,
    lower: np.ndarray,
    chord_length: float = config.NACA_DEFAULT_CHORD_MM,
    id_generator: PointIdGenerator | None = None,
    num_anchors: int = config.NACA_ANCHORS,
) -> list[ProfilePoint]:
    """
    Reduce surface ordinates to ``[handle_in, anchor, handle_out]`` triples.

    The loop runs along the upper surface then back along the lower one.
    Anchors are picked at evenly spaced indices and mapped to disc
    coordinates: leading edge at max x, y flipped so the upper surface is on
    top. Handles follow the incoming and outgoing secants, each a quarter of
    the shorter adjacent secant long.
    """
    ids = id_generator or PointIdGenerator()
    loop = np.vstack([upper, lower[::-1]])
    total = len(loop)
    indices = [min(k * total // num_anchors, total - 1) for k in range(num_anchors)]
    anchors = np.column_stack([(1 - loop[indices, 0]) * chord_length, -loop[indices, 1] * chord_length])

    d_in = anchors - np.roll(anchors, 1, axis=0)
    d_out = np.roll(anchors, -1, axis=0) - anchors
    len_in = np.hypot(d_in[:, 0], d_in[:, 1])
    len_out = np.hypot(d_out[:, 0], d_out[:, 1])
    len_in[len_in == 0] = 1.0
    len_out[len_out == 0] = 1.0
    handle = config.NACA_HANDLE_FRACTION * np.minimum(len_in, len_out)
    handles_in = anchors - (handle / len_in)[:, np.newaxis] * d_in
    handles_out = anchors + (handle / len_out)[:, np.newaxis] * d_out

    points = []
    for h_in, a, h_out in zip(handles_in, anchors, handles_out):
        points.append(ProfilePoint(float(h_in[0]), float(h_in[1]), PointType.CONTROL, ids.next_id()))
        points.append(ProfilePoint(float(a[0]), float(a[1]), PointType.ANCHOR, ids.next_id()))
        points.append(ProfilePoint(float(h_out[0]), float(h_out[1]), PointType.CONTROL, ids.next_id()))
    return points


def naca_to_control_points(
    code: str,
    chord_length: float = config.NACA_DEFAULT_CHORD_MM,
    id_generator: PointIdGenerator | None = None,
) -> NacaResult:
    """Profile for a NACA designation, or an error message when the code is unsupported."""
    params = parse_naca_code(code)
    if params is None:
        return NacaResult(error=INVALID_CODE_MESSAGE)
    upper, lower = naca_ordinates(params)
    return NacaResult(points=ordinates_to_control_points(upper, lower, chord_length, id_generator), params=params)
