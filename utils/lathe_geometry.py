"""Surface of revolution built from a disc profile."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from core import config
from utils.bezier_utils import generate_bezier_points


@dataclass(frozen=True)
class LatheSolid:
    vertices: np.ndarray  # (N, 3)
    faces: np.ndarray  # (M, 3) vertex indices
    normals: np.ndarray  # (N, 3) unit vertex normals

    @property
    def triangle_count(self) -> int:
        return len(self.faces)


def resolve_resolution(resolution: str) -> tuple[int, int]:
    """``(radial_segments, curve_segments)`` for a tier; unknown tiers fall back to the default."""
    return config.RESOLUTION_TIERS.get(resolution, config.RESOLUTION_TIERS[config.DEFAULT_RESOLUTION])


def lathe_profile(points, curve_segments: int, closed: bool = True) -> np.ndarray:
    """2D outline to revolve: radius clamped to >= 0, y flipped so the disc top points up."""
    samples = generate_bezier_points(points, curve_segments, closed=closed)
    if len(samples) == 0:
        return samples
    return np.column_stack([np.maximum(samples[:, 0], 0.0), -samples[:, 1]])


def vertex_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """Area-weighted vertex normals; isolated or degenerate vertices get a zero vector."""
    v1, v2, v3 = vertices[faces[:, 0]], vertices[faces[:, 1]], vertices[faces[:, 2]]
    face_normals = np.cross(v2 - v1, v3 - v1)
    normals = np.zeros_like(vertices)
    for k in range(3):
        np.add.at(normals, faces[:, k], face_normals)
    lengths = np.linalg.norm(normals, axis=1)
    valid = lengths > 0
    normals[valid] /= lengths[valid, np.newaxis]
    return normals


def build_lathe_solid(points, radial_segments: int | None = None, resolution: str = config.DEFAULT_RESOLUTION,
                      closed: bool = True) -> LatheSolid:
    """
    Revolve the evaluated profile a full turn about the vertical axis.

    Vertices are laid out ring by ring (``radial_segments + 1`` rings, the
    last coinciding with the first) with ``x = r sin(phi)``, ``z = r cos(phi)``.
    Each quad between neighbouring rings is split into two triangles.

    Args:
        points: Profile point list.
        radial_segments: Number of angular steps; ``None`` uses the tier's value.
        resolution: ``"low"``, ``"medium"`` or ``"high"``.
        closed: Evaluate the closing segment of the profile.

    Raises:
        ValueError: The profile evaluates to fewer than two points.
    """
    tier_radial, curve_segments = resolve_resolution(resolution)
    radial = int(radial_segments or tier_radial)

    outline = lathe_profile(points, curve_segments, closed)
    if len(outline) < 2:
        raise ValueError("Not enough points for geometry")

    n = len(outline)
    phi = np.linspace(0.0, 2 * np.pi, radial + 1)
    r = outline[:, 0]
    y = outline[:, 1]
    vertices = np.column_stack([
        (np.sin(phi)[:, np.newaxis] * r).ravel(),
        np.tile(y, radial + 1),
        (np.cos(phi)[:, np.newaxis] * r).ravel(),
    ])

    i, j = np.meshgrid(np.arange(radial), np.arange(n - 1), indexing="ij")
    a = (j + i * n).ravel()
    b = a + n
    c = b + 1
    d = a + 1
    faces = np.empty((2 * len(a), 3), dtype=np.int64)
    faces[0::2] = np.column_stack([a, b, d])
    faces[1::2] = np.column_stack([c, d, b])

    return LatheSolid(vertices=vertices, faces=faces, normals=vertex_normals(vertices, faces))
