import logging
import re
import traceback

import numpy as np

from utils.lathe_geometry import LatheSolid


def facet_normals(solid: LatheSolid) -> np.ndarray:
    """Unit normal of every triangle; degenerate triangles get ``(0, 1, 0)``."""
    v = solid.vertices
    f = solid.faces
    normals = np.cross(v[f[:, 1]] - v[f[:, 0]], v[f[:, 2]] - v[f[:, 0]])
    lengths = np.linalg.norm(normals, axis=1)
    degenerate = lengths == 0
    normals[degenerate] = (0.0, 1.0, 0.0)
    lengths[degenerate] = 1.0
    return normals / lengths[:, np.newaxis]


def _num(value) -> str:
    return repr(float(value))


def geometry_to_stl(solid: LatheSolid, name: str = "disc") -> str:
    """
    Serialize a triangulated solid as ASCII STL.

    Args:
        solid (LatheSolid): Vertices and faces to write.
        name (str): Label written after ``solid`` and ``endsolid``.

    Returns:
        str: The STL document.
    """
    lines = [f"solid {name}"]
    for face, normal in zip(solid.faces, facet_normals(solid)):
        lines.append(f"  facet normal {_num(normal[0])} {_num(normal[1])} {_num(normal[2])}")
        lines.append("    outer loop")
        for index in face:
            x, y, z = solid.vertices[index]
            lines.append(f"      vertex {_num(x)} {_num(y)} {_num(z)}")
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return "\n".join(lines)


def design_stl_filename(design_name: str) -> str:
    """File name for a design: characters outside ``[A-Za-z0-9_-]`` become ``_``."""
    base = re.sub(r"[^A-Za-z0-9_\-]", "_", design_name or "") or "disc_design"
    return f"{base}.stl"


def export_stl(solid: LatheSolid, filename: str, logger_func=logging.info) -> bool:
    """
    Write *solid* to *filename* as ASCII STL.

    Returns:
        bool: True on success, False if writing failed (the error is logged).
    """
    try:
        with open(filename, "w", encoding="ascii", newline="\n") as fh:
            fh.write(geometry_to_stl(solid))
        logger_func(f"STL exported to {filename} ({solid.triangle_count} triangles).")
        return True
    except OSError as e:
        logger_func(f"Error writing STL file '{filename}': {e}")
        logger_func(traceback.format_exc())
        return False
