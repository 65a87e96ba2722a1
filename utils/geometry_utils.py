import numpy as np


def bounding_box(xy: np.ndarray) -> tuple[float, float, float, float]:
    """Return ``(min_x, max_x, min_y, max_y)`` of an (N, 2) array."""
    xy = np.asarray(xy, dtype=float)
    min_x, min_y = xy.min(axis=0)
    max_x, max_y = xy.max(axis=0)
    return float(min_x), float(max_x), float(min_y), float(max_y)


def shoelace_area(xy: np.ndarray) -> float:
    """Unsigned area of the closed polygon through the rows of *xy*.

    Polygons with fewer than three vertices have zero area.
    """
    xy = np.asarray(xy, dtype=float)
    if len(xy) < 3:
        return 0.0
    x, y = xy[:, 0], xy[:, 1]
    x_next, y_next = np.roll(x, -1), np.roll(y, -1)
    return float(abs(np.sum(x * y_next - x_next * y)) / 2.0)


def pairwise_distances(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Row-wise Euclidean distances between two equally shaped (N, 2) arrays."""
    diff = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return np.hypot(diff[:, 0], diff[:, 1])
