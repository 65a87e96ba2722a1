import numpy as np
from scipy.special import comb

from core import config
from core.profile_model import get_anchors


def general_bezier_curve(t, points):
    """
    Calculates points on a Bezier curve of any order.

    Args:
        t (np.ndarray or float): Parameter value(s) between 0 and 1.
        points (np.ndarray): 2D array of control points (num_points, 2).

    Returns:
        np.ndarray: Points on the Bezier curve corresponding to t values.
    """
    n = len(points) - 1
    if not isinstance(t, np.ndarray):
        t = np.array([t])
    elif t.ndim > 1:
        t = t.flatten()

    # Bernstein basis: B_i,n(t) = C(n,i) * (1-t)^(n-i) * t^i
    binom_coeffs = comb(n, np.arange(n + 1))
    basis_functions = np.array([binom_coeffs[i] * (1 - t)**(n - i) * t**i for i in range(n + 1)]).T

    return basis_functions @ points


def cubic_bezier(p0, p1, p2, p3, t):
    """Evaluate a single cubic segment at *t* (scalar or array)."""
    return general_bezier_curve(t, np.array([p0, p1, p2, p3], dtype=float))


def bezier_derivative(t, points, order=1):
    """
    Calculates the derivative of a Bezier curve at parameter t.

    Args:
        t (np.ndarray or float): Parameter value(s) between 0 and 1.
        points (np.ndarray): 2D array of control points (num_points, 2).
        order (int): The order of the derivative (1 for first, 2 for second).

    Returns:
        np.ndarray: Derivative vector(s) at the specified t value(s).
    """
    n = len(points) - 1
    t_count = len(t) if isinstance(t, np.ndarray) else 1

    if order == 0:
        return general_bezier_curve(t, points)
    elif order == 1:
        if n < 1:
            return np.zeros((t_count, 2))
        derived_points = n * (points[1:] - points[:-1])
        return general_bezier_curve(t, derived_points)
    elif order == 2:
        if n < 2:
            return np.zeros((t_count, 2))
        derived_points = n * (n - 1) * (points[2:] - 2 * points[1:-1] + points[:-2])
        return general_bezier_curve(t, derived_points)
    else:
        raise ValueError("Derivative order not supported for Bezier curves. Only 0, 1, or 2.")


def bezier_curvature(t, points):
    """
    Calculates the signed curvature of a 2D Bezier curve at parameter t.

    Args:
        t (np.ndarray or float): Parameter value(s) between 0 and 1.
        points (np.ndarray): 2D array of control points (num_points, 2).

    Returns:
        np.ndarray: Curvature value(s) at the specified t value(s).
    """
    if not isinstance(t, np.ndarray):
        t = np.array([t])

    P_prime = bezier_derivative(t, points, order=1)
    P_double_prime = bezier_derivative(t, points, order=2)

    x_prime, y_prime = P_prime[:, 0], P_prime[:, 1]
    x_double_prime, y_double_prime = P_double_prime[:, 0], P_double_prime[:, 1]

    numerator = x_prime * y_double_prime - y_prime * x_double_prime
    denominator = (x_prime**2 + y_prime**2)**(3/2)

    # Stationary points (zero-length handles) get zero curvature
    return np.divide(numerator, denominator, out=np.zeros_like(numerator), where=denominator > 1e-12)


def segment_control_polygons(points, closed=True):
    """
    Split a profile into the cubic segments it describes.

    Each consecutive anchor pair (wrapping to the first anchor when *closed*)
    becomes one segment ``[P0, H1, H2, P3]``. ``H1`` is the element right
    after the first anchor when it is a control point, otherwise the anchor
    itself. ``H2`` is the element right before the second anchor when it is
    a control point; on the wrap-around segment only, it falls back to the
    last control point anywhere in the profile, then to the anchor itself.

    Args:
        points (Sequence[ProfilePoint]): The profile.
        closed (bool): Whether to add the segment from the last anchor back to the first.

    Returns:
        list[tuple[int, int, np.ndarray]]: ``(first_anchor_index, second_anchor_index, polygon)``
        per segment, indices into *points* and polygon shaped (4, 2).
    """
    anchors = get_anchors(points)
    if len(anchors) < 2:
        return []

    last_control = next((p for p in reversed(points) if p.is_control), None)
    segments = []
    for k, (idx_a, a) in enumerate(anchors):
        if k + 1 < len(anchors):
            idx_b, b = anchors[k + 1]
            wrap = False
        elif closed:
            idx_b, b = anchors[0]
            wrap = True
        else:
            break

        after = points[idx_a + 1] if idx_a + 1 < len(points) else None
        h1 = after if after is not None and after.is_control else a

        before = points[idx_b - 1] if idx_b >= 1 else None
        if before is not None and before.is_control:
            h2 = before
        elif wrap and last_control is not None:
            h2 = last_control
        else:
            h2 = b

        polygon = np.array([a.as_tuple(), h1.as_tuple(), h2.as_tuple(), b.as_tuple()], dtype=float)
        segments.append((idx_a, idx_b, polygon))
    return segments


def generate_bezier_points(points, segments_per_curve=config.DEFAULT_SEGMENTS_PER_CURVE, closed=True):
    """
    Evaluate a profile into a dense polyline.

    Every segment is sampled at ``segments_per_curve + 1`` evenly spaced
    parameters and the samples are concatenated in anchor order, so shared
    anchors appear twice. Fewer than two anchors yield an empty ``(0, 2)`` array.

    Args:
        points (Sequence[ProfilePoint]): The profile.
        segments_per_curve (int): Subdivisions per Bezier segment.
        closed (bool): Include the wrap-around segment.

    Returns:
        np.ndarray: Samples shaped (N, 2).
    """
    segments = segment_control_polygons(points, closed=closed)
    if not segments:
        return np.empty((0, 2))

    t_values = np.linspace(0.0, 1.0, segments_per_curve + 1)
    return np.vstack([general_bezier_curve(t_values, polygon) for _, _, polygon in segments])


def profile_curvature_comb(points, num_points_per_segment=config.COMB_DENSITY_DEFAULT,
                           scale_factor=config.COMB_SCALE_DEFAULT):
    """
    Curvature comb hairs for every segment of a profile.

    Returns:
        list[list[np.ndarray]]: Per segment, a list of (2, 2) arrays ``[base, tip]``.
    """
    combs = []
    t_vals = np.linspace(0.0, 1.0, num_points_per_segment)
    for _, _, polygon in segment_control_polygons(points):
        curve_points = general_bezier_curve(t_vals, polygon)
        derivatives = bezier_derivative(t_vals, polygon, order=1)
        curvatures = bezier_curvature(t_vals, polygon)

        tangent_norms = np.linalg.norm(derivatives, axis=1)
        unit_tangents = np.zeros_like(derivatives)
        valid = tangent_norms > 1e-12
        unit_tangents[valid] = derivatives[valid] / tangent_norms[valid, np.newaxis]

        normals = np.column_stack([-unit_tangents[:, 1], unit_tangents[:, 0]])
        end_points = curve_points + normals * (-curvatures * scale_factor)[:, np.newaxis]
        combs.append([np.array([curve_points[j], end_points[j]]) for j in range(num_points_per_segment)])
    return combs

