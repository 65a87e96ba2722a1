"""Static matplotlib report of a design: profile, flight path and ratings."""
import numpy as np
import matplotlib.pyplot as plt

from core.profile_model import points_to_array
from utils.bezier_utils import generate_bezier_points


def plot_design_report(points, flight_numbers, flight_path, filename, title="Disc design"):
    """
    Save a two-panel PNG/PDF/SVG (by extension) of the profile and its simulated flight.

    Args:
        points (Sequence[ProfilePoint]): Profile to draw.
        flight_numbers (FlightNumbers): Ratings shown in the flight panel title.
        flight_path (list[FlightPathPoint]): Output of ``simulate_flight_path``.
        filename (str): Output path.
        title (str): Figure title, usually the design name.
    """
    curve = generate_bezier_points(points)
    handles = points_to_array(points)
    is_anchor = np.array([p.is_anchor for p in points], dtype=bool)

    fig, (ax0, ax1) = plt.subplots(1, 2, figsize=(13, 5), constrained_layout=True)
    fig.suptitle(title)

    if len(curve):
        ax0.plot(curve[:, 0], -curve[:, 1], color='tab:blue', lw=1.5, label="Profile")
    if len(handles):
        ax0.plot(handles[:, 0], -handles[:, 1], color='0.6', lw=0.8, ls='--', label="Control polygon")
        ax0.plot(handles[is_anchor, 0], -handles[is_anchor, 1], 'o', color='tab:red', ms=4, label="Anchors")
        ax0.plot(handles[~is_anchor, 0], -handles[~is_anchor, 1], 's', color='tab:orange', ms=3, label="Handles")
    ax0.set_aspect('equal', adjustable='datalim')
    ax0.set_xlabel("Radius [mm]")
    ax0.set_ylabel("Height [mm]")
    ax0.grid(True, alpha=0.3)
    ax0.legend(loc='best', fontsize=8)

    path = np.array([(p.x, p.y) for p in flight_path]) if flight_path else np.empty((0, 2))
    if len(path):
        ax1.plot(path[:, 1], path[:, 0], color='tab:green', lw=2)
    ax1.axvline(0.0, color='0.7', lw=0.8)
    ax1.set_xlabel("Lateral drift [m]")
    ax1.set_ylabel("Distance [m]")
    ax1.set_title(
        f"Speed {flight_numbers.speed:g} | Glide {flight_numbers.glide:g} | "
        f"Turn {flight_numbers.turn:g} | Fade {flight_numbers.fade:g}"
    )
    ax1.grid(True, alpha=0.3)

    fig.savefig(filename, dpi=150)
    plt.close(fig)
    return filename
