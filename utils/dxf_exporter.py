import ezdxf
import traceback

from core.profile_model import points_to_array
from utils.bezier_utils import segment_control_polygons


def export_profile_to_dxf(points, logger_func, include_control_polygon=True):
    """
    Export a disc profile to DXF, one cubic spline per Bezier segment.

    A cubic Bezier segment is exactly a degree-3 open B-spline over its four
    control points, so the profile is written without approximation.

    Args:
        points (Sequence[ProfilePoint]): The profile, in millimetres.
        logger_func (callable): A function to send log messages to.
        include_control_polygon (bool): Also draw the anchor/handle polygon on its own layer.

    Returns:
        ezdxf.document.Drawing: The created DXF document object, or None if an error occurred.
    """
    try:
        segments = segment_control_polygons(points)
        if not segments:
            logger_func("Error: Profile needs at least two anchors for DXF export.")
            return None

        logger_func(f"Preparing DXF export of {len(segments)} Bezier segments...")

        doc = ezdxf.new('R2000')
        doc.header["$INSUNITS"] = 4  # millimeters
        doc.layers.add("DISC_PROFILE", color=5)
        msp = doc.modelspace()

        for _, _, polygon in segments:
            msp.add_open_spline(
                control_points=[tuple(pt.tolist()) for pt in polygon],
                degree=3,
                dxfattribs={"layer": "DISC_PROFILE"},
            )

        if include_control_polygon:
            doc.layers.add("CONTROL_POLYGON", color=8)
            coords = [tuple(pt.tolist()) for pt in points_to_array(points)]
            msp.add_lwpolyline(coords, close=True, dxfattribs={"layer": "CONTROL_POLYGON"})

        logger_func("DXF export completed successfully.")
        return doc

    except Exception as e:
        logger_func(f"Error during DXF export: {e}")
        logger_func(traceback.format_exc())
        return None
