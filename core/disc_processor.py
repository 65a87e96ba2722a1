import logging

from PySide6.QtCore import QObject, Signal

from core import config
from core.analysis.drag_coefficient import calculate_drag_coefficient
from core.analysis.flight_numbers import calculate_flight_numbers, simulate_flight_path
from core.analysis.lift_to_drag import calculate_lift_to_drag
from core.analysis.thin_airfoil import calculate_lift_coefficient
from core.dimension_solver import apply_dimension_targets
from core.disc_templates import TEMPLATES, template_profile
from core.naca_generator import naca_to_control_points
from core.pdga_constraints import constrain_point, validate_profile
from core.profile_metrics import get_profile_metrics
from core.profile_model import PointIdGenerator, anchor_count, clone_points
from core.topology import delete_anchor, find_nearest_segment, insert_anchor
from utils.bezier_utils import generate_bezier_points, profile_curvature_comb
from utils.dxf_exporter import export_profile_to_dxf
from utils.lathe_geometry import build_lathe_solid
from utils.project_io import ProjectData, ProjectLoadError, load_project_file, save_project_file
from utils.stl_exporter import export_stl


class SignalLogHandler(logging.Handler):
    """A logging handler that emits a Qt signal."""
    def __init__(self, signal_emitter):
        super().__init__()
        self.signal_emitter = signal_emitter

    def emit(self, record):
        msg = self.format(record)
        self.signal_emitter.emit(msg)


class DiscProcessor(QObject):
    """
    Holds the design being edited and exposes every edit, analysis and
    export as a method. The GUI and the console both drive it; results are
    reported through Qt signals so widgets never touch the model directly.
    """
    log_message = Signal(str)
    plot_update_requested = Signal(dict)

    def __init__(self, parent=None):
        super().__init__(parent)

        self.design_name = config.DEFAULT_DESIGN_NAME
        self.pdga_mode = False
        self.resolution = config.DEFAULT_RESOLUTION
        self.disc_color = config.DEFAULT_DISC_COLOR
        self.disc_template = config.DEFAULT_TEMPLATE
        self.comb_density = config.COMB_DENSITY_DEFAULT
        self.comb_scale = config.COMB_SCALE_DEFAULT

        self._id_generator = PointIdGenerator()
        self.points = template_profile(self.disc_template, self._id_generator)
        self._undo_stack = []
        self._redo_stack = []

    def install_log_handler(self, logger_names=("core", "utils")):
        """Route records from the library loggers into ``log_message``."""
        handler = SignalLogHandler(self.log_message)
        handler.setFormatter(logging.Formatter("%(message)s"))
        for name in logger_names:
            logging.getLogger(name).addHandler(handler)
        return handler

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def _push_undo(self):
        self._undo_stack.append(clone_points(self.points))
        if len(self._undo_stack) > config.UNDO_LIMIT:
            self._undo_stack.pop(0)
        self._redo_stack.clear()

    def _commit(self, new_points, message=None):
        """Replace the profile, recording the old one for undo."""
        self._push_undo()
        self.points = clone_points(new_points)
        if message:
            self.log_message.emit(message)
        self._request_plot_update()

    def can_undo(self):
        return bool(self._undo_stack)

    def can_redo(self):
        return bool(self._redo_stack)

    def undo(self):
        if not self._undo_stack:
            self.log_message.emit("Nothing to undo.")
            return False
        self._redo_stack.append(clone_points(self.points))
        self.points = self._undo_stack.pop()
        self._request_plot_update()
        return True

    def redo(self):
        if not self._redo_stack:
            self.log_message.emit("Nothing to redo.")
            return False
        self._undo_stack.append(clone_points(self.points))
        self.points = self._redo_stack.pop()
        self._request_plot_update()
        return True

    # ------------------------------------------------------------------
    # Whole-profile replacement
    # ------------------------------------------------------------------
    def new_design(self):
        """Start over from the default template with settings reset and history cleared."""
        self.design_name = config.DEFAULT_DESIGN_NAME
        self.pdga_mode = False
        self.resolution = config.DEFAULT_RESOLUTION
        self.disc_color = config.DEFAULT_DISC_COLOR
        self.disc_template = config.DEFAULT_TEMPLATE
        self._id_generator = PointIdGenerator()
        self.points = template_profile(self.disc_template, self._id_generator)
        self._undo_stack.clear()
        self._redo_stack.clear()
        self.log_message.emit("New design started.")
        self._request_plot_update()

    def set_design_name(self, name):
        self.design_name = name.strip() or config.DEFAULT_DESIGN_NAME

    def set_resolution(self, tier):
        if tier not in config.RESOLUTION_TIERS:
            self.log_message.emit(f"Unknown resolution '{tier}'.")
            return False
        self.resolution = tier
        return True

    def reset_to_template(self, key):
        if key not in TEMPLATES:
            self.log_message.emit(f"Unknown template '{key}'.")
            return False
        self.disc_template = key
        self._commit(template_profile(key, self._id_generator), f"Loaded {TEMPLATES[key].title} template.")
        for hint in TEMPLATES[key].hints:
            self.log_message.emit(f"  • {hint}")
        return True

    def load_naca(self, code, chord_length=config.NACA_DEFAULT_CHORD_MM):
        result = naca_to_control_points(code, chord_length, self._id_generator)
        if result.error:
            self.log_message.emit(result.error)
            return False
        self._commit(result.points, f"Generated NACA {code.strip()} profile ({len(result.points)} points).")
        return True

    # ------------------------------------------------------------------
    # Point edits
    # ------------------------------------------------------------------
    def set_pdga_mode(self, enabled):
        self.pdga_mode = bool(enabled)
        self.log_message.emit(f"PDGA mode {'enabled' if self.pdga_mode else 'disabled'}.")
        self._request_plot_update()

    def move_point(self, index, x, y, record_history=True):
        """Move point *index* to ``(x, y)``, clamped when PDGA mode is on."""
        if not 0 <= index < len(self.points):
            return False
        moved = constrain_point(self.points[index].moved_to(x, y), self.pdga_mode, self.points)
        new_points = clone_points(self.points)
        new_points[index] = moved
        if record_history:
            self._commit(new_points)
        else:
            self.points = new_points
            self._request_plot_update()
        return True

    def begin_drag(self):
        """Snapshot for undo before a sequence of unrecorded ``move_point`` calls."""
        self._push_undo()

    def insert_anchor_at(self, x, y):
        nearest = find_nearest_segment(self.points, (x, y))
        self._commit(
            insert_anchor(self.points, (x, y), nearest, self._id_generator),
            f"Inserted anchor at ({x:.1f}, {y:.1f}).",
        )
        return True

    def delete_anchor_at(self, index):
        new_points = delete_anchor(self.points, index)
        if len(new_points) == len(self.points):
            if anchor_count(self.points) <= config.MIN_ANCHORS:
                self.log_message.emit(f"A profile needs at least {config.MIN_ANCHORS} anchors.")
            return False
        self._commit(new_points, "Anchor deleted.")
        return True

    def apply_dimensions(self, targets):
        result = apply_dimension_targets(self.points, targets)
        if result.error:
            self.log_message.emit(f"Dimension error: {result.error}")
            return False
        self._commit(result.points, "Dimensions applied.")
        return True

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    def metrics(self):
        return get_profile_metrics(self.points)

    def warnings(self):
        return validate_profile(self.points) if self.pdga_mode else []

    def run_lift_analysis(self, angle_of_attack=config.DEFAULT_ANGLE_OF_ATTACK_DEG):
        return calculate_lift_coefficient(self.points, angle_of_attack)

    def run_drag_analysis(self, speed_ms=config.DEFAULT_AIRSPEED_MS):
        return calculate_drag_coefficient(self.points, speed_ms)

    def run_flight_analysis(self, throw_power=1.0):
        numbers = calculate_flight_numbers(self.points)
        return numbers, simulate_flight_path(numbers, throw_power)

    def run_lift_to_drag(self, angle_of_attack=config.DEFAULT_ANGLE_OF_ATTACK_DEG,
                         speed_ms=config.DEFAULT_AIRSPEED_MS):
        return calculate_lift_to_drag(self.points, angle_of_attack, speed_ms)

    # ------------------------------------------------------------------
    # Export / persistence
    # ------------------------------------------------------------------
    def build_solid(self, radial_segments=None):
        try:
            return build_lathe_solid(self.points, radial_segments, self.resolution)
        except ValueError as e:
            self.log_message.emit(f"Cannot build solid: {e}")
            return None

    def export_stl(self, filename):
        solid = self.build_solid()
        if solid is None:
            return False
        return export_stl(solid, filename, logger_func=self.log_message.emit)

    def export_dxf(self, filename):
        doc = export_profile_to_dxf(self.points, logger_func=self.log_message.emit)
        if doc is None:
            return False
        try:
            doc.saveas(filename)
        except OSError as e:
            self.log_message.emit(f"Error saving DXF file: {e}")
            return False
        self.log_message.emit(f"DXF saved to {filename}")
        return True

    def project_data(self):
        return ProjectData(
            design_name=self.design_name,
            points=clone_points(self.points),
            pdga_mode=self.pdga_mode,
            resolution=self.resolution,
            disc_color=self.disc_color,
            disc_template=self.disc_template,
        )

    def save_project(self, filename):
        return save_project_file(self.project_data(), filename, logger_func=self.log_message.emit)

    def load_project(self, filename):
        project = load_project_file(filename)
        if isinstance(project, ProjectLoadError):
            self.log_message.emit(f"Failed to load project: {project.error}")
            return False
        self.design_name = project.design_name
        self.pdga_mode = project.pdga_mode
        self.resolution = project.resolution
        self.disc_color = project.disc_color
        self.disc_template = project.disc_template
        self._id_generator = PointIdGenerator.after(project.points)
        self._undo_stack.clear()
        self._redo_stack.clear()
        self.points = clone_points(project.points)
        self.log_message.emit(f"Loaded project '{self.design_name}'.")
        self._request_plot_update()
        return True

    # ------------------------------------------------------------------
    # Plot
    # ------------------------------------------------------------------
    def set_comb_params(self, density, scale):
        self.comb_density = int(density)
        self.comb_scale = float(scale)
        self._request_plot_update()

    def _request_plot_update(self):
        """Emits a signal to request a plot update with the current profile."""
        plot_data = {
            'curve': generate_bezier_points(self.points),
            'points': clone_points(self.points),
            'metrics': self.metrics(),
            'warnings': self.warnings(),
            'comb': profile_curvature_comb(self.points, self.comb_density, self.comb_scale),
            'can_undo': self.can_undo(),
            'can_redo': self.can_redo(),
        }
        self.plot_update_requested.emit(plot_data)

    def request_plot_update(self):
        self._request_plot_update()
