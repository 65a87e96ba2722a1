import argparse
import os
import sys
import logging

# Central configuration
from core import config
from core.analysis.calculation_steps import format_step
from core.analysis.drag_coefficient import calculate_drag_coefficient
from core.analysis.flight_numbers import calculate_flight_numbers, simulate_flight_path
from core.analysis.lift_to_drag import calculate_lift_to_drag
from core.analysis.thin_airfoil import calculate_lift_coefficient
from core.dimension_solver import apply_dimension_targets, parse_dimension_targets
from core.disc_templates import TEMPLATE_KEYS, template_profile
from core.naca_generator import naca_to_control_points
from core.pdga_constraints import constrain_point, validate_profile
from core.profile_metrics import METRIC_KEYS, get_profile_metrics
from utils.dxf_exporter import export_profile_to_dxf
from utils.lathe_geometry import build_lathe_solid
from utils.project_io import ProjectData, ProjectLoadError, load_project_file, save_project_file
from utils.stl_exporter import design_stl_filename, export_stl


def _print_steps(steps):
    for step in steps:
        logging.info(format_step(step))


def _parse_set_args(items):
    fields = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"Expected name=value, got '{item}'")
        fields[key.strip().replace("-", "_")] = value
    return fields


def main():
    """
    Main function for the command-line disc design application.
    """
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    parser = argparse.ArgumentParser(
        description="""
        A command-line tool for disc golf disc profile design.
        This tool starts from a template, a NACA airfoil or a saved project, optionally
        reshapes it to target dimensions, prints geometry and aerodynamic estimates,
        and exports the result as STL, DXF or a project file.
        """,
        formatter_class=argparse.RawTextHelpFormatter
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--project", type=str, help="Load a saved project (.dgds) file.")
    source.add_argument("--naca", type=str, help="Generate the profile from a NACA code, e.g. 0012 or 23012.")
    source.add_argument(
        "--template",
        choices=TEMPLATE_KEYS,
        default=None,
        help=f"Start from a built-in template. Defaults to '{config.DEFAULT_TEMPLATE}'.",
    )
    parser.add_argument(
        "--chord",
        type=float,
        default=config.NACA_DEFAULT_CHORD_MM,
        help=f"Chord length in mm for --naca. Defaults to {config.NACA_DEFAULT_CHORD_MM} mm.",
    )
    parser.add_argument("--name", type=str, default=None, help="Design name used in exports.")
    parser.add_argument(
        "--set",
        dest="targets",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Target dimension, repeatable. Names: " + ", ".join(METRIC_KEYS),
    )
    parser.add_argument("--pdga", action="store_true", help="Clamp all points into the PDGA envelope and report violations.")

    parser.add_argument("--metrics", action="store_true", help="Print the measured dimensions.")
    parser.add_argument("--lift", action="store_true", help="Run the thin-airfoil lift analysis.")
    parser.add_argument("--aoa", type=float, default=config.DEFAULT_ANGLE_OF_ATTACK_DEG,
                        help="Angle of attack in degrees for --lift/--ld.")
    parser.add_argument("--drag", action="store_true", help="Run the drag coefficient estimate.")
    parser.add_argument("--speed", type=float, default=config.DEFAULT_AIRSPEED_MS,
                        help=f"Airspeed in m/s for --drag/--ld. Defaults to {config.DEFAULT_AIRSPEED_MS}.")
    parser.add_argument("--ld", action="store_true", help="Print the lift-to-drag ratio and its interpretation.")
    parser.add_argument("--flight", action="store_true", help="Print the heuristic flight numbers.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print full calculation traces.")

    parser.add_argument("--stl", type=str, nargs="?", const="", default=None,
                        help="Export an ASCII STL. Without a path the file is named after the design.")
    parser.add_argument("--resolution", choices=tuple(config.RESOLUTION_TIERS), default=None,
                        help="Mesh resolution tier for --stl.")
    parser.add_argument("--dxf", type=str, default=None, help="Export the profile curve to a DXF file.")
    parser.add_argument("--save-project", type=str, default=None, help="Write the resulting design to a project file.")
    parser.add_argument("--plot", type=str, default=None, help="Save a profile/flight report image (PNG, PDF, SVG).")

    args = parser.parse_args()
    failed = False

    # --- Build the starting profile ---
    project = ProjectData()
    if args.project:
        if not os.path.exists(args.project):
            logging.error(f"Error: Project file not found at '{args.project}'")
            sys.exit(1)
        loaded = load_project_file(args.project)
        if isinstance(loaded, ProjectLoadError):
            logging.error(f"Error: {loaded.error}")
            sys.exit(1)
        project = loaded
    elif args.naca:
        result = naca_to_control_points(args.naca, args.chord)
        if result.error:
            logging.error(f"Error: {result.error}")
            sys.exit(1)
        project.points = result.points
        project.design_name = f"NACA {args.naca.strip()}"
    else:
        project.disc_template = args.template or config.DEFAULT_TEMPLATE
        project.points = template_profile(project.disc_template)

    if args.name:
        project.design_name = args.name
    if args.resolution:
        project.resolution = args.resolution
    if args.pdga:
        project.pdga_mode = True
        project.points = [constrain_point(p, True, project.points) for p in project.points]

    # --- Dimension targets ---
    if args.targets:
        try:
            fields = _parse_set_args(args.targets)
        except ValueError as e:
            logging.error(f"Error: {e}")
            sys.exit(1)
        targets, error = parse_dimension_targets(fields)
        if error:
            logging.error(f"Error: {error}")
            sys.exit(1)
        result = apply_dimension_targets(project.points, targets)
        if result.error:
            logging.error(f"Error: {result.error}")
            sys.exit(1)
        project.points = result.points
        logging.info(f"Applied targets: {', '.join(f'{k}={v:g}' for k, v in targets.items())}")

    logging.info(f"Design '{project.design_name}': {len(project.points)} points")

    # --- Reports ---
    if args.metrics:
        metrics = get_profile_metrics(project.points)
        if metrics is None:
            logging.error("Error: Profile too small to measure.")
            failed = True
        else:
            for key in METRIC_KEYS:
                logging.info(f"  {key:<22} {metrics[f'{key}_str']}")

    if project.pdga_mode:
        for warning in validate_profile(project.points):
            logging.warning(f"PDGA: {warning}")

    if args.lift:
        lift = calculate_lift_coefficient(project.points, args.aoa)
        if args.verbose or lift.error:
            _print_steps(lift.steps)
        if lift.error:
            failed = True
        else:
            logging.info(f"Cl = {lift.cl:.4f} (α₀ = {lift.alpha_zero_lift:.3f}°, camber {lift.camber_ratio * 100:.2f}%)")

    if args.drag:
        drag = calculate_drag_coefficient(project.points, args.speed)
        if args.verbose or drag.error:
            _print_steps(drag.steps)
        if drag.error:
            failed = True
        else:
            logging.info(f"Cd = {drag.cd:.4f} (friction {drag.cd_friction:.4f}, form {drag.cd_form:.4f}, Re {drag.re:.0f})")

    if args.ld:
        ld = calculate_lift_to_drag(project.points, args.aoa, args.speed)
        if args.verbose or ld.error:
            _print_steps(ld.steps)
        if ld.error:
            failed = True
        else:
            logging.info(f"L/D = {ld.ld:.2f}: {ld.interpretation.message}")

    numbers = None
    if args.flight or args.plot:
        numbers = calculate_flight_numbers(project.points)
        if args.verbose or numbers.error:
            _print_steps(numbers.steps)
        if numbers.error:
            failed = True
        elif args.flight:
            logging.info(f"Flight numbers: {numbers.speed:g} | {numbers.glide:g} | {numbers.turn:g} | {numbers.fade:g}")

    # --- Exports ---
    if args.stl is not None:
        stl_path = args.stl or design_stl_filename(project.design_name)
        try:
            solid = build_lathe_solid(project.points, resolution=project.resolution)
        except ValueError as e:
            logging.error(f"Error: {e}")
            failed = True
        else:
            failed |= not export_stl(solid, stl_path)

    if args.dxf:
        dxf_doc = export_profile_to_dxf(project.points, logging.info)
        if dxf_doc is None:
            failed = True
        else:
            try:
                dxf_doc.saveas(args.dxf)
                logging.info(f"DXF saved to {args.dxf}")
            except OSError as e:
                logging.error(f"Error saving DXF file: {e}")
                failed = True

    if args.save_project:
        failed |= not save_project_file(project, args.save_project, logging.info)

    if args.plot and numbers is not None:
        from utils.plot_flight import plot_design_report
        plot_design_report(project.points, numbers, simulate_flight_path(numbers), args.plot, title=project.design_name)
        logging.info(f"Report saved to {args.plot}")

    if failed:
        logging.error("Processing failed. See log for details.")
        sys.exit(1)

if __name__ == "__main__":
    main()
