"""
Irrigation Planner CLI - Main entry point.

Builds, reports, renders and clears a plan kept in a JSON key/value file.
Every command loads the plan, applies one action through a PlannerSession
and lets the session autosave.
"""

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from irrigation_zone import (
    DrawingTool,
    JsonFileKeyValueStore,
    LengthUnit,
    PlannerConfig,
    PlannerSession,
    PlanPersistence,
    Shape,
    ZoneKind,
)
from irrigation_zone.capture import parse_length
from irrigation_zone.logging import LogEvent, create_logger
from irrigation_zone.rendering import ZoneVisualizer, read_image, write_image
from irrigation_cli.utils import get_target_run_folder


ZONE_LABELS = {
    ZoneKind.REGULAR: "Regular Zones",
    ZoneKind.DRIP: "Drip Zones",
    ZoneKind.EXCLUSION: "Exclusion Zones",
}


def parse_point(text: str) -> Tuple[float, float]:
    """
    Parse an 'X,Y' pair.

    Raises:
        argparse.ArgumentTypeError: If the text is not two numbers
    """
    try:
        x, y = (float(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got '{text}'")
    return x, y


def load_config(config_path: Optional[str], store_path: Optional[str]) -> PlannerConfig:
    """
    Load the YAML config (or defaults) and apply the --store override.

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config = PlannerConfig.from_yaml(path)
    else:
        config = PlannerConfig()

    if store_path is not None:
        config = dataclasses.replace(config, store_path=Path(store_path))
    return config


def open_session(config: PlannerConfig) -> PlannerSession:
    """Create a session bound to the config's JSON store and load the plan."""
    logger = create_logger("cli", level=config.logging_level).bind(store=str(config.store_path))
    logger.debug(
        event=LogEvent.CONFIG_LOADED,
        message="Loaded planner config",
        metadata={
            'grid_cell_size': config.grid_cell_size,
            'snap_threshold': config.snap_threshold,
            'default_unit': config.default_unit.value,
        },
    )
    persistence = PlanPersistence(JsonFileKeyValueStore(config.store_path), logger=logger)
    session = PlannerSession(config=config, persistence=persistence, logger=logger)
    session.load()
    return session


def add_zone(session: PlannerSession, kind: ZoneKind, points: List[Tuple[float, float]]) -> Shape:
    """
    Feed points through the capture state machine and close on the first one.

    Raises:
        ValueError: If the points do not close into a polygon
    """
    session.select_tool(DrawingTool(kind.value))
    shape = None
    for x, y in points + points[:1]:
        session.pointer_down(x, y)
        shape = session.pointer_up(x, y)

    if shape is None or session.capture.is_drawing:
        session.capture.cancel()
        raise ValueError(
            "Zone did not close: give at least 3 distinct vertices, "
            "none of them within the snap threshold of the first"
        )
    return shape


def format_report(session: PlannerSession) -> str:
    report = session.area_report()
    lines = []
    if session.dimensions is None:
        lines.append("Canvas not set (use 'canvas' first); areas need a canvas.")
    for kind, label in ZONE_LABELS.items():
        lines.append(f"{label}: {report[kind].format()}")
    lines.append(f"Shapes: {len(session.store)}  Regions: {report.region_count}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Irrigation Planner CLI - trace zones and report their areas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Canvas from the background image
  irrigation-planner canvas --image backyard.png

  # Zones (vertices in pixels; the polygon closes on the first vertex)
  irrigation-planner add-zone regular 0,0 100,0 100,100 0,100
  irrigation-planner add-zone drip 20,20 70,20 70,70 20,70

  # Calibrate: a 100 px segment is 5 m long
  irrigation-planner ruler 0,0 100,0 5 --unit m

  # Totals, overlay, housekeeping
  irrigation-planner report
  irrigation-planner render backyard.png --output plan.png
  irrigation-planner delete 50,50
  irrigation-planner clear
"""
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to planner config YAML (default: built-in defaults)"
    )
    parser.add_argument(
        "--store",
        default=None,
        help="Path to the plan JSON file (overrides config store_path)"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    canvas = subparsers.add_parser('canvas', help='Set canvas dimensions')
    canvas.add_argument('size', nargs='*', type=int, help='WIDTH HEIGHT')
    canvas.add_argument('--image', help='Read dimensions from an image')

    add = subparsers.add_parser('add-zone', help='Add a closed zone polygon')
    add.add_argument('kind', choices=[k.value for k in ZoneKind], help='Zone kind')
    add.add_argument('points', nargs='+', type=parse_point, help='Vertices as X,Y')

    ruler = subparsers.add_parser('ruler', help='Place and calibrate the ruler')
    ruler.add_argument('start', type=parse_point, help='Start as X,Y')
    ruler.add_argument('end', type=parse_point, help='End as X,Y')
    ruler.add_argument('length', help='Real-world length of the segment')
    ruler.add_argument(
        '--unit',
        choices=[u.value for u in LengthUnit],
        default=None,
        help='Length unit (default: config default_unit)'
    )

    delete = subparsers.add_parser('delete', help='Delete the first zone containing a point')
    delete.add_argument('point', type=parse_point, help='Point as X,Y')

    report = subparsers.add_parser('report', help='Print per-kind areas')
    report.add_argument('--json', action='store_true', help='Print JSON instead of text')

    render = subparsers.add_parser('render', help='Draw the plan over an image')
    render.add_argument('image', help='Background image path')
    render.add_argument('--output', default=None, help='Output PNG path')

    subparsers.add_parser('clear', help='Remove every zone, the ruler and the canvas')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config, args.store)
        session = open_session(config)

        if args.command == 'canvas':
            if args.image:
                height, width = read_image(args.image).shape[:2]
            elif len(args.size) == 2:
                width, height = args.size
            else:
                raise ValueError("Give WIDTH HEIGHT or --image")
            dims = session.set_canvas(width, height)
            print(f"Canvas set to {dims.width}x{dims.height}")

        elif args.command == 'add-zone':
            shape = add_zone(session, ZoneKind(args.kind), args.points)
            print(f"Added {shape.kind.value} zone ({session.format_area(shape.area)})")

        elif args.command == 'ruler':
            (x1, y1), (x2, y2) = args.start, args.end
            # Validate before place_ruler autosaves the replacement ruler
            if parse_length(args.length) is None:
                raise ValueError(f"Invalid ruler length: {args.length}")
            if (x1, y1) == (x2, y2):
                raise ValueError("Ruler start and end must differ")
            session.place_ruler(x1, y1, x2, y2)
            unit = LengthUnit(args.unit) if args.unit else None
            if not session.submit_ruler_length(args.length, unit):
                raise ValueError(f"Invalid ruler length: {args.length}")
            print(f"Ruler set: {session.ruler.label} (pixel ratio {session.pixel_ratio:.6g})")

        elif args.command == 'delete':
            removed = session.delete_at(*args.point)
            if removed is None:
                print("No zone contains that point")
            else:
                print(f"Deleted {removed.kind.value} zone")

        elif args.command == 'report':
            if args.json:
                print(json.dumps(session.area_report().to_dict(), indent=2))
            else:
                print(format_report(session))

        elif args.command == 'render':
            image = read_image(args.image)
            if session.dimensions is None:
                height, width = image.shape[:2]
                session.set_canvas(width, height)
            frame = ZoneVisualizer().draw_session(image, session)
            output = args.output or f"{get_target_run_folder(application_name='render')}/plan.png"
            write_image(frame, output)
            print(f"Rendered plan: {output}")

        elif args.command == 'clear':
            session.clear_all()
            print("Plan cleared")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
