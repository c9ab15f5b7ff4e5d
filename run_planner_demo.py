"""
Irrigation Planner Demo
=======================

Demonstrates irrigation_zone package usage end to end.

Example: a regular lawn zone with a drip bed inside it and a patio
exclusion, calibrated with a 5 m ruler, rendered onto a blank canvas.

Architecture:
- geometry: Point, Shape, ZoneKind (immutable)
- capture: PolygonCapture, RulerCalibration (driven via the session)
- analytics: RegionSegmenter, AreaAggregator (derived)
- rendering: ZoneVisualizer (drawing)
"""

import numpy as np

from irrigation_zone import (
    DrawingTool,
    LengthUnit,
    MemoryKeyValueStore,
    PlannerSession,
    PlanPersistence,
    ZoneKind,
)
from irrigation_zone.rendering import ZoneVisualizer, write_image
from irrigation_cli.utils import get_target_run_folder

CANVAS_WH = (400, 300)

ZONES = [
    (DrawingTool.REGULAR, [(20, 20), (320, 20), (320, 260), (20, 260)]),
    (DrawingTool.DRIP, [(60, 60), (160, 60), (160, 160), (60, 160)]),
    (DrawingTool.EXCLUSION, [(200, 120), (300, 120), (300, 240), (200, 240)]),
]


def trace(session: PlannerSession, tool: DrawingTool, vertices: list[tuple[int, int]]) -> None:
    """Click every vertex, then the first one again to snap the polygon closed."""
    session.select_tool(tool)
    for x, y in vertices + vertices[:1]:
        session.pointer_down(x, y)
        session.pointer_move(x, y)
        session.pointer_up(x, y)


def main():
    """Trace the demo plan, print totals and save an overlay image."""

    # 1. Session with in-memory persistence
    session = PlannerSession(persistence=PlanPersistence(MemoryKeyValueStore()))
    session.set_canvas(*CANVAS_WH)

    # 2. Trace zones
    for tool, vertices in ZONES:
        trace(session, tool, vertices)

    # 3. Totals before calibration
    print("Before calibration:")
    print(f"  {session.area_report()}")

    # 4. Calibrate: 100 px = 5 m
    session.select_tool(DrawingTool.RULER)
    session.pointer_down(20, 280)
    session.pointer_up(120, 280)
    session.submit_ruler_length("5", LengthUnit.METERS)

    report = session.area_report()
    print("After calibration:")
    for kind in ZoneKind:
        print(f"  {kind.value}: {report[kind]}")
    print(f"  regions: {report.region_count}")

    # 5. Hover the drip bed
    session.pointer_move(100, 100)
    print(f"Hovered region: {session.hovered_measurement()}")

    # 6. Render
    frame = np.full((CANVAS_WH[1], CANVAS_WH[0], 3), 255, dtype=np.uint8)
    frame = ZoneVisualizer(thickness=2).draw_session(frame, session)
    output_path = f"{get_target_run_folder(application_name='planner_demo')}/plan.png"
    write_image(frame, output_path)
    print(f"✓ Overlay saved: {output_path}")


if __name__ == "__main__":
    main()
