"""
Irrigation Zone Planner v1.0
============================

Bounded Context: Zone geometry and area resolution for irrigation plans.

Design Philosophy:
- Separation of Concerns: Geometry, Capture, Analytics, Rendering separated
- Derived state is recomputed, never stored (regions, totals)
- One winner per sampled point: exclusion > drip > regular
- Explicit session context instead of ambient globals

Architecture:

    irrigation_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── primitives.py  # Point, point_in_polygon, polygon_area, distance
    │   ├── shapes.py      # ZoneKind, DrawingTool, Shape, Ruler, CanvasDimensions
    │   ├── grid.py        # SamplingGrid
    │   └── classifier.py  # ZoneClassifier (priority rule)
    │
    ├── capture/           # Pointer input -> geometry (stateful)
    │   ├── polygon.py     # PolygonCapture (snap-to-close)
    │   └── ruler.py       # RulerCalibration
    │
    ├── analytics/         # Derived state
    │   ├── segmenter.py   # RegionSegmenter, SegmentationCache
    │   └── aggregator.py  # AreaAggregator, AreaReport
    │
    ├── persistence/       # Key/value plan storage
    ├── rendering/         # ZoneVisualizer (stateless drawing)
    ├── logging/           # Structured JSON logs
    ├── store.py           # ZoneStore
    ├── config.py          # PlannerConfig (YAML)
    └── session.py         # PlannerSession (orchestration)

Usage:

    from irrigation_zone import PlannerSession, DrawingTool, LengthUnit

    session = PlannerSession()
    session.set_canvas(800, 600)

    session.select_tool(DrawingTool.REGULAR)
    for x, y in [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)]:
        session.pointer_down(x, y)
        session.pointer_up(x, y)

    session.select_tool(DrawingTool.RULER)
    session.pointer_down(0, 0)
    session.pointer_up(100, 0)
    session.submit_ruler_length("5", LengthUnit.METERS)

    print(session.area_report())   # regular: 25.00 m², drip: 0.00 m², ...
"""

# Geometry Layer (immutable, stateless)
from irrigation_zone.geometry import (
    Point,
    ZoneKind,
    DrawingTool,
    LengthUnit,
    Shape,
    Ruler,
    CanvasDimensions,
    SamplingGrid,
    ZoneClassifier,
    point_in_polygon,
    polygon_area,
    distance,
)

# Capture Layer (stateful)
from irrigation_zone.capture import PolygonCapture, RulerCalibration

# Analytics Layer (derived)
from irrigation_zone.analytics import (
    Region,
    Segmentation,
    RegionSegmenter,
    SegmentationCache,
    AreaMeasurement,
    AreaReport,
    AreaAggregator,
)

# Store, persistence, config
from irrigation_zone.store import ZoneStore
from irrigation_zone.persistence import (
    PlanPersistence,
    PlanState,
    MemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from irrigation_zone.config import PlannerConfig

# Orchestration
from irrigation_zone.session import PlannerSession

__all__ = [
    # Geometry
    "Point",
    "ZoneKind",
    "DrawingTool",
    "LengthUnit",
    "Shape",
    "Ruler",
    "CanvasDimensions",
    "SamplingGrid",
    "ZoneClassifier",
    "point_in_polygon",
    "polygon_area",
    "distance",
    # Capture
    "PolygonCapture",
    "RulerCalibration",
    # Analytics
    "Region",
    "Segmentation",
    "RegionSegmenter",
    "SegmentationCache",
    "AreaMeasurement",
    "AreaReport",
    "AreaAggregator",
    # Store / persistence / config
    "ZoneStore",
    "PlanPersistence",
    "PlanState",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "PlannerConfig",
    # Session
    "PlannerSession",
]

__version__ = "1.0.0"
