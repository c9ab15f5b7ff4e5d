"""
Geometry Layer
==============

Bounded Context: Pure geometric shapes and spatial queries.

Responsibilities:
- Shape representation (immutable)
- Point-in-polygon tests, shoelace area, distance
- Grid sampling and zone-priority classification
- NO state, NO aggregation, NO visualization
"""

from irrigation_zone.geometry.primitives import Point, point_in_polygon, polygon_area, distance
from irrigation_zone.geometry.shapes import (
    ZoneKind,
    DrawingTool,
    LengthUnit,
    Shape,
    Ruler,
    CanvasDimensions,
)
from irrigation_zone.geometry.grid import SamplingGrid, DEFAULT_CELL_SIZE
from irrigation_zone.geometry.classifier import ZoneClassifier

__all__ = [
    "Point",
    "point_in_polygon",
    "polygon_area",
    "distance",
    "ZoneKind",
    "DrawingTool",
    "LengthUnit",
    "Shape",
    "Ruler",
    "CanvasDimensions",
    "SamplingGrid",
    "DEFAULT_CELL_SIZE",
    "ZoneClassifier",
]
