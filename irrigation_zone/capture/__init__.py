"""
Capture Layer
=============

Bounded Context: Turning pointer input into geometry.

Responsibilities:
- Polygon capture with snap-to-close (PolygonCapture)
- Ruler placement and pixel-ratio calibration (RulerCalibration)
"""

from irrigation_zone.capture.polygon import (
    PolygonCapture,
    CaptureState,
    DEFAULT_SNAP_THRESHOLD,
)
from irrigation_zone.capture.ruler import RulerCalibration, parse_length

__all__ = [
    "PolygonCapture",
    "CaptureState",
    "DEFAULT_SNAP_THRESHOLD",
    "RulerCalibration",
    "parse_length",
]
