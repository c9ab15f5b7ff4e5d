"""
Geometric Shapes Module
========================

Pure geometric representations - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Closed enums for zone kinds and drawing tools
- ZoneKind is strictly smaller than DrawingTool: ruler/delete never tag a Shape
- to_dict()/from_dict() mirror the persisted JSON layout
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from irrigation_zone.geometry.primitives import Point, distance, polygon_area


class ZoneKind(str, Enum):
    """Irrigation classification carried by a closed polygon."""
    REGULAR = "regular"
    EXCLUSION = "exclusion"
    DRIP = "drip"


class DrawingTool(str, Enum):
    """Interaction tool selected by the user."""
    REGULAR = "regular"
    EXCLUSION = "exclusion"
    DRIP = "drip"
    RULER = "ruler"
    DELETE = "delete"

    @property
    def zone_kind(self) -> Optional[ZoneKind]:
        """ZoneKind stamped by this tool, or None for ruler/delete."""
        try:
            return ZoneKind(self.value)
        except ValueError:
            return None


class LengthUnit(str, Enum):
    """Real-world length unit declared for the ruler."""
    FEET = "ft"
    METERS = "m"


# Minimum ring length: 3 unique vertices + repeated closing vertex
MIN_RING_POINTS = 4


@dataclass(frozen=True)
class Shape:
    """
    Immutable closed zone polygon.

    Attributes:
        points: Closed ring (first == last)
        kind: Zone classification
        area: Shoelace pixel area cached at closure time

    A ring with fewer than MIN_RING_POINTS points is degenerate; the store
    keeps it but classification, deletion and area logic skip it.
    """

    points: Tuple[Point, ...]
    kind: ZoneKind
    area: float = 0.0

    def __post_init__(self):
        """Validate inputs."""
        object.__setattr__(self, 'points', tuple(self.points))
        if not all(isinstance(p, Point) for p in self.points):
            raise TypeError("Shape points must be Point instances")
        object.__setattr__(self, 'kind', ZoneKind(self.kind))
        if not math.isfinite(self.area) or self.area < 0:
            raise ValueError(f"Shape area must be finite and >= 0, got {self.area}")

    @classmethod
    def from_ring(cls, ring: Sequence[Point], kind: ZoneKind) -> 'Shape':
        """Build a shape from a closed ring, computing its area."""
        ring = tuple(ring)
        return cls(points=ring, kind=kind, area=polygon_area(ring))

    @property
    def is_degenerate(self) -> bool:
        return len(self.points) < MIN_RING_POINTS

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'points': [p.to_dict() for p in self.points],
            'area': self.area,
            'type': self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Shape':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys are missing or values are invalid
        """
        try:
            points = tuple(Point.from_dict(p) for p in data['points'])
            kind = ZoneKind(data['type'])
            area = data.get('area')
            area = polygon_area(points) if area is None else float(area)
            return cls(points=points, kind=kind, area=area)
        except KeyError as e:
            raise ValueError(f"Missing required Shape field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid Shape data: {e}")


@dataclass(frozen=True)
class Ruler:
    """
    Calibration segment.

    real_length == 0 means "placed but not yet calibrated".

    Example:
        >>> ruler = Ruler(start=Point(0, 0), end=Point(100, 0), real_length=5, unit=LengthUnit.METERS)
        >>> ruler.pixel_length
        100.0
    """

    start: Point
    end: Point
    real_length: float = 0.0
    unit: LengthUnit = LengthUnit.FEET

    def __post_init__(self):
        object.__setattr__(self, 'unit', LengthUnit(self.unit))
        object.__setattr__(self, 'real_length', float(self.real_length))
        if not math.isfinite(self.real_length) or self.real_length < 0:
            raise ValueError(
                f"Ruler real_length must be finite and >= 0, got {self.real_length}"
            )

    @property
    def pixel_length(self) -> float:
        return distance(self.start, self.end)

    @property
    def is_calibrated(self) -> bool:
        return self.real_length > 0

    @property
    def label(self) -> str:
        """Display label, e.g. '5 m'."""
        return f"{self.real_length:g} {self.unit.value}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'length': self.real_length,
            'unit': self.unit.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ruler':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys are missing or values are invalid
        """
        try:
            return cls(
                start=Point.from_dict(data['start']),
                end=Point.from_dict(data['end']),
                real_length=float(data.get('length', 0)),
                unit=LengthUnit(data.get('unit', LengthUnit.FEET.value)),
            )
        except KeyError as e:
            raise ValueError(f"Missing required Ruler field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid Ruler data: {e}")


@dataclass(frozen=True)
class CanvasDimensions:
    """Canvas size in pixels (the loaded background image size)."""

    width: int
    height: int

    def __post_init__(self):
        if isinstance(self.width, bool) or isinstance(self.height, bool):
            raise TypeError("Canvas dimensions must be integers")
        if int(self.width) != self.width or int(self.height) != self.height:
            raise ValueError(
                f"Canvas dimensions must be whole pixels, got {self.width}x{self.height}"
            )
        object.__setattr__(self, 'width', int(self.width))
        object.__setattr__(self, 'height', int(self.height))
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Canvas dimensions must be positive, got {self.width}x{self.height}"
            )

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_dict(self) -> Dict[str, int]:
        return {'width': self.width, 'height': self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CanvasDimensions':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys are missing or values are invalid
        """
        try:
            return cls(width=data['width'], height=data['height'])
        except KeyError as e:
            raise ValueError(f"Missing required CanvasDimensions field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid CanvasDimensions data: {e}")
