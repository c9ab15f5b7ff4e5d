"""
Geometry Primitives
===================

Pure functions over pixel-space points - NO state, NO side effects.

Design:
- Point is an immutable value object (hashable, usable in sets)
- Rings are closed: first point == last point
- Crossing-number test for point-in-polygon
- Shoelace formula for area
"""

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """
    Immutable pixel-space coordinate.

    Origin is the top-left corner of the canvas.

    Example:
        >>> Point(x=10, y=20).to_dict()
        {'x': 10.0, 'y': 20.0}
    """

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Point coordinates must be finite, got ({self.x}, {self.y})")

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict."""
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> 'Point':
        """Deserialize from dict.

        Raises:
            ValueError: If keys are missing or values are not numeric
        """
        try:
            return cls(x=float(data['x']), y=float(data['y']))
        except KeyError as e:
            raise ValueError(f"Missing required Point field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid Point data: {e}")


def point_in_polygon(point: Point, ring: Sequence[Point]) -> bool:
    """
    Crossing-number test for a point against a closed ring.

    Walks every edge (ring[j], ring[i]) with j = i - 1 (wrapping). An edge
    whose y-span straddles point.y toggles the inside flag when point.x lies
    left of the edge's x-intersection at point.y.

    Args:
        point: Point to test
        ring: Closed ring with at least 3 unique vertices

    Returns:
        True if the point is inside the ring
    """
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i].x, ring[i].y
        xj, yj = ring[j].x, ring[j].y

        if (yi > point.y) != (yj > point.y):
            x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i

    return inside


def polygon_area(ring: Sequence[Point]) -> float:
    """
    Shoelace area of a closed ring.

    Orientation (clockwise/counterclockwise) does not affect the result.
    """
    total = 0.0
    n = len(ring)
    for i in range(n):
        j = (i + 1) % n
        total += ring[i].x * ring[j].y
        total -= ring[j].x * ring[i].y
    return abs(total) / 2


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)
