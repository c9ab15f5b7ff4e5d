"""
Polygon Capture Module
======================

Stateful accumulator turning committed pointer positions into closed shapes.

Design:
- Explicit state machine: IDLE -> DRAWING -> (closure) -> IDLE
- Provisional cursor tracked apart from committed vertices
- Zone kind is only bound at closure time
- Snap-to-close only once 3 distinct vertices are confirmed
"""

from enum import Enum
from typing import Optional, Tuple

from irrigation_zone.geometry.primitives import Point, distance
from irrigation_zone.geometry.shapes import Shape, ZoneKind


DEFAULT_SNAP_THRESHOLD = 10.0

# Distinct vertices required before a commit near the start point closes the polygon
MIN_VERTICES_TO_CLOSE = 3


class CaptureState(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"


class PolygonCapture:
    """
    Polygon capture state machine.

    Usage:
        capture = PolygonCapture(snap_threshold=10)
        capture.begin(Point(0, 0))
        capture.commit(ZoneKind.REGULAR, Point(100, 0))
        capture.commit(ZoneKind.REGULAR, Point(100, 100))
        capture.commit(ZoneKind.REGULAR, Point(0, 100))
        shape = capture.commit(ZoneKind.REGULAR, Point(2, 3))  # snaps, closes
    """

    def __init__(self, snap_threshold: float = DEFAULT_SNAP_THRESHOLD):
        if snap_threshold <= 0:
            raise ValueError(f"snap_threshold must be positive, got {snap_threshold}")
        self.snap_threshold = snap_threshold
        self._vertices: list[Point] = []
        self._cursor: Optional[Point] = None

    @property
    def state(self) -> CaptureState:
        return CaptureState.DRAWING if self._vertices else CaptureState.IDLE

    @property
    def is_drawing(self) -> bool:
        return self.state == CaptureState.DRAWING

    @property
    def vertices(self) -> Tuple[Point, ...]:
        """Committed vertices of the open polygon (snapshot)."""
        return tuple(self._vertices)

    @property
    def cursor(self) -> Optional[Point]:
        """Provisional, not yet committed, cursor position."""
        return self._cursor

    def begin(self, point: Point) -> None:
        """
        Start a new polygon at point (IDLE -> DRAWING).

        Raises:
            RuntimeError: If a polygon is already in progress
        """
        if self.is_drawing:
            raise RuntimeError("A polygon is already in progress")
        self._vertices = [point]
        self._cursor = None

    def move(self, point: Point) -> None:
        """Track the provisional cursor. Ignored while IDLE."""
        if self.is_drawing:
            self._cursor = point

    def leave(self) -> None:
        """Pointer left the canvas: drop the cursor, keep the vertices."""
        self._cursor = None

    def cancel(self) -> None:
        """Discard the in-progress polygon."""
        self._vertices = []
        self._cursor = None

    def would_close(self, point: Point) -> bool:
        """True if committing point now would close the polygon."""
        return (
            len(set(self._vertices)) >= MIN_VERTICES_TO_CLOSE
            and distance(point, self._vertices[0]) < self.snap_threshold
        )

    def preview_edge(self) -> Optional[Tuple[Point, Point]]:
        """
        Edge from the last vertex to the cursor, for rendering.

        The far end snaps onto the first vertex when a commit would close.
        """
        if not self.is_drawing or self._cursor is None:
            return None
        end = self._vertices[0] if self.would_close(self._cursor) else self._cursor
        return (self._vertices[-1], end)

    def commit(self, kind: ZoneKind, point: Optional[Point] = None) -> Optional[Shape]:
        """
        Commit the provisional point (or an explicit one).

        Args:
            kind: Zone kind selected at this instant (used only on closure)
            point: Point to commit; defaults to the provisional cursor

        Returns:
            The closed Shape when this commit closes the polygon, else None
        """
        point = point if point is not None else self._cursor
        self._cursor = None
        if point is None:
            return None

        if not self.is_drawing:
            self.begin(point)
            return None

        if point == self._vertices[-1]:
            return None

        if self.would_close(point):
            ring = self._vertices + [self._vertices[0]]
            self._vertices = []
            return Shape.from_ring(ring, ZoneKind(kind))

        self._vertices.append(point)
        return None
