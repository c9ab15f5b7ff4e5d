"""
Zone Store - ordered collection of closed shapes.

Design:
- Insertion order is the only order (deletion scans it front to back)
- Shapes are immutable; the store only appends and removes
- snapshot() hands out an immutable tuple for recomputation
- version counter bumps on every mutation
"""

from typing import Iterable, Iterator, Optional, Tuple

from irrigation_zone.geometry.primitives import Point, point_in_polygon
from irrigation_zone.geometry.shapes import Shape, ZoneKind


class ZoneStore:
    """
    Ordered store of zone shapes.

    Example:
        store = ZoneStore()
        store.append(shape_a)
        store.append(shape_b)
        removed = store.remove_at(Point(50, 50))  # first inserted match
    """

    def __init__(self, shapes: Iterable[Shape] = ()):
        self._shapes: list[Shape] = list(shapes)
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> Tuple[Shape, ...]:
        return tuple(self._shapes)

    def append(self, shape: Shape) -> None:
        if not isinstance(shape, Shape):
            raise TypeError(f"Expected Shape, got {type(shape).__name__}")
        self._shapes.append(shape)
        self._version += 1

    def remove_at(self, point: Point) -> Optional[Shape]:
        """
        Remove the first-inserted shape containing point.

        Only one shape is removed per call, even when several overlap.

        Returns:
            The removed shape, or None if no shape contains the point
        """
        for index, shape in enumerate(self._shapes):
            if shape.is_degenerate:
                continue
            if point_in_polygon(point, shape.points):
                del self._shapes[index]
                self._version += 1
                return shape
        return None

    def replace_all(self, shapes: Iterable[Shape]) -> None:
        self._shapes = list(shapes)
        self._version += 1

    def clear(self) -> None:
        self.replace_all(())

    def of_kind(self, kind: ZoneKind) -> Tuple[Shape, ...]:
        return tuple(s for s in self._shapes if s.kind == kind)

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> Shape:
        return self._shapes[index]

    def __repr__(self) -> str:
        return f"ZoneStore(shapes={len(self._shapes)}, version={self._version})"
