"""
Zone Classifier Module
======================

Stateless classification - decides which single zone kind owns a point.

Design:
- Pure functions (no state)
- Fixed priority: exclusion > drip > regular
- Single winner per point, so kinds never double-count overlapping area
- Degenerate shapes are ignored
"""

import math
from typing import Dict, Iterable, Optional, Sequence

import numpy as np

from irrigation_zone.geometry.grid import SamplingGrid
from irrigation_zone.geometry.primitives import Point, point_in_polygon
from irrigation_zone.geometry.shapes import Shape, ZoneKind


# Label codes double as priority ranks (higher wins); 0 = unclassified
UNCLASSIFIED = 0
KIND_PRIORITY: Dict[ZoneKind, int] = {
    ZoneKind.REGULAR: 1,
    ZoneKind.DRIP: 2,
    ZoneKind.EXCLUSION: 3,
}
KIND_BY_CODE: Dict[int, ZoneKind] = {code: kind for kind, code in KIND_PRIORITY.items()}


class ZoneClassifier:
    """
    Stateless classifier applying zone priority to points.

    Design Philosophy:
    - All methods are static (no instance state)
    - Shapes are read as an immutable snapshot
    - Grid classification and point classification agree by construction

    Usage:
        kind = ZoneClassifier.classify(Point(15, 15), shapes)
        labels = ZoneClassifier.classify_grid(shapes, grid)
    """

    @staticmethod
    def classify(point: Point, shapes: Iterable[Shape]) -> Optional[ZoneKind]:
        """
        Classify a single point.

        Args:
            point: Pixel-space point
            shapes: Zone store snapshot

        Returns:
            Highest-priority kind among shapes containing the point, or None
        """
        best = UNCLASSIFIED
        for shape in shapes:
            if shape.is_degenerate:
                continue
            code = KIND_PRIORITY[shape.kind]
            if code > best and point_in_polygon(point, shape.points):
                best = code
                if best == KIND_PRIORITY[ZoneKind.EXCLUSION]:
                    break
        return KIND_BY_CODE.get(best)

    @staticmethod
    def classify_grid(shapes: Sequence[Shape], grid: Optional[SamplingGrid]) -> np.ndarray:
        """
        Classify every grid sample point.

        Each shape only tests the sample points inside its bounding box;
        labels keep the maximum priority code seen.

        Args:
            shapes: Zone store snapshot
            grid: Sampling grid, or None when no canvas is loaded

        Returns:
            int8 array of shape (rows, cols) holding priority codes
            (UNCLASSIFIED where no shape contains the sample). Empty
            (0, 0) array when grid is None.
        """
        if grid is None:
            return np.zeros((0, 0), dtype=np.int8)

        labels = np.zeros(grid.shape, dtype=np.int8)
        cell = grid.cell_size

        for shape in shapes:
            if shape.is_degenerate:
                continue
            code = KIND_PRIORITY[shape.kind]
            xs = [p.x for p in shape.points]
            ys = [p.y for p in shape.points]

            col_lo = max(0, math.ceil(min(xs) / cell))
            col_hi = min(grid.cols - 1, math.floor(max(xs) / cell))
            row_lo = max(0, math.ceil(min(ys) / cell))
            row_hi = min(grid.rows - 1, math.floor(max(ys) / cell))

            for row in range(row_lo, row_hi + 1):
                for col in range(col_lo, col_hi + 1):
                    if labels[row, col] >= code:
                        continue
                    sample = Point(x=col * cell, y=row * cell)
                    if point_in_polygon(sample, shape.points):
                        labels[row, col] = code

        return labels
