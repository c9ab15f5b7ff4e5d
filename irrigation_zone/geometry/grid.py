"""
Sampling Grid Module
====================

Uniform lattice over the canvas shared by classification and segmentation.

Design:
- One cell size for both sampling and region bookkeeping
- Cell (col, row) is sampled at its top-left corner (col * cell, row * cell)
- Row-major integer index: row * cols + col
"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from irrigation_zone.geometry.primitives import Point
from irrigation_zone.geometry.shapes import CanvasDimensions


DEFAULT_CELL_SIZE = 10


@dataclass(frozen=True)
class SamplingGrid:
    """
    Immutable grid geometry for one canvas.

    Attributes:
        dimensions: Canvas size in pixels
        cell_size: Side of a square cell in pixels
    """

    dimensions: CanvasDimensions
    cell_size: int = DEFAULT_CELL_SIZE

    def __post_init__(self):
        if isinstance(self.cell_size, bool) or int(self.cell_size) != self.cell_size:
            raise TypeError(f"cell_size must be an integer, got {self.cell_size!r}")
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")

    @property
    def cols(self) -> int:
        return math.ceil(self.dimensions.width / self.cell_size)

    @property
    def rows(self) -> int:
        return math.ceil(self.dimensions.height / self.cell_size)

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols), the numpy layout of label grids."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def cell_area(self) -> int:
        return self.cell_size * self.cell_size

    def index(self, col: int, row: int) -> int:
        return row * self.cols + col

    def col_row(self, index: int) -> Tuple[int, int]:
        row, col = divmod(index, self.cols)
        return col, row

    def sample_point(self, index: int) -> Point:
        """Grid-aligned sample point of a cell."""
        col, row = self.col_row(index)
        return Point(x=col * self.cell_size, y=row * self.cell_size)

    def cell_at(self, x: float, y: float) -> Optional[int]:
        """
        Index of the cell containing a pixel position.

        Returns:
            Cell index, or None when the position is outside the canvas
        """
        if not self.dimensions.contains(x, y):
            return None
        col = int(math.floor(x / self.cell_size))
        row = int(math.floor(y / self.cell_size))
        return self.index(col, row)

    def neighbours(self, index: int) -> Iterator[int]:
        """4-connected neighbours that lie inside the grid."""
        col, row = self.col_row(index)
        if row > 0:
            yield index - self.cols
        if row < self.rows - 1:
            yield index + self.cols
        if col > 0:
            yield index - 1
        if col < self.cols - 1:
            yield index + 1
