"""
Region Segmenter Module
=======================

Partitions classified grid cells into disjoint, homogeneous regions.

Design:
- Classification first (ZoneClassifier.classify_grid), flood fill second
- 4-connected BFS over integer cell indices with an explicit deque
- numpy boolean visited array sized to the grid (each cell visited once)
- Regions are derived state: rebuilt from scratch, memoized by input key
"""

from collections import deque
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple

import numpy as np

from irrigation_zone.geometry.classifier import KIND_BY_CODE, UNCLASSIFIED, ZoneClassifier
from irrigation_zone.geometry.grid import DEFAULT_CELL_SIZE, SamplingGrid
from irrigation_zone.geometry.primitives import Point
from irrigation_zone.geometry.shapes import CanvasDimensions, Shape, ZoneKind
from irrigation_zone.logging import LogEvent, StructuredLogger


NO_REGION = -1


@dataclass(frozen=True)
class Region:
    """
    Maximal 4-connected set of same-kind grid cells.

    Attributes:
        kind: Zone kind shared by every cell
        indices: Sorted row-major cell indices
        grid: Grid the indices refer to
    """

    kind: ZoneKind
    indices: Tuple[int, ...]
    grid: SamplingGrid

    @property
    def cell_count(self) -> int:
        return len(self.indices)

    @property
    def cells(self) -> FrozenSet[Point]:
        """Grid-aligned sample points of the region's cells."""
        return frozenset(self.grid.sample_point(i) for i in self.indices)

    @property
    def pixel_area(self) -> float:
        return float(self.cell_count * self.grid.cell_area)

    def __contains__(self, index: int) -> bool:
        return index in self.indices


@dataclass(frozen=True, eq=False)
class Segmentation:
    """
    All regions for one (shapes, canvas, cell size) input.

    Attributes:
        grid: Sampling grid, or None when no canvas is loaded
        regions: Regions in discovery order
        owner: Flat int32 array mapping cell index -> region index (NO_REGION if unowned)
    """

    grid: Optional[SamplingGrid]
    regions: Tuple[Region, ...]
    owner: np.ndarray

    @classmethod
    def empty(cls, grid: Optional[SamplingGrid] = None) -> 'Segmentation':
        size = grid.size if grid is not None else 0
        return cls(grid=grid, regions=(), owner=np.full(size, NO_REGION, dtype=np.int32))

    def region_index_at(self, x: float, y: float) -> Optional[int]:
        """Index into regions of the region owning the cell under (x, y)."""
        if self.grid is None:
            return None
        cell = self.grid.cell_at(x, y)
        if cell is None:
            return None
        owner = int(self.owner[cell])
        return None if owner == NO_REGION else owner

    def region_at(self, x: float, y: float) -> Optional[Region]:
        index = self.region_index_at(x, y)
        return None if index is None else self.regions[index]

    def of_kind(self, kind: ZoneKind) -> Tuple[Region, ...]:
        return tuple(r for r in self.regions if r.kind == kind)

    def cell_count(self, kind: Optional[ZoneKind] = None) -> int:
        regions = self.regions if kind is None else self.of_kind(kind)
        return sum(r.cell_count for r in regions)

    def __len__(self) -> int:
        return len(self.regions)


class RegionSegmenter:
    """
    Stateless grid flood fill.

    Usage:
        grid = SamplingGrid(CanvasDimensions(200, 200), cell_size=10)
        segmentation = RegionSegmenter.segment(store.snapshot(), grid)
    """

    @staticmethod
    def segment(shapes: Sequence[Shape], grid: Optional[SamplingGrid]) -> Segmentation:
        """
        Segment the canvas into disjoint regions.

        Args:
            shapes: Immutable zone store snapshot
            grid: Sampling grid, or None when no canvas is loaded

        Returns:
            Segmentation (empty when grid is None or nothing is classified)
        """
        if grid is None:
            return Segmentation.empty()

        labels = ZoneClassifier.classify_grid(shapes, grid).ravel()
        visited = np.zeros(grid.size, dtype=bool)
        owner = np.full(grid.size, NO_REGION, dtype=np.int32)
        regions: list[Region] = []

        for seed in np.flatnonzero(labels != UNCLASSIFIED).tolist():
            if visited[seed]:
                continue

            code = labels[seed]
            region_id = len(regions)
            members = []
            queue = deque([seed])
            visited[seed] = True

            while queue:
                index = queue.popleft()
                members.append(index)
                owner[index] = region_id
                for neighbour in grid.neighbours(index):
                    if not visited[neighbour] and labels[neighbour] == code:
                        visited[neighbour] = True
                        queue.append(neighbour)

            members.sort()
            regions.append(Region(kind=KIND_BY_CODE[int(code)], indices=tuple(members), grid=grid))

        return Segmentation(grid=grid, regions=tuple(regions), owner=owner)


class SegmentationCache:
    """
    Memoizes segmentation on a structural key.

    The key is (shapes snapshot, canvas dimensions, cell size); recomputation
    happens only when it changes, never on cursor movement.

    Usage:
        cache = SegmentationCache(cell_size=10)
        segmentation = cache.get(store.snapshot(), dimensions)
    """

    def __init__(
        self,
        cell_size: int = DEFAULT_CELL_SIZE,
        logger: Optional[StructuredLogger] = None,
    ):
        self.cell_size = cell_size
        self.logger = logger
        self._key: Optional[tuple] = None
        self._value: Optional[Segmentation] = None
        self.recompute_count = 0

    def get(
        self,
        shapes: Sequence[Shape],
        dimensions: Optional[CanvasDimensions],
    ) -> Segmentation:
        snapshot = tuple(shapes)
        key = (snapshot, dimensions, self.cell_size)
        if self._value is not None and key == self._key:
            return self._value

        grid = SamplingGrid(dimensions, self.cell_size) if dimensions is not None else None
        self._value = RegionSegmenter.segment(snapshot, grid)
        self._key = key
        self.recompute_count += 1

        if self.logger is not None:
            self.logger.debug(
                event=LogEvent.REGIONS_RECOMPUTED,
                message=f"Segmented {len(snapshot)} shapes into {len(self._value)} regions",
                metadata={
                    'shapes': len(snapshot),
                    'regions': len(self._value),
                    'cells': self._value.cell_count(),
                },
            )
        return self._value

    def invalidate(self) -> None:
        self._key = None
        self._value = None
