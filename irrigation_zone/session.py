"""
Planner Session
===============

Bounded Context: Interaction orchestration for one plan.

Design:
- Explicit context object: tool selection, cursor, hover and persisted
  fields live here instead of ambient globals
- Persistence injected (PlanPersistence over any KeyValueStore)
- Delegates computation to capture / store / analytics modules
- Regions come from a memoized cache; pointer movement never recomputes

Event flow:
    pointer_down -> pointer_move* -> pointer_up   (draw / ruler drag)
    click                                          (delete tool)
    pointer_move without drag                      (hover hit-test)
"""

from typing import Optional, Tuple

from irrigation_zone.analytics.aggregator import AreaAggregator, AreaMeasurement, AreaReport
from irrigation_zone.analytics.segmenter import Region, Segmentation, SegmentationCache
from irrigation_zone.capture.polygon import PolygonCapture
from irrigation_zone.capture.ruler import RulerCalibration
from irrigation_zone.config import PlannerConfig
from irrigation_zone.geometry.primitives import Point
from irrigation_zone.geometry.shapes import (
    CanvasDimensions,
    DrawingTool,
    LengthUnit,
    Ruler,
    Shape,
)
from irrigation_zone.logging import LogEvent, StructuredLogger, create_logger
from irrigation_zone.persistence.plan import PlanPersistence, PlanState
from irrigation_zone.store import ZoneStore


class PlannerSession:
    """
    One interactive planning session.

    Usage:
        session = PlannerSession(persistence=PlanPersistence(MemoryKeyValueStore()))
        session.set_canvas(800, 600)
        session.select_tool(DrawingTool.REGULAR)
        for x, y in [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)]:
            session.pointer_down(x, y)
            session.pointer_up(x, y)
        session.area_report()
    """

    def __init__(
        self,
        config: Optional[PlannerConfig] = None,
        persistence: Optional[PlanPersistence] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config or PlannerConfig()
        self.persistence = persistence
        self.logger = logger or create_logger("session", level=self.config.logging_level)

        self.tool = DrawingTool.REGULAR
        self.store = ZoneStore()
        self.capture = PolygonCapture(snap_threshold=self.config.snap_threshold)
        self.calibration = RulerCalibration(default_unit=self.config.default_unit)
        self.dimensions: Optional[CanvasDimensions] = None
        self.cache = SegmentationCache(cell_size=self.config.grid_cell_size, logger=self.logger)

        self._anchor: Optional[Point] = None
        self._cursor: Optional[Point] = None
        self._hover_index: Optional[int] = None
        self._hover_position: Optional[Point] = None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def ruler(self) -> Optional[Ruler]:
        return self.calibration.ruler

    @property
    def pixel_ratio(self) -> Optional[float]:
        return self.calibration.pixel_ratio

    @property
    def unit(self) -> LengthUnit:
        return self.calibration.unit

    @property
    def shapes(self) -> Tuple[Shape, ...]:
        return self.store.snapshot()

    @property
    def ruler_drag(self) -> Optional[Tuple[Point, Point]]:
        """Segment being dragged with the ruler tool, for previews."""
        if self.tool != DrawingTool.RULER or self._anchor is None or self._cursor is None:
            return None
        return (self._anchor, self._cursor)

    def state(self) -> PlanState:
        return PlanState(
            shapes=self.store.snapshot(),
            ruler=self.ruler,
            pixel_ratio=self.pixel_ratio,
            dimensions=self.dimensions,
        )

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def load(self) -> PlanState:
        """Restore shapes, ruler, pixel ratio and canvas from persistence."""
        if self.persistence is None:
            return self.state()
        state = self.persistence.load()
        self.store.replace_all(state.shapes)
        self.calibration.restore(state.ruler, state.pixel_ratio)
        self.dimensions = state.dimensions
        self.capture.cancel()
        self._reset_pointer()
        return state

    def select_tool(self, tool: DrawingTool) -> None:
        """Switch tools. An in-progress polygon keeps its vertices."""
        self.tool = DrawingTool(tool)
        self._anchor = None
        self._cursor = None

    def set_canvas(self, width: int, height: int) -> CanvasDimensions:
        self.dimensions = CanvasDimensions(width=width, height=height)
        self._clear_hover()
        if self.persistence is not None:
            self.persistence.save_dimensions(self.dimensions)
        return self.dimensions

    def clear_canvas(self) -> None:
        self.dimensions = None
        self._clear_hover()
        if self.persistence is not None:
            self.persistence.save_dimensions(None)

    def clear_all(self) -> None:
        """Forget every shape, the ruler, calibration and canvas; wipe storage."""
        self.store.clear()
        self.calibration.clear()
        self.dimensions = None
        self.capture.cancel()
        self._reset_pointer()
        if self.persistence is not None:
            self.persistence.clear()

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        point = Point(x, y)
        self._anchor = point
        self._cursor = None
        if self.tool.zone_kind is not None and not self.capture.is_drawing:
            self.capture.begin(point)

    def pointer_move(self, x: float, y: float) -> None:
        point = Point(x, y)
        if self.tool.zone_kind is not None and self.capture.is_drawing:
            self.capture.move(point)

        if self._anchor is not None:
            self._cursor = point
        else:
            self._update_hover(point)

    def pointer_up(self, x: float, y: float) -> Optional[Shape]:
        """
        Finish a drag.

        Returns:
            The Shape closed by this release, if any
        """
        if self._anchor is None:
            return None
        point = Point(x, y)
        anchor = self._anchor
        self._anchor = None
        self._cursor = None

        if self.tool == DrawingTool.RULER:
            self._place_ruler(anchor, point)
            return None

        kind = self.tool.zone_kind
        if kind is None:
            return None

        shape = self.capture.commit(kind, point)
        if shape is not None:
            self._add_shape(shape)
        return shape

    def pointer_leave(self) -> None:
        """Drop transient pointer state; in-progress vertices survive."""
        self.capture.leave()
        self._reset_pointer()

    def click(self, x: float, y: float) -> Optional[Shape]:
        """Delete-tool click. Returns the removed shape, if any."""
        if self.tool != DrawingTool.DELETE:
            return None
        return self.delete_at(x, y)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _add_shape(self, shape: Shape) -> None:
        self.store.append(shape)
        self._clear_hover()
        self.logger.info(
            event=LogEvent.ZONE_CLOSED,
            message=f"Closed {shape.kind.value} zone",
            metadata={
                'kind': shape.kind.value,
                'vertices': len(shape.points) - 1,
                'pixel_area': shape.area,
                'shapes': len(self.store),
            },
        )
        if self.persistence is not None:
            self.persistence.save_shapes(self.store.snapshot())

    def delete_at(self, x: float, y: float) -> Optional[Shape]:
        """Remove the first-inserted shape containing (x, y)."""
        removed = self.store.remove_at(Point(x, y))
        if removed is None:
            return None
        self._clear_hover()
        self.logger.info(
            event=LogEvent.ZONE_DELETED,
            message=f"Deleted {removed.kind.value} zone",
            metadata={'kind': removed.kind.value, 'shapes': len(self.store)},
        )
        if self.persistence is not None:
            self.persistence.save_shapes(self.store.snapshot())
        return removed

    def _place_ruler(self, start: Point, end: Point) -> Ruler:
        ruler = self.calibration.place(start, end)
        self.logger.info(
            event=LogEvent.RULER_PLACED,
            message="Placed ruler, awaiting length",
            metadata={'pixel_length': ruler.pixel_length},
        )
        if self.persistence is not None:
            self.persistence.save_ruler(ruler)
        return ruler

    def place_ruler(self, x1: float, y1: float, x2: float, y2: float) -> Ruler:
        return self._place_ruler(Point(x1, y1), Point(x2, y2))

    def submit_ruler_length(self, text, unit: Optional[LengthUnit] = None) -> bool:
        """
        Calibrate the live ruler from user input.

        Returns:
            True on success; False (and no state change) for unusable input
        """
        if not self.calibration.calibrate(text, unit):
            self.logger.warning(
                event=LogEvent.RULER_REJECTED,
                message="Ignoring ruler length",
                metadata={'input': text, 'ruler': self.ruler is not None},
            )
            return False

        self.logger.info(
            event=LogEvent.RULER_CALIBRATED,
            message=f"Calibrated ruler to {self.ruler.label}",
            metadata={'pixel_ratio': self.pixel_ratio, 'unit': self.unit.value},
        )
        if self.persistence is not None:
            self.persistence.save_ruler(self.ruler)
            self.persistence.save_pixel_ratio(self.pixel_ratio)
        return True

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    def regions(self) -> Segmentation:
        return self.cache.get(self.store.snapshot(), self.dimensions)

    def area_report(self) -> AreaReport:
        return AreaAggregator.report(self.regions(), self.pixel_ratio, self.unit)

    def measure(self, pixel_area: float) -> AreaMeasurement:
        return AreaAggregator.measure(pixel_area, self.pixel_ratio, self.unit)

    def format_area(self, pixel_area: float) -> str:
        return self.measure(pixel_area).format()

    @property
    def hovered_region(self) -> Optional[Region]:
        if self._hover_index is None:
            return None
        regions = self.regions().regions
        if self._hover_index >= len(regions):
            return None
        return regions[self._hover_index]

    @property
    def hovered_region_index(self) -> Optional[int]:
        return self._hover_index

    @property
    def hover_position(self) -> Optional[Point]:
        return self._hover_position

    def hovered_measurement(self) -> Optional[AreaMeasurement]:
        region = self.hovered_region
        if region is None:
            return None
        return AreaAggregator.measure_region(region, self.pixel_ratio, self.unit)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update_hover(self, point: Point) -> None:
        index = self.regions().region_index_at(point.x, point.y)
        self._hover_index = index
        self._hover_position = point if index is not None else None

    def _clear_hover(self) -> None:
        self._hover_index = None
        self._hover_position = None

    def _reset_pointer(self) -> None:
        self._anchor = None
        self._cursor = None
        self._clear_hover()
