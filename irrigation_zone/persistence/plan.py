"""
Plan Persistence Module
=======================

Serializes the zone store, ruler, pixel ratio and canvas dimensions to four
independent string keys.

Design:
- Each key is optional and restored on its own
- A malformed entry is treated as absent for that key only (warning logged)
- Saving None removes the key
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, TypeVar

from irrigation_zone.capture.ruler import parse_length
from irrigation_zone.geometry.shapes import CanvasDimensions, Ruler, Shape
from irrigation_zone.logging import LogEvent, StructuredLogger, create_logger
from irrigation_zone.persistence.keyvalue import KeyValueStore


SHAPES_KEY = "irrigationShapes"
RULER_KEY = "irrigationRuler"
PIXEL_RATIO_KEY = "irrigationPixelRatio"
DIMENSIONS_KEY = "irrigationDimensions"

PLAN_KEYS = (SHAPES_KEY, RULER_KEY, PIXEL_RATIO_KEY, DIMENSIONS_KEY)

T = TypeVar("T")


@dataclass(frozen=True)
class PlanState:
    """Immutable snapshot of everything persisted for a plan."""

    shapes: Tuple[Shape, ...] = ()
    ruler: Optional[Ruler] = None
    pixel_ratio: Optional[float] = None
    dimensions: Optional[CanvasDimensions] = None


def _decode_shapes(raw: str) -> Tuple[Shape, ...]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of shapes, got {type(data).__name__}")
    return tuple(Shape.from_dict(item) for item in data)


def _decode_ruler(raw: str) -> Optional[Ruler]:
    data = json.loads(raw)
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object for the ruler, got {type(data).__name__}")
    return Ruler.from_dict(data)


def _decode_pixel_ratio(raw: str) -> Optional[float]:
    ratio = parse_length(raw)
    if ratio is None:
        raise ValueError(f"Invalid pixel ratio: {raw!r}")
    return ratio


def _decode_dimensions(raw: str) -> Optional[CanvasDimensions]:
    data = json.loads(raw)
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object for dimensions, got {type(data).__name__}")
    return CanvasDimensions.from_dict(data)


class PlanPersistence:
    """
    Reads and writes a plan through an injected KeyValueStore.

    Usage:
        persistence = PlanPersistence(MemoryKeyValueStore())
        persistence.save(PlanState(shapes=(shape,), pixel_ratio=0.05))
        state = persistence.load()
    """

    def __init__(self, store: KeyValueStore, logger: Optional[StructuredLogger] = None):
        self.store = store
        self.logger = logger or create_logger("persistence")

    def _load_key(self, key: str, decode: Callable[[str], T], default: T) -> T:
        raw = self.store.get(key)
        if raw is None or raw == "":
            return default
        try:
            return decode(raw)
        except (TypeError, ValueError) as e:
            self.logger.warning(
                event=LogEvent.PLAN_CORRUPTED,
                message=f"Ignoring malformed entry '{key}'",
                metadata={'key': key, 'error': str(e)},
            )
            return default

    def load(self) -> PlanState:
        """Restore every key independently; malformed keys become empty/None."""
        state = PlanState(
            shapes=self._load_key(SHAPES_KEY, _decode_shapes, ()),
            ruler=self._load_key(RULER_KEY, _decode_ruler, None),
            pixel_ratio=self._load_key(PIXEL_RATIO_KEY, _decode_pixel_ratio, None),
            dimensions=self._load_key(DIMENSIONS_KEY, _decode_dimensions, None),
        )
        self.logger.info(
            event=LogEvent.PLAN_LOADED,
            message=f"Loaded plan with {len(state.shapes)} shapes",
            metadata={
                'shapes': len(state.shapes),
                'ruler': state.ruler is not None,
                'calibrated': state.pixel_ratio is not None,
                'dimensions': state.dimensions.to_dict() if state.dimensions else None,
            },
        )
        return state

    def _save_json(self, key: str, value: Any) -> None:
        if value is None:
            self.store.delete(key)
        else:
            self.store.set(key, json.dumps(value))

    def save_shapes(self, shapes: Tuple[Shape, ...]) -> None:
        self._save_json(SHAPES_KEY, [shape.to_dict() for shape in shapes])

    def save_ruler(self, ruler: Optional[Ruler]) -> None:
        self._save_json(RULER_KEY, ruler.to_dict() if ruler is not None else None)

    def save_pixel_ratio(self, pixel_ratio: Optional[float]) -> None:
        if pixel_ratio is None:
            self.store.delete(PIXEL_RATIO_KEY)
        else:
            self.store.set(PIXEL_RATIO_KEY, repr(float(pixel_ratio)))

    def save_dimensions(self, dimensions: Optional[CanvasDimensions]) -> None:
        self._save_json(DIMENSIONS_KEY, dimensions.to_dict() if dimensions is not None else None)

    def save(self, state: PlanState) -> None:
        """Write all four keys."""
        self.save_shapes(state.shapes)
        self.save_ruler(state.ruler)
        self.save_pixel_ratio(state.pixel_ratio)
        self.save_dimensions(state.dimensions)
        self.logger.debug(
            event=LogEvent.PLAN_SAVED,
            message=f"Saved plan with {len(state.shapes)} shapes",
            metadata={'shapes': len(state.shapes)},
        )

    def clear(self) -> None:
        """Remove every plan key."""
        for key in PLAN_KEYS:
            self.store.delete(key)
        self.logger.info(event=LogEvent.PLAN_CLEARED, message="Cleared plan")
