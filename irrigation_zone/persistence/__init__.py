"""
Persistence Layer
=================

Bounded Context: Plan storage behind a string key/value interface.
"""

from irrigation_zone.persistence.keyvalue import (
    KeyValueStore,
    MemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from irrigation_zone.persistence.plan import (
    PlanPersistence,
    PlanState,
    SHAPES_KEY,
    RULER_KEY,
    PIXEL_RATIO_KEY,
    DIMENSIONS_KEY,
    PLAN_KEYS,
)

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "PlanPersistence",
    "PlanState",
    "SHAPES_KEY",
    "RULER_KEY",
    "PIXEL_RATIO_KEY",
    "DIMENSIONS_KEY",
    "PLAN_KEYS",
]
