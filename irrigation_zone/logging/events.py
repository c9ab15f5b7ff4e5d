"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (component.action)
- Searchable in log aggregators

Event Naming Convention:
    <component>.<action>

    component: zone, ruler, regions, plan, config, error
    action: closed, deleted, placed, calibrated, recomputed, saved
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - zone.*: Zone store mutations
    - ruler.*: Ruler placement and calibration
    - regions.*: Region segmentation
    - plan.*: Persistence
    - config.*: Configuration
    - error.*: Error conditions
    """

    # ========== Zone Events ==========
    ZONE_CLOSED = "zone.closed"
    """Polygon closed and appended to the zone store."""

    ZONE_DELETED = "zone.deleted"
    """Shape removed from the zone store by point."""

    # ========== Ruler Events ==========
    RULER_PLACED = "ruler.placed"
    """Ruler segment placed, awaiting a real-world length."""

    RULER_CALIBRATED = "ruler.calibrated"
    """Pixel ratio derived from the ruler."""

    RULER_REJECTED = "ruler.rejected"
    """Ruler length input rejected (calibration unchanged)."""

    # ========== Region Events ==========
    REGIONS_RECOMPUTED = "regions.recomputed"
    """Region segmentation recomputed after a store or canvas change."""

    # ========== Plan Events ==========
    PLAN_LOADED = "plan.loaded"
    """Plan restored from the key/value store."""

    PLAN_SAVED = "plan.saved"
    """Plan written to the key/value store."""

    PLAN_CLEARED = "plan.cleared"
    """All plan keys removed."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Configuration loaded from YAML."""

    # ========== Error Events ==========
    PLAN_CORRUPTED = "error.plan_corrupted"
    """Persisted entry could not be decoded and was treated as absent."""


ZONE_EVENTS = {
    LogEvent.ZONE_CLOSED,
    LogEvent.ZONE_DELETED,
}

RULER_EVENTS = {
    LogEvent.RULER_PLACED,
    LogEvent.RULER_CALIBRATED,
    LogEvent.RULER_REJECTED,
}

PLAN_EVENTS = {
    LogEvent.PLAN_LOADED,
    LogEvent.PLAN_SAVED,
    LogEvent.PLAN_CLEARED,
}

ERROR_EVENTS = {
    LogEvent.PLAN_CORRUPTED,
}
