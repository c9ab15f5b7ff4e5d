"""
Analytics Layer
===============

Bounded Context: Region segmentation and area accounting.

Responsibilities:
- Flood-fill classified grid cells into disjoint regions
- Memoize segmentation per (shapes, canvas) input
- Aggregate region areas per zone kind, with calibration

Design Philosophy:
- Derived state only (nothing here is persisted)
- Immutable outputs (Segmentation, AreaMeasurement, AreaReport)
"""

from irrigation_zone.analytics.segmenter import (
    NO_REGION,
    Region,
    Segmentation,
    RegionSegmenter,
    SegmentationCache,
)
from irrigation_zone.analytics.aggregator import (
    AreaMeasurement,
    AreaReport,
    AreaAggregator,
    UNCALIBRATED_LABEL,
)

__all__ = [
    "NO_REGION",
    "Region",
    "Segmentation",
    "RegionSegmenter",
    "SegmentationCache",
    "AreaMeasurement",
    "AreaReport",
    "AreaAggregator",
    "UNCALIBRATED_LABEL",
]
