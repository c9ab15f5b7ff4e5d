"""
Area Aggregator Module
======================

Turns region cell counts into pixel and real-world areas.

Design:
- Immutable outputs (AreaMeasurement, AreaReport)
- Area scales with the square of the linear pixel ratio
- Missing calibration is an explicit state, never a numeric default
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from irrigation_zone.analytics.segmenter import Region, Segmentation
from irrigation_zone.geometry.shapes import LengthUnit, ZoneKind


UNCALIBRATED_LABEL = "Set ruler first"


@dataclass(frozen=True)
class AreaMeasurement:
    """
    Immutable area value with its calibration state.

    Attributes:
        pixel_area: Area in square pixels
        real_area: Area in square units, None while uncalibrated
        unit: Linear unit of real_area, None while uncalibrated

    Example:
        >>> str(AreaMeasurement(pixel_area=10000, real_area=25.0, unit=LengthUnit.METERS))
        '25.00 m²'
        >>> str(AreaMeasurement(pixel_area=10000))
        'Set ruler first'
    """

    pixel_area: float
    real_area: Optional[float] = None
    unit: Optional[LengthUnit] = None

    @property
    def is_calibrated(self) -> bool:
        return self.real_area is not None

    def format(self) -> str:
        if self.real_area is None:
            return UNCALIBRATED_LABEL
        unit = self.unit.value if self.unit is not None else LengthUnit.FEET.value
        return f"{self.real_area:.2f} {unit}²"

    def __str__(self) -> str:
        return self.format()

    def to_dict(self) -> Dict[str, object]:
        return {
            'pixel_area': self.pixel_area,
            'real_area': self.real_area,
            'unit': self.unit.value if self.unit is not None else None,
            'calibrated': self.is_calibrated,
        }


@dataclass(frozen=True)
class AreaReport:
    """Per-kind area totals for one segmentation."""

    by_kind: Dict[ZoneKind, AreaMeasurement] = field(default_factory=dict)
    region_count: int = 0

    def __getitem__(self, kind: ZoneKind) -> AreaMeasurement:
        return self.by_kind[kind]

    @property
    def is_calibrated(self) -> bool:
        return all(m.is_calibrated for m in self.by_kind.values())

    def to_dict(self) -> Dict[str, object]:
        return {
            'zones': {kind.value: m.to_dict() for kind, m in self.by_kind.items()},
            'region_count': self.region_count,
        }

    def __str__(self) -> str:
        return ", ".join(f"{kind.value}: {m}" for kind, m in self.by_kind.items())


class AreaAggregator:
    """
    Stateless area computations over a segmentation.

    Usage:
        report = AreaAggregator.report(segmentation, pixel_ratio=0.05, unit=LengthUnit.METERS)
        report[ZoneKind.REGULAR].real_area
    """

    @staticmethod
    def measure(
        pixel_area: float,
        pixel_ratio: Optional[float],
        unit: Optional[LengthUnit] = None,
    ) -> AreaMeasurement:
        """Convert a pixel area using a linear pixel ratio (None = uncalibrated)."""
        if pixel_ratio is None:
            return AreaMeasurement(pixel_area=pixel_area)
        return AreaMeasurement(
            pixel_area=pixel_area,
            real_area=pixel_area * pixel_ratio * pixel_ratio,
            unit=LengthUnit(unit) if unit is not None else LengthUnit.FEET,
        )

    @staticmethod
    def kind_pixel_area(segmentation: Segmentation, kind: ZoneKind) -> float:
        return float(sum(r.pixel_area for r in segmentation.of_kind(kind)))

    @staticmethod
    def measure_region(
        region: Region,
        pixel_ratio: Optional[float],
        unit: Optional[LengthUnit] = None,
    ) -> AreaMeasurement:
        return AreaAggregator.measure(region.pixel_area, pixel_ratio, unit)

    @staticmethod
    def measure_kind(
        segmentation: Segmentation,
        kind: ZoneKind,
        pixel_ratio: Optional[float],
        unit: Optional[LengthUnit] = None,
    ) -> AreaMeasurement:
        pixel_area = AreaAggregator.kind_pixel_area(segmentation, kind)
        return AreaAggregator.measure(pixel_area, pixel_ratio, unit)

    @staticmethod
    def report(
        segmentation: Segmentation,
        pixel_ratio: Optional[float],
        unit: Optional[LengthUnit] = None,
    ) -> AreaReport:
        """Totals for every zone kind (regular, drip, exclusion)."""
        by_kind = {
            kind: AreaAggregator.measure_kind(segmentation, kind, pixel_ratio, unit)
            for kind in (ZoneKind.REGULAR, ZoneKind.DRIP, ZoneKind.EXCLUSION)
        }
        return AreaReport(by_kind=by_kind, region_count=len(segmentation))

    @staticmethod
    def hover(
        segmentation: Segmentation,
        x: float,
        y: float,
        pixel_ratio: Optional[float],
        unit: Optional[LengthUnit] = None,
    ) -> Optional[AreaMeasurement]:
        """Area of the region under the cursor, or None."""
        region = segmentation.region_at(x, y)
        if region is None:
            return None
        return AreaAggregator.measure_region(region, pixel_ratio, unit)
