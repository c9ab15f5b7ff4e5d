"""
Ruler Calibration Module
========================

Converts a pixel-space reference segment plus a declared real length into
a real-units-per-pixel ratio.

Design:
- At most one live ruler; placing a new one replaces the old one in full
- Invalid length input is a recoverable no-op (returns False)
- Ruler and pixel ratio are updated together in one step
- Area labels use the unit the live ratio was calibrated in
"""

import math
from typing import Optional, Union

from irrigation_zone.geometry.primitives import Point
from irrigation_zone.geometry.shapes import LengthUnit, Ruler


def parse_length(text: Union[str, float, int, None]) -> Optional[float]:
    """
    Parse a user-entered ruler length.

    Returns:
        Positive finite float, or None if the input is not usable
    """
    if text is None or isinstance(text, bool):
        return None
    try:
        value = float(text.strip()) if isinstance(text, str) else float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


class RulerCalibration:
    """
    Holds the live ruler and the derived pixel ratio.

    Attributes:
        ruler: Live ruler or None
        pixel_ratio: Real-world units per pixel, None while uncalibrated
        prompt_pending: True between placement and a successful calibration

    Usage:
        calibration = RulerCalibration()
        calibration.place(Point(0, 0), Point(100, 0))
        calibration.calibrate("5", LengthUnit.METERS)   # True
        calibration.pixel_ratio                         # 0.05
    """

    def __init__(self, default_unit: LengthUnit = LengthUnit.FEET):
        self.default_unit = LengthUnit(default_unit)
        self._ruler: Optional[Ruler] = None
        self._pixel_ratio: Optional[float] = None
        self._ratio_unit: Optional[LengthUnit] = None
        self.prompt_pending = False

    @property
    def ruler(self) -> Optional[Ruler]:
        return self._ruler

    @property
    def pixel_ratio(self) -> Optional[float]:
        return self._pixel_ratio

    @property
    def unit(self) -> LengthUnit:
        """Unit used to label areas (calibrated unit, else ruler unit, else the default)."""
        if self._ratio_unit is not None:
            return self._ratio_unit
        return self._ruler.unit if self._ruler is not None else self.default_unit

    def place(self, start: Point, end: Point) -> Ruler:
        """
        Place a new, uncalibrated ruler.

        The previous ruler is discarded; the previous pixel ratio and its unit
        stay in effect until a new calibration succeeds.
        """
        unit = self._ratio_unit or self.default_unit
        self._ruler = Ruler(start=start, end=end, real_length=0.0, unit=unit)
        self.prompt_pending = True
        return self._ruler

    def calibrate(
        self,
        text: Union[str, float, int, None],
        unit: Optional[LengthUnit] = None,
    ) -> bool:
        """
        Apply a user-entered real length to the live ruler.

        Args:
            text: Length as entered (string or number)
            unit: Declared unit (defaults to the ruler's current unit)

        Returns:
            True if calibration succeeded, False if nothing changed
        """
        if self._ruler is None:
            return False
        length = parse_length(text)
        if length is None:
            return False
        pixel_length = self._ruler.pixel_length
        if pixel_length == 0:
            return False

        unit = LengthUnit(unit) if unit is not None else self._ruler.unit
        ratio = length / pixel_length
        ruler = Ruler(
            start=self._ruler.start,
            end=self._ruler.end,
            real_length=length,
            unit=unit,
        )
        self._ruler, self._pixel_ratio, self._ratio_unit = ruler, ratio, unit
        self.prompt_pending = False
        return True

    def restore(self, ruler: Optional[Ruler], pixel_ratio: Optional[float]) -> None:
        """Load persisted state as-is."""
        self._ruler = ruler
        self._pixel_ratio = pixel_ratio
        self._ratio_unit = ruler.unit if ruler is not None and pixel_ratio is not None else None
        self.prompt_pending = False

    def clear(self) -> None:
        self.restore(None, None)
