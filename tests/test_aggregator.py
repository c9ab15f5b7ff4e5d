"""
Tests for area aggregation and calibration formatting.
"""

import pytest

from irrigation_zone.analytics import (
    UNCALIBRATED_LABEL,
    AreaAggregator,
    AreaMeasurement,
    RegionSegmenter,
)
from irrigation_zone.geometry import CanvasDimensions, LengthUnit, SamplingGrid, ZoneKind

from conftest import square


@pytest.fixture
def segmentation():
    grid = SamplingGrid(CanvasDimensions(200, 200), cell_size=10)
    shapes = [square(0, 0, 100), square(20, 20, 50, ZoneKind.DRIP)]
    return RegionSegmenter.segment(shapes, grid)


def test_uncalibrated_report_is_explicit(segmentation):
    report = AreaAggregator.report(segmentation, pixel_ratio=None)

    assert not report.is_calibrated
    assert report[ZoneKind.REGULAR].pixel_area == 7500
    assert report[ZoneKind.REGULAR].real_area is None
    assert str(report[ZoneKind.DRIP]) == UNCALIBRATED_LABEL


def test_calibrated_report(segmentation):
    report = AreaAggregator.report(segmentation, pixel_ratio=0.05, unit=LengthUnit.METERS)

    assert report.is_calibrated
    assert report.region_count == 2
    assert report[ZoneKind.REGULAR].real_area == pytest.approx(18.75)
    assert report[ZoneKind.DRIP].real_area == pytest.approx(6.25)
    assert report[ZoneKind.EXCLUSION].real_area == 0
    assert report[ZoneKind.DRIP].format() == "6.25 m²"


def test_area_scales_with_square_of_ratio():
    measurement = AreaAggregator.measure(10000, 0.05, LengthUnit.METERS)
    assert measurement.real_area == pytest.approx(25.0)
    assert str(measurement) == "25.00 m²"

    doubled = AreaAggregator.measure(10000, 0.1, LengthUnit.METERS)
    assert doubled.real_area == pytest.approx(4 * measurement.real_area)


def test_unit_defaults_to_feet():
    assert AreaAggregator.measure(400, 0.5).format() == "100.00 ft²"


def test_hover_returns_region_measurement(segmentation):
    hovered = AreaAggregator.hover(segmentation, 45, 45, 0.05, LengthUnit.METERS)
    assert hovered.pixel_area == 2500
    assert hovered.real_area == pytest.approx(6.25)

    regular = AreaAggregator.hover(segmentation, 5, 5, None)
    assert regular.pixel_area == 7500
    assert not regular.is_calibrated


def test_hover_misses_unowned_cells(segmentation):
    assert AreaAggregator.hover(segmentation, 150, 150, 0.05) is None
    assert AreaAggregator.hover(segmentation, -5, 5, 0.05) is None


def test_measurement_to_dict():
    assert AreaMeasurement(pixel_area=100).to_dict() == {
        'pixel_area': 100,
        'real_area': None,
        'unit': None,
        'calibrated': False,
    }


def test_report_to_dict(segmentation):
    data = AreaAggregator.report(segmentation, 0.05, LengthUnit.METERS).to_dict()
    assert data['region_count'] == 2
    assert set(data['zones']) == {'regular', 'drip', 'exclusion'}
    assert data['zones']['drip']['unit'] == 'm'
