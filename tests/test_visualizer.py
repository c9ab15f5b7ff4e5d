"""
Tests for ZoneVisualizer drawing.
"""

import numpy as np
import pytest
from PIL import Image

from irrigation_zone import DrawingTool, Point, ZoneKind
from irrigation_zone.analytics import RegionSegmenter
from irrigation_zone.geometry import CanvasDimensions, LengthUnit, Ruler, SamplingGrid
from irrigation_zone.rendering import ZoneVisualizer, read_image, write_image

from conftest import SQUARE_100, square, trace


@pytest.fixture
def frame():
    return np.zeros((200, 200, 3), dtype=np.uint8)


@pytest.fixture
def two_regions():
    grid = SamplingGrid(CanvasDimensions(200, 200), cell_size=10)
    return RegionSegmenter.segment([square(0, 0, 50), square(100, 100, 50)], grid)


def test_region_cells_blended_by_kind(frame, two_regions):
    visualizer = ZoneVisualizer(region_opacity=0.2, hover_opacity=0.6)

    result = visualizer.draw_regions(frame, two_regions, hovered_index=0)

    # #2ecc71 as BGR is (113, 204, 46)
    assert result[5, 5].tolist() == [68, 122, 28]
    assert result[105, 105].tolist() == [23, 41, 9]
    assert result[75, 75].tolist() == [0, 0, 0]
    assert not frame.any()


def test_regions_without_grid_are_noop(frame):
    segmentation = RegionSegmenter.segment([square(0, 0, 50)], None)
    assert ZoneVisualizer().draw_regions(frame, segmentation) is frame


def test_draw_shape_outline_and_fill(frame):
    result = ZoneVisualizer().draw_shape(frame.copy(), square(20, 20, 100, ZoneKind.EXCLUSION))
    assert result.shape == frame.shape
    assert result[70, 70].any()
    assert not result[190, 190].any()


def test_draw_ruler_and_tooltip(frame):
    visualizer = ZoneVisualizer()
    ruler = Ruler(Point(10, 100), Point(190, 100), real_length=5, unit=LengthUnit.METERS)

    result = visualizer.draw_ruler(frame.copy(), ruler)
    assert result[100, 20].any()

    result = visualizer.draw_tooltip(frame.copy(), "25.00 m²", Point(195, 195))
    assert result.shape == frame.shape
    assert result.any()


def test_draw_session_composites_everything(session, frame):
    trace(session, DrawingTool.REGULAR, SQUARE_100)
    session.place_ruler(0, 150, 100, 150)
    session.submit_ruler_length("5", LengthUnit.METERS)

    # Open polygon with a cursor, plus hover over the square
    session.select_tool(DrawingTool.DRIP)
    session.pointer_move(50, 50)
    session.pointer_down(120, 120)
    session.pointer_up(120, 120)
    session.pointer_down(180, 120)
    session.pointer_up(180, 120)
    session.pointer_move(180, 180)

    result = ZoneVisualizer(thickness=2).draw_session(frame.copy(), session)

    assert result.shape == frame.shape
    assert result[50, 50].any()
    assert result[120, 150].any()


def test_image_io_keeps_bgr_order(tmp_path):
    frame = np.zeros((10, 20, 3), dtype=np.uint8)
    frame[:, :, 0] = 255  # blue in BGR
    path = write_image(frame, tmp_path / "nested" / "blue.png")

    assert Image.open(path).getpixel((0, 0)) == (0, 0, 255)
    assert read_image(path)[0, 0].tolist() == [255, 0, 0]


def test_read_missing_image(tmp_path):
    with pytest.raises(OSError, match="Could not read image"):
        read_image(tmp_path / "missing.png")
