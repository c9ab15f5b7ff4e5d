"""
Tests for the polygon capture state machine and ruler calibration.
"""

import pytest

from irrigation_zone.capture import CaptureState, PolygonCapture, RulerCalibration, parse_length
from irrigation_zone.geometry import LengthUnit, Point, ZoneKind


def draw_square(capture, kind=ZoneKind.REGULAR):
    capture.begin(Point(0, 0))
    capture.commit(kind, Point(100, 0))
    capture.commit(kind, Point(100, 100))
    capture.commit(kind, Point(0, 100))


# ---------------------------------------------------------------------------
# PolygonCapture
# ---------------------------------------------------------------------------

def test_starts_idle():
    capture = PolygonCapture()
    assert capture.state == CaptureState.IDLE
    assert capture.vertices == ()
    assert capture.preview_edge() is None


def test_begin_holds_exactly_first_point():
    capture = PolygonCapture()
    capture.begin(Point(5, 5))
    assert capture.state == CaptureState.DRAWING
    assert capture.vertices == (Point(5, 5),)


def test_begin_while_drawing_raises():
    capture = PolygonCapture()
    capture.begin(Point(0, 0))
    with pytest.raises(RuntimeError):
        capture.begin(Point(1, 1))


def test_cursor_is_tracked_apart_from_vertices():
    capture = PolygonCapture()
    capture.begin(Point(0, 0))
    capture.move(Point(40, 40))
    capture.move(Point(50, 60))
    assert capture.vertices == (Point(0, 0),)
    assert capture.cursor == Point(50, 60)
    assert capture.preview_edge() == (Point(0, 0), Point(50, 60))


def test_commit_uses_provisional_cursor():
    capture = PolygonCapture()
    capture.begin(Point(0, 0))
    capture.move(Point(30, 0))
    assert capture.commit(ZoneKind.REGULAR) is None
    assert capture.vertices == (Point(0, 0), Point(30, 0))
    assert capture.cursor is None


def test_commit_without_point_or_cursor_is_noop():
    capture = PolygonCapture()
    capture.begin(Point(0, 0))
    assert capture.commit(ZoneKind.REGULAR) is None
    assert capture.vertices == (Point(0, 0),)


def test_commit_while_idle_starts_polygon():
    capture = PolygonCapture()
    assert capture.commit(ZoneKind.REGULAR, Point(7, 7)) is None
    assert capture.vertices == (Point(7, 7),)


def test_closes_within_snap_threshold_after_three_vertices():
    capture = PolygonCapture(snap_threshold=10)
    draw_square(capture)

    shape = capture.commit(ZoneKind.REGULAR, Point(3, 4))

    assert shape is not None
    assert shape.kind == ZoneKind.REGULAR
    assert shape.points[0] == shape.points[-1] == Point(0, 0)
    assert len(shape.points) == 5
    assert shape.area == 10000
    assert capture.state == CaptureState.IDLE


def test_snap_threshold_is_strict():
    capture = PolygonCapture(snap_threshold=5)
    draw_square(capture)
    assert capture.commit(ZoneKind.REGULAR, Point(3, 4)) is None
    assert len(capture.vertices) == 5


def test_snap_not_checked_before_three_vertices():
    capture = PolygonCapture()
    capture.begin(Point(0, 0))
    capture.commit(ZoneKind.REGULAR, Point(100, 0))

    # Two vertices only: a point next to the start is just another vertex
    assert capture.commit(ZoneKind.REGULAR, Point(2, 2)) is None
    assert capture.vertices == (Point(0, 0), Point(100, 0), Point(2, 2))
    assert capture.is_drawing


def test_repeated_point_is_ignored():
    capture = PolygonCapture()
    capture.begin(Point(0, 0))
    capture.commit(ZoneKind.REGULAR, Point(0, 0))
    capture.commit(ZoneKind.REGULAR, Point(50, 0))
    capture.commit(ZoneKind.REGULAR, Point(50, 0))
    assert capture.vertices == (Point(0, 0), Point(50, 0))


def test_fewer_than_three_distinct_vertices_never_close():
    capture = PolygonCapture()
    capture.begin(Point(0, 0))
    capture.commit(ZoneKind.REGULAR, Point(50, 0))
    capture.commit(ZoneKind.REGULAR, Point(0, 0))

    # Three committed vertices, two of them distinct
    assert capture.commit(ZoneKind.REGULAR, Point(1, 1)) is None
    assert capture.is_drawing

    assert capture.commit(ZoneKind.REGULAR, Point(50, 50)) is None
    shape = capture.commit(ZoneKind.REGULAR, Point(2, 0))
    assert shape is not None
    assert len(set(shape.points)) >= 3


def test_kind_is_bound_at_closure():
    capture = PolygonCapture()
    draw_square(capture, kind=ZoneKind.REGULAR)
    shape = capture.commit(ZoneKind.DRIP, Point(0, 0))
    assert shape.kind == ZoneKind.DRIP


def test_leave_keeps_vertices():
    capture = PolygonCapture()
    draw_square(capture)
    capture.move(Point(60, 60))
    capture.leave()
    assert capture.cursor is None
    assert len(capture.vertices) == 4
    assert capture.is_drawing


def test_preview_snaps_to_start():
    capture = PolygonCapture()
    draw_square(capture)
    capture.move(Point(4, 2))
    assert capture.preview_edge() == (Point(0, 100), Point(0, 0))


def test_cancel_discards_polygon():
    capture = PolygonCapture()
    draw_square(capture)
    capture.cancel()
    assert capture.state == CaptureState.IDLE


def test_invalid_snap_threshold():
    with pytest.raises(ValueError):
        PolygonCapture(snap_threshold=0)


# ---------------------------------------------------------------------------
# RulerCalibration
# ---------------------------------------------------------------------------

def test_place_creates_uncalibrated_ruler():
    calibration = RulerCalibration()
    ruler = calibration.place(Point(0, 0), Point(100, 0))
    assert ruler.real_length == 0
    assert not ruler.is_calibrated
    assert ruler.unit == LengthUnit.FEET
    assert calibration.prompt_pending
    assert calibration.pixel_ratio is None


def test_calibrate_sets_ratio_and_ruler_together():
    calibration = RulerCalibration()
    calibration.place(Point(0, 0), Point(100, 0))

    assert calibration.calibrate("5", LengthUnit.METERS)

    assert calibration.pixel_ratio == pytest.approx(0.05)
    assert calibration.ruler.real_length == 5
    assert calibration.ruler.unit == LengthUnit.METERS
    assert calibration.unit == LengthUnit.METERS
    assert not calibration.prompt_pending


@pytest.mark.parametrize("text", ["abc", "", "  ", "nan", "inf", "-3", "0", None])
def test_invalid_length_changes_nothing(text):
    calibration = RulerCalibration()
    calibration.place(Point(0, 0), Point(100, 0))
    calibration.calibrate("5", LengthUnit.METERS)
    ruler_before = calibration.ruler

    calibration.place(Point(0, 0), Point(50, 0))
    placed = calibration.ruler
    assert not calibration.calibrate(text, LengthUnit.FEET)

    assert calibration.ruler is placed
    assert calibration.pixel_ratio == pytest.approx(0.05)
    assert calibration.prompt_pending
    assert ruler_before is not placed


def test_calibrate_without_ruler():
    assert not RulerCalibration().calibrate("5")


def test_zero_length_ruler_is_rejected():
    calibration = RulerCalibration()
    calibration.place(Point(10, 10), Point(10, 10))
    assert not calibration.calibrate("5")
    assert calibration.pixel_ratio is None


def test_new_ruler_replaces_previous():
    calibration = RulerCalibration(default_unit=LengthUnit.METERS)
    calibration.place(Point(0, 0), Point(100, 0))
    calibration.calibrate("10")
    calibration.place(Point(0, 0), Point(0, 40))
    calibration.calibrate("2")

    assert calibration.ruler.end == Point(0, 40)
    assert calibration.ruler.unit == LengthUnit.METERS
    assert calibration.pixel_ratio == pytest.approx(0.05)


def test_parse_length():
    assert parse_length(" 2.5 ") == 2.5
    assert parse_length(3) == 3.0
    assert parse_length("1e2") == 100.0
    assert parse_length("5ft") is None
    assert parse_length(True) is None


def test_new_ruler_keeps_calibrated_unit_for_labels():
    calibration = RulerCalibration()
    calibration.place(Point(0, 0), Point(100, 0))
    calibration.calibrate("5", LengthUnit.METERS)

    placed = calibration.place(Point(0, 0), Point(50, 0))

    assert placed.unit == LengthUnit.METERS
    assert calibration.unit == LengthUnit.METERS
    assert calibration.pixel_ratio == pytest.approx(0.05)


def test_restore_uncalibrated_ruler_uses_ruler_unit():
    calibration = RulerCalibration()
    calibration.place(Point(0, 0), Point(100, 0))
    calibration.calibrate("5", LengthUnit.METERS)

    calibration.restore(calibration.ruler, None)
    placed = calibration.place(Point(0, 0), Point(50, 0))

    assert placed.unit == LengthUnit.FEET
    assert calibration.unit == LengthUnit.FEET
