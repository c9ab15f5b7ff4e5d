"""
Tests for zone priority classification.
"""

import numpy as np
import pytest

from irrigation_zone.geometry import (
    CanvasDimensions,
    Point,
    SamplingGrid,
    Shape,
    ZoneClassifier,
    ZoneKind,
)
from irrigation_zone.geometry.classifier import KIND_PRIORITY, UNCLASSIFIED

from conftest import square


@pytest.mark.parametrize("kinds,expected", [
    ([ZoneKind.REGULAR], ZoneKind.REGULAR),
    ([ZoneKind.REGULAR, ZoneKind.DRIP], ZoneKind.DRIP),
    ([ZoneKind.DRIP, ZoneKind.REGULAR], ZoneKind.DRIP),
    ([ZoneKind.DRIP, ZoneKind.EXCLUSION], ZoneKind.EXCLUSION),
    ([ZoneKind.EXCLUSION, ZoneKind.REGULAR, ZoneKind.DRIP], ZoneKind.EXCLUSION),
])
def test_priority_is_independent_of_insertion_order(kinds, expected):
    shapes = [square(0, 0, 100, kind) for kind in kinds]
    assert ZoneClassifier.classify(Point(50, 50), shapes) == expected


def test_unclassified_outside_every_shape():
    assert ZoneClassifier.classify(Point(500, 500), [square(0, 0, 100)]) is None
    assert ZoneClassifier.classify(Point(5, 5), []) is None


def test_degenerate_shape_is_ignored():
    line = Shape(points=(Point(0, 0), Point(100, 100), Point(0, 0)), kind=ZoneKind.EXCLUSION)
    assert ZoneClassifier.classify(Point(50, 50), [line, square(0, 0, 100)]) == ZoneKind.REGULAR


def test_grid_labels_square():
    grid = SamplingGrid(CanvasDimensions(200, 200), cell_size=10)
    labels = ZoneClassifier.classify_grid([square(0, 0, 100)], grid)

    assert labels.shape == (20, 20)
    assert int(np.count_nonzero(labels)) == 100
    assert labels[0, 0] == KIND_PRIORITY[ZoneKind.REGULAR]
    assert labels[9, 9] == KIND_PRIORITY[ZoneKind.REGULAR]
    assert labels[10, 10] == UNCLASSIFIED


def test_grid_labels_agree_with_point_classification():
    grid = SamplingGrid(CanvasDimensions(120, 90), cell_size=10)
    shapes = [
        square(0, 0, 80),
        square(30, 30, 40, ZoneKind.DRIP),
        square(50, 10, 45, ZoneKind.EXCLUSION),
    ]
    labels = ZoneClassifier.classify_grid(shapes, grid)

    for index in range(grid.size):
        col, row = grid.col_row(index)
        kind = ZoneClassifier.classify(grid.sample_point(index), shapes)
        expected = KIND_PRIORITY[kind] if kind is not None else UNCLASSIFIED
        assert labels[row, col] == expected


def test_grid_clips_shapes_beyond_canvas():
    grid = SamplingGrid(CanvasDimensions(50, 50), cell_size=10)
    labels = ZoneClassifier.classify_grid([square(-100, -100, 400)], grid)
    assert int(np.count_nonzero(labels)) == 25


def test_no_grid_gives_empty_labels():
    labels = ZoneClassifier.classify_grid([square(0, 0, 100)], None)
    assert labels.shape == (0, 0)
