"""
Shared fixtures for the irrigation zone planner tests.
"""

import pytest

from irrigation_zone import (
    DrawingTool,
    MemoryKeyValueStore,
    PlannerSession,
    PlanPersistence,
    Point,
    Shape,
    ZoneKind,
)


def ring(*coords):
    """Closed ring from (x, y) pairs (closing point appended)."""
    points = [Point(x, y) for x, y in coords]
    return tuple(points + points[:1])


def square(x0, y0, size, kind=ZoneKind.REGULAR):
    """Axis-aligned square Shape with top-left corner (x0, y0)."""
    return Shape.from_ring(
        ring((x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)),
        kind,
    )


def trace(session, tool, vertices):
    """Click every vertex then the first again; returns the last pointer_up result."""
    session.select_tool(tool)
    result = None
    for x, y in list(vertices) + list(vertices[:1]):
        session.pointer_down(x, y)
        result = session.pointer_up(x, y)
    return result


SQUARE_100 = [(0, 0), (100, 0), (100, 100), (0, 100)]
DRIP_50 = [(20, 20), (70, 20), (70, 70), (20, 70)]


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def session(kv_store):
    """Session on a 200x200 canvas backed by an in-memory store."""
    s = PlannerSession(persistence=PlanPersistence(kv_store))
    s.set_canvas(200, 200)
    return s


@pytest.fixture
def regular_square(session):
    return trace(session, DrawingTool.REGULAR, SQUARE_100)
