"""
Tests for structured JSON logging.
"""

import json
import logging

from irrigation_zone import DrawingTool, LengthUnit
from irrigation_zone.logging import JSONFormatter, LogEvent, StructuredLogger
from irrigation_zone.logging.events import ERROR_EVENTS, RULER_EVENTS, ZONE_EVENTS

from conftest import SQUARE_100, trace


def entries(caplog, logger_name):
    formatter = JSONFormatter()
    return [json.loads(formatter.format(r)) for r in caplog.records if r.name == logger_name]


def test_log_entry_is_json(caplog):
    logger = StructuredLogger(component="test", logger_name="irrigation_zone.test_json")
    with caplog.at_level(logging.INFO, logger="irrigation_zone.test_json"):
        logger.info(
            event=LogEvent.ZONE_CLOSED,
            message="Closed regular zone",
            metadata={'vertices': 4},
        )

    entry = entries(caplog, "irrigation_zone.test_json")[0]
    assert entry['level'] == 'INFO'
    assert entry['component'] == 'test'
    assert entry['event'] == 'zone.closed'
    assert entry['message'] == 'Closed regular zone'
    assert entry['metadata'] == {'vertices': 4}
    assert 'timestamp' in entry


def test_error_includes_exception(caplog):
    logger = StructuredLogger(component="test", logger_name="irrigation_zone.test_error")
    with caplog.at_level(logging.ERROR, logger="irrigation_zone.test_error"):
        logger.error(
            event=LogEvent.PLAN_CORRUPTED,
            message="Broken",
            exc_info=ValueError("bad json"),
        )

    entry = entries(caplog, "irrigation_zone.test_error")[0]
    assert entry['exception'] == {'type': 'ValueError', 'message': 'bad json'}


def test_bound_context_is_merged(caplog):
    logger = StructuredLogger(component="test", logger_name="irrigation_zone.test_bind")
    bound = logger.bind(store="plan.json")
    with caplog.at_level(logging.INFO, logger="irrigation_zone.test_bind"):
        bound.info(event=LogEvent.PLAN_LOADED, message="Loaded", metadata={'shapes': 2})
        logger.info(event=LogEvent.PLAN_LOADED, message="Loaded")

    first, second = entries(caplog, "irrigation_zone.test_bind")
    assert first['metadata'] == {'store': 'plan.json', 'shapes': 2}
    assert 'metadata' not in second


def test_below_level_is_dropped(caplog):
    logger = StructuredLogger(component="test", logger_name="irrigation_zone.test_level")
    with caplog.at_level(logging.DEBUG):
        logger.set_level(logging.WARNING)
        logger.info(event=LogEvent.PLAN_SAVED, message="quiet")
        logger.warning(event=LogEvent.PLAN_CORRUPTED, message="loud")

    assert [e['message'] for e in entries(caplog, "irrigation_zone.test_level")] == ['loud']


def test_session_logs_zone_and_ruler_events(session, caplog):
    with caplog.at_level(logging.INFO, logger="irrigation_zone.session"):
        trace(session, DrawingTool.REGULAR, SQUARE_100)
        session.place_ruler(0, 0, 100, 0)
        session.submit_ruler_length("nope")
        session.submit_ruler_length("5", LengthUnit.METERS)

    events = [r.event for r in caplog.records if r.name == "irrigation_zone.session"]
    assert events == ['zone.closed', 'ruler.placed', 'ruler.rejected', 'ruler.calibrated']


def test_event_categories_are_disjoint():
    assert ZONE_EVENTS.isdisjoint(RULER_EVENTS)
    assert LogEvent.PLAN_CORRUPTED in ERROR_EVENTS
