"""
Structured JSON Logger
======================

Bounded Context: Observability for the planner

Design:
- Records stay plain stdlib LogRecords; event, component and metadata ride
  along as record attributes (logging `extra`)
- JSONFormatter turns a record into one JSON object per line
- Bound context (bind) is merged into every record's metadata
- Type-safe events (LogEvent enum)

Example:
    >>> logger = create_logger("session")
    >>> logger.info(
    ...     event=LogEvent.ZONE_CLOSED,
    ...     message="Closed regular zone",
    ...     metadata={'vertices': 4, 'pixel_area': 10000.0}
    ... )

Output:
    {"timestamp": "2025-10-24T15:30:45.123456+00:00", "level": "INFO",
     "component": "session", "event": "zone.closed",
     "message": "Closed regular zone",
     "metadata": {"vertices": 4, "pixel_area": 10000.0}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .events import LogEvent


LOGGER_NAMESPACE = "irrigation_zone"


class JSONFormatter(logging.Formatter):
    """Serialize a record emitted through StructuredLogger as a JSON line."""

    def to_dict(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', record.name),
            'event': getattr(record, 'event', None),
            'message': record.getMessage(),
        }

        metadata = getattr(record, 'metadata', None)
        if metadata:
            entry['metadata'] = metadata

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry['exception'] = {'type': type(exc).__name__, 'message': str(exc)}

        return entry

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.to_dict(record), default=str)


class StructuredLogger:
    """
    Component logger emitting typed events.

    Attributes:
        component: Component name (e.g., "session", "persistence", "cli")
        context: Metadata merged into every record
        logger: Underlying stdlib logger (irrigation_zone.<component>)
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.component = component
        self.context = dict(context or {})
        self.logger_name = logger_name or f"{LOGGER_NAMESPACE}.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def bind(self, **context: Any) -> "StructuredLogger":
        """
        Logger for the same component with extra metadata on every record.

        Example:
            >>> cli_logger = create_logger("cli").bind(store="plan.json")
        """
        return StructuredLogger(
            component=self.component,
            level=self.logger.level,
            logger_name=self.logger_name,
            context={**self.context, **context},
        )

    def _log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        merged = {**self.context, **(metadata or {})}
        self.logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={
                'component': self.component,
                'event': LogEvent(event).value,
                'metadata': merged or None,
            },
        )

    def debug(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """
        Log a recoverable problem.

        Example:
            >>> logger.warning(
            ...     event=LogEvent.PLAN_CORRUPTED,
            ...     message="Ignoring malformed entry 'irrigationRuler'",
            ...     metadata={'key': 'irrigationRuler'}
            ... )
        """
        self._log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """Log an error, with the exception's type and message when given."""
        self._log(logging.ERROR, event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)


def create_logger(component: str, level: int = logging.INFO) -> StructuredLogger:
    """Factory for a StructuredLogger under the irrigation_zone namespace."""
    return StructuredLogger(component=component, level=level)
