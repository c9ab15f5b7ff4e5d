"""
Structured Logging for the Irrigation Zone Planner
==================================================

Bounded Context: Observability

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: Component logger emitting typed events
    JSONFormatter: One JSON object per record
    create_logger: Factory function

Example:
    >>> from irrigation_zone.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="session")
    >>> logger.info(
    ...     event=LogEvent.ZONE_DELETED,
    ...     message="Deleted drip zone",
    ...     metadata={'remaining': 2}
    ... )
"""

from .events import LogEvent
from .structured import JSONFormatter, StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'JSONFormatter',
    'create_logger',
]
