"""Structured event logging for rpnmath.

Provides a unified event schema, filesystem NDJSON sink, and safe
emit helpers that never raise uncaught exceptions.
"""

from rpnmath.logging.events import (
    EventLevel,
    EventType,
    RpnEvent,
    clear_log_dir,
    emit,
    emit_error,
    emit_info,
    emit_warning,
    get_sink,
    set_log_dir,
    truncate_context,
)
from rpnmath.logging.sink import EventSink

__all__ = [
    "EventLevel",
    "EventSink",
    "EventType",
    "RpnEvent",
    "clear_log_dir",
    "emit",
    "emit_error",
    "emit_info",
    "emit_warning",
    "get_sink",
    "set_log_dir",
    "truncate_context",
]
