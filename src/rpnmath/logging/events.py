"""Unified event schema and module-level emit helpers.

All timestamps use UTC ISO-8601 with ``Z`` suffix.  The ``emit()``
family of functions is safe to call from any context -- failures are
swallowed and printed to stderr.
"""

from __future__ import annotations

import sys
import time
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EventLevel(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


class EventType(str, Enum):
    # Formula lifecycle
    formula_parsed = "formula_parsed"
    formula_rejected = "formula_rejected"

    # Registry
    function_registered = "function_registered"
    function_shadowed = "function_shadowed"

    # Evaluation
    unbound_variable = "unbound_variable"
    evaluation_failed = "evaluation_failed"

    # Sweeps
    sweep_completed = "sweep_completed"


# ---------------------------------------------------------------------------
# Context truncation
# ---------------------------------------------------------------------------

_MAX_VALUE_LEN = 256


def truncate_context(context: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *context* with long strings truncated.

    Formulas can be arbitrarily long; values over 256 characters are cut
    and marked with ``...[truncated]``.  Nested dicts and lists are
    handled recursively.
    """
    return {k: _truncate_value(v) for k, v in context.items()}


def _truncate_value(v: Any) -> Any:
    if isinstance(v, dict):
        return truncate_context(v)
    if isinstance(v, list):
        return [_truncate_value(item) for item in v]
    if isinstance(v, str) and len(v) > _MAX_VALUE_LEN:
        return v[:_MAX_VALUE_LEN] + "...[truncated]"
    return v


# ---------------------------------------------------------------------------
# Event model
# ---------------------------------------------------------------------------


def _utc_now() -> str:
    """Return current UTC timestamp in ISO-8601 with Z suffix."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class RpnEvent(BaseModel):
    """A single structured log event."""

    schema_version: int = 1
    ts: str = Field(default_factory=_utc_now)
    level: EventLevel
    event_type: EventType
    context: dict[str, Any] = Field(default_factory=dict)
    message: str = ""
    error_code: str | None = None


# ---------------------------------------------------------------------------
# Module-level sink reference
# ---------------------------------------------------------------------------

# Set by ``set_log_dir``; None means events are discarded.
_sink: Any = None  # EventSink | None


def set_log_dir(log_dir: Any, *, config: dict[str, Any] | None = None) -> None:
    """Configure the module-level event sink to write under *log_dir*.

    If this is never called, ``emit()`` silently discards events.

    Reads ``logging_fsync`` and ``logging_tail_bytes`` from *config*, or
    from ``rpnmath.yaml`` in *log_dir* when no config is given.
    """
    global _sink
    from pathlib import Path

    from rpnmath.logging.sink import EventSink

    log_dir = Path(log_dir)
    if config is None:
        from rpnmath.config import load_config

        config = load_config(log_dir)

    fsync = bool(config.get("logging_fsync", False))
    tb = config.get("logging_tail_bytes")
    tail_bytes = int(tb) if tb is not None else None

    _sink = EventSink(log_dir, fsync=fsync, tail_bytes=tail_bytes)


def clear_log_dir() -> None:
    """Detach the module-level sink; subsequent events are discarded."""
    global _sink
    _sink = None


def get_sink() -> Any:
    """Return the module-level sink, or None."""
    return _sink


# ---------------------------------------------------------------------------
# Rate-limited stderr warnings
# ---------------------------------------------------------------------------

_last_stderr_ts: float = 0.0
_STDERR_INTERVAL_SECS = 60.0


def _stderr_warning(msg: str) -> None:
    """Print a warning to stderr, rate-limited to one per 60 seconds."""
    global _last_stderr_ts
    now = time.monotonic()
    if now - _last_stderr_ts < _STDERR_INTERVAL_SECS:
        return
    _last_stderr_ts = now
    try:
        print(f"[rpnmath] {msg}", file=sys.stderr)
    except Exception:
        pass


# ---------------------------------------------------------------------------
# Safe emit helpers
# ---------------------------------------------------------------------------


def emit(event: RpnEvent) -> None:
    """Write an event to the configured sink.

    **Never raises.**  On failure, prints a rate-limited warning to stderr.
    """
    try:
        sink = get_sink()
        if sink is None:
            return
        event = event.model_copy(update={"context": truncate_context(event.context)})
        sink.write(event)
    except Exception:
        _stderr_warning(f"logging failed: {traceback.format_exc()}")


def emit_info(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Convenience: emit an info-level event."""
    emit(
        RpnEvent(
            level=EventLevel.info,
            event_type=event_type,
            message=message,
            context=context or {},
        )
    )


def emit_warning(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
    *,
    error_code: str | None = None,
) -> None:
    """Convenience: emit a warning-level event."""
    emit(
        RpnEvent(
            level=EventLevel.warning,
            event_type=event_type,
            message=message,
            context=context or {},
            error_code=error_code,
        )
    )


def emit_error(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
    *,
    error_code: str | None = None,
) -> None:
    """Convenience: emit an error-level event."""
    emit(
        RpnEvent(
            level=EventLevel.error,
            event_type=event_type,
            message=message,
            context=context or {},
            error_code=error_code,
        )
    )
