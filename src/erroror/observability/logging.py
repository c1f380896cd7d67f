"""Structured diagnostics for erroror.

The container logs only misuse, at DEBUG level, right before raising:
an empty error sequence, or reading ``value``/``first_error`` in the wrong
state. Nothing is logged on normal dispatch.

Events go through a BoundLogger to one of three renderers:
- ConsoleRenderer: ``[level] event key="value"`` lines on stderr
- JsonRenderer: one orjson document per line
- NoOpRenderer: drops everything

Quick Start:
    >>> from erroror.observability import configure_logging
    >>> configure_logging(format="json", level="DEBUG")

Or from environment (ERROROR_LOG_LEVEL, ERROROR_LOG_FORMAT, ERROROR_DEBUG):
    >>> from erroror.observability import configure_from_settings
    >>> configure_from_settings()
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

import orjson

from erroror.errors.types import JsonDict, JsonValue

if TYPE_CHECKING:
    from erroror.config import ErrorOrSettings


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One emitted event."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


@runtime_checkable
class LogRenderer(Protocol):
    """Writes a LogEntry somewhere."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Plain text lines: ``HH:MM:SS.mmm [level] event key=value ...``.

    Context keys are sorted; string values are double-quoted.
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    show_timestamp: bool = True

    def render(self, entry: LogEntry) -> None:
        head = f"[{entry.level}] {entry.event}"
        if self.show_timestamp:
            head = f"{entry.when:%H:%M:%S}.{entry.when.microsecond // 1000:03d} {head}"
        pairs = (f"{k}={_quote(v)}" for k, v in sorted(entry.context.items()))
        print(" ".join((head, *pairs)), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines: timestamp, level and event first, then the context."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        doc = {"timestamp": entry.when.isoformat(), "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(doc, default=str, option=orjson.OPT_NON_STR_KEYS).decode(), file=self.output)


class NoOpRenderer:
    """Discards every entry."""

    __slots__ = ()

    def render(self, entry: LogEntry) -> None:
        pass


# Active renderer and threshold; unset renderer means console on first use
_renderer: ContextVar[LogRenderer | None] = ContextVar("erroror_renderer", default=None)
_threshold: ContextVar[int] = ContextVar("erroror_threshold", default=logging.WARNING)


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Logger carrying fixed key/value context.

    ``bind`` returns a new logger; the receiver is never modified. Renderer
    and threshold come from the global configuration at emit time.

    Example:
        >>> log = get_logger("erroror.result").bind(operation="from_errors")
        >>> log.debug("empty error sequence")
    """

    context: JsonDict = field(default_factory=dict)

    def bind(self, **kw: JsonValue) -> BoundLogger:
        return BoundLogger({**self.context, **kw})

    def is_enabled_for(self, level: int) -> bool:
        return level >= _threshold.get()

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.DEBUG, event, kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.INFO, event, kw)

    def warning(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.WARNING, event, kw)

    def error(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.ERROR, event, kw)

    def _emit(self, level: int, event: str, kw: JsonDict) -> None:
        if not self.is_enabled_for(level):
            return
        renderer = _renderer.get()
        if renderer is None:
            renderer = ConsoleRenderer()
            _renderer.set(renderer)
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **kw})
        renderer.render(entry)


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "WARNING",
    *,
    output: TextIO | None = None,
    show_timestamp: bool = True,
) -> LogRenderer:
    """Select the renderer and threshold for all erroror loggers.

    Args:
        format: "console", "json" or "none"
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive)
        output: Stream to write to (default: stderr for console, stdout for json)
        show_timestamp: Prefix console lines with the time of day

    Raises:
        ValueError: On an unknown format
    """
    renderer: LogRenderer
    match format:
        case "console":
            renderer = ConsoleRenderer(output or sys.stderr, show_timestamp)
        case "json":
            renderer = JsonRenderer(output or sys.stdout)
        case "none":
            renderer = NoOpRenderer()
        case _:
            raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")

    _threshold.set(logging.getLevelNamesMapping().get(level.upper(), logging.WARNING))
    _renderer.set(renderer)
    return renderer


def configure_from_settings(settings: ErrorOrSettings | None = None, *, output: TextIO | None = None) -> LogRenderer:
    """Apply ErrorOrSettings (read from the environment when omitted)."""
    if settings is None:
        from erroror.config import get_settings
        settings = get_settings()
    return configure_logging(
        settings.logging.format,
        settings.effective_log_level,
        output=output,
        show_timestamp=settings.logging.show_timestamp,
    )


def get_logger(name: str | None = None, **context: JsonValue) -> BoundLogger:
    """Logger with ``name`` bound under the ``logger`` key."""
    if name:
        context["logger"] = name
    return BoundLogger(dict(context))


def _quote(v: object) -> str:
    return f'"{v}"' if isinstance(v, str) else str(v)
