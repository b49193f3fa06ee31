"""JSON-lines logging on top of loguru, with per-request trace ids.

Every record carries a ``trace_id``. Inside :func:`log_context` all records
share the context's trace id and pick up its extra fields (``operation``,
``provider``, ``request_id`` ...), so one valuation run can be followed across
the index lookup and the price fan-out.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger
from loguru._logger import Logger as _LoguruLogger

from satprism.core.logging.config import LogConfig

_trace_id: ContextVar[str | None] = ContextVar("satprism_trace_id", default=None)
_bound_fields: ContextVar[dict[str, Any]] = ContextVar("satprism_log_fields", default={})

# Fields promoted to the top level of each JSON line; everything else lands in "context".
_TOP_LEVEL = ("trace_id", "logger_name", "operation", "provider", "error_code")


def _new_trace_id() -> str:
    return uuid4().hex


def current_trace_id() -> str:
    """Trace id of the active context, created on first use outside one."""

    trace_id = _trace_id.get()
    if trace_id is None:
        trace_id = _new_trace_id()
        _trace_id.set(trace_id)
    return trace_id


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    explicit = extra.get("trace_id")
    if explicit:
        _trace_id.set(explicit)
    else:
        extra["trace_id"] = current_trace_id()

    for key, value in _bound_fields.get().items():
        if key == "trace_id":
            continue
        if extra.get(key) is None:
            extra[key] = value


def _render(record: dict[str, Any]) -> str:
    extra = record["extra"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
    }
    for key in _TOP_LEVEL:
        payload[key.removesuffix("_name")] = extra.get(key)

    context = {key: value for key, value in extra.items() if key not in _TOP_LEVEL}
    if context:
        payload["context"] = context
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"])
    return json.dumps(payload, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class _JsonLinesSink:
    """Writes one JSON document per record to a stream or appends to a file."""

    def __init__(self, target: IO[str] | str) -> None:
        self._stream: IO[str] | None = None
        self._path: Path | None = None
        if isinstance(target, str):
            self._path = Path(target)
            self._path.parent.mkdir(parents=True, exist_ok=True)
        else:
            self._stream = target

    def __call__(self, message: Any) -> None:
        line = _render(message.record) + "\n"
        if self._stream is not None:
            self._stream.write(line)
            self._stream.flush()
            return
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(line)


def _apply(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    if config.console:
        handlers.append({"sink": _JsonLinesSink(config.stream or sys.stderr), "level": config.level})
    if config.file_path:
        handlers.append({"sink": _JsonLinesSink(config.file_path), "level": config.level})
    logger.configure(handlers=handlers, patcher=_patch_record, extra=config.extra)


def configure_logging(config: LogConfig | None = None, **overrides: Any) -> LogConfig:
    """Replace all loguru sinks with JSON-lines sinks.

    Either pass a :class:`LogConfig` or its fields as keyword arguments; keyword
    arguments win. Returns the configuration that was applied.
    """

    base = config or LogConfig()
    applied = LogConfig(**{**base.model_dump(), **overrides}) if overrides else base
    _apply(applied)
    return applied


class StructuredLogger:
    """A configured loguru logger together with its :class:`LogConfig`."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = configure_logging(config)
        self.logger: _LoguruLogger = logger

    def configure(self, **changes: Any) -> None:
        self.config = configure_logging(self.config, **changes)

    @contextmanager
    def context(self, *, trace_id: str | None = None, **fields: Any) -> Iterator[str]:
        with log_context(trace_id=trace_id, **fields) as active:
            yield active


def get_logger(name: str | None = None) -> _LoguruLogger:
    """The shared loguru logger, bound to ``name`` when given."""

    return logger.bind(logger_name=name) if name else logger


@contextmanager
def log_context(*, trace_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Run a block under one trace id, attaching ``fields`` to every record."""

    fields_token = _bound_fields.set({**_bound_fields.get(), **fields})
    trace_token = _trace_id.set(trace_id or _new_trace_id())
    try:
        yield _trace_id.get()
    finally:
        _trace_id.reset(trace_token)
        _bound_fields.reset(fields_token)


__all__ = [
    "StructuredLogger",
    "configure_logging",
    "current_trace_id",
    "get_logger",
    "log_context",
    "logger",
]
