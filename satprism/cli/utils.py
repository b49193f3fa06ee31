"""Helpers shared by the satprism commands."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Mapping, TextIO

import typer

from satprism.core.exceptions import SatPrismError
from satprism.core.models import ValuationFailure

from .constants import VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter


@dataclass(slots=True)
class CLIOptions:
    """Global options stored on the Typer context by the root callback."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False

    @classmethod
    def from_context(cls, ctx: typer.Context) -> CLIOptions:
        data = ctx.find_root().obj or {}
        return cls(
            format=str(data.get("format", "table")),
            output_path=data.get("output_path"),
            no_color=bool(data.get("no_color", False)),
        )

    def formatter(self) -> OutputFormatter:
        return create_formatter(self.format, no_color=self.no_color)


@contextmanager
def open_output(options: CLIOptions) -> Iterator[TextIO]:
    """Yield stdout, or the ``--output`` file opened for writing."""

    if options.output_path is None:
        yield sys.stdout
        return
    try:
        handle = open(options.output_path, "w", encoding="utf-8")
    except OSError as exc:
        emit_error(str(exc), "OUTPUT_ERROR", details={"path": str(options.output_path)})
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
    with handle:
        yield handle


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Write one JSON error object to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = {key: _plain(value) for key, value in details.items()}
    typer.echo(json.dumps(payload, ensure_ascii=False), err=True)


def emit_failure(failure: ValuationFailure) -> None:
    details: dict[str, object] = {"kind": failure.kind.value, **failure.details}
    emit_error(failure.detail, failure.code, details=details)


def emit_exception(error: SatPrismError) -> None:
    emit_error(error.message, error.error_code, details=error.details)


def _plain(value: object) -> object:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value]
    return str(value)


__all__ = ["CLIOptions", "open_output", "emit_error", "emit_failure", "emit_exception"]
