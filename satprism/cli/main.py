"""Main entry point for the satprism command line interface."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from satprism.core.logging import configure_logging

from .formatters import create_formatter
from .valuation import register as register_valuation_commands


def create_app() -> typer.Typer:
    """Create a Typer application instance for satprism."""

    app = typer.Typer(add_completion=False, help="satprism command line interface")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str = typer.Option(
            "WARNING",
            "--log-level",
            help="Minimum level of the JSON logs written to stderr.",
            show_default=True,
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "no_color": no_color,
            }
        )
        try:
            configure_logging(level=log_level)
        except ValidationError as exc:
            raise typer.BadParameter(f"unknown log level {log_level!r}", param_hint="--log-level") from exc

    @app.command("serve")
    def serve() -> None:
        """Run the HTTP API (host and port come from config / SATPRISM_* env)."""

        from satprism.web.main import satprism_main

        satprism_main()

    register_valuation_commands(app)
    return app


app = create_app()
