"""Key normalisation and valuation commands."""

from __future__ import annotations

import asyncio

import typer

from satprism.core.codec import normalize_extended_key
from satprism.core.config import ConfigManager
from satprism.core.exceptions import ConfigurationError
from satprism.core.models import ValuationOutcome
from satprism.core.services import ValuationService

from .constants import EXIT_CODE_BY_KIND, VALIDATION_EXIT_CODE
from .utils import CLIOptions, emit_exception, emit_failure, open_output


def register(app: typer.Typer) -> None:
    """Register the valuation commands on the provided application."""

    app.command("normalize")(normalize_command)
    app.command("value")(value_command)


def get_valuation_service() -> ValuationService:
    """Factory hook for obtaining a :class:`ValuationService` instance."""

    return ValuationService.from_config(ConfigManager().get_config())


def normalize_command(key: str = typer.Argument(..., help="Extended public key (xpub or zpub).")) -> None:
    """Print the legacy (xpub) form of KEY; other keys are echoed unchanged."""

    typer.echo(normalize_extended_key(key.strip()))


def value_command(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Extended public key (xpub or zpub)."),
) -> None:
    """Value every transaction of KEY at its historical and current BTC price."""

    options = CLIOptions.from_context(ctx)
    try:
        outcome = asyncio.run(_run(key))
    except ConfigurationError as exc:
        emit_exception(exc)
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc

    if not outcome.ok:
        emit_failure(outcome.failure)
        raise typer.Exit(code=EXIT_CODE_BY_KIND[outcome.failure.kind])

    with open_output(options) as stream:
        options.formatter().render([record.to_wire() for record in outcome.records], stream=stream)


async def _run(key: str) -> ValuationOutcome:
    async with get_valuation_service() as service:
        return await service.value(key)
