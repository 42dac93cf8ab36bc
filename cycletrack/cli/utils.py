"""Shared helpers for CLI commands."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console

from cycletrack.core.config import TrackerConfig, load_config, resolve_home
from cycletrack.core.exceptions import CycleTrackError, InvalidArgumentError
from cycletrack.engine.calendar import from_canonical
from cycletrack.reports.provider import CycleReportProvider
from cycletrack.storage.repository import JsonFileEntryRepository

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}

console = Console()


@dataclass
class Tracker:
    """Everything a command needs, opened from one home directory."""

    home: Path
    config: TrackerConfig
    repository: JsonFileEntryRepository
    provider: CycleReportProvider


def open_tracker(home: Path | None = None) -> Tracker:
    """Load config and entry store for a home directory.

    Raises:
        ConfigError: If the config file is invalid.
        DataAccessError: If the entry store cannot be read.
    """
    home = resolve_home(home)
    config = load_config(home)
    repository = JsonFileEntryRepository(config.data_path(home))
    return Tracker(
        home=home,
        config=config,
        repository=repository,
        provider=CycleReportProvider(repository, config),
    )


def configure_logging(level: str = "WARNING", verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_currency(amount: Decimal, currency: str) -> str:
    """Format an amount for display, e.g. ``$1,234.50``."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def format_percentage(value: Decimal) -> str:
    return f"{value:.1f}%"


def open_tracker_or_exit(ctx: typer.Context) -> Tracker:
    """Open the tracker selected by the global options, exiting on error."""
    options = ctx.obj or {}
    try:
        tracker = open_tracker(options.get("home"))
    except CycleTrackError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(tracker.config.log_level, options.get("verbose", False))
    return tracker


def parse_reference_date(value: str | None) -> date | None:
    """Parse a ``--date`` option, exiting on malformed input."""
    if value is None:
        return None
    try:
        return from_canonical(value)
    except InvalidArgumentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
