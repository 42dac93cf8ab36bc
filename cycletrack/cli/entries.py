"""Implementation of entry management commands: add, edit, list, delete, export."""

from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.table import Table

from cycletrack.cli.utils import console, format_currency, open_tracker_or_exit
from cycletrack.core.exceptions import CycleTrackError
from cycletrack.core.models import EntryType
from cycletrack.engine.aggregator import aggregate
from cycletrack.engine.calendar import to_canonical, today
from cycletrack.engine.cycles import build_cycle
from cycletrack.storage.repository import EntryCreate, EntryUpdate, dump_entries


def add_command(
    ctx: typer.Context,
    entry_type: EntryType = typer.Argument(..., help="expense, income or investment"),
    amount: str = typer.Argument(..., help="Amount, e.g. 125.50"),
    category: str = typer.Argument(..., help="Category name"),
    on_date: str = typer.Option(
        None,
        "--date",
        "-d",
        help="Entry day, YYYY-MM-DD (default: today)",
    ),
    description: str = typer.Option(None, "--description", help="Optional note"),
) -> None:
    """Record a financial entry."""
    tracker = open_tracker_or_exit(ctx)

    try:
        data = EntryCreate(
            type=entry_type,
            category=category,
            amount=Decimal(amount),
            date=on_date or today(tracker.provider.clock),
            description=description,
        )
        entry = tracker.repository.create_entry(data)
    except (InvalidOperation, ValidationError, CycleTrackError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Added:[/green] {entry.type.value} {format_currency(entry.amount, tracker.config.currency)} "
        f"({entry.category}) on {to_canonical(entry.date)}"
    )
    console.print(f"[dim]id: {entry.id}[/dim]")


def list_command(
    ctx: typer.Context,
    cycle: int = typer.Option(None, "--cycle", "-c", help="Only entries in this cycle"),
) -> None:
    """List recorded entries."""
    tracker = open_tracker_or_exit(ctx)
    currency = tracker.config.currency
    entries = tracker.repository.list_entries()

    if cycle is not None:
        try:
            entries = aggregate(entries, build_cycle(cycle)).entries
        except CycleTrackError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    if not entries:
        console.print("[yellow]No entries found[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Entries")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Description")
    table.add_column("ID", style="dim")

    for entry in sorted(entries, key=lambda e: e.date):
        table.add_row(
            to_canonical(entry.date),
            entry.type.value,
            entry.category,
            format_currency(entry.amount, currency),
            entry.description or "",
            entry.id,
        )
    console.print(table)


def delete_command(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="ID of the entry to delete"),
) -> None:
    """Delete an entry by ID."""
    tracker = open_tracker_or_exit(ctx)

    try:
        deleted = tracker.repository.delete_entry(entry_id)
    except CycleTrackError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not deleted:
        console.print(f"[yellow]No entry with id '{entry_id}'[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Deleted:[/green] {entry_id}")


def edit_command(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="ID of the entry to edit"),
    entry_type: EntryType = typer.Option(None, "--type", "-t", help="expense, income or investment"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    on_date: str = typer.Option(None, "--date", "-d", help="New day, YYYY-MM-DD"),
    description: str = typer.Option(None, "--description", help="New note"),
) -> None:
    """Change fields of an existing entry."""
    tracker = open_tracker_or_exit(ctx)

    changes = {
        "type": entry_type,
        "amount": amount,
        "category": category,
        "date": on_date,
        "description": description,
    }
    changes = {field: value for field, value in changes.items() if value is not None}
    if not changes:
        console.print("[red]Error:[/red] Nothing to change; pass at least one option")
        raise typer.Exit(1)

    try:
        if "amount" in changes:
            changes["amount"] = Decimal(changes["amount"])
        entry = tracker.repository.update_entry(entry_id, EntryUpdate(**changes))
    except (InvalidOperation, ValidationError, CycleTrackError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Updated:[/green] {entry.type.value} {format_currency(entry.amount, tracker.config.currency)} "
        f"({entry.category}) on {to_canonical(entry.date)}"
    )


def export_command(
    ctx: typer.Context,
    path: Path = typer.Argument(
        None,
        help="Output file (default: cycletrack-YYYY-MM-DD.json in the current directory)",
    ),
) -> None:
    """Export all entries as JSON."""
    tracker = open_tracker_or_exit(ctx)
    entries = tracker.repository.list_entries()
    if path is None:
        path = Path(f"cycletrack-{to_canonical(today(tracker.provider.clock))}.json")

    try:
        path.write_bytes(dump_entries(entries))
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write {path}: {e}")
        raise typer.Exit(1)

    console.print(f"[green]Exported[/green] {len(entries)} entries to {path}")
