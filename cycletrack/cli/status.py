"""Implementation of 'cycletrack status' command.

Shows where today falls in the cycle calendar and the current cycle's totals.
"""

from decimal import Decimal

import typer
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from cycletrack.cli.utils import (
    console,
    format_currency,
    format_percentage,
    open_tracker_or_exit,
    parse_reference_date,
)
from cycletrack.core.models import CycleStatus
from cycletrack.engine.calendar import format_for_display


def _progress_row(label: str, value: Decimal) -> Table:
    row = Table.grid(padding=(0, 1))
    row.add_column(width=16)
    row.add_column(width=40)
    row.add_column(justify="right")
    row.add_row(label, ProgressBar(total=100, completed=float(value), width=40), format_percentage(value))
    return row


def status_command(
    ctx: typer.Context,
    on_date: str = typer.Option(
        None,
        "--date",
        "-d",
        help="Show status as of this day, YYYY-MM-DD (default: today)",
    ),
) -> None:
    """Show current cycle status.

    Displays the day within the cycle, work/rest progress and the
    totals recorded so far in the current cycle.
    """
    tracker = open_tracker_or_exit(ctx)
    currency = tracker.config.currency
    overview = tracker.provider.cycle_overview(parse_reference_date(on_date))
    info = overview.info

    console.print()
    if info.status == CycleStatus.BEFORE_SYSTEM:
        console.print(
            Panel(
                f"[bold]Before system start[/bold] ({info.days_until_next_cycle} days until "
                f"{format_for_display(info.cycle.work_start)})",
                style="yellow",
            )
        )
        raise typer.Exit(0)

    cycle = info.cycle
    console.print(Panel(f"[bold]{cycle.label}[/bold]", style="cyan"))
    console.print()

    if info.status == CycleStatus.WORK:
        position = f"work day {info.work_day_number} of 11"
    else:
        position = f"rest day {info.rest_day_number} of 3"
    console.print(f"  Today:   {format_for_display(info.reference_date)}")
    console.print(f"  Day {info.day_number} of 14 ([bold]{position}[/bold])")
    console.print(f"  Next cycle in {info.days_until_next_cycle} days")
    console.print()

    console.print(_progress_row("  Cycle", overview.cycle_progress))
    console.print(_progress_row("  Work period", overview.work_progress))
    console.print()

    agg = overview.aggregate
    if not agg.entries:
        console.print("[yellow]No entries recorded in this cycle yet[/yellow]")
        raise typer.Exit(0)

    console.print("[bold]This Cycle[/bold]")
    console.print(f"  Income:      {format_currency(agg.income, currency):>14}")
    console.print(f"  Expenses:    {format_currency(agg.expense, currency):>14}")
    console.print(f"  Investment:  {format_currency(agg.investment, currency):>14}")
    if agg.balance >= 0:
        console.print(f"  [green]Balance:     {format_currency(agg.balance, currency):>14}[/green]")
    else:
        console.print(f"  [red]Balance:     {format_currency(agg.balance, currency):>14}[/red]")
    console.print()

    console.print("[bold]Metrics[/bold]")
    console.print(f"  ROI:              {format_percentage(agg.roi):>10}")
    console.print(f"  Efficiency:       {format_percentage(agg.efficiency):>10}")
    console.print(f"  Burn rate / day:  {format_currency(agg.burn_rate, currency):>10}")
    console.print(f"  Active work days: {agg.active_days:>10}")
    console.print()

    if agg.efficiency < 0:
        console.print("[bold yellow]⚠ Warnings[/bold yellow]")
        console.print("  - Expenses and investment exceed income this cycle")
        console.print()

    console.print(
        f"[dim]Entries: {len(agg.entries)} "
        f"({len(agg.work_entries)} work, {len(agg.rest_entries)} rest)[/dim]"
    )
