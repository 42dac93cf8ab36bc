"""Implementation of 'cycletrack calendar' command.

Shows one calendar month day by day: the cycle and period each day
belongs to, the day's totals, and the totals for the whole month.
"""

import typer
from rich.table import Table

from cycletrack.cli.utils import console, format_currency, open_tracker_or_exit
from cycletrack.core.exceptions import InvalidArgumentError
from cycletrack.core.models import CalendarDay, CycleStatus
from cycletrack.engine.calendar import format_short, from_canonical, month_name, today

PERIOD_LABELS = {
    CycleStatus.WORK: "[cyan]work[/cyan]",
    CycleStatus.REST: "[blue]rest[/blue]",
    CycleStatus.BEFORE_SYSTEM: "[dim]-[/dim]",
}


def _day_style(day: CalendarDay) -> str | None:
    """Row colour for a day with entries, from its balance and entry types."""
    totals = day.totals
    if not totals.entries:
        return None
    if totals.balance > 0:
        return "green"
    if totals.investment > 0:
        return "magenta"
    if totals.expense > 0:
        return "red"
    return "yellow"


def calendar_command(
    ctx: typer.Context,
    month: str = typer.Option(
        None,
        "--month",
        "-m",
        help="Month to show, YYYY-MM (default: current month)",
    ),
) -> None:
    """Show a month day by day with cycle periods and totals."""
    tracker = open_tracker_or_exit(ctx)
    currency = tracker.config.currency

    try:
        first_day = from_canonical(f"{month}-01") if month else today(tracker.provider.clock)
    except InvalidArgumentError:
        console.print(f"[red]Error:[/red] Invalid month: {month!r} (expected YYYY-MM)")
        raise typer.Exit(1)

    calendar = tracker.provider.month_calendar(first_day.year, first_day.month)

    table = Table(title=f"{month_name(first_day)} {first_day.year}")
    table.add_column("Day")
    table.add_column("Cycle", justify="right")
    table.add_column("Period")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Investment", justify="right")
    table.add_column("Balance", justify="right")

    for day in calendar.days:
        totals = day.totals
        has_entries = bool(totals.entries)
        table.add_row(
            format_short(day.date),
            str(day.cycle_number) if day.cycle_number else "",
            PERIOD_LABELS[day.status],
            format_currency(totals.income, currency) if has_entries else "",
            format_currency(totals.expense, currency) if has_entries else "",
            format_currency(totals.investment, currency) if has_entries else "",
            format_currency(totals.balance, currency) if has_entries else "",
            style=_day_style(day),
        )
    console.print(table)
    console.print()

    totals = calendar.totals
    console.print("[bold]Month Totals[/bold]")
    console.print(f"  Income:      {format_currency(totals.income, currency):>14}")
    console.print(f"  Expenses:    {format_currency(totals.expense, currency):>14}")
    console.print(f"  Investment:  {format_currency(totals.investment, currency):>14}")
    console.print(f"  Balance:     {format_currency(totals.balance, currency):>14}")
    console.print(f"[dim]Entries: {len(totals.entries)}[/dim]")
