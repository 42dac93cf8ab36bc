"""Implementation of 'cycletrack report' command.

Prints a multi-cycle report:
1. Per-cycle table - income, expenses, investment, balance, ratios
2. Portfolio summary - totals, averages, best/worst cycle, consistency
3. Categories - top categories per entry type
4. Insights - highlights and warnings
"""

import typer
from rich.panel import Panel
from rich.table import Table

from cycletrack.cli.utils import (
    console,
    format_currency,
    format_percentage,
    open_tracker_or_exit,
    parse_reference_date,
)
from cycletrack.core.models import CategoryShare, CycleSelection, InsightLevel

TOP_CATEGORIES = 5


def _print_categories(title: str, shares: list[CategoryShare], currency: str) -> None:
    if not shares:
        return
    console.print(f"[bold]{title}[/bold]")
    for share in shares[:TOP_CATEGORIES]:
        console.print(
            f"  {share.category}: {format_currency(share.amount, currency):>12} "
            f"({format_percentage(share.percentage)}, {share.entry_count} entries)"
        )
    console.print()


def report_command(
    ctx: typer.Context,
    period: CycleSelection = typer.Option(
        CycleSelection.RECENT,
        "--period",
        "-p",
        help="Cycles to cover: current, recent or all",
    ),
    on_date: str = typer.Option(
        None,
        "--date",
        "-d",
        help="Report as of this day, YYYY-MM-DD (default: today)",
    ),
) -> None:
    """Show a financial report across work cycles."""
    tracker = open_tracker_or_exit(ctx)
    currency = tracker.config.currency
    report = tracker.provider.build_report(period, parse_reference_date(on_date))
    summary = report.summary

    console.print()
    console.print(
        Panel(f"[bold]Cycle report ({period.value})[/bold] as of {report.reference_date}", style="cyan")
    )
    console.print()

    if not report.aggregates:
        console.print("[yellow]No entries found in the selected cycles[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Cycles")
    table.add_column("Cycle", justify="right")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Investment", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("ROI", justify="right")
    table.add_column("Efficiency", justify="right")
    table.add_column("Active days", justify="right")

    for agg in report.aggregates:
        balance_style = "green" if agg.balance >= 0 else "red"
        table.add_row(
            str(agg.cycle.cycle_number),
            format_currency(agg.income, currency),
            format_currency(agg.expense, currency),
            format_currency(agg.investment, currency),
            f"[{balance_style}]{format_currency(agg.balance, currency)}[/{balance_style}]",
            format_percentage(agg.roi),
            format_percentage(agg.efficiency),
            str(agg.active_days),
        )
    console.print(table)
    console.print()

    console.print("[bold]Summary[/bold]")
    console.print(f"  Total income:       {format_currency(summary.total_income, currency):>14}")
    console.print(f"  Total expenses:     {format_currency(summary.total_expense, currency):>14}")
    console.print(f"  Total investment:   {format_currency(summary.total_investment, currency):>14}")
    console.print(f"  Total balance:      {format_currency(summary.total_balance, currency):>14}")
    console.print(f"  Average ROI:        {format_percentage(summary.avg_roi):>14}")
    console.print(f"  Average efficiency: {format_percentage(summary.avg_efficiency):>14}")
    console.print(f"  Average burn rate:  {format_currency(summary.avg_burn_rate, currency):>14}")
    console.print(f"  Consistency score:  {summary.consistency_score:>14.1f}")
    console.print(f"  Growth rate:        {format_percentage(summary.growth_rate):>14}")
    console.print(f"  Active work days:   {summary.total_active_days:>14}")
    if summary.best_cycle and summary.worst_cycle:
        console.print(
            f"  Best cycle:  {summary.best_cycle.cycle.cycle_number} "
            f"({format_currency(summary.best_cycle.balance, currency)})"
        )
        console.print(
            f"  Worst cycle: {summary.worst_cycle.cycle.cycle_number} "
            f"({format_currency(summary.worst_cycle.balance, currency)})"
        )
    console.print()

    _print_categories("Top Expense Categories", report.categories.expense, currency)
    _print_categories("Top Income Categories", report.categories.income, currency)
    _print_categories("Top Investment Categories", report.categories.investment, currency)

    if report.insights:
        console.print("[bold]Insights[/bold]")
        for insight in report.insights:
            color = "green" if insight.level == InsightLevel.SUCCESS else "yellow"
            console.print(f"  [{color}]{insight.title}:[/{color}] {insight.message}")
        console.print()
