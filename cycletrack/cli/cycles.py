"""Implementation of 'cycletrack cycles' command.

Lists cycles around the current one, or the first cycles of the system.
"""

import typer
from rich.table import Table

from cycletrack.cli.utils import console, open_tracker_or_exit, parse_reference_date
from cycletrack.core.exceptions import InvalidArgumentError
from cycletrack.engine.calendar import format_short, today
from cycletrack.engine.cycles import initial_cycles
from cycletrack.engine.locator import cycle_flags, cycles_window


def cycles_command(
    ctx: typer.Context,
    count: int = typer.Option(
        None,
        "--count",
        "-n",
        help="Number of cycles (default: window_size from config)",
    ),
    initial: bool = typer.Option(
        False,
        "--initial",
        help="List the first cycles of the system instead of the current window",
    ),
    on_date: str = typer.Option(
        None,
        "--date",
        "-d",
        help="Centre the window on this day, YYYY-MM-DD (default: today)",
    ),
) -> None:
    """List work cycles with their work and rest periods."""
    tracker = open_tracker_or_exit(ctx)
    reference = parse_reference_date(on_date) or today(tracker.provider.clock)
    if count is None:
        count = tracker.config.window_size

    try:
        cycles = initial_cycles(count) if initial else cycles_window(count, reference)
    except InvalidArgumentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Work Cycles")
    table.add_column("#", justify="right")
    table.add_column("Work period")
    table.add_column("Rest period")
    table.add_column("Next start")
    table.add_column("")

    for cycle in cycles:
        flags = cycle_flags(cycle, reference)
        if flags.is_work_period:
            marker = "[green]● working[/green]"
        elif flags.is_rest_period:
            marker = "[blue]● resting[/blue]"
        else:
            marker = ""
        table.add_row(
            str(cycle.cycle_number),
            f"{format_short(cycle.work_start)} - {format_short(cycle.work_end)}",
            f"{format_short(cycle.rest_start)} - {format_short(cycle.rest_end)}",
            format_short(cycle.next_cycle_start),
            marker,
        )

    console.print(table)
