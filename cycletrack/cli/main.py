"""CycleTrack command line entry point."""

from pathlib import Path

import typer

from cycletrack import __version__
from cycletrack.cli.calendar_cmd import calendar_command
from cycletrack.cli.cycles import cycles_command
from cycletrack.cli.entries import (
    add_command,
    delete_command,
    edit_command,
    export_command,
    list_command,
)
from cycletrack.cli.report import report_command
from cycletrack.cli.status import status_command
from cycletrack.cli.utils import console

app = typer.Typer(
    name="cycletrack",
    help="Track income, expenses and investment over 11+3 day work cycles.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"cycletrack {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    home: Path = typer.Option(
        None,
        "--home",
        "-w",
        help="Tracker directory (default: $CYCLETRACK_HOME or current directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Track income, expenses and investment over 11+3 day work cycles."""
    ctx.obj = {"home": home, "verbose": verbose}


app.command(name="status")(status_command)
app.command(name="cycles")(cycles_command)
app.command(name="calendar")(calendar_command)
app.command(name="report")(report_command)
app.command(name="add")(add_command)
app.command(name="edit")(edit_command)
app.command(name="list")(list_command)
app.command(name="delete")(delete_command)
app.command(name="export")(export_command)


if __name__ == "__main__":
    app()
