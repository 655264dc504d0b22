"""CLI entry point for the room allocator."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .allocator import create_allocator
from .constants import STDIN_MARKER
from .exceptions import AllocationError
from .exporters import dump_payload, get_exporter, load_payload
from .models import AllocationResult
from .validators import validate_payload

app = typer.Typer(
    name="room-allocator",
    help="Assign booking requests to rooms with a greedy earliest-check-out heuristic",
    add_completion=False,
)
# stdout is reserved for the JSON payload
console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


InputArgument = Annotated[
    Path,
    typer.Argument(help="Input JSON payload, or '-' to read from stdin"),
]
RoomsOption = Annotated[
    Optional[Path],
    typer.Option("--rooms", help="Path to rooms.csv overriding the payload's rooms"),
]
ConfigDirOption = Annotated[
    Optional[Path],
    typer.Option("--config-dir", help="Directory with rooms.csv and/or range.json"),
]
FromOption = Annotated[
    Optional[str],
    typer.Option("--from", help="Allocation window start (overrides range.from)"),
]
ToOption = Annotated[
    Optional[str],
    typer.Option("--to", help="Allocation window end (overrides range.to)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("-v", "--verbose", help="Show detailed output"),
]


def _configure_logging(verbose: bool) -> None:
    """Route package logging through rich on stderr."""
    package_logger = logging.getLogger("room_allocator")
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(console=console, show_path=False, markup=False))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def _check_input(input_file: Path) -> None:
    """Fail early when a file input does not exist."""
    if str(input_file) != STDIN_MARKER and not input_file.exists():
        _fail(f"File not found: {input_file}")


def _run_allocation(
    input_file: Path,
    rooms_csv: Path | None,
    config_dir: Path | None,
    range_from: str | None,
    range_to: str | None,
) -> AllocationResult:
    """Load the payload, build the allocator and run it, exiting on errors."""
    _check_input(input_file)

    if rooms_csv and not rooms_csv.exists():
        _fail(f"Rooms file not found: {rooms_csv}")
    if config_dir and not config_dir.is_dir():
        _fail(f"Config directory not found: {config_dir}")

    try:
        payload = load_payload(input_file)
        allocator = create_allocator(
            config_dir=config_dir,
            rooms_csv=rooms_csv,
            range_from=range_from,
            range_to=range_to,
        )
        return allocator.allocate(payload)
    except AllocationError as e:
        _fail(str(e))


def _show_summary(result: AllocationResult) -> None:
    """Show a short run summary on stderr."""
    stats = result.statistics
    console.print("\n[bold]Allocation Results:[/bold]")
    console.print(f"  Total queries: {stats.total_queries}")
    console.print(f"  Fixed: {stats.total_fixed}")
    console.print(f"  Newly assigned: {stats.total_assigned}")
    console.print(f"  Unassigned: {stats.total_unassigned}")

    for query in result.unassigned_queries:
        reason = query.reason.value if query.reason else "unknown"
        line = f"#{query.index} [{query.check_in}, {query.check_out}) {reason}"
        console.print(f"    {escape(line)}")

    if result.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(result.warnings)}):[/bold yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]• {escape(warning)}[/yellow]")


@app.command()
def allocate(
    input_file: InputArgument,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    rooms_csv: RoomsOption = None,
    config_dir: ConfigDirOption = None,
    range_from: FromOption = None,
    range_to: ToOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Allocate rooms and write the result payload.

    Without --output the JSON payload is printed to stdout.
    """
    _configure_logging(verbose)

    if output is None and format != OutputFormat.json:
        _fail(f"--output is required for {format.value} format")

    result = _run_allocation(input_file, rooms_csv, config_dir, range_from, range_to)

    if output is None:
        typer.echo(dump_payload(result))
    else:
        exporter = get_exporter(format.value)

        if format == OutputFormat.csv:
            # CSV exports to directory
            output_path = output if output.is_dir() else output.parent / output.stem
        else:
            suffix = ".xlsx" if format == OutputFormat.excel else ".json"
            output_path = output if output.suffix else output.with_suffix(suffix)

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(result, output_path)

        console.print(f"[bold green]✓[/bold green] Exported to: {output_path}")

    if verbose:
        _show_summary(result)


@app.command()
def validate(input_file: InputArgument) -> None:
    """Validate a payload without allocating."""
    _configure_logging(False)
    _check_input(input_file)

    try:
        payload = load_payload(input_file)
    except AllocationError as e:
        _fail(str(e))

    validation = validate_payload(payload)

    if validation["valid"]:
        console.print("[bold green]✓ Payload is valid[/bold green]")
        console.print(f"  Queries: {len(payload['queries'])}")
        console.print(f"  Rooms: {len(payload['rooms'])}")
    else:
        console.print("[bold red]✗ Payload has issues[/bold red]")

    if validation["errors"]:
        console.print(f"\n[bold red]Errors ({len(validation['errors'])}):[/bold red]")
        for error in validation["errors"]:
            console.print(f"  [red]• {escape(str(error))}[/red]")

    if validation["warnings"]:
        console.print(f"\n[bold yellow]Warnings ({len(validation['warnings'])}):[/bold yellow]")
        for warning in validation["warnings"]:
            console.print(f"  [yellow]• {escape(warning)}[/yellow]")

    if not validation["valid"]:
        raise typer.Exit(1)


@app.command()
def stats(
    input_file: InputArgument,
    rooms_csv: RoomsOption = None,
    config_dir: ConfigDirOption = None,
    range_from: FromOption = None,
    range_to: ToOption = None,
) -> None:
    """Run the allocation and show statistics tables."""
    _configure_logging(False)
    result = _run_allocation(input_file, rooms_csv, config_dir, range_from, range_to)
    statistics = result.statistics

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")

    overview_table.add_row("Total Queries", str(statistics.total_queries))
    overview_table.add_row("Fixed", str(statistics.total_fixed))
    overview_table.add_row("Newly Assigned", str(statistics.total_assigned))
    overview_table.add_row("Unassigned", str(statistics.total_unassigned))
    overview_table.add_row("Assignment Rate", f"{statistics.assignment_rate:.1%}")
    overview_table.add_row("Warnings", str(len(result.warnings)))

    console.print(overview_table)

    if statistics.by_room:
        room_table = Table(title="Bookings by Room")
        room_table.add_column("Room", style="cyan")
        room_table.add_column("Bookings", style="green")

        for room, count in statistics.by_room.items():
            room_table.add_row(escape(room), str(count))

        console.print(room_table)

    if statistics.by_reason:
        reason_table = Table(title="Unassigned by Reason")
        reason_table.add_column("Reason", style="cyan")
        reason_table.add_column("Count", style="green")

        for reason, count in sorted(statistics.by_reason.items()):
            reason_table.add_row(reason.replace("_", " ").capitalize(), str(count))

        console.print(reason_table)


if __name__ == "__main__":
    app()
