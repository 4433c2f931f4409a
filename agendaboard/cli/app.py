"""
Main CLI application using Typer.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.json_store import JsonFileStore
from ..config import AppConfig
from ..domain.exceptions import AgendaError, BlockConflictError
from ..domain.models import (
    BlockDraft,
    BlockUpdate,
    DurationBreakdown,
    format_date,
    format_time_of_day,
    parse_date,
    parse_time_of_day,
)
from ..logging_config import configure_logging
from ..services.blocks import BlockService
from ..services.catalog import CatalogService
from ..services.reports import ReportService

app = typer.Typer(
    name="agendaboard",
    help="Schedule blocks per professional and report normal and overtime hours",
    add_completion=False
)
blocks_app = typer.Typer(help="List, add, update and delete schedule blocks", add_completion=False)
professionals_app = typer.Typer(help="Manage professionals", add_completion=False)
requesters_app = typer.Typer(help="Manage requesters", add_completion=False)

app.add_typer(blocks_app, name="blocks")
app.add_typer(professionals_app, name="professionals")
app.add_typer(requesters_app, name="requesters")

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


def _format_minutes(minutes: int) -> str:
    """Format a minute count as hours, e.g. 540 -> 9h00."""
    hours, mins = divmod(minutes, 60)
    return f"{hours}h{mins:02d}"


@contextmanager
def _reported_errors():
    """Print application errors and exit with a non-zero status."""
    try:
        yield
    except BlockConflictError as e:
        console.print(f"[bold red]Conflict:[/bold red] {escape(str(e))}")
        for block in e.conflicts:
            console.print(f"  #{block.id} {block.interval} {escape(block.job_name or '')}")
        raise typer.Exit(2)
    except (AgendaError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def _open_agenda(config_file: Optional[Path]):
    """Load configuration, set up logging and open the configured store."""
    config = AppConfig.load_or_default(config_file)
    configure_logging(config.get_log_level())

    store = JsonFileStore(config.data_file)
    if config.seed_defaults:
        CatalogService(store).ensure_seeded()

    return config, store


def _print_breakdown(breakdown: DurationBreakdown) -> None:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Total", justify="right")
    table.add_column("Normal", justify="right", style="green")
    table.add_column("Overtime", justify="right", style="yellow")
    table.add_row(
        _format_minutes(breakdown.total),
        _format_minutes(breakdown.normal),
        _format_minutes(breakdown.overtime),
    )
    console.print(table)


@app.command()
def durations(
    start: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    end: Annotated[str, typer.Argument(help="End time (HH:MM)")],
):
    """
    Show how an interval splits into normal and overtime minutes.

    Overtime windows are 07:00-10:00 and 19:00-23:00.
    """
    with _reported_errors():
        breakdown = BlockService.calc_durations(start, end)

    console.print(f"\n[bold]{start} - {end}[/bold]")
    _print_breakdown(breakdown)
    console.print(
        f"total={breakdown.total} normal={breakdown.normal} overtime={breakdown.overtime}\n"
    )


# ─── Blocks ──────────────────────────────────────────────────────────────────

@blocks_app.command("list")
def list_blocks(
    date: Annotated[Optional[str], typer.Argument(help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: ConfigOption = None,
):
    """
    List the blocks scheduled on a date.
    """
    with _reported_errors():
        config, store = _open_agenda(config_file)
        day = parse_date(date) if date else config.today()
        blocks = BlockService(store).list_blocks(day)
        professionals = {p.id: p.name for p in store.list_professionals(include_inactive=True)}
        types = {t.id: t.name for t in store.list_activity_types()}

    if not blocks:
        console.print(f"[yellow]No blocks on {format_date(day)}.[/yellow]")
        return

    table = Table(
        title=f"Agenda {format_date(day)}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("ID", justify="right")
    table.add_column("Professional", style="bold yellow")
    table.add_column("Time")
    table.add_column("Job")
    table.add_column("Type", style="dim")
    table.add_column("Normal", justify="right", style="green")
    table.add_column("Overtime", justify="right", style="yellow")

    for block in blocks:
        job = " ".join(part for part in (block.job_number, block.job_name) if part)
        table.add_row(
            str(block.id),
            escape(professionals.get(block.professional_id, f"Prof. {block.professional_id}")),
            str(block.interval),
            escape(job),
            escape(types.get(block.activity_type_id, "")),
            _format_minutes(block.duration_normal_min),
            _format_minutes(block.duration_overtime_min),
        )

    console.print()
    console.print(table)
    console.print()


@blocks_app.command("add")
def add_block(
    professional: Annotated[int, typer.Option("--professional", "-p", help="Professional id")],
    start: Annotated[str, typer.Option("--start", help="Start time (HH:MM)")],
    end: Annotated[str, typer.Option("--end", help="End time (HH:MM)")],
    date: Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    job_number: Annotated[Optional[str], typer.Option("--job-number", help="Job identifier")] = None,
    job_name: Annotated[Optional[str], typer.Option("--job-name", help="Job name")] = None,
    requester: Annotated[Optional[int], typer.Option("--requester", "-r", help="Requester id")] = None,
    activity_type: Annotated[Optional[int], typer.Option("--type", "-t", help="Activity type id")] = None,
    description: Annotated[Optional[str], typer.Option("--description", help="Free text")] = None,
    color: Annotated[Optional[str], typer.Option("--color", help="Display color")] = None,
    config_file: ConfigOption = None,
):
    """
    Schedule a new block for a professional.

    Examples:

        agendaboard blocks add -p 1 --date 2024-11-25 --start 08:00 --end 12:00 --job-name Edit
    """
    with _reported_errors():
        config, store = _open_agenda(config_file)
        draft = BlockDraft(
            professional_id=professional,
            date=parse_date(date) if date else config.today(),
            start_time=parse_time_of_day(start),
            end_time=parse_time_of_day(end),
            activity_type_id=activity_type,
            requester_id=requester,
            job_number=job_number,
            job_name=job_name,
            description=description,
            color=color,
        )
        block = BlockService(store).create_block(draft)

    console.print(
        f"[green]✓ Block #{block.id} scheduled on {format_date(block.date)} "
        f"{block.interval}[/green]"
    )
    _print_breakdown(block.durations)


@blocks_app.command("update")
def update_block(
    block_id: Annotated[int, typer.Argument(help="Block id")],
    professional: Annotated[Optional[int], typer.Option("--professional", "-p", help="Professional id")] = None,
    date: Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD)")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start time (HH:MM)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End time (HH:MM)")] = None,
    job_number: Annotated[Optional[str], typer.Option("--job-number", help="Job identifier")] = None,
    job_name: Annotated[Optional[str], typer.Option("--job-name", help="Job name")] = None,
    requester: Annotated[Optional[int], typer.Option("--requester", "-r", help="Requester id")] = None,
    activity_type: Annotated[Optional[int], typer.Option("--type", "-t", help="Activity type id")] = None,
    description: Annotated[Optional[str], typer.Option("--description", help="Free text")] = None,
    color: Annotated[Optional[str], typer.Option("--color", help="Display color")] = None,
    config_file: ConfigOption = None,
):
    """
    Change some fields of a block. Durations follow the new times.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        update = BlockUpdate(
            professional_id=professional,
            date=parse_date(date) if date else None,
            start_time=parse_time_of_day(start) if start else None,
            end_time=parse_time_of_day(end) if end else None,
            activity_type_id=activity_type,
            requester_id=requester,
            job_number=job_number,
            job_name=job_name,
            description=description,
            color=color,
        )
        block = BlockService(store).update_block(block_id, update)

    console.print(
        f"[green]✓ Block #{block.id} now on {format_date(block.date)} {block.interval}[/green]"
    )
    _print_breakdown(block.durations)


@blocks_app.command("delete")
def delete_block(
    block_id: Annotated[int, typer.Argument(help="Block id")],
    config_file: ConfigOption = None,
):
    """
    Delete a block permanently.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        BlockService(store).delete_block(block_id)

    console.print(f"[green]✓ Block #{block_id} deleted.[/green]")


# ─── Catalog ─────────────────────────────────────────────────────────────────

@professionals_app.command("list")
def list_professionals(config_file: ConfigOption = None):
    """
    List active professionals in board column order.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        professionals = CatalogService(store).list_professionals()

    if not professionals:
        console.print("[yellow]No professionals configured.[/yellow]")
        return

    table = Table(title="Professionals", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Name", style="bold yellow")
    table.add_column("Group", style="dim")
    table.add_column("Color", style="dim")

    for professional in professionals:
        table.add_row(
            str(professional.id),
            str(professional.column_order),
            escape(professional.name),
            professional.group_label,
            professional.color,
        )

    console.print()
    console.print(table)
    console.print()


@professionals_app.command("add")
def add_professional(
    name: Annotated[str, typer.Argument(help="Display name")],
    column_order: Annotated[int, typer.Option("--column", help="Board column (1-20)")],
    color: Annotated[Optional[str], typer.Option("--color", help="Display color")] = None,
    config_file: ConfigOption = None,
):
    """
    Add a professional to the board.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        professional = CatalogService(store).create_professional(name, column_order, color)

    console.print(f"[green]✓ Professional #{professional.id} {escape(professional.name)} added.[/green]")


@professionals_app.command("update")
def update_professional(
    professional_id: Annotated[int, typer.Argument(help="Professional id")],
    name: Annotated[Optional[str], typer.Option("--name", help="Display name")] = None,
    column_order: Annotated[Optional[int], typer.Option("--column", help="Board column (1-20)")] = None,
    color: Annotated[Optional[str], typer.Option("--color", help="Display color")] = None,
    config_file: ConfigOption = None,
):
    """
    Rename, move or recolor a professional.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        professional = CatalogService(store).update_professional(
            professional_id, name=name, column_order=column_order, color=color
        )

    console.print(f"[green]✓ Professional #{professional.id} {escape(professional.name)} updated.[/green]")


@professionals_app.command("remove")
def remove_professional(
    professional_id: Annotated[int, typer.Argument(help="Professional id")],
    config_file: ConfigOption = None,
):
    """
    Hide a professional from the board. Their blocks are kept.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        CatalogService(store).delete_professional(professional_id)

    console.print(f"[green]✓ Professional #{professional_id} removed.[/green]")


@requesters_app.command("list")
def list_requesters(config_file: ConfigOption = None):
    """
    List active requesters.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        requesters = CatalogService(store).list_requesters()

    if not requesters:
        console.print("[yellow]No requesters configured.[/yellow]")
        return

    table = Table(title="Requesters", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold yellow")
    for requester in requesters:
        table.add_row(str(requester.id), escape(requester.name))

    console.print()
    console.print(table)
    console.print()


@requesters_app.command("add")
def add_requester(
    name: Annotated[str, typer.Argument(help="Requester name")],
    config_file: ConfigOption = None,
):
    """
    Add a requester.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        requester = CatalogService(store).create_requester(name)

    console.print(f"[green]✓ Requester #{requester.id} {escape(requester.name)} added.[/green]")


@requesters_app.command("remove")
def remove_requester(
    requester_id: Annotated[int, typer.Argument(help="Requester id")],
    config_file: ConfigOption = None,
):
    """
    Deactivate a requester.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        CatalogService(store).delete_requester(requester_id)

    console.print(f"[green]✓ Requester #{requester_id} removed.[/green]")


@app.command()
def activity_types(config_file: ConfigOption = None):
    """
    List activity types.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        types = CatalogService(store).list_activity_types()

    table = Table(title="Activity types", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold yellow")
    table.add_column("Color", style="dim")
    for activity_type in types:
        table.add_row(str(activity_type.id), escape(activity_type.name), activity_type.color)

    console.print()
    console.print(table)
    console.print()


# ─── Reports ─────────────────────────────────────────────────────────────────

@app.command()
def report(
    year: Annotated[int, typer.Argument(help="Year (2020-2100)")],
    month: Annotated[int, typer.Argument(help="Month (1-12)")],
    professional: Annotated[Optional[int], typer.Option("--professional", "-p", help="Only this professional")] = None,
    entries: Annotated[bool, typer.Option("--entries", help="Also list every block")] = False,
    config_file: ConfigOption = None,
):
    """
    Monthly hour report per professional.
    """
    with _reported_errors():
        _, store = _open_agenda(config_file)
        monthly = ReportService(store).monthly(year, month, professional)

    if not monthly.summary:
        console.print(f"[yellow]No blocks in {year}-{month:02d}.[/yellow]")
        return

    table = Table(
        title=f"Hours {year}-{month:02d}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Professional", style="bold yellow")
    table.add_column("Total", justify="right")
    table.add_column("Normal", justify="right", style="green")
    table.add_column("Overtime", justify="right", style="yellow")
    table.add_column("By type", style="dim")

    for summary in monthly.summary:
        by_type = ", ".join(
            f"{escape(item.type_name)} {_format_minutes(item.total_min)}"
            for item in summary.by_type.values()
        )
        table.add_row(
            escape(summary.professional_name),
            _format_minutes(summary.total_min),
            _format_minutes(summary.normal_min),
            _format_minutes(summary.overtime_min),
            by_type,
        )

    console.print()
    console.print(table)

    if entries:
        for summary in monthly.summary:
            console.print(f"\n[bold]{escape(summary.professional_name)}[/bold]")
            for block in summary.entries:
                console.print(
                    f"  {format_date(block.date)} {format_time_of_day(block.start_time)}-"
                    f"{format_time_of_day(block.end_time)} "
                    f"{_format_minutes(block.duration_total_min)} "
                    f"{escape(block.description or '')}"
                )

    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]agendaboard[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
