# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer

from gotrack import state
from gotrack.errors import GotrackError
from gotrack.model.entry import AMOUNTS, LOCATIONS, SPEEDS, STOOL_TYPES, EntityId
from gotrack.model.filter import EntryFilter
from gotrack.query.filter import build_entry_filter
from gotrack.query.paginate import paginate
from gotrack.repository.backend import AnyEntryRepository, get_entry_repository
from gotrack.repository.configuration import CONFIGURATION_REPO
from gotrack.repository.id_map import ID_MAP_REPO
from gotrack.service.entry import build_entry, create_entry, delete_entries
from gotrack.service.export import (
    FULL_COLUMNS,
    RECORD_COLUMNS,
    entries_to_csv,
    export_filename,
)
from gotrack.service.stats import (
    get_day_of_week_counts,
    get_distribution,
    get_hour_of_day_counts,
    get_summary,
)
from gotrack.terminal.parse import parse_datetime, parse_end_datetime, parse_id_list
from gotrack.time import now_utc
from gotrack.view.views import entry as entry_report
from gotrack.view.views import stats as stats_report

RECENT_RECORD_COUNT = 10
DISTRIBUTION_FIELDS = ["type", "speed", "amount", "location"]

StartOption = Annotated[
    Optional[str],
    typer.Option("--start", "-s", help="YYYY-MM-DD, day offset, today, yesterday"),
]
EndOption = Annotated[
    Optional[str],
    typer.Option("--end", "-e", help="YYYY-MM-DD, day offset, today, yesterday"),
]
LocationFilterOption = Annotated[
    Optional[str], typer.Option("--location", "-l", help=", ".join(LOCATIONS))
]
TypeFilterOption = Annotated[
    Optional[str], typer.Option("--type", "-ty", help=", ".join(STOOL_TYPES))
]
SpeedFilterOption = Annotated[
    Optional[str], typer.Option("--speed", "-sp", help=", ".join(SPEEDS))
]
AmountFilterOption = Annotated[
    Optional[str], typer.Option("--amount", "-a", help=", ".join(AMOUNTS))
]


def _repository() -> AnyEntryRepository:
    try:
        return get_entry_repository(CONFIGURATION_REPO.get_config())
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _filter_from_options(
    start: Optional[str],
    end: Optional[str],
    location: Optional[str],
    type: Optional[str],
    speed: Optional[str],
    amount: Optional[str],
) -> EntryFilter:
    config = CONFIGURATION_REPO.get_config()
    return build_entry_filter(
        start=parse_datetime(start),
        end=parse_end_datetime(end),
        location=location,
        type=type,
        speed=speed,
        amount=amount,
        default_days=config["default_range_days"],
    )


def _resolve_id(synthetic_id: int) -> EntityId:
    try:
        return ID_MAP_REPO.get_real_id("entries", synthetic_id)
    except KeyError:
        raise typer.BadParameter(
            f"Unknown id {synthetic_id}; run `gotrack list` to see entry ids"
        )


def log(
    timestamp: Annotated[
        Optional[str],
        typer.Option(
            "--timestamp",
            "-t",
            help="YYYY-MM-DD HH:mm, HH:mm or now (default)",
        ),
    ] = None,
    location: Annotated[
        Optional[str], typer.Option("--location", "-l", help=", ".join(LOCATIONS))
    ] = None,
    type: Annotated[
        Optional[str], typer.Option("--type", "-ty", help=", ".join(STOOL_TYPES))
    ] = None,
    speed: Annotated[
        Optional[str], typer.Option("--speed", "-sp", help=", ".join(SPEEDS))
    ] = None,
    amount: Annotated[
        Optional[str], typer.Option("--amount", "-a", help=", ".join(AMOUNTS))
    ] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
) -> None:
    """Record an entry."""
    repository = _repository()

    entry = build_entry(
        timestamp=parse_datetime(timestamp),
        location=location,
        type=type,
        speed=speed,
        amount=amount,
        notes=notes,
    )

    try:
        new_entry = create_entry(repository, entry)
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    entry_report.single_entry_view(new_entry)


def list_entries(
    start: StartOption = None,
    end: EndOption = None,
    location: LocationFilterOption = None,
    type: TypeFilterOption = None,
    speed: SpeedFilterOption = None,
    amount: AmountFilterOption = None,
    page: Annotated[int, typer.Option("--page", "-p", min=1)] = 1,
    page_size: Annotated[
        Optional[int], typer.Option("--page-size", "-ps", min=1)
    ] = None,
) -> None:
    """List entries, newest first."""
    config = CONFIGURATION_REPO.get_config()
    repository = _repository()
    entry_filter = _filter_from_options(start, end, location, type, speed, amount)

    try:
        entries = repository.query_entries(entry_filter)
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if state.get_clear_ids():
        ID_MAP_REPO.clear_ids()

    entry_report.entries_page_view(
        "entries",
        paginate(entries, page, page_size or config["page_size"]),
    )


def show(id: int) -> None:
    """Show a single entry."""
    repository = _repository()
    try:
        entry = repository.get_entry(_resolve_id(id))
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    entry_report.single_entry_view(entry)


def last() -> None:
    """Show the most recent entry."""
    repository = _repository()
    try:
        entry = repository.get_latest_entry()
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if entry is None:
        typer.echo("No entries yet")
        return
    entry_report.single_entry_view(entry)


def delete(
    id: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Delete without confirmation")
    ] = False,
) -> None:
    """Permanently delete one or more entries (e.g. 3 or 1,4-6)."""
    repository = _repository()
    real_ids = [_resolve_id(synthetic_id) for synthetic_id in parse_id_list(id)]

    if not yes:
        typer.confirm(f"Delete {len(real_ids)} entries?", abort=True)

    try:
        delete_entries(repository, real_ids)
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Deleted {len(real_ids)} entries")


def stats(
    start: StartOption = None,
    end: EndOption = None,
    location: LocationFilterOption = None,
    type: TypeFilterOption = None,
    speed: SpeedFilterOption = None,
    amount: AmountFilterOption = None,
) -> None:
    """Summary statistics and charts for a date range."""
    repository = _repository()
    entry_filter = _filter_from_options(start, end, location, type, speed, amount)

    try:
        entries = repository.query_entries(entry_filter)
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if state.get_clear_ids():
        ID_MAP_REPO.clear_ids()

    stats_report.stats_view(
        get_summary(entries, now_utc()),
        {field: get_distribution(entries, field) for field in DISTRIBUTION_FIELDS},
        get_day_of_week_counts(entries),
        get_hour_of_day_counts(entries),
        entries[:RECENT_RECORD_COUNT],
    )


def export(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Defaults to gotrack-export-<date>.csv"),
    ] = None,
    all: Annotated[
        bool,
        typer.Option("--all", help="Every stored entry and field, ignoring filters"),
    ] = False,
    start: StartOption = None,
    end: EndOption = None,
    location: LocationFilterOption = None,
    type: TypeFilterOption = None,
    speed: SpeedFilterOption = None,
    amount: AmountFilterOption = None,
) -> None:
    """Export entries to a CSV file."""
    repository = _repository()

    try:
        if all:
            csv_text = entries_to_csv(repository.get_all_entries(), FULL_COLUMNS)
        else:
            entry_filter = _filter_from_options(
                start, end, location, type, speed, amount
            )
            csv_text = entries_to_csv(
                repository.query_entries(entry_filter), RECORD_COLUMNS
            )
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output is None:
        output = Path(export_filename(pendulum.today("local").date()))
    output.write_text(csv_text, encoding="utf-8")
    typer.echo(f"Exported to {output}")
