# SPDX-License-Identifier: MIT

from typing import Optional, cast

from rich import box
from rich.console import Console
from rich.table import Table

from gotrack.model.entry import EntityId, Entry
from gotrack.query.paginate import Page
from gotrack.repository.id_map import ID_MAP_REPO
from gotrack.time import datetime_to_display_local_datetime_str_optional
from gotrack.view.views.header import header

DEFAULT_COLUMNS = ["id", "timestamp", "location", "type", "speed", "amount", "gap"]


def format_gap(duration_from_last_hours: Optional[float]) -> str:
    if duration_from_last_hours is None:
        return "-"
    return f"{round(duration_from_last_hours)} hrs"


def entries_view(
    report_name: str,
    entries: list[Entry],
    columns: list[str] = DEFAULT_COLUMNS,
    no_wrap: bool = False,
) -> None:
    """Display list of entries."""
    header(report_name)

    entries_table = Table(box=box.SIMPLE)
    for column in columns:
        if no_wrap and column not in ("id",):
            entries_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            entries_table.add_column(column)

    for entry in entries:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(
                    ID_MAP_REPO.associate_id("entries", cast(EntityId, entry["id"]))
                )
            elif column == "timestamp":
                column_value = (
                    datetime_to_display_local_datetime_str_optional(entry["timestamp"])
                    or ""
                )
            elif column == "gap":
                column_value = format_gap(entry["duration_from_last_hours"])
            elif entry.get(column) is not None:
                column_value = str(entry[column])  # type: ignore[literal-required]
            row.append(column_value)
        entries_table.add_row(*row)

    console = Console()
    console.print(entries_table)


def entries_page_view(report_name: str, page: Page[Entry]) -> None:
    entries_view(report_name, page["items"])

    console = Console()
    console.print(
        f" page {page['page']} of {page['total_pages']} "
        f"({page['total_items']} entries)",
        style="dim",
    )


def single_entry_view(entry: Entry) -> None:
    """Display detailed view of a single entry."""
    header("entry")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row(
        "id",
        str(ID_MAP_REPO.associate_id("entries", cast(EntityId, entry["id"]))),
    )
    entry_table.add_row(
        "timestamp",
        datetime_to_display_local_datetime_str_optional(entry["timestamp"]) or "",
    )
    entry_table.add_row("location", entry["location"])
    entry_table.add_row("type", entry["type"])
    entry_table.add_row("speed", entry["speed"])
    entry_table.add_row("amount", entry["amount"])
    entry_table.add_row("notes", entry["notes"] or "")
    duration = entry["duration_from_last_hours"]
    entry_table.add_row(
        "hours since previous", "" if duration is None else f"{duration:.2f}"
    )
    entry_table.add_row(
        "created", datetime_to_display_local_datetime_str_optional(entry["created"])
    )

    console = Console()
    console.print(entry_table)
