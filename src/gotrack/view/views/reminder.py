# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from gotrack.service.reminder import ReminderOutcome
from gotrack.service.stats import format_elapsed
from gotrack.time import datetime_to_display_local_datetime_str_optional
from gotrack.view.views.header import header

STATUS_MESSAGES = {
    "notified": "[green]reminder sent[/green]",
    "crossed": "[yellow]threshold crossed, nothing sent[/yellow]",
    "no_action": "no reminder needed",
    "no_data": "no entries found",
}


def reminder_outcome_view(outcome: ReminderOutcome) -> None:
    header("reminder")

    reminder_table = Table(box=box.SIMPLE)
    reminder_table.add_column("property")
    reminder_table.add_column("value")

    reminder_table.add_row("status", STATUS_MESSAGES[outcome["status"]])
    reminder_table.add_row(
        "last entry",
        datetime_to_display_local_datetime_str_optional(outcome["last_timestamp"])  # type: ignore[arg-type]
        or "",
    )
    elapsed_hours = outcome["elapsed_hours"]
    reminder_table.add_row(
        "elapsed",
        ""
        if elapsed_hours is None
        else f"{elapsed_hours:.2f} hours ({format_elapsed(elapsed_hours)})",
    )
    threshold = outcome["threshold"]
    reminder_table.add_row("threshold", "" if threshold is None else f"{threshold:g} hours")

    console = Console()
    console.print(reminder_table)
