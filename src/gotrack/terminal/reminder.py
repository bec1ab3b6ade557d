# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer

from gotrack.errors import GotrackError
from gotrack.repository.backend import get_entry_repository
from gotrack.repository.configuration import CONFIGURATION_REPO
from gotrack.service.notify import build_notifier
from gotrack.service.reminder import run_reminder_check
from gotrack.terminal.custom_typer import AliasedTyperGroup
from gotrack.view.views.reminder import reminder_outcome_view

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("check, c")
def check(
    hours: Annotated[
        Optional[float],
        typer.Option(
            "--hours",
            "-hr",
            help="Evaluate this many elapsed hours instead of reading the last entry",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Evaluate without sending the webhook"),
    ] = False,
) -> None:
    """
    Notify the webhook if the time since the last entry just crossed a
    reminder threshold. Meant to run from cron once per reminder window.
    """
    config = CONFIGURATION_REPO.get_config()

    notifier = None
    if not dry_run:
        notifier = build_notifier(config)
        if notifier is None:
            logger.warning("No webhook_url configured, reminders will not be sent")

    try:
        outcome = run_reminder_check(
            get_entry_repository(config),
            notifier,
            config["reminder_thresholds"],
            timezone_correction_hours=config["timezone_correction_hours"],
            window_hours=config["reminder_window_hours"],
            override_hours=hours,
        )
    except GotrackError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    reminder_outcome_view(outcome)
