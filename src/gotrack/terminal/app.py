# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from gotrack import state
from gotrack.repository.configuration import CONFIGURATION_REPO
from gotrack.terminal import configuration, entry, reminder
from gotrack.terminal.custom_typer import OrderedAliasedTyperGroup

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="gotrack - log entries, review statistics and get reminded",
    no_args_is_help=True,
)
app.command(name="log, l")(entry.log)
app.command(name="list, ls")(entry.list_entries)
app.command(name="show, s")(entry.show)
app.command(name="last")(entry.last)
app.command(name="delete, d", no_args_is_help=True)(entry.delete)
app.command(name="stats, st")(entry.stats)
app.command(name="export, x")(entry.export)
app.add_typer(reminder.app, name="reminder, r", help="Reminder checks")
app.add_typer(configuration.app, name="config, c", help="Configuration")


@app.command("serve")
def serve(
    host: Annotated[str, typer.Option("--host")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p")] = 5000,
    debug: Annotated[bool, typer.Option("--debug")] = False,
) -> None:
    """Run the JSON HTTP API."""
    from gotrack.web.app import create_app

    web_app = create_app(CONFIGURATION_REPO.get_config())
    web_app.run(host=host, port=port, debug=debug)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    clear_ids: Annotated[
        bool,
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Renumber entry ids on each listing",
        ),
    ] = False,
) -> None:
    """
    gotrack - log entries, review statistics and get reminded

    Global options that apply to all commands.
    """
    if no_header:
        state.set_show_header(False)
    if clear_ids:
        state.set_clear_ids(True)


def run() -> None:
    app()
