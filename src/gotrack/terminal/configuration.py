# SPDX-License-Identifier: MIT

from typing import Any

import typer
from rich.console import Console
from rich.table import Table
from yaml import YAMLError, safe_load

from gotrack import configuration
from gotrack.repository.configuration import CONFIGURATION_REPO
from gotrack.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

SECRET_KEYS = ("supabase_key", "app_password", "secret_key", "reminder_token")


def _display_value(key: str, value: Any) -> str:
    if value is None:
        return "None"
    if key in SECRET_KEYS:
        return "********"
    if isinstance(value, bool):
        return "✓ Enabled" if value else "✗ Disabled"
    if isinstance(value, list):
        return ", ".join(f"{item:g}" if isinstance(item, float) else str(item) for item in value)
    return str(value)


@app.command("show, v")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    for key, value in config.items():
        if key == "data_path":
            table.add_row(key, str(configuration.DATA_PATH))
        else:
            table.add_row(key, _display_value(key, value))

    console.print(table)
    console.print()
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")


@app.command("set, s", no_args_is_help=True)
def set_value(key: str, value: str) -> None:
    """
    Update a setting. VALUE is read as YAML, so `72,96` is text while
    `[72, 96]` is a list and `null` clears the setting.
    """
    try:
        parsed_value = safe_load(value)
    except YAMLError as e:
        raise typer.BadParameter(f"Could not parse value: {e}")

    if key == "reminder_thresholds":
        if not isinstance(parsed_value, list) or len(parsed_value) == 0:
            raise typer.BadParameter("reminder_thresholds must be a non-empty list")
        if any(
            not isinstance(item, (int, float)) or item <= 0 for item in parsed_value
        ):
            raise typer.BadParameter("reminder_thresholds must be positive numbers")
    if key == "backend" and parsed_value not in ("local", "supabase"):
        raise typer.BadParameter("backend must be local or supabase")

    try:
        CONFIGURATION_REPO.update_config(key, parsed_value)
    except KeyError:
        raise typer.BadParameter(f"Unknown setting: {key}")

    typer.echo(f"{key} updated")
