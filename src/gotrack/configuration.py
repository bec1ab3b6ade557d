# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "gotrack"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ENTRIES_DIR: Path = DATA_PATH / "entries"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"

BackendType = Literal["local", "supabase"]

DEFAULT_REMINDER_THRESHOLDS: list[float] = [72, 96, 120, 144]


class Configuration(TypedDict):
    data_path: Optional[str]
    backend: BackendType
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    supabase_table: str
    reminder_thresholds: list[float]
    reminder_window_hours: float
    # Subtracted from raw elapsed hours to compensate for a known timezone
    # mismatch in the stored timestamps.
    timezone_correction_hours: float
    reminder_token: Optional[str]
    webhook_url: Optional[str]
    webhook_timeout_seconds: float
    app_password: Optional[str]
    secret_key: Optional[str]
    page_size: int
    default_range_days: int
    show_header: bool
    clear_ids_on_view: bool
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "backend": "local",
        "supabase_url": None,
        "supabase_key": None,
        "supabase_table": "gos",
        "reminder_thresholds": list(DEFAULT_REMINDER_THRESHOLDS),
        "reminder_window_hours": 1.0,
        "timezone_correction_hours": 0.0,
        "reminder_token": None,
        "webhook_url": None,
        "webhook_timeout_seconds": 10.0,
        "app_password": None,
        "secret_key": None,
        "page_size": 10,
        "default_range_days": 30,
        "show_header": True,
        "clear_ids_on_view": True,
        "log_level": "INFO",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are used.
    """
    global DATA_PATH, DATA_ENTRIES_DIR, DATA_ID_MAP_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_ENTRIES_DIR = DATA_PATH / "entries"
        DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"
