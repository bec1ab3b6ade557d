# SPDX-License-Identifier: MIT

import secrets

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from gotrack import configuration, state
from gotrack.log_config import configure_logging
from gotrack.repository.configuration import CONFIGURATION_REPO


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    configuration.DATA_ENTRIES_DIR.mkdir(parents=True, exist_ok=True)

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    state.apply_display_configuration(
        config["show_header"], config["clear_ids_on_view"]
    )


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        # Signs the HTTP API session cookie
        config["secret_key"] = secrets.token_hex(32)
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))
