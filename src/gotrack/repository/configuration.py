# SPDX-License-Identifier: MIT

import os
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from gotrack import configuration

# Environment variables take precedence over the config file
ENVIRONMENT_OVERRIDES: dict[str, str] = {
    "backend": "GOTRACK_BACKEND",
    "supabase_url": "SUPABASE_URL",
    "supabase_key": "SUPABASE_SERVICE_ROLE_KEY",
    "webhook_url": "GOTRACK_WEBHOOK_URL",
    "app_password": "GOTRACK_APP_PASSWORD",
    "secret_key": "GOTRACK_SECRET_KEY",
    "reminder_token": "GOTRACK_REMINDER_TOKEN",
    "log_level": "GOTRACK_LOG_LEVEL",
}


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Fill in keys added after the config file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        config = deepcopy(self.config)
        for key, variable in ENVIRONMENT_OVERRIDES.items():
            value = os.environ.get(variable)
            if value:
                config[key] = value  # type: ignore[literal-required]
        return config

    def update_config(self, key: str, value: Any) -> None:
        if key not in configuration.get_default_configuration():
            raise KeyError(key)
        self.is_dirty = True
        cast(dict[str, Any], self.config)[key] = value


CONFIGURATION_REPO = ConfigurationRepository()
