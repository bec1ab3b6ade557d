# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
import pytest

from gotrack import configuration
from gotrack.initialize import initialize
from gotrack.model.entry import Entry
from gotrack.repository import backend
from gotrack.repository.configuration import CONFIGURATION_REPO, ENVIRONMENT_OVERRIDES
from gotrack.repository.entry import ENTRY_REPO
from gotrack.repository.id_map import ID_MAP_REPO


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Point config and data at a temporary directory and reset repositories."""
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_ENTRIES_DIR", data_path / "entries")
    monkeypatch.setattr(configuration, "DATA_ID_MAP_PATH", data_path / "id_map.yaml")
    monkeypatch.setattr(backend, "_supabase_repo", None)
    for variable in ENVIRONMENT_OVERRIDES.values():
        monkeypatch.delenv(variable, raising=False)

    CONFIGURATION_REPO.reset()
    ENTRY_REPO.reset()
    ID_MAP_REPO.reset()
    initialize()
    yield tmp_path
    CONFIGURATION_REPO.reset()
    ENTRY_REPO.reset()
    ID_MAP_REPO.reset()


def make_entry(
    timestamp: pendulum.DateTime,
    id: Optional[str] = None,
    location: str = "Home",
    type: str = "Smooth & soft sausage",
    speed: str = "Fast",
    amount: str = "Normal",
    notes: Optional[str] = None,
    duration_from_last_hours: Optional[float] = None,
) -> Entry:
    return {
        "id": id,
        "timestamp": timestamp,
        "location": location,  # type: ignore[typeddict-item]
        "type": type,  # type: ignore[typeddict-item]
        "speed": speed,  # type: ignore[typeddict-item]
        "amount": amount,  # type: ignore[typeddict-item]
        "notes": notes,
        "duration_from_last_hours": duration_from_last_hours,
        "created": timestamp,
    }


@pytest.fixture
def entry_factory():
    return make_entry
