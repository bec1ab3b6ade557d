# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from gotrack.model.entry import EntityId

IdMapEntityType = Literal["entries"]


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]


class IdMap(TypedDict):
    """
    Maps the short row numbers printed by the CLI to real entity ids.

    Example: entry with id "9f1c...", shown as row 3.

    real_entry_id = id_map["entries"]["synthetic_to_real"][3]  # "9f1c..."
    """

    entries: IdMapMapping
