# SPDX-License-Identifier: MIT

from typing import get_args

from gotrack.model.id_map import IdMap, IdMapEntityType, IdMapMapping


def get_empty_mapping() -> IdMapMapping:
    return {"synthetic_to_real": {}, "real_to_synthetic": {}}


def get_id_map_template() -> IdMap:
    """An id map with no synthetic ids handed out yet."""
    return {
        entity_type: get_empty_mapping()  # type: ignore[misc]
        for entity_type in get_args(IdMapEntityType)
    }
