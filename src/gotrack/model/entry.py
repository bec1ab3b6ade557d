# SPDX-License-Identifier: MIT

import uuid
from typing import Literal, Optional, TypeAlias, TypedDict, get_args

import pendulum

EntityId: TypeAlias = str

Location = Literal["Home", "Hotel", "Other"]

# Bristol stool scale, types 1 through 7
StoolType = Literal[
    "Small hard lumps",
    "Hard sausage",
    "Sausage with cracks",
    "Smooth & soft sausage",
    "Soft pieces",
    "Fluffy pieces",
    "Watery",
]

Speed = Literal["Fast", "Slow"]

Amount = Literal["Little", "Normal", "Monstrous"]

LOCATIONS: tuple[str, ...] = get_args(Location)
STOOL_TYPES: tuple[str, ...] = get_args(StoolType)
SPEEDS: tuple[str, ...] = get_args(Speed)
AMOUNTS: tuple[str, ...] = get_args(Amount)

CATEGORY_FIELDS: dict[str, tuple[str, ...]] = {
    "location": LOCATIONS,
    "type": STOOL_TYPES,
    "speed": SPEEDS,
    "amount": AMOUNTS,
}


class Entry(TypedDict):
    id: Optional[EntityId]
    timestamp: pendulum.DateTime  # Sole ordering key
    location: Location
    type: StoolType
    speed: Speed
    amount: Amount
    notes: Optional[str]

    # Hours since the latest stored entry at write time, never recomputed
    duration_from_last_hours: Optional[float]

    created: pendulum.DateTime


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())
