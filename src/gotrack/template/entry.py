# SPDX-License-Identifier: MIT

from gotrack.model.entry import Entry
from gotrack.time import now_utc


def get_entry_template() -> Entry:
    now = now_utc()
    return {
        "id": None,
        "timestamp": now,
        "location": "Home",
        "type": "Smooth & soft sausage",
        "speed": "Fast",
        "amount": "Normal",
        "notes": None,
        "duration_from_last_hours": None,
        "created": now,
    }
