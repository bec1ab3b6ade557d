# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class EntryFilter(TypedDict):
    start: Optional[pendulum.DateTime]  # inclusive
    end: Optional[pendulum.DateTime]  # inclusive
    location: Optional[str]
    type: Optional[str]
    speed: Optional[str]
    amount: Optional[str]
