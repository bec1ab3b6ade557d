# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

import pendulum

SECONDS_PER_HOUR = 3600


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    """Parse an ISO 8601 string; naive values are read as UTC."""
    return cast(pendulum.DateTime, pendulum.parse(datetime)).in_tz("UTC")


def datetime_from_str_local(datetime: str) -> pendulum.DateTime:
    """Parse a string typed by the user in local time and convert it to UTC."""
    pendulum_date_time = cast(pendulum.DateTime, pendulum.parse(datetime, tz="local"))
    return pendulum_date_time.in_tz("UTC")


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd h:mm A")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def hours_between(later: datetime.datetime, earlier: datetime.datetime) -> float:
    """Signed number of hours from `earlier` to `later`."""
    return (later.timestamp() - earlier.timestamp()) / SECONDS_PER_HOUR
