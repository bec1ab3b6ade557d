# SPDX-License-Identifier: MIT

import re
from typing import Callable, Optional

import pendulum
import typer

from gotrack.time import datetime_from_str_local

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")
DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CLOCK_PATTERN = re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})$")
DAY_OFFSET_PATTERN = re.compile(r"^-?\d+$")
ID_RANGE_PATTERN = re.compile(r"^(?P<start>\d+)\s*-\s*(?P<end>\d+)$")

# Keywords naming a whole local day
DAY_KEYWORDS: dict[str, Callable[[], pendulum.DateTime]] = {
    "today": lambda: pendulum.today("local"),
    "t": lambda: pendulum.today("local"),
    "yesterday": lambda: pendulum.yesterday("local"),
    "y": lambda: pendulum.yesterday("local"),
}


def _local_day(value: str) -> Optional[pendulum.DateTime]:
    """Start of the local day named by a keyword or day offset, if it is one."""
    if value in DAY_KEYWORDS:
        return DAY_KEYWORDS[value]().start_of("day")
    if DAY_OFFSET_PATTERN.match(value):
        return pendulum.today("local").add(days=int(value)).start_of("day")
    return None


def parse_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """
    Read a user-typed moment as a UTC instant.

    Accepts `YYYY-MM-DD[ HH:mm[:ss]]` in local time, `HH:mm` today, a day
    offset such as `-2`, `today`/`t`, `yesterday`/`y` and `now`/`n`.
    """
    if datetime_param is None:
        return None

    value = str(datetime_param).strip()

    if value in ("now", "n"):
        return pendulum.now("UTC")

    if DATE_PATTERN.match(value):
        try:
            return datetime_from_str_local(value)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid datetime: {e}")

    clock = CLOCK_PATTERN.match(value)
    if clock:
        hour = int(clock.group("hour"))
        minute = int(clock.group("minute"))
        if hour > 23 or minute > 59:
            raise typer.BadParameter(f"Invalid time of day: {value}")
        return (
            pendulum.today("local")
            .set(hour=hour, minute=minute, second=0, microsecond=0)
            .in_tz("UTC")
        )

    day = _local_day(value)
    if day is not None:
        return day.in_tz("UTC")

    raise typer.BadParameter(f"Incorrect datetime format: {value}")


def parse_end_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """
    Like parse_datetime, but a bare date, day offset or day keyword means the
    end of that local day so the range includes it.
    """
    if datetime_param is None:
        return None

    value = str(datetime_param).strip()
    day = _local_day(value)
    if day is not None:
        return day.end_of("day").in_tz("UTC")

    parsed = parse_datetime(value)
    if parsed is not None and DATE_ONLY_PATTERN.match(value):
        return parsed.in_tz("local").end_of("day").in_tz("UTC")
    return parsed


def parse_id_list(id_param: str) -> list[int]:
    """
    Expand `3`, `1,4` or `2-5,9` into sorted, distinct row ids.

    Raises typer.BadParameter on anything that is not an id or a range.
    """
    ids: set[int] = set()
    for part in (part.strip() for part in id_param.split(",")):
        if part == "":
            continue
        if part.isdigit():
            ids.add(int(part))
            continue
        id_range = ID_RANGE_PATTERN.match(part)
        if id_range is None:
            raise typer.BadParameter(f"Invalid id or range: '{part}'")
        start = int(id_range.group("start"))
        end = int(id_range.group("end"))
        if start > end:
            raise typer.BadParameter(f"Invalid range: '{part}' (start must be <= end)")
        ids.update(range(start, end + 1))

    if len(ids) == 0:
        raise typer.BadParameter("No valid IDs provided")
    return sorted(ids)
