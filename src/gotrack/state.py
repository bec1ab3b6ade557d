# SPDX-License-Identifier: MIT

"""Display options for the current CLI invocation."""

from contextvars import ContextVar

# Print the gotrack banner above reports
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)

# Renumber the short entry ids every time a listing is printed
_clear_ids: ContextVar[bool] = ContextVar("clear_ids", default=True)


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()


def set_clear_ids(value: bool) -> None:
    _clear_ids.set(value)


def get_clear_ids() -> bool:
    return _clear_ids.get()


def apply_display_configuration(show_header: bool, clear_ids_on_view: bool) -> None:
    set_show_header(show_header)
    set_clear_ids(clear_ids_on_view)
