# SPDX-License-Identifier: MIT


class GotrackError(Exception):
    """Base class for errors surfaced to the CLI and the HTTP API."""

    pass


class EntryValidationError(GotrackError):
    """Raised when entry validation fails."""

    pass


class DatastoreError(GotrackError):
    """Raised when the datastore cannot be read or written."""

    pass


class NotificationError(GotrackError):
    """Raised when the reminder webhook does not accept a notification."""

    pass


class ExportError(GotrackError):
    pass


class ConfigurationError(GotrackError):
    pass


class RequestParameterError(GotrackError):
    """Raised when an HTTP query parameter cannot be parsed."""

    pass
