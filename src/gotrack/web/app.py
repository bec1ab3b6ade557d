# SPDX-License-Identifier: MIT

import datetime
import hmac
import logging
import math
import secrets
from typing import Any, Mapping, Optional

import pendulum
from flask import Flask, Response, jsonify, request, session
from werkzeug.exceptions import HTTPException

from gotrack.cleanup import flush_and_sync
from gotrack.configuration import Configuration
from gotrack.errors import (
    ConfigurationError,
    DatastoreError,
    EntryValidationError,
    ExportError,
    GotrackError,
    NotificationError,
    RequestParameterError,
)
from gotrack.model.filter import EntryFilter
from gotrack.query.filter import build_entry_filter
from gotrack.query.paginate import paginate
from gotrack.repository.backend import AnyEntryRepository, get_entry_repository
from gotrack.repository.configuration import CONFIGURATION_REPO
from gotrack.service.entry import create_entry, delete_entries, entry_from_payload
from gotrack.service.export import (
    FULL_COLUMNS,
    RECORD_COLUMNS,
    entries_to_csv,
    export_filename,
)
from gotrack.service.notify import build_notifier
from gotrack.service.rate_limit import LoginRateLimiter
from gotrack.service.reminder import run_reminder_check
from gotrack.service.stats import (
    get_day_of_week_counts,
    get_distribution,
    get_hour_of_day_counts,
    get_summary,
)
from gotrack.time import datetime_from_str, now_utc
from gotrack.web.serialize import (
    day_of_week_to_json,
    entry_to_json,
    hour_of_day_to_json,
    optional_entry_to_json,
    reminder_outcome_to_json,
    summary_to_json,
)

logger = logging.getLogger(__name__)

SESSION_LIFETIME = datetime.timedelta(days=365)
RECENT_RECORD_COUNT = 10
DISTRIBUTION_FIELDS = ["type", "speed", "amount", "location"]

PUBLIC_PATHS = ("/api/auth",)
TOKEN_PATHS = ("/api/reminder/check",)

ERROR_STATUS: dict[type[GotrackError], int] = {
    EntryValidationError: 400,
    DatastoreError: 400,
    ExportError: 400,
    RequestParameterError: 400,
    NotificationError: 500,
    ConfigurationError: 500,
}


def get_client_id(headers: Any) -> str:
    """Identify a client by the first forwarded address, then the real ip header."""
    forwarded = headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return "unknown"


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"success": False, "error": message}), status


def _success(data: Any = None) -> Response:
    if data is None:
        return jsonify({"success": True})
    return jsonify({"success": True, "data": data})


def _datetime_arg(name: str) -> Optional[pendulum.DateTime]:
    value = request.args.get(name)
    if not value:
        return None
    try:
        return datetime_from_str(value)
    except ValueError as e:
        raise RequestParameterError(f"Invalid {name}: {value!r}") from e


def _int_arg(name: str, default: int) -> int:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise RequestParameterError(f"Invalid {name}: {value!r}") from e


def _float_arg(name: str) -> Optional[float]:
    value = request.args.get(name)
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except ValueError as e:
        raise RequestParameterError(f"Invalid {name}: {value!r}") from e
    if not math.isfinite(number):
        raise RequestParameterError(f"Invalid {name}: {value!r}")
    return number


def _lockout_error(minutes: Optional[int]) -> tuple[Response, int]:
    return _error(
        "Too many failed attempts. "
        f"Please try again in {minutes} minute{'' if minutes == 1 else 's'}.",
        429,
    )


def _bool_arg(name: str) -> bool:
    return request.args.get(name, "").lower() in ("1", "true", "yes")


def create_app(
    config: Optional[Configuration] = None,
    rate_limiter: Optional[LoginRateLimiter] = None,
) -> Flask:
    """
    Build the JSON API.

    Every `/api/*` route except login requires a session cookie. The reminder
    check also accepts `?token=` so a scheduler can call it without logging in.
    """
    if config is None:
        config = CONFIGURATION_REPO.get_config()
    limiter = rate_limiter if rate_limiter is not None else LoginRateLimiter()

    app = Flask(__name__)
    app.secret_key = config["secret_key"] or secrets.token_hex(32)
    app.config["PERMANENT_SESSION_LIFETIME"] = SESSION_LIFETIME
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    if not config["secret_key"]:
        logger.warning("No secret_key configured, sessions end when the server stops")

    def repository() -> AnyEntryRepository:
        return get_entry_repository(config)

    def entry_filter_from_args() -> EntryFilter:
        return build_entry_filter(
            start=_datetime_arg("start"),
            end=_datetime_arg("end"),
            location=request.args.get("location"),
            type=request.args.get("type"),
            speed=request.args.get("speed"),
            amount=request.args.get("amount"),
            default_days=config["default_range_days"],
        )

    def has_valid_token() -> bool:
        expected = config["reminder_token"]
        token = request.args.get("token")
        if not expected or not token:
            return False
        return hmac.compare_digest(token.encode(), expected.encode())

    @app.before_request
    def require_authentication():
        if not request.path.startswith("/api/") or request.path in PUBLIC_PATHS:
            return None
        if session.get("authenticated"):
            return None
        if request.path in TOKEN_PATHS and has_valid_token():
            return None
        return _error("Unauthorized", 401)

    @app.teardown_request
    def flush_repositories(exception: Optional[BaseException]) -> None:
        flush_and_sync()

    @app.errorhandler(GotrackError)
    def handle_gotrack_error(e: GotrackError):
        status = ERROR_STATUS.get(type(e), 500)
        if status >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        else:
            logger.info("%s: %s", type(e).__name__, e)
        return _error(str(e), status)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return _error(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error")
        return _error(str(e) or "Unknown error", 500)

    @app.post("/api/auth")
    def login():
        client_id = get_client_id(request.headers)
        purged = limiter.purge_expired()
        if purged:
            logger.debug("Purged %d expired login records", purged)

        status = limiter.check(client_id)
        if not status.allowed:
            return _lockout_error(status.remaining_minutes)

        payload = request.get_json(silent=True) or {}
        password = str(payload.get("password") or "")
        expected = config["app_password"] or ""

        # An unset password never matches
        if expected == "" or not hmac.compare_digest(password.encode(), expected.encode()):
            limiter.record_failure(client_id)
            logger.warning("Failed login from %s", client_id)
            status = limiter.check(client_id)
            if not status.allowed:
                return _lockout_error(status.remaining_minutes)
            return _error("Invalid password", 401)

        limiter.clear(client_id)
        session.permanent = True
        session["authenticated"] = True
        return _success()

    @app.post("/api/entries")
    def add_entry():
        payload = request.get_json(silent=True)
        if payload is None:
            payload = request.form
        if not isinstance(payload, Mapping):
            raise EntryValidationError("Entry must be an object")
        new_entry = create_entry(repository(), entry_from_payload(payload))
        return _success(entry_to_json(new_entry))

    @app.get("/api/entries")
    def list_entries():
        page_size = _int_arg("page_size", config["page_size"])
        if page_size < 1:
            raise RequestParameterError(f"Invalid page_size: {page_size}")
        entries = repository().query_entries(entry_filter_from_args())
        page = paginate(entries, _int_arg("page", 1), page_size)
        return _success(
            {
                "items": [entry_to_json(entry) for entry in page["items"]],
                "page": page["page"],
                "page_size": page["page_size"],
                "total_items": page["total_items"],
                "total_pages": page["total_pages"],
            }
        )

    @app.get("/api/entries/last")
    def last_entry():
        return _success(optional_entry_to_json(repository().get_latest_entry()))

    @app.delete("/api/entries")
    def delete_entry():
        id = request.args.get("id")
        if not id:
            return _error("ID is required", 400)
        delete_entries(repository(), [id])
        return _success()

    @app.get("/api/stats")
    def stats():
        entries = repository().query_entries(entry_filter_from_args())
        return _success(
            {
                "summary": summary_to_json(get_summary(entries, now_utc())),
                "distributions": {
                    field: get_distribution(entries, field)
                    for field in DISTRIBUTION_FIELDS
                },
                "day_of_week": day_of_week_to_json(get_day_of_week_counts(entries)),
                "hour_of_day": hour_of_day_to_json(get_hour_of_day_counts(entries)),
                "recent": [
                    entry_to_json(entry) for entry in entries[:RECENT_RECORD_COUNT]
                ],
            }
        )

    @app.get("/api/export")
    def export():
        if _bool_arg("all"):
            csv_text = entries_to_csv(repository().get_all_entries(), FULL_COLUMNS)
        else:
            csv_text = entries_to_csv(
                repository().query_entries(entry_filter_from_args()), RECORD_COLUMNS
            )
        filename = export_filename(pendulum.today("local").date())
        return Response(
            csv_text,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.get("/api/reminder/check")
    def reminder_check():
        notifier = None if _bool_arg("dry_run") else build_notifier(config)
        outcome = run_reminder_check(
            repository(),
            notifier,
            config["reminder_thresholds"],
            timezone_correction_hours=config["timezone_correction_hours"],
            window_hours=config["reminder_window_hours"],
            override_hours=_float_arg("hours"),
        )
        return _success(reminder_outcome_to_json(outcome))

    return app
