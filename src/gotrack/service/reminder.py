# SPDX-License-Identifier: MIT

import datetime
import logging
from typing import Iterable, Literal, Optional, Protocol, TypedDict

from gotrack.model.entry import Entry
from gotrack.time import hours_between, now_utc

logger = logging.getLogger(__name__)

# Must match how often the reminder check is scheduled
DEFAULT_WINDOW_HOURS = 1.0

ReminderStatus = Literal["notified", "crossed", "no_action", "no_data"]


class LatestEntrySource(Protocol):
    def get_latest_entry(self) -> Optional[Entry]: ...


class Notifier(Protocol):
    def notify(self, threshold: float) -> None: ...


class ReminderDecision(TypedDict):
    elapsed_hours: float
    threshold: Optional[float]


class ReminderOutcome(TypedDict):
    status: ReminderStatus
    elapsed_hours: Optional[float]
    threshold: Optional[float]
    last_timestamp: Optional[datetime.datetime]


def find_crossed_threshold(
    elapsed_hours: float,
    thresholds: Iterable[float],
    window_hours: float = DEFAULT_WINDOW_HOURS,
) -> Optional[float]:
    """
    Find the threshold that `elapsed_hours` has just crossed.

    A threshold t counts as crossed when t <= elapsed_hours < t + window_hours.
    The check runs periodically, so the window has to be at least as wide as
    the interval between runs or a crossing can fall between two runs. When
    several thresholds qualify the smallest one wins.
    """
    for threshold in sorted(thresholds):
        if threshold <= elapsed_hours < threshold + window_hours:
            return threshold
    return None


def elapsed_hours_since(
    now: datetime.datetime,
    last_timestamp: datetime.datetime,
    timezone_correction_hours: float = 0.0,
) -> float:
    return hours_between(now, last_timestamp) - timezone_correction_hours


def evaluate_reminder(
    now: datetime.datetime,
    last_timestamp: datetime.datetime,
    thresholds: Iterable[float],
    timezone_correction_hours: float = 0.0,
    window_hours: float = DEFAULT_WINDOW_HOURS,
) -> ReminderDecision:
    elapsed_hours = elapsed_hours_since(now, last_timestamp, timezone_correction_hours)
    return {
        "elapsed_hours": elapsed_hours,
        "threshold": find_crossed_threshold(elapsed_hours, thresholds, window_hours),
    }


def run_reminder_check(
    source: LatestEntrySource,
    notifier: Optional[Notifier],
    thresholds: Iterable[float],
    timezone_correction_hours: float = 0.0,
    window_hours: float = DEFAULT_WINDOW_HOURS,
    now: Optional[datetime.datetime] = None,
    override_hours: Optional[float] = None,
) -> ReminderOutcome:
    """
    Fetch the latest entry, decide whether a threshold was crossed and notify.

    `override_hours` replaces the computed elapsed time and skips the datastore
    read. A None `notifier` evaluates without sending anything. Datastore and
    notification failures propagate to the caller; nothing is retried and no
    record of earlier notifications is kept.
    """
    thresholds = list(thresholds)
    last_timestamp: Optional[datetime.datetime] = None

    if override_hours is not None:
        logger.info("Using override of %.2f elapsed hours", override_hours)
        decision: ReminderDecision = {
            "elapsed_hours": override_hours,
            "threshold": find_crossed_threshold(override_hours, thresholds, window_hours),
        }
    else:
        latest_entry = source.get_latest_entry()
        if latest_entry is None:
            logger.info("No entries found, nothing to remind about")
            return {
                "status": "no_data",
                "elapsed_hours": None,
                "threshold": None,
                "last_timestamp": None,
            }
        last_timestamp = latest_entry["timestamp"]
        decision = evaluate_reminder(
            now if now is not None else now_utc(),
            last_timestamp,
            thresholds,
            timezone_correction_hours,
            window_hours,
        )

    logger.info("Hours since last entry: %.2f", decision["elapsed_hours"])

    threshold = decision["threshold"]
    if threshold is None:
        return {
            "status": "no_action",
            "elapsed_hours": decision["elapsed_hours"],
            "threshold": None,
            "last_timestamp": last_timestamp,
        }

    logger.info("Crossed the %s hour threshold", threshold)
    if notifier is None:
        status: ReminderStatus = "crossed"
    else:
        notifier.notify(threshold)
        status = "notified"

    return {
        "status": status,
        "elapsed_hours": decision["elapsed_hours"],
        "threshold": threshold,
        "last_timestamp": last_timestamp,
    }
