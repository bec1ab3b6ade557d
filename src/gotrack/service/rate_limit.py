# SPDX-License-Identifier: MIT

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
LOCKOUT_SECONDS = 15 * 60


@dataclass
class AttemptRecord:
    attempts: int
    reset_at: float


@dataclass
class RateLimitStatus:
    allowed: bool
    remaining_minutes: Optional[int] = None


class LoginRateLimiter:
    """
    Failed login attempts per client, each record expiring `lockout_seconds`
    after the first failure.

    The limiter owns its store and serializes every read and write through one
    lock, so a single instance can be shared by request threads.
    """

    def __init__(
        self,
        max_attempts: int = MAX_ATTEMPTS,
        lockout_seconds: float = LOCKOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self._clock = clock
        self._records: dict[str, AttemptRecord] = {}
        self._lock = threading.Lock()

    def check(self, client_id: str) -> RateLimitStatus:
        now = self._clock()
        with self._lock:
            record = self._records.get(client_id)
            if record is None:
                return RateLimitStatus(allowed=True)
            if now > record.reset_at:
                del self._records[client_id]
                return RateLimitStatus(allowed=True)
            if record.attempts >= self.max_attempts:
                remaining_minutes = math.ceil((record.reset_at - now) / 60)
                return RateLimitStatus(allowed=False, remaining_minutes=remaining_minutes)
            return RateLimitStatus(allowed=True)

    def record_failure(self, client_id: str) -> None:
        now = self._clock()
        with self._lock:
            record = self._records.get(client_id)
            if record is None or now > record.reset_at:
                self._records[client_id] = AttemptRecord(
                    attempts=1, reset_at=now + self.lockout_seconds
                )
                return
            # Later failures do not extend the window
            record.attempts += 1
            if record.attempts == self.max_attempts:
                logger.warning("Locking out %s after %d failed logins", client_id, record.attempts)

    def clear(self, client_id: str) -> None:
        with self._lock:
            self._records.pop(client_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [
                client_id
                for client_id, record in self._records.items()
                if now > record.reset_at
            ]
            for client_id in expired:
                del self._records[client_id]
        return len(expired)
