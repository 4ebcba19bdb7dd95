# -*- coding: utf-8 -*-
"""Per-client action limits with a rolling cooldown window.

Each action class (registration submission, login failure, AI generation)
gets its own ``ActionLimiter``. A client may perform ``max_count`` actions;
the counter resets once ``window_seconds`` pass without a further action.

State is process-local. Several worker processes each keep their own table,
so a horizontally scaled deployment admits up to ``max_count`` per process.
"""

import math
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterator, Protocol

from nestfest.core.config import get_settings
from nestfest.core.errors import RateLimitedError
from nestfest.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RateRecord:
    """Actions counted for one client key in the current window."""

    count: int
    last_activity: float


class RateStore(Protocol):
    """Storage for rate records, keyed by client key."""

    def get(self, key: str) -> RateRecord | None: ...

    def set(self, key: str, record: RateRecord) -> None: ...

    def delete(self, key: str) -> None: ...

    def items(self) -> Iterator[tuple[str, RateRecord]]: ...

    def clear(self) -> None: ...


class InMemoryRateStore:
    """Dict-backed store for a single process."""

    def __init__(self):
        self._records: dict[str, RateRecord] = {}

    def get(self, key: str) -> RateRecord | None:
        return self._records.get(key)

    def set(self, key: str, record: RateRecord) -> None:
        self._records[key] = record

    def delete(self, key: str) -> None:
        self._records.pop(key, None)

    def items(self) -> Iterator[tuple[str, RateRecord]]:
        # Snapshot so callers may delete while iterating
        return iter(list(self._records.items()))

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class ActionLimiter:
    """Admission control for one action class.

    Args:
        name: Action class name, used in logs and the sweep job id.
        max_count: Actions allowed per window.
        window_seconds: Idle time after which a client's count resets.
        store: Record storage. Defaults to a fresh in-memory store.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        name: str,
        max_count: int,
        window_seconds: float,
        store: RateStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.max_count = max_count
        self.window_seconds = window_seconds
        self.store = store if store is not None else InMemoryRateStore()
        self._clock = clock
        self._scheduler = None

    @property
    def job_id(self) -> str:
        return f"sweep_{self.name}_limiter"

    def _expired(self, record: RateRecord, now: float) -> bool:
        return now - record.last_activity > self.window_seconds

    def is_limited(self, key: str) -> bool:
        """Check whether ``key`` has used up its window. Never counts an action.

        An expired record is deleted and the key is reported as not limited.
        """
        record = self.store.get(key)
        if record is None:
            return False

        if self._expired(record, self._clock()):
            self.store.delete(key)
            return False

        return record.count >= self.max_count

    def record_action(self, key: str) -> None:
        """Count one completed action for ``key``."""
        now = self._clock()
        record = self.store.get(key)

        if record is None or self._expired(record, now):
            self.store.set(key, RateRecord(count=1, last_activity=now))
            return

        record.count += 1
        record.last_activity = now
        self.store.set(key, record)

        if record.count == self.max_count:
            logger.info("Client reached action limit", limiter=self.name, client=key)

    def clear(self, key: str) -> None:
        """Forget ``key`` entirely."""
        self.store.delete(key)

    def retry_after(self, key: str) -> int:
        """Seconds until ``key``'s window lapses, 0 when it has no record."""
        record = self.store.get(key)
        if record is None:
            return 0
        remaining = self.window_seconds - (self._clock() - record.last_activity)
        return max(math.ceil(remaining), 0)

    def sweep(self) -> int:
        """Delete every expired record. Returns how many were removed."""
        now = self._clock()
        removed = 0
        for key, record in self.store.items():
            if self._expired(record, now):
                self.store.delete(key)
                removed += 1

        if removed:
            logger.debug("Expired rate records swept", limiter=self.name, removed=removed)
        return removed

    def reset(self) -> None:
        """Drop every record."""
        self.store.clear()

    def start(self, scheduler, interval_seconds: int = 60) -> None:
        """Register the periodic sweep on ``scheduler``."""
        scheduler.add_interval_job(job_id=self.job_id, func=self.sweep, seconds=interval_seconds)
        self._scheduler = scheduler

    def stop(self) -> None:
        """Cancel the periodic sweep, if started."""
        if self._scheduler is not None:
            self._scheduler.remove_job(self.job_id)
            self._scheduler = None


def raise_if_limited(action_limiter: ActionLimiter, key: str, message: str | None = None) -> None:
    """Reject the request with 429 when ``key`` is over its limit.

    Raises:
        RateLimitedError: With the seconds until the window lapses.
    """
    if action_limiter.is_limited(key):
        logger.warning("Request rate limited", limiter=action_limiter.name, client=key)
        raise RateLimitedError(message, retry_after=action_limiter.retry_after(key))


class ActionLimiters:
    """The limiters for each rate-limited action class."""

    def __init__(self, submission: ActionLimiter, login: ActionLimiter, generation: ActionLimiter):
        self.submission = submission
        self.login = login
        self.generation = generation

    def __iter__(self) -> Iterator[ActionLimiter]:
        return iter((self.submission, self.login, self.generation))

    def start(self, scheduler, interval_seconds: int = 60) -> None:
        for action_limiter in self:
            action_limiter.start(scheduler, interval_seconds)

    def stop(self) -> None:
        for action_limiter in self:
            action_limiter.stop()

    def reset(self) -> None:
        for action_limiter in self:
            action_limiter.reset()


@lru_cache
def get_action_limiters() -> ActionLimiters:
    """Get the process-wide limiters, sized from settings."""
    settings = get_settings()
    return ActionLimiters(
        submission=ActionLimiter(
            "submission", settings.submission_limit, settings.submission_window_seconds
        ),
        login=ActionLimiter("login", settings.login_limit, settings.login_window_seconds),
        generation=ActionLimiter(
            "generation", settings.generation_limit, settings.generation_window_seconds
        ),
    )
