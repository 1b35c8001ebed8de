"""Bounded in-memory record of submission states.

Request threads write "queued" records, the admission worker overwrites them
with the final state, and the status endpoint reads them. Records expire
after a TTL and the least recently touched ones are dropped once
``max_entries`` is reached, so memory stays flat under sustained traffic.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter, OrderedDict
from typing import Callable, NamedTuple

from docgate.schemas.submission import SubmissionStatusResponse

logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    record: SubmissionStatusResponse
    expires_at: float


class OutcomeStore:
    """Thread-safe TTL + LRU map from submission id to its latest status."""

    def __init__(
        self,
        ttl_seconds: int = 3600,
        max_entries: int | None = 10_000,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()
        self._evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, submission_id: str) -> SubmissionStatusResponse | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(submission_id)
            if entry is None:
                return None
            if entry.expires_at <= now:
                del self._entries[submission_id]
                self._evictions += 1
                return None
            self._entries.move_to_end(submission_id)
            return entry.record

    def set(self, record: SubmissionStatusResponse) -> None:
        """Insert or replace the record for ``record.submission_id``."""

        now = self._clock()
        with self._lock:
            self._purge_expired_locked(now)
            self._entries[record.submission_id] = _Entry(record, now + self._ttl)
            self._entries.move_to_end(record.submission_id)
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    dropped, _ = self._entries.popitem(last=False)
                    self._evictions += 1
                    logger.debug("outcome_store.evicted", extra={"submission_id": dropped})

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._evictions = 0

    def stats(self) -> dict[str, int | None]:
        """Entry counts per status plus store limits."""

        with self._lock:
            by_status = Counter(entry.record.status for entry in self._entries.values())
            return {
                "ttl_seconds": self._ttl,
                "max_entries": self._max_entries,
                "entries": len(self._entries),
                "evictions": self._evictions,
                **{f"status_{status}": count for status, count in by_status.items()},
            }

    def _purge_expired_locked(self, now: float) -> None:
        # Entries are kept in touch order, not expiry order, so scan them all
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._evictions += len(expired)
