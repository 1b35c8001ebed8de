"""In-memory window policies for the admission loop.

Notes:
- Per-process only: several processes sharing one API credential each
  enforce their own quota.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable

from docgate.adapters.rate_limit.base import AbstractWindowPolicy, AdmissionDecision


class FixedWindowPolicy(AbstractWindowPolicy):
    """Fixed windows opened by the first admission after the previous one expired.

    A window covers ``[start, start + T)`` where ``start`` is the time of the
    admission that opened it. Idle time never counts towards a window, so a
    burst arriving after a quiet period gets ``N`` admissions and then waits
    the full remainder of ``T``.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the fixed-window policy.

        Args:
            limit: Maximum number of admissions per window.
            window_seconds: Length of each window in seconds.
            clock: Monotonic time source in seconds.
        """
        super().__init__(limit=limit, window_seconds=window_seconds)
        self._clock = clock
        self._lock = threading.RLock()
        self._window_start: float | None = None
        self._count = 0

    def _window_expired_locked(self, now: float) -> bool:
        return self._window_start is None or now - self._window_start >= self._window_seconds

    def try_acquire(self) -> AdmissionDecision:
        now = self._clock()

        with self._lock:
            if self._window_expired_locked(now):
                self._window_start = now
                self._count = 0

            if self._count < self._limit:
                self._count += 1
                return AdmissionDecision(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - self._count,
                    window_start=self._window_start,
                    wait_seconds=0.0,
                )

            return AdmissionDecision(
                allowed=False,
                limit=self._limit,
                remaining=0,
                window_start=self._window_start,
                wait_seconds=max(0.0, self._window_start + self._window_seconds - now),
            )


class SlidingWindowPolicy(AbstractWindowPolicy):
    """Sliding-log policy: at most ``N`` admissions in any interval of ``T``.

    Keeps the timestamps of the last ``N`` admissions; a new admission is
    granted once the oldest of them is at least ``T`` old.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(limit=limit, window_seconds=window_seconds)
        self._clock = clock
        self._lock = threading.RLock()
        self._admitted_at: deque[float] = deque()

    def _evict_expired_locked(self, now: float) -> None:
        while self._admitted_at and now - self._admitted_at[0] >= self._window_seconds:
            self._admitted_at.popleft()

    def try_acquire(self) -> AdmissionDecision:
        now = self._clock()

        with self._lock:
            self._evict_expired_locked(now)

            if len(self._admitted_at) < self._limit:
                self._admitted_at.append(now)
                return AdmissionDecision(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - len(self._admitted_at),
                    window_start=self._admitted_at[0],
                    wait_seconds=0.0,
                )

            oldest = self._admitted_at[0]
            return AdmissionDecision(
                allowed=False,
                limit=self._limit,
                remaining=0,
                window_start=oldest,
                wait_seconds=max(0.0, oldest + self._window_seconds - now),
            )


def create_window_policy(
    policy: str,
    *,
    limit: int,
    window_seconds: float,
    clock: Callable[[], float] = time.monotonic,
) -> AbstractWindowPolicy:
    """Build a window policy by name ("fixed" or "sliding").

    Raises:
        ValueError: If the policy name is unknown.
    """
    name = policy.lower()
    if name == "fixed":
        return FixedWindowPolicy(limit=limit, window_seconds=window_seconds, clock=clock)
    if name == "sliding":
        return SlidingWindowPolicy(limit=limit, window_seconds=window_seconds, clock=clock)
    raise ValueError(f"Unknown window policy: '{policy}'. Supported policies: fixed, sliding")
