"""Window policy interfaces.

The admission loop depends on this abstraction (not a concrete window
strategy) so fixed and sliding windows can be swapped through configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AdmissionDecision:
    """Result of asking a window policy for an admission slot.

    Attributes:
        allowed: Whether one request may be admitted now.
        limit: Max admissions per window.
        remaining: Admissions left in the current window after this decision.
        window_start: Monotonic time at which the current window began.
        wait_seconds: Time until a slot frees up (0.0 when allowed).
    """

    allowed: bool
    limit: int
    remaining: int
    window_start: float
    wait_seconds: float


class AbstractWindowPolicy(ABC):
    """Interface for window/quota policies."""

    def __init__(self, *, limit: int, window_seconds: float) -> None:
        """Validate the quota shared by every policy.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @abstractmethod
    def try_acquire(self) -> AdmissionDecision:
        """Consume one admission slot if the current window has quota.

        Checking the quota and consuming it happen atomically.

        Returns:
            AdmissionDecision describing whether the slot was granted and,
            if not, how long until one frees up.
        """
        raise NotImplementedError
