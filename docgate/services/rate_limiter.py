"""Rate limiter owning the admission queue and its single admission worker.

``submit`` only appends to a FIFO queue under a lock and wakes the worker.
One long-lived worker thread, started at construction, pops requests as the
window policy grants slots and hands each to the handler outside the lock. A
slow handler therefore delays later admissions but never blocks ``submit``.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable, Generic, TypeVar

from docgate.adapters.rate_limit.base import AbstractWindowPolicy, AdmissionDecision
from docgate.core.errors import LimiterClosedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RateLimiter(Generic[T]):
    """Releases queued requests to a handler at no more than N per window.

    Attributes:
        policy: Window policy granting admission slots.
    """

    def __init__(
        self,
        handler: Callable[[T], Any],
        *,
        policy: AbstractWindowPolicy,
        on_stop: Callable[[], Any] | None = None,
        name: str = "docgate-admission",
    ) -> None:
        """Create the limiter and start its admission worker.

        Args:
            handler: Called once per admitted request, on the worker thread.
            policy: Window policy deciding when the next request may go.
            on_stop: Called once on the worker thread after its last handler
                call, when the limiter has been closed.
            name: Worker thread name.
        """
        self.policy = policy
        self._handler = handler
        self._on_stop = on_stop
        self._queue: deque[T] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._idle = threading.Condition(self._lock)
        self._closed = False
        self._in_flight = False
        self._submitted = 0
        self._admitted = 0
        self._worker = threading.Thread(target=self._run, name=name, daemon=True)
        self._worker.start()

    def __enter__(self) -> "RateLimiter[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    @property
    def running(self) -> bool:
        """True while the admission worker thread is alive."""
        return self._worker.is_alive()

    def submit(self, request: T) -> None:
        """Append ``request`` to the admission queue.

        Raises:
            LimiterClosedError: If the limiter has been closed.
        """
        with self._lock:
            if self._closed:
                raise LimiterClosedError(
                    code="limiter_closed",
                    message="Rate limiter is closed and no longer accepts requests",
                )
            self._queue.append(request)
            self._submitted += 1
            if len(self._queue) == 1:
                self._not_empty.notify()

    def _next_admission(self) -> tuple[T, AdmissionDecision] | None:
        """Block until a request may be admitted, or return None once closed."""
        with self._lock:
            while True:
                if self._closed:
                    return None
                if not self._queue:
                    self._not_empty.wait()
                    continue
                decision = self.policy.try_acquire()
                if decision.allowed:
                    self._admitted += 1
                    self._in_flight = True
                    return self._queue.popleft(), decision
                self._not_empty.wait(timeout=decision.wait_seconds)

    def _run(self) -> None:
        while True:
            admission = self._next_admission()
            if admission is None:
                break
            request, decision = admission
            logger.debug(
                "limiter.admitted",
                extra={
                    "limit": decision.limit,
                    "remaining": decision.remaining,
                    "window_s": self.policy.window_seconds,
                },
            )
            try:
                self._handler(request)
            except Exception as exc:
                # A failing handler must not stop admission of later requests
                logger.exception(
                    "limiter.handler_failed",
                    extra={"error_type": type(exc).__name__},
                )
            finally:
                with self._lock:
                    self._in_flight = False
                    self._idle.notify_all()

        if self._on_stop is not None:
            try:
                self._on_stop()
            except Exception:
                logger.exception("limiter.on_stop_failed")
        logger.debug("limiter.worker_stopped")

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until the queue is empty and no request is being handled.

        Returns:
            True when idle (or closed), False if the timeout elapsed first.
        """
        with self._lock:
            return self._idle.wait_for(
                lambda: self._closed or (not self._queue and not self._in_flight),
                timeout=timeout,
            )

    def close(self, timeout: float | None = None) -> list[T]:
        """Stop the admission worker.

        The request being handled (if any) finishes; nothing else is admitted.
        Safe to call more than once.

        Args:
            timeout: Max seconds to wait for the worker to exit.

        Returns:
            Requests that were still queued, in FIFO order. ``running`` stays
            True afterwards if the join timed out on a slow handler.
        """
        with self._lock:
            pending = list(self._queue)
            self._queue.clear()
            was_open = not self._closed
            self._closed = True
            self._not_empty.notify_all()
            self._idle.notify_all()

        if threading.current_thread() is not self._worker:
            self._worker.join(timeout)

        if was_open:
            logger.info(
                "limiter.closed",
                extra={"pending": len(pending), "admitted": self._admitted},
            )
        return pending

    def stats(self) -> dict[str, int | float | str | bool]:
        """Return queue and quota counters without exposing requests."""
        with self._lock:
            return {
                "queued": len(self._queue),
                "submitted": self._submitted,
                "admitted": self._admitted,
                "in_flight": self._in_flight,
                "closed": self._closed,
                "max_requests": self.policy.limit,
                "window_seconds": self.policy.window_seconds,
                "policy": type(self.policy).__name__,
            }
