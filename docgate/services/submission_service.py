"""Document submission service composing the rate limiter and dispatcher.

This is the entry point callers use. It:
- Wraps each payload in a DocumentRequest with a submission id
- Queues it on the RateLimiter (never blocking on the network)
- Dispatches it from the admission worker and resolves a Future with the Outcome
- Records queued/sent/failed states for later lookup
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Mapping

from docgate.adapters.encoding.json_encoder import JsonPayloadEncoder
from docgate.adapters.rate_limit.base import AbstractWindowPolicy
from docgate.adapters.rate_limit.in_memory import create_window_policy
from docgate.adapters.transport.base import AbstractRequestSender
from docgate.adapters.transport.factory import create_request_sender
from docgate.core.config import Settings, settings as default_settings
from docgate.core.errors import LimiterClosedError, NotFoundAppError
from docgate.core.logging import bind_request_id, get_request_id
from docgate.schemas.document import Document
from docgate.schemas.submission import DocumentRequest, SubmissionStatusResponse
from docgate.services.dispatcher import Dispatcher, Outcome, Sent
from docgate.services.rate_limiter import RateLimiter
from docgate.utils.outcome_store import OutcomeStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionTicket:
    """Handle returned by ``submit``; ``future`` resolves to the Outcome."""

    submission_id: str
    future: Future[Outcome]


@dataclass(frozen=True)
class _PendingSubmission:
    request: DocumentRequest
    future: Future[Outcome]


def _status_from_outcome(submission_id: str, outcome: Outcome) -> SubmissionStatusResponse:
    if isinstance(outcome, Sent):
        return SubmissionStatusResponse(
            submission_id=submission_id,
            status="sent",
            status_code=outcome.status_code,
            body=outcome.body,
        )

    error = outcome.error
    details = error.details or {}
    return SubmissionStatusResponse(
        submission_id=submission_id,
        status="failed",
        status_code=details.get("http_status"),
        body=details.get("body"),
        error={"code": error.code, "message": error.message},
    )


class DocumentSubmissionService:
    """Queues document submissions and reports their outcomes.

    Attributes:
        dispatcher: Performs the single send attempt per request.
        store: Status store for lookups by submission id.
        limiter: Rate limiter owning the queue and admission worker.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        policy: AbstractWindowPolicy,
        store: OutcomeStore | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.store = store if store is not None else OutcomeStore()
        self.limiter: RateLimiter[_PendingSubmission] = RateLimiter(
            self._handle, policy=policy, on_stop=dispatcher.sender.close
        )

    def __enter__(self) -> "DocumentSubmissionService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def submit(
        self,
        payload: Document | Mapping[str, Any],
        signature: str,
        *,
        request_id: str | None = None,
    ) -> SubmissionTicket:
        """Queue one document for creation.

        Args:
            payload: Document (or raw mapping) to send.
            signature: Value for the ``Signature`` header.
            request_id: Correlation id; defaults to the one bound in context.

        Returns:
            SubmissionTicket whose future resolves once the request is dispatched.

        Raises:
            LimiterClosedError: If the service has been closed.
        """
        request = DocumentRequest(
            payload=payload,
            signature=signature,
            request_id=request_id or get_request_id(),
        )
        future: Future[Outcome] = Future()
        self.store.set(
            SubmissionStatusResponse(submission_id=request.submission_id, status="queued")
        )
        try:
            self.limiter.submit(_PendingSubmission(request=request, future=future))
        except LimiterClosedError:
            self.store.set(
                SubmissionStatusResponse(submission_id=request.submission_id, status="cancelled")
            )
            raise
        logger.info(
            "submission.queued",
            extra={"submission_id": request.submission_id},
        )
        return SubmissionTicket(submission_id=request.submission_id, future=future)

    def _handle(self, pending: _PendingSubmission) -> None:
        request = pending.request
        with bind_request_id(request.request_id):
            try:
                outcome = self.dispatcher.dispatch(request)
            except Exception as exc:
                self.store.set(
                    SubmissionStatusResponse(
                        submission_id=request.submission_id,
                        status="failed",
                        error={"code": "dispatch_crashed", "message": str(exc)},
                    )
                )
                pending.future.set_exception(exc)
                raise
            self.store.set(_status_from_outcome(request.submission_id, outcome))
            pending.future.set_result(outcome)

    def status(self, submission_id: str) -> SubmissionStatusResponse:
        """Look up the current state of a submission.

        Raises:
            NotFoundAppError: If the id is unknown or its record expired.
        """
        record = self.store.get(submission_id)
        if record is None:
            raise NotFoundAppError(
                code="submission_not_found",
                message=f"Unknown submission id: {submission_id}",
                details={"submission_id": submission_id},
            )
        return record

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until every queued submission has been dispatched."""
        return self.limiter.wait_idle(timeout)

    def stats(self) -> dict[str, Any]:
        return {
            "limiter": self.limiter.stats(),
            "outcomes": self.store.stats(),
        }

    def close(self, timeout: float | None = None) -> list[DocumentRequest]:
        """Stop admitting requests and cancel the ones still queued.

        The sender is closed by the admission worker once it stops, so a send
        still in flight when ``timeout`` elapses completes normally.

        Returns:
            The requests that were never dispatched.
        """
        pending = self.limiter.close(timeout)
        if self.limiter.running:
            logger.warning(
                "submission.close_timed_out",
                extra={"timeout_s": timeout},
            )
        for item in pending:
            item.future.cancel()
            self.store.set(
                SubmissionStatusResponse(
                    submission_id=item.request.submission_id, status="cancelled"
                )
            )
        return [item.request for item in pending]


def build_submission_service(
    cfg: Settings | None = None,
    *,
    sender: AbstractRequestSender | None = None,
) -> DocumentSubmissionService:
    """Wire a submission service from settings.

    Args:
        cfg: Settings container; defaults to the global settings.
        sender: Optional sender override (defaults to the configured httpx sender).
    """
    cfg = cfg or default_settings
    dispatcher = Dispatcher.from_settings(
        sender or create_request_sender(cfg.api),
        JsonPayloadEncoder(),
        cfg.api,
    )
    policy = create_window_policy(
        cfg.limiter.policy,
        limit=cfg.limiter.max_requests,
        window_seconds=cfg.limiter.window_seconds,
    )
    store = OutcomeStore(
        ttl_seconds=cfg.app.outcome_store_ttl_seconds,
        max_entries=cfg.app.outcome_store_max_entries,
    )
    return DocumentSubmissionService(dispatcher, policy=policy, store=store)
