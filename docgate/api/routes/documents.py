from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status

from docgate.schemas.document import Document
from docgate.schemas.submission import SubmissionAccepted, SubmissionStatusResponse
from docgate.services.submission_service import DocumentSubmissionService

router = APIRouter(tags=["Documents"])


def get_submission_service(request: Request) -> DocumentSubmissionService:
    """Return the submission service attached to the running app."""

    return request.app.state.submission_service


@router.post(
    "/documents",
    response_model=SubmissionAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def create_document(
    document: Document,
    signature: Annotated[str, Header(alias="Signature")],
    service: Annotated[DocumentSubmissionService, Depends(get_submission_service)],
) -> SubmissionAccepted:
    """Queue a document for creation.

    The document is sent once the rate limiter admits it; this endpoint
    returns immediately. Poll ``GET /v1/submissions/{submission_id}`` for the
    outcome.

    Args:
        document: Document payload.
        signature: Signature forwarded to the document API.
        service: Submission service (injected).

    Returns:
        SubmissionAccepted: Submission id and current queue depth.
    """
    ticket = service.submit(document, signature)
    return SubmissionAccepted(
        submission_id=ticket.submission_id,
        queued=service.limiter.stats()["queued"],
    )


@router.get(
    "/submissions/{submission_id}",
    response_model=SubmissionStatusResponse,
)
def get_submission(
    submission_id: str,
    service: Annotated[DocumentSubmissionService, Depends(get_submission_service)],
) -> SubmissionStatusResponse:
    """Return the state of a previous submission (404 if unknown)."""

    return service.status(submission_id)
