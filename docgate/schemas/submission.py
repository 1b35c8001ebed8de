"""Submission envelopes and API schemas for submission tracking."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field

from docgate.schemas.document import Document

SubmissionState = Literal["queued", "sent", "failed", "cancelled"]


def _new_submission_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, eq=False)
class DocumentRequest:
    """One unit of work: a payload plus the signature sent alongside it.

    Attributes:
        payload: Document model or plain mapping handed to the encoder.
        signature: Value of the ``Signature`` header.
        submission_id: Identifier used to look the outcome up later.
        request_id: Correlation id of the call that submitted it.
    """

    payload: Document | Mapping[str, Any]
    signature: str
    submission_id: str = field(default_factory=_new_submission_id)
    request_id: str | None = None


class SubmissionAccepted(BaseModel):
    """Response returned when a document is queued."""

    submission_id: str = Field(..., description="Identifier for status lookups.")
    status: SubmissionState = Field("queued", description="Always 'queued' on acceptance.")
    queued: int = Field(..., description="Requests waiting for admission when the response was built.")


class SubmissionStatusResponse(BaseModel):
    """Current state of one submission."""

    submission_id: str
    status: SubmissionState
    status_code: int | None = Field(
        default=None,
        description="HTTP status returned by the document API, when a response arrived.",
    )
    body: str | None = Field(
        default=None,
        description="Response body returned by the document API.",
    )
    error: dict[str, Any] | None = Field(
        default=None,
        description="Error code/message when the dispatch failed.",
    )
