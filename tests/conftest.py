"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any docgate import so the global
settings object is built with test-friendly values.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("API_ENDPOINT_URL", "https://documents.test/api/v3/lk/documents/create")
os.environ.setdefault("LIMITER_WINDOW_SECONDS", "1.0")
os.environ.setdefault("LIMITER_MAX_REQUESTS", "5")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import threading
import time
from typing import Callable, Mapping

import pytest

from docgate.adapters.transport.base import AbstractRequestSender, SenderResponse
from docgate.schemas.document import Description, Document, Product


class RecordingSender(AbstractRequestSender):
    """Sender double that records every call with its monotonic timestamp.

    ``responder`` receives the decoded body and returns a SenderResponse or
    raises; by default every call answers 200.
    """

    def __init__(
        self,
        responder: Callable[[bytes], SenderResponse] | None = None,
        *,
        delay: float = 0.0,
    ) -> None:
        self.responder = responder or (lambda body: SenderResponse(200, '{"value": "ok"}'))
        self.delay = delay
        self.calls: list[dict] = []
        self.closed = False
        self._lock = threading.Lock()

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
    ) -> SenderResponse:
        with self._lock:
            self.calls.append(
                {
                    "at": time.monotonic(),
                    "method": method,
                    "url": url,
                    "headers": dict(headers),
                    "body": body,
                }
            )
        if self.delay:
            time.sleep(self.delay)
        return self.responder(body)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_sender() -> RecordingSender:
    return RecordingSender()


def make_document(doc_id: str = "1") -> Document:
    return Document(
        description=Description(participantInn="123456789"),
        doc_id=doc_id,
        doc_status="testStatus",
        doc_type="testDocType",
        importRequest=True,
        owner_inn="123456789",
        products=[Product(certificate_document="testCert", tnved_code="testTnvedCode")],
        reg_date="2020-01-23",
        reg_number="123456789",
    )
