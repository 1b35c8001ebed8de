"""API tests for the document submission routes."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from conftest import RecordingSender
from docgate.adapters.encoding.json_encoder import JsonPayloadEncoder
from docgate.adapters.rate_limit.in_memory import FixedWindowPolicy
from docgate.adapters.transport.base import SenderResponse
from docgate.core.app_factory import create_app
from docgate.services.dispatcher import Dispatcher
from docgate.services.submission_service import DocumentSubmissionService

DOCUMENT = {
    "description": {"participantInn": "123456789"},
    "doc_id": "1",
    "doc_status": "testStatus",
    "doc_type": "testDocType",
    "importRequest": True,
    "products": [{"certificate_document": "testCert"}],
}


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender(lambda body: SenderResponse(200, '{"value": "created"}'))


@pytest.fixture
def service(sender: RecordingSender) -> Iterator[DocumentSubmissionService]:
    dispatcher = Dispatcher(sender, JsonPayloadEncoder(), endpoint_url="https://documents.test")
    svc = DocumentSubmissionService(
        dispatcher, policy=FixedWindowPolicy(limit=5, window_seconds=1.0)
    )
    yield svc
    svc.close()


@pytest.fixture
def client(service: DocumentSubmissionService) -> TestClient:
    return TestClient(create_app(service=service))


def test_post_document_queues_and_returns_202(
    client: TestClient, service: DocumentSubmissionService, sender: RecordingSender
) -> None:
    response = client.post("/v1/documents", json=DOCUMENT, headers={"Signature": "sig-1"})

    assert response.status_code == 202
    data = response.json()
    assert data["status"] == "queued"
    assert data["submission_id"]
    assert isinstance(data["queued"], int)

    assert service.wait_idle(timeout=5.0)
    assert sender.calls[0]["headers"]["Signature"] == "sig-1"


def test_submission_status_reports_sent(client: TestClient, service: DocumentSubmissionService) -> None:
    submission_id = client.post(
        "/v1/documents", json=DOCUMENT, headers={"Signature": "sig"}
    ).json()["submission_id"]
    assert service.wait_idle(timeout=5.0)

    response = client.get(f"/v1/submissions/{submission_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "sent"
    assert data["status_code"] == 200
    assert data["body"] == '{"value": "created"}'


def test_unknown_submission_returns_404(client: TestClient) -> None:
    response = client.get("/v1/submissions/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "submission_not_found"


def test_missing_signature_header_is_rejected(client: TestClient) -> None:
    response = client.post("/v1/documents", json=DOCUMENT)

    assert response.status_code == 422


def test_unknown_document_field_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/v1/documents",
        json={**DOCUMENT, "surprise": True},
        headers={"Signature": "sig"},
    )

    assert response.status_code == 422


def test_submit_after_shutdown_returns_503(
    client: TestClient, service: DocumentSubmissionService
) -> None:
    service.close()

    response = client.post("/v1/documents", json=DOCUMENT, headers={"Signature": "sig"})

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "limiter_closed"


def test_health_reports_limiter_stats(client: TestClient, service: DocumentSubmissionService) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["limiter"]["max_requests"] == 5
    assert data["limiter"]["window_seconds"] == 1.0

    service.close()
    assert client.get("/health").json()["status"] == "closed"
