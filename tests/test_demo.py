"""Tests for the demo runner."""

from unittest.mock import patch

from conftest import RecordingSender
from docgate import demo
from docgate.adapters.transport.base import SenderResponse
from docgate.services.submission_service import build_submission_service


def test_sample_document_carries_doc_id() -> None:
    document = demo.build_sample_document("3")

    assert document.doc_id == "3"
    assert document.products[0].uit_code == "testUnitCode"


def test_demo_submits_every_document_once() -> None:
    sender = RecordingSender()

    def build_with_fake_sender(cfg):
        return build_submission_service(cfg, sender=sender)

    with patch.object(demo, "build_submission_service", build_with_fake_sender):
        failed = demo.main(["--count", "4", "--max-requests", "10", "--window-seconds", "0.5"])

    assert failed == 0
    assert len(sender.calls) == 4
    assert {call["headers"]["Signature"] for call in sender.calls} == {"test_signature"}


def test_demo_counts_failures() -> None:
    sender = RecordingSender(lambda body: SenderResponse(401, "unauthorized"))

    with patch.object(demo, "build_submission_service", lambda cfg: build_submission_service(cfg, sender=sender)):
        failed = demo.main(["--count", "2", "--max-requests", "5"])

    assert failed == 2
