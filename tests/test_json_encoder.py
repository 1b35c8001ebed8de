"""Tests for the JSON payload encoder and document schema."""

import json

import pytest
from pydantic import ValidationError

from conftest import make_document
from docgate.adapters.encoding.json_encoder import JsonPayloadEncoder
from docgate.core.errors import EncodingAppError
from docgate.schemas.document import Document


def test_document_uses_api_field_names() -> None:
    data = json.loads(JsonPayloadEncoder().encode(make_document("7")))

    assert data["doc_id"] == "7"
    assert data["importRequest"] is True
    assert data["description"] == {"participantInn": "123456789"}
    assert data["products"][0]["certificate_document"] == "testCert"
    assert data["products"][0]["tnved_code"] == "testTnvedCode"


def test_unset_fields_are_sent_as_null() -> None:
    data = json.loads(JsonPayloadEncoder().encode(Document(doc_id="1")))

    assert data["reg_number"] is None
    assert data["description"] is None
    assert data["products"] == []
    assert data["importRequest"] is False


def test_mapping_payload_is_encoded_as_is() -> None:
    body = JsonPayloadEncoder().encode({"doc_id": "9", "note": "ünïcode"})

    assert json.loads(body.decode("utf-8")) == {"doc_id": "9", "note": "ünïcode"}


def test_unsupported_payload_type_raises_encoding_error() -> None:
    with pytest.raises(EncodingAppError) as exc_info:
        JsonPayloadEncoder().encode(["not", "a", "record"])

    assert exc_info.value.code == "encoding_unsupported_type"


def test_unknown_document_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Document(doc_id="1", unexpected="x")
