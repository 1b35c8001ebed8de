"""Pydantic schemas for the document creation payload.

Field names are the JSON keys expected by the document API, including its
mixed snake_case/camelCase spelling.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Description(BaseModel):
    """Document description block."""

    model_config = ConfigDict(extra="forbid")

    participantInn: str | None = Field(
        default=None,
        description="INN of the participant submitting the document.",
    )


class Product(BaseModel):
    """A single product line of the document."""

    model_config = ConfigDict(extra="forbid")

    certificate_document: str | None = None
    certificate_document_date: str | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    tnved_code: str | None = None
    uit_code: str | None = None
    uitu_code: str | None = None


class Document(BaseModel):
    """Document submitted for creation."""

    model_config = ConfigDict(extra="forbid")

    description: Description | None = None
    doc_id: str | None = Field(default=None, description="Caller-side document id.")
    doc_status: str | None = None
    doc_type: str | None = None
    importRequest: bool = False
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    production_type: str | None = None
    products: List[Product] = Field(default_factory=list)
    reg_date: str | None = None
    reg_number: str | None = None
