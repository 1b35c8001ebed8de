"""JSON payload encoder built on pydantic serialization."""

from __future__ import annotations

import json
from typing import Any, Mapping

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from docgate.adapters.encoding.base import AbstractPayloadEncoder
from docgate.core.errors import EncodingAppError


class JsonPayloadEncoder(AbstractPayloadEncoder):
    """Encode pydantic models or plain mappings as UTF-8 JSON.

    Unset optional fields are written as ``null`` so the remote side always
    receives the full document shape.
    """

    content_type = "application/json"

    def encode(self, record: Any) -> bytes:
        try:
            if isinstance(record, BaseModel):
                return record.model_dump_json().encode("utf-8")
            if isinstance(record, Mapping):
                return json.dumps(dict(record), ensure_ascii=False).encode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise EncodingAppError(
                code="encoding_failed",
                message=f"Could not serialize payload: {exc}",
                details={"error_type": type(exc).__name__},
            ) from exc

        raise EncodingAppError(
            code="encoding_unsupported_type",
            message=f"Unsupported payload type: {type(record).__name__}",
            details={"error_type": type(record).__name__},
        )
