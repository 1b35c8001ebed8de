from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class AbstractPayloadEncoder(ABC):
    """Interface for serializing a request payload to the wire body."""

    content_type: str = "application/json"

    @abstractmethod
    def encode(self, record: Any) -> bytes:
        """Serialize ``record`` to bytes.

        Raises:
            EncodingAppError: If the record cannot be serialized.
        """
        ...
