from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class SenderResponse:
    """Status code and decoded body of one HTTP exchange."""

    status_code: int
    text: str


class AbstractRequestSender(ABC):
    """Interface for outbound HTTP transports."""

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
    ) -> SenderResponse:
        """Perform one HTTP request.

        Args:
            method: HTTP method (e.g., "POST").
            url: Absolute target URL.
            headers: Request headers.
            body: Encoded request body.

        Returns:
            SenderResponse: Status code and response text, whatever the status.

        Raises:
            TransportAppError: If the exchange could not complete.
        """
        ...

    def close(self) -> None:
        """Release transport resources (no-op by default)."""
