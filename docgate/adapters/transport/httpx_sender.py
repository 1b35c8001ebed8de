"""httpx transport adapter."""

from __future__ import annotations

from typing import Mapping

import httpx

from docgate.adapters.transport.base import AbstractRequestSender, SenderResponse
from docgate.core.errors import TransportAppError


class HttpxRequestSender(AbstractRequestSender):
    """Sender backed by a pooled synchronous ``httpx.Client``.

    Speaks HTTP/1.1 only; the admission worker is the single caller, so one
    client per sender is enough.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the underlying httpx client.

        Args:
            timeout_seconds: Timeout applied to connect/read/write/pool.
            transport: Optional custom transport (tests use ``httpx.MockTransport``).
        """
        self.client = httpx.Client(
            timeout=timeout_seconds,
            transport=transport,
            http2=False,
        )

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
    ) -> SenderResponse:
        try:
            response = self.client.request(method, url, headers=dict(headers), content=body)
        except httpx.TimeoutException as exc:
            raise TransportAppError(
                code="transport_timeout",
                message=f"Request to {url} timed out: {exc}",
                details={"url": url, "error_type": type(exc).__name__},
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportAppError(
                code="transport_error",
                message=f"Request to {url} failed: {exc}",
                details={"url": url, "error_type": type(exc).__name__},
            ) from exc

        return SenderResponse(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        self.client.close()
