"""Single-attempt dispatch of admitted document requests.

The dispatcher encodes a request, sends it exactly once, and reports an
Outcome. It never retries and never re-enqueues; encoding, transport and
non-success failures come back as ``SendFailed`` instead of being raised, so
one bad request cannot stop the admission loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from docgate.adapters.encoding.base import AbstractPayloadEncoder
from docgate.adapters.transport.base import AbstractRequestSender
from docgate.core.config import ApiSettings
from docgate.core.errors import (
    DispatchAppError,
    EncodingAppError,
    NonSuccessStatusAppError,
    TransportAppError,
)
from docgate.schemas.submission import DocumentRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sent:
    """The document API answered with the success status."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SendFailed:
    """The dispatch attempt failed; ``error`` says how."""

    error: DispatchAppError

    @property
    def ok(self) -> bool:
        return False


Outcome = Sent | SendFailed


class Dispatcher:
    """Sends admitted requests to the document endpoint.

    Attributes:
        sender: Outbound HTTP transport.
        encoder: Serializer for request payloads.
        endpoint_url: Target URL for every request.
        success_status: Status code treated as success.
    """

    method = "POST"

    def __init__(
        self,
        sender: AbstractRequestSender,
        encoder: AbstractPayloadEncoder,
        *,
        endpoint_url: str,
        success_status: int = 200,
    ) -> None:
        self.sender = sender
        self.encoder = encoder
        self.endpoint_url = endpoint_url
        self.success_status = success_status

    @classmethod
    def from_settings(
        cls,
        sender: AbstractRequestSender,
        encoder: AbstractPayloadEncoder,
        api_settings: ApiSettings,
    ) -> "Dispatcher":
        return cls(
            sender,
            encoder,
            endpoint_url=api_settings.endpoint_url,
            success_status=api_settings.success_status,
        )

    def _build_headers(self, request: DocumentRequest) -> dict[str, str]:
        return {
            "Content-Type": self.encoder.content_type,
            "Signature": request.signature,
        }

    def _failed(self, request: DocumentRequest, error: DispatchAppError) -> SendFailed:
        extra = {
            "submission_id": request.submission_id,
            "error_code": error.code,
            "error_message": error.message,
        }
        if isinstance(error, NonSuccessStatusAppError):
            extra["status_code"] = error.status_code
        logger.warning("dispatch.failed", extra=extra)
        return SendFailed(error=error)

    def dispatch(self, request: DocumentRequest) -> Outcome:
        """Perform exactly one send attempt for ``request``.

        Args:
            request: Admitted document request.

        Returns:
            Sent on the success status, SendFailed otherwise.
        """
        try:
            body = self.encoder.encode(request.payload)
        except EncodingAppError as exc:
            return self._failed(request, exc)

        try:
            response = self.sender.send(
                self.method,
                self.endpoint_url,
                headers=self._build_headers(request),
                body=body,
            )
        except TransportAppError as exc:
            return self._failed(request, exc)

        if response.status_code != self.success_status:
            return self._failed(
                request,
                NonSuccessStatusAppError(
                    code="unexpected_status",
                    message=f"Document API returned status {response.status_code}",
                    details={"http_status": response.status_code, "body": response.text},
                ),
            )

        logger.info(
            "dispatch.sent",
            extra={
                "submission_id": request.submission_id,
                "status_code": response.status_code,
                "body_chars": len(response.text),
            },
        )
        return Sent(status_code=response.status_code, body=response.text)
