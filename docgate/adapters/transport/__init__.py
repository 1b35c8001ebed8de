"""Transport adapter layer - abstracts over the outbound HTTP client."""

from docgate.adapters.transport.base import AbstractRequestSender, SenderResponse
from docgate.adapters.transport.factory import create_request_sender
from docgate.adapters.transport.httpx_sender import HttpxRequestSender

__all__ = [
    "AbstractRequestSender",
    "HttpxRequestSender",
    "SenderResponse",
    "create_request_sender",
]
