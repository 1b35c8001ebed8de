"""Factory for the configured request sender."""

from docgate.adapters.transport.base import AbstractRequestSender
from docgate.adapters.transport.httpx_sender import HttpxRequestSender
from docgate.core.config import ApiSettings, settings


def create_request_sender(api_settings: ApiSettings | None = None) -> AbstractRequestSender:
    """Instantiate the request sender.

    Args:
        api_settings: API settings; defaults to ``settings.api``.

    Returns:
        AbstractRequestSender: Sender honoring the configured timeout.
    """
    cfg = api_settings or settings.api
    return HttpxRequestSender(timeout_seconds=cfg.timeout_seconds)
