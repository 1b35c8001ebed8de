"""Payload encoder layer - turns request records into wire bodies."""

from docgate.adapters.encoding.base import AbstractPayloadEncoder
from docgate.adapters.encoding.json_encoder import JsonPayloadEncoder

__all__ = [
    "AbstractPayloadEncoder",
    "JsonPayloadEncoder",
]
