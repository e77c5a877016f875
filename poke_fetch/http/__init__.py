"""
HTTP support for poke_fetch.

This package provides the transport that retrieves response bodies and the
deserializer that turns them into typed models. Both are pluggable seams of
:class:`~poke_fetch.resolver.ResourceResolver`.
"""

from .deserializer import DEFAULT_MAX_RESPONSE_SIZE, Deserializer, JsonDeserializer
from .transport import AiohttpTransport, Transport

__all__ = [
    "AiohttpTransport",
    "DEFAULT_MAX_RESPONSE_SIZE",
    "Deserializer",
    "JsonDeserializer",
    "Transport",
]
