"""
Response body decoding.

Bodies arrive as a stream of byte chunks from the transport and are decoded
into the caller's requested shape, a pydantic model such as ``Pokemon`` or
``ResourcePage[Pokemon]``. A body that is not valid JSON, or does not match
the shape, raises :class:`DecodeError`; no defaults are substituted.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, Optional, Protocol, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..exceptions import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024


class Deserializer(Protocol):
    async def decode(
        self, chunks: AsyncIterator[bytes], shape: Type[T], url: Optional[str] = None
    ) -> T:
        ...


class JsonDeserializer:
    """
    Decode JSON bodies with pydantic.

    Args:
        max_response_size: Bodies longer than this many bytes are rejected
    """

    def __init__(self, max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE):
        self.max_response_size = max_response_size
        self._adapters: Dict[Any, TypeAdapter[Any]] = {}

    def _adapter(self, shape: Type[T]) -> TypeAdapter[T]:
        adapter = self._adapters.get(shape)
        if adapter is None:
            adapter = TypeAdapter(shape)
            self._adapters[shape] = adapter
        return adapter

    async def read_body(
        self, chunks: AsyncIterator[bytes], url: Optional[str] = None
    ) -> bytes:
        """Collect the chunk stream, enforcing the size limit."""
        buffer = bytearray()
        async for chunk in chunks:
            buffer.extend(chunk)
            if len(buffer) > self.max_response_size:
                raise DecodeError(
                    f"Response size exceeds maximum {self.max_response_size}",
                    url=url,
                    content_type="application/json",
                    content_length=len(buffer),
                )
        return bytes(buffer)

    async def decode(
        self, chunks: AsyncIterator[bytes], shape: Type[T], url: Optional[str] = None
    ) -> T:
        """
        Read ``chunks`` and validate the JSON document as ``shape``.

        Raises:
            DecodeError: If the body is empty, too large, not JSON, or does
                not match ``shape``
        """
        body = await self.read_body(chunks, url)
        if not body:
            raise DecodeError(
                "Empty response body", url=url, content_type="application/json", content_length=0
            )

        try:
            return self._adapter(shape).validate_json(body)
        except ValidationError as e:
            shape_name = getattr(shape, "__name__", repr(shape))
            logger.warning(
                f"Response from {url} does not match {shape_name}: {e.error_count()} errors"
            )
            raise DecodeError(
                f"Response body is not a valid {shape_name}: {e}",
                url=url,
                content_type="application/json",
                content_length=len(body),
            ) from e


__all__ = ["DEFAULT_MAX_RESPONSE_SIZE", "Deserializer", "JsonDeserializer"]
