"""
HTTP transport for the poke_fetch resolver.

The resolver only needs one operation from the network: GET a fully qualified
URL and stream its body. :class:`Transport` describes that seam so tests can
substitute a fake; :class:`AiohttpTransport` implements it over a single
aiohttp ``ClientSession``.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Dict, Optional, Protocol

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout, TCPConnector

from ..exceptions import ErrorHandler, PokeFetchError
from ..models.http import ClientConfig

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """A source of response bodies addressed by absolute URL."""

    def get(self, url: str) -> AsyncContextManager[AsyncIterator[bytes]]:
        """
        Issue a GET for ``url``.

        The returned context manager yields an async iterator over body
        chunks. Non-success statuses raise before anything is yielded:
        :class:`NotFoundError` for 404 and a :class:`TransportError`
        subclass otherwise.
        """
        ...


class AiohttpTransport:
    """
    Transport backed by one aiohttp session.

    The session is created lazily on first use or explicitly via
    :meth:`open` / ``async with``, and is released by :meth:`close`.
    At most ``config.max_concurrent_requests`` requests are in flight at once.

    Example:
        ```python
        async with AiohttpTransport(ClientConfig()) as transport:
            async with transport.get("https://pokeapi.co/api/v2/pokemon/1/") as chunks:
                body = b"".join([chunk async for chunk in chunks])
        ```
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self._session: Optional[ClientSession] = None
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._request_count = 0
        self._error_count = 0

    async def __aenter__(self) -> AiohttpTransport:
        await self.open()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def open(self) -> None:
        """
        Create the aiohttp session with the configured timeouts and limits.

        Calling it on an open transport has no effect.
        """
        if self._session is not None:
            return

        timeout = ClientTimeout(
            total=self.config.total_timeout,
            connect=self.config.connect_timeout,
            sock_read=self.config.read_timeout,
        )

        connector = TCPConnector(
            limit=self.config.max_connections_per_host * 10,
            limit_per_host=self.config.max_connections_per_host,
            ssl=self.config.verify_ssl,
        )

        self._session = ClientSession(
            timeout=timeout,
            connector=connector,
            headers=self.config.headers.to_dict(),
            raise_for_status=False,
        )
        self._semaphore = asyncio.Semaphore(self.config.max_concurrent_requests)
        logger.debug("Opened HTTP session")

    async def close(self) -> None:
        """Close the session and release its connections."""
        if self._session:
            await self._session.close()
            self._session = None
            logger.debug("Closed HTTP session")
        self._semaphore = None

    @asynccontextmanager
    async def get(self, url: str) -> AsyncIterator[AsyncIterator[bytes]]:
        await self.open()
        session, semaphore = self._session, self._semaphore
        if session is None or semaphore is None:
            raise RuntimeError("HTTP session is not open")

        async with semaphore:
            self._request_count += 1
            logger.debug(f"GET {url}")
            try:
                async with session.get(url) as response:
                    if not 200 <= response.status < 300:
                        raise await self._status_error(response, url)
                    yield response.content.iter_chunked(self.config.chunk_size)
            except PokeFetchError:
                self._error_count += 1
                raise
            except (ClientError, asyncio.TimeoutError) as e:
                self._error_count += 1
                raise ErrorHandler.handle_aiohttp_error(e, url) from e

    async def _status_error(self, response: ClientResponse, url: str) -> PokeFetchError:
        try:
            text: Optional[str] = await response.text(errors="replace")
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError):
            text = None

        return ErrorHandler.handle_http_status_error(
            response.status,
            response.reason or "",
            url,
            dict(response.headers),
            text,
        )

    def get_stats(self) -> Dict[str, Any]:
        return {
            "request_count": self._request_count,
            "error_count": self._error_count,
            "is_open": self.is_open,
        }


__all__ = ["AiohttpTransport", "Transport"]
