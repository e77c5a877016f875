"""
Resource resolution engine.

This module provides :class:`ResourceResolver`, the entry point of the
library. It turns a resource kind plus an id, a name or paging parameters
into a typed model fetched from the catalog API, and resolves navigation
links (URLs standing in for related resources) into the resources they
point at, one at a time or in ordered batches.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import quote

from .cancellation import CancellationToken
from .exceptions import (
    ConfigurationError,
    PokeFetchError,
    UnsupportedNavigationFormatError,
)
from .http.deserializer import Deserializer, JsonDeserializer
from .http.transport import AiohttpTransport, Transport
from .models.base import NamedResource, Resource, ResourceLink, ResourcePage
from .models.http import ClientConfig
from .registry import EndpointRegistry, default_registry
from .utils.deduplication import RequestDeduplicator, RequestKey
from .utils.url import (
    build_paged_url,
    extract_kind_segment,
    extract_trailing_id,
    normalize_resource_name,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)
N = TypeVar("N", bound=NamedResource)
T = TypeVar("T")

NavigationLink = Union[ResourceLink[Any], str]

PAGE_SCOPE = "page"


class ResourceResolver:
    """
    Typed async client for the catalog API.

    The resolver owns its HTTP transport: it is created on first use (or on
    ``async with``) and released by :meth:`close`. A transport passed to the
    constructor belongs to the caller and is left open.

    Concurrent requests for the same resource are folded into one transport
    call. Nothing is kept once that call completes, so the next request for
    the resource goes back to the network.

    Every operation accepts an optional :class:`CancellationToken`. Firing it
    abandons that caller's wait with :class:`RequestCancelledError`; the
    transport call itself is only aborted when no other caller is waiting
    for it.

    Example:
        ```python
        from poke_fetch import Pokemon, ResourceResolver

        async with ResourceResolver() as resolver:
            pikachu = await resolver.fetch_by_name(Pokemon, "Pikachu")
            species = await resolver.resolve(pikachu.species)
            page = await resolver.fetch_page(Pokemon, limit=20)
            first_twenty = await resolver.resolve_all(page.results)
        ```
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        deserializer: Optional[Deserializer] = None,
        registry: Optional[EndpointRegistry] = None,
    ):
        """
        Initialize the resolver.

        Args:
            config: Client configuration; defaults to ``ClientConfig()``
            transport: Transport to use instead of an owned AiohttpTransport
            deserializer: Body decoder; defaults to a JsonDeserializer honouring
                ``config.max_response_size``
            registry: Endpoint registry; defaults to the registry populated by
                the ``@endpoint`` decorator
        """
        self.config = config or ClientConfig()
        self.registry = registry if registry is not None else default_registry

        self._transport = transport
        self._owns_transport = transport is None
        self._deserializer = deserializer or JsonDeserializer(
            self.config.max_response_size
        )
        self._deduplicator = RequestDeduplicator()
        self._closed = False

    async def __aenter__(self) -> ResourceResolver:
        transport = self._get_transport()
        if isinstance(transport, AiohttpTransport) and self._owns_transport:
            await transport.open()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Abort in-flight fetches and release the owned transport."""
        if self._closed:
            return
        self._closed = True

        await self._deduplicator.clear()
        if self._owns_transport and isinstance(self._transport, AiohttpTransport):
            await self._transport.close()
        self._transport = None
        logger.debug("Resolver closed")

    def _get_transport(self) -> Transport:
        if self._closed:
            raise RuntimeError("Resolver is closed")
        if self._transport is None:
            self._transport = AiohttpTransport(self.config)
        return self._transport

    # URL construction

    def _item_url(self, path: str, segment: str) -> str:
        return f"{self.config.base_url}{path}/{segment}/"

    def _collection_url(self, path: str) -> str:
        return f"{self.config.base_url}{path}/"

    # Public operations

    async def fetch_by_id(
        self,
        kind: Type[R],
        resource_id: int,
        cancel_token: Optional[CancellationToken] = None,
    ) -> R:
        """
        Fetch a single resource by its numeric id.

        Args:
            kind: Resource kind, e.g. ``Pokemon``
            resource_id: Non-negative integer id
            cancel_token: Optional cancellation handle

        Returns:
            The decoded resource

        Raises:
            ValueError: If ``resource_id`` is not a non-negative integer
            ConfigurationError: If ``kind`` has no registered endpoint
            NotFoundError: If the remote has no such resource
            TransportError: On network failure or cancellation
            DecodeError: If the body does not match ``kind``
        """
        if isinstance(resource_id, bool) or not isinstance(resource_id, int):
            raise ValueError(f"Resource id must be an integer, got {resource_id!r}")
        if resource_id < 0:
            raise ValueError(f"Resource id must be non-negative, got {resource_id}")

        path = self.registry.path_for(kind)
        logger.info(f"Fetching {kind.__name__} by id {resource_id}")

        identity = str(resource_id)
        return await self._fetch(
            self._item_url(path, identity),
            kind,
            RequestKey(path, identity),
            cancel_token,
        )

    async def fetch_by_name(
        self,
        kind: Type[N],
        name: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> N:
        """
        Fetch a named resource by name.

        The name is normalized to the API's slug form first, so
        ``"Mr. Mime"`` and ``"mr-mime"`` fetch the same resource.

        Raises:
            TypeError: If ``kind`` is not a NamedResource subclass
        """
        if not (isinstance(kind, type) and issubclass(kind, NamedResource)):
            raise TypeError(f"{kind!r} is not a named resource kind")

        path = self.registry.path_for(kind)
        slug = normalize_resource_name(name)
        logger.info(f"Fetching {kind.__name__} by name '{slug}'")

        return await self._fetch(
            self._item_url(path, quote(slug, safe="")),
            kind,
            RequestKey(path, slug),
            cancel_token,
        )

    async def fetch_page(
        self,
        kind: Type[R],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ResourcePage[R]:
        """
        Fetch one page of a resource collection.

        Args:
            kind: Resource kind of the collection
            limit: Page size; the remote default applies when omitted
            offset: Index of the first result; 0 when omitted
            cancel_token: Optional cancellation handle

        Returns:
            A ``ResourcePage[kind]`` snapshot

        Raises:
            ValueError: If ``limit`` or ``offset`` is negative
        """
        for label, value in (("limit", limit), ("offset", offset)):
            if value is not None and value < 0:
                raise ValueError(f"{label} must be non-negative, got {value}")

        path = self.registry.path_for(kind)
        url = build_paged_url(self._collection_url(path), limit, offset)
        logger.info(f"Fetching {kind.__name__} page (limit={limit}, offset={offset})")

        return await self._fetch(
            url, ResourcePage[kind], RequestKey(PAGE_SCOPE, url), cancel_token
        )

    async def resolve(
        self,
        link: NavigationLink,
        kind: Optional[Type[R]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Any:
        """
        Materialize the resource a navigation link points at.

        The id is taken from the link's last path segment and the fetch is
        delegated to :meth:`fetch_by_id`, so a resource requested by link and
        by id at the same time is fetched once.

        Args:
            link: A ``ResourceLink`` or a bare URL
            kind: Target kind; inferred from ``ResourceLink[Kind]`` or from
                the URL's endpoint segment when omitted
            cancel_token: Optional cancellation handle

        Raises:
            UnsupportedNavigationFormatError: If the URL does not end in an
                integer id. No request is made.
            ConfigurationError: If the target kind cannot be determined
        """
        target, resource_id = self._link_target(link, kind)
        return await self.fetch_by_id(target, resource_id, cancel_token)

    async def resolve_all(
        self,
        links: Iterable[NavigationLink],
        kind: Optional[Type[R]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[Any]:
        """
        Resolve many navigation links concurrently.

        Results are returned in input order regardless of completion order.
        If any resolution fails, the others are cancelled and that failure is
        raised; there is no partial result.
        """
        targets = [self._link_target(link, kind) for link in links]
        if not targets:
            return []

        logger.info(f"Resolving {len(targets)} navigation links")
        tasks = [
            asyncio.ensure_future(self.fetch_by_id(target, resource_id, cancel_token))
            for target, resource_id in targets
        ]

        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            unfinished = [task for task in tasks if not task.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        for task in tasks:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()  # type: ignore[misc]

        return [task.result() for task in tasks]

    async def next_page(
        self,
        page: ResourcePage[R],
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[ResourcePage[R]]:
        """Fetch the page after ``page``, or return None at the last page."""
        if page.next is None:
            return None
        return await self._fetch(
            page.next, type(page), RequestKey(PAGE_SCOPE, page.next), cancel_token
        )

    async def previous_page(
        self,
        page: ResourcePage[R],
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[ResourcePage[R]]:
        """Fetch the page before ``page``, or return None at the first page."""
        if page.previous is None:
            return None
        return await self._fetch(
            page.previous,
            type(page),
            RequestKey(PAGE_SCOPE, page.previous),
            cancel_token,
        )

    async def iter_pages(
        self,
        kind: Type[R],
        limit: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[ResourcePage[R]]:
        """
        Walk a whole collection from the start, one page at a time.

        Example:
            ```python
            async for page in resolver.iter_pages(Berry, limit=50):
                for link in page.results:
                    print(link.name)
            ```
        """
        page: Optional[ResourcePage[R]] = await self.fetch_page(
            kind, limit=limit, offset=0, cancel_token=cancel_token
        )
        while page is not None:
            yield page
            page = await self.next_page(page, cancel_token)

    # Shared fetch routine

    def _link_target(
        self, link: NavigationLink, kind: Optional[Type[Any]]
    ) -> Tuple[Type[Any], int]:
        url = link if isinstance(link, str) else link.url

        resource_id = extract_trailing_id(url)
        if resource_id is None:
            raise UnsupportedNavigationFormatError(
                f"Navigation link does not end in a numeric id: {url}", url=url
            )

        target = kind
        if target is None and isinstance(link, ResourceLink):
            target = type(link).target_kind()
        if target is None:
            target = self.registry.kind_for(extract_kind_segment(url))
        if target is None:
            raise ConfigurationError(
                f"Cannot determine the resource kind of {url}", url=url
            )
        return target, resource_id

    async def _fetch(
        self,
        url: str,
        shape: Type[T],
        key: RequestKey,
        cancel_token: Optional[CancellationToken],
    ) -> T:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(url)

        async def execute() -> T:
            return await self._execute(url, shape)

        return await self._deduplicator.deduplicate(key, execute, cancel_token)

    async def _execute(self, url: str, shape: Type[T]) -> T:
        transport = self._get_transport()
        logger.debug(f"Transport call for {url}")
        try:
            async with transport.get(url) as chunks:
                return await self._deserializer.decode(chunks, shape, url)
        except PokeFetchError as e:
            logger.warning(f"Fetch of {url} failed: {e.message}")
            raise

    # Diagnostics

    @property
    def in_flight_count(self) -> int:
        """Number of distinct fetches currently in flight."""
        return self._deduplicator.pending_count

    def get_stats(self) -> Dict[str, Any]:
        stats: Dict[str, Any] = {
            "closed": self._closed,
            "deduplication": self._deduplicator.get_stats(),
        }
        if isinstance(self._transport, AiohttpTransport):
            stats["transport"] = self._transport.get_stats()
        return stats


__all__ = ["NavigationLink", "ResourceResolver"]
