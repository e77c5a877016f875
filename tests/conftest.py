"""
Shared test fixtures and configuration for the poke_fetch test suite.
"""

import asyncio
import json
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, DefaultDict, Dict, List, Optional, Union

import pytest

from poke_fetch import ClientConfig, ResourceResolver
from poke_fetch.exceptions import NotFoundError

BASE_URL = "https://pokeapi.test/api/v2/"


def api_url(path: str) -> str:
    return f"{BASE_URL}{path}"


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run until they block."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeTransport:
    """
    In-memory transport with per-URL gates.

    A gated URL blocks inside ``get`` until its event is set, which lets tests
    hold a fetch in flight and observe de-duplication and cancellation.
    """

    def __init__(self, chunk_size: int = 64) -> None:
        self.chunk_size = chunk_size
        self.responses: Dict[str, Union[bytes, Exception]] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.started: DefaultDict[str, asyncio.Event] = defaultdict(asyncio.Event)
        self.calls: List[str] = []
        self.cancelled: List[str] = []

    def add_json(self, url: str, payload: Any) -> None:
        self.responses[url] = json.dumps(payload).encode("utf-8")

    def add_body(self, url: str, body: bytes) -> None:
        self.responses[url] = body

    def add_error(self, url: str, error: Exception) -> None:
        self.responses[url] = error

    def gate(self, url: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[url] = event
        return event

    def call_count(self, url: Optional[str] = None) -> int:
        if url is None:
            return len(self.calls)
        return self.calls.count(url)

    async def _chunks(self, body: bytes) -> AsyncIterator[bytes]:
        for start in range(0, len(body), self.chunk_size):
            yield body[start : start + self.chunk_size]

    @asynccontextmanager
    async def get(self, url: str) -> AsyncIterator[AsyncIterator[bytes]]:
        self.calls.append(url)
        self.started[url].set()

        gate = self.gates.get(url)
        if gate is not None:
            try:
                await gate.wait()
            except asyncio.CancelledError:
                self.cancelled.append(url)
                raise

        response = self.responses.get(url)
        if response is None:
            raise NotFoundError(f"Resource not found: {url}", url)
        if isinstance(response, Exception):
            raise response
        yield self._chunks(response)


def link(path: str, name: Optional[str] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"url": api_url(path)}
    if name is not None:
        data["name"] = name
    return data


def pokemon_payload(pokemon_id: int, name: str) -> Dict[str, Any]:
    return {
        "id": pokemon_id,
        "name": name,
        "base_experience": 112,
        "height": 4,
        "weight": 60,
        "order": 35,
        "is_default": True,
        "species": link(f"pokemon-species/{pokemon_id}/", name),
        "types": [{"slot": 1, "type": link("type/13/", "electric")}],
        "abilities": [
            {"is_hidden": False, "slot": 1, "ability": link("ability/9/", "static")}
        ],
        "sprites": {"front_default": "ignored"},
    }


def page_payload(
    kind_path: str,
    names: List[str],
    count: int,
    next_url: Optional[str] = None,
    previous_url: Optional[str] = None,
    first_id: int = 1,
) -> Dict[str, Any]:
    return {
        "count": count,
        "next": next_url,
        "previous": previous_url,
        "results": [
            link(f"{kind_path}/{first_id + index}/", name)
            for index, name in enumerate(names)
        ],
    }


@pytest.fixture
def client_config() -> ClientConfig:
    """Client configuration pointing at the fake API root."""
    return ClientConfig(base_url=BASE_URL, total_timeout=5.0)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
async def resolver(
    client_config: ClientConfig, fake_transport: FakeTransport
) -> AsyncGenerator[ResourceResolver, None]:
    """Resolver wired to the fake transport."""
    async with ResourceResolver(client_config, transport=fake_transport) as resolver:
        yield resolver
