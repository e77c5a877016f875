"""
Typed async client for the Pokémon catalog REST API.

This package maps resource kinds onto API endpoints, fetches resources by id,
by name or by page, and resolves navigation links into the resources they
point at.

Features:
- Async/await resolver built on aiohttp with a single owned session
- Pydantic models for every resource kind, with typed navigation links
- Concurrent identical requests folded into one network call
- Per-call cancellation tokens
- Ordered, fail-fast batch resolution of navigation links
"""

from ._version import __version__
from .cancellation import CancellationToken, CancellationTokenGroup
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    DecodeError,
    ErrorHandler,
    HTTPError,
    NetworkError,
    NotFoundError,
    PokeFetchError,
    RateLimitError,
    RequestCancelledError,
    ServerError,
    TimeoutError,
    TransportError,
    UnsupportedNavigationFormatError,
)
from .http import AiohttpTransport, Deserializer, JsonDeserializer, Transport
from .models import (
    Ability,
    Berry,
    ChainLink,
    Characteristic,
    ClientConfig,
    EvolutionChain,
    Generation,
    Language,
    LocalizedName,
    Move,
    NamedResource,
    Nature,
    Pokemon,
    PokemonSpecies,
    RequestHeaders,
    Resource,
    ResourceLink,
    ResourcePage,
    Type,
    UnnamedResource,
)
from .registry import EndpointRegistry, default_registry, endpoint
from .resolver import ResourceResolver
from .utils import (
    build_paged_url,
    extract_id_or_name_segment,
    extract_kind_segment,
    extract_offset,
    extract_trailing_id,
    normalize_resource_name,
)

__author__ = "Poke Fetch Team"

__all__ = [
    # Core
    "ResourceResolver",
    "CancellationToken",
    "CancellationTokenGroup",
    # Registry
    "EndpointRegistry",
    "default_registry",
    "endpoint",
    # Transport
    "AiohttpTransport",
    "Deserializer",
    "JsonDeserializer",
    "Transport",
    # Models
    "ClientConfig",
    "RequestHeaders",
    "Resource",
    "NamedResource",
    "UnnamedResource",
    "LocalizedName",
    "ResourceLink",
    "ResourcePage",
    "Ability",
    "Berry",
    "ChainLink",
    "Characteristic",
    "EvolutionChain",
    "Generation",
    "Language",
    "Move",
    "Nature",
    "Pokemon",
    "PokemonSpecies",
    "Type",
    # URL utilities
    "build_paged_url",
    "extract_id_or_name_segment",
    "extract_kind_segment",
    "extract_offset",
    "extract_trailing_id",
    "normalize_resource_name",
    # Exceptions
    "PokeFetchError",
    "ConfigurationError",
    "UnsupportedNavigationFormatError",
    "NotFoundError",
    "DecodeError",
    "TransportError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "RequestCancelledError",
    "HTTPError",
    "RateLimitError",
    "ServerError",
    "ErrorHandler",
    "__version__",
]
