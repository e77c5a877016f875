"""
HTTP client configuration models for the poke_fetch library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict
from urllib.parse import urlparse

from pydantic import Field, field_validator

from .._version import __version__
from .base import BaseConfig

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2/"


@dataclass(frozen=True)
class RequestHeaders:
    """
    Immutable dataclass for the default request headers.

    Attributes:
        user_agent: User-Agent header identifying the client
        accept: Accept header; the catalog API only serves JSON
        accept_encoding: Accept-Encoding header for compression support
        custom_headers: Additional custom headers as key-value pairs
    """

    user_agent: str = f"poke-fetch/{__version__}"
    accept: str = "application/json"
    accept_encoding: str = "gzip, deflate"
    custom_headers: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, str]:
        """Convert headers to dictionary format."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Encoding": self.accept_encoding,
        }
        headers.update(self.custom_headers)
        return headers


class ClientConfig(BaseConfig):
    """
    Configuration for the HTTP transport and the resolver.

    Example:
        ```python
        from poke_fetch import ClientConfig, ResourceResolver

        config = ClientConfig(total_timeout=10.0, max_concurrent_requests=20)
        async with ResourceResolver(config) as resolver:
            ...
        ```
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root of the API, e.g. https://pokeapi.co/api/v2/. "
        "Endpoint paths are resolved relative to it.",
    )

    # Timeout settings
    total_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Maximum total time for a request including reading the body.",
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Maximum time to wait for connection establishment.",
    )
    read_timeout: float = Field(
        default=20.0,
        gt=0,
        description="Maximum time to wait between body chunks.",
    )

    # Concurrency settings
    max_concurrent_requests: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum number of transport calls in flight at once. "
        "resolve_all batches larger than this are queued.",
    )
    max_connections_per_host: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum number of persistent connections per host.",
    )

    # Content settings
    max_response_size: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Responses larger than this many bytes fail with DecodeError.",
    )
    chunk_size: int = Field(
        default=8192,
        gt=0,
        description="Size of the body chunks streamed to the deserializer.",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify TLS certificates.",
    )

    headers: RequestHeaders = Field(
        default_factory=RequestHeaders,
        description="Default headers sent with every request.",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL ending with a slash."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("base_url must be an absolute http or https URL")
        return v if v.endswith("/") else v + "/"


__all__ = ["ClientConfig", "DEFAULT_BASE_URL", "RequestHeaders"]
