"""
Base resource models for the poke_fetch library.

This module contains the entity hierarchy shared by every resource kind, the
generic navigation link, and the collection page model.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..utils.url import extract_offset, extract_trailing_id

R = TypeVar("R")


class BaseConfig(BaseModel):
    """Base configuration class with common validation settings."""

    model_config = ConfigDict(
        use_enum_values=True, validate_assignment=True, extra="forbid"
    )


class ApiModel(BaseModel):
    """
    Base for all models decoded from API responses.

    Responses carry many more fields than are modelled here, so unknown keys
    are ignored. Decoded values are read-only.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)


def _generic_argument(cls: type) -> Optional[type]:
    metadata = getattr(cls, "__pydantic_generic_metadata__", None) or {}
    args = metadata.get("args") or ()
    if args and isinstance(args[0], type):
        return args[0]
    return None


class ResourceLink(ApiModel, Generic[R]):
    """
    Reference to a resource that has not been fetched yet.

    ``ResourceLink[Pokemon]`` points at a Pokemon; the type parameter is kept
    at runtime so the resolver knows which kind to materialize. Named
    summaries in collection pages also carry the target's ``name``.
    """

    url: str
    name: Optional[str] = None

    @classmethod
    def target_kind(cls) -> Optional[type]:
        """Return the kind this link class was parametrized with, if any."""
        return _generic_argument(cls)

    @property
    def resource_id(self) -> Optional[int]:
        """The target id taken from the URL, or None if it is not numeric."""
        return extract_trailing_id(self.url)


class LocalizedName(ApiModel):
    """A resource name in one language."""

    name: str
    language: ResourceLink[Any]


class Resource(ApiModel):
    """Base entity: every resource has a non-negative integer id."""

    api_endpoint: ClassVar[Optional[str]] = None

    id: int = Field(ge=0)


class UnnamedResource(Resource):
    """A resource identified by id only."""

    pass


class NamedResource(Resource):
    """
    A resource with a canonical name and localized display names.

    Name lookups against the API are case-insensitive; see
    :func:`poke_fetch.utils.url.normalize_resource_name`.
    """

    name: str = Field(min_length=1)
    names: List[LocalizedName] = Field(default_factory=list)

    def localized_name(self, language: str) -> Optional[str]:
        """Return the display name for a language tag such as ``"en"``."""
        for entry in self.names:
            if entry.language.name == language:
                return entry.name
        return None


class ResourcePage(ApiModel, Generic[R]):
    """
    One page of a resource collection.

    ``next`` and ``previous`` are absent at the collection boundaries. Each
    fetch produces an independent snapshot.
    """

    count: int = Field(ge=0)
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[ResourceLink[R]] = Field(default_factory=list)

    @classmethod
    def resource_kind(cls) -> Optional[type]:
        return _generic_argument(cls)

    @property
    def next_offset(self) -> Optional[str]:
        return extract_offset(self.next)

    @property
    def previous_offset(self) -> Optional[str]:
        return extract_offset(self.previous)

    @property
    def has_next(self) -> bool:
        return self.next is not None

    @property
    def has_previous(self) -> bool:
        return self.previous is not None


__all__ = [
    "ApiModel",
    "BaseConfig",
    "LocalizedName",
    "NamedResource",
    "Resource",
    "ResourceLink",
    "ResourcePage",
    "UnnamedResource",
]
