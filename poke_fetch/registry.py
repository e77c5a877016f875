"""
Endpoint registry mapping resource kinds to their collection path segments.

Kinds register alongside their definition with the :func:`endpoint` class
decorator; the resolver only ever asks the registry for a path and never
inspects the kind itself.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=type)


class EndpointRegistry:
    """Immutable-per-entry mapping of resource kind to endpoint path."""

    def __init__(self) -> None:
        self._paths: Dict[type, str] = {}
        self._kinds: Dict[str, type] = {}
        self._lock = threading.Lock()

    def register(self, kind: type, path: str) -> None:
        """
        Associate ``kind`` with its endpoint path.

        Args:
            kind: Resource class
            path: Collection path segment, e.g. ``"pokemon"``

        Raises:
            ConfigurationError: If the path is empty, or if either the kind or
                the path is already registered to something else
        """
        path = path.strip("/")
        if not path:
            raise ConfigurationError(f"Empty endpoint path for {kind.__name__}")

        with self._lock:
            existing_path = self._paths.get(kind)
            if existing_path is not None and existing_path != path:
                raise ConfigurationError(
                    f"{kind.__name__} is already registered to '{existing_path}'",
                    kind=kind.__name__,
                )
            existing_kind = self._kinds.get(path)
            if existing_kind is not None and existing_kind is not kind:
                raise ConfigurationError(
                    f"Endpoint '{path}' is already registered to {existing_kind.__name__}",
                    path=path,
                )
            self._paths[kind] = path
            self._kinds[path] = kind

        logger.debug(f"Registered endpoint '{path}' for {kind.__name__}")

    def path_for(self, kind: type) -> str:
        """
        Return the endpoint path registered for ``kind``.

        Raises:
            ConfigurationError: If ``kind`` was never registered
        """
        try:
            return self._paths[kind]
        except KeyError:
            name = getattr(kind, "__name__", repr(kind))
            raise ConfigurationError(
                f"No endpoint registered for resource kind {name}", kind=name
            ) from None

    def kind_for(self, path: Optional[str]) -> Optional[type]:
        """Return the kind registered for ``path``, or None."""
        if not path:
            return None
        return self._kinds.get(path.strip("/"))

    def items(self) -> List[Tuple[type, str]]:
        return sorted(self._paths.items(), key=lambda item: item[1])

    def __contains__(self, kind: object) -> bool:
        return kind in self._paths

    def __len__(self) -> int:
        return len(self._paths)


default_registry = EndpointRegistry()


def endpoint(
    path: str, registry: Optional[EndpointRegistry] = None
) -> Callable[[K], K]:
    """
    Class decorator registering a resource kind's endpoint path.

    Example:
        ```python
        @endpoint("language")
        class Language(NamedResource):
            official: bool
        ```
    """

    def decorator(cls: K) -> K:
        target = registry if registry is not None else default_registry
        target.register(cls, path)
        cls.api_endpoint = path.strip("/")
        return cls

    return decorator
