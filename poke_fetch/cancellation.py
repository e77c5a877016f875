"""Cooperative cancellation handles for resolver operations.

Every public resolver operation accepts an optional :class:`CancellationToken`.
Firing the token abandons that caller's wait with
:class:`~poke_fetch.exceptions.RequestCancelledError`. The underlying fetch is
only aborted when no other caller is still waiting for it.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from .exceptions import RequestCancelledError


class CancellationToken:
    """Cancellation handle shared between a caller and the resolver.

    Examples:
        >>> token = CancellationToken()
        >>> task = asyncio.create_task(resolver.fetch_by_id(Pokemon, 1, token))
        >>> token.cancel()
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        """Signal that cancellation has been requested."""
        if self._reason is None:
            self._reason = reason
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()

    def raise_if_cancelled(self, url: Optional[str] = None) -> None:
        """Raise :class:`RequestCancelledError` if the token already fired."""
        if self.is_cancelled():
            raise RequestCancelledError(
                f"Request cancelled: {self._reason or 'cancellation requested'}",
                url=url,
            )


class CancellationTokenGroup:
    """A group of tokens that can be cancelled together.

    Useful when a batch of independent resolver calls should be abandoned at
    once, for example when the consumer that asked for them goes away.
    """

    def __init__(self) -> None:
        self._tokens: list[CancellationToken] = []
        self._cancelled = False

    def create_token(self) -> CancellationToken:
        token = CancellationToken()
        self._tokens.append(token)
        if self._cancelled:
            token.cancel("group cancelled")
        return token

    def cancel_all(self, reason: Optional[str] = None) -> None:
        """Cancel all tokens in this group."""
        self._cancelled = True
        for token in self._tokens:
            token.cancel(reason or "group cancelled")

    def __len__(self) -> int:
        return len(self._tokens)
