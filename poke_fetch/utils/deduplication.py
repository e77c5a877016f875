"""
In-flight request de-duplication.

Concurrent requests for the same logical identity share a single underlying
fetch. Once that fetch has finished and its waiters have been released, nothing
is retained: a later request for the same identity triggers a fresh fetch.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from ..cancellation import CancellationToken
from ..exceptions import RequestCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RequestKey:
    """Identity of a logical fetch.

    ``scope`` is the endpoint path of the resource kind, or ``"page"`` for
    collection pages. ``identity`` is the id, the normalized name or the exact
    page URL.
    """

    scope: str
    identity: str

    def __str__(self) -> str:
        return f"{self.scope}/{self.identity}"


@dataclass
class PendingRequest:
    """A shared in-flight fetch and the number of callers waiting on it."""

    task: asyncio.Task[Any]
    created_at: float = field(default_factory=time.time)
    waiters: int = 1

    def add_waiter(self) -> None:
        self.waiters += 1

    @property
    def age_seconds(self) -> float:
        return time.time() - self.created_at


class RequestDeduplicator:
    """
    Folds concurrent identical requests into one in-flight task.

    The first caller for an identity starts the task; callers arriving while it
    is pending attach to it and receive the same result or the same exception.
    A caller that is cancelled (by task cancellation or by its own
    :class:`CancellationToken`) only stops waiting, unless it is the last
    waiter, in which case the shared task is cancelled too.

    The pending map is guarded by a single asyncio lock that is only held for
    insert, lookup and removal; the fetch itself runs outside it.
    """

    def __init__(self) -> None:
        self._pending: Dict[RequestKey, PendingRequest] = {}
        self._lock = asyncio.Lock()

    async def deduplicate(
        self,
        request_key: RequestKey,
        executor_func: Callable[[], Awaitable[T]],
        cancel_token: Optional[CancellationToken] = None,
    ) -> T:
        """
        Run ``executor_func`` for ``request_key`` unless it is already running.

        Args:
            request_key: Identity of the request
            executor_func: Zero-argument coroutine function performing the fetch
            cancel_token: Optional handle that abandons this caller's wait

        Returns:
            The shared result of the fetch

        Raises:
            RequestCancelledError: If ``cancel_token`` fires first
            Exception: Whatever the shared fetch raised
        """
        async with self._lock:
            pending = self._pending.get(request_key)
            if pending is None or pending.task.done():
                pending = PendingRequest(asyncio.ensure_future(executor_func()))
                self._pending[request_key] = pending
            else:
                pending.add_waiter()
                logger.debug(
                    f"Joining in-flight fetch for {request_key} "
                    f"({pending.waiters} waiters)"
                )

        try:
            return await self._wait(pending.task, cancel_token, request_key)
        finally:
            async with self._lock:
                pending.waiters -= 1
                if pending.waiters == 0:
                    if not pending.task.done():
                        logger.debug(f"Last waiter left, cancelling fetch for {request_key}")
                        pending.task.cancel()
                    if self._pending.get(request_key) is pending:
                        del self._pending[request_key]

    async def _wait(
        self,
        task: asyncio.Task[T],
        cancel_token: Optional[CancellationToken],
        request_key: RequestKey,
    ) -> T:
        # shield: one caller leaving must not cancel the fetch for the others
        shared = asyncio.shield(task)
        waitables: set[asyncio.Future[Any]] = {shared}

        cancel_waiter: Optional[asyncio.Future[None]] = None
        if cancel_token is not None:
            cancel_waiter = asyncio.ensure_future(cancel_token.wait())
            waitables.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(
                waitables, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            if not shared.done():
                shared.cancel()

        if shared in done:
            return shared.result()

        reason = cancel_token.reason if cancel_token else None
        raise RequestCancelledError(
            f"Request cancelled while waiting for {request_key}: "
            f"{reason or 'cancellation requested'}",
            url=str(request_key),
        )

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about current deduplication state."""
        return {
            "pending_requests": len(self._pending),
            "pending_details": [
                {
                    "key": str(key),
                    "age_seconds": pending.age_seconds,
                    "waiters": pending.waiters,
                    "is_done": pending.task.done(),
                }
                for key, pending in self._pending.items()
            ],
        }

    async def clear(self) -> None:
        """Cancel every pending fetch and forget it."""
        async with self._lock:
            for pending in self._pending.values():
                if not pending.task.done():
                    pending.task.cancel()
            self._pending.clear()


__all__ = [
    "RequestKey",
    "PendingRequest",
    "RequestDeduplicator",
]
