"""Write-once result cell for the open+send handshake."""

from __future__ import annotations

import asyncio
from typing import Generic, TypeVar

T = TypeVar("T")


def _mark_retrieved(future: asyncio.Future) -> None:
    # Rejections with no remaining waiter still count as retrieved.
    if not future.cancelled():
        future.exception()


class OneShotOutcome(Generic[T]):
    """Resolve or reject at most once; later attempts are no-ops returning False."""

    def __init__(self) -> None:
        self._future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._future.add_done_callback(_mark_retrieved)

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, value: T) -> bool:
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    def reject(self, error: BaseException) -> bool:
        if self._future.done():
            return False
        self._future.set_exception(error)
        return True

    async def wait(self) -> T:
        return await asyncio.shield(self._future)


__all__ = ["OneShotOutcome"]
