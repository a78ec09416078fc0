"""Scheduling – QueueLimiter (concurrency + queue-depth bulkhead)."""
from __future__ import annotations

import asyncio

from mp_passhash.kernel.errors import HashingPoolFullError

__all__ = ["QueueLimiter"]


class QueueLimiter:
    """Admits at most ``max_concurrent + max_queue`` callers.

    ``max_concurrent`` of them run, the rest wait; anyone beyond that fails
    fast with :class:`HashingPoolFullError`.
    """

    def __init__(self, max_concurrent: int, max_queue: int) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._admitted = 0
        self.max_concurrent = max_concurrent
        self.max_queue = max_queue

    @property
    def capacity(self) -> int:
        return self.max_concurrent + self.max_queue

    @property
    def in_flight(self) -> int:
        return self._admitted

    async def __aenter__(self) -> "QueueLimiter":
        if self._admitted >= self.capacity:
            raise HashingPoolFullError(
                "Hashing pool is full",
                detail={"max_concurrent": self.max_concurrent, "max_queue": self.max_queue},
            )
        self._admitted += 1
        try:
            await self._semaphore.acquire()
        except BaseException:
            self._admitted -= 1
            raise
        return self

    async def __aexit__(self, *_: object) -> None:
        self._semaphore.release()
        self._admitted -= 1
