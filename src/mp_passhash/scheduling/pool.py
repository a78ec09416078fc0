"""Scheduling – HashingPool.

Runs hash/verify/rehash calls on a bounded thread pool so one expensive KDF
never blocks an event loop. The awaiting coroutine can be cancelled, but the
computation already handed to a worker thread runs to completion.
"""
from __future__ import annotations

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from mp_passhash import facade
from mp_passhash.config import HashingSettings, get_settings
from mp_passhash.observability import get_logger
from mp_passhash.preferences import HashPreferences
from mp_passhash.scheduling.limiter import QueueLimiter

__all__ = ["HashingPool"]

T = TypeVar("T")

log = get_logger(__name__)


class HashingPool:
    """Async front-end to the facade backed by ``max_workers`` threads.

    Usage::

        async with HashingPool(max_workers=4, max_queue=32) as pool:
            encoded = await pool.hash_password(password)
            ok = await pool.verify_password(password, encoded)
    """

    def __init__(
        self,
        max_workers: int = 4,
        max_queue: int = 64,
        *,
        settings: HashingSettings | None = None,
    ) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="passhash")
        self._limiter = QueueLimiter(max_workers, max_queue)
        self._settings = settings
        self.max_workers = max_workers
        self.max_queue = max_queue

    @classmethod
    def from_settings(cls, settings: HashingSettings | None = None) -> "HashingPool":
        settings = settings or get_settings()
        return cls(settings.max_workers, settings.max_queue, settings=settings)

    @property
    def in_flight(self) -> int:
        """Calls currently running or waiting for a worker."""
        return self._limiter.in_flight

    async def _submit(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        async with self._limiter:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(self._executor, functools.partial(func, *args, **kwargs))

    async def hash_password(
        self,
        password: str,
        preferences: HashPreferences = facade.DEFAULT_PREFERENCES,
    ) -> str:
        return await self._submit(facade.hash_password, password, preferences, settings=self._settings)

    async def verify_password(
        self,
        password: str,
        encoded: str,
        known_preferences: HashPreferences | None = None,
    ) -> bool:
        return await self._submit(
            facade.verify_password, password, encoded, known_preferences, settings=self._settings,
        )

    async def needs_rehash(
        self,
        encoded: str,
        desired: HashPreferences = facade.DEFAULT_PREFERENCES,
        known_preferences: HashPreferences | None = None,
    ) -> bool:
        return await self._submit(facade.needs_rehash, encoded, desired, known_preferences)

    async def verify_and_rehash(
        self,
        password: str,
        encoded: str,
        desired: HashPreferences = facade.DEFAULT_PREFERENCES,
    ) -> tuple[bool, str | None]:
        return await self._submit(
            facade.verify_and_rehash, password, encoded, desired, settings=self._settings,
        )

    def shutdown(self, wait: bool = True) -> None:
        log.debug("hashing_pool_shutdown", max_workers=self.max_workers)
        self._executor.shutdown(wait=wait)

    async def __aenter__(self) -> "HashingPool":
        return self

    async def __aexit__(self, *_: object) -> None:
        self.shutdown(wait=True)
