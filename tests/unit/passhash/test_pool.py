"""Unit tests for the hashing pool and its queue limiter."""

from __future__ import annotations

import asyncio
import threading

import pytest

from mp_passhash import facade
from mp_passhash.config import HashingSettings
from mp_passhash.kernel.errors import HashingPoolFullError, InvalidHashFormatError
from mp_passhash.scheduling import HashingPool, QueueLimiter


async def _wait_until(predicate) -> None:
    for _ in range(1000):
        if predicate():
            return
        await asyncio.sleep(0.001)
    raise AssertionError("condition never became true")


# ---------------------------------------------------------------------------
# QueueLimiter
# ---------------------------------------------------------------------------


class TestQueueLimiter:
    def test_capacity(self) -> None:
        lim = QueueLimiter(max_concurrent=2, max_queue=3)
        assert lim.capacity == 5
        assert lim.in_flight == 0

    def test_entry_and_exit_balance(self) -> None:
        async def run() -> None:
            lim = QueueLimiter(max_concurrent=1, max_queue=1)
            async with lim:
                assert lim.in_flight == 1
            assert lim.in_flight == 0

        asyncio.run(run())

    def test_overflow_rejected(self) -> None:
        async def run() -> None:
            lim = QueueLimiter(max_concurrent=1, max_queue=0)
            async with lim:
                with pytest.raises(HashingPoolFullError) as exc_info:
                    async with lim:
                        pass
            assert exc_info.value.detail == {"max_concurrent": 1, "max_queue": 0}

        asyncio.run(run())

    def test_queued_caller_waits_for_slot(self) -> None:
        async def run() -> list[str]:
            lim = QueueLimiter(max_concurrent=1, max_queue=1)
            order: list[str] = []

            async def worker(name: str) -> None:
                async with lim:
                    order.append(f"{name}-in")
                    await asyncio.sleep(0.01)
                    order.append(f"{name}-out")

            await asyncio.gather(worker("a"), worker("b"))
            return order

        assert asyncio.run(run()) == ["a-in", "a-out", "b-in", "b-out"]

    def test_cancelled_waiter_releases_its_place(self) -> None:
        async def run() -> None:
            lim = QueueLimiter(max_concurrent=1, max_queue=1)
            async with lim:
                waiter = asyncio.create_task(lim.__aenter__())
                await _wait_until(lambda: lim.in_flight == 2)
                waiter.cancel()
                with pytest.raises(asyncio.CancelledError):
                    await waiter
                assert lim.in_flight == 1

        asyncio.run(run())


# ---------------------------------------------------------------------------
# HashingPool
# ---------------------------------------------------------------------------


class TestHashingPool:
    def test_operations(self, preferences_table) -> None:
        async def run() -> None:
            prefs = preferences_table["pbkdf2"]
            async with HashingPool(max_workers=2, max_queue=4) as pool:
                encoded = await pool.hash_password("s3cret", prefs)
                assert await pool.verify_password("s3cret", encoded) is True
                assert await pool.verify_password("nope", encoded) is False
                assert await pool.needs_rehash(encoded, prefs) is False
                assert await pool.verify_and_rehash("s3cret", encoded, prefs) == (True, None)
                assert pool.in_flight == 0

        asyncio.run(run())

    def test_concurrent_calls(self, preferences_table) -> None:
        async def run() -> list[bool]:
            prefs = preferences_table["hmac"]
            async with HashingPool(max_workers=2, max_queue=8) as pool:
                hashes = await asyncio.gather(*(pool.hash_password(f"pw{i}", prefs) for i in range(6)))
                return await asyncio.gather(
                    *(pool.verify_password(f"pw{i}", h) for i, h in enumerate(hashes))
                )

        assert asyncio.run(run()) == [True] * 6

    def test_errors_propagate(self) -> None:
        async def run() -> None:
            async with HashingPool(max_workers=1, max_queue=0) as pool:
                with pytest.raises(InvalidHashFormatError):
                    await pool.verify_password("pw", "garbage")
                assert pool.in_flight == 0

        asyncio.run(run())

    def test_full_pool_fails_fast(self, monkeypatch: pytest.MonkeyPatch) -> None:
        release = threading.Event()

        def blocking_hash(password, preferences, *, settings=None) -> str:
            release.wait(5)
            return "$done"

        monkeypatch.setattr(facade, "hash_password", blocking_hash)

        async def run() -> None:
            async with HashingPool(max_workers=1, max_queue=0) as pool:
                first = asyncio.create_task(pool.hash_password("pw"))
                await _wait_until(lambda: pool.in_flight == 1)
                try:
                    with pytest.raises(HashingPoolFullError):
                        await pool.hash_password("pw")
                finally:
                    release.set()
                assert await first == "$done"

        asyncio.run(run())

    def test_from_settings(self) -> None:
        pool = HashingPool.from_settings(HashingSettings(max_workers=3, max_queue=7))
        try:
            assert pool.max_workers == 3
            assert pool.max_queue == 7
        finally:
            pool.shutdown()
