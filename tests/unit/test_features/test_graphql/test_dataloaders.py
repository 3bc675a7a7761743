"""Unit tests for the key-batched loader core.

The loaders are driven with in-memory fetch functions that record every
call, so batching and caching can be asserted without a database.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from social_service.features.graphql.dataloaders import (
    KeyBatchedLoader,
    MultiValueLoader,
    SingleValueLoader,
)


@dataclass(frozen=True)
class Row:
    key: int
    value: str


@dataclass
class FakeBackend:
    """Fetch function over a fixed table that records the keys of each call."""

    rows: list[Row]
    calls: list[list[int]] = field(default_factory=list)
    fail_next: bool = False
    lock: asyncio.Lock | None = None

    async def fetch(self, keys: list[int]) -> list[Row]:
        if self.lock is not None:
            assert self.lock.locked()
        self.calls.append(list(keys))
        await asyncio.sleep(0)
        if self.fail_next:
            self.fail_next = False
            msg = "backend unavailable"
            raise RuntimeError(msg)
        # Reverse order: callers must not rely on backend ordering
        return [row for row in reversed(self.rows) if row.key in keys]


ROWS = [Row(1, "a"), Row(2, "b"), Row(2, "b2"), Row(3, "c")]


def single(backend: FakeBackend, **kwargs) -> SingleValueLoader[int, Row]:
    return SingleValueLoader(
        "test_single", backend.fetch, key_of=lambda row: row.key,
        value_of=lambda row: row.value, **kwargs,
    )


def multi(backend: FakeBackend, **kwargs) -> MultiValueLoader[int, Row]:
    return MultiValueLoader(
        "test_multi", backend.fetch, key_of=lambda row: row.key,
        value_of=lambda row: row.value, **kwargs,
    )


@pytest.mark.asyncio
class TestBatching:
    async def test_loads_in_one_tick_share_one_call(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        results = await asyncio.gather(loader.load(1), loader.load(3), loader.load(1))

        assert results == ["a", "c", "a"]
        assert len(backend.calls) == 1
        assert sorted(backend.calls[0]) == [1, 3]

    async def test_keys_are_deduplicated(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        await asyncio.gather(*(loader.load(3) for _ in range(10)))

        assert backend.calls == [[3]]

    async def test_results_follow_request_order(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        assert await loader.load_many([3, 1]) == ["c", "a"]

    async def test_missing_key_resolves_to_none(self) -> None:
        loader = single(FakeBackend(ROWS))

        assert await loader.load_many([1, 99]) == ["a", None]

    async def test_multi_value_groups_records(self) -> None:
        loader = multi(FakeBackend(ROWS))

        values = await loader.load_many([2, 1, 99])

        assert sorted(values[0]) == ["b", "b2"]
        assert values[1] == ["a"]
        assert values[2] == []

    async def test_max_batch_size_chunks_keys(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend, max_batch_size=2)

        results = await loader.load_many([1, 2, 3])

        assert results == ["a", "b2", "c"]
        assert [len(call) for call in backend.calls] == [2, 1]

    async def test_fetch_runs_under_lock(self) -> None:
        lock = asyncio.Lock()
        backend = FakeBackend(ROWS, lock=lock)
        loader = single(backend, lock=lock)

        assert await loader.load(1) == "a"
        assert not lock.locked()


@pytest.mark.asyncio
class TestCaching:
    async def test_cached_key_is_not_refetched(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        await loader.load(1)
        await loader.load(1)

        assert backend.calls == [[1]]

    async def test_missing_key_is_cached_too(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        assert await loader.load(42) is None
        assert await loader.load(42) is None
        assert len(backend.calls) == 1

    async def test_primed_key_skips_backend(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        loader.prime(7, "primed")

        assert await loader.load(7) == "primed"
        assert backend.calls == []

    async def test_prime_does_not_overwrite(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        await loader.load(1)
        loader.prime(1, "other")

        assert await loader.load(1) == "a"

    async def test_clear_forces_refetch(self) -> None:
        backend = FakeBackend(ROWS)
        loader = single(backend)

        await loader.load(1)
        loader.clear(1)
        await loader.load(1)

        assert backend.calls == [[1], [1]]

    async def test_loaders_do_not_share_cache(self) -> None:
        backend = FakeBackend(ROWS)
        first = single(backend)
        second = single(backend)

        first.prime(1, "only in first")

        assert await second.load(1) == "a"
        assert await first.load(1) == "only in first"
        assert backend.calls == [[1]]


@pytest.mark.asyncio
class TestFailures:
    async def test_failure_reaches_every_caller(self) -> None:
        backend = FakeBackend(ROWS, fail_next=True)
        loader = single(backend)

        results = await asyncio.gather(
            loader.load(1), loader.load(2), return_exceptions=True,
        )

        assert all(isinstance(r, RuntimeError) for r in results)
        assert len(backend.calls) == 1

    async def test_failed_keys_are_evicted(self) -> None:
        backend = FakeBackend(ROWS, fail_next=True)
        loader = single(backend)

        with pytest.raises(RuntimeError, match="backend unavailable"):
            await loader.load(1)

        assert await loader.load(1) == "a"
        assert backend.calls == [[1], [1]]


class TestBaseLoader:
    def test_base_loader_is_abstract(self) -> None:
        backend = FakeBackend(ROWS)

        with pytest.raises(TypeError, match="abstract"):
            KeyBatchedLoader("bare", backend.fetch, key_of=lambda row: row.key)
