"""Key-batched loader built on Strawberry's DataLoader.

Every relation kind in the schema reduces to the same shape: collect the keys
requested during one event-loop tick, run one backend ``fetch(keys)``, and
hand each key its value. The backend may return records in any order and any
number per key; this module does the grouping.

Two flavors exist:

- ``SingleValueLoader``: at most one value per key, ``None`` when missing.
- ``MultiValueLoader``: a list per key, ``[]`` when missing.

The per-loader cache is the DataLoader's own cache map. It lives as long as
the loader, and loaders are created per request.
"""

from __future__ import annotations

import contextlib
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from strawberry.dataloader import DataLoader

from social_service.features.graphql.extensions.metrics import (
    record_dataloader_batch,
    record_dataloader_failure,
    record_dataloader_load,
)

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Awaitable, Callable, Hashable, Iterable, Mapping, Sequence

logger = logging.getLogger(__name__)


class KeyBatchedLoader[K: Hashable, R, V](ABC):
    """Batching, memoizing loader for one relation kind.

    Args:
        name: Loader name used in logs and metrics
        fetch: Backend call taking the de-duplicated keys of one window
        key_of: Extracts the grouping key from a fetched record
        value_of: Maps a fetched record to the value handed to callers
        lock: Lock serializing backend calls that share one session
        max_batch_size: Split windows larger than this into several calls

    ``load`` of a cached key returns the cached (possibly still pending)
    future, so any number of loads of one key in one window reach the
    backend once. When ``fetch`` raises, every caller in the window gets
    that error and the keys are evicted, so a later ``load`` retries.
    """

    def __init__(
        self,
        name: str,
        fetch: Callable[[list[K]], Awaitable[Sequence[R]]],
        *,
        key_of: Callable[[R], K],
        value_of: Callable[[R], Any] | None = None,
        lock: asyncio.Lock | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        self.name = name
        self._fetch = fetch
        self._key_of = key_of
        self._value_of = value_of or (lambda record: record)
        self._lock = lock
        self._loader: DataLoader[K, V] = DataLoader(
            load_fn=self._batch_load,
            max_batch_size=max_batch_size,
        )

    async def _batch_load(self, keys: list[K]) -> list[V]:
        record_dataloader_batch(self.name, len(keys))
        logger.debug("dataloader.batch: %s with %d keys", self.name, len(keys))

        try:
            async with self._lock or contextlib.nullcontext():
                records = await self._fetch(keys)
        except Exception:
            logger.exception(
                "DataLoader batch failed",
                extra={"loader": self.name, "batch_size": len(keys)},
            )
            record_dataloader_failure(self.name)
            self._loader.clear_many(keys)
            raise

        grouped: dict[K, list[Any]] = defaultdict(list)
        for record in records:
            grouped[self._key_of(record)].append(self._value_of(record))
        return [self._assemble(grouped.get(key)) for key in keys]

    @abstractmethod
    def _assemble(self, values: list[Any] | None) -> V:
        """Build the value handed to callers from the records of one key."""

    async def load(self, key: K) -> V:
        """Load the value for ``key``, batched with other loads of this tick."""
        record_dataloader_load(self.name)
        return await self._loader.load(key)

    async def load_many(self, keys: Iterable[K]) -> list[V]:
        """Load values for ``keys`` in request order."""
        keys = list(keys)
        for _ in keys:
            record_dataloader_load(self.name)
        return await self._loader.load_many(keys)

    def prime(self, key: K, value: V) -> None:
        """Seed the cache with ``value``; ignored if ``key`` is already cached."""
        self._loader.prime(key, value)

    def prime_many(self, data: Mapping[K, V]) -> None:
        self._loader.prime_many(data)

    def clear(self, key: K) -> None:
        self._loader.clear(key)

    def clear_all(self) -> None:
        self._loader.clear_all()


class SingleValueLoader[K: Hashable, R](KeyBatchedLoader[K, R, Any]):
    """Loader resolving each key to one value or ``None``."""

    def _assemble(self, values: list[Any] | None) -> Any:
        return values[0] if values else None


class MultiValueLoader[K: Hashable, R](KeyBatchedLoader[K, R, list[Any]]):
    """Loader resolving each key to a list of values, ``[]`` when none match."""

    def _assemble(self, values: list[Any] | None) -> list[Any]:
        return values or []


__all__ = ["KeyBatchedLoader", "MultiValueLoader", "SingleValueLoader"]
