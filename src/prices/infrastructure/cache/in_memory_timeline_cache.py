"""In-process implementation of TimelineCache.

Entries expire ``ttl_seconds`` after they were written and the least
recently used entry is evicted once ``max_size`` is reached.  Timelines
are immutable, so the lock only guards the index; cached values are
handed out without copying.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from prices.domain.model.timeline import ProductPriceTimeline
from prices.domain.model.value_objects import BrandId, ProductId
from prices.domain.repository.timeline_cache import TimelineCache
from prices.logging import get_logger

log = get_logger(__name__)

_Key = tuple[int, int]


@dataclass(frozen=True)
class CacheStats:
    """Counters since the cache was built.

    Expired entries count as misses and as expirations.
    """

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.requests if self.requests else 0.0


class InMemoryTimelineCache(TimelineCache):

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_size: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._ttl = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (expires_at, timeline), oldest use first
        self._entries: OrderedDict[_Key, tuple[float, ProductPriceTimeline]] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    # --- TimelineCache interface ----------------------------------------------

    def get(self, product_id: ProductId, brand_id: BrandId) -> ProductPriceTimeline | None:
        key = self._key(product_id, brand_id)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            expires_at, timeline = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                self._misses += 1
                self._expirations += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return timeline

    def put(
        self, product_id: ProductId, brand_id: BrandId, timeline: ProductPriceTimeline
    ) -> None:
        key = self._key(product_id, brand_id)
        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, timeline)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                log.debug("Evicted timeline %s from cache", evicted)

    def invalidate(self, product_id: ProductId, brand_id: BrandId) -> None:
        with self._lock:
            self._entries.pop(self._key(product_id, brand_id), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # --- Introspection --------------------------------------------------------

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                expirations=self._expirations,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @staticmethod
    def _key(product_id: ProductId, brand_id: BrandId) -> _Key:
        return (product_id.value, brand_id.value)
