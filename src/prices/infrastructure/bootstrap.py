"""Composition root: builds the store, the cache and the handlers on top.

Nothing outside this module and the CLI imports infrastructure classes.
Handlers receive the ports through their constructors.

The timeline cache is owned by a PricingContext: it is created with the
context at process start and cleared by ``close()`` at shutdown, so tests
and embedding applications can build their own instead of sharing one.
"""

from __future__ import annotations

from prices.application.add_price_rule import AddPriceRuleHandler
from prices.application.get_applicable_price import GetApplicablePriceHandler
from prices.application.show_timeline import ShowTimelineHandler
from prices.config import Settings, get_settings
from prices.domain.repository.timeline_cache import TimelineCache
from prices.domain.repository.timeline_repository import TimelineRepository
from prices.infrastructure.cache.in_memory_timeline_cache import InMemoryTimelineCache
from prices.infrastructure.persistence.json_timeline_repository import (
    JsonTimelineRepository,
)
from prices.logging import get_logger

log = get_logger(__name__)


class PricingContext:

    def __init__(
        self,
        timeline_repo: TimelineRepository,
        timeline_cache: TimelineCache,
    ) -> None:
        self.timeline_repo = timeline_repo
        self.timeline_cache = timeline_cache
        self.get_applicable_price = GetApplicablePriceHandler(timeline_repo, timeline_cache)
        self.show_timeline = ShowTimelineHandler(self.get_applicable_price)
        self.add_price_rule = AddPriceRuleHandler(timeline_repo, timeline_cache)

    def close(self) -> None:
        if isinstance(self.timeline_cache, InMemoryTimelineCache):
            stats = self.timeline_cache.stats()
            log.debug(
                "Timeline cache stats: %d hits, %d misses, %d evictions, %d expirations",
                stats.hits, stats.misses, stats.evictions, stats.expirations,
            )
        self.timeline_cache.clear()

    def __enter__(self) -> PricingContext:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def timeline_repository(settings: Settings) -> JsonTimelineRepository:
    return JsonTimelineRepository(settings.timelines_file)


def timeline_cache(settings: Settings) -> InMemoryTimelineCache:
    return InMemoryTimelineCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_size=settings.cache_max_size,
    )


def build_context(settings: Settings | None = None) -> PricingContext:
    settings = settings or get_settings()
    return PricingContext(
        timeline_repo=timeline_repository(settings),
        timeline_cache=timeline_cache(settings),
    )
