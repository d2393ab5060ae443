"""Application service: Add Price Rule use case (write path).

Appends a rule to a product+brand timeline.  The timeline is read from
the store, never the cache, so the save is checked against the latest
persisted version.  The cache entry is dropped only after the save
succeeds; a ConcurrencyError leaves it untouched.
"""

from __future__ import annotations

from datetime import datetime

from prices.application.dto import TimelineDTO
from prices.domain.model.price import PriceRule
from prices.domain.model.timeline import ProductPriceTimeline
from prices.domain.model.value_objects import (
    BrandId,
    Money,
    PriceListId,
    Priority,
    ProductId,
)
from prices.domain.repository.timeline_cache import TimelineCache
from prices.domain.repository.timeline_repository import TimelineRepository
from prices.logging import get_logger

log = get_logger(__name__)


class AddPriceRuleHandler:

    def __init__(
        self,
        timeline_repo: TimelineRepository,
        timeline_cache: TimelineCache,
    ) -> None:
        self._timeline_repo = timeline_repo
        self._timeline_cache = timeline_cache

    def handle(
        self,
        product_id: int,
        brand_id: int,
        price_list_id: int,
        start_date: datetime,
        end_date: datetime,
        priority: int,
        amount: str,
    ) -> TimelineDTO:
        """Add a pricing rule and return the saved timeline."""
        product = ProductId(product_id)
        brand = BrandId(brand_id)
        rule = PriceRule(
            price_list_id=PriceListId(price_list_id),
            start_date=start_date,
            end_date=end_date,
            priority=Priority(priority),
            amount=Money.of(amount),
        )

        current = self._timeline_repo.load(product, brand)
        if current is None:
            updated = ProductPriceTimeline(product_id=product, brand_id=brand, rules=(rule,))
        else:
            updated = current.with_rule(rule)

        saved = self._timeline_repo.save(updated)
        self._timeline_cache.invalidate(product, brand)

        log.info(
            "Added price list %s to product %s, brand %s (version %d)",
            rule.price_list_id, product, brand, saved.version,
        )
        return TimelineDTO.from_domain(saved)
