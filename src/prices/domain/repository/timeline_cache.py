"""Abstract cache for loaded timelines, keyed by product+brand."""

from __future__ import annotations

from abc import ABC, abstractmethod

from prices.domain.model.timeline import ProductPriceTimeline
from prices.domain.model.value_objects import BrandId, ProductId


class TimelineCache(ABC):

    @abstractmethod
    def get(self, product_id: ProductId, brand_id: BrandId) -> ProductPriceTimeline | None:
        """Return the cached timeline, or None on a miss or expired entry."""

    @abstractmethod
    def put(
        self, product_id: ProductId, brand_id: BrandId, timeline: ProductPriceTimeline
    ) -> None:
        """Store or replace the entry for a key."""

    @abstractmethod
    def invalidate(self, product_id: ProductId, brand_id: BrandId) -> None:
        """Drop the entry for a key. No-op if absent."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""
