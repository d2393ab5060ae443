"""Abstract repository for the ProductPriceTimeline aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from prices.domain.model.timeline import ProductPriceTimeline
from prices.domain.model.value_objects import BrandId, ProductId


class TimelineRepository(ABC):

    @abstractmethod
    def load(self, product_id: ProductId, brand_id: BrandId) -> ProductPriceTimeline | None:
        """Return the timeline for a product+brand pair, or None.

        Rules must come back in stored order.
        """

    @abstractmethod
    def save(self, timeline: ProductPriceTimeline) -> ProductPriceTimeline:
        """Persist a timeline and return it with ``version`` incremented.

        Raises ConcurrencyError if the stored version is not
        ``timeline.version`` (a new timeline must be at version 0).
        """
