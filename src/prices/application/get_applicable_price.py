"""Application service: Get Applicable Price use case (query).

Read-through flow: cache first, then the store on a miss, filling the
cache before resolving.  All date-window and priority logic lives in the
ProductPriceTimeline aggregate; this handler only fetches it.
"""

from __future__ import annotations

from datetime import datetime

from prices.domain.exceptions import PriceNotFoundError, ValidationError
from prices.domain.model.price import Price
from prices.domain.model.timeline import ProductPriceTimeline
from prices.domain.model.value_objects import BrandId, ProductId
from prices.domain.repository.timeline_cache import TimelineCache
from prices.domain.repository.timeline_repository import TimelineRepository
from prices.logging import get_logger

log = get_logger(__name__)


class GetApplicablePriceHandler:

    def __init__(
        self,
        timeline_repo: TimelineRepository,
        timeline_cache: TimelineCache,
    ) -> None:
        self._timeline_repo = timeline_repo
        self._timeline_cache = timeline_cache

    def handle(
        self,
        application_date: datetime | None,
        product_id: int | None,
        brand_id: int | None,
    ) -> Price:
        """Return the price of *product_id* / *brand_id* at *application_date*.

        Raises:
            ValidationError: an argument is missing or invalid.
            PriceNotFoundError: no timeline exists for the pair, or none of
                its rules covers the date.
        """
        if application_date is None:
            raise ValidationError("Application date is required")
        if product_id is None:
            raise ValidationError("Product ID is required")
        if brand_id is None:
            raise ValidationError("Brand ID is required")
        if not isinstance(application_date, datetime):
            raise ValidationError(
                f"Application date must be a datetime, got {type(application_date).__name__}"
            )
        if application_date.tzinfo is not None:
            raise ValidationError(
                f"Application date must be a naive local time, got {application_date.isoformat()}"
            )

        product = ProductId(product_id)
        brand = BrandId(brand_id)

        timeline = self.fetch_timeline(product, brand)
        if timeline is None:
            log.info("No timeline for product %s, brand %s", product, brand)
            raise PriceNotFoundError(application_date, product, brand)

        try:
            price = timeline.get_effective_price(application_date)
        except PriceNotFoundError:
            log.info(
                "No rule of product %s, brand %s applies at %s",
                product, brand, application_date.isoformat(),
            )
            raise

        log.debug(
            "Resolved product %s, brand %s at %s to price list %s (%s)",
            product, brand, application_date.isoformat(),
            price.price_list_id, price.amount,
        )
        return price

    def fetch_timeline(
        self, product_id: ProductId, brand_id: BrandId
    ) -> ProductPriceTimeline | None:
        """Return the timeline from the cache, loading and caching it on a miss."""
        timeline = self._timeline_cache.get(product_id, brand_id)
        if timeline is not None:
            log.debug("Timeline cache hit for product %s, brand %s", product_id, brand_id)
            return timeline

        log.debug("Timeline cache miss for product %s, brand %s", product_id, brand_id)
        timeline = self._timeline_repo.load(product_id, brand_id)
        if timeline is not None:
            # Only a fully loaded timeline reaches the cache.
            self._timeline_cache.put(product_id, brand_id, timeline)
        return timeline
