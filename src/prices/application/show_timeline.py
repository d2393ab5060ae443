"""Application service: Show Timeline use case (query)."""

from __future__ import annotations

from prices.application.dto import TimelineDTO
from prices.application.get_applicable_price import GetApplicablePriceHandler
from prices.domain.exceptions import EntityNotFoundError
from prices.domain.model.value_objects import BrandId, ProductId


class ShowTimelineHandler:
    """List every rule of a product+brand timeline.

    Reads through the same cache as price resolution so it shows what
    queries currently see, not necessarily the latest stored version.
    """

    def __init__(self, price_handler: GetApplicablePriceHandler) -> None:
        self._price_handler = price_handler

    def handle(self, product_id: int, brand_id: int) -> TimelineDTO:
        product = ProductId(product_id)
        brand = BrandId(brand_id)
        timeline = self._price_handler.fetch_timeline(product, brand)
        if timeline is None:
            raise EntityNotFoundError(
                f"No price timeline for product {product}, brand {brand}"
            )
        return TimelineDTO.from_domain(timeline)
