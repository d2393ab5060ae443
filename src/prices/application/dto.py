"""Output DTOs handed to presentation adapters.

Identifiers become ints, dates ISO strings and amounts two-decimal
strings, so callers never touch domain value objects.
"""

from __future__ import annotations

from dataclasses import dataclass

from prices.domain.model.price import Price, PriceRule
from prices.domain.model.timeline import ProductPriceTimeline

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True)
class PriceDTO:
    """Output: the price that applies to a product at a given date."""

    product_id: int
    brand_id: int
    price_list: int
    start_date: str  # e.g. "2020-06-14T00:00:00"
    end_date: str
    price: str  # e.g. "35.50"

    @staticmethod
    def from_domain(price: Price) -> PriceDTO:
        return PriceDTO(
            product_id=price.product_id.value,
            brand_id=price.brand_id.value,
            price_list=price.price_list_id.value,
            start_date=price.start_date.strftime(DATE_FORMAT),
            end_date=price.end_date.strftime(DATE_FORMAT),
            price=str(price.amount),
        )


@dataclass(frozen=True)
class PriceRuleDTO:
    """Output: one rule of a timeline as displayed to the user."""

    price_list: int
    start_date: str
    end_date: str
    priority: int
    price: str

    @staticmethod
    def from_domain(rule: PriceRule) -> PriceRuleDTO:
        return PriceRuleDTO(
            price_list=rule.price_list_id.value,
            start_date=rule.start_date.strftime(DATE_FORMAT),
            end_date=rule.end_date.strftime(DATE_FORMAT),
            priority=rule.priority.value,
            price=str(rule.amount),
        )


@dataclass(frozen=True)
class TimelineDTO:
    """Output: a product+brand timeline with its rules in stored order."""

    product_id: int
    brand_id: int
    version: int
    rules: list[PriceRuleDTO]

    @staticmethod
    def from_domain(timeline: ProductPriceTimeline) -> TimelineDTO:
        return TimelineDTO(
            product_id=timeline.product_id.value,
            brand_id=timeline.brand_id.value,
            version=timeline.version,
            rules=[PriceRuleDTO.from_domain(rule) for rule in timeline.rules],
        )
