"""Pricing rules and resolved prices.

A PriceRule is one time-bounded entry of a product's price timeline. It
knows nothing about the product or brand it belongs to; those live on the
owning ProductPriceTimeline.  A Price is what resolution hands back: the
winning rule combined with its timeline's identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from prices.domain.exceptions import ValidationError
from prices.domain.model.value_objects import (
    BrandId,
    Money,
    PriceListId,
    Priority,
    ProductId,
)


def _validate_window(start_date: datetime, end_date: datetime) -> None:
    if not isinstance(start_date, datetime):
        raise ValidationError("Start date is required")
    if not isinstance(end_date, datetime):
        raise ValidationError("End date is required")
    if start_date.tzinfo is not None or end_date.tzinfo is not None:
        raise ValidationError(
            f"Rule dates must be naive local times "
            f"(start {start_date.isoformat()}, end {end_date.isoformat()})"
        )
    if not start_date < end_date:
        raise ValidationError(
            f"Start date must be before end date "
            f"(start {start_date.isoformat()}, end {end_date.isoformat()})"
        )


@dataclass(frozen=True)
class PriceRule:
    """A single pricing rule within a timeline.

    Invariants:
    - every field is present
    - both dates are naive
    - ``start_date`` is strictly before ``end_date``
    """

    price_list_id: PriceListId
    start_date: datetime
    end_date: datetime
    priority: Priority
    amount: Money

    def __post_init__(self) -> None:
        if self.price_list_id is None:
            raise ValidationError("PriceListId is required")
        if self.priority is None:
            raise ValidationError("Priority is required")
        if self.amount is None:
            raise ValidationError("Amount is required")
        _validate_window(self.start_date, self.end_date)

    def is_applicable_at(self, application_date: datetime) -> bool:
        """True if *application_date* falls in ``[start_date, end_date]``.

        Both ends are inclusive.
        """
        if application_date is None:
            raise ValidationError("Application date is required")
        return self.start_date <= application_date <= self.end_date

    def has_higher_priority_than(self, other: PriceRule) -> bool:
        if other is None:
            raise ValidationError("Cannot compare priority with a missing rule")
        return self.priority.is_higher_than(other.priority)

    def has_lower_priority_than(self, other: PriceRule) -> bool:
        if other is None:
            raise ValidationError("Cannot compare priority with a missing rule")
        return self.priority.is_lower_than(other.priority)


@dataclass(frozen=True)
class Price:
    """A resolved price: a rule qualified with its product and brand.

    Produced by resolution, never stored.
    """

    brand_id: BrandId
    product_id: ProductId
    price_list_id: PriceListId
    start_date: datetime
    end_date: datetime
    priority: Priority
    amount: Money

    def __post_init__(self) -> None:
        if self.brand_id is None:
            raise ValidationError("BrandId is required")
        if self.product_id is None:
            raise ValidationError("ProductId is required")
        if self.price_list_id is None:
            raise ValidationError("PriceListId is required")
        if self.priority is None:
            raise ValidationError("Priority is required")
        if self.amount is None:
            raise ValidationError("Amount is required")
        _validate_window(self.start_date, self.end_date)

    @staticmethod
    def from_rule(rule: PriceRule, product_id: ProductId, brand_id: BrandId) -> Price:
        return Price(
            brand_id=brand_id,
            product_id=product_id,
            price_list_id=rule.price_list_id,
            start_date=rule.start_date,
            end_date=rule.end_date,
            priority=rule.priority,
            amount=rule.amount,
        )

    def matches(self, product_id: ProductId, brand_id: BrandId) -> bool:
        return self.product_id == product_id and self.brand_id == brand_id
