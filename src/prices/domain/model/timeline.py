"""ProductPriceTimeline aggregate: every pricing rule for one product+brand.

The whole rule set for a product+brand pair is loaded and cached as one
value, so a query costs one keyed lookup plus an in-memory scan over a
handful of rules.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from prices.domain.exceptions import PriceNotFoundError, ValidationError
from prices.domain.model.price import Price, PriceRule
from prices.domain.model.value_objects import BrandId, ProductId


@dataclass(frozen=True)
class ProductPriceTimeline:
    """Aggregate root for pricing rules.

    Immutable: a change to the rule set yields a new timeline (see
    ``with_rule``) which the repository persists with an incremented
    ``version``.  Readers can therefore share a loaded timeline across
    threads without locking.

    ``rules`` keeps the order it was given, normally the order the store
    returned.  That order is significant: it decides ties between rules of
    equal priority (see ``find_effective_rule``).

    Invariants:
    - ``product_id`` and ``brand_id`` are present
    - there is at least one rule
    - ``version`` is a non-negative integer
    """

    product_id: ProductId
    brand_id: BrandId
    rules: tuple[PriceRule, ...]  # any iterable is accepted and frozen to a tuple
    version: int = 0

    def __post_init__(self) -> None:
        if self.product_id is None:
            raise ValidationError("ProductId is required")
        if self.brand_id is None:
            raise ValidationError("BrandId is required")
        if self.rules is None:
            raise ValidationError("Rules are required")
        rules = tuple(self.rules)
        if not rules:
            raise ValidationError("Timeline must contain at least one pricing rule")
        if any(not isinstance(rule, PriceRule) for rule in rules):
            raise ValidationError("Timeline rules must be PriceRule instances")
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            raise ValidationError(f"Version must be an integer, got {self.version!r}")
        if self.version < 0:
            raise ValidationError(f"Version cannot be negative, got {self.version}")
        object.__setattr__(self, "rules", rules)

    # --- Resolution -----------------------------------------------------------

    def find_effective_rule(self, application_date: datetime) -> PriceRule | None:
        """Return the winning rule at *application_date*, or None.

        A single pass keeps the highest-priority applicable rule.  Only a
        strictly higher priority replaces the current candidate, so among
        rules sharing the top priority the first one in ``rules`` wins.
        """
        if application_date is None:
            raise ValidationError("Application date is required")

        best: PriceRule | None = None
        for rule in self.rules:
            if not rule.is_applicable_at(application_date):
                continue
            if best is None or rule.has_higher_priority_than(best):
                best = rule
        return best

    def get_effective_price(self, application_date: datetime) -> Price:
        """Resolve the price that applies at *application_date*.

        Raises PriceNotFoundError if no rule covers the date.
        """
        rule = self.find_effective_rule(application_date)
        if rule is None:
            raise PriceNotFoundError(application_date, self.product_id, self.brand_id)
        return Price.from_rule(rule, self.product_id, self.brand_id)

    # --- Successor values -----------------------------------------------------

    def with_rule(self, rule: PriceRule) -> ProductPriceTimeline:
        """Return a new timeline with *rule* appended (same version)."""
        if rule is None:
            raise ValidationError("Rule is required")
        return replace(self, rules=self.rules + (rule,))

    def with_version(self, version: int) -> ProductPriceTimeline:
        return replace(self, version=version)

    # --- Queries --------------------------------------------------------------

    @property
    def rule_count(self) -> int:
        return len(self.rules)

    @property
    def key(self) -> tuple[int, int]:
        return (self.product_id.value, self.brand_id.value)

    def matches(self, product_id: ProductId, brand_id: BrandId) -> bool:
        return self.product_id == product_id and self.brand_id == brand_id

    def __str__(self) -> str:
        return (
            f"ProductPriceTimeline(product={self.product_id}, brand={self.brand_id}, "
            f"rules={self.rule_count}, version={self.version})"
        )
