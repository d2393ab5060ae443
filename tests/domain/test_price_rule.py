"""Unit tests for PriceRule and Price."""

from datetime import datetime, timedelta, timezone

import pytest

from prices.domain.exceptions import ValidationError
from prices.domain.model.price import Price, PriceRule
from prices.domain.model.value_objects import (
    BrandId,
    Money,
    PriceListId,
    Priority,
    ProductId,
)

START = datetime(2020, 6, 14, 15, 0, 0)
END = datetime(2020, 6, 14, 18, 30, 0)


def _make_rule(
    price_list: int = 2,
    start: datetime = START,
    end: datetime = END,
    priority: int = 1,
    amount: str = "25.45",
) -> PriceRule:
    """Helper to build a valid rule."""
    return PriceRule(
        price_list_id=PriceListId(price_list),
        start_date=start,
        end_date=end,
        priority=Priority(priority),
        amount=Money.of(amount),
    )


class TestPriceRuleCreation:

    def test_happy_path(self):
        rule = _make_rule()
        assert rule.price_list_id == PriceListId(2)
        assert rule.amount == Money.of("25.45")

    def test_equal_dates_rejected(self):
        with pytest.raises(ValidationError, match="before end date"):
            _make_rule(start=START, end=START)

    def test_inverted_dates_rejected(self):
        with pytest.raises(ValidationError, match="before end date"):
            _make_rule(start=END, end=START)

    def test_one_second_window_accepted(self):
        rule = _make_rule(start=START, end=START + timedelta(seconds=1))
        assert rule.end_date - rule.start_date == timedelta(seconds=1)

    @pytest.mark.parametrize("field", ["price_list_id", "priority", "amount"])
    def test_missing_field_rejected(self, field):
        kwargs = dict(
            price_list_id=PriceListId(1),
            start_date=START,
            end_date=END,
            priority=Priority(0),
            amount=Money.of("1"),
        )
        kwargs[field] = None
        with pytest.raises(ValidationError, match="required"):
            PriceRule(**kwargs)

    def test_missing_start_date_rejected(self):
        with pytest.raises(ValidationError, match="Start date is required"):
            _make_rule(start=None)

    @pytest.mark.parametrize("aware_field", ["start", "end"])
    def test_aware_date_rejected(self, aware_field):
        dates = {"start": START, "end": END}
        dates[aware_field] = dates[aware_field].replace(tzinfo=timezone.utc)
        with pytest.raises(ValidationError, match="naive local times"):
            _make_rule(**dates)

    def test_immutable(self):
        rule = _make_rule()
        with pytest.raises(AttributeError):
            rule.priority = Priority(5)


class TestPriceRuleApplicability:

    def test_start_date_is_inclusive(self):
        assert _make_rule().is_applicable_at(START)

    def test_end_date_is_inclusive(self):
        assert _make_rule().is_applicable_at(END)

    def test_inside_window(self):
        assert _make_rule().is_applicable_at(datetime(2020, 6, 14, 16, 0))

    def test_just_before_start(self):
        assert not _make_rule().is_applicable_at(START - timedelta(seconds=1))

    def test_just_after_end(self):
        assert not _make_rule().is_applicable_at(END + timedelta(seconds=1))

    def test_missing_date_rejected(self):
        with pytest.raises(ValidationError, match="Application date is required"):
            _make_rule().is_applicable_at(None)


class TestPriceRulePriority:

    def test_higher(self):
        assert _make_rule(priority=1).has_higher_priority_than(_make_rule(priority=0))
        assert not _make_rule(priority=0).has_higher_priority_than(_make_rule(priority=1))

    def test_lower(self):
        assert _make_rule(priority=0).has_lower_priority_than(_make_rule(priority=1))
        assert not _make_rule(priority=1).has_lower_priority_than(_make_rule(priority=0))

    def test_equal_priority_is_neither(self):
        a = _make_rule(price_list=1, priority=1)
        b = _make_rule(price_list=3, priority=1)
        assert not a.has_higher_priority_than(b)
        assert not a.has_lower_priority_than(b)

    def test_ignores_dates(self):
        late = _make_rule(start=datetime(2030, 1, 1), end=datetime(2030, 2, 1), priority=2)
        assert late.has_higher_priority_than(_make_rule(priority=1))

    def test_missing_other_rejected(self):
        with pytest.raises(ValidationError, match="missing rule"):
            _make_rule().has_higher_priority_than(None)
        with pytest.raises(ValidationError, match="missing rule"):
            _make_rule().has_lower_priority_than(None)


class TestPrice:

    def test_from_rule_copies_fields(self):
        rule = _make_rule()
        price = Price.from_rule(rule, ProductId(35455), BrandId(1))
        assert price.product_id == ProductId(35455)
        assert price.brand_id == BrandId(1)
        assert price.price_list_id == rule.price_list_id
        assert price.start_date == rule.start_date
        assert price.end_date == rule.end_date
        assert price.priority == rule.priority
        assert price.amount == rule.amount

    def test_inverted_dates_rejected(self):
        with pytest.raises(ValidationError, match="before end date"):
            Price(
                brand_id=BrandId(1),
                product_id=ProductId(1),
                price_list_id=PriceListId(1),
                start_date=END,
                end_date=START,
                priority=Priority(0),
                amount=Money.of("1"),
            )

    def test_missing_brand_rejected(self):
        with pytest.raises(ValidationError, match="BrandId is required"):
            Price.from_rule(_make_rule(), ProductId(1), None)

    def test_matches(self):
        price = Price.from_rule(_make_rule(), ProductId(35455), BrandId(1))
        assert price.matches(ProductId(35455), BrandId(1))
        assert not price.matches(ProductId(35455), BrandId(2))
