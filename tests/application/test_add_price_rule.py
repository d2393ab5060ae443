"""Tests for the AddPriceRule and ShowTimeline use cases."""

from datetime import datetime

import pytest

from prices.application.add_price_rule import AddPriceRuleHandler
from prices.application.get_applicable_price import GetApplicablePriceHandler
from prices.application.show_timeline import ShowTimelineHandler
from prices.domain.exceptions import ConcurrencyError, EntityNotFoundError, ValidationError
from prices.domain.model.value_objects import BrandId, Money, PriceListId, ProductId
from tests.fakes import FakeTimelineCache, FakeTimelineRepository


def _setup():
    repo = FakeTimelineRepository()
    cache = FakeTimelineCache()
    return AddPriceRuleHandler(repo, cache), GetApplicablePriceHandler(repo, cache), repo, cache


def _add(handler: AddPriceRuleHandler, price_list: int, start: str, end: str,
         priority: int, amount: str):
    return handler.handle(
        product_id=35455,
        brand_id=1,
        price_list_id=price_list,
        start_date=datetime.fromisoformat(start),
        end_date=datetime.fromisoformat(end),
        priority=priority,
        amount=amount,
    )


class TestAddPriceRule:

    def test_first_rule_creates_timeline_at_version_1(self):
        add, _, repo, _ = _setup()
        dto = _add(add, 1, "2020-06-14T00:00:00", "2020-12-31T23:59:59", 0, "35.50")
        assert dto.version == 1
        assert [r.price_list for r in dto.rules] == [1]
        assert repo.load(ProductId(35455), BrandId(1)).version == 1

    def test_rules_appended_in_order_and_version_incremented(self):
        add, _, _, _ = _setup()
        _add(add, 1, "2020-06-14T00:00:00", "2020-12-31T23:59:59", 0, "35.50")
        dto = _add(add, 2, "2020-06-14T15:00:00", "2020-06-14T18:30:00", 1, "25.45")
        assert dto.version == 2
        assert [r.price_list for r in dto.rules] == [1, 2]
        assert dto.rules[1].price == "25.45"

    def test_invalidates_cache_so_queries_see_new_rule(self):
        add, query, repo, cache = _setup()
        _add(add, 1, "2020-06-14T00:00:00", "2020-12-31T23:59:59", 0, "35.50")

        date = datetime(2020, 6, 14, 16, 0)
        assert query.handle(date, 35455, 1).price_list_id == PriceListId(1)

        _add(add, 2, "2020-06-14T15:00:00", "2020-06-14T18:30:00", 1, "25.45")
        assert cache.invalidated == [(35455, 1), (35455, 1)]

        price = query.handle(date, 35455, 1)
        assert price.price_list_id == PriceListId(2)
        assert price.amount == Money.of("25.45")

    def test_invalid_window_rejected_before_touching_store(self):
        add, _, repo, cache = _setup()
        with pytest.raises(ValidationError, match="before end date"):
            _add(add, 1, "2020-06-15T00:00:00", "2020-06-14T00:00:00", 0, "10")
        assert repo.save_calls == 0
        assert cache.invalidated == []

    def test_aware_dates_rejected_before_touching_store(self):
        add, _, repo, cache = _setup()
        with pytest.raises(ValidationError, match="naive local times"):
            _add(add, 1, "2020-06-14T00:00:00+02:00", "2020-06-15T00:00:00+02:00", 0, "10")
        assert repo.save_calls == 0
        assert cache.invalidated == []

    def test_negative_amount_rejected(self):
        add, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            _add(add, 1, "2020-06-14T00:00:00", "2020-06-15T00:00:00", 0, "-1")

    def test_version_conflict_leaves_cache_untouched(self):
        add, _, repo, cache = _setup()

        class StaleRepository(FakeTimelineRepository):
            def save(self, timeline):
                raise ConcurrencyError("stale")

        handler = AddPriceRuleHandler(StaleRepository(), cache)
        with pytest.raises(ConcurrencyError):
            _add(handler, 1, "2020-06-14T00:00:00", "2020-06-15T00:00:00", 0, "10")
        assert cache.invalidated == []


class TestShowTimeline:

    def test_lists_rules_in_stored_order(self):
        add, query, _, _ = _setup()
        _add(add, 4, "2020-06-15T16:00:00", "2020-12-31T23:59:59", 1, "38.95")
        _add(add, 1, "2020-06-14T00:00:00", "2020-12-31T23:59:59", 0, "35.50")

        dto = ShowTimelineHandler(query).handle(35455, 1)
        assert dto.product_id == 35455
        assert dto.brand_id == 1
        assert [r.price_list for r in dto.rules] == [4, 1]
        assert dto.rules[0].start_date == "2020-06-15T16:00:00"

    def test_unknown_timeline_rejected(self):
        _, query, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="No price timeline"):
            ShowTimelineHandler(query).handle(1, 1)

    def test_reads_through_cache(self):
        add, query, repo, cache = _setup()
        _add(add, 1, "2020-06-14T00:00:00", "2020-12-31T23:59:59", 0, "35.50")
        loads = repo.load_calls
        handler = ShowTimelineHandler(query)
        handler.handle(35455, 1)
        handler.handle(35455, 1)
        assert repo.load_calls == loads + 1
