"""Unit tests for domain exceptions."""

import pickle
from datetime import datetime

from prices.domain.exceptions import DomainException, PriceNotFoundError
from prices.domain.model.value_objects import BrandId, ProductId


class TestPriceNotFoundError:

    def test_carries_query_fields(self):
        error = PriceNotFoundError(datetime(2020, 6, 14, 10), ProductId(35455), BrandId(1))
        assert isinstance(error, DomainException)
        assert error.application_date == datetime(2020, 6, 14, 10)
        assert error.product_id == ProductId(35455)
        assert error.brand_id == BrandId(1)
        assert "product 35455, brand 1 at 2020-06-14T10:00:00" in str(error)

    def test_survives_pickling(self):
        error = PriceNotFoundError(datetime(2020, 6, 14, 10), ProductId(35455), BrandId(1))
        restored = pickle.loads(pickle.dumps(error))
        assert type(restored) is PriceNotFoundError
        assert restored.application_date == error.application_date
        assert restored.product_id == ProductId(35455)
        assert restored.brand_id == BrandId(1)
        assert str(restored) == str(error)
