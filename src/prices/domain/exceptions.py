"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prices.domain.model.value_objects import BrandId, ProductId


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required argument is missing or an invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConcurrencyError(DomainException):
    """A timeline was saved against a stale version."""


class PriceNotFoundError(DomainException):
    """No pricing rule applies to the requested product, brand and date.

    Raised both when no timeline exists for the product+brand pair and when
    a timeline exists but none of its rules covers the date.
    """

    def __init__(
        self, application_date: datetime, product_id: ProductId, brand_id: BrandId
    ) -> None:
        self.application_date = application_date
        self.product_id = product_id
        self.brand_id = brand_id
        super().__init__(
            f"No applicable price found for product {product_id}, "
            f"brand {brand_id} at {application_date.isoformat()}"
        )

    def __reduce__(self):
        return self.__class__, (self.application_date, self.product_id, self.brand_id)
