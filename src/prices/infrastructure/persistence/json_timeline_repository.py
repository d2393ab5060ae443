"""JSON-file-backed implementation of TimelineRepository.

One record per product+brand pair; the rules of a pair are stored
together as a list, in the order they were added.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path

from prices.domain.exceptions import ConcurrencyError, ValidationError
from prices.domain.model.price import PriceRule
from prices.domain.model.timeline import ProductPriceTimeline
from prices.domain.model.value_objects import (
    BrandId,
    Money,
    PriceListId,
    Priority,
    ProductId,
)
from prices.domain.repository.timeline_repository import TimelineRepository
from prices.logging import get_logger

log = get_logger(__name__)


class JsonTimelineRepository(TimelineRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        # Serializes read-modify-write in save() within this process
        self._write_lock = threading.Lock()
        self._ensure_file()

    # --- TimelineRepository interface -----------------------------------------

    def load(self, product_id: ProductId, brand_id: BrandId) -> ProductPriceTimeline | None:
        raw = self._find_raw(self._load_raw(), product_id.value, brand_id.value)
        if raw is None:
            return None
        log.debug("Loaded timeline for product %s, brand %s from %s",
                  product_id, brand_id, self._file_path)
        return self._to_domain(raw)

    def save(self, timeline: ProductPriceTimeline) -> ProductPriceTimeline:
        with self._write_lock:
            records = self._load_raw()
            product, brand = timeline.key
            existing = self._find_raw(records, product, brand)
            stored_version = existing["version"] if existing is not None else 0

            if stored_version != timeline.version:
                raise ConcurrencyError(
                    f"Timeline for product {product}, brand {brand} is at version "
                    f"{stored_version}, cannot save changes made to version {timeline.version}"
                )

            saved = timeline.with_version(timeline.version + 1)
            if existing is not None:
                records[records.index(existing)] = self._to_raw(saved)
            else:
                records.append(self._to_raw(saved))
            self._persist_raw(records)
        return saved

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(timeline: ProductPriceTimeline) -> dict:
        return {
            "product_id": timeline.product_id.value,
            "brand_id": timeline.brand_id.value,
            "version": timeline.version,
            "price_rules": [
                {
                    "price_list_id": rule.price_list_id.value,
                    "start_date": rule.start_date.isoformat(),
                    "end_date": rule.end_date.isoformat(),
                    "priority": rule.priority.value,
                    "amount": str(rule.amount),
                }
                for rule in timeline.rules
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> ProductPriceTimeline:
        rules = [
            PriceRule(
                price_list_id=PriceListId(r["price_list_id"]),
                start_date=_parse_date(r["start_date"]),
                end_date=_parse_date(r["end_date"]),
                priority=Priority(r["priority"]),
                amount=Money.of(r["amount"]),
            )
            for r in raw["price_rules"]
        ]
        return ProductPriceTimeline(
            product_id=ProductId(raw["product_id"]),
            brand_id=BrandId(raw["brand_id"]),
            rules=rules,
            version=raw.get("version", 0),
        )

    @staticmethod
    def _find_raw(records: list[dict], product_id: int, brand_id: int) -> dict | None:
        for raw in records:
            if raw["product_id"] == product_id and raw["brand_id"] == brand_id:
                return raw
        return None

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def _parse_date(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid rule date: {value!r}") from exc
