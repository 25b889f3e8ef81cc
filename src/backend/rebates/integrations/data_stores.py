"""Rebate and product data stores.

The calculator only depends on the three small protocols below. The in-memory
stores implement them for local runs and tests; a real persistence layer would
provide its own implementations.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Protocol

from src.backend.rebates.models.rebate_types import Product, Rebate

logger = logging.getLogger(__name__)


class RebateLookup(Protocol):
    def get_rebate(self, rebate_identifier: str) -> Rebate | None:
        """Return the rebate, or None when the identifier is unknown."""


class ProductLookup(Protocol):
    def get_product(self, product_identifier: str) -> Product | None:
        """Return the product, or None when the identifier is unknown."""


class ResultStore(Protocol):
    def store_calculation_result(self, rebate: Rebate, amount: Decimal) -> None:
        """Persist a successful calculation."""


@dataclass(frozen=True, slots=True)
class StoredCalculation:
    rebate_identifier: str
    amount: Decimal
    stored_at: datetime


class InMemoryRebateDataStore:
    """Rebate lookup plus result store, keyed by rebate identifier."""

    def __init__(self, rebates: Iterable[Rebate] = ()) -> None:
        self._lock = threading.Lock()
        self._rebates: dict[str, Rebate] = {}
        self._results: list[StoredCalculation] = []
        for rebate in rebates:
            self.add(rebate)

    def add(self, rebate: Rebate) -> None:
        with self._lock:
            self._rebates[rebate.identifier] = rebate

    def get_rebate(self, rebate_identifier: str) -> Rebate | None:
        with self._lock:
            return self._rebates.get(rebate_identifier)

    def store_calculation_result(self, rebate: Rebate, amount: Decimal) -> None:
        record = StoredCalculation(
            rebate_identifier=rebate.identifier,
            amount=amount,
            stored_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._results.append(record)
        logger.debug("Stored rebate result %s: %s", rebate.identifier, amount)

    def stored_results(self) -> list[StoredCalculation]:
        with self._lock:
            return list(self._results)


class InMemoryProductDataStore:
    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._lock = threading.Lock()
        self._products: dict[str, Product] = {}
        for product in products:
            self.add(product)

    def add(self, product: Product) -> None:
        with self._lock:
            self._products[product.identifier] = product

    def get_product(self, product_identifier: str) -> Product | None:
        with self._lock:
            return self._products.get(product_identifier)
