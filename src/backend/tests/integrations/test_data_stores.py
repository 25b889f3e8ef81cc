from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from src.backend.rebates.integrations.data_stores import (
    InMemoryProductDataStore,
    InMemoryRebateDataStore,
)
from src.backend.rebates.models.rebate_types import (
    IncentiveType,
    Product,
    Rebate,
    SupportedIncentiveType,
)


def test_rebate_store_lookup_and_replace() -> None:
    store = InMemoryRebateDataStore(
        [Rebate(identifier="R-1", incentive=IncentiveType.FIXED_CASH_AMOUNT, amount=1)]
    )
    assert store.get_rebate("R-1").amount == Decimal("1")
    assert store.get_rebate("missing") is None

    store.add(Rebate(identifier="R-1", incentive=IncentiveType.FIXED_CASH_AMOUNT, amount=2))
    assert store.get_rebate("R-1").amount == Decimal("2")


def test_rebate_store_records_results() -> None:
    before = datetime.now(timezone.utc)
    rebate = Rebate(identifier="R-1", incentive=IncentiveType.AMOUNT_PER_UOM, amount=1)
    store = InMemoryRebateDataStore([rebate])

    store.store_calculation_result(rebate, Decimal("7.5"))

    results = store.stored_results()
    assert len(results) == 1
    assert results[0].rebate_identifier == "R-1"
    assert results[0].amount == Decimal("7.5")
    assert before <= results[0].stored_at <= datetime.now(timezone.utc)

    # Returned list is a copy.
    results.clear()
    assert len(store.stored_results()) == 1


def test_product_store_lookup() -> None:
    store = InMemoryProductDataStore(
        [
            Product(
                identifier="P-1",
                supported_incentives=SupportedIncentiveType.FIXED_RATE_REBATE,
                price=10,
            )
        ]
    )
    assert store.get_product("P-1").price == Decimal("10")
    assert store.get_product("P-2") is None

    store.add(Product(identifier="P-2"))
    assert store.get_product("P-2") is not None
