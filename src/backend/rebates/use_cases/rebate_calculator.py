"""Rebate calculation engine.

Looks up a rebate and a product, picks the calculation rule for the rebate's
incentive type and stores the amount when the rule applies.

Each rule has the signature:
    def rule(rebate: Rebate, product: Product, volume: Decimal) -> CalculateRebateResult

Rules only validate and compute. Lookups and persistence stay in
`RebateCalculator.calculate`, so rules remain pure functions of their inputs.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable

from src.backend.rebates.integrations.data_stores import (
    ProductLookup,
    RebateLookup,
    ResultStore,
)
from src.backend.rebates.models.rebate_types import (
    CalculateRebateRequest,
    CalculateRebateResult,
    IncentiveType,
    Product,
    Rebate,
)

logger = logging.getLogger(__name__)

CalculationRule = Callable[[Rebate, Product, Decimal], CalculateRebateResult]


class CalculationRegistry:
    def __init__(self) -> None:
        self._rules: dict[IncentiveType, CalculationRule] = {}

    def register(self, incentive: IncentiveType) -> Callable[[CalculationRule], CalculationRule]:
        def _decorator(fn: CalculationRule) -> CalculationRule:
            self._rules[incentive] = fn
            return fn

        return _decorator

    def get(self, incentive: IncentiveType) -> CalculationRule | None:
        return self._rules.get(incentive)

    def implemented_types(self) -> set[IncentiveType]:
        return set(self._rules.keys())


class RebateCalculator:
    """Compute rebate amounts against injected rebate/product stores."""

    def __init__(
        self,
        *,
        rebate_lookup: RebateLookup,
        product_lookup: ProductLookup,
        result_store: ResultStore,
        registry: CalculationRegistry | None = None,
    ) -> None:
        self._rebate_lookup = rebate_lookup
        self._product_lookup = product_lookup
        self._result_store = result_store
        self._registry = registry or _default_registry()

    @property
    def registry(self) -> CalculationRegistry:
        return self._registry

    def calculate(self, request: CalculateRebateRequest | None) -> CalculateRebateResult:
        if request is None:
            logger.debug("No rebate request given")
            return CalculateRebateResult.failed()

        rebate = self._rebate_lookup.get_rebate(request.rebate_identifier)
        if rebate is None:
            logger.debug("Rebate not found: %s", request.rebate_identifier)
            return CalculateRebateResult.failed()

        product = self._product_lookup.get_product(request.product_identifier)
        if product is None:
            logger.debug("Product not found: %s", request.product_identifier)
            return CalculateRebateResult.failed()

        rule = self._registry.get(rebate.incentive)
        if rule is None:
            logger.warning(
                "No calculation rule for incentive %r (rebate %s)",
                rebate.incentive,
                rebate.identifier,
            )
            return CalculateRebateResult.failed()

        result = rule(rebate, product, request.volume)
        if not result.success:
            logger.debug(
                "Rebate %s not applicable to product %s (%s)",
                rebate.identifier,
                product.identifier,
                rebate.incentive,
            )
            return result

        # Store errors propagate to the caller.
        self._result_store.store_calculation_result(rebate, result.rebate_amount)
        logger.debug(
            "Rebate %s on product %s: %s",
            rebate.identifier,
            product.identifier,
            result.rebate_amount,
        )
        return result


def _default_registry() -> CalculationRegistry:
    reg = CalculationRegistry()

    @reg.register(IncentiveType.FIXED_CASH_AMOUNT)
    def _calc_fixed_cash_amount(
        rebate: Rebate, product: Product, volume: Decimal
    ) -> CalculateRebateResult:
        if not product.supports(IncentiveType.FIXED_CASH_AMOUNT) or rebate.amount == 0:
            return CalculateRebateResult.failed()
        return CalculateRebateResult.succeeded(rebate.amount)

    @reg.register(IncentiveType.FIXED_RATE_REBATE)
    def _calc_fixed_rate_rebate(
        rebate: Rebate, product: Product, volume: Decimal
    ) -> CalculateRebateResult:
        # percentage is applied as given: 10 means x10, not 10%.
        if (
            not product.supports(IncentiveType.FIXED_RATE_REBATE)
            or rebate.percentage == 0
            or product.price == 0
            or volume == 0
        ):
            return CalculateRebateResult.failed()
        return CalculateRebateResult.succeeded(product.price * rebate.percentage * volume)

    @reg.register(IncentiveType.AMOUNT_PER_UOM)
    def _calc_amount_per_uom(
        rebate: Rebate, product: Product, volume: Decimal
    ) -> CalculateRebateResult:
        if (
            not product.supports(IncentiveType.AMOUNT_PER_UOM)
            or rebate.amount == 0
            or volume == 0
        ):
            return CalculateRebateResult.failed()
        return CalculateRebateResult.succeeded(rebate.amount * volume)

    return reg
