"""Value types for rebate calculation.

All money and quantity fields are `Decimal`. Inputs given as int or str are
converted on construction; floats go through `str()` first so `0.1` becomes
`Decimal("0.1")` rather than its binary expansion.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum, Flag
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any, *, field_name: str) -> Decimal:
    result: Decimal | None = None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"{field_name} must be numeric, got bool")
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            pass
    if result is None:
        raise ValueError(f"{field_name} must be numeric, got {value!r}")
    # NaN and Infinity would slip past the rules' zero checks.
    if not result.is_finite():
        raise ValueError(f"{field_name} must be a finite number, got {value!r}")
    return result


class IncentiveType(str, Enum):
    FIXED_RATE_REBATE = "FixedRateRebate"
    AMOUNT_PER_UOM = "AmountPerUom"
    FIXED_CASH_AMOUNT = "FixedCashAmount"


class SupportedIncentiveType(Flag):
    NONE = 0
    FIXED_RATE_REBATE = 1 << 0
    AMOUNT_PER_UOM = 1 << 1
    FIXED_CASH_AMOUNT = 1 << 2

    @classmethod
    def for_incentive(cls, incentive: IncentiveType) -> "SupportedIncentiveType":
        return cls[IncentiveType(incentive).name]

    @classmethod
    def from_incentives(cls, incentives: Any) -> "SupportedIncentiveType":
        """Combine incentive names (e.g. ``["FixedRateRebate", "AmountPerUom"]``) into one flag set."""
        flags = cls.NONE
        for incentive in incentives:
            flags |= cls.for_incentive(IncentiveType(incentive))
        return flags


@dataclass(frozen=True, slots=True)
class Rebate:
    identifier: str
    incentive: IncentiveType
    amount: Decimal = ZERO
    percentage: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount, field_name="amount"))
        object.__setattr__(
            self, "percentage", to_decimal(self.percentage, field_name="percentage")
        )


@dataclass(frozen=True, slots=True)
class Product:
    identifier: str
    supported_incentives: SupportedIncentiveType = SupportedIncentiveType.NONE
    price: Decimal = ZERO
    uom: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_decimal(self.price, field_name="price"))

    def supports(self, incentive: IncentiveType) -> bool:
        flag = SupportedIncentiveType.for_incentive(incentive)
        return (self.supported_incentives & flag) == flag


@dataclass(frozen=True, slots=True)
class CalculateRebateRequest:
    rebate_identifier: str = ""
    product_identifier: str = ""
    volume: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "volume", to_decimal(self.volume, field_name="volume"))


@dataclass(frozen=True, slots=True)
class CalculateRebateResult:
    success: bool = False
    rebate_amount: Decimal = ZERO

    def __post_init__(self) -> None:
        amount = to_decimal(self.rebate_amount, field_name="rebate_amount")
        if not self.success and amount != 0:
            raise ValueError("A failed rebate result must carry a zero amount")
        object.__setattr__(self, "rebate_amount", amount)

    @classmethod
    def failed(cls) -> "CalculateRebateResult":
        return cls(success=False, rebate_amount=ZERO)

    @classmethod
    def succeeded(cls, amount: Decimal) -> "CalculateRebateResult":
        return cls(success=True, rebate_amount=amount)
