"""YAML rebate catalog loader.

A catalog file seeds the in-memory stores with rebates and products:

    catalog:
      id: sample
      version: 1
    rebates:
      - identifier: R-1
        incentive: FixedRateRebate
        percentage: "10"
    products:
      - identifier: P-1
        supported_incentives: [FixedRateRebate]
        price: "10"

Records are validated with pydantic. Amounts are best written as quoted
strings so they reach `Decimal` without passing through float.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

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

logger = logging.getLogger(__name__)


class RebateRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    identifier: str = Field(min_length=1)
    incentive: IncentiveType
    amount: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")

    def to_rebate(self) -> Rebate:
        return Rebate(
            identifier=self.identifier,
            incentive=self.incentive,
            amount=self.amount,
            percentage=self.percentage,
        )


class ProductRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    identifier: str = Field(min_length=1)
    supported_incentives: list[IncentiveType] = Field(default_factory=list)
    price: Decimal = Decimal("0")
    uom: str = ""

    @field_validator("supported_incentives", mode="before")
    @classmethod
    def _single_incentive_as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    def to_product(self) -> Product:
        return Product(
            identifier=self.identifier,
            supported_incentives=SupportedIncentiveType.from_incentives(
                self.supported_incentives
            ),
            price=self.price,
            uom=self.uom,
        )


@dataclass(slots=True)
class RebateCatalog:
    catalog_id: str = ""
    version: str = ""
    rebates: list[Rebate] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)

    def rebate_store(self) -> InMemoryRebateDataStore:
        return InMemoryRebateDataStore(self.rebates)

    def product_store(self) -> InMemoryProductDataStore:
        return InMemoryProductDataStore(self.products)


def _record_label(kind: str, index: int, raw: Any) -> str:
    ident = raw.get("identifier") if isinstance(raw, dict) else None
    return f"{kind}[{index}]" + (f" ({ident})" if ident else "")


def _check_unique(kind: str, identifiers: list[str]) -> None:
    seen: set[str] = set()
    dupes: list[str] = []
    for ident in identifiers:
        if ident in seen and ident not in dupes:
            dupes.append(ident)
        seen.add(ident)
    if dupes:
        raise ValueError(f"Duplicate {kind} identifier(s): {dupes}")


def parse_rebate_catalog(doc: Any) -> RebateCatalog:
    """Validate an already-parsed catalog document."""

    if not isinstance(doc, dict):
        raise ValueError("Rebate catalog must parse to a mapping")

    header = doc.get("catalog") or {}
    if not isinstance(header, dict):
        raise ValueError("Invalid top-level key: catalog")

    raw_rebates = doc.get("rebates") or []
    raw_products = doc.get("products") or []
    if not isinstance(raw_rebates, list):
        raise ValueError("Top-level rebates must be a list")
    if not isinstance(raw_products, list):
        raise ValueError("Top-level products must be a list")

    rebates: list[Rebate] = []
    for i, raw in enumerate(raw_rebates):
        try:
            rebates.append(RebateRecord.model_validate(raw).to_rebate())
        except ValidationError as e:
            raise ValueError(f"Invalid {_record_label('rebates', i, raw)}: {e}") from e

    products: list[Product] = []
    for i, raw in enumerate(raw_products):
        try:
            products.append(ProductRecord.model_validate(raw).to_product())
        except ValidationError as e:
            raise ValueError(f"Invalid {_record_label('products', i, raw)}: {e}") from e

    _check_unique("rebate", [r.identifier for r in rebates])
    _check_unique("product", [p.identifier for p in products])

    return RebateCatalog(
        catalog_id=str(header.get("id") or ""),
        version=str(header.get("version") or ""),
        rebates=rebates,
        products=products,
    )


def load_rebate_catalog(path: str | Path) -> RebateCatalog:
    """Load and validate a rebate catalog YAML file."""

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Rebate catalog file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("Failed to parse rebate catalog %s: %s", path, e)
        raise ValueError(f"Failed to parse rebate catalog YAML: {e}") from e

    catalog = parse_rebate_catalog(doc)
    logger.info(
        "Loaded rebate catalog %s: %d rebates, %d products",
        path,
        len(catalog.rebates),
        len(catalog.products),
    )
    return catalog
