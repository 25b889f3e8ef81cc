"""Smoke test: validate a rebate catalog YAML file.

Does NOT run any calculation. Catches malformed records, unknown incentive
types and duplicate identifiers, and reports products whose supported
incentives no rebate in the catalog uses.

Run:
  python scripts/rebate_catalog_smoke.py [PATH]

Optional env vars:
  REBATE_CATALOG_PATH  (default: data/rebate_catalogs/sample_catalog.yaml)
"""

from __future__ import annotations

import os
import sys
from collections import Counter

from dotenv import load_dotenv

# Allow running as: `python scripts/rebate_catalog_smoke.py`
_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

load_dotenv(override=False)

from src.backend.common.config.app_config import config
from src.backend.rebates.integrations.rebate_catalog import load_rebate_catalog
from src.backend.rebates.models.rebate_types import IncentiveType


def _fail(msg: str) -> int:
    print(f"ERROR: {msg}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else str(config.rebate_catalog_path)

    try:
        catalog = load_rebate_catalog(path)
    except (FileNotFoundError, ValueError) as e:
        return _fail(str(e))

    print("✅ Rebate catalog parsed")
    print(f"- Path: {path}")
    print(f"- Catalog ID: {catalog.catalog_id}")
    print(f"- Version: {catalog.version}")
    print(f"- Rebates: {len(catalog.rebates)}")
    print(f"- Products: {len(catalog.products)}")

    by_incentive = Counter(r.incentive for r in catalog.rebates)
    for incentive in IncentiveType:
        print(f"  - {incentive.value}: {by_incentive.get(incentive, 0)} rebate(s)")

    used = set(by_incentive)
    unmatched = [
        p.identifier
        for p in catalog.products
        if not any(p.supports(incentive) for incentive in used)
    ]
    if unmatched:
        print("- Products with no matching rebate incentive:")
        for ident in unmatched:
            print(f"  - {ident}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
