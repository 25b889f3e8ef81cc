"""Console runner: calculate one rebate against a catalog file.

Loads rebates and products from the YAML catalog into in-memory stores, runs
the calculator once and prints the outcome.

Run:
  python scripts/rebate_calculator_runner.py --rebate REB-FIXED-RATE --product PRD-WIDGET --volume 10

Optional env vars:
  REBATE_CATALOG_PATH  (default: data/rebate_catalogs/sample_catalog.yaml)
  LOG_LEVEL            (default: INFO)
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv


# Ensure `import src.*` works when running as `python scripts/...` from repo root.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

load_dotenv(override=False)

from src.backend.common.config.app_config import config
from src.backend.rebates.integrations.rebate_catalog import load_rebate_catalog
from src.backend.rebates.models.rebate_types import CalculateRebateRequest
from src.backend.rebates.use_cases.rebate_calculator import RebateCalculator


def _fail(msg: str) -> int:
    print(f"ERROR: {msg}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calculate a rebate amount")
    parser.add_argument("--rebate", required=True, help="Rebate identifier")
    parser.add_argument("--product", required=True, help="Product identifier")
    parser.add_argument("--volume", required=True, help="Transaction volume (decimal)")
    parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog YAML path (defaults to REBATE_CATALOG_PATH)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.log_level)

    catalog_path = Path(args.catalog) if args.catalog else config.rebate_catalog_path

    try:
        catalog = load_rebate_catalog(catalog_path)
        request = CalculateRebateRequest(
            rebate_identifier=args.rebate,
            product_identifier=args.product,
            volume=args.volume,
        )
    except (FileNotFoundError, ValueError) as e:
        return _fail(str(e))

    rebate_store = catalog.rebate_store()
    calculator = RebateCalculator(
        rebate_lookup=rebate_store,
        product_lookup=catalog.product_store(),
        result_store=rebate_store,
    )
    result = calculator.calculate(request)

    print(f"Result: {result.success}")
    print(f"Amount: {result.rebate_amount}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
