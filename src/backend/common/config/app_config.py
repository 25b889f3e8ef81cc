"""Application configuration.

Values come from the process environment. A local `.env` file is loaded first
(without overriding variables that are already set), so local runs and tests
can rely on the same names.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)

REPO_ROOT = Path(__file__).resolve().parents[4]

DEFAULT_REBATE_CATALOG_PATH = "data/rebate_catalogs/sample_catalog.yaml"


class AppConfig:
    """Environment-backed settings for the rebate calculator."""

    def __init__(self) -> None:
        # Empty values count as unset.
        self.REBATE_CATALOG_PATH = (
            os.environ.get("REBATE_CATALOG_PATH") or DEFAULT_REBATE_CATALOG_PATH
        )
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL") or "INFO"

    @property
    def rebate_catalog_path(self) -> Path:
        """Catalog path, resolved against the repo root when relative."""
        path = Path(self.REBATE_CATALOG_PATH)
        if not path.is_absolute():
            path = (REPO_ROOT / path).resolve()
        return path

    @property
    def log_level(self) -> int:
        level = getattr(logging, self.LOG_LEVEL.upper(), logging.INFO)
        return level if isinstance(level, int) else logging.INFO


config = AppConfig()
