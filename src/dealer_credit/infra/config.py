from __future__ import annotations

import logging
import os


DEFAULT_LOG_LEVEL = "INFO"


def log_level() -> str:
    level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()

    if level not in logging.getLevelNamesMapping():
        raise RuntimeError(f"LOG_LEVEL has an unknown level name: {level}")

    return level


def bank_catalog_file() -> str | None:
    """Optional JSON file replacing the built-in bank table."""
    path = os.getenv("BANK_CATALOG_FILE")

    if path is not None and not path.strip():
        raise RuntimeError("BANK_CATALOG_FILE environment variable is empty")

    return path
