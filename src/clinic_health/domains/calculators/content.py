"""Content loader: reads the YAML presentation tables shipped with the package.

Advice lists, static plans and lookup labels are edited in
``data/*.yaml`` without touching the calculation code.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).resolve().parent / "data"

_cache: dict[str, dict[str, Any]] = {}


def load_content(name: str) -> dict[str, Any]:
    """Return the parsed ``data/<name>.yaml`` document (cached per process)."""
    if name not in _cache:
        path = CONTENT_DIR / f"{name}.yaml"
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError:
                logger.exception("Failed to parse content file: %s", path)
                raise
        if not isinstance(data, dict):
            raise ValueError(f"Content file {path} must contain a mapping")
        _cache[name] = data
        logger.debug("Loaded content table %s (%d sections)", name, len(data))
    return _cache[name]


def clear_content_cache() -> None:
    """Drop cached tables so edited YAML is re-read on next access."""
    _cache.clear()
