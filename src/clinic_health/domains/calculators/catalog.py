"""Health tool catalog: in-memory index of the calculators and keyword lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from clinic_health.domains.calculators.content import CONTENT_DIR

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = CONTENT_DIR / "catalog.yaml"
MAX_SYMPTOM_RECOMMENDATIONS = 3


@dataclass
class HealthTool:
    """One calculator as shown to visitors."""

    id: str
    mcp_tool: str
    title: str
    description: str
    category: str
    keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mcp_tool": self.mcp_tool,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "keywords": list(self.keywords),
        }


class ToolCatalog:
    """Registry of health tools indexed by id and category."""

    def __init__(self) -> None:
        self._tools: dict[str, HealthTool] = {}
        self._by_category: dict[str, list[str]] = {}
        self.categories: dict[str, str] = {}
        self.symptom_map: dict[str, list[str]] = {}

    def register(self, tool: HealthTool) -> None:
        if tool.id in self._tools:
            raise ValueError(f"Duplicate health tool id registered: {tool.id!r}")
        self._tools[tool.id] = tool
        self._by_category.setdefault(tool.category, []).append(tool.id)

    def get(self, tool_id: str) -> HealthTool | None:
        return self._tools.get(tool_id)

    def find_by_category(self, category: str) -> list[HealthTool]:
        return [self._tools[tid] for tid in self._by_category.get(category, [])]

    def all(self) -> list[HealthTool]:
        return list(self._tools.values())

    def find_recommended_tool(self, message: str) -> HealthTool | None:
        """First tool (catalog order) with a keyword contained in ``message``."""
        text = message.lower()
        for tool in self._tools.values():
            if any(keyword.lower() in text for keyword in tool.keywords):
                return tool
        return None

    def symptom_recommendations(self, message: str) -> list[HealthTool]:
        """Up to three distinct tools suggested by symptom words in ``message``."""
        ids: list[str] = []
        for symptom, tool_ids in self.symptom_map.items():
            if symptom in message:
                ids.extend(tid for tid in tool_ids if tid not in ids and tid in self._tools)
        return [self._tools[tid] for tid in ids[:MAX_SYMPTOM_RECOMMENDATIONS]]


def load_tool_catalog(path: str | Path = DEFAULT_CATALOG_PATH) -> ToolCatalog:
    """Parse a catalog YAML file into a ``ToolCatalog``."""
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    catalog = ToolCatalog()
    catalog.categories = dict(data.get("categories", {}))
    for entry in data.get("tools", []):
        category = entry["category"]
        if catalog.categories and category not in catalog.categories:
            raise ValueError(f"Tool {entry['id']!r} has unknown category {category!r}")
        catalog.register(HealthTool(
            id=entry["id"],
            mcp_tool=entry["mcp_tool"],
            title=entry["title"],
            description=entry.get("description", "").strip(),
            category=category,
            keywords=[str(k) for k in entry.get("keywords", [])],
        ))
    catalog.symptom_map = {
        str(symptom): list(tool_ids)
        for symptom, tool_ids in data.get("symptom_map", {}).items()
    }
    logger.info("Loaded %d health tools from %s", len(catalog.all()), path)
    return catalog
