"""MCP Resources for health tool discovery."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from clinic_health.domains.calculators.catalog import ToolCatalog


def register_catalog_resources(mcp: FastMCP, catalog: ToolCatalog) -> None:
    """Register the health tool catalog resource on the MCP server."""

    @mcp.resource("health-tools://catalog")
    def health_tool_catalog_resource() -> str:
        """Discover all health calculators grouped by category."""
        return json.dumps(
            {
                "tool_count": len(catalog.all()),
                "categories": [
                    {
                        "id": category_id,
                        "title": title,
                        "tools": [tool.to_dict() for tool in catalog.find_by_category(category_id)],
                    }
                    for category_id, title in catalog.categories.items()
                ],
            },
            indent=2,
            ensure_ascii=False,
        )
