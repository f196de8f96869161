"""MCP tools for finding the right calculator and reviewing tool usage."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from clinic_health.core.usage.tracker import UsageTracker
    from clinic_health.domains.calculators.catalog import ToolCatalog

logger = logging.getLogger(__name__)


def register_catalog_tools(
    mcp: FastMCP,
    catalog: ToolCatalog,
    tracker: UsageTracker | None = None,
) -> None:
    """Register catalog lookup and usage reporting tools."""

    @mcp.tool
    async def recommend_health_tool(ctx: Context, message: str) -> str:
        """Suggest health calculators for a visitor's message.

        Matches catalog keywords first, then symptom words. Use the returned
        ``mcp_tool`` name to call the calculator.

        Args:
            message: The visitor's free-text message (Arabic or English).
        """
        best = catalog.find_recommended_tool(message)
        related = catalog.symptom_recommendations(message)
        if best is not None:
            related = [tool for tool in related if tool.id != best.id]

        if best is None and not related:
            logger.info("No health tool matched the message")
        return json.dumps({
            "status": "ok",
            "recommended": best.to_dict() if best else None,
            "related": [tool.to_dict() for tool in related],
        }, ensure_ascii=False)

    @mcp.tool
    async def tool_usage_summary(ctx: Context, limit: int = 20) -> str:
        """Counts of completed and failed calculator calls plus recent events.

        Inputs are never returned, only their hashes.

        Args:
            limit: Maximum number of recent events to include.
        """
        if tracker is None:
            return json.dumps({"status": "ok", "summary": {"tracking_enabled": False}})
        summary = tracker.summary(limit=max(0, limit))
        return json.dumps({"status": "ok", "summary": summary}, ensure_ascii=False)
