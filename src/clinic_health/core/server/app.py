"""Clinic Health Tools MCP Server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from clinic_health.core.config.settings import Settings, get_settings
from clinic_health.core.usage.tracker import UsageTracker
from clinic_health.domains.calculators.catalog import ToolCatalog, load_tool_catalog
from clinic_health.domains.calculators.prompts.health_prompts import register_health_prompts
from clinic_health.domains.calculators.resources.catalog import register_catalog_resources
from clinic_health.domains.calculators.tools.calculator_tools import register_calculator_tools
from clinic_health.domains.calculators.tools.catalog_tools import register_catalog_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Clinic Health Tools"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    settings_override: Settings | None = None,
    catalog_override: ToolCatalog | None = None,
    usage_tracker_override: UsageTracker | None = None,
) -> FastMCP:
    """Create and configure the Clinic Health Tools MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the health tool catalog
    3. Creates the in-memory usage tracker
    4. Registers all tools, resources, and prompts
    """
    settings = settings_override or get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Clinic health calculators for website visitors: body metrics, "
            "nutrition and hydration, pediatric dosing and vaccinations, "
            "pregnancy dates, risk questionnaires and specialty guidance. "
            "Results are educational and never replace a clinician."
        ),
    )

    # --- Tool catalog ---
    catalog = catalog_override if catalog_override is not None else load_tool_catalog()

    # --- Usage tracking ---
    if usage_tracker_override is not None:
        tracker = usage_tracker_override
    else:
        tracker = UsageTracker(
            max_recent=settings.usage_recent_events,
            enabled=settings.usage_tracking_enabled,
        )
        if not tracker.enabled:
            logger.info("Usage tracking disabled")

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "tools_in_catalog": len(catalog.all()),
            "usage_tracking": tracker.enabled,
        }

    register_calculator_tools(
        server,
        tracker,
        due_window_days=settings.vaccination_due_window_days,
        catch_up_days=settings.vaccination_catch_up_days,
    )
    logger.info("Health calculator tools registered")

    register_catalog_tools(server, catalog, tracker)

    # --- Register resources ---
    register_catalog_resources(server, catalog)

    # --- Register prompts ---
    register_health_prompts(server)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
