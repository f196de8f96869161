"""Server entry point — ``python -m clinic_health.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from clinic_health.core.config.settings import get_settings
from clinic_health.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the Clinic Health Tools MCP server with Streamable HTTP transport.

    Reads ``CLINIC_HOST`` / ``CLINIC_PORT`` / ``CLINIC_LOG_LEVEL`` once and
    hands the same settings to ``create_app`` so the vaccination windows and
    usage tracking switch match what was logged at startup. Binding outside
    loopback needs ``CLINIC_ALLOW_INSECURE_BIND=true``; the calculator tools
    have no auth layer.
    """
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.clinic_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    if not settings.clinic_allow_insecure_bind and not _is_loopback_host(settings.clinic_host):
        raise RuntimeError(
            "Refusing to bind the clinic server to a non-loopback host without an auth layer. "
            "Set CLINIC_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting Clinic Health Tools server on %s:%d",
        settings.clinic_host,
        settings.clinic_port,
    )

    mcp = create_app(settings_override=settings)
    mcp.run(
        transport="streamable-http",
        host=settings.clinic_host,
        port=settings.clinic_port,
    )


if __name__ == "__main__":
    run()
