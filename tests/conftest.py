"""Shared test fixtures for Clinic Health Tools tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # A developer's .env must not leak into tests
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLINIC_HOST", "127.0.0.1")
    monkeypatch.setenv("CLINIC_ALLOW_INSECURE_BIND", "false")
    monkeypatch.setenv("USAGE_TRACKING_ENABLED", "true")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from clinic_health.core.usage.tracker import UsageTracker  # noqa: E402
from clinic_health.domains.calculators.catalog import ToolCatalog, load_tool_catalog  # noqa: E402


@pytest.fixture
def catalog() -> ToolCatalog:
    """The shipped health tool catalog."""
    return load_tool_catalog()


@pytest.fixture
def usage_tracker() -> UsageTracker:
    return UsageTracker(max_recent=50)
