"""Usage tracker: records which health tools visitors complete.

Stands in for the website's analytics hook: one event per tool call, kept
in memory only. Calculation inputs are never stored raw:

* ``tool_input_hash``: SHA-256 of canonical JSON.
* ``status`` / ``error_type``: whether the calculation succeeded.
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
import uuid
from collections import Counter, deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def _hash_input(data: Any) -> str:
    """SHA-256 hash of canonical JSON.

    Returns:
        Hex-encoded SHA-256 digest, or empty string on failure.
    """
    try:
        canonical = json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return hashlib.sha256(canonical.encode()).hexdigest()
    except (TypeError, ValueError):
        return ""


@dataclass
class UsageEvent:
    """A single tool-usage entry."""

    tool_name: str
    tool_input_hash: str = ""
    status: str = "success"              # 'success' | 'failure'
    error_type: str | None = None
    duration_ms: float | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class UsageTracker:
    """In-memory tool usage counters plus a bounded list of recent events.

    Usage::

        tracker = UsageTracker()
        tracker.record("bmi_calculator", {"weight": 70, "height": 175})
        tracker.summary()
    """

    def __init__(self, *, max_recent: int = 200, enabled: bool = True) -> None:
        self._enabled = enabled
        self._recent: deque[UsageEvent] = deque(maxlen=max_recent)
        self._completed: Counter[str] = Counter()
        self._failed: Counter[str] = Counter()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def record(
        self,
        tool_name: str,
        tool_input: Any = None,
        *,
        status: str = "success",
        error_type: str | None = None,
        duration_ms: float | None = None,
    ) -> str:
        """Record one tool call and return the event id ('' when disabled)."""
        if not self._enabled:
            return ""
        event = UsageEvent(
            tool_name=tool_name,
            tool_input_hash=_hash_input(tool_input) if tool_input else "",
            status=status,
            error_type=error_type,
            duration_ms=round(duration_ms, 3) if duration_ms is not None else None,
        )
        with self._lock:
            self._recent.append(event)
            if status == "success":
                self._completed[tool_name] += 1
            else:
                self._failed[tool_name] += 1
        logger.debug("Tool usage recorded: %s (%s)", tool_name, status)
        return event.id

    def count(self, tool_name: str | None = None, *, status: str = "success") -> int:
        counter = self._completed if status == "success" else self._failed
        with self._lock:
            if tool_name is None:
                return sum(counter.values())
            return counter[tool_name]

    def recent(self, limit: int = 20) -> list[dict[str, Any]]:
        """Most recent events, newest first."""
        with self._lock:
            events = list(self._recent)[-limit:] if limit > 0 else []
        return [asdict(e) for e in reversed(events)]

    def summary(self, *, limit: int = 20) -> dict[str, Any]:
        with self._lock:
            completed = dict(self._completed)
            failed = dict(self._failed)
        return {
            "tracking_enabled": self._enabled,
            "total_completed": sum(completed.values()),
            "total_failed": sum(failed.values()),
            "completed_by_tool": dict(sorted(completed.items(), key=lambda kv: (-kv[1], kv[0]))),
            "failed_by_tool": failed,
            "recent_events": self.recent(limit),
        }
