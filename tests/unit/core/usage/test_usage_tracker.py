"""Tests for the in-memory UsageTracker."""

from __future__ import annotations

from clinic_health.core.usage.tracker import UsageTracker, _hash_input


# ---------------------------------------------------------------------------
# _hash_input tests
# ---------------------------------------------------------------------------

class TestHashInput:
    def test_hashes_dict(self):
        h = _hash_input({"weight": 70})
        assert isinstance(h, str)
        assert len(h) == 64  # SHA-256 hex

    def test_order_independent(self):
        assert _hash_input({"z": 1, "a": 2}) == _hash_input({"a": 2, "z": 1})

    def test_arabic_text_hashes(self):
        assert len(_hash_input({"message": "صداع"})) == 64

    def test_non_serializable_returns_empty(self):
        assert _hash_input(object()) == ""


# ---------------------------------------------------------------------------
# UsageTracker tests
# ---------------------------------------------------------------------------

class TestUsageTracker:
    def test_record_returns_event_id(self, usage_tracker):
        event_id = usage_tracker.record("bmi_calculator", {"weight": 70, "height": 175})
        assert event_id
        assert usage_tracker.count("bmi_calculator") == 1

    def test_inputs_are_hashed_not_stored(self, usage_tracker):
        usage_tracker.record("bmi_calculator", {"weight": 70, "height": 175})
        event = usage_tracker.recent()[0]
        assert "weight" not in str(event)
        assert len(event["tool_input_hash"]) == 64

    def test_failures_counted_separately(self, usage_tracker):
        usage_tracker.record("bmi_calculator", {"weight": -1}, status="failure",
                             error_type="InvalidInputError")
        usage_tracker.record("bmi_calculator", {"weight": 70})
        assert usage_tracker.count("bmi_calculator") == 1
        assert usage_tracker.count("bmi_calculator", status="failure") == 1
        assert usage_tracker.recent()[0]["status"] == "success"
        assert usage_tracker.recent()[1]["error_type"] == "InvalidInputError"

    def test_recent_is_bounded_and_newest_first(self):
        tracker = UsageTracker(max_recent=3)
        for i in range(5):
            tracker.record(f"tool_{i}")
        names = [e["tool_name"] for e in tracker.recent()]
        assert names == ["tool_4", "tool_3", "tool_2"]
        assert tracker.count() == 5

    def test_recent_limit(self, usage_tracker):
        for _ in range(5):
            usage_tracker.record("anxiety_test")
        assert len(usage_tracker.recent(limit=2)) == 2
        assert usage_tracker.recent(limit=0) == []

    def test_summary_orders_by_count(self, usage_tracker):
        usage_tracker.record("water_calculator")
        usage_tracker.record("bmi_calculator")
        usage_tracker.record("bmi_calculator")
        summary = usage_tracker.summary(limit=1)
        assert summary["total_completed"] == 3
        assert list(summary["completed_by_tool"]) == ["bmi_calculator", "water_calculator"]
        assert len(summary["recent_events"]) == 1

    def test_disabled_tracker_records_nothing(self):
        tracker = UsageTracker(enabled=False)
        assert tracker.record("bmi_calculator") == ""
        assert tracker.count() == 0
        assert tracker.summary()["tracking_enabled"] is False

    def test_duration_is_rounded(self, usage_tracker):
        usage_tracker.record("bmi_calculator", duration_ms=1.234567)
        assert usage_tracker.recent()[0]["duration_ms"] == 1.235
