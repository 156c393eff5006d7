"""
Mood Tracker Backend — Error Tracker and Metrics Unit Tests
=============================================================
"""

import logging

from app.schemas.mood import ClientErrorReport
from app.services.error_tracker import ErrorTracker
from app.services.metrics import MetricsRegistry


class TestErrorTracker:

    def setup_method(self):
        self.tracker = ErrorTracker(max_reports=3)

    def test_record_returns_acknowledgement(self):
        ack = self.tracker.record(ClientErrorReport(message="boom"), client_ip="10.0.0.1")

        assert len(ack.error_id) == 12
        stored = self.tracker.recent()[0]
        assert stored.error_id == ack.error_id
        assert stored.client_ip == "10.0.0.1"
        assert self.tracker.total == 1

    def test_recent_is_newest_first_and_bounded(self):
        for i in range(5):
            self.tracker.record(ClientErrorReport(message=f"error {i}"))

        messages = [r.message for r in self.tracker.recent()]

        assert messages == ["error 4", "error 3", "error 2"]
        assert self.tracker.total == 5
        assert [r.message for r in self.tracker.recent(limit=1)] == ["error 4"]

    def test_log_level_follows_report_level(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="moodtracker.client"):
            self.tracker.record(ClientErrorReport(message="slow image", level="warning"))
            self.tracker.record(ClientErrorReport(message="crash", level="ERROR"))

        levels = [r.levelno for r in caplog.records if r.name == "moodtracker.client"]
        assert levels == [logging.WARNING, logging.ERROR]

    def test_clear(self):
        self.tracker.record(ClientErrorReport(message="boom"))
        self.tracker.clear()

        assert self.tracker.recent() == []
        assert self.tracker.total == 0


class TestMetricsRegistry:

    def test_snapshot_aggregates(self):
        registry = MetricsRegistry()
        registry.record("GET", "/api/moods", 200, 10.0)
        registry.record("GET", "/api/moods", 200, 20.0)
        registry.record("POST", "/api/moods", 422, 3.0)

        snap = registry.snapshot()

        assert snap["requests_total"] == 3
        assert snap["requests_by_status"] == {"200": 2, "422": 1}
        assert snap["requests_by_route"] == {"GET /api/moods": 2, "POST /api/moods": 1}
        assert snap["average_duration_ms"] == 11.0

    def test_empty_snapshot_has_no_average(self):
        registry = MetricsRegistry()

        snap = registry.snapshot()

        assert snap["requests_total"] == 0
        assert snap["average_duration_ms"] is None

    def test_reset_keeps_start_time(self):
        registry = MetricsRegistry()
        started = registry.started_at
        registry.record("GET", "/health", 200, 1.0)

        registry.reset()

        assert registry.requests_total == 0
        assert registry.started_at == started
