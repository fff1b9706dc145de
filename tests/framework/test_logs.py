"""Tests for foundry.framework.logs module."""

import dataclasses

import pytest

from foundry.framework.logs import LogEntry, OperationLog, detail_logs, summarize_logs


class TestLogEntry:
    def test_ok(self):
        assert LogEntry("Width").ok
        assert not LogEntry.failure("Width", ValueError("bad")).ok

    def test_failure_message_from_exception(self):
        assert LogEntry.failure("Width", ValueError("bad")).error == "bad"

    def test_with_context_returns_copy(self):
        entry = LogEntry("Width")
        tagged = entry.with_context("Type A")
        assert tagged.context == "Type A"
        assert entry.context is None

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            LogEntry("Width").item = "Height"


class TestOperationLog:
    def test_counts(self):
        log = OperationLog("MapParams", [LogEntry("a"), LogEntry("b", error="x"), LogEntry("c")])
        assert log.success_count == 2
        assert log.failed_count == 1
        assert isinstance(log.entries, tuple)

    def test_merge_concatenates_and_sums(self):
        first = OperationLog("Op", (LogEntry("a", "Type A"),), elapsed_ms=2.0)
        second = OperationLog("Op", (LogEntry("a", "Type B"),), elapsed_ms=3.0)
        merged = OperationLog.merge("Op", [first, second])
        assert [e.context for e in merged.entries] == ["Type A", "Type B"]
        assert merged.elapsed_ms == 5.0
        assert first.entries == (LogEntry("a", "Type A"),)

    def test_fatal_error(self):
        log = OperationLog.fatal_error("MapParams", "boom", "Type B")
        assert log.operation_name == "MapParams (FATAL ERROR)"
        assert log.fatal
        assert log.entries == (LogEntry("MapParams", "Type B", "boom"),)

    def test_with_context(self):
        log = OperationLog("Op", (LogEntry("a"), LogEntry("b"))).with_context("document")
        assert {e.context for e in log.entries} == {"document"}


class TestReports:
    @pytest.fixture
    def logs(self):
        return [
            OperationLog(
                "MapParams",
                (
                    LogEntry("Voltage", "Type A", "cannot map"),
                    LogEntry("Voltage", "Type C", "cannot map"),
                    LogEntry("Width", "Type A"),
                    LogEntry("Width", "Type B"),
                ),
                elapsed_ms=1500.0,
            ),
            OperationLog("SortParams", (LogEntry("Sorted 3 parameters"),), elapsed_ms=500.0),
        ]

    def test_summary_groups_errors_with_contexts(self, logs):
        summary = summarize_logs(logs)
        first = summary["operations"][0]
        assert first["errors"] == ["[Type A, Type C] Voltage : cannot map"]
        assert first["success_count"] == 2
        assert first["failed_count"] == 2
        assert first["seconds_elapsed"] == 1.5
        assert summary["total_seconds_elapsed"] == 2.0

    def test_summary_explicit_total(self, logs):
        assert summarize_logs(logs, total_ms=2500)["total_seconds_elapsed"] == 2.5

    def test_detail_lists_successes(self, logs):
        detail = detail_logs(logs)
        assert detail["operations"][0]["successes"] == ["[Type A, Type B] Width"]
        assert detail["operations"][1]["successes"] == ["Sorted 3 parameters"]
