"""Tests for report_writer_comp.py."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from liveeventops.components.reporting.report_writer_comp import (
    REPORT_FILENAME,
    SUMMARY_FILENAME,
    write_assessment,
    write_diagnostic_report,
    write_fleet_summary,
    write_lookup_failure,
    write_restart_log,
    write_webhook_summary,
)
from liveeventops.helpers.dto.health_dto import (
    FleetSummary,
    HealthAssessment,
    LookupFailure,
    RemediationResult,
)

TS = "2024-01-01T00:00:00Z"


class TestJsonRecords:
    @pytest.mark.unit
    def test_assessment_record_fields(self, tmp_path):
        assessment = HealthAssessment("vm-1", 25, "unhealthy", ("High CPU usage: 95.0%",), TS)

        path = write_assessment(tmp_path, assessment)

        assert path.name == "vm-1_health_analysis.json"
        assert json.loads(path.read_text()) == {
            "vm_name": "vm-1",
            "health_score": 25,
            "status": "unhealthy",
            "issues": ["High CPU usage: 95.0%"],
            "timestamp": TS,
        }

    @pytest.mark.unit
    def test_lookup_failure_record(self, tmp_path):
        path = write_lookup_failure(tmp_path, LookupFailure("ghost", "resource not found", TS))
        record = json.loads(path.read_text())
        assert record["status"] == "lookup_failed"
        assert record["health_score"] is None
        assert record["issues"] == ["resource not found"]

    @pytest.mark.unit
    def test_fleet_summary_record(self, tmp_path):
        summary = FleetSummary("rg", 3, 1, 2, ["vm-2", "vm-3"], 1, 1, TS)

        path = write_fleet_summary(tmp_path / "nested", summary)

        assert path.name == SUMMARY_FILENAME
        record = json.loads(path.read_text())
        assert record["total_vms"] == 3
        assert record["healthy_vms"] == 1
        assert record["unhealthy_vms"] == 2
        assert record["unhealthy_vm_list"] == ["vm-2", "vm-3"]


class TestRestartLog:
    @pytest.mark.unit
    def test_success(self, tmp_path):
        result = RemediationResult("vm-1", True, True, "Health check failed", elapsed_s=42.0)
        path = write_restart_log(tmp_path, result, datetime(2024, 1, 1, 0, 0), datetime(2024, 1, 1, 0, 1))
        text = path.read_text()
        assert "VM restart initiated at 2024-01-01T00:00:00" in text
        assert "VM restart completed at 2024-01-01T00:01:00" in text
        assert "Elapsed: 42.0s" in text

    @pytest.mark.unit
    def test_failure(self, tmp_path):
        result = RemediationResult("vm-1", True, False, "r", error="boom", stage="wait_running")
        text = write_restart_log(tmp_path, result, datetime(2024, 1, 1), datetime(2024, 1, 1)).read_text()
        assert "FAILED" in text
        assert "(stage: wait_running)" in text
        assert "Error: boom" in text


class TestDiagnosticReport:
    @pytest.mark.unit
    def test_lists_generated_files(self, tmp_path):
        assessment = HealthAssessment("vm-1", 50, "degraded", ("resource not running",), TS)
        write_assessment(tmp_path, assessment)

        report = write_diagnostic_report(
            tmp_path,
            action="diagnose",
            resource_group="rg",
            assessment=assessment,
            generated_at=datetime(2024, 1, 1, 12, 0, 0),
        )

        text = report.read_text()
        assert report.name == REPORT_FILENAME
        assert "**Generated:** 2024-01-01 12:00:00" in text
        assert "- **Health Score:** 50/100" in text
        assert "- resource not running" in text
        assert "- vm-1_health_analysis.json" in text
        assert f"- {REPORT_FILENAME}" not in text

    @pytest.mark.unit
    def test_fleet_section(self, tmp_path):
        summary = FleetSummary("rg", 2, 1, 1, ["vm-2"], 0, 1, TS)
        text = write_diagnostic_report(tmp_path, action="health-check", resource_group="rg", summary=summary).read_text()
        assert "- **Total VMs:** 2" in text
        assert "### Unhealthy VMs" in text
        assert "- vm-2" in text


class TestWebhookSummary:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("status", "expected"),
        [(None, "not run"), (204, "passed (HTTP 204)"), (401, "failed (HTTP 401)")],
    )
    def test_test_dispatch_line(self, tmp_path, status, expected):
        path = write_webhook_summary(
            tmp_path / "summary.md",
            resource_group="rg",
            action_group="ag",
            webhook_name="hook",
            webhook_url="https://api.github.com/repos/a/b/dispatches",
            repository="a/b",
            test_status_code=status,
        )
        assert f"- **Test Dispatch:** {expected}" in path.read_text()
