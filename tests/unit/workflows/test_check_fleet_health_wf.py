"""Tests for check_fleet_health_wf.py."""

from __future__ import annotations

import json

import pytest

from liveeventops.helpers.exceptions import AzCliError, ResourceLookupFailed
from liveeventops.workflows.health.check_fleet_health_wf import check_fleet_health_workflow
from tests.fixtures.az_payloads import script_vm


def _script_fleet(fake_az) -> None:
    fake_az.on("vm", "list", returns=["vm-c", "vm-a", "vm-b", "vm-d"])
    script_vm(fake_az, "vm-a")
    script_vm(fake_az, "vm-b", cpu=(95.0,), memory_mib=(10.0,), heartbeats=0)
    script_vm(fake_az, "vm-c", power="stopped")
    fake_az.on("get-instance-view", "vm-d", raises=AzCliError("failed", stderr="(ResourceNotFound) gone"))


class TestCheckFleetHealthWorkflow:
    @pytest.mark.unit
    def test_summary_counts(self, fake_az, diagnostics_config, tmp_path):
        _script_fleet(fake_az)

        summary = check_fleet_health_workflow(fake_az, diagnostics_config, tmp_path)

        assert summary.total == 4
        assert summary.healthy == 1
        assert summary.unhealthy == 3
        assert summary.total == summary.healthy + summary.unhealthy
        assert summary.degraded == 1
        assert summary.failed_lookups == 1
        assert summary.unhealthy_targets == ["vm-b", "vm-c", "vm-d"]

    @pytest.mark.unit
    def test_lookup_failure_is_recorded(self, fake_az, diagnostics_config, tmp_path):
        """A target that vanished gets an explicit record, never a silent gap."""
        _script_fleet(fake_az)

        summary = check_fleet_health_workflow(fake_az, diagnostics_config, tmp_path)

        assert [f.target for f in summary.lookup_failures] == ["vm-d"]
        assert summary.lookup_failures[0].error == "resource not found"
        record = json.loads((tmp_path / "vm-d_lookup_failure.json").read_text())
        assert record["status"] == "lookup_failed"

        written = json.loads((tmp_path / "health_check_summary.json").read_text())
        assert written["total_vms"] == 4
        assert written["unhealthy_vm_list"] == ["vm-b", "vm-c", "vm-d"]

    @pytest.mark.unit
    def test_parallel_matches_sequential(self, fake_az, make_config):
        _script_fleet(fake_az)
        sequential = check_fleet_health_workflow(fake_az, make_config(fleet_max_workers=1))
        parallel = check_fleet_health_workflow(fake_az, make_config(fleet_max_workers=4))

        assert [a.target for a in parallel.assessments] == [a.target for a in sequential.assessments]
        assert [a.score for a in parallel.assessments] == [a.score for a in sequential.assessments]
        assert parallel.unhealthy_targets == sequential.unhealthy_targets

    @pytest.mark.unit
    def test_empty_group(self, fake_az, diagnostics_config):
        fake_az.on("vm", "list", returns=[])

        summary = check_fleet_health_workflow(fake_az, diagnostics_config)

        assert summary.total == 0
        assert summary.healthy == 0

    @pytest.mark.unit
    def test_unlistable_group_raises(self, fake_az, diagnostics_config):
        fake_az.on("vm", "list", raises=AzCliError("ResourceGroupNotFound"))

        with pytest.raises(ResourceLookupFailed):
            check_fleet_health_workflow(fake_az, diagnostics_config)
