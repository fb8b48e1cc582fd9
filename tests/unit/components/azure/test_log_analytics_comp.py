"""Tests for log_analytics_comp.py."""

from __future__ import annotations

import pytest

from liveeventops.components.azure.log_analytics_comp import (
    TABLE_HEARTBEAT,
    build_records_query,
    count_log_records,
    fetch_log_records,
)
from liveeventops.helpers.exceptions import AzCliError, FetchFailed
from tests.fixtures.az_payloads import log_rows


class TestBuildRecordsQuery:
    @pytest.mark.unit
    def test_query_shape(self):
        query = build_records_query("Heartbeat", "vm-1", 60)
        assert query == (
            'Heartbeat | where Computer == "vm-1" | where TimeGenerated > ago(60m) | order by TimeGenerated desc'
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("computer", ['vm" or 1==1', "vm 1", "vm|x", ""])
    def test_rejects_unsafe_names(self, computer):
        with pytest.raises(ValueError):
            build_records_query("Heartbeat", computer)


class TestFetchLogRecords:
    @pytest.mark.unit
    def test_passes_workspace_and_query(self, fake_az):
        fake_az.on("log-analytics", returns=log_rows(7))

        rows = fetch_log_records(fake_az, "law-1", TABLE_HEARTBEAT, target="vm-1", window_minutes=30)

        assert len(rows) == 7
        call = fake_az.calls[-1]
        assert call[call.index("--workspace") + 1] == "law-1"
        assert "ago(30m)" in call[call.index("--analytics-query") + 1]

    @pytest.mark.unit
    def test_count(self, fake_az):
        fake_az.on("log-analytics", returns=log_rows(3))
        assert count_log_records(fake_az, "law-1", TABLE_HEARTBEAT, target="vm-1") == 3

    @pytest.mark.unit
    def test_query_failure_is_fetch_failed(self, fake_az):
        fake_az.on("log-analytics", raises=AzCliError("workspace not found"))
        with pytest.raises(FetchFailed) as exc_info:
            count_log_records(fake_az, "law-1", TABLE_HEARTBEAT, target="vm-1")
        assert exc_info.value.signal == TABLE_HEARTBEAT

    @pytest.mark.unit
    def test_unsafe_target_is_fetch_failed(self, fake_az):
        with pytest.raises(FetchFailed):
            fetch_log_records(fake_az, "law-1", TABLE_HEARTBEAT, target='bad"name')
        assert fake_az.calls == []
