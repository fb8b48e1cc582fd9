"""Tests for metrics_comp.py."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from liveeventops.components.azure.metrics_comp import METRIC_CPU_PERCENT, fetch_metric_samples
from liveeventops.helpers.exceptions import AzCliError, FetchFailed
from tests.fixtures.az_payloads import metrics, resource_id


class TestFetchMetricSamples:
    @pytest.mark.unit
    def test_builds_windowed_query(self, fake_az):
        """Window bounds and interval are passed through to `az monitor metrics list`."""
        rid = resource_id("vm-1")
        fake_az.on("metrics", rid, returns=metrics(10.0, 20.0))
        end = datetime(2024, 1, 1, 1, 0, 0, tzinfo=timezone.utc)

        samples = fetch_metric_samples(
            fake_az, rid, METRIC_CPU_PERCENT, target="vm-1", window_minutes=60, interval="PT1M", end=end
        )

        assert [s.value for s in samples] == [10.0, 20.0]
        call = fake_az.calls[-1]
        assert call[call.index("--start-time") + 1] == "2024-01-01T00:00:00Z"
        assert call[call.index("--end-time") + 1] == "2024-01-01T01:00:00Z"
        assert call[call.index("--interval") + 1] == "PT1M"
        assert call[call.index("--metric") + 1] == METRIC_CPU_PERCENT

    @pytest.mark.unit
    def test_empty_window_is_not_a_failure(self, fake_az):
        fake_az.on("metrics", returns={"value": []})
        assert fetch_metric_samples(fake_az, "rid", METRIC_CPU_PERCENT, target="vm-1") == []

    @pytest.mark.unit
    def test_cli_failure_is_fetch_failed(self, fake_az):
        fake_az.on("metrics", raises=AzCliError("throttled"))
        with pytest.raises(FetchFailed) as exc_info:
            fetch_metric_samples(fake_az, "rid", METRIC_CPU_PERCENT, target="vm-1")
        assert exc_info.value.signal == METRIC_CPU_PERCENT
        assert exc_info.value.target == "vm-1"

    @pytest.mark.unit
    def test_malformed_payload_is_fetch_failed(self, fake_az):
        fake_az.on("metrics", returns={"value": [{"timeseries": [{"data": [{"average": "x"}]}]}]})
        with pytest.raises(FetchFailed):
            fetch_metric_samples(fake_az, "rid", METRIC_CPU_PERCENT, target="vm-1")
