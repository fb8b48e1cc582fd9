"""Azure Monitor metrics component.

Fetches one time-windowed metric for one resource. Each fetch is an
independent, independently failable network call; callers decide whether a
failure is fatal (for health scoring it never is).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from liveeventops.components.azure.az_payload_comp import parse_metric_samples
from liveeventops.helpers.exceptions import AzCliError, FetchFailed
from liveeventops.helpers.time_helper import window_bounds

if TYPE_CHECKING:
    from datetime import datetime

    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.health_dto import MetricSample

logger = logging.getLogger(__name__)

METRIC_CPU_PERCENT = "Percentage CPU"
METRIC_AVAILABLE_MEMORY = "Available Memory Bytes"
METRIC_NETWORK_IN = "Network In Total"

DEFAULT_INTERVAL = "PT5M"


def fetch_metric_samples(
    az: AzCliRunner,
    resource_id: str,
    metric_name: str,
    *,
    target: str,
    window_minutes: int = 60,
    interval: str = DEFAULT_INTERVAL,
    end: datetime | None = None,
) -> list[MetricSample]:
    """
    Fetch average-aggregated samples for one metric over the window.

    Args:
        az: CLI runner
        resource_id: Full provider resource id of the VM
        metric_name: Provider metric name (e.g. "Percentage CPU")
        target: Target name, for error reporting
        window_minutes: Look-back window ending now
        interval: Aggregation grain (ISO-8601 duration)
        end: Window end override

    Returns:
        Ordered samples; empty when the window holds no datapoints

    Raises:
        FetchFailed: Call rejected or payload malformed
    """
    start_iso, end_iso = window_bounds(window_minutes, end)
    try:
        payload = az.run_json(
            [
                "monitor",
                "metrics",
                "list",
                "--resource",
                resource_id,
                "--metric",
                metric_name,
                "--start-time",
                start_iso,
                "--end-time",
                end_iso,
                "--interval",
                interval,
            ]
        )
        samples = parse_metric_samples(payload)
    except (AzCliError, ValueError) as e:
        raise FetchFailed(target, metric_name, str(e)) from e

    logger.debug("[metrics] %s %s: %d samples", target, metric_name, len(samples))
    return samples

