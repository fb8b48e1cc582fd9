"""Assess VM health workflow - gather one target's signals and score them.

Signal sources:
- Power state and resource id (instance view) - required
- CPU, available memory and network-in metrics - each optional
- Heartbeat record count from Log Analytics - optional

Only the status lookup is fatal. Every metric or log fetch that fails is
logged as a warning and treated as "no data", which the scoring component
never penalizes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from liveeventops.components.azure.log_analytics_comp import TABLE_HEARTBEAT, count_log_records
from liveeventops.components.azure.metrics_comp import (
    METRIC_AVAILABLE_MEMORY,
    METRIC_CPU_PERCENT,
    METRIC_NETWORK_IN,
    fetch_metric_samples,
)
from liveeventops.components.azure.vm_status_comp import get_vm_view
from liveeventops.components.health.health_scoring_comp import score_health
from liveeventops.components.reporting.report_writer_comp import write_assessment, write_signals
from liveeventops.helpers.dto.health_dto import HealthAssessment, HealthSignals
from liveeventops.helpers.exceptions import FetchFailed
from liveeventops.helpers.logging_helper import set_log_context

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import DiagnosticsConfig

logger = logging.getLogger(__name__)


def _fetch_metric_values(
    az: AzCliRunner,
    config: DiagnosticsConfig,
    resource_id: str | None,
    metric_name: str,
    target: str,
) -> tuple[float, ...]:
    if not resource_id:
        logger.warning(f"[assess_vm_health_wf] No resource id for {target}, skipping {metric_name} metrics")
        return ()
    try:
        samples = fetch_metric_samples(
            az,
            resource_id,
            metric_name,
            target=target,
            window_minutes=config.window_minutes,
            interval=config.metric_interval,
        )
    except FetchFailed as e:
        logger.warning(f"[assess_vm_health_wf] Could not retrieve {metric_name} metrics: {e.reason}")
        return ()
    return tuple(s.value for s in samples)


def _fetch_heartbeat_count(az: AzCliRunner, config: DiagnosticsConfig, target: str) -> int | None:
    if not config.log_analytics_workspace:
        logger.warning("[assess_vm_health_wf] Log Analytics workspace not configured, skipping heartbeat check")
        return None
    try:
        return count_log_records(
            az,
            config.log_analytics_workspace,
            TABLE_HEARTBEAT,
            target=target,
            window_minutes=config.window_minutes,
        )
    except FetchFailed as e:
        logger.warning(f"[assess_vm_health_wf] Could not retrieve heartbeat data: {e.reason}")
        return None


def assess_vm_health_workflow(
    az: AzCliRunner,
    config: DiagnosticsConfig,
    target: str,
    output_dir: str | Path | None = None,
) -> HealthAssessment:
    """
    Assess the health of one VM.

    Each invocation fetches fresh signals; nothing is cached between calls.

    Args:
        az: CLI runner
        config: Diagnostics configuration (resource group, workspace, window)
        target: VM name
        output_dir: When given, ``<target>_signals.json`` and
            ``<target>_health_analysis.json`` are written there

    Returns:
        HealthAssessment for the target

    Raises:
        ValueError: No resource group configured
        ResourceLookupFailed: Target does not exist or its status is unreadable
    """
    if not config.resource_group:
        raise ValueError("resource group is required for a health assessment")

    set_log_context(vm=target)
    logger.info(f"[assess_vm_health_wf] Analyzing health of {target}")

    view = get_vm_view(az, config.resource_group, target)
    power_state = view.power_state()
    if power_state != "running":
        logger.warning(f"[assess_vm_health_wf] {target} is not running (power state: {view.power_code() or 'n/a'})")

    signals = HealthSignals(
        target=target,
        power_state=power_state,
        cpu_samples=_fetch_metric_values(az, config, view.id, METRIC_CPU_PERCENT, target),
        memory_samples=_fetch_metric_values(az, config, view.id, METRIC_AVAILABLE_MEMORY, target),
        heartbeat_count=_fetch_heartbeat_count(az, config, target),
        network_in_samples=_fetch_metric_values(az, config, view.id, METRIC_NETWORK_IN, target),
    )

    assessment = score_health(signals)
    logger.info(
        f"[assess_vm_health_wf] Health score for {target}: {assessment.score}/100 ({assessment.category})"
    )
    for issue in assessment.issues:
        logger.warning(f"[assess_vm_health_wf] Issue: {issue}")

    if output_dir is not None:
        write_signals(output_dir, signals)
        write_assessment(output_dir, assessment)

    return assessment
