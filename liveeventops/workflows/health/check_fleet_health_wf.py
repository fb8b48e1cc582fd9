"""Check fleet health workflow - assess every VM in a resource group and aggregate.

Per-target independence: a lookup failure for one VM becomes an explicit
LookupFailure record and never stops the others. Targets run sequentially
unless ``config.fleet_max_workers > 1``; results are sorted by target in
both modes, so the summary and the files written are identical either way.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from liveeventops.components.azure.vm_status_comp import list_vm_names
from liveeventops.components.health.fleet_summary_comp import summarize_fleet
from liveeventops.components.reporting.report_writer_comp import write_fleet_summary, write_lookup_failure
from liveeventops.helpers.dto.health_dto import FleetSummary, HealthAssessment, LookupFailure
from liveeventops.helpers.exceptions import ResourceLookupFailed
from liveeventops.helpers.time_helper import utc_now_iso
from liveeventops.workflows.health.assess_vm_health_wf import assess_vm_health_workflow

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import DiagnosticsConfig

logger = logging.getLogger(__name__)


def _assess_one(
    az: AzCliRunner,
    config: DiagnosticsConfig,
    target: str,
    output_dir: str | Path | None,
) -> HealthAssessment | LookupFailure:
    try:
        return assess_vm_health_workflow(az, config, target, output_dir)
    except ResourceLookupFailed as e:
        logger.error(f"[check_fleet_health_wf] Lookup failed for {target}: {e.reason}")
        failure = LookupFailure(target=target, error=e.reason, timestamp=utc_now_iso())
        if output_dir is not None:
            write_lookup_failure(output_dir, failure)
        return failure


def check_fleet_health_workflow(
    az: AzCliRunner,
    config: DiagnosticsConfig,
    output_dir: str | Path | None = None,
) -> FleetSummary:
    """
    Run the health assessment for every VM in ``config.resource_group``.

    Args:
        az: CLI runner
        config: Diagnostics configuration
        output_dir: When given, per-target files and ``health_check_summary.json``
            are written there

    Returns:
        FleetSummary with ``total == healthy + unhealthy``

    Raises:
        ValueError: No resource group configured
        ResourceLookupFailed: The resource group itself cannot be enumerated
    """
    if not config.resource_group:
        raise ValueError("resource group is required for a fleet health check")

    rg = config.resource_group
    logger.info(f"[check_fleet_health_wf] Performing health check for all VMs in {rg}...")

    targets = sorted(list_vm_names(az, rg))
    if not targets:
        logger.warning(f"[check_fleet_health_wf] No VMs found in resource group {rg}")

    results: list[HealthAssessment | LookupFailure]
    workers = max(1, config.fleet_max_workers)
    if workers > 1 and len(targets) > 1:
        logger.debug(f"[check_fleet_health_wf] Assessing {len(targets)} VMs with {workers} workers")
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="leo-fleet") as pool:
            results = list(pool.map(lambda t: _assess_one(az, config, t, output_dir), targets))
    else:
        results = [_assess_one(az, config, t, output_dir) for t in targets]

    summary = summarize_fleet(rg, results)

    if output_dir is not None:
        write_fleet_summary(output_dir, summary)

    logger.info(
        f"[check_fleet_health_wf] Health check completed: {summary.healthy}/{summary.total} VMs healthy"
    )
    if summary.unhealthy_targets:
        logger.warning(
            f"[check_fleet_health_wf] Unhealthy VMs found: {', '.join(summary.unhealthy_targets)}"
        )
    return summary
