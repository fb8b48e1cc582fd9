"""Restart unhealthy VM workflow - assess, decide, and remediate one target.

Sequence when the decision triggers:

1. stop (--no-wait), then poll until "stopped"
2. start (--no-wait), then poll until "running"
3. write the restart log and send a best-effort notification

There is no rollback: if start fails after a confirmed stop the VM is left
down and the failure is reported. The next invocation re-assesses and
re-attempts. Mutual exclusion per target is the caller's job
(DiagnosticsService holds a per-target lock around this workflow).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from liveeventops.components.azure.power_comp import start_vm, stop_vm, wait_for_power_state
from liveeventops.components.health.remediation_policy_comp import decide_remediation
from liveeventops.components.notifications.webhook_notify_comp import send_notification
from liveeventops.components.reporting.report_writer_comp import write_restart_log
from liveeventops.helpers.dto.health_dto import RemediationResult
from liveeventops.helpers.exceptions import RemediationFailed
from liveeventops.workflows.health.assess_vm_health_wf import assess_vm_health_workflow

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import DiagnosticsConfig
    from liveeventops.helpers.dto.health_dto import HealthAssessment

logger = logging.getLogger(__name__)


def restart_unhealthy_vm_workflow(
    az: AzCliRunner,
    config: DiagnosticsConfig,
    target: str,
    output_dir: str | Path | None = None,
    *,
    assessment: HealthAssessment | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> RemediationResult:
    """
    Restart ``target`` if and only if its assessment is unhealthy.

    Args:
        az: CLI runner
        config: Diagnostics configuration (resource group, polling policy, webhook)
        target: VM name
        output_dir: Where the assessment files and restart log are written
        assessment: Pre-computed assessment; a fresh one is taken when omitted
        sleep: Sleep function used between polls
        clock: Monotonic clock used for the polling timeout and elapsed time

    Returns:
        RemediationResult. ``triggered`` is False when no restart was needed
        (``succeeded`` is then True since nothing failed). A failed stop,
        start or confirmation poll yields ``succeeded=False`` with the stage
        and error filled in rather than raising.

    Raises:
        ResourceLookupFailed: The assessment could not look the target up
    """
    if not config.resource_group:
        raise ValueError("resource group is required for remediation")

    if assessment is None:
        assessment = assess_vm_health_workflow(az, config, target, output_dir)

    decision = decide_remediation(assessment)
    if not decision.triggered:
        logger.info(f"[restart_unhealthy_vm_wf] {target} appears healthy, no restart needed")
        return RemediationResult(target=target, triggered=False, succeeded=True, reason=decision.reason)

    logger.warning(f"[restart_unhealthy_vm_wf] {target} appears unhealthy, initiating restart...")
    rg = config.resource_group
    started_at = datetime.now()
    started = clock()

    try:
        stop_vm(az, rg, target)
        logger.info(f"[restart_unhealthy_vm_wf] Waiting for {target} to stop...")
        wait_for_power_state(az, rg, target, "stopped", config.polling, sleep=sleep, clock=clock)

        start_vm(az, rg, target)
        logger.info(f"[restart_unhealthy_vm_wf] Waiting for {target} to start...")
        wait_for_power_state(az, rg, target, "running", config.polling, sleep=sleep, clock=clock)
    except RemediationFailed as e:
        result = RemediationResult(
            target=target,
            triggered=True,
            succeeded=False,
            reason=decision.reason,
            elapsed_s=clock() - started,
            error=e.reason,
            stage=e.stage,
        )
        logger.error(f"[restart_unhealthy_vm_wf] Restart of {target} failed at {e.stage}: {e.reason}")
        _finish(config, result, output_dir, started_at)
        return result

    result = RemediationResult(
        target=target,
        triggered=True,
        succeeded=True,
        reason=decision.reason,
        elapsed_s=clock() - started,
    )
    logger.info(f"[restart_unhealthy_vm_wf] {target} has been restarted in {result.elapsed_s:.1f}s")
    _finish(config, result, output_dir, started_at)
    return result


def _finish(
    config: DiagnosticsConfig,
    result: RemediationResult,
    output_dir: str | Path | None,
    started_at: datetime,
) -> None:
    if output_dir is not None:
        write_restart_log(output_dir, result, started_at, datetime.now())

    if result.succeeded:
        title = "VM Restart"
        message = f"{result.target} has been automatically restarted due to health issues"
    else:
        title = "VM Restart Failed"
        message = f"{result.target} could not be restarted (stage: {result.stage}): {result.error}"

    send_notification(
        config.webhook_url,
        title,
        message,
        target=result.target,
        resource_group=config.resource_group,
        timeout_s=config.notification_timeout_s,
    )
