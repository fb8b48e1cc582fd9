"""
Diagnostics service - entry point for diagnose / restart / logs / health-check.

## Diagnostics Contract

DiagnosticsService OWNS:
- The injected AzCliRunner and DiagnosticsConfig for one invocation
- The output directory (created on first write)
- Per-target remediation locks (in-process only)

DiagnosticsService DELEGATES:
- Signal collection and scoring to assess_vm_health_workflow
- Restart decision and power control to restart_unhealthy_vm_workflow
- Fleet enumeration and aggregation to check_fleet_health_workflow

### Key Rules

1. Every action writes its files under ``config.output_dir`` and finishes
   with ``diagnostic_report.md``.

2. A restart of a target that is already being restarted by this process
   fails immediately with ``RemediationFailed(stage="locked")`` after a
   best-effort webhook notification. No cross-process exclusion is attempted.

3. The lock is released on every exit path, including a failure to create
   the output directory.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from liveeventops.components.azure.az_cli_comp import ensure_az_ready
from liveeventops.components.notifications.webhook_notify_comp import send_notification
from liveeventops.components.reporting.report_writer_comp import ensure_output_dir, write_diagnostic_report
from liveeventops.helpers.exceptions import RemediationFailed
from liveeventops.helpers.logging_helper import clear_log_context
from liveeventops.workflows.diagnostics.gather_vm_logs_wf import gather_vm_logs_workflow
from liveeventops.workflows.health.assess_vm_health_wf import assess_vm_health_workflow
from liveeventops.workflows.health.check_fleet_health_wf import check_fleet_health_workflow
from liveeventops.workflows.health.restart_unhealthy_vm_wf import restart_unhealthy_vm_workflow

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import DiagnosticsConfig
    from liveeventops.helpers.dto.health_dto import FleetSummary, HealthAssessment, RemediationResult

logger = logging.getLogger(__name__)


class DiagnosticsService:
    """Runs the VM diagnostics actions against one resource group."""

    def __init__(self, az: AzCliRunner, config: DiagnosticsConfig) -> None:
        self._az = az
        self.config = config
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def output_dir(self) -> Path:
        return Path(self.config.output_dir)

    def check_prerequisites(self) -> dict[str, Any]:
        """
        Verify `az` is installed and logged in, selecting the configured subscription.

        Raises:
            PrerequisiteError: CLI missing or not logged in
        """
        account = ensure_az_ready(self._az, self.config.subscription_id)
        logger.info("[diagnostics_svc] Prerequisites validated")
        return account

    def diagnose(self, target: str) -> HealthAssessment:
        """Gather logs for one VM, assess it, and write its signals, analysis and the report."""
        ensure_output_dir(self.output_dir)
        try:
            gather_vm_logs_workflow(self._az, self.config, target, self.output_dir)
            assessment = assess_vm_health_workflow(self._az, self.config, target, self.output_dir)
        finally:
            clear_log_context()
        self.generate_report("diagnose", target=target, assessment=assessment)
        return assessment

    def restart(
        self,
        target: str,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> RemediationResult:
        """
        Assess one VM and restart it if unhealthy.

        Raises:
            RemediationFailed: stage "locked" if a restart of ``target`` is already running
            ResourceLookupFailed: Target cannot be looked up
        """
        lock = self._lock_for(target)
        if not lock.acquire(blocking=False):
            reason = "a restart of this target is already in progress"
            logger.warning(f"[diagnostics_svc] Restart of {target} rejected: {reason}")
            send_notification(
                self.config.webhook_url,
                "VM Restart Failed",
                f"{target} could not be restarted (stage: locked): {reason}",
                target=target,
                resource_group=self.config.resource_group,
                timeout_s=self.config.notification_timeout_s,
            )
            raise RemediationFailed(target, "locked", reason)

        try:
            ensure_output_dir(self.output_dir)
            gather_vm_logs_workflow(self._az, self.config, target, self.output_dir)
            result = restart_unhealthy_vm_workflow(
                self._az,
                self.config,
                target,
                self.output_dir,
                sleep=sleep,
                clock=clock,
            )
        finally:
            lock.release()
            clear_log_context()

        self.generate_report("restart", target=target)
        return result

    def gather_logs(self, target: str) -> dict[str, int | None]:
        """Dump recent Syslog/Perf/Heartbeat records for one VM."""
        ensure_output_dir(self.output_dir)
        try:
            counts = gather_vm_logs_workflow(self._az, self.config, target, self.output_dir)
        finally:
            clear_log_context()
        self.generate_report("logs", target=target)
        return counts

    def health_check(self) -> FleetSummary:
        """Assess every VM in the resource group and write the fleet summary."""
        ensure_output_dir(self.output_dir)
        try:
            summary = check_fleet_health_workflow(self._az, self.config, self.output_dir)
        finally:
            clear_log_context()
        self.generate_report("health-check", summary=summary)
        return summary

    def generate_report(
        self,
        action: str,
        *,
        target: str | None = None,
        assessment: HealthAssessment | None = None,
        summary: FleetSummary | None = None,
    ) -> Path:
        return write_diagnostic_report(
            self.output_dir,
            action=action,
            resource_group=self.config.resource_group,
            target=target,
            assessment=assessment,
            summary=summary,
        )

    def _lock_for(self, target: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(target)
            if lock is None:
                lock = threading.Lock()
                self._locks[target] = lock
            return lock
