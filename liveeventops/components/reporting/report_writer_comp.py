"""Report writer component - persists assessments, summaries and the diagnostic report.

File layout inside the diagnostics output directory:

| File                              | Written by                   |
|-----------------------------------|------------------------------|
| ``<vm>_health_analysis.json``     | write_assessment             |
| ``<vm>_lookup_failure.json``      | write_lookup_failure         |
| ``<vm>_signals.json``             | write_signals                |
| ``<vm>_<table>.json``             | write_log_records            |
| ``<vm>_restart.log``              | write_restart_log            |
| ``health_check_summary.json``     | write_fleet_summary          |
| ``diagnostic_report.md``          | write_diagnostic_report      |

The JSON field names are the compatibility contract with the earlier shell
tooling (``vm_name``, ``health_score``, ``status``, ``issues``, ``timestamp``).
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from liveeventops.helpers.dto.health_dto import (
    FleetSummary,
    HealthAssessment,
    HealthSignals,
    LookupFailure,
    RemediationResult,
)

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "health_check_summary.json"
REPORT_FILENAME = "diagnostic_report.md"


def ensure_output_dir(output_dir: str | Path) -> Path:
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    logger.debug("[report_writer] Wrote %s", path.name)
    return path


def assessment_to_record(assessment: HealthAssessment) -> dict[str, Any]:
    return {
        "vm_name": assessment.target,
        "health_score": assessment.score,
        "status": assessment.category,
        "issues": list(assessment.issues),
        "timestamp": assessment.timestamp,
    }


def lookup_failure_to_record(failure: LookupFailure) -> dict[str, Any]:
    return {
        "vm_name": failure.target,
        "health_score": None,
        "status": "lookup_failed",
        "issues": [failure.error],
        "timestamp": failure.timestamp,
    }


def fleet_summary_to_record(summary: FleetSummary) -> dict[str, Any]:
    return {
        "resource_group": summary.resource_group,
        "total_vms": summary.total,
        "healthy_vms": summary.healthy,
        "unhealthy_vms": summary.unhealthy,
        "unhealthy_vm_list": list(summary.unhealthy_targets),
        "degraded_vms": summary.degraded,
        "failed_lookups": summary.failed_lookups,
        "timestamp": summary.timestamp,
    }


def write_assessment(output_dir: str | Path, assessment: HealthAssessment) -> Path:
    return _write_json(Path(output_dir) / f"{assessment.target}_health_analysis.json", assessment_to_record(assessment))


def write_lookup_failure(output_dir: str | Path, failure: LookupFailure) -> Path:
    return _write_json(Path(output_dir) / f"{failure.target}_lookup_failure.json", lookup_failure_to_record(failure))


def write_signals(output_dir: str | Path, signals: HealthSignals) -> Path:
    data = asdict(signals)
    return _write_json(Path(output_dir) / f"{signals.target}_signals.json", data)


def write_log_records(output_dir: str | Path, target: str, table: str, rows: list[Any]) -> Path:
    return _write_json(Path(output_dir) / f"{target}_{table.lower()}.json", rows)


def write_fleet_summary(output_dir: str | Path, summary: FleetSummary) -> Path:
    return _write_json(Path(output_dir) / SUMMARY_FILENAME, fleet_summary_to_record(summary))


def write_restart_log(
    output_dir: str | Path,
    result: RemediationResult,
    started_at: datetime,
    finished_at: datetime,
) -> Path:
    path = Path(output_dir) / f"{result.target}_restart.log"
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [
        f"VM restart initiated at {started_at.isoformat(timespec='seconds')}",
        f"Reason: {result.reason}",
    ]
    if result.succeeded:
        lines.append(f"VM restart completed at {finished_at.isoformat(timespec='seconds')}")
    else:
        lines.append(f"VM restart FAILED at {finished_at.isoformat(timespec='seconds')} (stage: {result.stage})")
        lines.append(f"Error: {result.error}")
    lines.append(f"Elapsed: {result.elapsed_s:.1f}s")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_diagnostic_report(
    output_dir: str | Path,
    *,
    action: str,
    resource_group: str | None,
    target: str | None = None,
    assessment: HealthAssessment | None = None,
    summary: FleetSummary | None = None,
    generated_at: datetime | None = None,
) -> Path:
    """
    Write the human-readable markdown report listing the summary and every generated file.
    """
    out = ensure_output_dir(output_dir)
    report = out / REPORT_FILENAME
    generated = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    lines = [
        "# LiveEventOps VM Diagnostic Report",
        "",
        f"**Generated:** {generated}",
        f"**Resource Group:** {resource_group or '-'}",
        f"**Action:** {action}",
        "",
        "## Summary",
        "",
    ]

    if summary is not None:
        lines += [
            f"- **Total VMs:** {summary.total}",
            f"- **Healthy VMs:** {summary.healthy}",
            f"- **Unhealthy VMs:** {summary.unhealthy}",
            f"  - Degraded: {summary.degraded}",
            f"  - Lookup failures: {summary.failed_lookups}",
            "",
        ]
        if summary.unhealthy_targets:
            lines += ["### Unhealthy VMs", ""]
            lines += [f"- {name}" for name in summary.unhealthy_targets]
            lines.append("")
    elif assessment is not None:
        lines += [
            f"- **VM Name:** {assessment.target}",
            f"- **Health Score:** {assessment.score}/100",
            f"- **Status:** {assessment.category}",
            "",
        ]
        if assessment.issues:
            lines += ["### Issues", ""]
            lines += [f"- {issue}" for issue in assessment.issues]
            lines.append("")
    elif target:
        lines += [f"- **VM Name:** {target}", ""]

    lines += ["## Files Generated", ""]
    for path in sorted(out.iterdir()):
        if path.is_file() and path.name != REPORT_FILENAME:
            lines.append(f"- {path.name}")

    report.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("[report_writer] Diagnostic report generated: %s", report)
    return report


def write_json_document(path: str | Path, data: Any) -> Path:
    """Write an arbitrary JSON document (e.g. a test payload)."""
    return _write_json(Path(path), data)


def write_webhook_summary(
    path: str | Path,
    *,
    resource_group: str,
    action_group: str,
    webhook_name: str,
    webhook_url: str,
    repository: str,
    test_status_code: int | None,
    generated_at: datetime | None = None,
) -> Path:
    """Write the markdown summary of the alert webhook configuration."""
    generated = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    if test_status_code is None:
        test_line = "not run"
    elif test_status_code == 204:
        test_line = "passed (HTTP 204)"
    else:
        test_line = f"failed (HTTP {test_status_code})"

    lines = [
        "# Azure Monitor Webhook Configuration Summary",
        "",
        f"**Generated:** {generated}",
        f"**Resource Group:** {resource_group}",
        f"**Action Group:** {action_group}",
        "",
        "## Webhook Settings",
        "",
        f"- **Name:** {webhook_name}",
        f"- **URL:** {webhook_url}",
        f"- **Repository:** {repository}",
        "- **Common Alert Schema:** Enabled",
        f"- **Test Dispatch:** {test_line}",
        "",
        "## Alert Flow",
        "",
        "1. Azure Monitor detects threshold breach",
        "2. Alert rule triggers action group",
        "3. Action group sends webhook to the repository-dispatch endpoint",
        "4. The incident-response pipeline runs `leo health-check` / `leo restart`",
        "",
        "## Repository Requirements",
        "",
        "- Pipeline definition listening for `repository_dispatch` events of type `azure-monitor-alert`",
        "- Token with `repo` scope",
        "- Secrets: `AZURE_CLIENT_ID`, `AZURE_TENANT_ID`, `AZURE_SUBSCRIPTION_ID`, optional `WEBHOOK_URL`",
        "",
    ]
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("\n".join(lines), encoding="utf-8")
    logger.info("[report_writer] Configuration summary saved to: %s", out)
    return out
