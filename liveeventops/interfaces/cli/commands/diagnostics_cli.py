"""
Diagnostics commands: diagnose, restart, logs, health-check.

Architecture:
- Uses CLI bootstrap service to get a DiagnosticsService instance
- Prerequisites (az installed, logged in, subscription) are checked first
- Domain errors are reported as one line with exit code 1
"""

from __future__ import annotations

import argparse

from liveeventops.interfaces.cli.cli_ui import (
    InfoPanel,
    TableDisplay,
    format_assessment,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from liveeventops.interfaces.cli.utils import HANDLED_ERRORS, build_config_service, report_error
from liveeventops.services.domain.diagnostics_svc import DiagnosticsService
from liveeventops.services.infrastructure.cli_bootstrap_svc import get_diagnostics_service


def _prepare(args: argparse.Namespace) -> DiagnosticsService:
    service = get_diagnostics_service(build_config_service(args))
    if not service.config.resource_group:
        raise ValueError("resource group is required (use -g or AZURE_RESOURCE_GROUP)")
    service.check_prerequisites()
    return service


def _require_vm(args: argparse.Namespace) -> str:
    if not args.vm_name:
        raise ValueError("VM name is required for this action (use -v)")
    return str(args.vm_name)


def cmd_diagnose(args: argparse.Namespace) -> int:
    """Full diagnostic analysis of one VM."""
    try:
        vm_name = _require_vm(args)
        service = _prepare(args)
        assessment = service.diagnose(vm_name)
    except HANDLED_ERRORS as e:
        return report_error("Diagnosis failed", e)

    border = {"healthy": "green", "degraded": "yellow"}.get(assessment.category, "red")
    InfoPanel.show("VM Health Analysis", format_assessment(assessment), border)
    print_success(f"Diagnostics completed. Output saved to: {service.output_dir}")
    return 0


def cmd_restart(args: argparse.Namespace) -> int:
    """Restart one VM if its assessment is unhealthy."""
    try:
        vm_name = _require_vm(args)
        service = _prepare(args)
        result = service.restart(vm_name)
    except HANDLED_ERRORS as e:
        return report_error("Restart failed", e)

    if not result.triggered:
        print_info(f"{vm_name}: {result.reason}")
    elif result.succeeded:
        print_success(f"{vm_name} has been restarted ({result.elapsed_s:.0f}s)")
    else:
        print_error(f"{vm_name} restart failed at {result.stage}: {result.error}")
        print_warning("The VM may be left stopped; re-run the restart once the cause is resolved")
        return 1

    print_success(f"Diagnostics completed. Output saved to: {service.output_dir}")
    return 0


def cmd_logs(args: argparse.Namespace) -> int:
    """Dump recent Log Analytics records for one VM."""
    try:
        vm_name = _require_vm(args)
        service = _prepare(args)
        counts = service.gather_logs(vm_name)
    except HANDLED_ERRORS as e:
        return report_error("Log retrieval failed", e)

    if not counts:
        print_warning("Log Analytics workspace not specified, no logs retrieved")
    for table, count in counts.items():
        if count is None:
            print_warning(f"{table}: unavailable")
        else:
            print_info(f"{table}: {count} records")
    print_success(f"Diagnostics completed. Output saved to: {service.output_dir}")
    return 0


def cmd_health_check(args: argparse.Namespace) -> int:
    """Health check of every VM in the resource group."""
    try:
        service = _prepare(args)
        summary = service.health_check()
    except HANDLED_ERRORS as e:
        return report_error("Health check failed", e)

    TableDisplay.show_fleet(summary)
    if summary.unhealthy_targets:
        print_warning(f"Unhealthy VMs found: {', '.join(summary.unhealthy_targets)}")
    print_success(f"Health check completed: {summary.healthy}/{summary.total} VMs healthy")
    print_success(f"Diagnostics completed. Output saved to: {service.output_dir}")
    return 0
