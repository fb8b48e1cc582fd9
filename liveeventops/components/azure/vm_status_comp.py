"""VM status component - resource-status lookup and enumeration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from liveeventops.components.azure.az_payload_comp import VirtualMachineView, parse_vm_view
from liveeventops.helpers.exceptions import AzCliError, ResourceLookupFailed

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.health_dto import PowerState

logger = logging.getLogger(__name__)


def get_vm_view(az: AzCliRunner, resource_group: str, vm_name: str) -> VirtualMachineView:
    """
    Fetch the instance view (resource id + power state) for a VM.

    Raises:
        ResourceLookupFailed: VM does not exist or the view cannot be read
    """
    try:
        payload = az.run_json(["vm", "get-instance-view", "--resource-group", resource_group, "--name", vm_name])
    except AzCliError as e:
        reason = "resource not found" if e.not_found else str(e)
        raise ResourceLookupFailed(vm_name, reason) from e

    try:
        return parse_vm_view(payload)
    except ValueError as e:
        raise ResourceLookupFailed(vm_name, str(e)) from e


def get_power_state(az: AzCliRunner, resource_group: str, vm_name: str) -> PowerState:
    """
    Resource-status lookup.

    Returns:
        "running", "stopped" (exists but not running) or "unknown"

    Raises:
        ResourceLookupFailed: VM does not exist or status cannot be determined
    """
    state = get_vm_view(az, resource_group, vm_name).power_state()
    logger.debug("[vm_status] %s power state: %s", vm_name, state)
    return state


def list_vm_names(az: AzCliRunner, resource_group: str) -> list[str]:
    """
    Enumerate VM names in a resource group.

    Raises:
        ResourceLookupFailed: The resource group cannot be listed
    """
    try:
        payload = az.run_json(["vm", "list", "--resource-group", resource_group, "--query", "[].name"])
    except AzCliError as e:
        raise ResourceLookupFailed(resource_group, f"cannot list VMs: {e}") from e

    if not isinstance(payload, list):
        return []
    return [str(name) for name in payload if name]
