"""Power control component - stop/start instructions and confirmation polling.

Architecture:
- Stop/start are issued with --no-wait; confirmation is our own bounded poll
- Polling is bounded by both max_attempts and timeout_s; whichever is hit
  first raises RemediationFailed (there is no optimistic fall-through)
- sleep/clock are injectable so tests never wait
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from liveeventops.components.azure.vm_status_comp import get_vm_view
from liveeventops.helpers.exceptions import AzCliError, RemediationFailed, ResourceLookupFailed

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import PollingPolicy
    from liveeventops.helpers.dto.health_dto import PowerState

logger = logging.getLogger(__name__)

# PowerState/<code> suffixes that confirm a desired state
_CONFIRMING_CODES: dict[str, frozenset[str]] = {
    "stopped": frozenset({"stopped", "deallocated"}),
    "running": frozenset({"running"}),
}


def stop_vm(az: AzCliRunner, resource_group: str, vm_name: str) -> None:
    """
    Issue a stop instruction (returns once the provider acknowledges it).

    Raises:
        RemediationFailed: Instruction rejected
    """
    _issue_power_command(az, "stop", resource_group, vm_name)


def start_vm(az: AzCliRunner, resource_group: str, vm_name: str) -> None:
    """
    Issue a start instruction (returns once the provider acknowledges it).

    Raises:
        RemediationFailed: Instruction rejected
    """
    _issue_power_command(az, "start", resource_group, vm_name)


def _issue_power_command(az: AzCliRunner, verb: str, resource_group: str, vm_name: str) -> None:
    logger.info("[power] %s %s", "Stopping" if verb == "stop" else "Starting", vm_name)
    try:
        az.run(["vm", verb, "--resource-group", resource_group, "--name", vm_name, "--no-wait"])
    except AzCliError as e:
        raise RemediationFailed(vm_name, verb, str(e)) from e


def wait_for_power_state(
    az: AzCliRunner,
    resource_group: str,
    vm_name: str,
    desired: PowerState,
    policy: PollingPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """
    Poll until the VM reports ``desired`` or the policy is exhausted.

    Confirmation compares the exact power code: transitional codes such as
    ``stopping`` or ``starting`` never confirm. Lookup errors during polling
    count as a failed attempt rather than an immediate failure.

    Args:
        az: CLI runner
        resource_group: Resource group of the VM
        vm_name: VM to poll
        desired: "stopped" or "running"
        policy: Attempt/timeout/interval bounds
        sleep: Sleep function (injectable for tests)
        clock: Monotonic clock (injectable for tests)

    Returns:
        Number of attempts used

    Raises:
        RemediationFailed: State not reached within max_attempts or timeout_s
    """
    stage = f"wait_{desired}"
    confirming = _CONFIRMING_CODES[desired]
    started = clock()
    last_seen: str = "unknown"

    for attempt in range(1, policy.max_attempts + 1):
        code: str | None = None
        try:
            code = get_vm_view(az, resource_group, vm_name).power_code()
            last_seen = code or "unknown"
        except ResourceLookupFailed as e:
            last_seen = f"lookup failed ({e.reason})"
            logger.warning("[power] %s poll %d: %s", vm_name, attempt, last_seen)

        if code in confirming:
            logger.info("[power] %s reached %s (%s) after %d attempt(s)", vm_name, desired, code, attempt)
            return attempt

        elapsed = clock() - started
        if elapsed >= policy.timeout_s:
            raise RemediationFailed(
                vm_name,
                stage,
                f"timed out after {elapsed:.0f}s waiting for {desired} (last seen: {last_seen})",
            )
        if attempt < policy.max_attempts:
            # never sleep past the deadline
            sleep(min(policy.poll_interval_s, policy.timeout_s - elapsed))

    raise RemediationFailed(
        vm_name,
        stage,
        f"{desired} not confirmed after {policy.max_attempts} attempts (last seen: {last_seen})",
    )
