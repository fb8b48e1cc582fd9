"""Azure CLI runner component.

Every provider call in LiveEventOps is a blocking `az` subprocess. This
component owns how that subprocess is started, bounded and decoded, so the
rest of the code deals in parsed JSON and typed exceptions only.

Architecture:
- Leaf component (no upward imports)
- AzCliRunner is injected into components and workflows; tests substitute a fake
- Failures surface as AzCliError with the exit code and stderr preserved
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from typing import Any

from liveeventops.helpers.exceptions import AzCliError, PrerequisiteError

logger = logging.getLogger(__name__)

AZ_EXECUTABLE = "az"
AZ_DEFAULT_TIMEOUT_S = 120.0


class AzCliRunner:
    """Runs `az` commands with a hard timeout and decodes their output."""

    def __init__(self, executable: str = AZ_EXECUTABLE, timeout_s: float = AZ_DEFAULT_TIMEOUT_S) -> None:
        self.executable = executable
        self.timeout_s = timeout_s

    def is_available(self) -> bool:
        """True if the `az` binary is on PATH."""
        return shutil.which(self.executable) is not None

    def run(self, args: list[str], timeout_s: float | None = None) -> str:
        """
        Run ``az <args>`` and return stdout.

        Args:
            args: Arguments after the executable name
            timeout_s: Per-call override of the runner timeout

        Returns:
            Raw stdout text

        Raises:
            AzCliError: Non-zero exit, timeout, or missing binary
        """
        cmd = [self.executable, *args]
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        logger.debug("[az] %s", " ".join(args[:3]))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=True,
            )
        except subprocess.TimeoutExpired as e:
            raise AzCliError(f"az {args[0] if args else ''} timed out after {timeout:.0f}s") from e
        except FileNotFoundError as e:
            raise AzCliError(f"'{self.executable}' executable not found") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            message = stderr.splitlines()[-1] if stderr else f"exit code {e.returncode}"
            raise AzCliError(message[:300], returncode=e.returncode, stderr=stderr) from e

        return result.stdout

    def run_json(self, args: list[str], timeout_s: float | None = None) -> Any:
        """
        Run ``az <args> --output json`` and parse the result.

        Returns:
            Parsed JSON, or None when the command printed nothing

        Raises:
            AzCliError: Process failure or invalid JSON
        """
        stdout = self.run([*args, "--output", "json"], timeout_s=timeout_s)
        if not stdout.strip():
            return None
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as e:
            raise AzCliError(f"az returned invalid JSON: {e}") from e


def ensure_az_ready(az: AzCliRunner, subscription_id: str | None = None) -> dict[str, Any]:
    """
    Validate that `az` is installed and logged in, then select the subscription.

    Args:
        az: Runner to validate
        subscription_id: Subscription to make active, if given

    Returns:
        The active account document from ``az account show``

    Raises:
        PrerequisiteError: Binary missing, not logged in, or subscription rejected
    """
    if not az.is_available():
        raise PrerequisiteError("Azure CLI is not installed")

    try:
        account = az.run_json(["account", "show"])
    except AzCliError as e:
        raise PrerequisiteError("Not logged in to Azure. Run 'az login' first") from e

    if subscription_id:
        logger.info("[az] Setting subscription to %s", subscription_id)
        try:
            az.run(["account", "set", "--subscription", subscription_id])
        except AzCliError as e:
            raise PrerequisiteError(f"Cannot select subscription {subscription_id}: {e}") from e

    return account if isinstance(account, dict) else {}
