"""Verify Key Vault access workflow - check list, read and write permissions."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from liveeventops.components.azure.key_vault_comp import (
    delete_secret,
    get_secret_value,
    list_secrets,
    set_secret,
)
from liveeventops.helpers.dto.secrets_dto import AccessCheckResult, SecretSpec
from liveeventops.helpers.exceptions import AzCliError

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner

logger = logging.getLogger(__name__)


def verify_key_vault_access_workflow(az: AzCliRunner, vault_name: str) -> AccessCheckResult:
    """
    Check list, read and write access to ``vault_name``.

    Read is tested against the first listed secret (skipped, ``can_read=None``,
    when the vault is empty). Write sets and then deletes a throwaway
    ``access-test-<epoch>`` secret. Failures are collected, not raised.
    """
    result = AccessCheckResult(vault_name=vault_name)
    logger.info(f"[verify_key_vault_access_wf] Verifying Key Vault access for {vault_name}...")

    names: list[str] = []
    try:
        names = [s.name for s in list_secrets(az, vault_name)]
        result.can_list = True
    except AzCliError as e:
        result.errors.append(f"list: {e}")

    if names:
        try:
            result.can_read = get_secret_value(az, vault_name, names[0]) is not None
            if not result.can_read:
                result.errors.append(f"read: secret {names[0]} returned no value")
        except AzCliError as e:
            result.can_read = False
            result.errors.append(f"read: {e}")

    test_name = f"access-test-{int(time.time())}"
    try:
        set_secret(az, vault_name, SecretSpec(name=test_name, value="test-value", purpose="access-test", source="verification"))
        result.can_write = True
    except AzCliError as e:
        result.errors.append(f"write: {e}")
    else:
        try:
            delete_secret(az, vault_name, test_name)
        except AzCliError as e:
            logger.warning(f"[verify_key_vault_access_wf] Could not delete test secret {test_name}: {e}")

    if result.ok:
        logger.info("[verify_key_vault_access_wf] Key Vault access verification completed")
    else:
        logger.error(f"[verify_key_vault_access_wf] Access verification failed: {'; '.join(result.errors)}")
    return result
