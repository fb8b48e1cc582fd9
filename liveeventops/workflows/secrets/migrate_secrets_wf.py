"""Migrate secrets workflow - move deployment secrets into Key Vault."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from liveeventops.components.azure.key_vault_comp import (
    SECRET_ALERT_EMAIL,
    SECRET_SSH_PUBLIC_KEY,
    SECRET_VM_ADMIN_USERNAME,
    SECRET_WEBHOOK_URL,
    set_secret,
)
from liveeventops.helpers.dto.secrets_dto import SecretSpec, SecretWriteResult

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner

logger = logging.getLogger(__name__)

DEFAULT_ALERT_EMAIL = "admin@liveeventops.com"
DEFAULT_VM_ADMIN_USERNAME = "azureuser"

# (secret name, purpose tag, default value)
_MIGRATION_PLAN: tuple[tuple[str, str, str | None], ...] = (
    (SECRET_SSH_PUBLIC_KEY, "vm-authentication", None),
    (SECRET_WEBHOOK_URL, "monitoring-integration", None),
    (SECRET_ALERT_EMAIL, "monitoring-alerts", DEFAULT_ALERT_EMAIL),
    (SECRET_VM_ADMIN_USERNAME, "vm-authentication", DEFAULT_VM_ADMIN_USERNAME),
)


def migrate_secrets_workflow(
    az: AzCliRunner,
    vault_name: str,
    *,
    ssh_public_key: str | None = None,
    webhook_url: str | None = None,
    alert_email: str | None = None,
    vm_admin_username: str | None = None,
) -> SecretWriteResult:
    """
    Write the deployment secrets into ``vault_name``.

    Provided values are tagged ``source=migration``. The alert email and VM
    admin username fall back to defaults tagged ``source=default``; the SSH
    key and webhook URL have no default and are skipped when absent.

    Returns:
        SecretWriteResult listing written and skipped secret names

    Raises:
        AzCliError: A write was rejected
    """
    provided = {
        SECRET_SSH_PUBLIC_KEY: ssh_public_key,
        SECRET_WEBHOOK_URL: webhook_url,
        SECRET_ALERT_EMAIL: alert_email,
        SECRET_VM_ADMIN_USERNAME: vm_admin_username,
    }
    result = SecretWriteResult(vault_name=vault_name)
    logger.info(f"[migrate_secrets_wf] Migrating secrets to Key Vault {vault_name}...")

    for name, purpose, default in _MIGRATION_PLAN:
        value = provided[name]
        if value:
            spec = SecretSpec(name=name, value=value, purpose=purpose, source="migration")
        elif default is not None:
            logger.info(f"[migrate_secrets_wf] Setting default {name}...")
            spec = SecretSpec(name=name, value=default, purpose=purpose, source="default")
        else:
            logger.warning(f"[migrate_secrets_wf] No value for {name}, skipping")
            result.skipped.append(name)
            continue

        set_secret(az, vault_name, spec)
        result.written.append(name)

    logger.info(f"[migrate_secrets_wf] Secrets migration completed: {len(result.written)} written")
    return result
