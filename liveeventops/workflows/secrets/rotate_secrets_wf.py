"""Rotate secrets workflow - replace secrets, keeping a dated backup of the SSH key."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from liveeventops.components.azure.key_vault_comp import (
    SECRET_ALERT_EMAIL,
    SECRET_SSH_PUBLIC_KEY,
    SECRET_WEBHOOK_URL,
    get_secret_value,
    set_secret,
)
from liveeventops.helpers.dto.secrets_dto import SecretSpec, SecretWriteResult

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner

logger = logging.getLogger(__name__)


def backup_secret_name(today: datetime | None = None) -> str:
    return f"{SECRET_SSH_PUBLIC_KEY}-backup-{(today or datetime.now()).strftime('%Y%m%d')}"


def rotate_secrets_workflow(
    az: AzCliRunner,
    vault_name: str,
    *,
    new_ssh_public_key: str | None = None,
    new_webhook_url: str | None = None,
    new_alert_email: str | None = None,
    today: datetime | None = None,
) -> SecretWriteResult:
    """
    Rotate whichever secrets have a new value; the rest are left untouched.

    Before the SSH key is replaced, its current value (if any) is copied to
    ``ssh-public-key-backup-<YYYYmmdd>``.

    Returns:
        SecretWriteResult; ``written`` includes the backup name when one was taken

    Raises:
        AzCliError: A read or write was rejected
    """
    result = SecretWriteResult(vault_name=vault_name)
    logger.info(f"[rotate_secrets_wf] Rotating secrets in Key Vault {vault_name}...")

    if new_ssh_public_key:
        current = get_secret_value(az, vault_name, SECRET_SSH_PUBLIC_KEY)
        if current:
            backup = backup_secret_name(today)
            set_secret(az, vault_name, SecretSpec(name=backup, value=current, purpose="backup", source="rotation"))
            result.written.append(backup)
        set_secret(
            az,
            vault_name,
            SecretSpec(name=SECRET_SSH_PUBLIC_KEY, value=new_ssh_public_key, purpose="vm-authentication", source="rotation"),
        )
        result.written.append(SECRET_SSH_PUBLIC_KEY)
    else:
        result.skipped.append(SECRET_SSH_PUBLIC_KEY)

    for name, value, purpose in (
        (SECRET_WEBHOOK_URL, new_webhook_url, "monitoring-integration"),
        (SECRET_ALERT_EMAIL, new_alert_email, "monitoring-alerts"),
    ):
        if not value:
            result.skipped.append(name)
            continue
        set_secret(az, vault_name, SecretSpec(name=name, value=value, purpose=purpose, source="rotation"))
        result.written.append(name)

    logger.info(f"[rotate_secrets_wf] Secret rotation completed: {', '.join(result.written) or 'nothing to rotate'}")
    return result
