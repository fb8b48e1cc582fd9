"""
Key Vault service - secret management for the LiveEventOps deployment.

Resolves the vault once per service (configured name, else the first vault
in the resource group matching the configured prefix) and delegates each
operation to its workflow.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from liveeventops.components.azure.key_vault_comp import find_key_vault, list_secrets
from liveeventops.workflows.secrets.grant_key_vault_access_wf import grant_key_vault_access_workflow
from liveeventops.workflows.secrets.migrate_secrets_wf import migrate_secrets_workflow
from liveeventops.workflows.secrets.rotate_secrets_wf import rotate_secrets_workflow
from liveeventops.workflows.secrets.verify_key_vault_access_wf import verify_key_vault_access_workflow

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import DiagnosticsConfig
    from liveeventops.helpers.dto.secrets_dto import (
        AccessCheckResult,
        AccessGrantResult,
        SecretInfo,
        SecretWriteResult,
    )

logger = logging.getLogger(__name__)


class KeyVaultService:
    """Key Vault operations scoped to the configured resource group."""

    def __init__(self, az: AzCliRunner, config: DiagnosticsConfig) -> None:
        self._az = az
        self.config = config
        self._vault_name: str | None = config.key_vault.name

    @property
    def vault_name(self) -> str:
        """
        Resolved vault name.

        Raises:
            ValueError: No vault name and no resource group to search
            ResourceLookupFailed: No vault matches the configured prefix
        """
        if self._vault_name is None:
            if not self.config.resource_group:
                raise ValueError("resource group is required to auto-detect the Key Vault")
            logger.info("[key_vault_svc] Auto-detecting Key Vault name...")
            self._vault_name = find_key_vault(self._az, self.config.resource_group, self.config.key_vault.name_prefix)
        return self._vault_name

    def setup_access(self, service_principal_id: str | None = None) -> AccessGrantResult:
        return grant_key_vault_access_workflow(self._az, self.vault_name, service_principal_id)

    def migrate_secrets(
        self,
        *,
        ssh_public_key: str | None = None,
        webhook_url: str | None = None,
        alert_email: str | None = None,
        vm_admin_username: str | None = None,
    ) -> SecretWriteResult:
        return migrate_secrets_workflow(
            self._az,
            self.vault_name,
            ssh_public_key=ssh_public_key,
            webhook_url=webhook_url or self.config.webhook_url,
            alert_email=alert_email,
            vm_admin_username=vm_admin_username,
        )

    def verify_access(self) -> AccessCheckResult:
        return verify_key_vault_access_workflow(self._az, self.vault_name)

    def rotate_secrets(
        self,
        *,
        new_ssh_public_key: str | None = None,
        new_webhook_url: str | None = None,
        new_alert_email: str | None = None,
    ) -> SecretWriteResult:
        return rotate_secrets_workflow(
            self._az,
            self.vault_name,
            new_ssh_public_key=new_ssh_public_key,
            new_webhook_url=new_webhook_url,
            new_alert_email=new_alert_email,
        )

    def list_secrets(self) -> list[SecretInfo]:
        """Name/created/updated for every secret in the vault. Raises AzCliError."""
        return list_secrets(self._az, self.vault_name)
