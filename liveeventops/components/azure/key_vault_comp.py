"""Key Vault component - vault discovery, secret reads/writes and access policies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from liveeventops.helpers.dto.secrets_dto import SecretInfo
from liveeventops.helpers.exceptions import AzCliError, ResourceLookupFailed

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.secrets_dto import SecretSpec

logger = logging.getLogger(__name__)

SECRET_PERMISSIONS = ["get", "list", "set", "delete", "recover", "backup", "restore"]
KEY_PERMISSIONS = ["get", "list", "create", "delete", "update", "import", "backup", "restore", "recover"]
CERTIFICATE_PERMISSIONS = ["get", "list", "create", "delete", "update", "import"]

SECRET_SSH_PUBLIC_KEY = "ssh-public-key"
SECRET_WEBHOOK_URL = "monitoring-webhook-url"
SECRET_ALERT_EMAIL = "monitoring-alert-email"
SECRET_VM_ADMIN_USERNAME = "vm-admin-username"


def find_key_vault(az: AzCliRunner, resource_group: str, name_prefix: str) -> str:
    """
    Return the first vault in the resource group whose name starts with ``name_prefix``.

    Raises:
        ResourceLookupFailed: No such vault, or the group cannot be listed
    """
    try:
        names = az.run_json(
            [
                "keyvault",
                "list",
                "--resource-group",
                resource_group,
                "--query",
                f"[?starts_with(name, '{name_prefix}')].name",
            ]
        )
    except AzCliError as e:
        raise ResourceLookupFailed(resource_group, f"cannot list key vaults: {e}") from e

    if not names:
        raise ResourceLookupFailed(resource_group, f"no key vault named '{name_prefix}*' in resource group")

    vault = str(names[0])
    logger.info("[key_vault] Found Key Vault: %s", vault)
    return vault


def set_secret(az: AzCliRunner, vault_name: str, spec: SecretSpec) -> None:
    """Write one secret with purpose/source tags. Raises AzCliError."""
    az.run(
        [
            "keyvault",
            "secret",
            "set",
            "--vault-name",
            vault_name,
            "--name",
            spec.name,
            "--value",
            spec.value,
            "--tags",
            f"purpose={spec.purpose}",
            f"source={spec.source}",
            "--output",
            "none",
        ]
    )
    logger.info("[key_vault] Secret written: %s (source=%s)", spec.name, spec.source)


def get_secret_value(az: AzCliRunner, vault_name: str, name: str) -> str | None:
    """
    Read a secret's current value.

    Returns:
        The value, or None when the secret does not exist

    Raises:
        AzCliError: Any failure other than not-found
    """
    try:
        payload = az.run_json(["keyvault", "secret", "show", "--vault-name", vault_name, "--name", name])
    except AzCliError as e:
        if e.not_found or "SecretNotFound" in e.stderr:
            return None
        raise
    if not isinstance(payload, dict):
        return None
    value = payload.get("value")
    return str(value) if value is not None else None


def delete_secret(az: AzCliRunner, vault_name: str, name: str) -> None:
    """Delete a secret. Raises AzCliError."""
    az.run(["keyvault", "secret", "delete", "--vault-name", vault_name, "--name", name, "--output", "none"])


def list_secrets(az: AzCliRunner, vault_name: str) -> list[SecretInfo]:
    """List secret names with created/updated timestamps. Raises AzCliError."""
    payload = az.run_json(["keyvault", "secret", "list", "--vault-name", vault_name]) or []
    secrets: list[SecretInfo] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        attributes = item.get("attributes") or {}
        name = item.get("name") or str(item.get("id", "")).rstrip("/").rsplit("/", 1)[-1]
        secrets.append(SecretInfo(name=name, created=attributes.get("created"), updated=attributes.get("updated")))
    return secrets


def get_signed_in_user_id(az: AzCliRunner) -> str:
    """Object id of the signed-in user. Raises AzCliError."""
    return az.run(["ad", "signed-in-user", "show", "--query", "id", "--output", "tsv"]).strip()


def grant_access_policy(
    az: AzCliRunner,
    vault_name: str,
    *,
    object_id: str | None = None,
    spn: str | None = None,
) -> None:
    """
    Grant secret/key/certificate permissions to a user (object id) or service principal.

    Raises:
        ValueError: Neither or both principals given
        AzCliError: Policy update rejected
    """
    if (object_id is None) == (spn is None):
        raise ValueError("exactly one of object_id or spn is required")

    principal = ["--object-id", object_id] if object_id else ["--spn", str(spn)]
    az.run(
        [
            "keyvault",
            "set-policy",
            "--name",
            vault_name,
            *principal,
            "--secret-permissions",
            *SECRET_PERMISSIONS,
            "--key-permissions",
            *KEY_PERMISSIONS,
            "--certificate-permissions",
            *CERTIFICATE_PERMISSIONS,
            "--output",
            "none",
        ]
    )
    logger.info("[key_vault] Access policy granted on %s to %s", vault_name, object_id or spn)
