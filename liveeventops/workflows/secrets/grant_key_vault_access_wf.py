"""Grant Key Vault access workflow - access policies for the operator and the pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from liveeventops.components.azure.key_vault_comp import get_signed_in_user_id, grant_access_policy
from liveeventops.helpers.dto.secrets_dto import AccessGrantResult
from liveeventops.helpers.exceptions import AzCliError

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner

logger = logging.getLogger(__name__)


def grant_key_vault_access_workflow(
    az: AzCliRunner,
    vault_name: str,
    service_principal_id: str | None = None,
) -> AccessGrantResult:
    """
    Grant the signed-in user, and optionally a service principal, access to the vault.

    The user grant is required; a rejected service-principal grant is logged
    and reported in ``skipped``.

    Raises:
        AzCliError: Signed-in user cannot be resolved or the user grant was rejected
    """
    result = AccessGrantResult(vault_name=vault_name)
    logger.info(f"[grant_key_vault_access_wf] Setting up Key Vault access for {vault_name}...")

    user_id = get_signed_in_user_id(az)
    if not user_id:
        raise AzCliError("could not resolve the signed-in user object id")
    grant_access_policy(az, vault_name, object_id=user_id)
    result.granted.append(user_id)

    if service_principal_id:
        try:
            grant_access_policy(az, vault_name, spn=service_principal_id)
            result.granted.append(service_principal_id)
        except AzCliError as e:
            logger.warning(
                f"[grant_key_vault_access_wf] Could not grant access to service principal {service_principal_id}: {e}"
            )
            result.skipped.append(service_principal_id)

    return result
