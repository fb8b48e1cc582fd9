"""Monitor action group component - existence checks and webhook receivers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from liveeventops.helpers.exceptions import AzCliError, ResourceLookupFailed

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner

logger = logging.getLogger(__name__)


def ensure_resource_group(az: AzCliRunner, resource_group: str) -> None:
    """Raises ResourceLookupFailed if the resource group does not exist."""
    try:
        az.run_json(["group", "show", "--name", resource_group])
    except AzCliError as e:
        raise ResourceLookupFailed(resource_group, "resource group does not exist") from e


def get_action_group(az: AzCliRunner, resource_group: str, action_group: str) -> dict[str, Any]:
    """
    Fetch an action group document.

    Raises:
        ResourceLookupFailed: Action group missing (it is created by the infrastructure templates)
    """
    try:
        payload = az.run_json(["monitor", "action-group", "show", "--resource-group", resource_group, "--name", action_group])
    except AzCliError as e:
        raise ResourceLookupFailed(action_group, "action group does not exist; apply the infrastructure first") from e
    return payload if isinstance(payload, dict) else {}


def webhook_receiver_names(action_group_doc: dict[str, Any]) -> list[str]:
    receivers = action_group_doc.get("webhookReceivers") or []
    return [str(r.get("name")) for r in receivers if isinstance(r, dict) and r.get("name")]


def add_webhook_receiver(
    az: AzCliRunner,
    resource_group: str,
    action_group: str,
    webhook_name: str,
    service_uri: str,
) -> None:
    """
    Add (or replace) a webhook receiver on the action group.

    An existing receiver with the same name is removed first so the update
    is idempotent.

    Raises:
        AzCliError: Update rejected
    """
    current = get_action_group(az, resource_group, action_group)
    if webhook_name in webhook_receiver_names(current):
        logger.info("[action_group] Replacing existing webhook receiver %s", webhook_name)
        az.run(
            [
                "monitor",
                "action-group",
                "update",
                "--resource-group",
                resource_group,
                "--name",
                action_group,
                "--remove-action",
                webhook_name,
                "--output",
                "none",
            ]
        )

    az.run(
        [
            "monitor",
            "action-group",
            "update",
            "--resource-group",
            resource_group,
            "--name",
            action_group,
            "--add-action",
            "webhook",
            webhook_name,
            service_uri,
            "usecommonalertschema",
            "--output",
            "none",
        ]
    )
    logger.info("[action_group] Webhook receiver %s added to %s", webhook_name, action_group)
