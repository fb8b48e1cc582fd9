"""Configure alert webhook workflow - point the monitoring action group at repository dispatch.

Steps:
1. Validate the resource group and action group exist
2. Build the dispatch URL and check it with the token (warning only)
3. Add (or replace) the webhook receiver on the action group
4. Write a common-alert-schema test payload and, optionally, deliver it
5. Write the configuration summary
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from liveeventops.components.azure.action_group_comp import (
    add_webhook_receiver,
    ensure_resource_group,
    get_action_group,
)
from liveeventops.components.notifications.repository_dispatch_comp import (
    DispatchError,
    build_dispatch_url,
    build_test_alert_payload,
    check_api_access,
    send_dispatch,
)
from liveeventops.components.reporting.report_writer_comp import write_json_document, write_webhook_summary
from liveeventops.helpers.dto.secrets_dto import WebhookSetupResult

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner

logger = logging.getLogger(__name__)

PAYLOAD_FILENAME = "webhook-test-payload.json"
SUMMARY_FILENAME = "webhook-configuration-summary.md"


def configure_alert_webhook_workflow(
    az: AzCliRunner,
    *,
    resource_group: str,
    action_group: str,
    webhook_name: str,
    owner: str,
    repo: str,
    token: str,
    output_dir: str | Path = ".",
    send_test: bool = True,
) -> WebhookSetupResult:
    """
    Wire the action group to the repository-dispatch endpoint.

    Args:
        az: CLI runner
        resource_group: Resource group holding the action group
        action_group: Monitoring action group name
        webhook_name: Receiver name on the action group
        owner: Repository owner
        repo: Repository name
        token: API token with repo scope
        output_dir: Where the test payload and summary are written
        send_test: Deliver the test payload after configuring

    Returns:
        WebhookSetupResult (``test_passed`` is True on HTTP 204)

    Raises:
        ValueError: Owner, repo or token missing
        ResourceLookupFailed: Resource group or action group missing
        AzCliError: Action group update rejected
    """
    if not token:
        raise ValueError("an API token is required to configure the webhook")
    dispatch_url = build_dispatch_url(owner, repo)

    ensure_resource_group(az, resource_group)
    get_action_group(az, resource_group, action_group)

    logger.info(f"[configure_alert_webhook_wf] Webhook URL: {dispatch_url}")
    if not check_api_access(dispatch_url, token):
        logger.warning("[configure_alert_webhook_wf] Could not verify API access, check token permissions")

    result = WebhookSetupResult(
        resource_group=resource_group,
        action_group=action_group,
        webhook_name=webhook_name,
        webhook_url=dispatch_url,
    )

    logger.info(f"[configure_alert_webhook_wf] Updating action group {action_group}...")
    add_webhook_receiver(az, resource_group, action_group, webhook_name, dispatch_url)
    result.action_group_updated = True

    out = Path(output_dir)
    payload = build_test_alert_payload(resource_group)
    result.payload_path = str(write_json_document(out / PAYLOAD_FILENAME, payload))

    if send_test:
        logger.info("[configure_alert_webhook_wf] Testing webhook configuration...")
        try:
            result.test_status_code = send_dispatch(dispatch_url, token, payload)
        except DispatchError as e:
            logger.error(f"[configure_alert_webhook_wf] Webhook test failed: {e}")

        if result.test_passed:
            logger.info("[configure_alert_webhook_wf] Webhook test successful")

    result.summary_path = str(
        write_webhook_summary(
            out / SUMMARY_FILENAME,
            resource_group=resource_group,
            action_group=action_group,
            webhook_name=webhook_name,
            webhook_url=dispatch_url,
            repository=f"{owner}/{repo}",
            test_status_code=result.test_status_code,
        )
    )
    return result
