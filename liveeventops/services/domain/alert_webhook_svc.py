"""Alert webhook service - wires Azure Monitor alerts to the incident-response pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from liveeventops.workflows.alerts.configure_alert_webhook_wf import configure_alert_webhook_workflow

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import DiagnosticsConfig
    from liveeventops.helpers.dto.secrets_dto import WebhookSetupResult


class AlertWebhookService:
    def __init__(self, az: AzCliRunner, config: DiagnosticsConfig) -> None:
        self._az = az
        self.config = config

    def configure(
        self,
        owner: str,
        repo: str,
        token: str,
        output_dir: str | Path = ".",
        send_test: bool = True,
    ) -> WebhookSetupResult:
        """
        Add the repository-dispatch webhook to the configured action group.

        Raises:
            ValueError: Resource group, owner, repo or token missing
            ResourceLookupFailed: Resource group or action group missing
            AzCliError: Action group update rejected
        """
        if not self.config.resource_group:
            raise ValueError("resource group is required to configure the alert webhook")
        return configure_alert_webhook_workflow(
            self._az,
            resource_group=self.config.resource_group,
            action_group=self.config.alerts.action_group,
            webhook_name=self.config.alerts.webhook_name,
            owner=owner,
            repo=repo,
            token=token,
            output_dir=output_dir,
            send_test=send_test,
        )
