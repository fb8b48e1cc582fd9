"""
Webhook setup command: route Azure Monitor alerts to the incident-response pipeline.
"""

from __future__ import annotations

import argparse
import os

from liveeventops.components.azure.az_cli_comp import ensure_az_ready
from liveeventops.interfaces.cli.cli_ui import InfoPanel, print_error, print_info, print_success, print_warning
from liveeventops.interfaces.cli.utils import HANDLED_ERRORS, build_config_service, report_error
from liveeventops.services.infrastructure.cli_bootstrap_svc import get_alert_webhook_service, get_az_runner


def cmd_webhook_setup(args: argparse.Namespace) -> int:
    """Add the repository-dispatch webhook to the monitoring action group."""
    owner = args.github_owner or os.getenv("GITHUB_OWNER")
    repo = args.github_repo or os.getenv("GITHUB_REPO")
    token = args.github_token or os.getenv("GITHUB_TOKEN")
    if not owner or not repo or not token:
        print_error("Repository owner, name and token are required (-O/-r/-t or GITHUB_OWNER/GITHUB_REPO/GITHUB_TOKEN)")
        return 1

    try:
        config_service = build_config_service(args)
        ensure_az_ready(get_az_runner(config_service), config_service.get("subscription_id"))
        service = get_alert_webhook_service(config_service)
        result = service.configure(owner, repo, token, output_dir=args.output_dir or ".", send_test=not args.skip_test)
    except HANDLED_ERRORS as e:
        return report_error("Webhook setup failed", e)

    content = "\n".join(
        [
            f"[bold]Action Group:[/bold] {result.action_group}",
            f"[bold]Webhook:[/bold] {result.webhook_name}",
            f"[bold]URL:[/bold] {result.webhook_url}",
            f"[bold]Test payload:[/bold] {result.payload_path}",
            f"[bold]Summary:[/bold] {result.summary_path}",
        ]
    )
    InfoPanel.show("Webhook Configuration", content, "green")

    if args.skip_test:
        print_info("Webhook test skipped")
    elif result.test_passed:
        print_success("Webhook test successful (HTTP 204)")
    else:
        print_warning(f"Webhook test failed (HTTP {result.test_status_code}); check token permissions")
        return 1

    print_success("Webhook setup completed successfully")
    return 0
