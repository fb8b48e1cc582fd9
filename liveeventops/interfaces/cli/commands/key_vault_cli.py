"""
Key Vault commands: setup-access, migrate-secrets, verify-access, rotate-secrets, list.

Secret values come from the environment, as in the deployment pipeline:
SSH_PUBLIC_KEY, WEBHOOK_URL, ALERT_EMAIL, VM_ADMIN_USERNAME for migration and
NEW_SSH_PUBLIC_KEY, NEW_WEBHOOK_URL, NEW_ALERT_EMAIL for rotation.
"""

from __future__ import annotations

import argparse
import os

from liveeventops.components.azure.az_cli_comp import ensure_az_ready
from liveeventops.interfaces.cli.cli_ui import InfoPanel, TableDisplay, print_error, print_success, print_warning
from liveeventops.interfaces.cli.utils import HANDLED_ERRORS, build_config_service, report_error
from liveeventops.services.domain.key_vault_svc import KeyVaultService
from liveeventops.services.infrastructure.cli_bootstrap_svc import get_az_runner, get_key_vault_service


def _prepare(args: argparse.Namespace) -> KeyVaultService:
    config_service = build_config_service(args)
    ensure_az_ready(get_az_runner(config_service), config_service.get("subscription_id"))
    return get_key_vault_service(config_service)


def cmd_key_vault(args: argparse.Namespace) -> int:
    """Dispatch to the selected key-vault subcommand."""
    handlers = {
        "setup-access": _setup_access,
        "migrate-secrets": _migrate_secrets,
        "verify-access": _verify_access,
        "rotate-secrets": _rotate_secrets,
        "list": _list_secrets,
    }
    try:
        service = _prepare(args)
        return handlers[args.kv_cmd](service)
    except HANDLED_ERRORS as e:
        return report_error(f"key-vault {args.kv_cmd} failed", e)


def _setup_access(service: KeyVaultService) -> int:
    result = service.setup_access(os.getenv("AZURE_CLIENT_ID") or None)
    for skipped in result.skipped:
        print_warning(f"Could not grant access to service principal {skipped}")
    print_success(f"Key Vault access configured for {result.vault_name} ({len(result.granted)} principal(s))")
    return 0


def _migrate_secrets(service: KeyVaultService) -> int:
    result = service.migrate_secrets(
        ssh_public_key=os.getenv("SSH_PUBLIC_KEY"),
        webhook_url=os.getenv("WEBHOOK_URL"),
        alert_email=os.getenv("ALERT_EMAIL"),
        vm_admin_username=os.getenv("VM_ADMIN_USERNAME"),
    )
    for name in result.skipped:
        print_warning(f"No value provided for {name}, skipped")
    print_success(f"Secrets migration completed: {', '.join(result.written) or 'nothing written'}")
    _list_secrets(service)
    return 0


def _verify_access(service: KeyVaultService) -> int:
    result = service.verify_access()
    marks = {True: "[green]✓[/green]", False: "[red]✗[/red]", None: "[yellow]-[/yellow]"}
    content = "\n".join(
        [
            f"[bold]Vault:[/bold] {result.vault_name}",
            f"{marks[result.can_list]} list",
            f"{marks[result.can_read]} read" + (" (no secrets to read)" if result.can_read is None else ""),
            f"{marks[result.can_write]} write",
        ]
    )
    InfoPanel.show("Key Vault Access", content, "green" if result.ok else "red")
    if not result.ok:
        for err in result.errors:
            print_error(err)
        return 1
    print_success("Key Vault access verification completed")
    return 0


def _rotate_secrets(service: KeyVaultService) -> int:
    result = service.rotate_secrets(
        new_ssh_public_key=os.getenv("NEW_SSH_PUBLIC_KEY"),
        new_webhook_url=os.getenv("NEW_WEBHOOK_URL"),
        new_alert_email=os.getenv("NEW_ALERT_EMAIL"),
    )
    if not result.written:
        print_warning("No new secret values provided (NEW_SSH_PUBLIC_KEY, NEW_WEBHOOK_URL, NEW_ALERT_EMAIL)")
    else:
        print_success(f"Secret rotation completed: {', '.join(result.written)}")
    return 0


def _list_secrets(service: KeyVaultService) -> int:
    TableDisplay.show_secrets(service.vault_name, service.list_secrets())
    return 0
