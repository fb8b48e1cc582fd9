#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse
import logging

from liveeventops.__version__ import __version__
from liveeventops.helpers.logging_helper import configure_logging
from liveeventops.interfaces.cli.commands.diagnostics_cli import cmd_diagnose, cmd_health_check, cmd_logs, cmd_restart
from liveeventops.interfaces.cli.commands.key_vault_cli import cmd_key_vault
from liveeventops.interfaces.cli.commands.webhook_cli import cmd_webhook_setup


def _add_scope_args(s: argparse.ArgumentParser, vm: bool = False) -> None:
    s.add_argument("-g", "--resource-group", dest="resource_group", help="Azure resource group name")
    s.add_argument("-s", "--subscription", help="Azure subscription ID")
    s.add_argument("-o", "--output-dir", dest="output_dir", help="output directory for diagnostic files")
    if vm:
        s.add_argument("-v", "--vm-name", dest="vm_name", help="virtual machine name")
        s.add_argument("-w", "--workspace", help="Log Analytics workspace name or id")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="leo",
        description="LiveEventOps - VM diagnostics, remediation and alert wiring for Azure",
        epilog="Examples:\n"
        "  leo diagnose -g liveeventops-rg -v management-vm-abc123   # Full diagnostics\n"
        "  leo restart -g liveeventops-rg -v camera-1-abc123          # Restart if unhealthy\n"
        "  leo health-check -g liveeventops-rg                        # All VMs in the group\n"
        "  leo key-vault verify-access -g liveeventops-rg             # Test vault permissions\n"
        "  leo webhook-setup -O myorg -r liveeventops -t ghp_xxx      # Wire alerts to dispatch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--verbose", action="store_true", help="enable debug logging")
    p.add_argument("--config", help="path to a YAML config file")

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'leo <command> --help' for command-specific help)",
    )

    # diagnose: full analysis of one VM
    s = sub.add_parser("diagnose", help="Full diagnostic analysis of one VM")
    _add_scope_args(s, vm=True)
    s.set_defaults(func=cmd_diagnose)

    # restart: remediate one VM if unhealthy
    s = sub.add_parser("restart", help="Restart a VM if its health assessment is unhealthy")
    _add_scope_args(s, vm=True)
    s.set_defaults(func=cmd_restart)

    # logs: dump Log Analytics records
    s = sub.add_parser("logs", help="Gather Syslog/Perf/Heartbeat records for one VM")
    _add_scope_args(s, vm=True)
    s.set_defaults(func=cmd_logs)

    # health-check: every VM in the resource group
    s = sub.add_parser("health-check", help="Health check of every VM in the resource group")
    _add_scope_args(s)
    s.add_argument("-w", "--workspace", help="Log Analytics workspace name or id")
    s.set_defaults(func=cmd_health_check)

    # key-vault: secret management
    s = sub.add_parser("key-vault", help="Configure Key Vault access and secrets")
    kv_sub = s.add_subparsers(dest="kv_cmd", title="key-vault commands", required=True)
    for name, help_text in (
        ("setup-access", "Grant access policies to the signed-in user and AZURE_CLIENT_ID"),
        ("migrate-secrets", "Write deployment secrets from environment variables"),
        ("verify-access", "Test list/read/write permissions"),
        ("rotate-secrets", "Replace secrets with NEW_* environment values"),
        ("list", "List secret names and timestamps"),
    ):
        ks = kv_sub.add_parser(name, help=help_text)
        ks.add_argument("-g", "--resource-group", dest="resource_group", help="Azure resource group name")
        ks.add_argument("-k", "--key-vault", dest="key_vault", help="Key Vault name (auto-detected if omitted)")
        ks.add_argument("-s", "--subscription", help="Azure subscription ID")
        ks.set_defaults(func=cmd_key_vault)

    # webhook-setup: alert routing
    s = sub.add_parser("webhook-setup", help="Route monitoring alerts to the repository-dispatch webhook")
    s.add_argument("-g", "--resource-group", dest="resource_group", help="Azure resource group name")
    s.add_argument("-s", "--subscription", help="Azure subscription ID")
    s.add_argument("-O", "--github-owner", dest="github_owner", help="repository owner/organization")
    s.add_argument("-r", "--github-repo", dest="github_repo", help="repository name")
    s.add_argument("-t", "--github-token", dest="github_token", help="token with repo scope")
    s.add_argument("-o", "--output-dir", dest="output_dir", help="where the payload and summary are written")
    s.add_argument("--skip-test", action="store_true", help="do not send the test dispatch")
    s.set_defaults(func=cmd_webhook_setup)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
