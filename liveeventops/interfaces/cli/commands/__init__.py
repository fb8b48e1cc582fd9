"""
Commands package.
"""

from .diagnostics_cli import cmd_diagnose, cmd_health_check, cmd_logs, cmd_restart
from .key_vault_cli import cmd_key_vault
from .webhook_cli import cmd_webhook_setup

__all__ = [
    "cmd_diagnose",
    "cmd_health_check",
    "cmd_key_vault",
    "cmd_logs",
    "cmd_restart",
    "cmd_webhook_setup",
]
