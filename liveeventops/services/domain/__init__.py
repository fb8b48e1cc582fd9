"""Domain services - LiveEventOps operations."""

from .alert_webhook_svc import AlertWebhookService
from .diagnostics_svc import DiagnosticsService
from .key_vault_svc import KeyVaultService

__all__ = [
    "AlertWebhookService",
    "DiagnosticsService",
    "KeyVaultService",
]
