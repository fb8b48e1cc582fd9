"""
Services package.
"""

from .domain import AlertWebhookService, DiagnosticsService, KeyVaultService
from .infrastructure import ConfigService

__all__ = [
    "AlertWebhookService",
    "ConfigService",
    "DiagnosticsService",
    "KeyVaultService",
]
