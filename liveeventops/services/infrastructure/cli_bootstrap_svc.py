"""
CLI Bootstrap Service - Service Container for CLI Commands

Provides clean DI for CLI commands.

Architecture:
- This is a SERVICE layer module (interfaces → services)
- CLI commands should NOT build AzCliRunner or DiagnosticsConfig themselves
- CLI commands SHOULD use these bootstrap functions to get service instances
- One ConfigService is composed per invocation and shared by the factories
"""

from __future__ import annotations

from typing import Any

from liveeventops.components.azure.az_cli_comp import AzCliRunner
from liveeventops.services.domain.alert_webhook_svc import AlertWebhookService
from liveeventops.services.domain.diagnostics_svc import DiagnosticsService
from liveeventops.services.domain.key_vault_svc import KeyVaultService
from liveeventops.services.infrastructure.config_svc import ConfigService


def get_config_service(config_path: str | None = None, overrides: dict[str, Any] | None = None) -> ConfigService:
    """
    Get ConfigService instance for CLI operations.

    Args:
        config_path: Value of the global --config flag
        overrides: Values of per-command flags (None entries are ignored)
    """
    return ConfigService(config_path=config_path, overrides=overrides)


def get_az_runner(config_service: ConfigService) -> AzCliRunner:
    return AzCliRunner(timeout_s=float(config_service.get("az_timeout_s", 120)))


def get_diagnostics_service(config_service: ConfigService) -> DiagnosticsService:
    """
    Get DiagnosticsService instance for CLI operations.

    Raises:
        ValueError: Configuration failed validation
    """
    return DiagnosticsService(get_az_runner(config_service), config_service.make_diagnostics_config())


def get_key_vault_service(config_service: ConfigService) -> KeyVaultService:
    return KeyVaultService(get_az_runner(config_service), config_service.make_diagnostics_config())


def get_alert_webhook_service(config_service: ConfigService) -> AlertWebhookService:
    return AlertWebhookService(get_az_runner(config_service), config_service.make_diagnostics_config())
