"""Infrastructure services - runtime plumbing."""

from .cli_bootstrap_svc import (
    get_alert_webhook_service,
    get_az_runner,
    get_config_service,
    get_diagnostics_service,
    get_key_vault_service,
)
from .config_svc import ConfigService

__all__ = [
    "ConfigService",
    "get_alert_webhook_service",
    "get_az_runner",
    "get_config_service",
    "get_diagnostics_service",
    "get_key_vault_service",
]
