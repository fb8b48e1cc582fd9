"""
Config domain DTOs.

Explicit configuration passed into every operation instead of process-wide
globals. Built and validated by ConfigService.make_diagnostics_config().

Rules:
- Import only stdlib and typing (no liveeventops.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PollingPolicy:
    """Bounds for power-state confirmation polling after stop/start."""

    timeout_s: float = 600.0
    poll_interval_s: float = 10.0
    max_attempts: int = 60


@dataclass(frozen=True)
class KeyVaultSettings:
    name: str | None = None
    name_prefix: str = "liveeventops-kv"


@dataclass(frozen=True)
class AlertSettings:
    action_group: str = "liveeventops-incident-response"
    webhook_name: str = "github-actions-webhook"


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Configuration for diagnostics, remediation and fleet checks.

    All provider-facing identifiers are optional here; each operation checks
    the ones it needs.
    """

    output_dir: str
    resource_group: str | None = None
    subscription_id: str | None = None
    log_analytics_workspace: str | None = None
    webhook_url: str | None = None
    window_minutes: int = 60
    metric_interval: str = "PT5M"
    az_timeout_s: float = 120.0
    notification_timeout_s: float = 10.0
    fleet_max_workers: int = 1
    polling: PollingPolicy = field(default_factory=PollingPolicy)
    key_vault: KeyVaultSettings = field(default_factory=KeyVaultSettings)
    alerts: AlertSettings = field(default_factory=AlertSettings)


@dataclass
class ConfigResult:
    """Result from ConfigService.get_config and reload - wraps configuration dict."""

    config: dict[str, Any]
