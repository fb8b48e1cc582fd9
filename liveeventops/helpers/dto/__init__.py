"""
Dto package.
"""

from .config_dto import AlertSettings, ConfigResult, DiagnosticsConfig, KeyVaultSettings, PollingPolicy
from .health_dto import (
    FleetSummary,
    HealthAssessment,
    HealthCategory,
    HealthSignals,
    LookupFailure,
    MetricSample,
    PowerState,
    RemediationDecision,
    RemediationResult,
)
from .secrets_dto import (
    AccessCheckResult,
    AccessGrantResult,
    SecretInfo,
    SecretSpec,
    SecretWriteResult,
    WebhookSetupResult,
)

__all__ = [
    "AccessCheckResult",
    "AccessGrantResult",
    "AlertSettings",
    "ConfigResult",
    "DiagnosticsConfig",
    "FleetSummary",
    "HealthAssessment",
    "HealthCategory",
    "HealthSignals",
    "KeyVaultSettings",
    "LookupFailure",
    "MetricSample",
    "PollingPolicy",
    "PowerState",
    "RemediationDecision",
    "RemediationResult",
    "SecretInfo",
    "SecretSpec",
    "SecretWriteResult",
    "WebhookSetupResult",
]
