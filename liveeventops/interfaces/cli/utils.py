"""
Shared helpers for CLI commands: flag → config mapping and error reporting.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any

from liveeventops.helpers.exceptions import (
    AzCliError,
    PrerequisiteError,
    RemediationFailed,
    ResourceLookupFailed,
)
from liveeventops.interfaces.cli.cli_ui import print_error
from liveeventops.services.infrastructure.cli_bootstrap_svc import get_config_service
from liveeventops.services.infrastructure.config_svc import ConfigService

logger = logging.getLogger(__name__)

# Exceptions a command reports as a one-line error with exit code 1.
HANDLED_ERRORS = (AzCliError, PrerequisiteError, RemediationFailed, ResourceLookupFailed, ValueError)


def config_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Map the common flags onto config keys (absent flags are None and ignored)."""
    return {
        "resource_group": getattr(args, "resource_group", None),
        "subscription_id": getattr(args, "subscription", None),
        "log_analytics_workspace": getattr(args, "workspace", None),
        "output_dir": getattr(args, "output_dir", None),
        "key_vault": {"name": getattr(args, "key_vault", None)},
    }


def build_config_service(args: argparse.Namespace) -> ConfigService:
    return get_config_service(config_path=getattr(args, "config", None), overrides=config_overrides(args))


def report_error(context: str, error: Exception) -> int:
    """Print a handled error and return the failure exit code."""
    logger.debug("[cli] %s failed", context, exc_info=error)
    print_error(f"{context}: {error}")
    return 1
