"""
Helpers package.
"""

from .exceptions import (
    AzCliError,
    FetchFailed,
    NotificationFailed,
    PrerequisiteError,
    RemediationFailed,
    ResourceLookupFailed,
)
from .logging_helper import LiveOpsLogFilter, clear_log_context, configure_logging, set_log_context
from .time_helper import now_ms, utc_now_iso, window_bounds

__all__ = [
    "AzCliError",
    "FetchFailed",
    "LiveOpsLogFilter",
    "NotificationFailed",
    "PrerequisiteError",
    "RemediationFailed",
    "ResourceLookupFailed",
    "clear_log_context",
    "configure_logging",
    "now_ms",
    "set_log_context",
    "utc_now_iso",
    "window_bounds",
]
