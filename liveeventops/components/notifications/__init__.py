"""
Notifications package.
"""

from .repository_dispatch_comp import (
    DispatchError,
    build_dispatch_url,
    build_test_alert_payload,
    check_api_access,
    send_dispatch,
)
from .webhook_notify_comp import build_notification_payload, send_notification

__all__ = [
    "DispatchError",
    "build_dispatch_url",
    "build_notification_payload",
    "build_test_alert_payload",
    "check_api_access",
    "send_dispatch",
    "send_notification",
]
