"""Webhook notification component.

Best-effort delivery: failures are logged and swallowed. Callers get a bool
and never an exception, so a dead webhook can never turn a successful
diagnostic run into a failed one.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from liveeventops.helpers.exceptions import NotificationFailed
from liveeventops.helpers.time_helper import utc_now_iso

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = 10  # seconds


def build_notification_payload(
    title: str,
    message: str,
    *,
    target: str | None = None,
    resource_group: str | None = None,
    timestamp: str | None = None,
) -> dict[str, Any]:
    return {
        "title": title,
        "message": message,
        "timestamp": timestamp or utc_now_iso(),
        "resource_group": resource_group or "",
        "vm_name": target or "",
    }


def send_notification(
    webhook_url: str | None,
    title: str,
    message: str,
    *,
    target: str | None = None,
    resource_group: str | None = None,
    timeout_s: float = _REQUEST_TIMEOUT,
) -> bool:
    """
    POST a notification to the configured webhook.

    Args:
        webhook_url: Destination; when empty the call is a no-op
        title: Short title
        message: Body text
        target: Target VM name
        resource_group: Resource group of the target
        timeout_s: HTTP timeout

    Returns:
        True if delivered (2xx), False if skipped or failed
    """
    if not webhook_url:
        logger.debug("[notify] No webhook configured, skipping: %s", title)
        return False

    payload = build_notification_payload(title, message, target=target, resource_group=resource_group)
    logger.info("[notify] Sending notification: %s", title)

    try:
        try:
            response = requests.post(webhook_url, json=payload, timeout=timeout_s)
        except requests.RequestException as e:
            raise NotificationFailed(f"delivery failed: {e}") from e
        if not response.ok:
            raise NotificationFailed(f"webhook returned HTTP {response.status_code}")
    except NotificationFailed as e:
        logger.warning("[notify] Failed to send notification '%s': %s", title, e)
        return False

    return True
