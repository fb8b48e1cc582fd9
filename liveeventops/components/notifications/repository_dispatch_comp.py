"""Repository-dispatch component - the alert webhook target for incident-response runs.

Azure Monitor action groups POST the common alert schema to the
repository-dispatch endpoint, which starts the incident-response pipeline.
This component builds that URL and a representative test payload, and
delivers the payload to verify the wiring.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from liveeventops.helpers.time_helper import utc_now_iso

logger = logging.getLogger(__name__)

_GITHUB_API_BASE = "https://api.github.com"
_REQUEST_TIMEOUT = 30  # seconds

DISPATCH_EVENT_TYPE = "azure-monitor-alert"
PLACEHOLDER_SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"


class DispatchError(Exception):
    """Raised when the dispatch endpoint cannot be reached."""


def build_dispatch_url(owner: str, repo: str) -> str:
    if not owner or not repo:
        raise ValueError("repository owner and name are required")
    return f"{_GITHUB_API_BASE}/repos/{owner}/{repo}/dispatches"


def _headers(token: str) -> dict[str, str]:
    return {
        "Accept": "application/vnd.github.v3+json",
        "Authorization": f"token {token}",
        "Content-Type": "application/json",
    }


def build_test_alert_payload(resource_group: str, vm_name: str = "management-vm-test") -> dict[str, Any]:
    """A fired CPU alert in the common alert schema, wrapped as a dispatch event."""
    target_id = (
        f"/subscriptions/{PLACEHOLDER_SUBSCRIPTION}/resourceGroups/{resource_group}"
        f"/providers/Microsoft.Compute/virtualMachines/{vm_name}"
    )
    return {
        "event_type": DISPATCH_EVENT_TYPE,
        "client_payload": {
            "schemaId": "azureMonitorCommonAlertSchema",
            "data": {
                "essentials": {
                    "alertId": (
                        f"/subscriptions/{PLACEHOLDER_SUBSCRIPTION}"
                        "/providers/Microsoft.AlertsManagement/alerts/test-alert"
                    ),
                    "alertRule": "Test CPU Alert",
                    "severity": "2",
                    "signalType": "Metric",
                    "monitorCondition": "Fired",
                    "monitoringService": "Platform",
                    "alertTargetIDs": [target_id],
                    "originAlertId": "test-alert-id",
                    "firedDateTime": utc_now_iso(),
                    "description": "Test alert for webhook configuration",
                },
                "alertContext": {
                    "properties": {},
                    "conditionType": "SingleResourceMultipleMetricCriteria",
                    "condition": {
                        "allOf": [
                            {
                                "metricName": "Percentage CPU",
                                "metricNamespace": "Microsoft.Compute/virtualMachines",
                                "operator": "GreaterThan",
                                "threshold": "80",
                                "timeAggregation": "Average",
                                "metricValue": 85.5,
                            }
                        ]
                    },
                },
            },
        },
    }


def check_api_access(dispatch_url: str, token: str) -> bool:
    """Check the repository endpoint with the token. Never raises."""
    repo_url = dispatch_url.rsplit("/dispatches", 1)[0]
    try:
        response = requests.get(repo_url, headers=_headers(token), timeout=_REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("[repository_dispatch] API check failed: %s", e)
        return False
    if not response.ok:
        logger.warning("[repository_dispatch] API check returned HTTP %d; check token permissions", response.status_code)
    return response.ok


def send_dispatch(dispatch_url: str, token: str, payload: dict[str, Any]) -> int:
    """
    POST a dispatch event.

    Returns:
        HTTP status code (204 means the event was accepted)

    Raises:
        DispatchError: Endpoint unreachable
    """
    try:
        response = requests.post(dispatch_url, json=payload, headers=_headers(token), timeout=_REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise DispatchError(f"dispatch request failed: {e}") from e

    if response.status_code != 204:
        logger.error("[repository_dispatch] Dispatch returned HTTP %d: %s", response.status_code, response.text[:200])
    return response.status_code
