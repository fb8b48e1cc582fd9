"""
Alerts package.
"""

from .configure_alert_webhook_wf import configure_alert_webhook_workflow

__all__ = ["configure_alert_webhook_workflow"]
