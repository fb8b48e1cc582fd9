"""
Workflows package.
"""

from .alerts.configure_alert_webhook_wf import configure_alert_webhook_workflow
from .diagnostics.gather_vm_logs_wf import gather_vm_logs_workflow
from .health.assess_vm_health_wf import assess_vm_health_workflow
from .health.check_fleet_health_wf import check_fleet_health_workflow
from .health.restart_unhealthy_vm_wf import restart_unhealthy_vm_workflow
from .secrets.grant_key_vault_access_wf import grant_key_vault_access_workflow
from .secrets.migrate_secrets_wf import migrate_secrets_workflow
from .secrets.rotate_secrets_wf import rotate_secrets_workflow
from .secrets.verify_key_vault_access_wf import verify_key_vault_access_workflow

__all__ = [
    "assess_vm_health_workflow",
    "check_fleet_health_workflow",
    "configure_alert_webhook_workflow",
    "gather_vm_logs_workflow",
    "grant_key_vault_access_workflow",
    "migrate_secrets_workflow",
    "restart_unhealthy_vm_workflow",
    "rotate_secrets_workflow",
    "verify_key_vault_access_workflow",
]
