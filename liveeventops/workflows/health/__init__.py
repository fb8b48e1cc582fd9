"""
Health package.
"""

from .assess_vm_health_wf import assess_vm_health_workflow
from .check_fleet_health_wf import check_fleet_health_workflow
from .restart_unhealthy_vm_wf import restart_unhealthy_vm_workflow

__all__ = [
    "assess_vm_health_workflow",
    "check_fleet_health_workflow",
    "restart_unhealthy_vm_workflow",
]
