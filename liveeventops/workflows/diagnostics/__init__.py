"""
Diagnostics package.
"""

from .gather_vm_logs_wf import gather_vm_logs_workflow

__all__ = ["gather_vm_logs_workflow"]
