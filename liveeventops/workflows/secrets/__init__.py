"""
Secrets package.
"""

from .grant_key_vault_access_wf import grant_key_vault_access_workflow
from .migrate_secrets_wf import migrate_secrets_workflow
from .rotate_secrets_wf import rotate_secrets_workflow
from .verify_key_vault_access_wf import verify_key_vault_access_workflow

__all__ = [
    "grant_key_vault_access_workflow",
    "migrate_secrets_workflow",
    "rotate_secrets_workflow",
    "verify_key_vault_access_workflow",
]
