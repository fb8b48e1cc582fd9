"""
Azure package.
"""

from .action_group_comp import add_webhook_receiver, ensure_resource_group, get_action_group, webhook_receiver_names
from .az_cli_comp import AZ_DEFAULT_TIMEOUT_S, AzCliRunner, ensure_az_ready
from .az_payload_comp import (
    MetricsResponse,
    VirtualMachineView,
    parse_log_rows,
    parse_metric_samples,
    parse_vm_view,
)
from .key_vault_comp import (
    SECRET_ALERT_EMAIL,
    SECRET_SSH_PUBLIC_KEY,
    SECRET_VM_ADMIN_USERNAME,
    SECRET_WEBHOOK_URL,
    delete_secret,
    find_key_vault,
    get_secret_value,
    get_signed_in_user_id,
    grant_access_policy,
    list_secrets,
    set_secret,
)
from .log_analytics_comp import (
    TABLE_HEARTBEAT,
    TABLE_PERF,
    TABLE_SYSLOG,
    build_records_query,
    count_log_records,
    fetch_log_records,
)
from .metrics_comp import (
    METRIC_AVAILABLE_MEMORY,
    METRIC_CPU_PERCENT,
    METRIC_NETWORK_IN,
    fetch_metric_samples,
)
from .power_comp import start_vm, stop_vm, wait_for_power_state
from .vm_status_comp import get_power_state, get_vm_view, list_vm_names

__all__ = [
    "AZ_DEFAULT_TIMEOUT_S",
    "METRIC_AVAILABLE_MEMORY",
    "METRIC_CPU_PERCENT",
    "METRIC_NETWORK_IN",
    "SECRET_ALERT_EMAIL",
    "SECRET_SSH_PUBLIC_KEY",
    "SECRET_VM_ADMIN_USERNAME",
    "SECRET_WEBHOOK_URL",
    "TABLE_HEARTBEAT",
    "TABLE_PERF",
    "TABLE_SYSLOG",
    "AzCliRunner",
    "MetricsResponse",
    "VirtualMachineView",
    "add_webhook_receiver",
    "build_records_query",
    "count_log_records",
    "delete_secret",
    "ensure_az_ready",
    "ensure_resource_group",
    "fetch_log_records",
    "fetch_metric_samples",
    "find_key_vault",
    "get_action_group",
    "get_power_state",
    "get_secret_value",
    "get_signed_in_user_id",
    "get_vm_view",
    "grant_access_policy",
    "list_secrets",
    "list_vm_names",
    "parse_log_rows",
    "parse_metric_samples",
    "parse_vm_view",
    "set_secret",
    "start_vm",
    "stop_vm",
    "wait_for_power_state",
    "webhook_receiver_names",
]
