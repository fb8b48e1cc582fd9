"""Log Analytics component - record fetch and count for one computer."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from liveeventops.components.azure.az_payload_comp import parse_log_rows
from liveeventops.helpers.exceptions import AzCliError, FetchFailed

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner

logger = logging.getLogger(__name__)

TABLE_HEARTBEAT = "Heartbeat"
TABLE_SYSLOG = "Syslog"
TABLE_PERF = "Perf"

_SAFE_NAME = re.compile(r"^[A-Za-z0-9._-]+$")


def build_records_query(table: str, computer: str, window_minutes: int = 60) -> str:
    """
    Build the KQL query for one table's recent records for one computer.

    Raises:
        ValueError: Table or computer name would break out of the query literal
    """
    if not _SAFE_NAME.match(table) or not _SAFE_NAME.match(computer):
        raise ValueError(f"unsafe identifier in log query: {table!r} / {computer!r}")
    return (
        f'{table} | where Computer == "{computer}" '
        f"| where TimeGenerated > ago({window_minutes}m) "
        f"| order by TimeGenerated desc"
    )


def fetch_log_records(
    az: AzCliRunner,
    workspace: str,
    table: str,
    *,
    target: str,
    window_minutes: int = 60,
) -> list[Any]:
    """
    Fetch recent records of one type for a target.

    Raises:
        FetchFailed: Query rejected, workspace unreachable, or payload malformed
    """
    try:
        query = build_records_query(table, target, window_minutes)
        payload = az.run_json(
            ["monitor", "log-analytics", "query", "--workspace", workspace, "--analytics-query", query]
        )
        rows = parse_log_rows(payload)
    except (AzCliError, ValueError) as e:
        raise FetchFailed(target, table, str(e)) from e

    logger.debug("[log_analytics] %s %s: %d records", target, table, len(rows))
    return rows


def count_log_records(
    az: AzCliRunner,
    workspace: str,
    table: str,
    *,
    target: str,
    window_minutes: int = 60,
) -> int:
    """Record count for one table over the window (see fetch_log_records for errors)."""
    return len(fetch_log_records(az, workspace, table, target=target, window_minutes=window_minutes))
