"""Gather VM logs workflow - dump recent Log Analytics records for one target."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from liveeventops.components.azure.log_analytics_comp import (
    TABLE_HEARTBEAT,
    TABLE_PERF,
    TABLE_SYSLOG,
    fetch_log_records,
)
from liveeventops.components.reporting.report_writer_comp import write_log_records
from liveeventops.helpers.exceptions import FetchFailed
from liveeventops.helpers.logging_helper import set_log_context

if TYPE_CHECKING:
    from liveeventops.components.azure.az_cli_comp import AzCliRunner
    from liveeventops.helpers.dto.config_dto import DiagnosticsConfig

logger = logging.getLogger(__name__)

LOG_TABLES = (TABLE_SYSLOG, TABLE_PERF, TABLE_HEARTBEAT)


def gather_vm_logs_workflow(
    az: AzCliRunner,
    config: DiagnosticsConfig,
    target: str,
    output_dir: str | Path | None = None,
) -> dict[str, int | None]:
    """
    Query Syslog, Perf and Heartbeat records for ``target`` over the window.

    Each table is fetched independently; a failed query is logged and
    reported as unavailable (None) without affecting the others. With no
    workspace configured nothing is queried.

    Returns:
        Mapping of table name to record count (None when unavailable)
    """
    if not config.log_analytics_workspace:
        logger.warning("[gather_vm_logs_wf] Log Analytics workspace not specified, skipping log retrieval")
        return {}

    set_log_context(vm=target)
    logger.info(f"[gather_vm_logs_wf] Gathering logs for {target} from Log Analytics...")

    counts: dict[str, int | None] = {}
    for table in LOG_TABLES:
        try:
            rows = fetch_log_records(
                az,
                config.log_analytics_workspace,
                table,
                target=target,
                window_minutes=config.window_minutes,
            )
        except FetchFailed as e:
            logger.warning(f"[gather_vm_logs_wf] Could not retrieve {table} data for {target}: {e.reason}")
            counts[table] = None
            continue

        counts[table] = len(rows)
        if output_dir is not None:
            write_log_records(output_dir, target, table, rows)

    return counts
