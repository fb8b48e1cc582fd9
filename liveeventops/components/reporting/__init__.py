"""
Reporting package.
"""

from .report_writer_comp import (
    REPORT_FILENAME,
    SUMMARY_FILENAME,
    assessment_to_record,
    ensure_output_dir,
    fleet_summary_to_record,
    lookup_failure_to_record,
    write_assessment,
    write_diagnostic_report,
    write_fleet_summary,
    write_json_document,
    write_log_records,
    write_lookup_failure,
    write_restart_log,
    write_signals,
    write_webhook_summary,
)

__all__ = [
    "REPORT_FILENAME",
    "SUMMARY_FILENAME",
    "assessment_to_record",
    "ensure_output_dir",
    "fleet_summary_to_record",
    "lookup_failure_to_record",
    "write_assessment",
    "write_diagnostic_report",
    "write_fleet_summary",
    "write_json_document",
    "write_log_records",
    "write_lookup_failure",
    "write_restart_log",
    "write_signals",
    "write_webhook_summary",
]
