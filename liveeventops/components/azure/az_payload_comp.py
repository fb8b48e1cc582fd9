"""Typed models for the `az` JSON documents LiveEventOps consumes.

Provider output is validated into these pydantic models at the component
boundary; nothing above the components layer sees raw JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from liveeventops.helpers.dto.health_dto import MetricSample, PowerState

POWER_STATE_PREFIX = "PowerState/"


class _AzModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ──────────────────────────────────────────────────────────────────────
# Virtual machines
# ──────────────────────────────────────────────────────────────────────


class InstanceViewStatus(_AzModel):
    code: str
    display_status: str | None = Field(default=None, alias="displayStatus")


class InstanceView(_AzModel):
    statuses: list[InstanceViewStatus] = Field(default_factory=list)


class VirtualMachineView(_AzModel):
    """Output of ``az vm get-instance-view``."""

    id: str | None = None
    name: str | None = None
    instance_view: InstanceView | None = Field(default=None, alias="instanceView")

    def power_state(self) -> PowerState:
        """Map instance-view status codes to running / stopped / unknown."""
        statuses = self.instance_view.statuses if self.instance_view else []
        codes = [s.code for s in statuses if s.code.startswith(POWER_STATE_PREFIX)]
        if not codes:
            return "unknown"
        if f"{POWER_STATE_PREFIX}running" in codes:
            return "running"
        return "stopped"

    def power_code(self) -> str | None:
        statuses = self.instance_view.statuses if self.instance_view else []
        for status in statuses:
            if status.code.startswith(POWER_STATE_PREFIX):
                return status.code[len(POWER_STATE_PREFIX) :]
        return None


# ──────────────────────────────────────────────────────────────────────
# Azure Monitor metrics
# ──────────────────────────────────────────────────────────────────────


class MetricDatapoint(_AzModel):
    time_stamp: str = Field(alias="timeStamp")
    average: float | None = None


class MetricTimeseries(_AzModel):
    data: list[MetricDatapoint] = Field(default_factory=list)


class MetricEntry(_AzModel):
    timeseries: list[MetricTimeseries] = Field(default_factory=list)


class MetricsResponse(_AzModel):
    """Output of ``az monitor metrics list``."""

    value: list[MetricEntry] = Field(default_factory=list)

    def samples(self) -> list[MetricSample]:
        """Datapoints of the first metric that carry an average, in order."""
        if not self.value:
            return []
        return [
            MetricSample(timestamp=point.time_stamp, value=float(point.average))
            for series in self.value[0].timeseries
            for point in series.data
            if point.average is not None
        ]


# ──────────────────────────────────────────────────────────────────────
# Log Analytics
# ──────────────────────────────────────────────────────────────────────


class LogAnalyticsTable(_AzModel):
    name: str | None = None
    rows: list[list[Any]] = Field(default_factory=list)


class LogAnalyticsTablesResponse(_AzModel):
    """Legacy ``{"tables": [...]}`` shape of ``az monitor log-analytics query``."""

    tables: list[LogAnalyticsTable] = Field(default_factory=list)


def parse_vm_view(payload: Any) -> VirtualMachineView:
    """Validate an instance-view document. Raises ValueError on a malformed payload."""
    try:
        return VirtualMachineView.model_validate(payload or {})
    except ValidationError as e:
        raise ValueError(f"unexpected instance view payload: {e.error_count()} error(s)") from e


def parse_metric_samples(payload: Any) -> list[MetricSample]:
    """Validate a metrics document into samples. Raises ValueError on a malformed payload."""
    try:
        return MetricsResponse.model_validate(payload or {}).samples()
    except ValidationError as e:
        raise ValueError(f"unexpected metrics payload: {e.error_count()} error(s)") from e


def parse_log_rows(payload: Any) -> list[Any]:
    """
    Extract result rows from a Log Analytics query.

    Current `az` releases print a list of row objects; older ones print
    ``{"tables": [{"rows": [...]}]}``. Both are accepted.
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    try:
        response = LogAnalyticsTablesResponse.model_validate(payload)
    except ValidationError as e:
        raise ValueError(f"unexpected log query payload: {e.error_count()} error(s)") from e
    return response.tables[0].rows if response.tables else []
