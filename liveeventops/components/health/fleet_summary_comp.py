"""Fleet summary component - aggregate per-target results into one summary."""

from __future__ import annotations

from liveeventops.helpers.dto.health_dto import FleetSummary, HealthAssessment, LookupFailure
from liveeventops.helpers.time_helper import utc_now_iso


def summarize_fleet(
    resource_group: str,
    results: list[HealthAssessment | LookupFailure],
    timestamp: str | None = None,
) -> FleetSummary:
    """
    Aggregate per-target results.

    Results are ordered by target identifier. Every target that is not
    healthy (degraded, unhealthy, or failed lookup) lands in the unhealthy
    bucket, so ``total == healthy + unhealthy`` and the unhealthy list has
    exactly ``unhealthy`` entries.

    Args:
        resource_group: Scope that was enumerated
        results: One entry per enumerated target
        timestamp: Summary timestamp (defaults to now, UTC)

    Returns:
        FleetSummary with counts, breakdown and the ordered per-target records
    """
    ordered = sorted(results, key=lambda r: r.target)

    assessments = [r for r in ordered if isinstance(r, HealthAssessment)]
    failures = [r for r in ordered if isinstance(r, LookupFailure)]

    healthy = [a.target for a in assessments if a.category == "healthy"]
    degraded = [a.target for a in assessments if a.category == "degraded"]
    unhealthy_targets = [
        r.target for r in ordered if isinstance(r, LookupFailure) or r.category != "healthy"
    ]

    return FleetSummary(
        resource_group=resource_group,
        total=len(ordered),
        healthy=len(healthy),
        unhealthy=len(unhealthy_targets),
        unhealthy_targets=unhealthy_targets,
        degraded=len(degraded),
        failed_lookups=len(failures),
        timestamp=timestamp or utc_now_iso(),
        assessments=assessments,
        lookup_failures=failures,
    )
