"""Health-related DTOs used across layers.

## Health Assessment Contract

| Category  | Score range | Remediation |
|-----------|-------------|-------------|
| healthy   | > 70        | none        |
| degraded  | 41 - 70     | report only |
| unhealthy | <= 40       | restart     |

### Key Rules

1. An assessment is immutable once produced; a new invocation produces a new one.

2. ``heartbeat_count=None`` and empty sample tuples mean "no data" for that
   signal, which is never penalized.

3. A target whose status lookup failed produces a LookupFailure record, never
   an assessment and never a silent gap.

Rules:
- Import only stdlib and typing (no liveeventops.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

PowerState = Literal["running", "stopped", "unknown"]

HealthCategory = Literal["healthy", "degraded", "unhealthy"]


@dataclass(frozen=True)
class MetricSample:
    """One aggregated metric observation."""

    timestamp: str
    value: float


@dataclass(frozen=True)
class HealthSignals:
    """Everything the scoring step needs for one target, fetched fresh per invocation."""

    target: str
    power_state: PowerState
    cpu_samples: tuple[float, ...] = ()
    memory_samples: tuple[float, ...] = ()
    heartbeat_count: int | None = None
    network_in_samples: tuple[float, ...] = ()
    """Collected for diagnostics output only; not scored."""


@dataclass(frozen=True)
class HealthAssessment:
    """The computed verdict for one target."""

    target: str
    score: int
    category: HealthCategory
    issues: tuple[str, ...]
    timestamp: str


@dataclass(frozen=True)
class LookupFailure:
    """Explicit record for a target whose status lookup failed."""

    target: str
    error: str
    timestamp: str


@dataclass(frozen=True)
class RemediationDecision:
    """Whether a restart should be issued, derived solely from an assessment."""

    target: str
    triggered: bool
    reason: str


@dataclass
class RemediationResult:
    """Outcome of a restart attempt (or of deciding not to attempt one)."""

    target: str
    triggered: bool
    succeeded: bool
    reason: str
    elapsed_s: float = 0.0
    error: str | None = None
    stage: str | None = None


@dataclass
class FleetSummary:
    """Aggregated fleet check result.

    ``unhealthy`` counts every target that is not healthy (degraded, unhealthy
    and failed lookups) so that ``total == healthy + unhealthy`` always holds.
    ``degraded`` and ``failed_lookups`` break that bucket down.
    """

    resource_group: str
    total: int
    healthy: int
    unhealthy: int
    unhealthy_targets: list[str]
    degraded: int
    failed_lookups: int
    timestamp: str
    assessments: list[HealthAssessment] = field(default_factory=list)
    lookup_failures: list[LookupFailure] = field(default_factory=list)
