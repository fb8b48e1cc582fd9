"""Health scoring component - reduce a target's signals to a score, category and issues.

Pure decision functions. Contains no state, only logic based on inputs.

Architecture:
- No imports from services or workflows
- Uses only stdlib, typing, and helpers
- All functions are pure (no side effects except debug logging)
- The assessment workflow gathers signals and delegates scoring here

Scoring (starts at 100, only ever subtracts):

| Rule                      | Condition                           | Penalty |
|---------------------------|-------------------------------------|---------|
| resource not running      | power state is "stopped"            | 50      |
| high CPU                  | mean CPU % > 80                     | 20      |
| low available memory      | mean available bytes < 100 MiB      | 25      |
| insufficient heartbeats   | heartbeat count < 5                 | 30      |

Signals with no data are skipped: no penalty, no issue.
"""

from __future__ import annotations

import logging

from liveeventops.helpers.dto.health_dto import HealthAssessment, HealthCategory, HealthSignals
from liveeventops.helpers.time_helper import utc_now_iso

logger = logging.getLogger(__name__)

# Scoring policy constants
BASE_SCORE = 100
MIN_SCORE = 0

NOT_RUNNING_PENALTY = 50
HIGH_CPU_PENALTY = 20
LOW_MEMORY_PENALTY = 25
LOW_HEARTBEAT_PENALTY = 30

CPU_THRESHOLD_PERCENT = 80.0
MEMORY_THRESHOLD_BYTES = 104_857_600  # 100 MiB
HEARTBEAT_MIN_RECORDS = 5

HEALTHY_ABOVE = 70
DEGRADED_ABOVE = 40

BYTES_PER_MIB = 1024 * 1024

ISSUE_NOT_RUNNING = "resource not running"


def categorize_score(score: int) -> HealthCategory:
    """Map a score to its category.

    The ranges partition the integers: > 70 healthy, 41-70 degraded,
    <= 40 unhealthy.

    Examples:
        >>> categorize_score(71)
        'healthy'
        >>> categorize_score(70)
        'degraded'
        >>> categorize_score(41)
        'degraded'
        >>> categorize_score(40)
        'unhealthy'

    """
    if score > HEALTHY_ABOVE:
        return "healthy"
    if score > DEGRADED_ABOVE:
        return "degraded"
    return "unhealthy"


def _mean(values: tuple[float, ...]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def score_health(signals: HealthSignals, timestamp: str | None = None) -> HealthAssessment:
    """Compute the health assessment for one target.

    Deterministic: identical signals always produce an identical score,
    category and issue list. The emitted score is floored at 0.

    Args:
        signals: Power state, CPU/memory samples and heartbeat count
        timestamp: Assessment timestamp (defaults to now, UTC)

    Returns:
        Immutable HealthAssessment

    Examples:
        # Running, CPU 95%, 50 MiB free, 2 heartbeats
        >>> score_health(HealthSignals("vm", "running", (95.0,), (52428800.0,), 2)).score
        25

    """
    score = BASE_SCORE
    issues: list[str] = []

    if signals.power_state == "stopped":
        score -= NOT_RUNNING_PENALTY
        issues.append(ISSUE_NOT_RUNNING)

    cpu_mean = _mean(signals.cpu_samples)
    if cpu_mean is not None and cpu_mean > CPU_THRESHOLD_PERCENT:
        score -= HIGH_CPU_PENALTY
        issues.append(f"High CPU usage: {cpu_mean:.1f}%")

    memory_mean = _mean(signals.memory_samples)
    if memory_mean is not None and memory_mean < MEMORY_THRESHOLD_BYTES:
        score -= LOW_MEMORY_PENALTY
        issues.append(f"Low available memory: {memory_mean / BYTES_PER_MIB:.0f} MiB")

    if signals.heartbeat_count is not None and signals.heartbeat_count < HEARTBEAT_MIN_RECORDS:
        score -= LOW_HEARTBEAT_PENALTY
        issues.append(f"Insufficient heartbeat data: {signals.heartbeat_count} records")

    score = max(MIN_SCORE, score)
    category = categorize_score(score)

    logger.debug(
        "[health_scoring] %s scored %d (%s) with %d issue(s)",
        signals.target,
        score,
        category,
        len(issues),
    )

    return HealthAssessment(
        target=signals.target,
        score=score,
        category=category,
        issues=tuple(issues),
        timestamp=timestamp or utc_now_iso(),
    )
