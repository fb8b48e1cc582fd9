"""Remediation policy component - restart decision logic.

Stateless mapping from an assessment to a restart decision: restart if and
only if the category is unhealthy. There is no cooldown, no hysteresis and
no retry counting; a failed remediation is left for the next invocation to
re-assess.
"""

from __future__ import annotations

import logging

from liveeventops.helpers.dto.health_dto import HealthAssessment, RemediationDecision

logger = logging.getLogger(__name__)


def decide_remediation(assessment: HealthAssessment) -> RemediationDecision:
    """Decide whether to restart the assessed target.

    Examples:
        # Unhealthy - restart
        >>> decide_remediation(HealthAssessment("vm", 25, "unhealthy", (), "t")).triggered
        True

        # Degraded - report only
        >>> decide_remediation(HealthAssessment("vm", 50, "degraded", (), "t")).triggered
        False

    """
    if assessment.category == "unhealthy":
        reason = f"Health check failed: score {assessment.score}/100"
        if assessment.issues:
            reason += f" ({'; '.join(assessment.issues)})"
        logger.info("[remediation_policy] Restart required for %s: %s", assessment.target, reason)
        return RemediationDecision(target=assessment.target, triggered=True, reason=reason)

    return RemediationDecision(
        target=assessment.target,
        triggered=False,
        reason=f"{assessment.category} (score {assessment.score}/100), restart not needed",
    )
