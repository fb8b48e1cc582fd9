"""
Health package.
"""

from .fleet_summary_comp import summarize_fleet
from .health_scoring_comp import categorize_score, score_health
from .remediation_policy_comp import decide_remediation

__all__ = [
    "categorize_score",
    "decide_remediation",
    "score_health",
    "summarize_fleet",
]
