"""Risk Engine — classifies a project from its spend-vs-progress deviation.

Invariants:
    - Pure and deterministic: same Project snapshot, same RiskAnalysis
    - budget <= 0 counts as 0% used, so neither rule can fire
    - Score is 0, 30, 50 or 80; no clamping of progress or score

Design Decisions:
    - Two additive rules (overspend +50, near limit +30) mapped to levels by
      thresholds: >60 Critical, >30 High, >10 Medium, else Low
"""

from sitebook.core.domain_types import RiskLevel
from sitebook.core.records import Project, RiskAnalysis

OVERSPEND_MARGIN = 20
OVERSPEND_POINTS = 50
NEAR_LIMIT_PERCENT = 90
NEAR_LIMIT_POINTS = 30

ON_TRACK_REASON = "Project is on track."
NEAR_LIMIT_REASON = "Project is nearing total budget."
NEAR_LIMIT_SUFFIX = " Also near budget limit."


def budget_used_percent(project: Project) -> float:
    """Spent as a percentage of budget; 0 when there is no budget."""
    if project.budget > 0:
        return project.spent / project.budget * 100
    return 0.0


def risk_level_for_score(score: int) -> RiskLevel:
    if score > 60:
        return RiskLevel.CRITICAL
    if score > 30:
        return RiskLevel.HIGH
    if score > 10:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def calculate_risk(project: Project) -> RiskAnalysis:
    """Score a project snapshot. Pure, no IO."""
    used = budget_used_percent(project)
    score = 0
    reason = ON_TRACK_REASON

    overspending = used > project.progress + OVERSPEND_MARGIN
    if overspending:
        score += OVERSPEND_POINTS
        reason = (
            f"Spending ({used:.1f}%) significantly exceeds "
            f"progress ({project.progress}%)."
        )

    if used > NEAR_LIMIT_PERCENT:
        score += NEAR_LIMIT_POINTS
        reason = reason + NEAR_LIMIT_SUFFIX if overspending else NEAR_LIMIT_REASON

    return RiskAnalysis(
        project_id=project.id,
        risk_score=score,
        risk_level=risk_level_for_score(score),
        reason=reason,
    )
