"""Portfolio Stats — pure aggregation of dashboard figures from the record collections.

Invariants:
    - All inputs are record snapshots (no IO, no DB)
    - Full recompute on every call; nothing is maintained incrementally
    - Revenue counts every invoice regardless of status
    - Never raises on empty collections — totals default to 0

Design Decisions:
    - Pure functions, not store methods: the store owns data, stats are presentation
    - criticalRisks counts High AND Critical (the dashboard's "at risk" tile)
"""

from typing import Sequence

from sitebook.core.domain_types import (
    ProjectId, ProjectStatus, RiskLevel, ELEVATED_RISK_LEVELS,
)
from sitebook.core.records import (
    Project, Invoice, RiskAnalysis, DashboardStats,
)
from sitebook.core.risk_engine import calculate_risk


def compute_dashboard_stats(
    projects: Sequence[Project], invoices: Sequence[Invoice],
) -> DashboardStats:
    """Compute portfolio totals. Pure, no IO."""
    elevated = sum(
        1 for p in projects
        if calculate_risk(p).risk_level in ELEVATED_RISK_LEVELS
    )
    return DashboardStats(
        total_revenue=sum(i.amount for i in invoices),
        active_projects=sum(
            1 for p in projects if p.status == ProjectStatus.ACTIVE
        ),
        total_budget=sum(p.budget for p in projects),
        total_spent=sum(p.spent for p in projects),
        critical_risks=elevated,
    )


def compute_risk_distribution(projects: Sequence[Project]) -> dict[str, int]:
    """Project count per risk level; every level present, in severity order."""
    distribution = {level.value: 0 for level in RiskLevel}
    for p in projects:
        distribution[calculate_risk(p).risk_level.value] += 1
    return distribution


def rank_project_risks(
    projects: Sequence[Project],
) -> list[tuple[ProjectId, str, RiskAnalysis]]:
    """(id, name, analysis) rows in project order, for the dashboard risk table."""
    return [(p.id, p.name, calculate_risk(p)) for p in projects]
