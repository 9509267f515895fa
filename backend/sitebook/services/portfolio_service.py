"""Portfolio Service — project/invoice reads and writes plus the dashboard analytics.

Invariants:
    - Every read goes to the store; analytics recompute from fresh snapshots
    - create_project validates before writing; spent on a new project is the
      caller-supplied baseline (default 0)

Design Decisions:
    - Thin async wrappers: the decisions live in core/risk_engine.py and
      core/portfolio_stats.py, this module only fetches and hands over
"""

from sitebook.core.domain_types import ProjectId
from sitebook.core.errors import ResourceNotFoundError, ErrorContext
from sitebook.core.portfolio_stats import (
    compute_dashboard_stats, compute_risk_distribution, rank_project_risks,
)
from sitebook.core.record_search import filter_projects, filter_invoices
from sitebook.core.records import Project, Invoice, RiskAnalysis, DashboardStats
from sitebook.core.repository_protocols import EntityStoreLike
from sitebook.core.risk_engine import calculate_risk
from sitebook.schemas.project import ProjectCreate
from sitebook.schemas.parsing import parse_input


async def list_projects(
    store: EntityStoreLike, search: str | None = None,
) -> list[Project]:
    return filter_projects(await store.list_projects(), search)


async def get_project_or_404(
    store: EntityStoreLike, project_id: ProjectId,
) -> Project:
    project = await store.get_project(project_id)
    if project is None:
        raise ResourceNotFoundError(
            "Project", str(project_id), ErrorContext(project_id=project_id),
        )
    return project


async def create_project(
    store: EntityStoreLike, fields: ProjectCreate | dict,
) -> Project:
    data = parse_input(ProjectCreate, fields)
    return await store.add_project(data.to_record_fields())


async def list_invoices(
    store: EntityStoreLike, search: str | None = None,
) -> list[Invoice]:
    invoices = await store.list_invoices()
    if not search:
        return invoices
    return filter_invoices(invoices, await store.list_projects(), search)


def get_risk_analysis(project: Project) -> RiskAnalysis:
    return calculate_risk(project)


async def get_dashboard_stats(store: EntityStoreLike) -> DashboardStats:
    projects = await store.list_projects()
    invoices = await store.list_invoices()
    return compute_dashboard_stats(projects, invoices)


async def get_dashboard_overview(store: EntityStoreLike) -> dict:
    """Stats, risk distribution and per-project risk rows in one snapshot."""
    projects = await store.list_projects()
    invoices = await store.list_invoices()
    return {
        "stats": compute_dashboard_stats(projects, invoices).to_dict(),
        "riskDistribution": compute_risk_distribution(projects),
        "projectRisks": [
            {"id": pid, "name": name, "risk": analysis.to_dict()}
            for pid, name, analysis in rank_project_risks(projects)
        ],
    }
