"""Project Routes — list/search, create, fetch, and per-project risk.

Invariants:
    - Body validated by ProjectCreate before reaching the service
    - Unknown project id → 404 RESOURCE_NOT_FOUND envelope
"""

from fastapi import APIRouter, Depends, Query, status

from sitebook.api.dependencies import get_store
from sitebook.core.domain_types import ProjectId
from sitebook.schemas.project import ProjectCreate
from sitebook.services import portfolio_service
from sitebook.services.entity_store import EntityStore

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("")
async def list_projects(
    search: str | None = Query(None, max_length=200),
    store: EntityStore = Depends(get_store),
):
    projects = await portfolio_service.list_projects(store, search)
    return [p.to_dict() for p in projects]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate, store: EntityStore = Depends(get_store),
):
    project = await portfolio_service.create_project(store, body)
    return project.to_dict()


@router.get("/{project_id}")
async def get_project(
    project_id: int, store: EntityStore = Depends(get_store),
):
    project = await portfolio_service.get_project_or_404(
        store, ProjectId(project_id),
    )
    return project.to_dict()


@router.get("/{project_id}/risk")
async def get_project_risk(
    project_id: int, store: EntityStore = Depends(get_store),
):
    project = await portfolio_service.get_project_or_404(
        store, ProjectId(project_id),
    )
    return portfolio_service.get_risk_analysis(project).to_dict()
