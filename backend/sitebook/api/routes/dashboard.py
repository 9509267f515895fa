"""Dashboard Routes — portfolio stats and the full risk overview."""

from fastapi import APIRouter, Depends

from sitebook.api.dependencies import get_store
from sitebook.services import portfolio_service
from sitebook.services.entity_store import EntityStore

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats")
async def dashboard_stats(store: EntityStore = Depends(get_store)):
    stats = await portfolio_service.get_dashboard_stats(store)
    return stats.to_dict()


@router.get("/overview")
async def dashboard_overview(store: EntityStore = Depends(get_store)):
    return await portfolio_service.get_dashboard_overview(store)
