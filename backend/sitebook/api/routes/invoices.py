"""Invoice Routes — list/search and record.

Invariants:
    - POST returns 201 even when the project is unknown; the response carries
      projectUpdated=false and the warning text
"""

from fastapi import APIRouter, Depends, Query, status

from sitebook.api.dependencies import get_store
from sitebook.schemas.invoice import InvoiceCreate
from sitebook.services import portfolio_service
from sitebook.services.entity_store import EntityStore
from sitebook.services.record_invoice import record_invoice

router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


@router.get("")
async def list_invoices(
    search: str | None = Query(None, max_length=200),
    store: EntityStore = Depends(get_store),
):
    invoices = await portfolio_service.list_invoices(store, search)
    return [i.to_dict() for i in invoices]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_invoice(
    body: InvoiceCreate, store: EntityStore = Depends(get_store),
):
    result = await record_invoice(store, body)
    return {
        "invoice": result.invoice.to_dict(),
        "projectUpdated": result.project_updated,
        "warning": result.warning,
    }
