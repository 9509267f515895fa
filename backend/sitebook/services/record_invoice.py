"""Invoice Recording — appends an invoice and charges it to its project in one transaction.

Invariants:
    - Invoice append and project spent increment commit together or not at all
    - spent grows by exactly the invoice amount; other projects are untouched
    - Each call is a new invoice (no idempotence)
    - Unknown project: invoice still stored, warning logged AND returned,
      never raised

Design Decisions:
    - Stored spent kept (not derived from invoices): seeded projects carry a
      baseline spend that no invoice accounts for
    - Validation happens before the transaction opens, so a rejected input
      never starts a write
"""

import logging

from sitebook.core.records import InvoiceRecordResult
from sitebook.core.repository_protocols import EntityStoreLike
from sitebook.schemas.invoice import InvoiceCreate
from sitebook.schemas.parsing import parse_input

logger = logging.getLogger(__name__)


async def record_invoice(
    store: EntityStoreLike, fields: InvoiceCreate | dict,
) -> InvoiceRecordResult:
    """Record an invoice and increase the referenced project's spent."""
    data = parse_input(InvoiceCreate, fields)

    async with store.atomic():
        invoice = await store.add_invoice(data.to_record_fields())
        projects = await store.list_projects()
        index = next(
            (n for n, p in enumerate(projects) if p.id == invoice.project_id),
            None,
        )
        if index is None:
            warning = (
                f"Invoice {invoice.id} references unknown project "
                f"{invoice.project_id}; project spend not updated."
            )
            logger.warning(
                warning,
                extra={"invoice_id": invoice.id, "project_id": invoice.project_id},
            )
            return InvoiceRecordResult(
                invoice=invoice, project_updated=False, warning=warning,
            )

        project = projects[index].with_added_spend(invoice.amount)
        projects[index] = project
        await store.replace_projects(projects)

    logger.info(
        f"Invoice recorded: {invoice.amount} against {project.name}",
        extra={"invoice_id": invoice.id, "project_id": project.id},
    )
    return InvoiceRecordResult(
        invoice=invoice, project_updated=True, project=project,
    )
