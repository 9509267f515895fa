"""Record Search — case-insensitive filtering behind the project and invoice search boxes.

Invariants:
    - Blank/None term returns the input unchanged (same order)
    - Matching is substring, case-insensitive
    - Invoices match on description OR on the referenced project's name
"""

from typing import Sequence

from sitebook.core.records import Project, Invoice


def _normalize(term: str | None) -> str:
    return (term or "").strip().lower()


def filter_projects(projects: Sequence[Project], term: str | None) -> list[Project]:
    needle = _normalize(term)
    if not needle:
        return list(projects)
    return [p for p in projects if needle in p.name.lower()]


def filter_invoices(
    invoices: Sequence[Invoice], projects: Sequence[Project], term: str | None,
) -> list[Invoice]:
    needle = _normalize(term)
    if not needle:
        return list(invoices)
    names = {p.id: p.name.lower() for p in projects}
    return [
        i for i in invoices
        if needle in i.description.lower()
        or needle in names.get(i.project_id, "")
    ]
