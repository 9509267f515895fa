"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: the store does IO, but the core functions that consume
      its snapshots (risk, stats, search) are never async themselves
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from sitebook.core.domain_types import ProjectId
from sitebook.core.records import Project, Invoice, UserSession


class EntityStoreLike(Protocol):
    """Contract for the project/invoice/session store — implemented by shell."""
    async def list_projects(self) -> list[Project]: ...
    async def get_project(self, project_id: ProjectId) -> Project | None: ...
    async def add_project(self, fields: dict) -> Project: ...
    async def replace_projects(self, projects: list[Project]) -> None: ...
    async def list_invoices(self) -> list[Invoice]: ...
    async def add_invoice(self, fields: dict) -> Invoice: ...
    async def get_session(self) -> UserSession | None: ...
    async def put_session(self, session: UserSession) -> None: ...
    async def delete_session(self) -> None: ...
    def atomic(self) -> AbstractAsyncContextManager: ...
