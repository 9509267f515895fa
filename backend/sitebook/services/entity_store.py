"""Entity Store — durable key-value collections of projects and invoices plus the session record.

Invariants:
    - Three independent keys: projects (list), invoices (list), session (object)
    - Every write replaces the WHOLE value of its key; no partial/delta writes
    - Ids are max+1 (1 when empty) per collection, never reused
    - Reads always hit the database (populate_existing), so a write is visible
      to the very next read in the same process
    - Outside atomic() each write commits immediately; inside atomic() all writes
      commit together or roll back together
    - initialize() seeds a collection only when its key is ABSENT, never when it
      holds an empty list

Design Decisions:
    - One StoredRecord row per key, JSON value: mirrors the whole-collection
      semantics instead of pretending to be relational
    - A value that fails to parse raises CorruptRecordError for that key only;
      the other keys stay readable
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sitebook.core.domain_types import StorageKey, ProjectId, InvoiceId
from sitebook.core.errors import (
    StorageError, CorruptRecordError, RecordValidationError, ErrorContext,
)
from sitebook.core.records import (
    Project, Invoice, UserSession, next_record_id,
)
from sitebook.core.seed_data import default_projects, default_invoices
from sitebook.models.stored_record import StoredRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

_PARSE_ERRORS = (KeyError, TypeError, ValueError)


class EntityStore:
    """Whole-collection store over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db
        self._in_transaction = False

    # ─── Transactions ───────────────────────────────────────────

    @asynccontextmanager
    async def atomic(self) -> AsyncGenerator["EntityStore", None]:
        """Group writes into one transaction. Nested blocks join the outer one."""
        if self._in_transaction:
            yield self
            return
        self._in_transaction = True
        try:
            yield self
            await self._commit()
        except Exception:
            await self._db.rollback()
            raise
        finally:
            self._in_transaction = False

    async def _commit(self) -> None:
        try:
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise self._failure(e, "commit", None) from e

    def _failure(
        self, exc: SQLAlchemyError, operation: str, key: StorageKey | None,
    ) -> StorageError:
        storage_key = key.value if key else None
        logger.error(
            f"Storage {operation} failed: {exc}",
            extra={"storage_key": storage_key, "error_code": "STORAGE_ERROR"},
        )
        return StorageError(
            f"could not {operation} record", operation,
            ErrorContext(storage_key=storage_key),
        )

    # ─── Raw key-value access ───────────────────────────────────

    async def _load(self, key: StorageKey):
        """Raw persisted value for key, or None when the key was never written."""
        try:
            row = await self._db.get(
                StoredRecord, key.value, populate_existing=True,
            )
        except SQLAlchemyError as e:
            raise self._failure(e, "read", key) from e
        return None if row is None else row.value

    async def _save(self, key: StorageKey, value: list | dict) -> None:
        try:
            row = await self._db.get(StoredRecord, key.value)
            if row is None:
                self._db.add(StoredRecord(key=key.value, value=value))
            else:
                row.value = value
            await self._db.flush()
        except SQLAlchemyError as e:
            if not self._in_transaction:
                await self._db.rollback()
            raise self._failure(e, "write", key) from e
        if not self._in_transaction:
            await self._commit()

    async def _delete(self, key: StorageKey) -> None:
        try:
            row = await self._db.get(StoredRecord, key.value)
            if row is not None:
                await self._db.delete(row)
                await self._db.flush()
        except SQLAlchemyError as e:
            if not self._in_transaction:
                await self._db.rollback()
            raise self._failure(e, "delete", key) from e
        if not self._in_transaction:
            await self._commit()

    async def _load_collection(
        self, key: StorageKey, parse: Callable[[dict], RecordT],
    ) -> list[RecordT]:
        raw = await self._load(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise CorruptRecordError(key.value, "expected a list")
        try:
            return [parse(item) for item in raw]
        except _PARSE_ERRORS as e:
            raise CorruptRecordError(key.value, f"{type(e).__name__}: {e}") from e

    # ─── Lifecycle ──────────────────────────────────────────────

    async def initialize(self) -> list[str]:
        """Seed absent collections. Returns the keys that were seeded."""
        seeded: list[str] = []
        async with self.atomic():
            if await self._load(StorageKey.PROJECTS) is None:
                await self._save(StorageKey.PROJECTS, default_projects())
                seeded.append(StorageKey.PROJECTS.value)
            if await self._load(StorageKey.INVOICES) is None:
                await self._save(StorageKey.INVOICES, default_invoices())
                seeded.append(StorageKey.INVOICES.value)
        if seeded:
            logger.info(f"Seeded default records: {', '.join(seeded)}")
        return seeded

    async def reset(self) -> None:
        """Remove every key so the next initialize() seeds again."""
        async with self.atomic():
            for key in StorageKey:
                await self._delete(key)
        logger.info("Entity store reset")

    # ─── Projects ───────────────────────────────────────────────

    async def list_projects(self) -> list[Project]:
        return await self._load_collection(StorageKey.PROJECTS, Project.from_dict)

    async def get_project(self, project_id: ProjectId) -> Project | None:
        for project in await self.list_projects():
            if project.id == project_id:
                return project
        return None

    async def add_project(self, fields: dict) -> Project:
        """Append a project with the next id; persists the full collection."""
        projects = await self.list_projects()
        new_id = next_record_id(p.id for p in projects)
        project = _build(Project.from_dict, {**fields, "id": new_id})
        projects.append(project)
        await self.replace_projects(projects)
        logger.info(
            f"Project created: {project.name}", extra={"project_id": project.id},
        )
        return project

    async def replace_projects(self, projects: list[Project]) -> None:
        await self._save(StorageKey.PROJECTS, [p.to_dict() for p in projects])

    # ─── Invoices ───────────────────────────────────────────────

    async def list_invoices(self) -> list[Invoice]:
        return await self._load_collection(StorageKey.INVOICES, Invoice.from_dict)

    async def add_invoice(self, fields: dict) -> Invoice:
        """Append an invoice with the next id (status defaults to Pending)."""
        invoices = await self.list_invoices()
        new_id = next_record_id(i.id for i in invoices)
        invoice = _build(Invoice.from_dict, {**fields, "id": InvoiceId(new_id)})
        invoices.append(invoice)
        await self._save(StorageKey.INVOICES, [i.to_dict() for i in invoices])
        return invoice

    # ─── Session ────────────────────────────────────────────────

    async def get_session(self) -> UserSession | None:
        raw = await self._load(StorageKey.SESSION)
        if raw is None:
            return None
        try:
            return UserSession.from_dict(raw)
        except _PARSE_ERRORS as e:
            raise CorruptRecordError(
                StorageKey.SESSION.value, f"{type(e).__name__}: {e}",
            ) from e

    async def put_session(self, session: UserSession) -> None:
        await self._save(StorageKey.SESSION, session.to_dict())

    async def delete_session(self) -> None:
        await self._delete(StorageKey.SESSION)


def _build(parse: Callable[[dict], RecordT], data: dict) -> RecordT:
    """Parse caller-supplied fields; malformed input never reaches the store."""
    try:
        return parse(data)
    except KeyError as e:
        raise RecordValidationError(f"Missing field {e.args[0]}", str(e.args[0]))
    except (TypeError, ValueError) as e:
        raise RecordValidationError(f"Invalid record: {e}", "record")
