"""Entity Store — seeding, id assignment, whole-collection writes, corruption isolation.

Invariants:
    - initialize() seeds only ABSENT keys, never empty ones
    - Ids are max+1 per collection, independently numbered
    - A corrupt key fails on its own; other keys stay readable
    - Driver failures surface as StorageError and leave committed data intact
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from sitebook.core.domain_types import InvoiceStatus, StorageKey, UserRole
from sitebook.core.errors import (
    CorruptRecordError, RecordValidationError, StorageError,
)
from sitebook.core.records import UserSession
from sitebook.models.stored_record import StoredRecord
from sitebook.services.entity_store import EntityStore

NEW_PROJECT = {
    "name": "Harbor Pier", "budget": 250000, "spent": 0, "progress": 0,
    "status": "Active", "startDate": "2024-03-01", "endDate": "",
}


async def test_unseeded_store_is_empty(store):
    assert await store.list_projects() == []
    assert await store.list_invoices() == []
    assert await store.get_session() is None


async def test_initialize_seeds_three_projects_and_invoices(store):
    seeded = await store.initialize()
    assert seeded == ["projects", "invoices"]
    projects = await store.list_projects()
    invoices = await store.list_invoices()
    assert [p.name for p in projects] == [
        "Skyline Apartments", "Downtown Plaza Reno", "Westside Bridge",
    ]
    assert [i.project_id for i in invoices] == [1, 2, 1]
    # Seeding writes spent as-is; seeded invoices are not applied
    assert sum(p.spent for p in projects) == 660_000


async def test_initialize_is_idempotent(seeded_store):
    await seeded_store.add_project(NEW_PROJECT)
    assert await seeded_store.initialize() == []
    assert len(await seeded_store.list_projects()) == 4


async def test_empty_collection_is_not_reseeded(store, test_db):
    test_db.add(StoredRecord(key=StorageKey.PROJECTS.value, value=[]))
    await test_db.commit()

    seeded = await store.initialize()

    assert seeded == ["invoices"]
    assert await store.list_projects() == []


async def test_first_project_gets_id_one_then_two(store):
    first = await store.add_project(NEW_PROJECT)
    second = await store.add_project({**NEW_PROJECT, "name": "Depot"})
    assert (first.id, second.id) == (1, 2)


async def test_ids_continue_from_max_existing(seeded_store):
    project = await seeded_store.add_project(NEW_PROJECT)
    assert project.id == 4


async def test_invoice_ids_are_independent_of_project_ids(seeded_store):
    await seeded_store.add_project(NEW_PROJECT)
    await seeded_store.add_project(NEW_PROJECT)
    invoice = await seeded_store.add_invoice({
        "projectId": 1, "amount": 10, "description": "Nails", "date": "2024-01-01",
    })
    assert invoice.id == 4
    assert invoice.status == InvoiceStatus.PENDING


async def test_list_preserves_insertion_order(store):
    for name in ("C", "A", "B"):
        await store.add_project({**NEW_PROJECT, "name": name})
    assert [p.name for p in await store.list_projects()] == ["C", "A", "B"]


async def test_write_is_visible_to_a_fresh_session(store, test_session_factory):
    await store.add_project(NEW_PROJECT)
    async with test_session_factory() as other:
        projects = await EntityStore(other).list_projects()
    assert [p.name for p in projects] == ["Harbor Pier"]


async def test_add_project_with_missing_field_is_rejected(store):
    fields = {k: v for k, v in NEW_PROJECT.items() if k != "budget"}
    with pytest.raises(RecordValidationError):
        await store.add_project(fields)
    assert await store.list_projects() == []


@pytest.mark.parametrize("progress", [50.9, 150])
async def test_add_project_rejects_progress_outside_whole_percent(store, progress):
    with pytest.raises(RecordValidationError):
        await store.add_project({**NEW_PROJECT, "progress": progress})
    assert await store.list_projects() == []


async def test_corrupt_collection_does_not_affect_other_keys(seeded_store, test_db):
    row = await test_db.get(StoredRecord, StorageKey.PROJECTS.value)
    row.value = {"not": "a list"}
    await test_db.commit()

    with pytest.raises(CorruptRecordError) as exc:
        await seeded_store.list_projects()
    assert exc.value.key == "projects"
    assert len(await seeded_store.list_invoices()) == 3


async def test_corrupt_item_raises_corrupt_record(seeded_store, test_db):
    row = await test_db.get(StoredRecord, StorageKey.INVOICES.value)
    row.value = [{"id": 1}]
    await test_db.commit()

    with pytest.raises(CorruptRecordError):
        await seeded_store.list_invoices()


async def test_atomic_rolls_back_every_write(seeded_store):
    with pytest.raises(RuntimeError):
        async with seeded_store.atomic():
            await seeded_store.add_project(NEW_PROJECT)
            await seeded_store.add_invoice({
                "projectId": 1, "amount": 5, "description": "", "date": "2024-01-01",
            })
            raise RuntimeError("boom")
    assert len(await seeded_store.list_projects()) == 3
    assert len(await seeded_store.list_invoices()) == 3


async def test_reset_removes_every_key_and_allows_reseed(seeded_store):
    await seeded_store.add_project(NEW_PROJECT)
    await seeded_store.reset()
    assert await seeded_store.list_projects() == []
    assert await seeded_store.initialize() == ["projects", "invoices"]
    assert len(await seeded_store.list_projects()) == 3


# ─── Driver failures ────────────────────────────────────────────

def _disk_error() -> OperationalError:
    return OperationalError("stored_records", {}, Exception("disk I/O error"))


async def test_failed_flush_raises_storage_error_and_keeps_data(
    seeded_store, monkeypatch,
):
    async def failing_flush(self, objects=None):
        raise _disk_error()

    monkeypatch.setattr(AsyncSession, "flush", failing_flush)
    with pytest.raises(StorageError) as exc:
        await seeded_store.add_project(NEW_PROJECT)
    monkeypatch.undo()

    assert exc.value.code == "STORAGE_ERROR"
    assert exc.value.operation == "write"
    assert exc.value.context.storage_key == "projects"
    assert isinstance(exc.value.__cause__, OperationalError)
    assert len(await seeded_store.list_projects()) == 3
    assert len(await seeded_store.list_invoices()) == 3


async def test_failed_commit_rolls_back_flushed_write(seeded_store, monkeypatch):
    async def failing_commit(self):
        raise _disk_error()

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    with pytest.raises(StorageError) as exc:
        await seeded_store.add_project(NEW_PROJECT)
    monkeypatch.undo()

    assert exc.value.operation == "commit"
    assert len(await seeded_store.list_projects()) == 3


async def test_failed_read_of_one_key_leaves_others_readable(
    seeded_store, monkeypatch,
):
    original_get = AsyncSession.get

    async def get_failing_for_projects(self, entity, ident, **kwargs):
        if ident == StorageKey.PROJECTS.value:
            raise _disk_error()
        return await original_get(self, entity, ident, **kwargs)

    monkeypatch.setattr(AsyncSession, "get", get_failing_for_projects)

    with pytest.raises(StorageError) as exc:
        await seeded_store.list_projects()
    assert exc.value.operation == "read"
    assert len(await seeded_store.list_invoices()) == 3


async def test_failed_delete_keeps_session(store, monkeypatch):
    session = UserSession(id="u_1", username="ana", role=UserRole.ADMIN, token="t")
    await store.put_session(session)

    async def failing_flush(self, objects=None):
        raise _disk_error()

    monkeypatch.setattr(AsyncSession, "flush", failing_flush)
    with pytest.raises(StorageError) as exc:
        await store.delete_session()
    monkeypatch.undo()

    assert exc.value.operation == "delete"
    assert await store.get_session() == session
