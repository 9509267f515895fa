"""Route Dependencies — builds a request-scoped EntityStore on top of get_db."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sitebook.infrastructure.database import get_db
from sitebook.services.entity_store import EntityStore


async def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
    return EntityStore(db)
