"""SiteBook API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SiteBookError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized, and default records seeded, on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SQLite schema created on startup; server databases are migrated by alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitebook.api.error_handlers import register_error_handlers
from sitebook.api.routes import auth, dashboard, health, invoices, projects
from sitebook.config import get_settings
from sitebook.infrastructure.database import init_db
from sitebook.infrastructure.observability import setup_logging
from sitebook.services.entity_store import EntityStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await manager.create_schema()
    if settings.seed_on_startup:
        async with manager.session() as db:
            await EntityStore(db).initialize()
    logger.info("SiteBook API started")
    yield
    await manager.dispose()
    logger.info("SiteBook API shutting down")


app = FastAPI(
    title="SiteBook API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(invoices.router)
app.include_router(dashboard.router)

register_error_handlers(app)
