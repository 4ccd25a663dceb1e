"""Decision Twin API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DecisionTwinError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SQLite databases get their tables created at startup; Postgres is
      migrated by alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decision_twin import __version__
from decision_twin.api.error_handlers import register_error_handlers
from decision_twin.api.routes import (
    advice, decisions, exports, health, reminders, reviews, settings as settings_routes,
    shares, templates,
)
from decision_twin.config import get_settings
from decision_twin.infrastructure.database import init_db
from decision_twin.infrastructure.observability import setup_logging

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
        await manager.create_all()
    logger.info("Decision Twin API started")
    yield
    await manager.dispose()
    logger.info("Decision Twin API shutting down")


app = FastAPI(
    title="Decision Twin API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(decisions.router)
app.include_router(reminders.router)
app.include_router(reviews.router)
app.include_router(templates.router)
app.include_router(shares.router)
app.include_router(settings_routes.router)
app.include_router(exports.router)
app.include_router(advice.router)

register_error_handlers(app)
