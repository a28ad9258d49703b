"""Books API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {"error": {...}} envelope
    - CORS configured from settings (not hardcoded)
    - Database manager created in the lifespan and kept on app.state.db

Run with::

    uvicorn books_api.main:app --port 3000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from books_api.api.error_handlers import register_error_handlers
from books_api.api.routes import books, health
from books_api.config import Settings, get_settings
from books_api.infrastructure.database import DatabaseSessionManager
from books_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a configured FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        db = DatabaseSessionManager(
            settings.effective_database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_schema:
            await db.create_schema()
        app.state.db = db
        logger.info("Books API started")
        yield
        logger.info("Books API shutting down")
        await db.close()
        app.state.db = None

    app = FastAPI(title="Books API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(books.router)

    register_error_handlers(app)
    return app


app = create_app()
