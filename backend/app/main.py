"""Module Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Storage is built here and handed down: app.state.module_repository is the only handle
    - Middleware order: request id (outermost) → failure containment → routing
    - Error handlers map ModuleError / RequestValidationError → envelope responses
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - create_app factory over import-time globals: tests build isolated apps per settings
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.middleware import exception_middleware, request_id_middleware
from app.api.routes import health, modules
from app.config import Settings, get_settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.module_store_memory import InMemoryModuleRepository
from app.infrastructure.module_store_sql import SqlModuleRepository
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def _build_storage(app: FastAPI, settings: Settings) -> None:
    """Attach the configured repository (and its session manager) to app.state."""
    if settings.repository_backend == "sql":
        db_manager = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        app.state.db_manager = db_manager
        app.state.module_repository = SqlModuleRepository(db_manager)
    else:
        app.state.db_manager = None
        app.state.module_repository = InMemoryModuleRepository()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        db_manager = app.state.db_manager
        if db_manager and settings.database_create_schema:
            await db_manager.create_schema()
        logger.info(
            f"{settings.app_name} started "
            f"(storage: {settings.repository_backend})",
        )
        yield
        if db_manager:
            await db_manager.dispose()
        logger.info(f"{settings.app_name} shutting down")

    app = FastAPI(
        title=settings.app_name, version=settings.app_version, lifespan=lifespan,
    )
    _build_storage(app, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id", "Location"],
    )
    # Registered inner-first: the last one added runs outermost
    app.middleware("http")(exception_middleware)
    app.middleware("http")(request_id_middleware)

    register_error_handlers(app)

    # Routes, explicit registration
    app.include_router(health.router)
    app.include_router(modules.router)
    return app


app = create_app()
