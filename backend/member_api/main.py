"""Member API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MemberApiError → {"success": false, "error"} responses
    - CORS configured from settings (not hardcoded)
    - Database initialized (and schema bootstrapped if enabled) on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Module-level `app`: one process-wide instance, created at import, never torn down
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from member_api.api.error_handlers import register_error_handlers
from member_api.api.routes import health, members
from member_api.config import get_settings
from member_api.infrastructure.database import init_db
from member_api.infrastructure.observability import setup_logging

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
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("Member API started")
    yield
    await manager.dispose()
    logger.info("Member API shutting down")


app = FastAPI(title="Member API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(members.router)

register_error_handlers(app)
