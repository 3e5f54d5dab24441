"""Friend Graph API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FriendGraphError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers registered from api/error_handlers.py
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from friendgraph.api.error_handlers import register_error_handlers
from friendgraph.api.routes import friend, health, notification
from friendgraph.config import get_settings
from friendgraph.infrastructure.database import init_db
from friendgraph.infrastructure.observability import setup_logging

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
        echo=settings.database_echo,
    )
    logger.info(
        f"Starting {settings.app_name} server version {settings.app_version}",
    )
    yield
    logger.info("Shutting down server...")
    await manager.dispose()


settings = get_settings()
app = FastAPI(
    title="Friend Graph API", version=settings.app_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(health.ping_router)
app.include_router(friend.router)
app.include_router(notification.router)

register_error_handlers(app)

# Static files mounted AFTER API routes so /api/* takes precedence
if os.path.isdir("public"):
    app.mount("/", StaticFiles(directory="public", html=True), name="static")
