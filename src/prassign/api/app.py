"""FastAPI app factory"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.config.settings import get_config
from ..core.schemas import HealthResponse
from ..core.services import build_services
from ..core.storage.database import init_db
from .errors import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    config = get_config()
    db = init_db(
        config.get_database_url(),
        echo=config.echo_sql,
        isolation_level=config.isolation_level,
    )
    await db.create_tables()

    # Store in app state for access in routes
    app.state.db = db
    app.state.config = config
    app.state.services = build_services(db, random_seed=config.random_seed)
    app.state.started_at = time.monotonic()

    logger.info("prassign API started")

    yield

    # Shutdown
    await db.close()
    logger.info("prassign API stopped")


def create_app() -> FastAPI:
    """Create FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="prassign API",
        description="Pull request reviewer assignment service",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routes
    from .routes import pull_requests, stats, team, users

    app.include_router(team.router, tags=["teams"])
    app.include_router(users.router, tags=["users"])
    app.include_router(pull_requests.router, tags=["pull requests"])
    app.include_router(stats.router, tags=["stats"])

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        started_at = getattr(app.state, "started_at", None)
        uptime = int(time.monotonic() - started_at) if started_at is not None else 0
        return HealthResponse(
            status="ok",
            service="prassign",
            timestamp=datetime.now(timezone.utc).isoformat(),
            uptime_seconds=uptime,
        )

    return app


app = create_app()
