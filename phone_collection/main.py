"""Phone collection engine — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from phone_collection.adapters.persistence.database import engine
from phone_collection.infrastructure.api.routes_assignment import router as assignment_router
from phone_collection.infrastructure.api.routes_health import router as health_router
from phone_collection.infrastructure.api.routes_reports import router as reports_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Phone Collection Engine",
        description="Daily round-robin case assignment and collection reporting",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(assignment_router, prefix="/api")
    app.include_router(reports_router, prefix="/api")

    return app


app = create_app()
