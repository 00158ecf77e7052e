"""FastAPI application factory.

Main entry point for the Study Hub admin Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studyhub import __version__
from studyhub.config.app_config import load_app_config
from studyhub.web.routes import (
    health_router,
    books_router,
    notes_router,
    assignments_router,
    notices_router,
    exams_router,
    dashboard_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    config = load_app_config()
    logger.info(
        "api_startup",
        backend=config.backend,
        db_path=config.local.db_path if config.backend == "local" else None,
        bucket=config.firebase.storage_bucket if config.backend == "firebase" else None,
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Study Hub Admin API",
        description="Manage books, notes, assignments, notices and the exam routine",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware for the mobile/web admin clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(dashboard_router)
    app.include_router(books_router)
    app.include_router(notes_router)
    app.include_router(assignments_router)
    app.include_router(notices_router)
    app.include_router(exams_router)

    return app


# Default app instance for uvicorn
app = create_app()
