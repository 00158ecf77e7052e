"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from studyhub import __version__
from studyhub.config.app_config import load_app_config
from studyhub.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(
        status="ok",
        version=__version__,
        backend=load_app_config().backend,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
