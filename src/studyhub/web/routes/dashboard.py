"""Dashboard and uploads feed endpoints."""

import structlog
from fastapi import APIRouter, Depends, Query

from studyhub.core.admin import StudyHubAdmin, get_admin
from studyhub.core.aggregator import UploadItem
from studyhub.web.errors import ADMIN_ERRORS, to_http_error
from studyhub.web.schemas import (
    DashboardResponse,
    DashboardStats,
    UploadItemResponse,
    UploadsResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])


def _item_to_response(item: UploadItem) -> UploadItemResponse:
    """Convert UploadItem to UploadItemResponse."""
    return UploadItemResponse(**item.to_dict())


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    limit: int | None = Query(None, ge=1, le=100, description="Recent uploads to show"),
    admin: StudyHubAdmin = Depends(get_admin),
) -> DashboardResponse:
    """Collection counts and the most recent uploads."""
    try:
        summary = admin.dashboard(limit=limit)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return DashboardResponse(
        stats=DashboardStats(**summary.stats),
        recent_uploads=[_item_to_response(i) for i in summary.recent],
    )


@router.get("/uploads", response_model=UploadsResponse)
async def list_uploads(
    search: str = Query("", max_length=200, description="Filter by name"),
    limit: int | None = Query(None, ge=1, description="Keep only the N most recent"),
    admin: StudyHubAdmin = Depends(get_admin),
) -> UploadsResponse:
    """Every upload across books, notes, assignments and notices, newest first."""
    try:
        feed = admin.uploads_feed(search=search)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    visible = feed.visible[:limit] if limit else feed.visible
    logger.info("uploads_list", total=len(feed), shown=len(visible), search=search)

    return UploadsResponse(
        uploads=[_item_to_response(i) for i in visible],
        count=len(visible),
        total=len(feed),
        search=feed.query,
    )
