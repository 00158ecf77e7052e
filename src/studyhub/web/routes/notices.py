"""Notice board endpoints."""

from fastapi import APIRouter, Depends, status

from studyhub.core.admin import StudyHubAdmin, get_admin
from studyhub.core.models import Notice
from studyhub.web.errors import ADMIN_ERRORS, to_http_error
from studyhub.web.schemas import (
    NoticeCreate,
    NoticeListResponse,
    NoticeResponse,
    NoticeUpdate,
)

router = APIRouter(prefix="/api/notices", tags=["notices"])

COLLECTION = "notices"


def _notice_to_response(notice: Notice) -> NoticeResponse:
    """Convert Notice to NoticeResponse."""
    return NoticeResponse(
        id=notice.id or "",
        title=notice.title,
        description=notice.description,
        date=notice.date,
        created_at=notice.created_at.isoformat() if notice.created_at else None,
    )


@router.get("", response_model=NoticeListResponse)
async def list_notices(admin: StudyHubAdmin = Depends(get_admin)) -> NoticeListResponse:
    """List all notices."""
    try:
        notices = admin.list_records(COLLECTION)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    responses = [_notice_to_response(n) for n in notices]
    return NoticeListResponse(notices=responses, count=len(responses))


@router.get("/{notice_id}", response_model=NoticeResponse)
async def get_notice(
    notice_id: str, admin: StudyHubAdmin = Depends(get_admin)
) -> NoticeResponse:
    """Get a specific notice."""
    try:
        notice = admin.get_record(COLLECTION, notice_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _notice_to_response(notice)


@router.post("", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED)
async def create_notice(
    data: NoticeCreate, admin: StudyHubAdmin = Depends(get_admin)
) -> NoticeResponse:
    """Publish a notice."""
    try:
        notice = admin.create_notice(
            title=data.title, description=data.description, date=data.date
        )
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _notice_to_response(notice)


@router.put("/{notice_id}", response_model=NoticeResponse)
async def update_notice(
    notice_id: str,
    changes: NoticeUpdate,
    admin: StudyHubAdmin = Depends(get_admin),
) -> NoticeResponse:
    """Update a notice."""
    try:
        notice = admin.update_record(
            COLLECTION, notice_id, changes.model_dump(exclude_none=True)
        )
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _notice_to_response(notice)


@router.delete("/{notice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notice(notice_id: str, admin: StudyHubAdmin = Depends(get_admin)) -> None:
    """Delete a notice by ID."""
    try:
        admin.delete_record(COLLECTION, notice_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e
