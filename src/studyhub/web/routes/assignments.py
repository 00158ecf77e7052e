"""Assignment endpoints."""

from fastapi import APIRouter, Depends, status

from studyhub.core.admin import StudyHubAdmin, get_admin
from studyhub.core.models import Assignment
from studyhub.web.errors import ADMIN_ERRORS, to_http_error
from studyhub.web.schemas import (
    AssignmentCreate,
    AssignmentListResponse,
    AssignmentResponse,
    AssignmentUpdate,
)

router = APIRouter(prefix="/api/assignments", tags=["assignments"])

COLLECTION = "assignments"


def _assignment_to_response(assignment: Assignment) -> AssignmentResponse:
    """Convert Assignment to AssignmentResponse."""
    return AssignmentResponse(
        id=assignment.id or "",
        title=assignment.title,
        subject=assignment.subject,
        due_date=assignment.due_date,
        description=assignment.description,
        created_at=assignment.created_at.isoformat() if assignment.created_at else None,
    )


@router.get("", response_model=AssignmentListResponse)
async def list_assignments(
    admin: StudyHubAdmin = Depends(get_admin),
) -> AssignmentListResponse:
    """List all assignments."""
    try:
        assignments = admin.list_records(COLLECTION)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    responses = [_assignment_to_response(a) for a in assignments]
    return AssignmentListResponse(assignments=responses, count=len(responses))


@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(
    assignment_id: str, admin: StudyHubAdmin = Depends(get_admin)
) -> AssignmentResponse:
    """Get a specific assignment."""
    try:
        assignment = admin.get_record(COLLECTION, assignment_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _assignment_to_response(assignment)


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    data: AssignmentCreate, admin: StudyHubAdmin = Depends(get_admin)
) -> AssignmentResponse:
    """Post a new assignment."""
    try:
        assignment = admin.create_assignment(
            title=data.title,
            subject=data.subject,
            due_date=data.due_date,
            description=data.description,
        )
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _assignment_to_response(assignment)


@router.put("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: str,
    changes: AssignmentUpdate,
    admin: StudyHubAdmin = Depends(get_admin),
) -> AssignmentResponse:
    """Save changes to an assignment."""
    try:
        assignment = admin.update_record(
            COLLECTION, assignment_id, changes.model_dump(exclude_none=True)
        )
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _assignment_to_response(assignment)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(
    assignment_id: str, admin: StudyHubAdmin = Depends(get_admin)
) -> None:
    """Delete an assignment by ID."""
    try:
        admin.delete_record(COLLECTION, assignment_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e
