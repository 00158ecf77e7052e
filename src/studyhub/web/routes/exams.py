"""Exam routine endpoints."""

from fastapi import APIRouter, Depends, status

from studyhub.core.admin import StudyHubAdmin, get_admin
from studyhub.core.models import Exam
from studyhub.web.errors import ADMIN_ERRORS, to_http_error
from studyhub.web.schemas import ExamCreate, ExamListResponse, ExamResponse, ExamUpdate

router = APIRouter(prefix="/api/exams", tags=["exams"])

COLLECTION = "exams"


def _exam_to_response(exam: Exam) -> ExamResponse:
    """Convert Exam to ExamResponse."""
    return ExamResponse(
        id=exam.id or "",
        subject=exam.subject,
        date=exam.date,
        time=exam.time,
        semester=exam.semester,
        room=exam.room,
        room_display=exam.room_display,
        created_at=exam.created_at.isoformat() if exam.created_at else None,
    )


@router.get("", response_model=ExamListResponse)
async def list_exams(admin: StudyHubAdmin = Depends(get_admin)) -> ExamListResponse:
    """List the exam routine."""
    try:
        exams = admin.list_records(COLLECTION)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    responses = [_exam_to_response(x) for x in exams]
    return ExamListResponse(exams=responses, count=len(responses))


@router.get("/{exam_id}", response_model=ExamResponse)
async def get_exam(exam_id: str, admin: StudyHubAdmin = Depends(get_admin)) -> ExamResponse:
    """Get a specific exam entry."""
    try:
        exam = admin.get_record(COLLECTION, exam_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _exam_to_response(exam)


@router.post("", response_model=ExamResponse, status_code=status.HTTP_201_CREATED)
async def create_exam(
    data: ExamCreate, admin: StudyHubAdmin = Depends(get_admin)
) -> ExamResponse:
    """Schedule an exam."""
    try:
        exam = admin.create_exam(
            subject=data.subject,
            date=data.date,
            time=data.time,
            semester=data.semester,
            room=data.room,
        )
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _exam_to_response(exam)


@router.put("/{exam_id}", response_model=ExamResponse)
async def update_exam(
    exam_id: str,
    changes: ExamUpdate,
    admin: StudyHubAdmin = Depends(get_admin),
) -> ExamResponse:
    """Update an exam entry."""
    try:
        exam = admin.update_record(COLLECTION, exam_id, changes.model_dump(exclude_none=True))
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _exam_to_response(exam)


@router.delete("/{exam_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exam(exam_id: str, admin: StudyHubAdmin = Depends(get_admin)) -> None:
    """Delete an exam entry by ID."""
    try:
        admin.delete_record(COLLECTION, exam_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e
