"""Lecture notes endpoints."""

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from studyhub.core.admin import StudyHubAdmin, get_admin
from studyhub.core.models import Note
from studyhub.web.errors import ADMIN_ERRORS, to_http_error
from studyhub.web.routes.books import read_upload
from studyhub.web.schemas import NoteListResponse, NoteResponse, NoteUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])

COLLECTION = "notes"


def _note_to_response(note: Note) -> NoteResponse:
    """Convert Note to NoteResponse."""
    return NoteResponse(
        id=note.id or "",
        title=note.title,
        semester=note.semester,
        subject=note.subject,
        lecture_no=note.lecture_no,
        file_url=note.file_url,
        pages=note.pages,
        created_at=note.created_at.isoformat() if note.created_at else None,
    )


@router.get("", response_model=NoteListResponse)
async def list_notes(admin: StudyHubAdmin = Depends(get_admin)) -> NoteListResponse:
    """List all lecture notes."""
    try:
        notes = admin.list_records(COLLECTION)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    responses = [_note_to_response(n) for n in notes]
    return NoteListResponse(notes=responses, count=len(responses))


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: str, admin: StudyHubAdmin = Depends(get_admin)) -> NoteResponse:
    """Get specific lecture notes."""
    try:
        note = admin.get_record(COLLECTION, note_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _note_to_response(note)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    title: str = Form(""),
    semester: str = Form(""),
    subject: str = Form(""),
    lecture_no: str = Form(""),
    file: UploadFile | None = File(None),
    admin: StudyHubAdmin = Depends(get_admin),
) -> NoteResponse:
    """Upload a lecture PDF and save the notes."""
    upload = await read_upload(file)

    try:
        note = admin.create_note(title, semester, subject, lecture_no, upload)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    logger.info("notes_created", note_id=note.id, lecture_no=note.lecture_no)
    return _note_to_response(note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    changes: NoteUpdate,
    admin: StudyHubAdmin = Depends(get_admin),
) -> NoteResponse:
    """Edit lecture notes metadata."""
    try:
        note = admin.update_record(
            COLLECTION, note_id, changes.model_dump(exclude_none=True)
        )
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _note_to_response(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, admin: StudyHubAdmin = Depends(get_admin)) -> None:
    """Delete lecture notes by ID."""
    try:
        admin.delete_record(COLLECTION, note_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e
