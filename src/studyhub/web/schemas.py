"""Pydantic schemas for Web API.

Serialization models for the five collections, the dashboard and the
uploads feed. Create bodies default every field to "" so blank and missing
fields get the same "required fields" error from the admin service.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# BOOK / NOTE SCHEMAS (created via multipart upload)
# =============================================================================


class BookResponse(BaseModel):
    """Response for a book."""

    id: str
    title: str
    semester: str
    subject: str
    file_url: str
    pages: int | None = None
    created_at: str | None = None


class BookUpdate(BaseModel):
    """Request body for editing a book."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    semester: str | None = None
    subject: str | None = None


class BookListResponse(BaseModel):
    """Response for list of books."""

    books: list[BookResponse]
    count: int


class NoteResponse(BaseModel):
    """Response for lecture notes."""

    id: str
    title: str
    semester: str
    subject: str
    lecture_no: str
    file_url: str
    pages: int | None = None
    created_at: str | None = None


class NoteUpdate(BaseModel):
    """Request body for editing notes."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    semester: str | None = None
    subject: str | None = None
    lecture_no: str | None = None


class NoteListResponse(BaseModel):
    """Response for list of notes."""

    notes: list[NoteResponse]
    count: int


# =============================================================================
# ASSIGNMENT SCHEMAS
# =============================================================================


class AssignmentCreate(BaseModel):
    """Request body for posting an assignment."""

    title: str = Field(default="", max_length=200)
    subject: str = Field(default="", max_length=100)
    due_date: str = Field(default="", max_length=50)
    description: str = Field(default="", max_length=5000)


class AssignmentUpdate(BaseModel):
    """Request body for editing an assignment."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)
    subject: str | None = Field(default=None, max_length=100)
    due_date: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=5000)


class AssignmentResponse(BaseModel):
    """Response for an assignment."""

    id: str
    title: str
    subject: str
    due_date: str
    description: str
    created_at: str | None = None


class AssignmentListResponse(BaseModel):
    """Response for list of assignments."""

    assignments: list[AssignmentResponse]
    count: int


# =============================================================================
# NOTICE SCHEMAS
# =============================================================================


class NoticeCreate(BaseModel):
    """Request body for publishing a notice."""

    title: str = Field(default="", max_length=200)
    description: str = Field(default="", max_length=5000)
    date: str = Field(default="", max_length=50)


class NoticeUpdate(BaseModel):
    """Request body for editing a notice."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    date: str | None = Field(default=None, max_length=50)


class NoticeResponse(BaseModel):
    """Response for a notice."""

    id: str
    title: str
    description: str
    date: str
    created_at: str | None = None


class NoticeListResponse(BaseModel):
    """Response for list of notices."""

    notices: list[NoticeResponse]
    count: int


# =============================================================================
# EXAM ROUTINE SCHEMAS
# =============================================================================


class ExamCreate(BaseModel):
    """Request body for scheduling an exam."""

    subject: str = Field(default="", max_length=100)
    date: str = Field(default="", max_length=50)
    time: str = Field(default="", max_length=50)
    semester: str = Field(default="", max_length=20)
    room: str = Field(default="", max_length=50)


class ExamUpdate(BaseModel):
    """Request body for editing an exam entry."""

    model_config = ConfigDict(extra="forbid")

    subject: str | None = Field(default=None, max_length=100)
    date: str | None = Field(default=None, max_length=50)
    time: str | None = Field(default=None, max_length=50)
    semester: str | None = Field(default=None, max_length=20)
    room: str | None = Field(default=None, max_length=50)


class ExamResponse(BaseModel):
    """Response for an exam entry."""

    id: str
    subject: str
    date: str
    time: str
    semester: str
    room: str
    room_display: str
    created_at: str | None = None


class ExamListResponse(BaseModel):
    """Response for the exam routine."""

    exams: list[ExamResponse]
    count: int


# =============================================================================
# DASHBOARD / UPLOADS SCHEMAS
# =============================================================================


class UploadItemResponse(BaseModel):
    """One entry of the uploads feed."""

    id: str
    name: str
    kind: str
    created_at: str


class DashboardStats(BaseModel):
    """Document counts per upload collection."""

    books: int = 0
    notes: int = 0
    assignments: int = 0
    notices: int = 0


class DashboardResponse(BaseModel):
    """Dashboard overview."""

    stats: DashboardStats
    recent_uploads: list[UploadItemResponse]


class UploadsResponse(BaseModel):
    """Aggregated uploads, optionally filtered."""

    uploads: list[UploadItemResponse]
    count: int
    total: int
    search: str = ""


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    backend: str = "local"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
