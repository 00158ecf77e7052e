"""Book endpoints.

Books are created with a multipart form: title, semester, subject and the
PDF file. Edits change metadata only.
"""

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from studyhub.core.admin import StudyHubAdmin, UploadedFile, get_admin
from studyhub.core.models import Book
from studyhub.core.pdf_inspector import PDF_CONTENT_TYPE
from studyhub.web.errors import ADMIN_ERRORS, to_http_error
from studyhub.web.schemas import BookListResponse, BookResponse, BookUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/books", tags=["books"])

COLLECTION = "books"


def _book_to_response(book: Book) -> BookResponse:
    """Convert Book to BookResponse."""
    return BookResponse(
        id=book.id or "",
        title=book.title,
        semester=book.semester,
        subject=book.subject,
        file_url=book.file_url,
        pages=book.pages,
        created_at=book.created_at.isoformat() if book.created_at else None,
    )


async def read_upload(file: UploadFile | None) -> UploadedFile | None:
    """Read a multipart file into an UploadedFile."""
    if file is None:
        return None
    return UploadedFile(
        name=file.filename or "upload.pdf",
        data=await file.read(),
        content_type=file.content_type or PDF_CONTENT_TYPE,
    )


@router.get("", response_model=BookListResponse)
async def list_books(admin: StudyHubAdmin = Depends(get_admin)) -> BookListResponse:
    """List all books."""
    try:
        books = admin.list_records(COLLECTION)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    responses = [_book_to_response(b) for b in books]
    return BookListResponse(books=responses, count=len(responses))


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: str, admin: StudyHubAdmin = Depends(get_admin)) -> BookResponse:
    """Get a specific book."""
    try:
        book = admin.get_record(COLLECTION, book_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _book_to_response(book)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    title: str = Form(""),
    semester: str = Form(""),
    subject: str = Form(""),
    file: UploadFile | None = File(None),
    admin: StudyHubAdmin = Depends(get_admin),
) -> BookResponse:
    """Upload a book PDF and save the book."""
    upload = await read_upload(file)

    try:
        book = admin.create_book(title, semester, subject, upload)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    logger.info("books_created", book_id=book.id, pages=book.pages)
    return _book_to_response(book)


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: str,
    changes: BookUpdate,
    admin: StudyHubAdmin = Depends(get_admin),
) -> BookResponse:
    """Edit a book's title, semester or subject."""
    try:
        book = admin.update_record(
            COLLECTION, book_id, changes.model_dump(exclude_none=True)
        )
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e

    return _book_to_response(book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: str, admin: StudyHubAdmin = Depends(get_admin)) -> None:
    """Delete a book by ID."""
    try:
        admin.delete_record(COLLECTION, book_id)
    except ADMIN_ERRORS as e:
        raise to_http_error(e) from e
