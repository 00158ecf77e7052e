"""Recent uploads feed across the upload collections.

Merges books, notes, assignments and notices into one list of UploadItem,
newest first. Used by the dashboard (top N) and the uploads search.

Sorting is stable: items with equal timestamps keep collection order
(books, notes, assignments, notices), then their order in the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Sequence

from studyhub.core.models import utc_now
from studyhub.db.store import StoredDocument
from studyhub.utils.validators import parse_timestamp


class SourceKind(str, Enum):
    """Collection an upload came from."""

    BOOK = "Book"
    NOTE = "Note"
    ASSIGNMENT = "Assignment"
    NOTICE = "Notice"


@dataclass(frozen=True)
class UploadItem:
    """One entry of the uploads feed."""

    id: str
    name: str
    kind: SourceKind
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "created_at": self.created_at.isoformat(),
        }


def display_name(fields: dict[str, Any]) -> str:
    """Title of a stored document, falling back to its name."""
    return fields.get("title") or fields.get("name") or ""


def to_upload_item(
    doc: StoredDocument, kind: SourceKind, now: datetime | None = None
) -> UploadItem:
    """Tag a stored document for the feed.

    Documents without a readable creation time are treated as just created.
    """
    return UploadItem(
        id=doc.id,
        name=str(display_name(doc.fields)),
        kind=kind,
        created_at=doc.created_at or parse_timestamp(now) or utc_now(),
    )


def merge_uploads(*groups: Iterable[UploadItem]) -> list[UploadItem]:
    """Concatenate groups in order and sort newest first (stable)."""
    combined = [item for group in groups for item in group]
    return sorted(combined, key=lambda item: item.created_at, reverse=True)


def filter_uploads(items: Sequence[UploadItem], text: str | None) -> list[UploadItem]:
    """Case-insensitive substring match on the item name.

    Blank text matches everything. The input sequence is not modified.
    """
    if not text or not text.strip():
        return list(items)
    needle = text.lower()
    return [item for item in items if needle in item.name.lower()]


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")


def aggregate_uploads(
    books: Sequence[StoredDocument],
    notes: Sequence[StoredDocument],
    assignments: Sequence[StoredDocument],
    notices: Sequence[StoredDocument],
    *,
    limit: int | None = None,
    search: str | None = None,
    now: datetime | None = None,
) -> list[UploadItem]:
    """Build the uploads feed from the four upload collections.

    Args:
        books, notes, assignments, notices: Documents in store order
        limit: Keep only the N most recent items (after filtering)
        search: Case-insensitive substring filter on the display name
        now: Timestamp for documents without one (defaults to current time,
            naive values are UTC)

    Returns:
        UploadItems sorted by created_at descending

    Raises:
        ValueError: If limit is zero or negative
    """
    _check_limit(limit)
    now = parse_timestamp(now) or utc_now()

    merged = merge_uploads(
        (to_upload_item(d, SourceKind.BOOK, now) for d in books),
        (to_upload_item(d, SourceKind.NOTE, now) for d in notes),
        (to_upload_item(d, SourceKind.ASSIGNMENT, now) for d in assignments),
        (to_upload_item(d, SourceKind.NOTICE, now) for d in notices),
    )
    result = filter_uploads(merged, search)
    if limit is not None:
        result = result[:limit]
    return result


@dataclass
class UploadsFeed:
    """Full uploads list with a search view over it.

    Searching never touches `items`, so clearing the search restores
    the complete feed.
    """

    items: list[UploadItem] = field(default_factory=list)
    query: str = ""
    visible: list[UploadItem] = field(default_factory=list)

    def __post_init__(self):
        self.visible = filter_uploads(self.items, self.query)

    def search(self, text: str | None) -> list[UploadItem]:
        """Filter the retained items and return the visible ones."""
        self.query = text or ""
        self.visible = filter_uploads(self.items, self.query)
        return self.visible

    def clear(self) -> list[UploadItem]:
        """Drop the search and show everything again."""
        return self.search("")

    def top(self, n: int) -> list[UploadItem]:
        """The n most recent retained items, ignoring the search."""
        _check_limit(n)
        return self.items[:n]

    def __len__(self) -> int:
        return len(self.items)
