"""CLI commands for the study hub admin.

Commands:
- dashboard: Collection counts and recent uploads
- uploads: All uploads, newest first, with search
- list / show: Browse a collection
- add-book / add-note: Upload a PDF and save it
- add-assignment / add-notice / add-exam: Create records
- edit: Change fields on a record
- delete: Delete a record (asks for confirmation)
- serve: Run the web API
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from studyhub.config.app_config import ConfigError
from studyhub.core.admin import (
    DocumentNotFoundError,
    StudyHubAdmin,
    UploadedFile,
    get_admin,
)
from studyhub.core.aggregator import SourceKind, UploadItem
from studyhub.core.models import (
    COLLECTION_NAMES,
    Assignment,
    Book,
    Exam,
    Note,
    Notice,
    Record,
    UnknownCollectionError,
    UnknownFieldError,
    collection_for,
    editable_fields,
    get_collection,
)
from studyhub.core.pdf_inspector import PdfInspectionError
from studyhub.db.store import StoreError
from studyhub.storage.blobs import UploadError
from studyhub.utils.validators import MissingFieldsError

app = typer.Typer(
    name="studyhub",
    help="Administration console for the study hub: books, notes, assignments, notices, exams.",
    no_args_is_help=True,
)

console = Console()

ADMIN_ERRORS = (
    ConfigError,
    MissingFieldsError,
    UnknownCollectionError,
    UnknownFieldError,
    PdfInspectionError,
    DocumentNotFoundError,
    UploadError,
    StoreError,
)

KIND_COLORS = {
    SourceKind.BOOK: "blue",
    SourceKind.NOTE: "green",
    SourceKind.ASSIGNMENT: "yellow",
    SourceKind.NOTICE: "red",
}


def _admin_or_exit() -> StudyHubAdmin:
    """Get the admin service, or exit if the backend can't be built."""
    try:
        return get_admin()
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _fail(error: Exception) -> None:
    """Print an admin error and exit with code 1."""
    console.print(f"[red]✗ {escape(str(error))}[/red]")
    raise typer.Exit(code=1)


def _resolve_collection_or_exit(name: str) -> str:
    """Validate a collection name, or exit listing the valid ones."""
    try:
        return get_collection(name.lower()).name
    except UnknownCollectionError as e:
        _fail(e)


def _truncate(text: str, max_len: int = 60) -> str:
    """Truncate text for one-line display."""
    text = " ".join(text.split())
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def _record_summary(record: Record) -> str:
    """One-line description of a record for list output."""
    if isinstance(record, Book):
        return f"{escape(record.title)} [dim]• {record.subject} • {record.semester} Sem[/dim]"
    if isinstance(record, Note):
        return (
            f"{escape(record.title)} [dim]• Lec {record.lecture_no} • {record.subject}"
            f" • {record.semester} Sem[/dim]"
        )
    if isinstance(record, Assignment):
        return f"{escape(record.title)} [dim]• {record.subject.upper()} • due {record.due_date}[/dim]"
    if isinstance(record, Notice):
        return (
            f"{escape(record.title)} [dim]• {record.date}"
            f" • {escape(_truncate(record.description, 40))}[/dim]"
        )
    if isinstance(record, Exam):
        return (
            f"{record.subject} [dim]• {record.date} {record.time}"
            f" • {record.semester} Semester • Room: {record.room_display}[/dim]"
        )
    return str(record)


def _print_record(record: Record) -> None:
    """Print every field of a record."""
    info = collection_for(record)
    console.print(f"\n[bold]{info.kind}[/bold] {record.id}")
    for attr in info.wire_names:
        value = getattr(record, attr)
        if isinstance(record, Exam) and attr == "room":
            value = record.room_display
        shown = "-" if value in (None, "") else escape(str(value))
        console.print(f"  [dim]{attr}:[/dim] {shown}")
    created = record.created_at.strftime("%Y-%m-%d %H:%M") if record.created_at else "-"
    console.print(f"  [dim]created_at:[/dim] {created}")


def _print_upload(item: UploadItem) -> None:
    color = KIND_COLORS.get(item.kind, "white")
    console.print(
        f"  [{color}]{item.kind.value:<10}[/{color}] {escape(item.name)}"
        f" [dim]• {item.created_at.strftime('%Y-%m-%d')} • {item.id}[/dim]"
    )


def _read_file_or_exit(file: Path | None) -> UploadedFile | None:
    """Load the PDF to upload, or exit if the path doesn't exist."""
    if file is None:
        return None
    path = file.expanduser()
    if not path.is_file():
        console.print(f"[red]✗ File not found: {escape(str(path))}[/red]")
        raise typer.Exit(code=1)
    return UploadedFile.from_path(path)


# =============================================================================
# OVERVIEW
# =============================================================================


@app.command()
def dashboard(
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, help="Recent uploads to show (default from config)"
    ),
) -> None:
    """Show collection counts and the most recent uploads."""
    admin = _admin_or_exit()
    try:
        summary = admin.dashboard(limit=limit)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print("\n[bold]Dashboard Overview[/bold]\n")
    console.print(f"  [dim]Total Books:[/dim]  {summary.stats.get('books', 0)}")
    console.print(f"  [dim]Notes:[/dim]        {summary.stats.get('notes', 0)}")
    console.print(f"  [dim]Assignments:[/dim]  {summary.stats.get('assignments', 0)}")
    console.print(f"  [dim]Notices:[/dim]      {summary.stats.get('notices', 0)}")

    console.print("\n[bold]Recent Uploads[/bold]")
    if not summary.recent:
        console.print("  [yellow]No uploads yet[/yellow]")
        return
    for item in summary.recent:
        _print_upload(item)


@app.command()
def uploads(
    search: str = typer.Option("", "--search", "-s", help="Filter by name (case-insensitive)"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Show at most N"),
) -> None:
    """List all uploads across collections, newest first."""
    admin = _admin_or_exit()
    try:
        feed = admin.uploads_feed(search=search)
    except ADMIN_ERRORS as e:
        _fail(e)

    items = feed.visible[:limit] if limit else feed.visible
    if not items:
        console.print("[yellow]No uploads found.[/yellow]")
        return

    header = f"Uploads ({len(feed.visible)} of {len(feed)})" if search else f"Uploads ({len(feed)})"
    console.print(f"\n[bold]{header}:[/bold]\n")
    for item in items:
        _print_upload(item)


# =============================================================================
# BROWSE
# =============================================================================


@app.command(name="list")
def list_records(
    collection: str = typer.Argument(..., help=f"One of: {', '.join(COLLECTION_NAMES)}"),
) -> None:
    """List the records of a collection."""
    name = _resolve_collection_or_exit(collection)
    admin = _admin_or_exit()
    try:
        records = admin.list_records(name)
    except ADMIN_ERRORS as e:
        _fail(e)

    if not records:
        console.print(f"[yellow]No {name} yet[/yellow]")
        return

    console.print(f"\n[bold]{name.capitalize()} ({len(records)}):[/bold]\n")
    for record in records:
        console.print(f"  [bold]{record.id}[/bold]  {_record_summary(record)}")


@app.command()
def show(
    collection: str = typer.Argument(..., help=f"One of: {', '.join(COLLECTION_NAMES)}"),
    doc_id: str = typer.Argument(..., help="Document ID"),
) -> None:
    """Show every field of one record."""
    name = _resolve_collection_or_exit(collection)
    admin = _admin_or_exit()
    try:
        record = admin.get_record(name, doc_id)
    except ADMIN_ERRORS as e:
        _fail(e)

    _print_record(record)


# =============================================================================
# CREATE
# =============================================================================


@app.command(name="add-book")
def add_book(
    file: Path | None = typer.Argument(None, help="PDF file to upload"),
    title: str = typer.Option("", "--title", "-t", help="Book title"),
    semester: str = typer.Option("", "--semester", help="Semester, e.g. 3rd"),
    subject: str = typer.Option("", "--subject", help="Subject, e.g. CSE"),
) -> None:
    """Upload a book PDF and save the book."""
    upload = _read_file_or_exit(file)
    admin = _admin_or_exit()
    try:
        book = admin.create_book(title, semester, subject, upload)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print("[green]✓ The book has been uploaded and saved successfully![/green]")
    console.print(f"  [dim]id:[/dim]    {book.id}")
    console.print(f"  [dim]pages:[/dim] {book.pages}")
    console.print(f"  [dim]url:[/dim]   {book.file_url}")


@app.command(name="add-note")
def add_note(
    file: Path | None = typer.Argument(None, help="PDF file to upload"),
    title: str = typer.Option("", "--title", "-t", help="Lecture title"),
    semester: str = typer.Option("", "--semester", help="Semester, e.g. 3rd"),
    subject: str = typer.Option("", "--subject", help="Subject, e.g. CSE"),
    lecture_no: str = typer.Option("", "--lecture", "-l", help="Lecture number, e.g. 05"),
) -> None:
    """Upload lecture notes and save them."""
    upload = _read_file_or_exit(file)
    admin = _admin_or_exit()
    try:
        note = admin.create_note(title, semester, subject, lecture_no, upload)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print("[green]✓ Notes uploaded![/green]")
    console.print(f"  [dim]id:[/dim]    {note.id}")
    console.print(f"  [dim]pages:[/dim] {note.pages}")
    console.print(f"  [dim]url:[/dim]   {note.file_url}")


@app.command(name="add-assignment")
def add_assignment(
    title: str = typer.Option("", "--title", "-t", help="Assignment title"),
    subject: str = typer.Option("", "--subject", help="Subject"),
    due_date: str = typer.Option("", "--due", help="Due date, e.g. 'Jan 20, 2026'"),
    description: str = typer.Option("", "--description", "-d", help="Details (optional)"),
) -> None:
    """Post a new assignment."""
    admin = _admin_or_exit()
    try:
        assignment = admin.create_assignment(title, subject, due_date, description)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print("[green]✓ New assignment posted![/green]")
    console.print(f"  [dim]id:[/dim] {assignment.id}")


@app.command(name="add-notice")
def add_notice(
    title: str = typer.Option("", "--title", "-t", help="Notice title"),
    description: str = typer.Option("", "--description", "-d", help="Notice text"),
    date: str = typer.Option("", "--date", help="Display date"),
) -> None:
    """Publish a notice."""
    admin = _admin_or_exit()
    try:
        notice = admin.create_notice(title, description, date)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print("[green]✓ Notice published![/green]")
    console.print(f"  [dim]id:[/dim] {notice.id}")


@app.command(name="add-exam")
def add_exam(
    subject: str = typer.Option("", "--subject", help="Subject"),
    date: str = typer.Option("", "--date", help="Date, e.g. '12 March'"),
    time: str = typer.Option("", "--time", help="Time, e.g. '10:00 AM'"),
    semester: str = typer.Option("", "--semester", help="Semester"),
    room: str = typer.Option("", "--room", help="Room (optional)"),
) -> None:
    """Schedule an exam in the routine."""
    admin = _admin_or_exit()
    try:
        exam = admin.create_exam(subject, date, time, semester, room)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print("[green]✓ Exam scheduled successfully![/green]")
    console.print(f"  [dim]id:[/dim] {exam.id}")


# =============================================================================
# EDIT / DELETE
# =============================================================================


def _parse_changes(pairs: list[str]) -> dict[str, str]:
    """Parse ["field=value", ...] into a dict."""
    changes: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            console.print(f"[red]✗ Expected field=value, got '{escape(pair)}'[/red]")
            raise typer.Exit(code=1)
        key, value = pair.split("=", 1)
        changes[key.strip()] = value
    return changes


@app.command()
def edit(
    collection: str = typer.Argument(..., help=f"One of: {', '.join(COLLECTION_NAMES)}"),
    doc_id: str = typer.Argument(..., help="Document ID"),
    set_: list[str] | None = typer.Option(
        None, "--set", help="field=value to change (repeatable)"
    ),
) -> None:
    """Change fields on an existing record."""
    name = _resolve_collection_or_exit(collection)
    changes = _parse_changes(set_ or [])
    if not changes:
        fields = ", ".join(editable_fields(get_collection(name)))
        console.print("[yellow]Nothing to change.[/yellow]")
        console.print(f"  Use: studyhub edit {name} {escape(doc_id)} --set field=value")
        console.print(f"  [dim]fields:[/dim] {fields}")
        raise typer.Exit(code=1)

    admin = _admin_or_exit()
    try:
        record = admin.update_record(name, doc_id, changes)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print(f"[green]✓ {collection_for(record).kind} changes saved![/green]")
    _print_record(record)


@app.command()
def delete(
    collection: str = typer.Argument(..., help=f"One of: {', '.join(COLLECTION_NAMES)}"),
    doc_id: str = typer.Argument(..., help="Document ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a record (asks for confirmation)."""
    name = _resolve_collection_or_exit(collection)
    admin = _admin_or_exit()
    try:
        record = admin.get_record(name, doc_id)
    except ADMIN_ERRORS as e:
        _fail(e)

    if not yes:
        console.print(f"\nAbout to delete: {_record_summary(record)}")
        if not typer.confirm("Are you sure you want to delete this?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(code=0)

    try:
        admin.delete_record(name, doc_id)
    except ADMIN_ERRORS as e:
        _fail(e)

    console.print(f"[green]✓ Deleted {escape(doc_id)} from {name}[/green]")


# =============================================================================
# WEB API
# =============================================================================


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the admin web API with uvicorn."""
    import uvicorn

    console.print(f"[green]Serving Study Hub Admin API on http://{host}:{port}[/green]")
    uvicorn.run("studyhub.web.api:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
