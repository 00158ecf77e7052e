"""Route handlers for Web API."""

from studyhub.web.routes.health import router as health_router
from studyhub.web.routes.books import router as books_router
from studyhub.web.routes.notes import router as notes_router
from studyhub.web.routes.assignments import router as assignments_router
from studyhub.web.routes.notices import router as notices_router
from studyhub.web.routes.exams import router as exams_router
from studyhub.web.routes.dashboard import router as dashboard_router

__all__ = [
    "health_router",
    "books_router",
    "notes_router",
    "assignments_router",
    "notices_router",
    "exams_router",
    "dashboard_router",
]
