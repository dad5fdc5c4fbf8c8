"""API routes."""

from .auth_routes import router as auth_router
from .projects import router as projects_router, favorites_router
from .events import router as events_router, calendar_router
from .files import public_router, personal_router
from .realtime import router as realtime_router

__all__ = [
    "auth_router",
    "projects_router",
    "favorites_router",
    "events_router",
    "calendar_router",
    "public_router",
    "personal_router",
    "realtime_router",
]
