"""Pydantic schemas for API validation."""

from .project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectOrderItem,
    ProjectOrderRequest,
)
from .event import EventCreate, EventUpdate, EventResponse
from .files import PublicFileResponse, UserFileResponse, FileMoveRequest
from .folders import FolderCreate, PublicFolderResponse, UserFolderResponse
from .calendar import CalendarDayResponse, CalendarMonthResponse

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectOrderItem",
    "ProjectOrderRequest",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "PublicFileResponse",
    "UserFileResponse",
    "FileMoveRequest",
    "FolderCreate",
    "PublicFolderResponse",
    "UserFolderResponse",
    "CalendarDayResponse",
    "CalendarMonthResponse",
]
