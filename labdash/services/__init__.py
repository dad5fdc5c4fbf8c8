"""Business logic services."""

from .project_service import ProjectService, partition_favorites
from .favorite_service import FavoriteService
from .event_service import EventService
from .calendar_service import CalendarService, build_month
from .file_service import PublicFileService, UserFileService
from .folder_service import PublicFolderService, UserFolderService

__all__ = [
    "ProjectService",
    "partition_favorites",
    "FavoriteService",
    "EventService",
    "CalendarService",
    "build_month",
    "PublicFileService",
    "UserFileService",
    "PublicFolderService",
    "UserFolderService",
]
