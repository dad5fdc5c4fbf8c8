"""Data access repositories."""

from .base import BaseRepository
from .project_repository import ProjectRepository, FavoriteRepository
from .event_repository import EventRepository
from .file_repository import PublicFileRepository, UserFileRepository
from .folder_repository import PublicFolderRepository, UserFolderRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "FavoriteRepository",
    "EventRepository",
    "PublicFileRepository",
    "UserFileRepository",
    "PublicFolderRepository",
    "UserFolderRepository",
]
