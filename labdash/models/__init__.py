"""Database models."""

from .project import Project, UserFavorite
from .user import User
from .event import Event
from .files import PublicFile, UserFile
from .folders import PublicFolder, Folder

__all__ = [
    "Project", "UserFavorite",
    "User",
    "Event",
    "PublicFile", "UserFile",
    "PublicFolder", "Folder",
]
