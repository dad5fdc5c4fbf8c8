"""Repositories for shared and personal folders."""

from typing import List

from .base import BaseRepository
from ..models.folders import PublicFolder, Folder
from ..exceptions import FolderNotFoundError


class PublicFolderRepository(BaseRepository[PublicFolder]):
    model_class = PublicFolder
    not_found_error = FolderNotFoundError

    def list_all(self) -> List[PublicFolder]:
        return self._fetch_all(self.db.query(PublicFolder).order_by(PublicFolder.name.asc()))

    def children(self, folder_id: str) -> List[PublicFolder]:
        return self._fetch_all(
            self.db.query(PublicFolder).filter(PublicFolder.parent_id == folder_id)
        )


class UserFolderRepository(BaseRepository[Folder]):
    model_class = Folder
    not_found_error = FolderNotFoundError

    def list_for_user(self, user_id: str) -> List[Folder]:
        return self._fetch_all(
            self.db.query(Folder).filter(Folder.user_id == user_id).order_by(Folder.name.asc())
        )

    def children(self, folder_id: str) -> List[Folder]:
        return self._fetch_all(self.db.query(Folder).filter(Folder.parent_id == folder_id))
