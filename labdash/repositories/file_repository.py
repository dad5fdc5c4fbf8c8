"""Repositories for the shared and personal file stores."""

from typing import List, Optional

from .base import BaseRepository
from ..models.files import PublicFile, UserFile
from ..exceptions import StoredFileNotFoundError


class PublicFileRepository(BaseRepository[PublicFile]):
    model_class = PublicFile
    not_found_error = StoredFileNotFoundError

    def list_in_folder(self, folder_id: Optional[str] = None) -> List[PublicFile]:
        """Files directly in ``folder_id``; ``None`` means the root."""
        query = self.db.query(PublicFile)
        if folder_id:
            query = query.filter(PublicFile.folder_id == folder_id)
        else:
            query = query.filter(PublicFile.folder_id.is_(None))
        return self._fetch_all(query.order_by(PublicFile.created_at.desc()))

    def list_all(self) -> List[PublicFile]:
        return self._fetch_all(self.db.query(PublicFile).order_by(PublicFile.created_at.desc()))

    def list_in_folders(self, folder_ids: List[str]) -> List[PublicFile]:
        if not folder_ids:
            return []
        return self._fetch_all(self.db.query(PublicFile).filter(PublicFile.folder_id.in_(folder_ids)))


class UserFileRepository(BaseRepository[UserFile]):
    model_class = UserFile
    not_found_error = StoredFileNotFoundError

    def list_in_folder(self, user_id: str, folder_id: Optional[str] = None) -> List[UserFile]:
        query = self.db.query(UserFile).filter(UserFile.user_id == user_id)
        if folder_id:
            query = query.filter(UserFile.folder_id == folder_id)
        else:
            query = query.filter(UserFile.folder_id.is_(None))
        return self._fetch_all(query.order_by(UserFile.created_at.desc()))

    def list_in_folders(self, folder_ids: List[str]) -> List[UserFile]:
        if not folder_ids:
            return []
        return self._fetch_all(self.db.query(UserFile).filter(UserFile.folder_id.in_(folder_ids)))
