"""File stores — the shared public store and each user's personal store.

Uploads are read into memory up to the size limit and kept inline as a
base64 data URI, the same shape a browser's ``FileReader.readAsDataURL``
produces. There is no chunking and no deduplication.
"""

import base64
import logging
from typing import BinaryIO, List, Optional, Sequence, TypeVar

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.identifiers import is_valid_uuid
from ..exceptions import FolderNotFoundError, PayloadTooLargeError, StoredFileNotFoundError, ValidationError
from ..models.files import PublicFile, UserFile
from ..repositories import (
    PublicFileRepository,
    PublicFolderRepository,
    UserFileRepository,
    UserFolderRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
ANONYMOUS_UPLOADER = "anonymous"

F = TypeVar("F")


def encode_data_uri(content: bytes, content_type: Optional[str] = None) -> str:
    """``data:<type>;base64,<payload>`` for ``content``."""
    media_type = (content_type or "").strip() or DEFAULT_CONTENT_TYPE
    return f"data:{media_type};base64,{base64.b64encode(content).decode('ascii')}"


def filter_by_name(files: Sequence[F], term: Optional[str]) -> List[F]:
    """Case-insensitive substring match on ``file_name``. Empty term keeps everything."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(files)
    return [f for f in files if needle in f.file_name.lower()]


def read_upload(stream: BinaryIO) -> bytes:
    """Read at most one byte past the size limit, enough to tell it was exceeded."""
    return stream.read(settings.max_upload_bytes + 1)


def _validated_upload(file_name: Optional[str], content: bytes) -> str:
    name = (file_name or "").strip()
    if not name:
        raise ValidationError("File name required", field="file")
    if len(content) > settings.max_upload_bytes:
        raise PayloadTooLargeError(settings.max_upload_bytes)
    return name


class PublicFileService:
    """The shared store. No identifier gate: anyone signed in may use it."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PublicFileRepository(db)
        self.folder_repo = PublicFolderRepository(db)

    def list_files(self, folder_id: Optional[str] = None, search: Optional[str] = None) -> List[PublicFile]:
        return filter_by_name(self.repo.list_in_folder(folder_id), search)

    def list_all(self, search: Optional[str] = None) -> List[PublicFile]:
        """Every public file regardless of folder, newest first."""
        return filter_by_name(self.repo.list_all(), search)

    def upload(
        self,
        file_name: Optional[str],
        content: bytes,
        content_type: Optional[str] = None,
        folder_id: Optional[str] = None,
        uploaded_by: Optional[str] = None,
    ) -> Optional[PublicFile]:
        name = _validated_upload(file_name, content)
        if folder_id:
            self.folder_repo.get_by_id(folder_id)
        stored = self.repo.add(PublicFile(
            file_name=name,
            file_size=len(content),
            file_type=(content_type or "").strip() or DEFAULT_CONTENT_TYPE,
            file_url=encode_data_uri(content, content_type),
            folder_id=folder_id or None,
            uploaded_by=uploaded_by or ANONYMOUS_UPLOADER,
        ))
        if stored is not None:
            logger.info("Stored public file", extra={"file_id": stored.id, "size": stored.file_size})
        return stored

    def move_to_folder(self, file_id: str, folder_id: Optional[str]) -> Optional[PublicFile]:
        stored = self.repo.get_by_id(file_id)
        if folder_id:
            self.folder_repo.get_by_id(folder_id)
        stored.folder_id = folder_id or None
        return self.repo.save(stored)

    def delete_file(self, file_id: str) -> bool:
        return self.repo.delete(self.repo.get_by_id(file_id))


class UserFileService:
    """A user's personal store, behind the identifier gate."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserFileRepository(db)
        self.folder_repo = UserFolderRepository(db)

    def list_files(
        self, user_id: str, folder_id: Optional[str] = None, search: Optional[str] = None
    ) -> List[UserFile]:
        if not is_valid_uuid(user_id):
            return []
        return filter_by_name(self.repo.list_in_folder(user_id, folder_id), search)

    def upload(
        self,
        user_id: str,
        file_name: Optional[str],
        content: bytes,
        content_type: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> Optional[UserFile]:
        if not is_valid_uuid(user_id):
            return None
        name = _validated_upload(file_name, content)
        if folder_id:
            self._owned_folder(user_id, folder_id)
        return self.repo.add(UserFile(
            user_id=user_id,
            file_name=name,
            file_size=len(content),
            file_type=(content_type or "").strip() or DEFAULT_CONTENT_TYPE,
            file_url=encode_data_uri(content, content_type),
            folder_id=folder_id or None,
        ))

    def move_to_folder(self, user_id: str, file_id: str, folder_id: Optional[str]) -> Optional[UserFile]:
        if not is_valid_uuid(user_id):
            return None
        stored = self._owned_file(user_id, file_id)
        if folder_id:
            self._owned_folder(user_id, folder_id)
        stored.folder_id = folder_id or None
        return self.repo.save(stored)

    def delete_file(self, user_id: str, file_id: str) -> bool:
        if not is_valid_uuid(user_id):
            return False
        return self.repo.delete(self._owned_file(user_id, file_id))

    def _owned_file(self, user_id: str, file_id: str) -> UserFile:
        stored = self.repo.get_by_id(file_id)
        if stored.user_id != user_id:
            raise StoredFileNotFoundError(file_id)
        return stored

    def _owned_folder(self, user_id: str, folder_id: str) -> None:
        folder = self.folder_repo.get_by_id(folder_id)
        if folder.user_id != user_id:
            raise FolderNotFoundError(folder_id)
