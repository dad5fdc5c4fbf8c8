"""Folder trees for the shared store and the personal store.

Folders only know their parent. Deleting a folder removes its whole
subtree; files that lived anywhere in that subtree move to the root of
their store.
"""

import logging
from typing import Callable, List, Optional, Sequence

import sqlalchemy.exc
from sqlalchemy.orm import Session

from ..core.identifiers import is_valid_uuid
from ..exceptions import FolderNotFoundError, ValidationError
from ..models.folders import Folder, PublicFolder
from ..repositories import (
    PublicFileRepository,
    PublicFolderRepository,
    UserFileRepository,
    UserFolderRepository,
)

logger = logging.getLogger(__name__)


def collect_subtree(root, children_of: Callable[[str], Sequence]) -> list:
    """Breadth-first list of ``root`` and all its descendants (root first).

    Tolerates cycles in the parent pointers.
    """
    ordered = [root]
    seen = {root.id}
    i = 0
    while i < len(ordered):
        for child in children_of(ordered[i].id):
            if child.id not in seen:
                seen.add(child.id)
                ordered.append(child)
        i += 1
    return ordered


def _delete_subtree(db: Session, folders: list, files: list) -> bool:
    try:
        for stored in files:
            stored.folder_id = None
        db.flush()
        # Deepest first so no row outlives its parent.
        for folder in reversed(folders):
            db.delete(folder)
            db.flush()
        db.commit()
    except sqlalchemy.exc.SQLAlchemyError as e:
        logger.error("Folder delete failed: %s", e)
        db.rollback()
        return False
    return True


class PublicFolderService:

    def __init__(self, db: Session):
        self.db = db
        self.repo = PublicFolderRepository(db)
        self.file_repo = PublicFileRepository(db)

    def list_folders(self) -> List[PublicFolder]:
        return self.repo.list_all()

    def create_folder(
        self, name: str, parent_id: Optional[str] = None, created_by: Optional[str] = None
    ) -> Optional[PublicFolder]:
        if parent_id:
            self.repo.get_by_id(parent_id)
        return self.repo.add(PublicFolder(name=name, parent_id=parent_id or None, created_by=created_by))

    def delete_folder(self, folder_id: str) -> bool:
        root = self.repo.get_by_id(folder_id)
        subtree = collect_subtree(root, self.repo.children)
        files = self.file_repo.list_in_folders([f.id for f in subtree])
        deleted = _delete_subtree(self.db, subtree, files)
        if deleted:
            logger.info(
                "Deleted public folder subtree",
                extra={"folder_id": folder_id, "folders": len(subtree), "files_moved": len(files)},
            )
        return deleted


class UserFolderService:

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserFolderRepository(db)
        self.file_repo = UserFileRepository(db)

    def list_folders(self, user_id: str) -> List[Folder]:
        if not is_valid_uuid(user_id):
            return []
        return self.repo.list_for_user(user_id)

    def create_folder(self, user_id: str, name: str, parent_id: Optional[str] = None) -> Optional[Folder]:
        if not is_valid_uuid(user_id):
            return None
        if parent_id:
            parent = self._owned(user_id, parent_id)
            if parent is None:
                raise ValidationError(f"Parent folder not found: {parent_id}", field="parent_id")
        return self.repo.add(Folder(user_id=user_id, name=name, parent_id=parent_id or None))

    def delete_folder(self, user_id: str, folder_id: str) -> bool:
        if not is_valid_uuid(user_id):
            return False
        root = self._owned(user_id, folder_id)
        if root is None:
            raise FolderNotFoundError(folder_id)
        subtree = collect_subtree(root, self.repo.children)
        files = self.file_repo.list_in_folders([f.id for f in subtree])
        return _delete_subtree(self.db, subtree, files)

    def _owned(self, user_id: str, folder_id: str) -> Optional[Folder]:
        folder = self.repo.get_by_id_optional(folder_id)
        if folder is None or folder.user_id != user_id:
            return None
        return folder
