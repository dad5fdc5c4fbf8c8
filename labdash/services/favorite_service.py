"""Favorites — which projects a user has pinned.

Every operation passes through the identifier gate: a user id that is
not UUID-shaped yields ``[]`` or ``False`` instead of an error.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..core.identifiers import is_valid_uuid
from ..models.project import Project, UserFavorite
from ..repositories import FavoriteRepository, ProjectRepository

logger = logging.getLogger(__name__)


class FavoriteService:

    def __init__(self, db: Session):
        self.db = db
        self.repo = FavoriteRepository(db)
        self.project_repo = ProjectRepository(db)

    def get_user_favorites(self, user_id: str) -> List[str]:
        """Ids of the user's favorite projects."""
        if not is_valid_uuid(user_id):
            return []
        return self.repo.project_ids_for_user(user_id)

    def get_favorite_projects(self, user_id: str) -> List[Project]:
        if not is_valid_uuid(user_id):
            return []
        return self.repo.projects_for_user(user_id)

    def add_to_favorites(self, user_id: str, project_id: str) -> bool:
        """Pin a project. Idempotent; raises ProjectNotFoundError for unknown projects."""
        if not is_valid_uuid(user_id):
            return False
        self.project_repo.get_by_id(project_id)
        if self.repo.find(user_id, project_id) is not None:
            return True
        return self.repo.add(UserFavorite(user_id=user_id, project_id=project_id)) is not None

    def remove_from_favorites(self, user_id: str, project_id: str) -> bool:
        """Unpin a project. Removing a non-favorite is a successful no-op."""
        if not is_valid_uuid(user_id):
            return False
        favorite = self.repo.find(user_id, project_id)
        if favorite is None:
            return True
        return self.repo.delete(favorite)
