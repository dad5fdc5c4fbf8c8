"""Repositories for projects and user favorites."""

import logging
from typing import List, Optional

import sqlalchemy.exc

from .base import BaseRepository
from ..models.project import Project, UserFavorite
from ..exceptions import ProjectNotFoundError

logger = logging.getLogger(__name__)


class ProjectRepository(BaseRepository[Project]):
    model_class = Project
    not_found_error = ProjectNotFoundError

    def list_ordered(self) -> List[Project]:
        """All projects, manual order first, newest first among ties."""
        return self._fetch_all(
            self.db.query(Project).order_by(Project.sort_order.asc(), Project.created_at.desc())
        )

    def count(self) -> int:
        return self.db.query(Project).count()

    def set_sort_order(self, project_id: str, sort_order: int) -> bool:
        """Persist one row's position in its own transaction."""
        project = self.get_by_id_optional(project_id)
        if project is None:
            logger.warning("Reorder skipped missing project %s", project_id)
            return False
        project.sort_order = sort_order
        return self.save(project) is not None


class FavoriteRepository(BaseRepository[UserFavorite]):
    model_class = UserFavorite
    not_found_error = ProjectNotFoundError

    def project_ids_for_user(self, user_id: str) -> List[str]:
        rows = self._fetch_all(
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.created_at)
        )
        return [row.project_id for row in rows]

    def find(self, user_id: str, project_id: str) -> Optional[UserFavorite]:
        return (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id, UserFavorite.project_id == project_id)
            .first()
        )

    def projects_for_user(self, user_id: str) -> List[Project]:
        """Favorited projects in the order they were favorited."""
        try:
            return (
                self.db.query(Project)
                .join(UserFavorite, UserFavorite.project_id == Project.id)
                .filter(UserFavorite.user_id == user_id)
                .order_by(UserFavorite.created_at)
                .all()
            )
        except sqlalchemy.exc.SQLAlchemyError as e:
            logger.error("Favorite project lookup failed: %s", e)
            self.db.rollback()
            return []
