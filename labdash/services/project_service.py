"""Project service — listing, CRUD and manual ordering.

Listings for a user are favorites-first: the base order (sort_order
ascending, then newest first) is stably partitioned so pinned projects
come first and both groups keep their relative order.
"""

import logging
from typing import Iterable, List, Optional, Sequence, TypeVar

from sqlalchemy.orm import Session

from ..core.identifiers import is_valid_uuid
from ..exceptions import ValidationError
from ..models.project import Project
from ..repositories import ProjectRepository, FavoriteRepository
from ..schemas.project import ProjectCreate, ProjectUpdate, ProjectOrderItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition_favorites(projects: Sequence[T], favorite_ids: Iterable[str]) -> List[T]:
    """Stable partition: favorites first, each group in its original order.

    Works on anything with an ``id`` attribute (ORM rows, response models).
    """
    favorites = set(favorite_ids)
    pinned = [p for p in projects if p.id in favorites]
    rest = [p for p in projects if p.id not in favorites]
    return pinned + rest


class ProjectService:
    """Business logic for projects.

    Public methods:
        list_projects         -- all projects, favorites first for a user
        get_project           -- one project or ProjectNotFoundError
        create_project        -- insert; appended to the end by default
        update_project        -- partial update
        delete_project        -- remove (favorites cascade)
        update_sort_order     -- persist one row's position
        update_projects_order -- persist a full reorder, one row at a time
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProjectRepository(db)
        self.favorite_repo = FavoriteRepository(db)

    def list_projects(self, user_id: Optional[str] = None) -> List[Project]:
        projects = self.repo.list_ordered()
        if user_id and is_valid_uuid(user_id):
            favorite_ids = self.favorite_repo.project_ids_for_user(user_id)
            return partition_favorites(projects, favorite_ids)
        return projects

    def get_project(self, project_id: str) -> Project:
        return self.repo.get_by_id(project_id)

    def create_project(self, data: ProjectCreate) -> Optional[Project]:
        values = data.model_dump()
        if values.get("sort_order") is None:
            values["sort_order"] = self.repo.count()
        project = self.repo.add(Project(**values))
        if project is not None:
            logger.info("Created project %s", project.id, extra={"project_id": project.id})
        return project

    def update_project(self, project_id: str, data: ProjectUpdate) -> Optional[Project]:
        project = self.repo.get_by_id(project_id)
        changes = data.model_dump(exclude_unset=True)
        start = changes.get("start_date", project.start_date)
        end = changes.get("end_date", project.end_date)
        if start and end and end < start:
            raise ValidationError("end_date must not be before start_date", field="end_date")
        for field, value in changes.items():
            setattr(project, field, value)
        return self.repo.save(project)

    def delete_project(self, project_id: str) -> bool:
        project = self.repo.get_by_id(project_id)
        # Favorites go with the project; delete them through the ORM so
        # their subscribers are notified as well.
        for favorite in self.db.query(self.favorite_repo.model_class).filter_by(project_id=project_id):
            self.db.delete(favorite)
        deleted = self.repo.delete(project)
        if deleted:
            logger.info("Deleted project %s", project_id, extra={"project_id": project_id})
        return deleted

    def update_sort_order(self, project_id: str, sort_order: int) -> bool:
        return self.repo.set_sort_order(project_id, sort_order)

    def update_projects_order(self, items: Sequence[ProjectOrderItem]) -> bool:
        """Apply a reorder row by row.

        Each row is its own transaction and there is no rollback: rows
        written before a failure stay written. Returns True only if every
        row was updated.
        """
        ok = True
        for item in items:
            if not self.update_sort_order(item.id, item.sort_order):
                ok = False
        if not ok:
            logger.warning("Project reorder partially failed", extra={"rows": len(items)})
        return ok
