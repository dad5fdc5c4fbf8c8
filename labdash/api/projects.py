"""Project and favorite endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, optional_auth, require_auth
from ..database import get_db
from ..exceptions import ConfirmationRequiredError, DatabaseError
from ..schemas.project import ProjectCreate, ProjectOrderRequest, ProjectResponse, ProjectUpdate
from ..services import FavoriteService, ProjectService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])
favorites_router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    db: Session = Depends(get_db),
    auth: Optional[AuthContext] = Depends(optional_auth),
):
    """All projects in display order; the caller's favorites come first."""
    return ProjectService(db).list_projects(auth.user_id if auth else None)


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    project = ProjectService(db).create_project(data)
    if project is None:
        raise DatabaseError("Project could not be created")
    return project


# Registered before /{project_id} so "order" is not taken for an id.
@router.put("/order")
def update_projects_order(
    body: ProjectOrderRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Persist a manual reorder. Rows are written one by one; there is no rollback."""
    ok = ProjectService(db).update_projects_order(body.items)
    return {"success": ok, "updated": len(body.items)}


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, db: Session = Depends(get_db)):
    return ProjectService(db).get_project(project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    project = ProjectService(db).update_project(project_id, data)
    if project is None:
        raise DatabaseError("Project could not be updated")
    return project


@router.delete("/{project_id}", status_code=204)
def delete_project(
    project_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    if not confirm:
        raise ConfirmationRequiredError("project", project_id)
    if not ProjectService(db).delete_project(project_id):
        raise DatabaseError("Project could not be deleted")


# -- Favorites -------------------------------------------------------------

@favorites_router.get("", response_model=List[str])
def list_favorite_ids(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return FavoriteService(db).get_user_favorites(auth.user_id)


@favorites_router.get("/projects", response_model=List[ProjectResponse])
def list_favorite_projects(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return FavoriteService(db).get_favorite_projects(auth.user_id)


@favorites_router.put("/{project_id}")
def add_favorite(
    project_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return {"success": FavoriteService(db).add_to_favorites(auth.user_id, project_id)}


@favorites_router.delete("/{project_id}")
def remove_favorite(
    project_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return {"success": FavoriteService(db).remove_from_favorites(auth.user_id, project_id)}
