"""File store endpoints.

Two stores with the same shape:

    /api/public/folders, /api/public/files   — shared by every signed-in user
    /api/me/folders,     /api/me/files       — the caller's personal store

Uploads are multipart; at most the size limit is read into memory and stored
as a base64 data URI.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..exceptions import ConfirmationRequiredError, DatabaseError
from ..schemas.files import FileMoveRequest, PublicFileResponse, UserFileResponse
from ..schemas.folders import FolderCreate, PublicFolderResponse, UserFolderResponse
from ..services import PublicFileService, PublicFolderService, UserFileService, UserFolderService
from ..services.file_service import read_upload

logger = logging.getLogger(__name__)

public_router = APIRouter(prefix="/api/public", tags=["public files"])
personal_router = APIRouter(prefix="/api/me", tags=["my files"])


def _require_confirm(confirm: bool, resource_type: str, resource_id: str) -> None:
    if not confirm:
        raise ConfirmationRequiredError(resource_type, resource_id)


# -- Public folders ----------------------------------------------------------

@public_router.get("/folders", response_model=List[PublicFolderResponse])
def list_public_folders(db: Session = Depends(get_db), auth: AuthContext = Depends(require_auth)):
    return PublicFolderService(db).list_folders()


@public_router.post("/folders", response_model=PublicFolderResponse, status_code=201)
def create_public_folder(
    data: FolderCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    folder = PublicFolderService(db).create_folder(data.name, data.parent_id, created_by=auth.user_id)
    if folder is None:
        raise DatabaseError("Folder could not be created")
    return folder


@public_router.delete("/folders/{folder_id}", status_code=204)
def delete_public_folder(
    folder_id: str,
    confirm: bool = Query(False),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Delete the folder and every subfolder. Their files move to the root."""
    _require_confirm(confirm, "folder", folder_id)
    if not PublicFolderService(db).delete_folder(folder_id):
        raise DatabaseError("Folder could not be deleted")


# -- Public files ------------------------------------------------------------

@public_router.get("/files", response_model=List[PublicFileResponse])
def list_public_files(
    folder_id: Optional[str] = Query(None, description="Omit for the root folder"),
    q: Optional[str] = Query(None, description="Case-insensitive file name filter"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return PublicFileService(db).list_files(folder_id, q)


@public_router.get("/files/all", response_model=List[PublicFileResponse])
def list_all_public_files(
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Every public file regardless of folder, newest first."""
    return PublicFileService(db).list_all(q)


@public_router.post("/files", response_model=PublicFileResponse, status_code=201)
def upload_public_file(
    file: UploadFile = File(...),
    folder_id: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    stored = PublicFileService(db).upload(
        file.filename,
        read_upload(file.file),
        content_type=file.content_type,
        folder_id=folder_id,
        uploaded_by=auth.name or auth.email or None,
    )
    if stored is None:
        raise DatabaseError("File could not be stored")
    return stored


@public_router.put("/files/{file_id}/move", response_model=PublicFileResponse)
def move_public_file(
    file_id: str,
    body: FileMoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    stored = PublicFileService(db).move_to_folder(file_id, body.folder_id)
    if stored is None:
        raise DatabaseError("File could not be moved")
    return stored


@public_router.delete("/files/{file_id}", status_code=204)
def delete_public_file(
    file_id: str,
    confirm: bool = Query(False),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    _require_confirm(confirm, "file", file_id)
    if not PublicFileService(db).delete_file(file_id):
        raise DatabaseError("File could not be deleted")


# -- Personal folders --------------------------------------------------------

@personal_router.get("/folders", response_model=List[UserFolderResponse])
def list_my_folders(db: Session = Depends(get_db), auth: AuthContext = Depends(require_auth)):
    return UserFolderService(db).list_folders(auth.user_id)


@personal_router.post("/folders", response_model=UserFolderResponse, status_code=201)
def create_my_folder(
    data: FolderCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    folder = UserFolderService(db).create_folder(auth.user_id, data.name, data.parent_id)
    if folder is None:
        raise DatabaseError("Folder could not be created")
    return folder


@personal_router.delete("/folders/{folder_id}", status_code=204)
def delete_my_folder(
    folder_id: str,
    confirm: bool = Query(False),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    _require_confirm(confirm, "folder", folder_id)
    if not UserFolderService(db).delete_folder(auth.user_id, folder_id):
        raise DatabaseError("Folder could not be deleted")


# -- Personal files ----------------------------------------------------------

@personal_router.get("/files", response_model=List[UserFileResponse])
def list_my_files(
    folder_id: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return UserFileService(db).list_files(auth.user_id, folder_id, q)


@personal_router.post("/files", response_model=UserFileResponse, status_code=201)
def upload_my_file(
    file: UploadFile = File(...),
    folder_id: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    stored = UserFileService(db).upload(
        auth.user_id, file.filename, read_upload(file.file),
        content_type=file.content_type, folder_id=folder_id,
    )
    if stored is None:
        raise DatabaseError("File could not be stored")
    return stored


@personal_router.put("/files/{file_id}/move", response_model=UserFileResponse)
def move_my_file(
    file_id: str,
    body: FileMoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    stored = UserFileService(db).move_to_folder(auth.user_id, file_id, body.folder_id)
    if stored is None:
        raise DatabaseError("File could not be moved")
    return stored


@personal_router.delete("/files/{file_id}", status_code=204)
def delete_my_file(
    file_id: str,
    confirm: bool = Query(False),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    _require_confirm(confirm, "file", file_id)
    if not UserFileService(db).delete_file(auth.user_id, file_id):
        raise DatabaseError("File could not be deleted")
