"""Ready-made views and subscriptions over the store's collections.

Each fetch opens its own short-lived session, so a refresh triggered from
another session's commit never shares state with it. Rows are converted
to response models before they reach the cache.

``subscribe_to_*`` functions register a listener only (the caller already
has its first page of data) and return ``unsubscribe``. ``*_view``
factories return an inactive CollectionView that also does the initial
fetch when activated.
"""

import logging
from typing import Callable, List, Optional

from ..core.identifiers import is_valid_uuid
from ..database import SessionLocal
from ..schemas import (
    EventResponse,
    ProjectResponse,
    PublicFileResponse,
    PublicFolderResponse,
    UserFileResponse,
    UserFolderResponse,
)
from ..services import (
    EventService,
    FavoriteService,
    ProjectService,
    PublicFileService,
    PublicFolderService,
    UserFileService,
    UserFolderService,
)
from .collection_view import CollectionView
from .hub import ChangeHub, change_hub
from .reorder import ReorderController

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], object]


def _fetcher(query: Callable, schema=None, session_factory: SessionFactory = SessionLocal) -> Callable[[], List]:
    def fetch() -> List:
        db = session_factory()
        try:
            rows = query(db)
            if schema is None:
                return list(rows)
            return [schema.model_validate(row) for row in rows]
        finally:
            db.close()
    fetch.__name__ = getattr(query, "__name__", "fetch")
    return fetch


# --- fetchers ---

def fetch_projects(user_id: Optional[str] = None, session_factory: SessionFactory = SessionLocal):
    def projects(db):
        return ProjectService(db).list_projects(user_id)
    return _fetcher(projects, ProjectResponse, session_factory)


def fetch_favorites(user_id: str, session_factory: SessionFactory = SessionLocal):
    def favorites(db):
        return FavoriteService(db).get_user_favorites(user_id)
    return _fetcher(favorites, None, session_factory)


def fetch_user_events(user_id: str, session_factory: SessionFactory = SessionLocal):
    def events(db):
        return EventService(db).get_user_events(user_id)
    return _fetcher(events, EventResponse, session_factory)


def fetch_user_files(user_id: str, folder_id: Optional[str] = None, session_factory: SessionFactory = SessionLocal):
    def user_files(db):
        return UserFileService(db).list_files(user_id, folder_id)
    return _fetcher(user_files, UserFileResponse, session_factory)


def fetch_user_folders(user_id: str, session_factory: SessionFactory = SessionLocal):
    def user_folders(db):
        return UserFolderService(db).list_folders(user_id)
    return _fetcher(user_folders, UserFolderResponse, session_factory)


def fetch_public_files(folder_id: Optional[str] = None, session_factory: SessionFactory = SessionLocal):
    def public_files(db):
        return PublicFileService(db).list_files(folder_id)
    return _fetcher(public_files, PublicFileResponse, session_factory)


def fetch_all_public_files(session_factory: SessionFactory = SessionLocal):
    def all_public_files(db):
        return PublicFileService(db).list_all()
    return _fetcher(all_public_files, PublicFileResponse, session_factory)


def fetch_public_folders(session_factory: SessionFactory = SessionLocal):
    def public_folders(db):
        return PublicFolderService(db).list_folders()
    return _fetcher(public_folders, PublicFolderResponse, session_factory)


# --- views ---

def projects_view(user_id: Optional[str] = None, hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs) -> CollectionView:
    """All projects; favorites first and re-sorted on favorite changes for a user."""
    view = CollectionView(fetch_projects(user_id, **kwargs), hub=hub, on_refresh=on_refresh, name="projects").watch("projects")
    if user_id:
        view.watch("user_favorites", owner_id=user_id)
    return view


def favorites_view(user_id: str, hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs) -> CollectionView:
    return CollectionView(fetch_favorites(user_id, **kwargs), hub=hub, on_refresh=on_refresh, name="favorites").watch(
        "user_favorites", owner_id=user_id
    )


def events_view(user_id: str, hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs) -> CollectionView:
    return CollectionView(fetch_user_events(user_id, **kwargs), hub=hub, on_refresh=on_refresh, name="events").watch(
        "events", owner_id=user_id
    )


def user_files_view(user_id: str, folder_id: Optional[str] = None, hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs):
    return CollectionView(fetch_user_files(user_id, folder_id, **kwargs), hub=hub, on_refresh=on_refresh, name="user_files").watch(
        "user_files", owner_id=user_id
    )


def user_folders_view(user_id: str, hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs) -> CollectionView:
    return CollectionView(fetch_user_folders(user_id, **kwargs), hub=hub, on_refresh=on_refresh, name="folders").watch(
        "folders", owner_id=user_id
    )


def public_files_view(folder_id: Optional[str] = None, hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs):
    return CollectionView(fetch_public_files(folder_id, **kwargs), hub=hub, on_refresh=on_refresh, name="public_files").watch(
        "public_files"
    )


def all_public_files_view(hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs) -> CollectionView:
    return CollectionView(fetch_all_public_files(**kwargs), hub=hub, on_refresh=on_refresh, name="all_public_files").watch(
        "public_files"
    )


def public_folders_view(hub: Optional[ChangeHub] = None, on_refresh=None, **kwargs) -> CollectionView:
    return CollectionView(fetch_public_folders(**kwargs), hub=hub, on_refresh=on_refresh, name="public_folders").watch(
        "public_folders"
    )


# --- listener-only subscriptions ---

def _noop() -> None:
    return None


def _subscribe(table: str, fetch: Callable[[], List], callback, owner_id=None, hub=None):
    hub = hub if hub is not None else change_hub
    predicate = None
    if owner_id is not None:
        def predicate(signal):
            return signal.user_id == owner_id

    def on_change(signal):
        callback(fetch())

    return hub.subscribe(table, on_change, predicate)


def subscribe_to_projects(callback, user_id: Optional[str] = None, hub: Optional[ChangeHub] = None):
    return _subscribe("projects", fetch_projects(user_id), callback, hub=hub)


def subscribe_to_favorites(user_id: str, callback, hub: Optional[ChangeHub] = None):
    if not is_valid_uuid(user_id):
        return _noop
    return _subscribe("user_favorites", fetch_favorites(user_id), callback, owner_id=user_id, hub=hub)


def subscribe_to_user_events(user_id: str, callback, hub: Optional[ChangeHub] = None):
    if not is_valid_uuid(user_id):
        return _noop
    return _subscribe("events", fetch_user_events(user_id), callback, owner_id=user_id, hub=hub)


def subscribe_to_user_files(user_id: str, callback, hub: Optional[ChangeHub] = None):
    if not is_valid_uuid(user_id):
        return _noop
    return _subscribe("user_files", fetch_user_files(user_id), callback, owner_id=user_id, hub=hub)


def subscribe_to_user_folders(user_id: str, callback, hub: Optional[ChangeHub] = None):
    if not is_valid_uuid(user_id):
        return _noop
    return _subscribe("folders", fetch_user_folders(user_id), callback, owner_id=user_id, hub=hub)


def subscribe_to_public_files(callback, hub: Optional[ChangeHub] = None):
    return _subscribe("public_files", fetch_public_files(), callback, hub=hub)


def subscribe_to_all_public_files(callback, hub: Optional[ChangeHub] = None):
    return _subscribe("public_files", fetch_all_public_files(), callback, hub=hub)


def subscribe_to_public_folders(callback, hub: Optional[ChangeHub] = None):
    return _subscribe("public_folders", fetch_public_folders(), callback, hub=hub)


# --- reorder ---

def persist_project_order(project_id: str, sort_order: int, session_factory: SessionFactory = SessionLocal) -> bool:
    """Write one project's sort_order in its own session and transaction."""
    db = session_factory()
    try:
        return ProjectService(db).update_sort_order(project_id, sort_order)
    finally:
        db.close()


def project_reorder(view: CollectionView, session_factory: SessionFactory = SessionLocal, **kwargs) -> ReorderController:
    def persist(project_id: str, sort_order: int) -> bool:
        return persist_project_order(project_id, sort_order, session_factory)
    return ReorderController(view, persist, **kwargs)
