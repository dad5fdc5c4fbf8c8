"""Service-level tests for project listing, favorites and the identifier gate."""

import uuid
from types import SimpleNamespace

from labdash.models import Project, UserFavorite
from labdash.schemas.project import ProjectCreate, ProjectOrderItem
from labdash.services import EventService, FavoriteService, ProjectService, partition_favorites


def _p(pid):
    return SimpleNamespace(id=pid)


class TestPartitionFavorites:

    def test_favorite_moves_to_front(self):
        projects = [_p("p1"), _p("p2"), _p("p3"), _p("p4")]
        result = partition_favorites(projects, {"p3"})
        assert [p.id for p in result] == ["p3", "p1", "p2", "p4"]

    def test_both_groups_keep_relative_order(self):
        projects = [_p("p1"), _p("p2"), _p("p3"), _p("p4"), _p("p5")]
        result = partition_favorites(projects, ["p4", "p2"])
        assert [p.id for p in result] == ["p2", "p4", "p1", "p3", "p5"]

    def test_no_favorites_is_identity(self):
        projects = [_p("p1"), _p("p2")]
        assert partition_favorites(projects, []) == projects


class TestProjectService:

    def test_base_order_is_sort_order_then_newest(self, db):
        service = ProjectService(db)
        older = service.create_project(ProjectCreate(title="Older", sort_order=0))
        newer = service.create_project(ProjectCreate(title="Newer", sort_order=0))
        last = service.create_project(ProjectCreate(title="Last", sort_order=5))
        assert [p.id for p in service.list_projects()] == [newer.id, older.id, last.id]

    def test_invalid_user_id_gets_base_order(self, db):
        service = ProjectService(db)
        a = service.create_project(ProjectCreate(title="A"))
        b = service.create_project(ProjectCreate(title="B"))
        db.add(UserFavorite(user_id="admin-default", project_id=b.id))
        db.commit()
        assert [p.id for p in service.list_projects("admin-default")] == [a.id, b.id]

    def test_update_projects_order_returns_false_on_partial_failure(self, db):
        service = ProjectService(db)
        a = service.create_project(ProjectCreate(title="A"))
        ok = service.update_projects_order([
            ProjectOrderItem(id=a.id, sort_order=3),
            ProjectOrderItem(id=str(uuid.uuid4()), sort_order=0),
        ])
        assert ok is False
        db.expire_all()
        assert db.get(Project, a.id).sort_order == 3


class TestIdentifierGate:

    def test_favorites_for_non_uuid_user(self, db):
        project = ProjectService(db).create_project(ProjectCreate(title="A"))
        favorites = FavoriteService(db)
        assert favorites.get_user_favorites("admin-default") == []
        assert favorites.get_favorite_projects("admin-default") == []
        assert favorites.add_to_favorites("admin-default", project.id) is False
        assert db.query(UserFavorite).count() == 0

    def test_events_for_non_uuid_user(self, db):
        assert EventService(db).get_user_events("admin-default") == []
