"""Tests for the project and favorite endpoints."""

import pytest

from tests.conftest import make_project


def _create(client, headers, **overrides) -> dict:
    resp = client.post("/api/projects", json=make_project(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestProjectCrud:

    def test_create_and_get(self, client, auth_headers):
        created = _create(client, auth_headers, title="  Antenna array  ", start_date="2026-03-01", end_date="2026-06-30")
        assert created["title"] == "Antenna array"
        assert created["team_members"] == ["Lee", "Park"]

        resp = client.get(f"/api/projects/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["start_date"] == "2026-03-01"

    def test_create_requires_auth(self, client):
        assert client.post("/api/projects", json=make_project()).status_code == 401

    def test_new_projects_go_to_the_end(self, client, auth_headers):
        orders = [_create(client, auth_headers, title=f"P{i}")["sort_order"] for i in range(3)]
        assert orders == [0, 1, 2]

    def test_team_members_accepts_comma_string(self, client, auth_headers):
        created = _create(client, auth_headers, team_members="Lee, Park ,,Choi")
        assert created["team_members"] == ["Lee", "Park", "Choi"]

    def test_rejects_out_of_range_progress(self, client, auth_headers):
        resp = client.post("/api/projects", json=make_project(progress=150), headers=auth_headers)
        assert resp.status_code == 422

    def test_rejects_end_before_start(self, client, auth_headers):
        resp = client.post(
            "/api/projects",
            json=make_project(start_date="2026-05-01", end_date="2026-04-01"),
            headers=auth_headers,
        )
        assert resp.status_code == 422

    def test_update_rejects_end_before_stored_start(self, client, auth_headers):
        created = _create(client, auth_headers, start_date="2026-03-01", end_date="2026-06-30")
        resp = client.put(
            f"/api/projects/{created['id']}", json={"end_date": "2025-01-01"}, headers=auth_headers
        )
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "end_date"
        stored = client.get(f"/api/projects/{created['id']}").json()
        assert stored["end_date"] == "2026-06-30"

    def test_update_rejects_start_after_stored_end(self, client, auth_headers):
        created = _create(client, auth_headers, start_date="2026-03-01", end_date="2026-06-30")
        resp = client.put(
            f"/api/projects/{created['id']}", json={"start_date": "2026-07-01"}, headers=auth_headers
        )
        assert resp.status_code == 400

    @pytest.mark.parametrize("field", ["title", "status", "progress", "priority", "sort_order"])
    def test_update_rejects_null_for_required_column(self, client, auth_headers, field):
        created = _create(client, auth_headers)
        resp = client.put(f"/api/projects/{created['id']}", json={field: None}, headers=auth_headers)
        assert resp.status_code == 422
        assert client.get(f"/api/projects/{created['id']}").json()["title"] == created["title"]

    def test_update_rejects_blank_title(self, client, auth_headers):
        created = _create(client, auth_headers)
        resp = client.put(f"/api/projects/{created['id']}", json={"title": "   "}, headers=auth_headers)
        assert resp.status_code == 422

    def test_update_can_clear_optional_column(self, client, auth_headers):
        created = _create(client, auth_headers, manager="Dr. Kim")
        resp = client.put(f"/api/projects/{created['id']}", json={"manager": None}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["manager"] is None

    def test_partial_update(self, client, auth_headers):
        created = _create(client, auth_headers)
        resp = client.put(f"/api/projects/{created['id']}", json={"progress": 80}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["progress"] == 80
        assert resp.json()["title"] == created["title"]

    def test_update_unknown_project(self, client, auth_headers):
        resp = client.put("/api/projects/missing", json={"progress": 10}, headers=auth_headers)
        assert resp.status_code == 404

    def test_delete_requires_confirmation(self, client, auth_headers):
        created = _create(client, auth_headers)
        resp = client.delete(f"/api/projects/{created['id']}", headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "CONFIRMATION_REQUIRED"
        assert client.get(f"/api/projects/{created['id']}").status_code == 200

    def test_delete_with_confirmation(self, client, auth_headers):
        created = _create(client, auth_headers)
        client.put(f"/api/favorites/{created['id']}", headers=auth_headers)

        resp = client.delete(f"/api/projects/{created['id']}?confirm=true", headers=auth_headers)
        assert resp.status_code == 204
        assert client.get(f"/api/projects/{created['id']}").status_code == 404
        assert client.get("/api/favorites", headers=auth_headers).json() == []


class TestOrdering:

    def test_listing_follows_sort_order(self, client, auth_headers):
        a = _create(client, auth_headers, title="A")
        b = _create(client, auth_headers, title="B")
        c = _create(client, auth_headers, title="C")

        resp = client.put(
            "/api/projects/order",
            json={"items": [
                {"id": c["id"], "sort_order": 0},
                {"id": a["id"], "sort_order": 1},
                {"id": b["id"], "sort_order": 2},
            ]},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "updated": 3}
        assert [p["title"] for p in client.get("/api/projects").json()] == ["C", "A", "B"]

    def test_reorder_keeps_rows_written_before_a_failure(self, client, auth_headers):
        a = _create(client, auth_headers, title="A")
        b = _create(client, auth_headers, title="B")

        resp = client.put(
            "/api/projects/order",
            json={"items": [
                {"id": b["id"], "sort_order": 0},
                {"id": "missing", "sort_order": 1},
                {"id": a["id"], "sort_order": 2},
            ]},
            headers=auth_headers,
        )
        assert resp.json()["success"] is False
        assert [p["title"] for p in client.get("/api/projects").json()] == ["B", "A"]

    def test_favorites_first_for_caller(self, client, auth_headers):
        ids = [_create(client, auth_headers, title=f"P{i}")["id"] for i in range(1, 5)]
        client.put(f"/api/favorites/{ids[2]}", headers=auth_headers)

        mine = [p["title"] for p in client.get("/api/projects", headers=auth_headers).json()]
        assert mine == ["P3", "P1", "P2", "P4"]

        anonymous = [p["title"] for p in client.get("/api/projects").json()]
        assert anonymous == ["P1", "P2", "P3", "P4"]


class TestFavoritesApi:

    def test_add_is_idempotent(self, client, auth_headers):
        project = _create(client, auth_headers)
        for _ in range(2):
            resp = client.put(f"/api/favorites/{project['id']}", headers=auth_headers)
            assert resp.json() == {"success": True}
        assert client.get("/api/favorites", headers=auth_headers).json() == [project["id"]]

    def test_favorite_unknown_project(self, client, auth_headers):
        resp = client.put("/api/favorites/missing", headers=auth_headers)
        assert resp.status_code == 404

    def test_remove(self, client, auth_headers):
        project = _create(client, auth_headers)
        client.put(f"/api/favorites/{project['id']}", headers=auth_headers)
        resp = client.delete(f"/api/favorites/{project['id']}", headers=auth_headers)
        assert resp.json() == {"success": True}
        assert client.get("/api/favorites", headers=auth_headers).json() == []

    def test_favorite_projects_listing(self, client, auth_headers):
        first = _create(client, auth_headers, title="First")
        _create(client, auth_headers, title="Second")
        client.put(f"/api/favorites/{first['id']}", headers=auth_headers)

        resp = client.get("/api/favorites/projects", headers=auth_headers)
        assert [p["title"] for p in resp.json()] == ["First"]

    def test_favorites_are_per_user(self, client, auth_headers, user_login):
        project = _create(client, auth_headers)
        client.put(f"/api/favorites/{project['id']}", headers=auth_headers)

        _, alice = user_login()
        assert client.get("/api/favorites", headers=alice).json() == []

    def test_favorites_require_auth(self, client):
        assert client.get("/api/favorites").status_code == 401
