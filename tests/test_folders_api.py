"""Tests for public and personal folder trees."""

from labdash.models import PublicFile, PublicFolder


def _folder(client, headers, name, parent_id=None, base="/api/public"):
    resp = client.post(f"{base}/folders", json={"name": name, "parent_id": parent_id}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _upload(client, headers, name, folder_id=None, base="/api/public"):
    data = {"folder_id": folder_id} if folder_id else {}
    resp = client.post(f"{base}/files", files={"file": (name, b"x", "text/plain")}, data=data, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestPublicFolders:

    def test_create_and_list_by_name(self, client, auth_headers):
        _folder(client, auth_headers, "Zeta")
        _folder(client, auth_headers, "Alpha")
        names = [f["name"] for f in client.get("/api/public/folders", headers=auth_headers).json()]
        assert names == ["Alpha", "Zeta"]

    def test_created_by_is_caller(self, client, auth_headers):
        from labdash.services.auth_service import bootstrap_admin_id
        assert _folder(client, auth_headers, "Mine")["created_by"] == bootstrap_admin_id()

    def test_blank_name_rejected(self, client, auth_headers):
        resp = client.post("/api/public/folders", json={"name": "   "}, headers=auth_headers)
        assert resp.status_code == 422

    def test_unknown_parent(self, client, auth_headers):
        resp = client.post("/api/public/folders", json={"name": "Child", "parent_id": "nope"}, headers=auth_headers)
        assert resp.status_code == 404

    def test_delete_removes_subtree_and_moves_files_to_root(self, client, auth_headers, db):
        top = _folder(client, auth_headers, "Top")
        mid = _folder(client, auth_headers, "Mid", top["id"])
        leaf = _folder(client, auth_headers, "Leaf", mid["id"])
        sibling = _folder(client, auth_headers, "Sibling")
        _upload(client, auth_headers, "a.txt", top["id"])
        _upload(client, auth_headers, "b.txt", leaf["id"])
        _upload(client, auth_headers, "c.txt", sibling["id"])

        assert client.delete(f"/api/public/folders/{top['id']}", headers=auth_headers).status_code == 400
        resp = client.delete(f"/api/public/folders/{top['id']}?confirm=true", headers=auth_headers)
        assert resp.status_code == 204

        db.expire_all()
        assert [f.name for f in db.query(PublicFolder).all()] == ["Sibling"]
        files = {f.file_name: f.folder_id for f in db.query(PublicFile).all()}
        assert files == {"a.txt": None, "b.txt": None, "c.txt": sibling["id"]}

    def test_delete_unknown_folder(self, client, auth_headers):
        assert client.delete("/api/public/folders/nope?confirm=true", headers=auth_headers).status_code == 404


class TestPersonalFolders:

    def test_folders_are_private(self, client, user_login):
        _, alice = user_login()
        _, bob = user_login(email="bob@lab.example", name="Bob")
        created = _folder(client, alice, "Drafts", base="/api/me")

        assert [f["name"] for f in client.get("/api/me/folders", headers=alice).json()] == ["Drafts"]
        assert client.get("/api/me/folders", headers=bob).json() == []
        assert client.delete(f"/api/me/folders/{created['id']}?confirm=true", headers=bob).status_code == 404

    def test_parent_must_belong_to_caller(self, client, user_login):
        _, alice = user_login()
        _, bob = user_login(email="bob@lab.example", name="Bob")
        parent = _folder(client, alice, "Alice's", base="/api/me")
        resp = client.post("/api/me/folders", json={"name": "Sneaky", "parent_id": parent["id"]}, headers=bob)
        assert resp.status_code == 400

    def test_delete_nested(self, client, user_login):
        _, alice = user_login()
        parent = _folder(client, alice, "Parent", base="/api/me")
        child = _folder(client, alice, "Child", parent["id"], base="/api/me")
        stored = _upload(client, alice, "deep.txt", child["id"], base="/api/me")

        resp = client.delete(f"/api/me/folders/{parent['id']}?confirm=true", headers=alice)
        assert resp.status_code == 204
        assert client.get("/api/me/folders", headers=alice).json() == []
        root_files = client.get("/api/me/files", headers=alice).json()
        assert [f["id"] for f in root_files] == [stored["id"]]
