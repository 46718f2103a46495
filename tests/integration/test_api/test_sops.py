"""Integration tests for SOP documents API."""
import pytest


def _create_sop(client, **overrides):
    payload = {"title": "Fire drill", "file_url": "/uploads/sop/fire-v1.pdf"}
    payload.update(overrides)
    response = client.post("/api/v1/sops", json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.mark.integration
class TestSopDocuments:
    """Creating and editing documents."""

    def test_create_sop_with_first_version(self, user_client):
        sop = _create_sop(user_client)

        assert sop["version"] == "1.0"
        assert sop["created_by"] == 42
        assert [f["version"] for f in sop["files"]] == ["1.0"]

    def test_create_sop_accepts_org_unit_aliases(self, user_client):
        sop = _create_sop(user_client, wing=2, subwId=5, visibility="subwing")

        assert sop["wing_id"] == 2
        assert sop["subw_id"] == 5
        assert sop["visibility"] == "subwing"

    def test_invalid_visibility(self, user_client):
        response = user_client.post("/api/v1/sops", json={"title": "Doc", "visibility": "everyone"})

        assert response.status_code == 422

    def test_list_and_filter(self, user_client):
        _create_sop(user_client, title="Wing one", wing_id=1)
        _create_sop(user_client, title="Wing two", wing_id=2)

        response = user_client.get("/api/v1/sops?wing_id=2")

        assert [s["title"] for s in response.json()] == ["Wing two"]

    def test_update_metadata_only(self, user_client):
        sop = _create_sop(user_client)

        response = user_client.put(f"/api/v1/sops/{sop['id']}", json={"title": "Evacuation"})

        assert response.status_code == 200
        assert response.json()["title"] == "Evacuation"
        assert response.json()["version"] == "1.0"

    @pytest.mark.parametrize("field", ["title", "visibility"])
    def test_update_rejects_null_for_required_field(self, user_client, field):
        sop = _create_sop(user_client)

        response = user_client.put(f"/api/v1/sops/{sop['id']}", json={field: None})

        assert response.status_code == 422

    def test_delete_requires_approver(self, user_client, approver_client):
        sop = _create_sop(user_client)

        assert user_client.delete(f"/api/v1/sops/{sop['id']}").status_code == 403
        assert approver_client.delete(f"/api/v1/sops/{sop['id']}").status_code == 200
        assert user_client.get(f"/api/v1/sops/{sop['id']}").status_code == 404


@pytest.mark.integration
class TestSopUploads:
    """Version lineage over HTTP."""

    def test_uploads_bump_major_version(self, user_client):
        sop = _create_sop(user_client)
        files_url = f"/api/v1/sops/{sop['id']}/files"

        user_client.post(files_url, json={"file_url": "/uploads/sop/fire-v2.pdf"})
        response = user_client.post(files_url, json={"file_url": "/uploads/sop/fire-v3.pdf"})

        assert response.status_code == 201
        body = response.json()
        assert body["created_version"] is True
        assert body["sop"]["version"] == "3.0"
        assert [f["version"] for f in body["sop"]["files"]] == ["3.0", "2.0", "1.0"]

    def test_explicit_version(self, user_client):
        sop = _create_sop(user_client)

        response = user_client.post(
            f"/api/v1/sops/{sop['id']}/files",
            json={"file_url": "/uploads/sop/fire-v5.pdf", "version": "5.5"},
        )

        assert response.json()["sop"]["version"] == "5.5"

    def test_same_file_does_not_add_version(self, user_client):
        sop = _create_sop(user_client)

        response = user_client.post(
            f"/api/v1/sops/{sop['id']}/files",
            json={"file_url": "/uploads/sop/fire-v1.pdf"},
        )

        body = response.json()
        assert body["created_version"] is False
        assert len(body["sop"]["files"]) == 1
        assert len(user_client.get(f"/api/v1/sops/{sop['id']}/files").json()) == 1

    def test_upload_to_missing_sop(self, user_client):
        response = user_client.post("/api/v1/sops/999/files", json={"file_url": "/uploads/x.pdf"})

        assert response.status_code == 404

    def test_sop_file_redirects_absolute_urls(self, user_client):
        sop = _create_sop(user_client, file_url="https://files.example.org/fire.pdf")
        file_id = sop["files"][0]["id"]

        response = user_client.get(f"/api/v1/sop-files/{file_id}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://files.example.org/fire.pdf"

    def test_sop_file_returns_record_for_relative_paths(self, user_client):
        sop = _create_sop(user_client)
        file_id = sop["files"][0]["id"]

        response = user_client.get(f"/api/v1/sop-files/{file_id}")

        assert response.status_code == 200
        assert response.json()["file_url"] == "/uploads/sop/fire-v1.pdf"

    def test_missing_sop_file(self, user_client):
        assert user_client.get("/api/v1/sop-files/999").status_code == 404
