"""
Integration tests for the /resumes/{resume_id}/versions endpoints.
"""
import pytest

from app.core.security import create_access_token
from app.db.models.resume import Resume


@pytest.fixture
def auth_headers(test_user):
    """Bearer token for test_user."""
    return {"Authorization": f"Bearer {create_access_token({'sub': test_user.email})}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': other_user.email})}"}


def create(client, resume_id, headers, **body):
    response = client.post(f"/resumes/{resume_id}/versions", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_version(client, resume, auth_headers):
    """Test creating a version returns 201 with the snapshot."""
    data = create(client, resume.id, auth_headers, version_name="  First draft  ", changes_summary="")

    assert data["version_number"] == 1
    assert data["version_name"] == "First draft"
    assert data["changes_summary"] is None
    assert data["template_id"] == "modern"
    assert data["content"]["skills"] == ["python", "sql"]
    assert data["diff"] is None


def test_create_version_without_body(client, resume, auth_headers):
    """Test the request body is optional."""
    response = client.post(f"/resumes/{resume.id}/versions", headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["version_name"] == "Version 1"


def test_create_version_name_too_long(client, resume, auth_headers):
    """Test request validation on version_name length."""
    response = client.post(
        f"/resumes/{resume.id}/versions",
        json={"version_name": "x" * 256},
        headers=auth_headers
    )
    assert response.status_code == 422


def test_create_version_requires_auth(client, resume):
    """Test requests without a token are rejected."""
    response = client.post(f"/resumes/{resume.id}/versions", json={})
    assert response.status_code == 401


def test_create_version_other_users_resume(client, resume, other_headers):
    """Test another user's resume is reported as not found."""
    response = client.post(f"/resumes/{resume.id}/versions", json={}, headers=other_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Resume not found"


def test_list_and_get_versions(client, resume, auth_headers):
    """Test listing is newest first and single versions can be fetched."""
    first = create(client, resume.id, auth_headers)
    create(client, resume.id, auth_headers)

    response = client.get(f"/resumes/{resume.id}/versions", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [v["version_number"] for v in data["versions"]] == [2, 1]

    response = client.get(f"/resumes/{resume.id}/versions/{first['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == first["id"]


def test_get_missing_version(client, resume, auth_headers):
    response = client.get(f"/resumes/{resume.id}/versions/9999", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Version not found"


def test_get_version_unexpected_error(client, resume, auth_headers, monkeypatch):
    """Test an unexpected failure while reading a version is a 500."""
    from app.services import version_service

    def broken(*args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(version_service, "get_version", broken)

    response = client.get(f"/resumes/{resume.id}/versions/1", headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to get version"


def test_compare_versions(client, db, resume, auth_headers):
    """Test compare returns versions ordered by number regardless of query order."""
    first = create(client, resume.id, auth_headers)
    stored = db.get(Resume, resume.id)
    stored.content = {**stored.content, "skills": ["python"], "awards": ["Best Paper"]}
    db.commit()
    second = create(client, resume.id, auth_headers)

    response = client.get(
        f"/resumes/{resume.id}/versions/compare",
        params={"version1": second["id"], "version2": first["id"]},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["old_version"]["id"] == first["id"]
    assert data["new_version"]["id"] == second["id"]
    assert data["diff"] == {"added": ["awards"], "removed": [], "modified": ["skills"]}


def test_compare_requires_both_versions(client, resume, auth_headers):
    """Test compare without both query parameters is a 400."""
    first = create(client, resume.id, auth_headers)

    response = client.get(
        f"/resumes/{resume.id}/versions/compare",
        params={"version1": first["id"]},
        headers=auth_headers
    )

    assert response.status_code == 400


def test_restore_version(client, db, resume, auth_headers):
    """Test restore saves the current state and returns the backup version."""
    first = create(client, resume.id, auth_headers)
    stored = db.get(Resume, resume.id)
    stored.content = {"skills": ["java"]}
    stored.template_id = "classic"
    db.commit()

    response = client.post(f"/resumes/{resume.id}/versions/{first['id']}/restore", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Version restored successfully"
    assert data["restored_version_id"] == first["id"]
    assert data["restored_version_number"] == 1
    assert data["backup_version"]["version_number"] == 2
    assert data["backup_version"]["content"] == {"skills": ["java"]}

    db.expire_all()
    restored = db.get(Resume, resume.id)
    assert restored.content == first["content"]
    assert restored.template_id == "modern"


def test_delete_version(client, resume, auth_headers):
    """Test deleting a version, then refusing to delete the last one."""
    first = create(client, resume.id, auth_headers)
    second = create(client, resume.id, auth_headers)

    response = client.delete(f"/resumes/{resume.id}/versions/{first['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Version deleted successfully"

    response = client.delete(f"/resumes/{resume.id}/versions/{second['id']}", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete the only version"


def test_cleanup_versions(client, resume, auth_headers):
    """Test cleanup keeps the newest keep_count versions."""
    for _ in range(5):
        create(client, resume.id, auth_headers)

    response = client.post(
        f"/resumes/{resume.id}/versions/cleanup",
        json={"keep_count": 1},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Deleted 4 old versions", "deleted_count": 4}


def test_cleanup_default_keep_count(client, resume, auth_headers):
    """Test cleanup without a body keeps the default number of versions."""
    for _ in range(3):
        create(client, resume.id, auth_headers)

    response = client.post(f"/resumes/{resume.id}/versions/cleanup", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["deleted_count"] == 0


def test_cleanup_rejects_zero(client, resume, auth_headers):
    """Test keep_count of 0 is rejected."""
    create(client, resume.id, auth_headers)

    response = client.post(
        f"/resumes/{resume.id}/versions/cleanup",
        json={"keep_count": 0},
        headers=auth_headers
    )

    assert response.status_code == 400


def test_version_conflict_maps_to_409(client, resume, auth_headers, monkeypatch):
    """Test exhausted number retries surface as 409 Conflict."""
    from app.core.errors import VersionConflictError
    from app.services import version_service

    def conflict(*args, **kwargs):
        raise VersionConflictError("Could not assign a version number, please retry")

    monkeypatch.setattr(version_service, "create_version", conflict)

    response = client.post(f"/resumes/{resume.id}/versions", json={}, headers=auth_headers)

    assert response.status_code == 409


def test_health(client, db):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"
