"""
Tests for application-level endpoints and error handling
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from bookreview.services import AuthorService


def test_root(client: TestClient):
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["docs"] == "/docs"


def test_health_reports_database(client: TestClient):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"


def test_unknown_route_uses_error_envelope(client: TestClient):
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"status": "error", "message": "Not Found"}


def test_malformed_json_is_bad_request(client: TestClient, user_headers: dict):
    response = client.post(
        "/api/v1/reviews",
        content="{not json",
        headers={**user_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["status"] == "error"


def test_untranslated_integrity_error_is_conflict(
    client: TestClient, admin_headers: dict, monkeypatch
):
    def create_author(self, data):
        raise IntegrityError(
            "INSERT INTO authors ...", {}, Exception("UNIQUE constraint failed")
        )

    monkeypatch.setattr(AuthorService, "create_author", create_author)

    response = client.post("/api/v1/authors", json={"name": "Jane Austen"}, headers=admin_headers)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {
        "status": "error",
        "message": "Database conflict: A record with this value already exists.",
    }
