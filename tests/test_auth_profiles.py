# tests/test_auth_profiles.py
"""Tests for the identity and profile endpoints."""

from fastapi import status
from fastapi.testclient import TestClient


def test_current_user_from_token(client: TestClient, member_token: dict[str, str]) -> None:
    response = client.get("/api/v1/auth/user", headers=member_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"id": "user-awa", "email": "awa.diop@example.com"}


def test_current_user_rejects_bad_token(client: TestClient) -> None:
    response = client.get("/api/v1/auth/user", headers={"Authorization": "Bearer nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_missing_profile_is_404(client: TestClient) -> None:
    assert client.get("/api/v1/profiles/user-awa").status_code == status.HTTP_404_NOT_FOUND


def test_put_and_get_own_profile(client: TestClient, member_token: dict[str, str]) -> None:
    response = client.put(
        "/api/v1/profiles/me", json={"full_name": "Awa Diop"}, headers=member_token
    )
    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/v1/profiles/user-awa").json() == {
        "user_id": "user-awa",
        "full_name": "Awa Diop",
    }

    client.put("/api/v1/profiles/me", json={"full_name": "Awa D."}, headers=member_token)
    assert client.get("/api/v1/profiles/user-awa").json()["full_name"] == "Awa D."
