"""
Tests for the admin role guard.
"""

from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from livescore_cms.api.auth_utils import create_access_token
from livescore_cms.api.deps import Settings, get_settings, require_role
from livescore_cms.core.entities import StaffUser


def _token(role: str, email: str = "someone@example.com") -> str:
    return create_access_token({"sub": "u-1", "email": email, "role": role})


@pytest.fixture
def settings() -> Settings:
    settings = Settings()
    settings.super_admin_email = "owner@example.com"
    return settings


@pytest.fixture
def client(settings) -> TestClient:
    app = FastAPI()

    @app.get("/protected")
    def protected(user: StaffUser = Depends(require_role("ADMIN", "SEO_MANAGER"))) -> dict:
        return {"email": user.email, "role": user.role}

    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


class TestRequireRole:
    def test_missing_token(self, client) -> None:
        response = client.get("/protected")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_invalid_token(self, client) -> None:
        response = client.get("/protected", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_allowed_role(self, client) -> None:
        response = client.get(
            "/protected", headers={"Authorization": f"Bearer {_token('SEO_MANAGER')}"}
        )
        assert response.status_code == 200
        assert response.json()["role"] == "SEO_MANAGER"

    def test_forbidden_role(self, client) -> None:
        response = client.get(
            "/protected", headers={"Authorization": f"Bearer {_token('CONTENT_WRITER')}"}
        )
        assert response.status_code == 403

    def test_cookie_token(self, client) -> None:
        client.cookies.set("access_token", f"Bearer {_token('ADMIN')}")
        response = client.get("/protected")
        assert response.status_code == 200

    def test_super_admin_bypass(self, client) -> None:
        token = _token("CONTENT_WRITER", email="Owner@Example.com")
        response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
