"""
Tests for Admin Redirects API.
"""

from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from livescore_cms.api.deps import get_current_user, get_redirect_service
from livescore_cms.api.routes import admin_redirects
from livescore_cms.components.redirects import RedirectCache, RedirectService


@pytest.fixture
def cache(redirect_repo, clock) -> RedirectCache:
    return RedirectCache(repo=redirect_repo, ttl_seconds=30, clock=clock)


@pytest.fixture
def client(redirect_repo, cache, clock, seo_manager) -> TestClient:
    app = FastAPI()
    app.include_router(admin_redirects.router, prefix="/api/admin/seo")

    app.dependency_overrides[get_redirect_service] = lambda: RedirectService(
        repo=redirect_repo, clock=clock, invalidator=cache
    )
    app.dependency_overrides[get_current_user] = lambda: seo_manager
    return TestClient(app)


class TestCreateRedirect:
    def test_create_success(self, client) -> None:
        response = client.post(
            "/api/admin/seo/redirects",
            json={"source": "old", "destination": "new", "type": 301},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["redirect"]["source"] == "/old"
        assert data["redirect"]["destination"] == "/new"
        assert data["redirect"]["type"] == 301
        assert data["redirect"]["is_active"] is True

    def test_create_gone_without_destination(self, client) -> None:
        response = client.post("/api/admin/seo/redirects", json={"source": "/gone", "type": 410})

        assert response.status_code == 200
        assert response.json()["redirect"]["destination"] == ""

    def test_loop_rejected(self, client) -> None:
        response = client.post(
            "/api/admin/seo/redirects",
            json={"source": "/same", "destination": "/same", "type": 301},
        )

        assert response.status_code == 400
        errors = response.json()["detail"]["errors"]
        assert errors[0]["code"] == "infinite_loop"
        assert errors[0]["message"] == "Infinite Loop Detected"

    def test_duplicate_rejected(self, client) -> None:
        payload = {"source": "/old", "destination": "/new", "type": 301}
        client.post("/api/admin/seo/redirects", json=payload)

        response = client.post("/api/admin/seo/redirects", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0]["code"] == "source_exists"

    def test_invalid_type_rejected(self, client) -> None:
        response = client.post(
            "/api/admin/seo/redirects",
            json={"source": "/old", "destination": "/new", "type": 200},
        )
        assert response.status_code == 400

    def test_create_refreshes_resolver_cache(self, client, cache) -> None:
        assert "/old" not in cache.rules()

        client.post("/api/admin/seo/redirects", json={"source": "/old", "destination": "/new"})
        assert "/old" in cache.rules()


class TestListAndMutate:
    def test_list_newest_first(self, client, clock) -> None:
        client.post("/api/admin/seo/redirects", json={"source": "/a", "destination": "/b"})
        clock.advance(5)
        client.post("/api/admin/seo/redirects", json={"source": "/c", "destination": "/d"})

        response = client.get("/api/admin/seo/redirects")
        assert response.status_code == 200
        assert [r["source"] for r in response.json()["redirects"]] == ["/c", "/a"]

    def test_deactivate(self, client, cache) -> None:
        created = client.post(
            "/api/admin/seo/redirects", json={"source": "/old", "destination": "/new"}
        ).json()["redirect"]
        cache.rules()

        response = client.patch(
            f"/api/admin/seo/redirects/{created['id']}", json={"is_active": False}
        )
        assert response.status_code == 200
        assert response.json()["redirect"]["is_active"] is False
        assert "/old" not in cache.rules()

    def test_patch_missing(self, client) -> None:
        response = client.patch(f"/api/admin/seo/redirects/{uuid4()}", json={"is_active": True})
        assert response.status_code == 404

    def test_delete(self, client) -> None:
        created = client.post(
            "/api/admin/seo/redirects", json={"source": "/old", "destination": "/new"}
        ).json()["redirect"]

        response = client.delete(f"/api/admin/seo/redirects/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert client.get("/api/admin/seo/redirects").json()["redirects"] == []

    def test_delete_missing(self, client) -> None:
        response = client.delete(f"/api/admin/seo/redirects/{uuid4()}")
        assert response.status_code == 404
