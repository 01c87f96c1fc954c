"""
Tests for the redirect check endpoint and the public rule list.
"""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from livescore_cms.api.deps import get_redirect_resolver, get_redirect_service
from livescore_cms.api.routes import public_redirects, redirect_check
from livescore_cms.components.redirects import RedirectCache, RedirectResolver, RedirectService


@pytest.fixture
def resolver(redirect_repo, clock) -> RedirectResolver:
    return RedirectResolver(RedirectCache(repo=redirect_repo, ttl_seconds=30, clock=clock))


@pytest.fixture
def client(redirect_repo, resolver, clock) -> TestClient:
    app = FastAPI()
    app.include_router(redirect_check.router, prefix="/api")
    app.include_router(public_redirects.router, prefix="/api/public")

    app.dependency_overrides[get_redirect_resolver] = lambda: resolver
    app.dependency_overrides[get_redirect_service] = lambda: RedirectService(
        repo=redirect_repo, clock=clock, invalidator=resolver.cache
    )
    return TestClient(app)


class TestRedirectCheck:
    def test_match_returns_rule(self, client, redirect_repo) -> None:
        rule = redirect_repo.add("/old-page", "/new-page", 301)

        response = client.get("/api/redirect-check", params={"path": "/old-page"})

        assert response.status_code == 200
        data = response.json()["redirect"]
        assert data["id"] == str(rule.id)
        assert data["source"] == "/old-page"
        assert data["destination"] == "/new-page"
        assert data["type"] == 301

    def test_trailing_slash_variant(self, client, redirect_repo) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)

        response = client.get("/api/redirect-check", params={"path": "/old-page/"})
        assert response.json()["redirect"]["source"] == "/old-page"

    def test_no_match(self, client) -> None:
        response = client.get("/api/redirect-check", params={"path": "/unmapped"})
        assert response.status_code == 200
        assert response.json() == {"redirect": None}

    @pytest.mark.parametrize("query", ["", "?path=", "?path=%20%20"])
    def test_missing_path_is_no_redirect(self, client, query: str) -> None:
        response = client.get(f"/api/redirect-check{query}")
        assert response.status_code == 200
        assert response.json() == {"redirect": None}

    def test_hit_counted_after_response(self, client, redirect_repo) -> None:
        rule = redirect_repo.add("/old-page", "/new-page", 301)

        client.get("/api/redirect-check", params={"path": "/old-page"})
        client.get("/api/redirect-check", params={"path": "/old-page"})

        stored = redirect_repo.get_by_id(rule.id)
        assert stored is not None
        assert stored.hits == 2

    def test_hit_failure_is_logged_not_raised(self, client, redirect_repo, caplog) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)
        redirect_repo.fail_increment = True

        with caplog.at_level(logging.ERROR):
            response = client.get("/api/redirect-check", params={"path": "/old-page"})

        assert response.status_code == 200
        assert response.json()["redirect"]["destination"] == "/new-page"
        assert "Failed to record hit" in caplog.text

    def test_self_loop_is_no_redirect(self, client, redirect_repo) -> None:
        rule = redirect_repo.add("/a/", "/a", 301)

        response = client.get("/api/redirect-check", params={"path": "/a"})

        assert response.json() == {"redirect": None}
        stored = redirect_repo.get_by_id(rule.id)
        assert stored is not None
        assert stored.hits == 0

    def test_slash_twin_applies_from_other_side(self, client, redirect_repo) -> None:
        redirect_repo.add("/a/", "/a", 301)

        response = client.get("/api/redirect-check", params={"path": "/a/"})
        assert response.json()["redirect"]["destination"] == "/a"

    def test_lookup_failure_is_no_redirect(self, client, redirect_repo) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)
        redirect_repo.fail_list_active = True

        response = client.get("/api/redirect-check", params={"path": "/old-page"})
        assert response.json() == {"redirect": None}


class TestPublicRedirects:
    def test_lists_active_rules_with_cache_header(self, client, redirect_repo) -> None:
        redirect_repo.add("/old-page", "/new-page", 301)
        redirect_repo.add("/off", "/elsewhere", 302, is_active=False)

        response = client.get("/api/public/redirects")

        assert response.status_code == 200
        assert response.headers["cache-control"] == "s-maxage=30, stale-while-revalidate=300"
        body = response.json()
        assert body["ok"] is True
        assert [r["source"] for r in body["redirects"]] == ["/old-page"]
        assert set(body["redirects"][0]) == {"source", "destination", "type", "updated_at"}
