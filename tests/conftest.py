from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

import pytest

from livescore_cms.components.broken_links import BrokenLink
from livescore_cms.components.redirects import RedirectRule
from livescore_cms.components.sitemap import SitemapLink, SitemapSettings
from livescore_cms.core.entities import (
    Category,
    PublishedFaq,
    PublishedPage,
    PublishedPost,
    StaffUser,
)
from livescore_cms.rules.loader import load_rules

PROJECT_ROOT = Path(__file__).resolve().parents[1]
T0 = datetime(2025, 1, 1, tzinfo=UTC)


# --- Clock ---


class FixedClock:
    """Deterministic clock; advance() moves both readings."""

    def __init__(self, start: datetime = T0, monotonic_start: float = 1000.0) -> None:
        self._now = start
        self._mono = monotonic_start

    def now_utc(self) -> datetime:
        return self._now

    def monotonic(self) -> float:
        return self._mono

    def advance(self, seconds: float) -> None:
        self._now = self._now + timedelta(seconds=seconds)
        self._mono += seconds


# --- In-Memory Repositories ---


class InMemoryRedirectRepo:
    """In-memory redirect repository for testing."""

    def __init__(self) -> None:
        self._rules: dict[UUID, RedirectRule] = {}
        self.list_active_calls = 0
        self.fail_list_active = False
        self.fail_increment = False

    def get_by_id(self, redirect_id: UUID) -> RedirectRule | None:
        return self._rules.get(redirect_id)

    def get_by_source(self, source: str) -> RedirectRule | None:
        return next((r for r in self._rules.values() if r.source == source), None)

    def list_all(self) -> list[RedirectRule]:
        return sorted(self._rules.values(), key=lambda r: r.created_at, reverse=True)

    def list_active(self) -> list[RedirectRule]:
        self.list_active_calls += 1
        if self.fail_list_active:
            raise ConnectionError("database unavailable")
        return [r for r in self._rules.values() if r.is_active]

    def save(self, rule: RedirectRule) -> RedirectRule:
        self._rules[rule.id] = rule
        return rule

    def delete(self, redirect_id: UUID) -> None:
        self._rules.pop(redirect_id, None)

    def increment_hits(self, redirect_id: UUID) -> None:
        if self.fail_increment:
            raise ConnectionError("database unavailable")
        rule = self._rules[redirect_id]
        self._rules[redirect_id] = RedirectRule(
            id=rule.id,
            source=rule.source,
            destination=rule.destination,
            type=rule.type,
            is_active=rule.is_active,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
            hits=rule.hits + 1,
        )

    def add(
        self,
        source: str,
        destination: str,
        type_: int = 301,
        is_active: bool = True,
    ) -> RedirectRule:
        """Insert a rule directly, bypassing service validation."""
        rule = RedirectRule(
            id=uuid4(),
            source=source,
            destination=destination,
            type=type_,
            is_active=is_active,
            created_at=T0,
            updated_at=T0,
        )
        return self.save(rule)


class InMemoryRobotsRepo:
    def __init__(self, content: str | None = None) -> None:
        self.content = content
        self.fail = False

    def get_content(self) -> str | None:
        if self.fail:
            raise ConnectionError("database unavailable")
        return self.content

    def save_content(self, content: str) -> None:
        self.content = content


class InMemorySeoRepo:
    def __init__(self) -> None:
        self.docs: dict[tuple[str, str], dict[str, Any]] = {}

    def get(self, site_key: str, scope: str) -> dict[str, Any] | None:
        return self.docs.get((site_key, scope))

    def save(self, site_key: str, scope: str, data: dict[str, Any]) -> None:
        self.docs[(site_key, scope)] = data


class InMemorySitemapRepo:
    def __init__(self) -> None:
        self.settings: SitemapSettings | None = None
        self.links: dict[int, SitemapLink] = {}
        self._next_id = 1

    def get_settings(self) -> SitemapSettings | None:
        return self.settings

    def save_settings(self, settings: SitemapSettings) -> SitemapSettings:
        self.settings = settings
        return settings

    def list_links(self) -> list[SitemapLink]:
        return sorted(self.links.values(), key=lambda link: link.path)

    def get_link_by_path(self, path: str) -> SitemapLink | None:
        return next((link for link in self.links.values() if link.path == path), None)

    def add_link(self, path: str, priority: float, frequency: str) -> SitemapLink:
        link = SitemapLink(
            id=self._next_id,
            path=path,
            priority=priority,
            frequency=frequency,
            created_at=T0,
            updated_at=T0,
        )
        self.links[link.id] = link
        self._next_id += 1
        return link

    def delete_link(self, link_id: int) -> bool:
        return self.links.pop(link_id, None) is not None


class InMemoryBrokenLinkRepo:
    def __init__(self) -> None:
        self.links: list[BrokenLink] = []

    def list_all(self) -> list[BrokenLink]:
        return list(self.links)

    def add(self, link: BrokenLink) -> BrokenLink:
        stored = BrokenLink(
            id=len(self.links) + 1,
            link_url=link.link_url,
            source_slug=link.source_slug,
            source_title=link.source_title,
            status_code=link.status_code,
            checked_at=link.checked_at,
        )
        self.links.append(stored)
        return stored

    def replace_all(self, links: Sequence[BrokenLink]) -> None:
        self.links = list(links)


class InMemoryContentSource:
    def __init__(self) -> None:
        self.posts: list[PublishedPost] = []
        self.blog_categories: list[Category] = []
        self.faq_categories: list[Category] = []
        self.faqs: list[PublishedFaq] = []
        self.pages: list[PublishedPage] = []

    def list_published_posts(self, now: datetime | None = None) -> list[PublishedPost]:
        if now is None:
            return list(self.posts)
        return [p for p in self.posts if p.published_at is None or p.published_at <= now]

    def list_blog_categories(self) -> list[Category]:
        return list(self.blog_categories)

    def list_faq_categories(self) -> list[Category]:
        return list(self.faq_categories)

    def list_published_faqs(self) -> list[PublishedFaq]:
        return list(self.faqs)

    def list_published_pages(self) -> list[PublishedPage]:
        return list(self.pages)


# --- Fixtures ---


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(start=T0)


@pytest.fixture
def redirect_repo() -> InMemoryRedirectRepo:
    return InMemoryRedirectRepo()


@pytest.fixture
def robots_repo() -> InMemoryRobotsRepo:
    return InMemoryRobotsRepo()


@pytest.fixture
def seo_repo() -> InMemorySeoRepo:
    return InMemorySeoRepo()


@pytest.fixture
def sitemap_repo() -> InMemorySitemapRepo:
    return InMemorySitemapRepo()


@pytest.fixture
def broken_link_repo() -> InMemoryBrokenLinkRepo:
    return InMemoryBrokenLinkRepo()


@pytest.fixture
def content_source() -> InMemoryContentSource:
    return InMemoryContentSource()


@pytest.fixture
def rules():
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def seo_manager() -> StaffUser:
    return StaffUser(id="u-seo", email="seo@example.com", role="SEO_MANAGER")


@pytest.fixture
def migrations_dir() -> str:
    return str(PROJECT_ROOT / "migrations")
