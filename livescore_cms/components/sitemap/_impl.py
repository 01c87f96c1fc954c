"""
SitemapService - sitemap.xml generation and admin settings.

Key behaviors:
- Settings fall back to defaults when no row exists
- Priorities are clamped to [0, 1]
- Every URL is absolute on the site domain and ends with a slash
- Absolute URLs in custom links are rebased onto the site domain
- Scheduled posts (published_at in the future) are left out
- Custom pages with reserved slugs are left out
- Duplicate URLs keep their first entry
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlsplit
from xml.etree import ElementTree as ET

from livescore_cms.adapters.clock import SystemClock
from livescore_cms.core.ports import ContentSourcePort

from .models import (
    CHANGE_FREQUENCIES,
    SitemapEntry,
    SitemapLink,
    SitemapSettings,
    SitemapValidationError,
)
from .ports import SitemapRepoPort

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

SPORTS = ("football", "basketball", "baseball", "hockey", "rugby", "nfl", "volleyball")
FEED_TABS = ("all", "live", "today", "finished", "scheduled")

DEFAULT_RESERVED_SLUGS = frozenset(
    {
        "admin",
        "api",
        "blog",
        "faqs",
        "contact",
        "privacy-policy",
        "terms-of-service",
        "sports",
        "match",
        "player",
        "football",
        "robots.txt",
        "sitemap.xml",
        "sitemap",
    }
)

DEFAULT_LINK_PRIORITY = 0.7


# --- URL Helpers ---


def clamp_priority(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return max(0.0, min(1.0, number))


def _ensure_path(path: str) -> str:
    if not path:
        return "/"
    return path if path.startswith("/") else "/" + path


def _with_slash(path: str) -> str:
    if not path or path == "/":
        return "/"
    return path if path.endswith("/") else path + "/"


def to_absolute(base_url: str, path_or_url: str) -> str:
    """Absolute site URL with a trailing-slash path."""
    if not path_or_url:
        return f"{base_url}/"

    if path_or_url.lower().startswith(("http://", "https://")):
        parts = urlsplit(path_or_url)
        url = f"{base_url}{_with_slash(_ensure_path(parts.path))}"
        if parts.query:
            url += f"?{parts.query}"
        if parts.fragment:
            url += f"#{parts.fragment}"
        return url

    return f"{base_url}{_with_slash(_ensure_path(path_or_url))}"


def dedupe(entries: Iterable[SitemapEntry]) -> list[SitemapEntry]:
    seen: set[str] = set()
    out: list[SitemapEntry] = []
    for entry in entries:
        if not entry.url or entry.url in seen:
            continue
        seen.add(entry.url)
        out.append(entry)
    return out


# --- Rendering ---


def _format_priority(priority: float) -> str:
    return f"{priority:.1f}" if round(priority, 1) == priority else f"{priority:.2f}"


def render_sitemap_xml(entries: Iterable[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        ET.SubElement(url, "lastmod").text = entry.last_modified.astimezone(UTC).isoformat()
        if entry.change_frequency:
            ET.SubElement(url, "changefreq").text = entry.change_frequency
        if entry.priority is not None:
            ET.SubElement(url, "priority").text = _format_priority(entry.priority)

    body = ET.tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body


# --- Service ---


class SitemapService:
    """Sitemap settings, custom links and generation."""

    def __init__(
        self,
        repo: SitemapRepoPort,
        content: ContentSourcePort,
        site_url: str,
        defaults: SitemapSettings | None = None,
        reserved_slugs: Iterable[str] | None = None,
        allowed_frequencies: Iterable[str] | None = None,
        clock: Any = None,
    ) -> None:
        self._repo = repo
        self._content = content
        self._base_url = (site_url or "").rstrip("/") or "http://localhost:3000"
        self._defaults = defaults or SitemapSettings()
        self._reserved = (
            frozenset(reserved_slugs) if reserved_slugs is not None else DEFAULT_RESERVED_SLUGS
        )
        self._frequencies = tuple(allowed_frequencies or CHANGE_FREQUENCIES)
        self._clock = clock or SystemClock()

    # Settings

    def get_settings(self) -> SitemapSettings:
        return self._repo.get_settings() or self._defaults

    def save_settings(self, home: Any, posts: Any, pages: Any) -> SitemapSettings:
        current = self.get_settings()
        settings = SitemapSettings(
            home_priority=clamp_priority(home, current.home_priority),
            post_priority=clamp_priority(posts, current.post_priority),
            page_priority=clamp_priority(pages, current.page_priority),
        )
        return self._repo.save_settings(settings)

    # Custom links

    def list_links(self) -> list[SitemapLink]:
        return self._repo.list_links()

    def add_link(
        self,
        path: str,
        priority: Any = DEFAULT_LINK_PRIORITY,
        frequency: str = "weekly",
    ) -> tuple[SitemapLink | None, list[SitemapValidationError]]:
        errors: list[SitemapValidationError] = []
        path = (path or "").strip()

        if not path.startswith("/"):
            errors.append(
                SitemapValidationError(
                    code="invalid_path", message="Path must start with /", field="path"
                )
            )
        if frequency not in self._frequencies:
            errors.append(
                SitemapValidationError(
                    code="invalid_frequency",
                    message=f"Frequency must be one of: {', '.join(self._frequencies)}",
                    field="frequency",
                )
            )
        try:
            priority_value = float(priority)
        except (TypeError, ValueError):
            priority_value = math.nan
        if not 0.0 <= priority_value <= 1.0:
            errors.append(
                SitemapValidationError(
                    code="invalid_priority",
                    message="Priority must be a number between 0 and 1",
                    field="priority",
                )
            )
        if errors:
            return None, errors

        if self._repo.get_link_by_path(path) is not None:
            return None, [
                SitemapValidationError(
                    code="link_exists", message="Link already exists", field="path"
                )
            ]

        return self._repo.add_link(path, priority_value, frequency), []

    def delete_link(self, link_id: int) -> bool:
        return self._repo.delete_link(link_id)

    # Generation

    def _entry(
        self,
        path: str,
        last_modified: datetime,
        change_frequency: str,
        priority: float,
    ) -> SitemapEntry:
        return SitemapEntry(
            url=to_absolute(self._base_url, path),
            last_modified=last_modified,
            change_frequency=change_frequency,
            priority=priority,
        )

    def build(self) -> list[SitemapEntry]:
        now = self._clock.now_utc()
        settings = self.get_settings()
        home = clamp_priority(settings.home_priority, 1.0)
        page = clamp_priority(settings.page_priority, 0.8)
        post = clamp_priority(settings.post_priority, 0.9)

        entries: list[SitemapEntry] = [
            self._entry("/", now, "hourly", home),
            self._entry("/contact", now, "monthly", 0.3),
            self._entry("/privacy-policy", now, "yearly", 0.2),
            self._entry("/terms-of-service", now, "yearly", 0.2),
        ]

        for sport in SPORTS:
            for tab in FEED_TABS:
                entries.append(self._entry(f"/sports/{sport}/{tab}", now, "hourly", 0.8))

        entries.append(self._entry("/blog", now, "weekly", page))
        for category in self._content.list_blog_categories():
            if category.slug:
                entries.append(self._entry(f"/blog/{category.slug}", now, "weekly", page))

        for blog_post in self._content.list_published_posts(now):
            if not blog_post.slug:
                continue
            if blog_post.published_at is not None and blog_post.published_at > now:
                continue
            category_slug = blog_post.category_slug or "uncategorized"
            entries.append(
                self._entry(
                    f"/blog/{category_slug}/{blog_post.slug}",
                    blog_post.published_at or blog_post.updated_at,
                    "monthly",
                    post,
                )
            )

        entries.append(self._entry("/faqs", now, "monthly", page))
        for category in self._content.list_faq_categories():
            if category.slug:
                entries.append(self._entry(f"/faqs/{category.slug}", now, "weekly", page))
        for faq in self._content.list_published_faqs():
            if faq.slug:
                category_slug = faq.category_slug or "uncategorized"
                entries.append(
                    self._entry(f"/faqs/{category_slug}/{faq.slug}", faq.updated_at, "monthly", post)
                )

        for custom_page in self._content.list_published_pages():
            slug = custom_page.slug.strip()
            if not slug or slug in self._reserved:
                continue
            entries.append(self._entry(f"/{slug}", custom_page.updated_at, "monthly", page))

        for link in self._repo.list_links():
            path = link.path.strip()
            if not path:
                continue
            entries.append(
                self._entry(
                    path,
                    link.updated_at,
                    link.frequency or "weekly",
                    clamp_priority(link.priority, DEFAULT_LINK_PRIORITY),
                )
            )

        result = dedupe(entries)
        logger.debug("Sitemap built with %d entries", len(result))
        return result

    def render_xml(self) -> str:
        return render_sitemap_xml(self.build())
