import json
import sqlite3
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from livescore_cms.components.broken_links import BrokenLink
from livescore_cms.components.redirects import RedirectRule
from livescore_cms.components.sitemap import SitemapLink, SitemapSettings
from livescore_cms.core.entities import Category, PublishedFaq, PublishedPage, PublishedPost


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _parse_dt(value: str | None) -> datetime | None:
    if not value:
        return None
    dt = datetime.fromisoformat(value)
    return dt if dt.tzinfo else dt.replace(tzinfo=UTC)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class _SQLiteRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _fetch_all(self, query: str, params: tuple[Any, ...] = ()) -> list[dict[str, Any]]:
        conn = self._get_conn()
        try:
            return conn.execute(query, params).fetchall()
        finally:
            conn.close()

    def _fetch_one(self, query: str, params: tuple[Any, ...] = ()) -> dict[str, Any] | None:
        conn = self._get_conn()
        try:
            row: dict[str, Any] | None = conn.execute(query, params).fetchone()
            return row
        finally:
            conn.close()

    def _execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Run a write statement; returns the affected row count."""
        conn = self._get_conn()
        try:
            cursor = conn.execute(query, params)
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()


class SQLiteRedirectRepo(_SQLiteRepo):
    def save(self, rule: RedirectRule) -> RedirectRule:
        self._execute(
            """
            INSERT INTO redirects (
                id, source, destination, type, is_active, hits, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                source=excluded.source,
                destination=excluded.destination,
                type=excluded.type,
                is_active=excluded.is_active,
                updated_at=excluded.updated_at
            """,
            (
                str(rule.id),
                rule.source,
                rule.destination,
                rule.type,
                rule.is_active,
                rule.hits,
                rule.created_at.isoformat(),
                rule.updated_at.isoformat(),
            ),
        )
        return rule

    def get_by_id(self, redirect_id: UUID) -> RedirectRule | None:
        row = self._fetch_one("SELECT * FROM redirects WHERE id = ?", (str(redirect_id),))
        return self._map_row(row) if row else None

    def get_by_source(self, source: str) -> RedirectRule | None:
        row = self._fetch_one("SELECT * FROM redirects WHERE source = ?", (source,))
        return self._map_row(row) if row else None

    def list_all(self) -> list[RedirectRule]:
        rows = self._fetch_all("SELECT * FROM redirects ORDER BY created_at DESC")
        return [self._map_row(r) for r in rows]

    def list_active(self) -> list[RedirectRule]:
        rows = self._fetch_all(
            "SELECT * FROM redirects WHERE is_active = 1 ORDER BY updated_at DESC"
        )
        return [self._map_row(r) for r in rows]

    def delete(self, redirect_id: UUID) -> None:
        self._execute("DELETE FROM redirects WHERE id = ?", (str(redirect_id),))

    def increment_hits(self, redirect_id: UUID) -> None:
        self._execute("UPDATE redirects SET hits = hits + 1 WHERE id = ?", (str(redirect_id),))

    def _map_row(self, row: dict[str, Any]) -> RedirectRule:
        return RedirectRule(
            id=UUID(row["id"]),
            source=row["source"],
            destination=row["destination"],
            type=int(row["type"]),
            is_active=bool(row["is_active"]),
            hits=int(row["hits"]),
            created_at=_parse_dt(row["created_at"]) or datetime.now(UTC),
            updated_at=_parse_dt(row["updated_at"]) or datetime.now(UTC),
        )


class SQLiteRobotsRepo(_SQLiteRepo):
    def get_content(self) -> str | None:
        row = self._fetch_one("SELECT content FROM robots_txt ORDER BY updated_at DESC LIMIT 1")
        return row["content"] if row else None

    def save_content(self, content: str) -> None:
        conn = self._get_conn()
        try:
            first = conn.execute("SELECT id FROM robots_txt ORDER BY id LIMIT 1").fetchone()
            if first:
                conn.execute(
                    "UPDATE robots_txt SET content = ?, updated_at = ? WHERE id = ?",
                    (content, _now_iso(), first["id"]),
                )
            else:
                conn.execute(
                    "INSERT INTO robots_txt (content, updated_at) VALUES (?, ?)",
                    (content, _now_iso()),
                )
            conn.commit()
        finally:
            conn.close()


class SQLiteSeoRepo(_SQLiteRepo):
    def get(self, site_key: str, scope: str) -> dict[str, Any] | None:
        row = self._fetch_one(
            "SELECT data_json FROM seo_documents WHERE site_key = ? AND scope = ?",
            (site_key, scope),
        )
        if not row:
            return None
        data: dict[str, Any] = json.loads(row["data_json"])
        return data

    def save(self, site_key: str, scope: str, data: dict[str, Any]) -> None:
        self._execute(
            """
            INSERT INTO seo_documents (site_key, scope, data_json, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(site_key, scope) DO UPDATE SET
                data_json=excluded.data_json,
                updated_at=excluded.updated_at
            """,
            (site_key, scope, json.dumps(data), _now_iso()),
        )


class SQLiteSitemapRepo(_SQLiteRepo):
    def get_settings(self) -> SitemapSettings | None:
        row = self._fetch_one("SELECT * FROM sitemap_settings ORDER BY id LIMIT 1")
        if not row:
            return None
        return SitemapSettings(
            home_priority=float(row["home_priority"]),
            post_priority=float(row["post_priority"]),
            page_priority=float(row["page_priority"]),
        )

    def save_settings(self, settings: SitemapSettings) -> SitemapSettings:
        conn = self._get_conn()
        try:
            first = conn.execute("SELECT id FROM sitemap_settings ORDER BY id LIMIT 1").fetchone()
            params = (
                settings.home_priority,
                settings.post_priority,
                settings.page_priority,
                _now_iso(),
            )
            if first:
                conn.execute(
                    """
                    UPDATE sitemap_settings
                    SET home_priority = ?, post_priority = ?, page_priority = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (*params, first["id"]),
                )
            else:
                conn.execute(
                    """
                    INSERT INTO sitemap_settings
                        (home_priority, post_priority, page_priority, updated_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    params,
                )
            conn.commit()
            return settings
        finally:
            conn.close()

    def list_links(self) -> list[SitemapLink]:
        rows = self._fetch_all("SELECT * FROM sitemap_links ORDER BY path ASC")
        return [self._map_link(r) for r in rows]

    def get_link_by_path(self, path: str) -> SitemapLink | None:
        row = self._fetch_one("SELECT * FROM sitemap_links WHERE path = ?", (path,))
        return self._map_link(row) if row else None

    def add_link(self, path: str, priority: float, frequency: str) -> SitemapLink:
        now = _now_iso()
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                """
                INSERT INTO sitemap_links (path, priority, frequency, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (path, priority, frequency, now, now),
            )
            conn.commit()
            link_id = cursor.lastrowid
        finally:
            conn.close()

        row = self._fetch_one("SELECT * FROM sitemap_links WHERE id = ?", (link_id,))
        assert row is not None
        return self._map_link(row)

    def delete_link(self, link_id: int) -> bool:
        return self._execute("DELETE FROM sitemap_links WHERE id = ?", (link_id,)) > 0

    def _map_link(self, row: dict[str, Any]) -> SitemapLink:
        return SitemapLink(
            id=int(row["id"]),
            path=row["path"],
            priority=float(row["priority"]),
            frequency=row["frequency"],
            created_at=_parse_dt(row["created_at"]) or datetime.now(UTC),
            updated_at=_parse_dt(row["updated_at"]) or datetime.now(UTC),
        )


class SQLiteBrokenLinkRepo(_SQLiteRepo):
    def list_all(self) -> list[BrokenLink]:
        rows = self._fetch_all("SELECT * FROM broken_links ORDER BY checked_at DESC, id ASC")
        return [self._map_row(r) for r in rows]

    def add(self, link: BrokenLink) -> BrokenLink:
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                """
                INSERT INTO broken_links
                    (link_url, source_slug, source_title, status_code, checked_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                self._params(link),
            )
            conn.commit()
            link_id = cursor.lastrowid
        finally:
            conn.close()
        return BrokenLink(
            id=link_id,
            link_url=link.link_url,
            source_slug=link.source_slug,
            source_title=link.source_title,
            status_code=link.status_code,
            checked_at=link.checked_at,
        )

    def replace_all(self, links: Sequence[BrokenLink]) -> None:
        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM broken_links")
                conn.executemany(
                    """
                    INSERT INTO broken_links
                        (link_url, source_slug, source_title, status_code, checked_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [self._params(link) for link in links],
                )
        finally:
            conn.close()

    def _params(self, link: BrokenLink) -> tuple[Any, ...]:
        return (
            link.link_url,
            link.source_slug,
            link.source_title,
            link.status_code,
            link.checked_at.isoformat(),
        )

    def _map_row(self, row: dict[str, Any]) -> BrokenLink:
        return BrokenLink(
            id=int(row["id"]),
            link_url=row["link_url"],
            source_slug=row["source_slug"],
            source_title=row["source_title"],
            status_code=int(row["status_code"]),
            checked_at=_parse_dt(row["checked_at"]) or datetime.now(UTC),
        )


class SQLiteContentSource(_SQLiteRepo):
    """Read-only access to published blog posts, FAQs and pages."""

    def list_published_posts(self, now: datetime | None = None) -> list[PublishedPost]:
        rows = self._fetch_all(
            """
            SELECT p.slug, p.title, p.content, p.published_at, p.updated_at,
                   c.slug AS category_slug
            FROM blog_posts p
            LEFT JOIN blog_categories c ON c.id = p.category_id
            WHERE p.is_published = 1 AND p.deleted_at IS NULL
            ORDER BY COALESCE(p.published_at, p.updated_at) DESC
            """
        )
        posts = [
            PublishedPost(
                slug=r["slug"],
                title=r["title"],
                content=r["content"],
                category_slug=r["category_slug"],
                published_at=_parse_dt(r["published_at"]),
                updated_at=_parse_dt(r["updated_at"]) or datetime.now(UTC),
            )
            for r in rows
        ]
        if now is None:
            return posts
        return [p for p in posts if p.published_at is None or p.published_at <= now]

    def list_blog_categories(self) -> list[Category]:
        rows = self._fetch_all("SELECT slug, name FROM blog_categories ORDER BY name ASC")
        return [Category(slug=r["slug"], name=r["name"]) for r in rows]

    def list_faq_categories(self) -> list[Category]:
        rows = self._fetch_all("SELECT slug, name FROM faq_categories ORDER BY name ASC")
        return [Category(slug=r["slug"], name=r["name"]) for r in rows]

    def list_published_faqs(self) -> list[PublishedFaq]:
        rows = self._fetch_all(
            """
            SELECT f.slug, f.updated_at, c.slug AS category_slug
            FROM faqs f
            LEFT JOIN faq_categories c ON c.id = f.category_id
            WHERE f.is_published = 1
            ORDER BY f.sort_order ASC, f.updated_at DESC
            """
        )
        return [
            PublishedFaq(
                slug=r["slug"],
                category_slug=r["category_slug"],
                updated_at=_parse_dt(r["updated_at"]) or datetime.now(UTC),
            )
            for r in rows
        ]

    def list_published_pages(self) -> list[PublishedPage]:
        rows = self._fetch_all(
            "SELECT slug, updated_at FROM pages WHERE is_published = 1 ORDER BY updated_at DESC"
        )
        return [
            PublishedPage(slug=r["slug"], updated_at=_parse_dt(r["updated_at"]) or datetime.now(UTC))
            for r in rows
        ]
