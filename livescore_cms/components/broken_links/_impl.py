"""
BrokenLinkScanner - finds dead links in published blog posts.

Key behaviors:
- Links are href values that are http(s) URLs or root-relative paths
- Relative links are checked against the site URL
- Each distinct URL gets one HEAD request, concurrency is bounded
- Status >= 400 is broken; a failed request is recorded with status 0
- A failed check never aborts the scan
- A scan replaces the previous report
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

import httpx

from livescore_cms.adapters.clock import SystemClock
from livescore_cms.core.entities import PublishedPost
from livescore_cms.core.ports import ContentSourcePort

from .models import (
    NETWORK_ERROR_STATUS,
    BrokenLink,
    BrokenLinkValidationError,
    ScanResult,
)
from .ports import BrokenLinkRepoPort

logger = logging.getLogger(__name__)

_HREF = re.compile(r"""href=["'](https?://[^"']+|/(?!/)[^"']*)["']""", re.IGNORECASE)

MAX_URL_LENGTH = 2048
MAX_LABEL_LENGTH = 255
USER_AGENT = "livescore-cms-linkcheck/1.0"


def extract_urls(text: str | None) -> list[str]:
    """Link targets in document order, duplicates kept."""
    if not text:
        return []
    return _HREF.findall(text)


class BrokenLinkScanner:
    """Scan published posts and keep the broken-link report."""

    def __init__(
        self,
        repo: BrokenLinkRepoPort,
        content: ContentSourcePort,
        site_url: str,
        timeout_seconds: float = 5.0,
        max_concurrency: int = 8,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Any = None,
    ) -> None:
        self._repo = repo
        self._content = content
        self._base_url = (site_url or "").rstrip("/") or "http://localhost:3000"
        self._timeout = timeout_seconds
        self._max_concurrency = max(1, max_concurrency)
        self._transport = transport
        self._clock = clock or SystemClock()

    def list_report(self) -> list[BrokenLink]:
        return self._repo.list_all()

    def check_url_for(self, url: str) -> str:
        return f"{self._base_url}{url}" if url.startswith("/") else url

    async def _check(
        self,
        client: httpx.AsyncClient,
        semaphore: asyncio.Semaphore,
        url: str,
    ) -> int:
        async with semaphore:
            try:
                response = await client.head(self.check_url_for(url))
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
                logger.info("Link check failed for %s: %s", url, e)
                return NETWORK_ERROR_STATUS
            return response.status_code

    async def scan(self) -> ScanResult:
        posts: list[PublishedPost] = self._content.list_published_posts(self._clock.now_utc())

        targets: list[tuple[PublishedPost, str]] = [
            (post, url) for post in posts for url in extract_urls(post.content)
        ]
        unique_urls = list(dict.fromkeys(url for _, url in targets))

        semaphore = asyncio.Semaphore(self._max_concurrency)
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            statuses = await asyncio.gather(
                *(self._check(client, semaphore, url) for url in unique_urls)
            )
        status_by_url = dict(zip(unique_urls, statuses, strict=True))

        checked_at = self._clock.now_utc()
        broken = tuple(
            BrokenLink(
                link_url=url,
                source_slug=post.slug,
                source_title=post.title,
                status_code=status_by_url[url],
                checked_at=checked_at,
            )
            for post, url in targets
            if status_by_url[url] == NETWORK_ERROR_STATUS or status_by_url[url] >= 400
        )

        self._repo.replace_all(broken)
        logger.info(
            "Broken link scan: %d posts, %d urls, %d broken",
            len(posts),
            len(unique_urls),
            len(broken),
        )
        return ScanResult(checked=len(unique_urls), broken=broken)

    def record_report(
        self,
        link_url: Any,
        source_slug: Any = None,
        source_title: Any = None,
        status_code: Any = None,
    ) -> tuple[BrokenLink | None, list[BrokenLinkValidationError]]:
        """Store a broken link reported by a visitor's browser."""
        url = str(link_url or "")[:MAX_URL_LENGTH]
        if not url:
            return None, [
                BrokenLinkValidationError(
                    code="link_url_required", message="linkUrl required", field="linkUrl"
                )
            ]

        try:
            status = int(status_code) if status_code else 404
        except (TypeError, ValueError):
            status = 404

        link = BrokenLink(
            link_url=url,
            source_slug=str(source_slug or "(direct)")[:MAX_LABEL_LENGTH],
            source_title=str(source_title or "(unknown)")[:MAX_LABEL_LENGTH],
            status_code=status,
            checked_at=self._clock.now_utc(),
        )
        return self._repo.add(link), []
