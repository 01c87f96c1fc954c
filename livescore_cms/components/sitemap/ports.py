"""
Sitemap component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from .models import SitemapLink, SitemapSettings


class SitemapRepoPort(Protocol):
    """Storage for sitemap settings (singleton) and custom links."""

    def get_settings(self) -> SitemapSettings | None:
        ...

    def save_settings(self, settings: SitemapSettings) -> SitemapSettings:
        ...

    def list_links(self) -> list[SitemapLink]:
        """Custom links ordered by path."""
        ...

    def get_link_by_path(self, path: str) -> SitemapLink | None:
        ...

    def add_link(self, path: str, priority: float, frequency: str) -> SitemapLink:
        ...

    def delete_link(self, link_id: int) -> bool:
        """Returns False when no such link exists."""
        ...
