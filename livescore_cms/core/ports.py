from __future__ import annotations

from datetime import datetime
from typing import Protocol

from livescore_cms.core.entities import Category, PublishedFaq, PublishedPage, PublishedPost


class ContentSourcePort(Protocol):
    """Read access to published CMS content."""

    def list_published_posts(self, now: datetime | None = None) -> list[PublishedPost]:
        """Published, not deleted, not scheduled past `now`."""
        ...

    def list_blog_categories(self) -> list[Category]:
        ...

    def list_faq_categories(self) -> list[Category]:
        ...

    def list_published_faqs(self) -> list[PublishedFaq]:
        ...

    def list_published_pages(self) -> list[PublishedPage]:
        ...
