"""
Sitemap component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

CHANGE_FREQUENCIES = ("always", "hourly", "daily", "weekly", "monthly", "yearly", "never")


@dataclass(frozen=True)
class SitemapSettings:
    """Admin-controlled priorities for generated entries."""

    home_priority: float = 1.0
    post_priority: float = 0.9
    page_priority: float = 0.8


@dataclass(frozen=True)
class SitemapLink:
    """Manually added sitemap path."""

    id: int
    path: str
    priority: float
    frequency: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: datetime
    change_frequency: str | None = None
    priority: float | None = None


@dataclass(frozen=True)
class SitemapValidationError:
    code: str
    message: str
    field: str | None = None
