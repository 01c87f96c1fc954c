"""
Published CMS content as seen by the SEO tooling.

Editors own these rows; this service only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Category:
    slug: str
    name: str


@dataclass(frozen=True)
class PublishedPost:
    slug: str
    title: str
    content: str | None
    category_slug: str | None
    updated_at: datetime
    published_at: datetime | None = None


@dataclass(frozen=True)
class PublishedFaq:
    slug: str
    category_slug: str | None
    updated_at: datetime


@dataclass(frozen=True)
class PublishedPage:
    slug: str
    updated_at: datetime


# --- Staff ---


class Role(str, Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    SEO_MANAGER = "SEO_MANAGER"
    CONTENT_WRITER = "CONTENT_WRITER"
    DEVELOPER = "DEVELOPER"


@dataclass(frozen=True)
class StaffUser:
    """Identity carried by an admin access token."""

    id: str
    email: str
    role: str
