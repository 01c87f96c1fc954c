"""
SEO component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SeoDocument:
    """Resolved SEO document for one scope."""

    scope: str
    data: dict[str, Any]
    is_default: bool = False


@dataclass(frozen=True)
class SeoMeta:
    title: str
    description: str
    h1: str


@dataclass(frozen=True)
class SeoValidationError:
    code: str
    message: str
    field: str | None = None
