"""
SEO component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class SeoRepoPort(Protocol):
    """Keyed JSON document storage."""

    def get(self, site_key: str, scope: str) -> dict[str, Any] | None:
        ...

    def save(self, site_key: str, scope: str, data: dict[str, Any]) -> None:
        ...
