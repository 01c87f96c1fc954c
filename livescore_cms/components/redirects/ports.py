"""
Redirects component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from .models import RedirectRule


class RedirectRepoPort(Protocol):
    """Repository interface for redirect rules."""

    def get_by_id(self, redirect_id: UUID) -> RedirectRule | None:
        """Get rule by ID."""
        ...

    def get_by_source(self, source: str) -> RedirectRule | None:
        """Get rule by exact source path."""
        ...

    def list_all(self) -> list[RedirectRule]:
        """List all rules, newest first."""
        ...

    def list_active(self) -> list[RedirectRule]:
        """List active rules only."""
        ...

    def save(self, rule: RedirectRule) -> RedirectRule:
        """Insert or update a rule."""
        ...

    def delete(self, redirect_id: UUID) -> None:
        """Delete a rule."""
        ...

    def increment_hits(self, redirect_id: UUID) -> None:
        """Add one to the rule's hit counter."""
        ...


class CacheInvalidatorPort(Protocol):
    """Hook called after any rule mutation."""

    def invalidate(self) -> None:
        ...


class ClockPort(Protocol):
    """Time source; monotonic() drives cache expiry."""

    def now_utc(self) -> datetime:
        ...

    def monotonic(self) -> float:
        ...
