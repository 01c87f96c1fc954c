"""
RedirectService - redirect rule administration with validation.

Key behaviors:
- Sources are stored with a single leading slash
- Destinations keep absolute http(s) URLs, otherwise get a leading slash
- 410/451 rules may omit a destination
- A rule may not point at its own source
- Sources are unique
- Every mutation invalidates the resolver cache
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from uuid import UUID, uuid4

from livescore_cms.adapters.clock import SystemClock

from .models import (
    REDIRECT_TYPES,
    TERMINAL_TYPES,
    RedirectRule,
    RedirectValidationError,
)
from .ports import CacheInvalidatorPort, ClockPort, RedirectRepoPort

logger = logging.getLogger(__name__)

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


# --- Configuration ---


@dataclass(frozen=True)
class RedirectConfig:
    """Redirect configuration from rules."""

    cache_ttl_seconds: float = 30.0
    allowed_types: frozenset[int] = REDIRECT_TYPES | TERMINAL_TYPES
    skip_prefixes: tuple[str, ...] = ("/_next", "/static", "/api", "/favicon")
    skip_exact: tuple[str, ...] = ("/robots.txt", "/sitemap.xml")
    default_type: int = 301


DEFAULT_CONFIG = RedirectConfig()


# --- Path Helpers ---


def normalize_path(path: str) -> str:
    """Ensure a single leading slash; empty input maps to root."""
    if not path:
        return "/"
    if not path.startswith("/"):
        return "/" + path
    return "/" + path.lstrip("/")


def is_absolute_url(value: str) -> bool:
    """True for http:// and https:// URLs."""
    return bool(_ABSOLUTE_URL.match(value or ""))


def normalize_destination(destination: str) -> str:
    """Absolute URLs are kept as-is, anything else becomes an absolute path."""
    destination = (destination or "").strip()
    if is_absolute_url(destination):
        return destination
    return normalize_path(destination)


# --- Validation ---


def _same_page(source: str, destination: str) -> bool:
    """Paths equal up to a trailing slash; requests match either form."""
    return (source.rstrip("/") or "/") == (destination.rstrip("/") or "/")


def validate_redirect(
    source: str,
    destination: str,
    type_: int,
    config: RedirectConfig = DEFAULT_CONFIG,
) -> list[RedirectValidationError]:
    """Validate raw admin input before normalization is persisted."""
    errors: list[RedirectValidationError] = []

    if not source or not source.strip():
        errors.append(
            RedirectValidationError(
                code="source_required",
                message="Source path is required",
                field="source",
            )
        )

    if type_ not in config.allowed_types:
        allowed = ", ".join(str(t) for t in sorted(config.allowed_types))
        errors.append(
            RedirectValidationError(
                code="invalid_type",
                message=f"Type must be one of: {allowed}",
                field="type",
            )
        )

    has_destination = bool(destination and destination.strip())
    if not has_destination and type_ not in TERMINAL_TYPES:
        errors.append(
            RedirectValidationError(
                code="destination_required",
                message="Destination is required for redirect types",
                field="destination",
            )
        )

    if errors:
        return errors

    if has_destination and _same_page(
        normalize_path(source.strip()), normalize_destination(destination)
    ):
        errors.append(
            RedirectValidationError(
                code="infinite_loop",
                message="Infinite Loop Detected",
                field="destination",
            )
        )

    return errors


# --- Service ---


class RedirectService:
    """Admin-side operations on redirect rules."""

    def __init__(
        self,
        repo: RedirectRepoPort,
        config: RedirectConfig | None = None,
        clock: ClockPort | None = None,
        invalidator: CacheInvalidatorPort | None = None,
    ) -> None:
        self._repo = repo
        self._config = config or DEFAULT_CONFIG
        self._clock = clock or SystemClock()
        self._invalidator = invalidator

    def list_all(self) -> list[RedirectRule]:
        return self._repo.list_all()

    def list_active(self) -> list[RedirectRule]:
        return self._repo.list_active()

    def get(self, redirect_id: UUID) -> RedirectRule | None:
        return self._repo.get_by_id(redirect_id)

    def create(
        self,
        source: str,
        destination: str | None,
        type_: int | None = None,
    ) -> tuple[RedirectRule | None, list[RedirectValidationError]]:
        """Create a rule. Returns (rule, []) or (None, errors)."""
        type_ = self._config.default_type if type_ is None else type_
        destination = destination or ""

        errors = validate_redirect(source, destination, type_, self._config)
        if errors:
            return None, errors

        norm_source = normalize_path(source.strip())
        norm_destination = normalize_destination(destination) if destination.strip() else ""

        if self._repo.get_by_source(norm_source) is not None:
            return None, [
                RedirectValidationError(
                    code="source_exists",
                    message="Redirect source already exists",
                    field="source",
                )
            ]

        now = self._clock.now_utc()
        rule = RedirectRule(
            id=uuid4(),
            source=norm_source,
            destination=norm_destination,
            type=type_,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        saved = self._repo.save(rule)
        self._invalidate()
        logger.info("Created redirect %s -> %s (%d)", saved.source, saved.destination, saved.type)
        return saved, []

    def set_active(
        self,
        redirect_id: UUID,
        is_active: bool,
    ) -> tuple[RedirectRule | None, list[RedirectValidationError]]:
        rule = self._repo.get_by_id(redirect_id)
        if rule is None:
            return None, [
                RedirectValidationError(
                    code="not_found",
                    message=f"Redirect {redirect_id} not found",
                )
            ]

        updated = replace(rule, is_active=is_active, updated_at=self._clock.now_utc())
        saved = self._repo.save(updated)
        self._invalidate()
        return saved, []

    def delete(self, redirect_id: UUID) -> bool:
        if self._repo.get_by_id(redirect_id) is None:
            return False
        self._repo.delete(redirect_id)
        self._invalidate()
        logger.info("Deleted redirect %s", redirect_id)
        return True

    def record_hit(self, redirect_id: UUID) -> None:
        """Increment the hit counter; errors propagate to the caller."""
        self._repo.increment_hits(redirect_id)

    def _invalidate(self) -> None:
        if self._invalidator is not None:
            self._invalidator.invalidate()


def create_redirect_service(
    repo: RedirectRepoPort,
    config: RedirectConfig | None = None,
    clock: ClockPort | None = None,
    invalidator: CacheInvalidatorPort | None = None,
) -> RedirectService:
    """Factory function for RedirectService."""
    return RedirectService(repo=repo, config=config, clock=clock, invalidator=invalidator)
