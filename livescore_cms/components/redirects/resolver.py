"""
Redirect resolution against a short-lived snapshot of active rules.

Key behaviors:
- The snapshot is built lazily on the first lookup after expiry
- A rebuild replaces the snapshot with one reference swap; readers never see a
  partially built map
- A failed rebuild keeps serving the previous snapshot (or nothing) and the
  request passes through
- Trailing-slash variants of the request path are tried, request path first
- Only GET/HEAD requests are considered
- A rule pointing at the request path itself is ignored
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from urllib.parse import urlsplit

from livescore_cms.adapters.clock import SystemClock

from ._impl import DEFAULT_CONFIG, RedirectConfig, is_absolute_url, normalize_path
from .models import REDIRECT_TYPES, TERMINAL_TYPES, RedirectAction, RedirectRule
from .ports import ClockPort, RedirectRepoPort

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, RedirectRule] = MappingProxyType({})


def candidate_paths(path: str) -> list[str]:
    """Request path, then without and with a trailing slash (deduplicated)."""
    p = normalize_path(path)
    if p == "/":
        return ["/"]
    no_slash = p.rstrip("/") or "/"
    with_slash = no_slash + "/"
    return list(dict.fromkeys([p, no_slash, with_slash]))


def should_skip(path: str, config: RedirectConfig = DEFAULT_CONFIG) -> bool:
    """True for paths that never consult the redirect table."""
    if path in config.skip_exact:
        return True
    if any(path.startswith(prefix) for prefix in config.skip_prefixes):
        return True
    # static assets
    return "." in path


@dataclass(frozen=True)
class CacheSnapshot:
    expires_at: float
    rules: Mapping[str, RedirectRule]


class RedirectCache:
    """Process-local TTL cache of active rules keyed by normalized source."""

    def __init__(
        self,
        repo: RedirectRepoPort,
        ttl_seconds: float = DEFAULT_CONFIG.cache_ttl_seconds,
        clock: ClockPort | None = None,
    ) -> None:
        self._repo = repo
        self._ttl = ttl_seconds
        self._clock = clock or SystemClock()
        self._snapshot: CacheSnapshot | None = None

    @property
    def snapshot(self) -> CacheSnapshot | None:
        return self._snapshot

    def rules(self) -> Mapping[str, RedirectRule]:
        """Current rule map, rebuilding it first if expired."""
        now = self._clock.monotonic()
        snapshot = self._snapshot
        if snapshot is not None and snapshot.expires_at > now:
            return snapshot.rules
        return self.refresh(now)

    def refresh(self, now: float | None = None) -> Mapping[str, RedirectRule]:
        if now is None:
            now = self._clock.monotonic()
        stale = self._snapshot

        try:
            rows = self._repo.list_active()
        except Exception:
            logger.exception("Redirect rule refresh failed; serving %s snapshot",
                             "stale" if stale else "empty")
            return stale.rules if stale is not None else _EMPTY

        table: dict[str, RedirectRule] = {}
        for rule in rows:
            if not rule.is_active or not rule.source:
                continue
            table[normalize_path(rule.source)] = rule

        fresh = CacheSnapshot(expires_at=now + self._ttl, rules=MappingProxyType(table))
        self._snapshot = fresh
        logger.debug("Redirect cache rebuilt with %d rules", len(table))
        return fresh.rules

    def invalidate(self) -> None:
        self._snapshot = None


class RedirectResolver:
    """Decides whether a request is redirected, terminated or passed through."""

    def __init__(self, cache: RedirectCache, config: RedirectConfig = DEFAULT_CONFIG) -> None:
        self.cache = cache
        self.config = config

    def should_skip(self, path: str) -> bool:
        return should_skip(path, self.config)

    def resolve(self, path: str) -> RedirectRule | None:
        table = self.cache.rules()
        for candidate in candidate_paths(path):
            rule = table.get(candidate)
            if rule is not None:
                return rule
        return None

    def apply(self, method: str, path: str, host: str | None = None) -> RedirectAction:
        if method.upper() not in ("GET", "HEAD"):
            return RedirectAction.pass_through()

        path = normalize_path(path)
        if self.should_skip(path):
            return RedirectAction.pass_through()

        rule = self.resolve(path)
        if rule is None:
            return RedirectAction.pass_through()

        if is_self_loop(rule, path, host):
            logger.warning("Ignoring self-referencing redirect %s -> %s", rule.source, rule.destination)
            return RedirectAction.pass_through()

        if rule.type in TERMINAL_TYPES:
            return RedirectAction.terminal(rule.type, rule)

        if rule.type in REDIRECT_TYPES and rule.destination:
            return RedirectAction.redirect(destination_location(rule.destination), rule.type, rule)

        logger.warning("Redirect %s has unusable type %s; passing through", rule.source, rule.type)
        return RedirectAction.pass_through()


def destination_location(destination: str) -> str:
    if is_absolute_url(destination):
        return destination
    return normalize_path(destination)


def _bare_host(host: str | None) -> str:
    return (host or "").lower().split(":")[0]


def is_self_loop(rule: RedirectRule, path: str, host: str | None = None) -> bool:
    """True when following the rule would land on the same path."""
    if not rule.destination:
        return False

    if is_absolute_url(rule.destination):
        parts = urlsplit(rule.destination)
        if host is not None and _bare_host(parts.netloc) != _bare_host(host):
            return False
        return normalize_path(parts.path) == path

    return normalize_path(urlsplit(rule.destination).path) == path
