import logging
import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from livescore_cms.adapters.clock import SystemClock
from livescore_cms.adapters.sqlite.repos import (
    SQLiteBrokenLinkRepo,
    SQLiteContentSource,
    SQLiteRedirectRepo,
    SQLiteRobotsRepo,
    SQLiteSeoRepo,
    SQLiteSitemapRepo,
)
from livescore_cms.api.auth_utils import decode_access_token
from livescore_cms.components.broken_links import BrokenLinkScanner
from livescore_cms.components.redirects import (
    RedirectCache,
    RedirectConfig,
    RedirectResolver,
    RedirectService,
)
from livescore_cms.components.robots import RobotsService, normalize_base_url
from livescore_cms.components.seo import SeoLimitsConfig, SeoService
from livescore_cms.components.sitemap import SitemapService, SitemapSettings
from livescore_cms.core.entities import StaffUser
from livescore_cms.rules.loader import load_rules
from livescore_cms.rules.models import Rules

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = PROJECT_ROOT
        self.data_dir = os.environ.get("CMS_DATA_DIR", "./data")
        self.db_path = f"{self.data_dir}/cms.db"
        self.rules_path = Path(os.environ.get("CMS_RULES_PATH", str(self.base_dir / "rules.yaml")))
        self.migrations_dir = self.base_dir / "migrations"
        self.site_url = normalize_base_url(os.environ.get("SITE_URL"))
        self.redirect_cache_ttl_seconds = _cache_ttl_from_env(os.environ.get("REDIRECTS_CACHE_MS"))
        self.super_admin_email = os.environ.get("SUPER_ADMIN_EMAIL", "").strip().lower()


def _cache_ttl_from_env(raw: str | None) -> float | None:
    """REDIRECTS_CACHE_MS in seconds; None when unset or unusable."""
    if not raw:
        return None
    try:
        ms = int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric REDIRECTS_CACHE_MS=%r", raw)
        return None
    return ms / 1000 if ms > 0 else None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


def redirect_config_from_rules(rules: Rules, settings: Settings) -> RedirectConfig:
    ttl = settings.redirect_cache_ttl_seconds or rules.redirects.cache_ttl_seconds
    return RedirectConfig(
        cache_ttl_seconds=ttl,
        allowed_types=frozenset(rules.redirects.allowed_types),
        skip_prefixes=tuple(rules.redirects.skip_prefixes),
        skip_exact=tuple(rules.redirects.skip_exact),
    )


def get_redirect_config(
    rules: Rules = Depends(get_rules),
    settings: Settings = Depends(get_settings),
) -> RedirectConfig:
    return redirect_config_from_rules(rules, settings)


# --- Repos ---
def get_redirect_repo(settings: Settings = Depends(get_settings)) -> SQLiteRedirectRepo:
    return SQLiteRedirectRepo(settings.db_path)


def get_robots_repo(settings: Settings = Depends(get_settings)) -> SQLiteRobotsRepo:
    return SQLiteRobotsRepo(settings.db_path)


def get_seo_repo(settings: Settings = Depends(get_settings)) -> SQLiteSeoRepo:
    return SQLiteSeoRepo(settings.db_path)


def get_sitemap_repo(settings: Settings = Depends(get_settings)) -> SQLiteSitemapRepo:
    return SQLiteSitemapRepo(settings.db_path)


def get_broken_link_repo(settings: Settings = Depends(get_settings)) -> SQLiteBrokenLinkRepo:
    return SQLiteBrokenLinkRepo(settings.db_path)


def get_content_source(settings: Settings = Depends(get_settings)) -> SQLiteContentSource:
    return SQLiteContentSource(settings.db_path)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# --- Redirect Resolver ---

# One resolver (and its rule cache) per process, shared by the middleware,
# the check endpoint and the admin routes that invalidate it.
_resolver_instance: RedirectResolver | None = None


def get_redirect_resolver() -> RedirectResolver:
    """Get the process-wide redirect resolver."""
    global _resolver_instance
    if _resolver_instance is None:
        settings = get_settings()
        config = redirect_config_from_rules(get_rules(settings), settings)
        cache = RedirectCache(
            repo=SQLiteRedirectRepo(settings.db_path),
            ttl_seconds=config.cache_ttl_seconds,
            clock=get_clock(),
        )
        _resolver_instance = RedirectResolver(cache, config)
    return _resolver_instance


def reset_redirect_resolver() -> None:
    global _resolver_instance
    _resolver_instance = None


# --- Component Services ---
def get_redirect_service(
    repo: SQLiteRedirectRepo = Depends(get_redirect_repo),
    config: RedirectConfig = Depends(get_redirect_config),
    resolver: RedirectResolver = Depends(get_redirect_resolver),
) -> RedirectService:
    """Get redirect component service; mutations invalidate the shared cache."""
    return RedirectService(repo=repo, config=config, clock=get_clock(), invalidator=resolver.cache)


def get_robots_service(
    repo: SQLiteRobotsRepo = Depends(get_robots_repo),
    rules: Rules = Depends(get_rules),
    settings: Settings = Depends(get_settings),
) -> RobotsService:
    return RobotsService(
        repo=repo,
        site_url=settings.site_url,
        default_disallow=tuple(rules.robots.default_disallow),
    )


def get_seo_service(
    repo: SQLiteSeoRepo = Depends(get_seo_repo),
    rules: Rules = Depends(get_rules),
) -> SeoService:
    return SeoService(
        repo=repo,
        site_key=rules.seo.site_key,
        scopes=rules.seo.scopes,
        limits=SeoLimitsConfig(
            title_max=rules.seo.limits.title_max,
            description_max=rules.seo.limits.description_max,
        ),
    )


def get_sitemap_service(
    repo: SQLiteSitemapRepo = Depends(get_sitemap_repo),
    content: SQLiteContentSource = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
    settings: Settings = Depends(get_settings),
) -> SitemapService:
    priorities = rules.sitemap.default_priorities
    return SitemapService(
        repo=repo,
        content=content,
        site_url=settings.site_url,
        defaults=SitemapSettings(
            home_priority=priorities.home,
            post_priority=priorities.post,
            page_priority=priorities.page,
        ),
        reserved_slugs=rules.sitemap.reserved_slugs,
        allowed_frequencies=rules.sitemap.allowed_frequencies,
        clock=get_clock(),
    )


def get_broken_link_scanner(
    repo: SQLiteBrokenLinkRepo = Depends(get_broken_link_repo),
    content: SQLiteContentSource = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
    settings: Settings = Depends(get_settings),
) -> BrokenLinkScanner:
    return BrokenLinkScanner(
        repo=repo,
        content=content,
        site_url=settings.site_url,
        timeout_seconds=rules.broken_links.timeout_seconds,
        max_concurrency=rules.broken_links.max_concurrency,
        clock=get_clock(),
    )


# --- Auth ---
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> StaffUser:
    token = credentials.credentials if credentials else None

    # HttpOnly cookie set by the admin frontend
    if not token:
        cookie_token = request.cookies.get("access_token")
        if cookie_token:
            token = cookie_token.removeprefix("Bearer ").strip()

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None or not isinstance(user_id, str):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return StaffUser(
        id=user_id,
        email=str(payload.get("email") or ""),
        role=str(payload.get("role") or ""),
    )


def require_role(*roles: str) -> Callable[..., StaffUser]:
    """Dependency factory: the current user must hold one of the given roles."""
    allowed = frozenset(roles)

    def dependency(
        user: StaffUser = Depends(get_current_user),
        settings: Settings = Depends(get_settings),
    ) -> StaffUser:
        if settings.super_admin_email and user.email.lower() == settings.super_admin_email:
            return user
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return user

    return dependency
