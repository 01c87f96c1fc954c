import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from livescore_cms import __version__
from livescore_cms.adapters.sqlite.migrator import SQLiteMigrator
from livescore_cms.api.deps import get_settings
from livescore_cms.api.middleware import RedirectMiddleware
from livescore_cms.rules.loader import load_rules, validate_ops_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=os.environ.get("CMS_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules)
        logger.info("Rules loaded from %s", settings.rules_path)

        os.makedirs(settings.data_dir, exist_ok=True)
        SQLiteMigrator(settings.db_path, str(settings.migrations_dir)).run_migrations()
    except Exception:
        logger.critical("Startup failed", exc_info=True)
        raise

    yield
    # Shutdown cleanup if needed


app = FastAPI(
    title="Livescore CMS API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from livescore_cms.api.routes import (  # noqa: E402
    admin_broken_links,
    admin_redirects,
    admin_robots,
    admin_seo,
    admin_sitemap,
    public_broken_links,
    public_redirects,
    public_seo,
    redirect_check,
)

app.include_router(redirect_check.router, prefix="/api", tags=["Redirects"])
app.include_router(public_redirects.router, prefix="/api/public", tags=["Public"])
app.include_router(public_broken_links.router, prefix="/api/public", tags=["Public"])
app.include_router(admin_redirects.router, prefix="/api/admin/seo", tags=["Admin Redirects"])
app.include_router(admin_robots.router, prefix="/api/admin/seo", tags=["Admin Robots"])
app.include_router(admin_seo.router, prefix="/api/admin/seo", tags=["Admin SEO"])
app.include_router(admin_sitemap.router, prefix="/api/admin/seo", tags=["Admin Sitemap"])
app.include_router(
    admin_broken_links.router, prefix="/api/admin/seo", tags=["Admin Broken Links"]
)
app.include_router(public_seo.router, prefix="", tags=["SEO"])


# Redirect rules are applied before routing
app.add_middleware(RedirectMiddleware)

# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
