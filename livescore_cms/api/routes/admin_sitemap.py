"""
Admin sitemap API: priorities and custom links.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from livescore_cms.api.deps import get_sitemap_service, require_role
from livescore_cms.api.schemas import ValidationErrorResponse, serialize_errors
from livescore_cms.components.sitemap import SitemapLink, SitemapService, SitemapSettings
from livescore_cms.core.entities import Role, StaffUser

router = APIRouter()

require_seo_admin = require_role(Role.ADMIN.value, Role.SEO_MANAGER.value)


class SitemapSettingsRequest(BaseModel):
    home_priority: Any = None
    post_priority: Any = None
    page_priority: Any = None


class SitemapLinkRequest(BaseModel):
    path: str
    priority: Any = 0.7
    frequency: str = "weekly"


class SitemapLinkDeleteRequest(BaseModel):
    id: int


def _settings_dict(settings: SitemapSettings) -> dict[str, float]:
    return {
        "home_priority": settings.home_priority,
        "post_priority": settings.post_priority,
        "page_priority": settings.page_priority,
    }


def _link_dict(link: SitemapLink) -> dict[str, Any]:
    return {
        "id": link.id,
        "path": link.path,
        "priority": link.priority,
        "frequency": link.frequency,
        "created_at": link.created_at.isoformat(),
        "updated_at": link.updated_at.isoformat(),
    }


# --- Settings ---


@router.get("/sitemap/settings")
def get_settings(
    service: SitemapService = Depends(get_sitemap_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    return {"ok": True, "settings": _settings_dict(service.get_settings())}


@router.post("/sitemap/settings")
def save_settings(
    request: SitemapSettingsRequest,
    service: SitemapService = Depends(get_sitemap_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    settings = service.save_settings(
        home=request.home_priority,
        posts=request.post_priority,
        pages=request.page_priority,
    )
    return {"ok": True, "settings": _settings_dict(settings)}


# --- Custom Links ---


@router.get("/sitemap/links")
def list_links(
    service: SitemapService = Depends(get_sitemap_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    return {"ok": True, "links": [_link_dict(link) for link in service.list_links()]}


@router.post("/sitemap/links", responses={400: {"model": ValidationErrorResponse}})
def add_link(
    request: SitemapLinkRequest,
    service: SitemapService = Depends(get_sitemap_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    link, errors = service.add_link(request.path, request.priority, request.frequency)
    if errors:
        raise HTTPException(status_code=400, detail={"errors": serialize_errors(errors)})

    assert link is not None
    return {"ok": True, "link": _link_dict(link)}


@router.delete("/sitemap/links", responses={404: {"description": "Link not found"}})
def delete_link(
    request: SitemapLinkDeleteRequest,
    service: SitemapService = Depends(get_sitemap_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    if not service.delete_link(request.id):
        raise HTTPException(status_code=404, detail="Link not found")
    return {"ok": True}
