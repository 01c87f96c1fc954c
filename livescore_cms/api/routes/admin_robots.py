"""
Admin robots.txt API.

Stored content is returned as-is; the preview shows how the public
robots.txt will be parsed.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from livescore_cms.api.deps import get_robots_service, require_role
from livescore_cms.components.robots import RobotsService, parse_robots_txt
from livescore_cms.core.entities import Role, StaffUser

router = APIRouter()

require_seo_admin = require_role(Role.ADMIN.value, Role.SEO_MANAGER.value)


class RobotsUpdateRequest(BaseModel):
    content: str = ""


@router.get("/robots")
def get_robots(
    service: RobotsService = Depends(get_robots_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    document = service.get_document()
    return {
        "ok": True,
        "content": document.content,
        "is_default": document.is_default,
        "default_content": service.default_content(),
    }


@router.post("/robots")
def save_robots(
    request: RobotsUpdateRequest,
    service: RobotsService = Depends(get_robots_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    document = service.save(request.content)
    return {"ok": True, "content": document.content}


@router.get("/robots/preview")
def preview_robots(
    service: RobotsService = Depends(get_robots_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    document = service.get_document()
    content = document.content.strip() or service.default_content()
    policy = parse_robots_txt(content, service.fallback_sitemap)
    return {"ok": True, "policy": policy.to_dict()}
