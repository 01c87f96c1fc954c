"""
Admin broken links API: report and scan trigger.
"""

from typing import Any

from fastapi import APIRouter, Depends

from livescore_cms.api.deps import get_broken_link_scanner, require_role
from livescore_cms.components.broken_links import BrokenLink, BrokenLinkScanner
from livescore_cms.core.entities import Role, StaffUser

router = APIRouter()

require_seo_admin = require_role(Role.ADMIN.value, Role.SEO_MANAGER.value)


def broken_link_dict(link: BrokenLink) -> dict[str, Any]:
    return {
        "id": link.id,
        "link_url": link.link_url,
        "source_slug": link.source_slug,
        "source_title": link.source_title,
        "status_code": link.status_code,
        "checked_at": link.checked_at.isoformat(),
    }


@router.get("/broken-links")
def list_broken_links(
    scanner: BrokenLinkScanner = Depends(get_broken_link_scanner),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    return {"ok": True, "links": [broken_link_dict(link) for link in scanner.list_report()]}


@router.post("/broken-links")
async def scan_broken_links(
    scanner: BrokenLinkScanner = Depends(get_broken_link_scanner),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    result = await scanner.scan()
    return {"ok": True, "count": result.count}
