"""
Public broken link report endpoint.

The site's 404 page posts here when a visitor lands on a dead link.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from livescore_cms.api.deps import get_broken_link_scanner
from livescore_cms.api.routes.admin_broken_links import broken_link_dict
from livescore_cms.api.schemas import serialize_errors
from livescore_cms.components.broken_links import BrokenLinkScanner

router = APIRouter()


class BrokenLinkReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    link_url: Any = Field(None, alias="linkUrl")
    source_slug: Any = Field(None, alias="sourceSlug")
    source_title: Any = Field(None, alias="sourceTitle")
    status_code: Any = Field(None, alias="statusCode")


@router.post("/broken-link")
def report_broken_link(
    report: BrokenLinkReport,
    scanner: BrokenLinkScanner = Depends(get_broken_link_scanner),
) -> dict[str, Any]:
    link, errors = scanner.record_report(
        link_url=report.link_url,
        source_slug=report.source_slug,
        source_title=report.source_title,
        status_code=report.status_code,
    )
    if errors:
        raise HTTPException(status_code=400, detail={"errors": serialize_errors(errors)})

    assert link is not None
    return {"ok": True, "link": broken_link_dict(link)}
