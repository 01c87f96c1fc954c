"""
Public SEO files: robots.txt, sitemap.xml and resolved SEO documents.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse, Response

from livescore_cms.api.deps import (
    get_robots_service,
    get_rules,
    get_seo_service,
    get_sitemap_service,
)
from livescore_cms.components.robots import RobotsService
from livescore_cms.components.seo import SeoService
from livescore_cms.components.sitemap import SitemapService
from livescore_cms.rules.models import Rules

router = APIRouter()


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots_txt(
    service: RobotsService = Depends(get_robots_service),
    rules: Rules = Depends(get_rules),
) -> PlainTextResponse:
    max_age = rules.robots.cache_max_age_seconds
    return PlainTextResponse(
        service.render_public(),
        headers={"Cache-Control": f"public, max-age={max_age}, s-maxage={max_age}"},
    )


@router.get("/sitemap.xml")
def sitemap_xml(service: SitemapService = Depends(get_sitemap_service)) -> Response:
    return Response(content=service.render_xml(), media_type="application/xml")


@router.get("/api/seo/{scope}")
def get_seo_document(
    scope: str,
    service: SeoService = Depends(get_seo_service),
) -> dict[str, Any]:
    document = service.get(scope)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Unknown SEO scope: {scope}")
    return {"ok": True, "scope": scope, "data": document.data}
