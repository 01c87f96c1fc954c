"""
Public Redirects API.

Active rules for edge caches that apply redirects themselves.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from livescore_cms.api.deps import get_redirect_service
from livescore_cms.components.redirects import RedirectService

router = APIRouter()

CACHE_CONTROL = "s-maxage=30, stale-while-revalidate=300"


@router.get("/redirects")
def list_active_redirects(
    service: RedirectService = Depends(get_redirect_service),
) -> JSONResponse:
    redirects: list[dict[str, Any]] = [
        {
            "source": r.source,
            "destination": r.destination,
            "type": r.type,
            "updated_at": r.updated_at.isoformat(),
        }
        for r in service.list_active()
    ]
    return JSONResponse(
        {"ok": True, "redirects": redirects},
        headers={"Cache-Control": CACHE_CONTROL},
    )
