"""
Admin Redirects API Routes.

Admin endpoints for managing redirect rules. Every change drops the
in-process resolver cache so the next request sees it.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from livescore_cms.api.deps import get_redirect_service, require_role
from livescore_cms.api.schemas import (
    RedirectRuleModel,
    ValidationErrorResponse,
    redirect_to_model,
    serialize_errors,
)
from livescore_cms.components.redirects import RedirectService
from livescore_cms.core.entities import Role, StaffUser

router = APIRouter()

require_seo_admin = require_role(Role.ADMIN.value, Role.SEO_MANAGER.value)


class CreateRedirectRequest(BaseModel):
    """Request to create a redirect."""

    source: str = Field(..., description="Source path (e.g., /old-page)")
    destination: str | None = Field(None, description="Target path or absolute URL")
    type: int | None = Field(None, description="301, 302, 307, 308, 410 or 451")


class UpdateRedirectRequest(BaseModel):
    """Request to toggle a redirect."""

    is_active: bool


class RedirectListResponse(BaseModel):
    ok: bool = True
    redirects: list[RedirectRuleModel]


class RedirectItemResponse(BaseModel):
    ok: bool = True
    redirect: RedirectRuleModel


@router.get("/redirects", response_model=RedirectListResponse)
def list_redirects(
    service: RedirectService = Depends(get_redirect_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> RedirectListResponse:
    """List all redirects, newest first."""
    return RedirectListResponse(redirects=[redirect_to_model(r) for r in service.list_all()])


@router.post(
    "/redirects",
    response_model=RedirectItemResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
def create_redirect(
    request: CreateRedirectRequest,
    service: RedirectService = Depends(get_redirect_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> RedirectItemResponse:
    redirect, errors = service.create(
        source=request.source,
        destination=request.destination,
        type_=request.type,
    )
    if errors:
        raise HTTPException(status_code=400, detail={"errors": serialize_errors(errors)})

    assert redirect is not None
    return RedirectItemResponse(redirect=redirect_to_model(redirect))


@router.patch(
    "/redirects/{redirect_id}",
    response_model=RedirectItemResponse,
    responses={404: {"description": "Redirect not found"}},
)
def update_redirect(
    redirect_id: UUID,
    request: UpdateRedirectRequest,
    service: RedirectService = Depends(get_redirect_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> RedirectItemResponse:
    redirect, errors = service.set_active(redirect_id, request.is_active)
    if errors:
        raise HTTPException(status_code=404, detail="Redirect not found")

    assert redirect is not None
    return RedirectItemResponse(redirect=redirect_to_model(redirect))


@router.delete(
    "/redirects/{redirect_id}",
    responses={404: {"description": "Redirect not found"}},
)
def delete_redirect(
    redirect_id: UUID,
    service: RedirectService = Depends(get_redirect_service),
    _user: StaffUser = Depends(require_seo_admin),
) -> dict[str, Any]:
    if not service.delete(redirect_id):
        raise HTTPException(status_code=404, detail="Redirect not found")
    return {"ok": True}
