"""
Admin SEO documents API.

Stores the partial override for a scope and returns the merged result.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from livescore_cms.api.deps import get_seo_service, require_role
from livescore_cms.api.schemas import serialize_errors
from livescore_cms.components.seo import SeoService
from livescore_cms.core.entities import Role, StaffUser

router = APIRouter()

require_seo_editor = require_role(Role.ADMIN.value, Role.EDITOR.value, Role.SEO_MANAGER.value)


@router.get("/documents")
def list_scopes(
    service: SeoService = Depends(get_seo_service),
    _user: StaffUser = Depends(require_seo_editor),
) -> dict[str, Any]:
    return {"ok": True, "scopes": list(service.scopes)}


@router.get("/documents/{scope}")
def get_document(
    scope: str,
    service: SeoService = Depends(get_seo_service),
    _user: StaffUser = Depends(require_seo_editor),
) -> dict[str, Any]:
    document = service.get(scope)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Unknown SEO scope: {scope}")
    return {"ok": True, "scope": scope, "data": document.data, "is_default": document.is_default}


def _save(scope: str, data: Any, service: SeoService) -> dict[str, Any]:
    document, errors = service.save(scope, data)
    if errors:
        if any(e.code == "unknown_scope" for e in errors):
            raise HTTPException(status_code=404, detail=f"Unknown SEO scope: {scope}")
        raise HTTPException(status_code=400, detail={"errors": serialize_errors(errors)})

    assert document is not None
    return {"ok": True, "scope": scope, "data": document.data}


@router.put("/documents/{scope}")
def put_document(
    scope: str,
    data: Any = Body(...),
    service: SeoService = Depends(get_seo_service),
    _user: StaffUser = Depends(require_seo_editor),
) -> dict[str, Any]:
    return _save(scope, data, service)


@router.post("/documents/{scope}")
def post_document(
    scope: str,
    data: Any = Body(...),
    service: SeoService = Depends(get_seo_service),
    _user: StaffUser = Depends(require_seo_editor),
) -> dict[str, Any]:
    return _save(scope, data, service)
