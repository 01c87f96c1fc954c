"""
Redirect check API.

Read-side lookup used by edge middleware that runs outside this process.
A match bumps the rule's hit counter after the response is sent.
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends

from livescore_cms.api.deps import get_redirect_resolver, get_redirect_service
from livescore_cms.api.schemas import redirect_to_model
from livescore_cms.components.redirects import (
    RedirectResolver,
    RedirectService,
    is_self_loop,
    normalize_path,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def record_hit(service: RedirectService, redirect_id: UUID) -> None:
    """Best-effort hit counter update."""
    try:
        service.record_hit(redirect_id)
    except Exception:
        logger.exception("Failed to record hit for redirect %s", redirect_id)


@router.get("/redirect-check")
def redirect_check(
    background_tasks: BackgroundTasks,
    path: str | None = None,
    resolver: RedirectResolver = Depends(get_redirect_resolver),
    service: RedirectService = Depends(get_redirect_service),
) -> dict[str, Any]:
    if not path or not path.strip():
        return {"redirect": None}

    request_path = normalize_path(path.strip())
    rule = resolver.resolve(request_path)
    if rule is None or is_self_loop(rule, request_path):
        return {"redirect": None}

    background_tasks.add_task(record_hit, service, rule.id)
    return {"redirect": redirect_to_model(rule).model_dump()}
