"""
Redirect middleware - applies redirect rules before routing.

Only the resolver's decision is acted on here; the lookup itself runs in the
threadpool because the rule cache may hit SQLite. Any failure lets the request
through to normal routing.
"""

import logging

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from livescore_cms.api.deps import get_redirect_resolver
from livescore_cms.components.redirects import ActionKind, RedirectAction

logger = logging.getLogger(__name__)


def action_to_response(action: RedirectAction) -> Response | None:
    """HTTP response for a redirect/terminal action; None means continue."""
    if action.kind is ActionKind.REDIRECT and action.location and action.status:
        return RedirectResponse(url=action.location, status_code=action.status)

    if action.kind is ActionKind.TERMINAL and action.status:
        if action.body:
            return PlainTextResponse(action.body, status_code=action.status)
        return Response(status_code=action.status)

    return None


class RedirectMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        provider = request.app.dependency_overrides.get(
            get_redirect_resolver, get_redirect_resolver
        )
        try:
            resolver = provider()
            action = await run_in_threadpool(
                resolver.apply,
                request.method,
                request.url.path,
                request.headers.get("host"),
            )
        except Exception:
            logger.exception("Redirect lookup failed for %s; passing through", request.url.path)
            return await call_next(request)

        response = action_to_response(action)
        if response is None:
            return await call_next(request)

        logger.debug(
            "Redirect %s %s -> %s (%s)",
            request.method,
            request.url.path,
            action.location or "",
            action.status,
        )
        return response
