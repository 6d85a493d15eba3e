"""Shared-secret API key check in front of the router.

The key is read from the ``X-Api-Key`` header, falling back to the
``api-key`` query parameter. ``OPTIONS`` requests are answered here with an
empty 204 so that pre-flights never need a key.
"""

import secrets
from typing import Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from ..responses import PrettyJSONResponse
from ..utils.logging import log_operation

API_KEY_HEADER = "X-Api-Key"
API_KEY_QUERY_PARAM = "api-key"
LIST_FILTER_PARAMS = ("completed", "priority", "q")

UNAUTHORIZED_MESSAGE = f"Unauthorized. A valid '{API_KEY_HEADER}' is required."


def is_public_route(request: Request) -> bool:
    """Whether the request may go through without a key.

    The documentation page is public, and so is the task list as long as no
    filter or search parameter has a value.
    """
    if request.method != "GET":
        return False
    path = request.url.path
    if path == "/":
        return True
    if path == "/api/tasks":
        return not any(request.query_params.get(name) for name in LIST_FILTER_PARAMS)
    return False


def extract_api_key(request: Request) -> Optional[str]:
    """Return the supplied key, header first."""
    return request.headers.get(API_KEY_HEADER) or request.query_params.get(API_KEY_QUERY_PARAM)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests to protected routes that lack the configured key."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        if is_public_route(request):
            return await call_next(request)

        expected = request.app.state.settings.api_key
        supplied = extract_api_key(request)
        if supplied is not None and secrets.compare_digest(
            supplied.encode("utf-8"), expected.encode("utf-8")
        ):
            return await call_next(request)

        log_operation(
            request.method,
            request.url.path,
            status.HTTP_401_UNAUTHORIZED,
            "Unauthorized access (invalid API key)",
            error=True,
        )
        return PrettyJSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": UNAUTHORIZED_MESSAGE},
        )
