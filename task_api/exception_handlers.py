"""Exception handlers mapping task API and framework errors to JSON responses.

Register with register_exception_handlers(app). Every handler logs the
outcome through log_operation before answering.
"""

from typing import Any, Dict, Iterable, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import TaskAPIError
from .responses import PrettyJSONResponse
from .utils.logging import log_operation

AVAILABLE_ROUTES = [
    "GET /",
    "GET /api/tasks",
    "GET /api/tasks/stats",
    "POST /api/tasks",
    "GET /api/tasks/:id",
    "PUT /api/tasks/:id",
    "DELETE /api/tasks/:id",
]

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{field, message}`` pairs.

    Errors that do not point at a field are reported against ``body``.
    """
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        details.append(
            {"field": ".".join(loc) or "body", "message": error.get("msg", "")}
        )
    return details


def _validation_response(request: Request, errors: Iterable[Dict[str, Any]]) -> PrettyJSONResponse:
    details = format_validation_errors(errors)
    log_operation(
        request.method,
        request.url.path,
        status.HTTP_400_BAD_REQUEST,
        f"Validation failed: {', '.join(d['field'] for d in details)}",
        error=True,
    )
    return PrettyJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Data validation error", "details": details},
    )


async def task_api_exception_handler(request: Request, exc: TaskAPIError) -> PrettyJSONResponse:
    """Return the error's own status and message."""
    log_operation(request.method, request.url.path, exc.status_code, exc.message, error=True)
    return PrettyJSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def schema_validation_exception_handler(
    request: Request, exc: ValidationError
) -> PrettyJSONResponse:
    """Return 400 with every field error of a body schema."""
    return _validation_response(request, exc.errors())


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PrettyJSONResponse:
    """Return 400 with every field error of the query string."""
    return _validation_response(request, exc.errors())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> PrettyJSONResponse:
    """Return the route list for unmatched routes, the detail otherwise."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        log_operation(
            request.method, request.url.path, status.HTTP_404_NOT_FOUND,
            "Route not found", error=True,
        )
        return PrettyJSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Route not found",
                "method": request.method,
                "path": request.url.path,
                "available": AVAILABLE_ROUTES,
            },
        )

    log_operation(request.method, request.url.path, exc.status_code, str(exc.detail), error=True)
    return PrettyJSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(TaskAPIError, task_api_exception_handler)
    app.add_exception_handler(ValidationError, schema_validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
