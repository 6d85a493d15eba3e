"""FastAPI main application with app factory and route configuration."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from .config import Settings
from .deps import get_settings
from .exception_handlers import register_exception_handlers
from .middleware.auth import APIKeyMiddleware
from .middleware.cors import PreflightNoContentCORSMiddleware
from .responses import PrettyJSONResponse
from .routes import root, tasks
from .services.task_service import TaskService, demo_tasks
from .utils.logging import log_operation, log_shutdown_info, log_startup_info, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    settings: Settings = app.state.settings
    setup_logging(settings)
    log_startup_info(settings, app.state.task_service.get_task_count())

    yield

    log_shutdown_info()


def create_app(
    settings: Optional[Settings] = None,
    task_service: Optional[TaskService] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        task_service: Store to serve; a new one is built from settings if omitted

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()
    if task_service is None:
        task_service = TaskService(demo_tasks() if settings.seed_demo_tasks else None)

    app = FastAPI(
        title="Task API",
        description="In-memory task management API with API key protection",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        default_response_class=PrettyJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_service = task_service

    # Middleware is listed innermost first; CORS wraps everything so that
    # 401 and 500 responses carry CORS headers too
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Turn any exception that escapes the handlers into a logged 500."""
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                f"Unexpected error for {request.method} {request.url.path}: {str(e)}",
                exc_info=True,
            )
            log_operation(
                request.method,
                request.url.path,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                f"Internal server error: {str(e)}",
                error=True,
            )
            content = {"error": "Internal server error"}
            if settings.debug:
                content["detail"] = str(e)
            return PrettyJSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=content,
            )

    app.add_middleware(APIKeyMiddleware)
    app.add_middleware(
        PreflightNoContentCORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(tasks.router)
    app.include_router(root.router)

    logger.info("FastAPI application created and configured")

    return app


# Create the app instance
app = create_app()
