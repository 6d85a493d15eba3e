"""Documentation page route."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse

from ..config import Settings
from ..deps import get_app_settings, get_task_service
from ..pages.root import render_root_page
from ..services.statistics import calculate_statistics
from ..services.task_service import TaskService
from ..utils.logging import log_operation

router = APIRouter(tags=["root"])


@router.get("/", response_class=HTMLResponse)
async def root(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    task_service: TaskService = Depends(get_task_service),
) -> HTMLResponse:
    """Serve the HTML documentation page."""
    stats = calculate_statistics(task_service.list_tasks())
    html = render_root_page(settings.api_key, stats, str(request.base_url))
    log_operation(request.method, request.url.path, status.HTTP_200_OK, "Documentation page served")
    return HTMLResponse(content=html)
