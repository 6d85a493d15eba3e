"""Task management CRUD routes.

The API key check runs in middleware before any of these handlers.
Registration order matters: ``/stats`` must be added before the numeric
item route.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from ..deps import get_task_service
from ..exceptions import TaskNotFoundError
from ..models.task import Task
from ..responses import PrettyJSONResponse
from ..schemas import (
    TaskCreate,
    TaskDeleteResponse,
    TaskFilters,
    TaskListResponse,
    TaskStatistics,
    TaskUpdate,
)
from ..services.statistics import calculate_statistics
from ..services.task_service import TaskService
from ..utils.body import validated_body
from ..utils.logging import log_operation


router = APIRouter(
    prefix="/api/tasks", tags=["tasks"], default_response_class=PrettyJSONResponse
)


def get_list_filters(
    completed: Optional[str] = Query(None, description="true or false"),
    priority: Optional[str] = Query(None, description="high, medium or low"),
    q: Optional[str] = Query(None, description="Search text"),
) -> TaskFilters:
    """Parse the list filters; invalid values fail schema validation."""
    return TaskFilters.model_validate(
        {"completed": completed, "priority": priority, "q": q}
    )


@router.get("/stats", response_model=TaskStatistics)
async def get_task_statistics(
    request: Request,
    task_service: TaskService = Depends(get_task_service),
) -> TaskStatistics:
    """Get task statistics.

    Args:
        request: Incoming request
        task_service: Task service instance

    Returns:
        Task statistics
    """
    stats = calculate_statistics(task_service.list_tasks())
    log_operation(request.method, request.url.path, status.HTTP_200_OK, "Statistics generated")
    return stats


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    request: Request,
    filters: TaskFilters = Depends(get_list_filters),
    task_service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    """List tasks with optional filters.

    Args:
        request: Incoming request
        filters: Completion, priority and search filters, combined with AND
        task_service: Task service instance

    Returns:
        Matching tasks and their count
    """
    tasks = task_service.list_tasks(
        completed=filters.completed,
        priority=filters.priority,
        query=filters.q,
    )
    log_operation(
        request.method,
        request.url.path,
        status.HTTP_200_OK,
        f"Listing {len(tasks)} tasks (filters: {filters.describe()})",
    )
    return TaskListResponse(total=len(tasks), tasks=tasks)


@router.get("/{task_id:int}", response_model=Task)
async def get_task(
    task_id: int,
    request: Request,
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    """Get a specific task by ID.

    Raises:
        TaskNotFoundError: If task not found
    """
    task = task_service.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)

    log_operation(request.method, request.url.path, status.HTTP_200_OK, f"Task {task_id} retrieved")
    return task


@router.put("/{task_id:int}", response_model=Task)
async def update_task(
    task_id: int,
    request: Request,
    task_data: TaskUpdate = Depends(validated_body(TaskUpdate)),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    """Update a task.

    The body is validated before the task is looked up, so a bad body on an
    unknown id is still a 400.

    Raises:
        TaskNotFoundError: If task not found
    """
    task = task_service.update_task(task_id, task_data)
    if task is None:
        raise TaskNotFoundError(task_id)

    log_operation(
        request.method,
        request.url.path,
        status.HTTP_200_OK,
        f"Task {task_id} updated. Fields: {', '.join(task_data.changes())}",
    )
    return task


@router.delete("/{task_id:int}", response_model=TaskDeleteResponse)
async def delete_task(
    task_id: int,
    request: Request,
    task_service: TaskService = Depends(get_task_service),
) -> TaskDeleteResponse:
    """Delete a task.

    Raises:
        TaskNotFoundError: If task not found
    """
    task = task_service.delete_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)

    log_operation(request.method, request.url.path, status.HTTP_200_OK, f"Task {task_id} deleted")
    return TaskDeleteResponse(task=task)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    request: Request,
    task_data: TaskCreate = Depends(validated_body(TaskCreate)),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    """Create a new task.

    Args:
        request: Incoming request
        task_data: Validated task creation data
        task_service: Task service instance

    Returns:
        Created task
    """
    task = task_service.create_task(task_data)
    log_operation(
        request.method, request.url.path, status.HTTP_201_CREATED, f"Task created with ID {task.id}"
    )
    return task
