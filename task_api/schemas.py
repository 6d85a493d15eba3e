"""API request/response schemas for the task management API."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

from .models.task import Priority, Task


# Task-related schemas
class TaskCreate(BaseModel):
    """Schema for creating a new task.

    ``id`` and ``completed`` are assigned by the store, so like every other
    unknown key they are rejected.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(..., min_length=3, max_length=100, description="Task title")
    description: str = Field(default="", max_length=500, description="Task description")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")


class TaskUpdate(BaseModel):
    """Schema for a partial task update.

    Only the fields present in the request body are applied; see
    ``model_fields_set``.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=3, max_length=100, description="Task title")
    description: Optional[str] = Field(None, max_length=500, description="Task description")
    completed: Optional[StrictBool] = Field(None, description="Whether the task is done")
    priority: Optional[Priority] = Field(None, description="Task priority")

    @field_validator("title", "description", "completed", "priority", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "TaskUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided for update")
        return self

    def changes(self) -> Dict[str, object]:
        """Return the supplied fields and their values."""
        return self.model_dump(exclude_unset=True)


class TaskFilters(BaseModel):
    """Query-string filters for the task list. Blank values count as absent."""

    completed: Optional[bool] = Field(None, description="Filter by completion state")
    priority: Optional[Priority] = Field(None, description="Filter by priority")
    q: Optional[str] = Field(None, description="Case-insensitive search in title or description")

    @field_validator("completed", "priority", "q", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and value == "":
            return None
        return value

    def describe(self) -> str:
        """Human-readable summary of the active filters, for logs."""
        active = self.model_dump(exclude_none=True, mode="json")
        if not active:
            return "none"
        return ", ".join(f"{name}={value}" for name, value in active.items())


class TaskListResponse(BaseModel):
    """Schema for task list API responses."""
    total: int = Field(..., description="Number of tasks returned")
    tasks: List[Task] = Field(..., description="List of tasks")


class TaskDeleteResponse(BaseModel):
    """Schema for task deletion responses."""
    message: str = Field(default="Task deleted", description="Status message")
    task: Task = Field(..., description="The removed task")


class TaskStatistics(BaseModel):
    """Schema for aggregate task statistics."""

    model_config = ConfigDict(populate_by_name=True)

    total_tasks: int = Field(..., alias="totalTasks")
    pending_tasks: int = Field(..., alias="pendingTasks")
    tasks_by_priority: Dict[str, int] = Field(..., alias="tasksByPriority")
    completed_by_day: Dict[str, int] = Field(..., alias="completedByDay")
