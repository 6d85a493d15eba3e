"""Domain models for the task management API."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Priority(str, Enum):
    """Task priority enumeration."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Task(BaseModel):
    """Task domain model.

    ``completed_at`` is set exactly while ``completed`` is true; use
    :meth:`mark_completed` and :meth:`mark_pending` rather than assigning
    the two fields separately.
    """

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)

    id: int = Field(..., gt=0, description="Unique task identifier")
    title: str = Field(..., min_length=3, max_length=100, description="Task title")
    description: str = Field(default="", max_length=500, description="Task description")
    completed: bool = Field(default=False, description="Whether the task is done")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    created_at: datetime = Field(
        default_factory=utcnow, alias="createdAt", description="Task creation timestamp"
    )
    completed_at: Optional[datetime] = Field(
        default=None, alias="completedAt", description="Task completion timestamp"
    )

    def mark_completed(self) -> None:
        """Mark task as completed, stamping the completion time once."""
        if not self.completed:
            self.completed = True
            self.completed_at = utcnow()

    def mark_pending(self) -> None:
        """Mark task as pending and clear the completion time."""
        self.completed = False
        self.completed_at = None
