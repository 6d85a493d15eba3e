"""Exceptions raised by the task API.

Route code raises these; ``exception_handlers`` turns them into JSON
responses.
"""

from typing import Any, Dict, Optional


class TaskAPIError(Exception):
    """Base exception for all task API errors.

    Attributes:
        message: Human-readable error description, sent as ``error``.
        status_code: HTTP status the error maps to.
        details: Extra keys merged into the response body.
    """

    status_code: int = 400

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, **self.details}


class MalformedBodyError(TaskAPIError):
    """Raised when the request body is not valid JSON."""

    def __init__(self, message: str = "Invalid request body format (JSON)") -> None:
        super().__init__(message, status_code=400)


class TaskNotFoundError(TaskAPIError):
    """Raised when no task has the requested id."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__("Task not found", status_code=404)
