"""Task service for CRUD operations over the in-memory task store."""

import logging
from datetime import datetime, timezone
from threading import Lock
from typing import List, Optional

from ..models.task import Priority, Task, utcnow
from ..schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def demo_tasks() -> List[Task]:
    """Tasks a fresh server starts with."""
    return [
        Task(
            id=1,
            title="Learn FastAPI",
            description="Work through the basic tutorials",
            completed=False,
            priority=Priority.HIGH,
            created_at=datetime(2025, 11, 1, 10, 0, tzinfo=timezone.utc),
        ),
        Task(
            id=2,
            title="Practice HTTP",
            description="Build a basic server",
            completed=True,
            priority=Priority.MEDIUM,
            created_at=datetime(2025, 11, 5, 12, 0, tzinfo=timezone.utc),
            completed_at=datetime(2025, 12, 4, 15, 30, tzinfo=timezone.utc),
        ),
    ]


class TaskService:
    """Service for task CRUD operations with in-memory storage.

    Tasks are kept in insertion order. Ids come from a counter that only
    moves forward, so a deleted id is never handed out again.
    """

    def __init__(self, initial_tasks: Optional[List[Task]] = None):
        """Initialize the task service.

        Args:
            initial_tasks: Records to seed the store with; the id counter
                starts above the highest seeded id
        """
        self._tasks: List[Task] = list(initial_tasks or [])
        self._next_id = max((task.id for task in self._tasks), default=0) + 1
        self._lock = Lock()
        logger.info(f"Task service initialized with {len(self._tasks)} tasks")

    def create_task(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            task_data: Validated task creation data

        Returns:
            Created task
        """
        with self._lock:
            task = Task(
                id=self._next_id,
                title=task_data.title,
                description=task_data.description,
                priority=task_data.priority,
                completed=False,
                created_at=utcnow(),
            )
            self._next_id += 1
            self._tasks.append(task)

            logger.info(f"Created task {task.id}: {task.title}")
            return task

    def get_task(self, task_id: int) -> Optional[Task]:
        """Get a task by ID.

        Args:
            task_id: Task ID

        Returns:
            Task if found, None otherwise
        """
        with self._lock:
            task = self._find(task_id)
            if task:
                logger.debug(f"Retrieved task {task_id}: {task.title}")
            else:
                logger.debug(f"Task {task_id} not found")
            return task

    def update_task(self, task_id: int, task_data: TaskUpdate) -> Optional[Task]:
        """Apply a partial update to a task.

        Only fields present in ``task_data`` change. Setting ``completed`` to
        true on a pending task stamps ``completed_at``; setting it to false
        clears it.

        Args:
            task_id: Task ID
            task_data: Validated update data

        Returns:
            Updated task if found, None otherwise
        """
        changes = task_data.changes()

        with self._lock:
            task = self._find(task_id)
            if not task:
                logger.warning(f"Task {task_id} not found for update")
                return None

            if "title" in changes:
                task.title = changes["title"]

            if "description" in changes:
                task.description = changes["description"]

            if "priority" in changes:
                task.priority = Priority(changes["priority"]).value

            if "completed" in changes:
                if changes["completed"]:
                    task.mark_completed()
                else:
                    task.mark_pending()

            logger.info(f"Updated task {task_id}: fields {', '.join(changes)}")
            return task

    def delete_task(self, task_id: int) -> Optional[Task]:
        """Delete a task.

        Args:
            task_id: Task ID

        Returns:
            The removed task, or None if not found
        """
        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id:
                    del self._tasks[index]
                    logger.info(f"Deleted task {task_id}: {task.title}")
                    return task

            logger.warning(f"Task {task_id} not found for deletion")
            return None

    def list_tasks(
        self,
        completed: Optional[bool] = None,
        priority: Optional[Priority] = None,
        query: Optional[str] = None,
    ) -> List[Task]:
        """List tasks with optional filters.

        Filters combine with AND.

        Args:
            completed: Keep tasks whose completion state matches
            priority: Keep tasks with exactly this priority
            query: Keep tasks whose title or description contains this text,
                ignoring case

        Returns:
            Matching tasks in insertion order
        """
        with self._lock:
            tasks = list(self._tasks)

        if completed is not None:
            tasks = [task for task in tasks if task.completed == completed]

        if priority is not None:
            priority_value = Priority(priority).value
            tasks = [task for task in tasks if task.priority == priority_value]

        if query:
            query_lower = query.lower()
            tasks = [
                task for task in tasks
                if query_lower in task.title.lower()
                or query_lower in task.description.lower()
            ]

        logger.debug(
            f"Listed {len(tasks)} tasks (completed={completed}, "
            f"priority={priority}, query={query!r})"
        )
        return tasks

    def get_task_count(self) -> int:
        """Get the number of stored tasks."""
        with self._lock:
            return len(self._tasks)

    def _find(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None
