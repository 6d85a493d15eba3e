"""Aggregate statistics over the task collection."""

from collections import Counter
from datetime import timezone
from typing import Iterable

from ..models.task import Priority, Task
from ..schemas import TaskStatistics


def calculate_statistics(tasks: Iterable[Task]) -> TaskStatistics:
    """Compute counts for the stats endpoint and the documentation page.

    Args:
        tasks: Snapshot of the task collection

    Returns:
        Totals, pending count, counts per priority (every priority present,
        zero-filled) and completions per UTC calendar day.
    """
    tasks = list(tasks)

    by_priority = {priority.value: 0 for priority in Priority}
    for task in tasks:
        by_priority[Priority(task.priority).value] += 1

    completed_by_day = Counter(
        task.completed_at.astimezone(timezone.utc).date().isoformat()
        for task in tasks
        if task.completed and task.completed_at is not None
    )

    return TaskStatistics(
        total_tasks=len(tasks),
        pending_tasks=sum(1 for task in tasks if not task.completed),
        tasks_by_priority=by_priority,
        completed_by_day=dict(sorted(completed_by_day.items())),
    )
