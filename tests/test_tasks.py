"""Tests for the task model, the task store, statistics and request schemas."""

import threading
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from task_api.models.task import Priority, Task
from task_api.schemas import TaskCreate, TaskFilters, TaskUpdate
from task_api.services.statistics import calculate_statistics
from task_api.services.task_service import TaskService, demo_tasks


def error_fields(exc: ValidationError):
    return [".".join(str(part) for part in error["loc"]) for error in exc.errors()]


class TestTaskModel:
    """Test Task domain model."""

    def test_task_creation_defaults(self):
        """Test task creation with default values."""
        task = Task(id=1, title="Test Task")

        assert task.description == ""
        assert task.completed is False
        assert task.priority == Priority.MEDIUM
        assert task.completed_at is None
        assert task.created_at.tzinfo is not None

    def test_priority_enum(self):
        """Test priority enumeration."""
        assert Priority.HIGH == "high"
        assert Priority.MEDIUM == "medium"
        assert Priority.LOW == "low"

    def test_task_serialization_uses_camel_case(self):
        """Test task serialization to the wire format."""
        task = Task(id=7, title="Test Task", priority=Priority.LOW)
        data = task.model_dump(by_alias=True, mode="json")

        assert data["id"] == 7
        assert data["priority"] == "low"
        assert "createdAt" in data
        assert data["completedAt"] is None

    def test_mark_completed_stamps_once(self):
        task = Task(id=1, title="Test Task")

        task.mark_completed()
        first_stamp = task.completed_at
        task.mark_completed()

        assert task.completed is True
        assert first_stamp is not None
        assert task.completed_at == first_stamp

    def test_mark_pending_clears_stamp(self):
        task = Task(id=1, title="Test Task")
        task.mark_completed()

        task.mark_pending()

        assert task.completed is False
        assert task.completed_at is None


class TestTaskService:
    """Test TaskService functionality."""

    def test_service_initialization(self, task_service):
        """Test task service initialization."""
        assert task_service.get_task_count() == 0
        assert task_service.list_tasks() == []

    def test_seeded_service_counter_starts_above_seed(self, seeded_task_service):
        task = seeded_task_service.create_task(TaskCreate(title="Third task"))

        assert task.id == 3
        assert seeded_task_service.get_task_count() == 3

    def test_create_task_success(self, task_service):
        """Test successful task creation."""
        task = task_service.create_task(
            TaskCreate(title="Test Task", description="Test description", priority="high")
        )

        assert task.id == 1
        assert task.title == "Test Task"
        assert task.description == "Test description"
        assert task.priority == Priority.HIGH
        assert task.completed is False
        assert task.completed_at is None

    def test_ids_are_never_reused(self, task_service):
        first = task_service.create_task(TaskCreate(title="Task one"))
        second = task_service.create_task(TaskCreate(title="Task two"))
        task_service.delete_task(second.id)

        third = task_service.create_task(TaskCreate(title="Task three"))

        assert (first.id, second.id, third.id) == (1, 2, 3)

    def test_get_task_success(self, task_service):
        """Test successful task retrieval."""
        task = task_service.create_task(TaskCreate(title="Test Task"))

        retrieved_task = task_service.get_task(task.id)

        assert retrieved_task is not None
        assert retrieved_task.id == task.id

    def test_get_task_not_found(self, task_service):
        """Test task retrieval with non-existent ID."""
        assert task_service.get_task(99) is None

    def test_update_task_partial(self, task_service):
        """Test partial task update."""
        task = task_service.create_task(
            TaskCreate(title="Original Task", description="Original description")
        )
        created_at = task.created_at

        updated_task = task_service.update_task(task.id, TaskUpdate(title="Updated Task"))

        assert updated_task.title == "Updated Task"
        assert updated_task.description == "Original description"
        assert updated_task.priority == Priority.MEDIUM
        assert updated_task.created_at == created_at

    def test_update_priority(self, task_service):
        task = task_service.create_task(TaskCreate(title="Test Task"))

        updated_task = task_service.update_task(task.id, TaskUpdate(priority="low"))

        assert updated_task.priority == Priority.LOW

    def test_update_completion_sets_and_clears_timestamp(self, task_service):
        task = task_service.create_task(TaskCreate(title="Test Task"))

        completed = task_service.update_task(task.id, TaskUpdate(completed=True))
        assert completed.completed is True
        assert completed.completed_at is not None
        stamp = completed.completed_at

        again = task_service.update_task(task.id, TaskUpdate(completed=True))
        assert again.completed_at == stamp

        reopened = task_service.update_task(task.id, TaskUpdate(completed=False))
        assert reopened.completed is False
        assert reopened.completed_at is None

    def test_update_without_completion_keeps_timestamp(self, seeded_task_service):
        updated_task = seeded_task_service.update_task(2, TaskUpdate(title="Practice more HTTP"))

        assert updated_task.completed is True
        assert updated_task.completed_at == datetime(2025, 12, 4, 15, 30, tzinfo=timezone.utc)

    def test_update_task_not_found(self, task_service):
        """Test task update with non-existent ID."""
        assert task_service.update_task(42, TaskUpdate(title="Updated Task")) is None

    def test_delete_task_success(self, task_service):
        """Test successful task deletion."""
        task = task_service.create_task(TaskCreate(title="Test Task"))

        deleted = task_service.delete_task(task.id)

        assert deleted.id == task.id
        assert task_service.get_task(task.id) is None
        assert task_service.get_task_count() == 0

    def test_delete_task_not_found(self, seeded_task_service):
        """Test task deletion with non-existent ID."""
        assert seeded_task_service.delete_task(99) is None
        assert seeded_task_service.get_task_count() == 2

    def test_list_tasks_keeps_insertion_order(self, task_service):
        for title in ("Task 1", "Task 2", "Task 3"):
            task_service.create_task(TaskCreate(title=title))

        assert [task.title for task in task_service.list_tasks()] == ["Task 1", "Task 2", "Task 3"]

    def test_list_tasks_with_filters(self, task_service, sample_tasks_bulk):
        """Test listing tasks with combined filters."""
        for payload in sample_tasks_bulk:
            task_service.create_task(TaskCreate(**payload))
        task_service.update_task(1, TaskUpdate(completed=True))
        task_service.update_task(3, TaskUpdate(completed=True))

        completed_high = task_service.list_tasks(completed=True, priority=Priority.HIGH)
        pending = task_service.list_tasks(completed=False)
        low = task_service.list_tasks(priority="low")

        assert [task.id for task in completed_high] == [1]
        assert [task.id for task in pending] == [2, 4]
        assert [task.id for task in low] == [3]

    def test_search_is_case_insensitive_over_title_and_description(
        self, task_service, sample_tasks_bulk
    ):
        for payload in sample_tasks_bulk:
            task_service.create_task(TaskCreate(**payload))

        matches = task_service.list_tasks(query="rEpOrT")

        # "Write report" by title, "Water plants" by description
        assert [task.id for task in matches] == [1, 3]

    def test_search_combines_with_priority(self, task_service, sample_tasks_bulk):
        for payload in sample_tasks_bulk:
            task_service.create_task(TaskCreate(**payload))

        matches = task_service.list_tasks(priority="low", query="report")

        assert [task.id for task in matches] == [3]


class TestTaskServiceThreadSafety:
    """Test task service thread safety."""

    def test_concurrent_task_creation(self, task_service):
        """Test concurrent task creation hands out unique ids."""
        created_tasks = []
        errors = []

        def create_task_worker(index):
            try:
                task = task_service.create_task(TaskCreate(title=f"Concurrent Task {index}"))
                created_tasks.append(task)
            except Exception as e:
                errors.append(e)

        threads = [
            threading.Thread(target=create_task_worker, args=(i,)) for i in range(20)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert sorted(task.id for task in created_tasks) == list(range(1, 21))
        assert task_service.get_task_count() == 20


class TestStatistics:
    """Test the statistics calculator."""

    def test_empty_collection(self):
        stats = calculate_statistics([])

        assert stats.total_tasks == 0
        assert stats.pending_tasks == 0
        assert stats.tasks_by_priority == {"high": 0, "medium": 0, "low": 0}
        assert stats.completed_by_day == {}

    def test_demo_tasks(self):
        stats = calculate_statistics(demo_tasks())

        assert stats.total_tasks == 2
        assert stats.pending_tasks == 1
        assert stats.tasks_by_priority == {"high": 1, "medium": 1, "low": 0}
        assert stats.completed_by_day == {"2025-12-04": 1}

    def test_completions_grouped_by_day(self):
        tasks = [
            Task(id=1, title="Task one", completed=True,
                 completed_at=datetime(2025, 1, 2, 8, 0, tzinfo=timezone.utc)),
            Task(id=2, title="Task two", completed=True,
                 completed_at=datetime(2025, 1, 2, 23, 59, tzinfo=timezone.utc)),
            Task(id=3, title="Task three", completed=True,
                 completed_at=datetime(2025, 1, 3, 0, 1, tzinfo=timezone.utc)),
            Task(id=4, title="Task four"),
        ]

        stats = calculate_statistics(tasks)

        assert stats.completed_by_day == {"2025-01-02": 2, "2025-01-03": 1}
        assert stats.pending_tasks == 1

    def test_completed_without_timestamp_is_not_counted_per_day(self):
        tasks = [Task(id=1, title="Legacy task", completed=True, completed_at=None)]

        stats = calculate_statistics(tasks)

        assert stats.completed_by_day == {}
        assert stats.pending_tasks == 0

    def test_serialized_keys(self):
        data = calculate_statistics(demo_tasks()).model_dump(by_alias=True)

        assert set(data) == {"totalTasks", "pendingTasks", "tasksByPriority", "completedByDay"}


class TestTaskSchemas:
    """Test create, update and filter validation."""

    def test_create_trims_and_defaults(self):
        task_data = TaskCreate(title="  Buy milk  ", description="  two litres ")

        assert task_data.title == "Buy milk"
        assert task_data.description == "two litres"
        assert task_data.priority == Priority.MEDIUM

    @pytest.mark.parametrize("title", ["ab", "   ab   ", "x" * 101])
    def test_create_title_length(self, title):
        with pytest.raises(ValidationError) as exc_info:
            TaskCreate(title=title)

        assert error_fields(exc_info.value) == ["title"]

    def test_create_title_length_bounds_accepted(self):
        assert TaskCreate(title="abc").title == "abc"
        assert TaskCreate(title="x" * 100).title == "x" * 100

    def test_create_rejects_id_and_completed(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskCreate.model_validate({"title": "Buy milk", "id": 10, "completed": True})

        assert sorted(error_fields(exc_info.value)) == ["completed", "id"]

    def test_create_collects_all_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskCreate.model_validate(
                {"title": "no", "description": "d" * 501, "priority": "urgent"}
            )

        assert sorted(error_fields(exc_info.value)) == ["description", "priority", "title"]

    def test_create_allows_empty_description(self):
        assert TaskCreate(title="Buy milk", description="").description == ""

    def test_create_requires_title(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskCreate.model_validate({})

        assert error_fields(exc_info.value) == ["title"]

    def test_update_requires_a_field(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskUpdate.model_validate({})

        assert "at least one field" in str(exc_info.value)

    def test_update_rejects_null(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskUpdate.model_validate({"title": None})

        assert error_fields(exc_info.value) == ["title"]

    def test_update_rejects_unknown_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskUpdate.model_validate({"title": "Valid title", "createdAt": "2025-01-01"})

        assert error_fields(exc_info.value) == ["createdAt"]

    @pytest.mark.parametrize("value", ["maybe", 1, 0, "1", "yes", "on", "true"])
    def test_update_rejects_non_boolean_completed(self, value):
        with pytest.raises(ValidationError) as exc_info:
            TaskUpdate.model_validate({"completed": value})

        assert error_fields(exc_info.value) == ["completed"]

    def test_update_changes_only_lists_supplied_fields(self):
        update = TaskUpdate.model_validate({"completed": False, "description": ""})

        assert update.changes() == {"completed": False, "description": ""}

    def test_filters_treat_blank_as_missing(self):
        filters = TaskFilters.model_validate({"completed": "", "priority": "", "q": ""})

        assert filters.completed is None
        assert filters.priority is None
        assert filters.q is None
        assert filters.describe() == "none"

    def test_filters_parse_values(self):
        filters = TaskFilters.model_validate({"completed": "true", "priority": "high", "q": "Milk"})

        assert filters.completed is True
        assert filters.priority == Priority.HIGH
        assert filters.describe() == "completed=True, priority=high, q=Milk"

    def test_filters_reject_unknown_priority(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskFilters.model_validate({"priority": "urgent"})

        assert error_fields(exc_info.value) == ["priority"]
