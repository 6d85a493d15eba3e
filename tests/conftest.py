"""Shared test fixtures and configuration for the test suite."""

from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

from task_api.config import Settings
from task_api.main import create_app
from task_api.models.task import Task
from task_api.services.task_service import TaskService, demo_tasks

TEST_API_KEY = "test-api-key"


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with a known key and an empty store."""
    return Settings(
        api_key=TEST_API_KEY,
        log_level="INFO",
        seed_demo_tasks=False,
        debug=False,
    )


@pytest.fixture
def task_service() -> TaskService:
    """Create an empty task service instance for testing."""
    return TaskService()


@pytest.fixture
def seeded_task_service() -> TaskService:
    """Create a task service holding the two demo tasks."""
    return TaskService(demo_tasks())


@pytest.fixture
def client(test_settings, task_service) -> Generator[TestClient, None, None]:
    """Create a test client for an app backed by an empty store."""
    app = create_app(test_settings, task_service)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(test_settings, seeded_task_service) -> Generator[TestClient, None, None]:
    """Create a test client for an app backed by the demo tasks."""
    app = create_app(test_settings, seeded_task_service)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Headers carrying the test API key."""
    return {"X-Api-Key": TEST_API_KEY}


@pytest.fixture
def sample_task() -> Task:
    """Create a sample task for testing."""
    return Task(id=1, title="Test Task", description="This is a test task")


# Test data fixtures
@pytest.fixture
def sample_task_data():
    """Sample task data for testing."""
    return {"title": "Test Task", "description": "This is a test task description"}


@pytest.fixture
def sample_tasks_bulk():
    """Sample task payloads covering every priority."""
    return [
        {"title": "Write report", "description": "Quarterly numbers", "priority": "high"},
        {"title": "Call plumber", "description": "Kitchen sink", "priority": "medium"},
        {"title": "Water plants", "description": "Balcony REPORT box", "priority": "low"},
        {"title": "Plan trip", "priority": "high"},
    ]
