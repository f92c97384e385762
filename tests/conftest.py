"""
Pytest configuration and fixtures for taskflow tests.
"""

import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add packages to path for testing
packages_dir = Path(__file__).parent.parent / "packages"
sys.path.insert(0, str(packages_dir / "taskflow-core"))
sys.path.insert(0, str(packages_dir / "taskflow-api"))
sys.path.insert(0, str(packages_dir / "taskflow-mcp"))


BASE_TIME = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / ".taskflow"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def make_task():
    """Factory for tasks created at deterministic, increasing times."""
    from taskflow.models.task import Task

    counter = {"n": 0}

    def _make(title, priority="medium", completed=False, minutes=None, **kwargs):
        counter["n"] += 1
        offset = counter["n"] if minutes is None else minutes
        created = BASE_TIME + timedelta(minutes=offset)
        kwargs.setdefault("created_at", created)
        return Task(title=title, priority=priority, completed=completed, **kwargs)

    return _make


@pytest.fixture
def abc_tasks(make_task):
    """The A/B/C example collection."""
    return [
        make_task("A", priority="high"),
        make_task("B", priority="low", completed=True),
        make_task("C", priority="medium"),
    ]


@pytest.fixture
def sample_task_data():
    """Sample creation payload for testing."""
    return {
        "title": "Test Task",
        "description": "A test task description",
        "priority": "medium",
        "category": "Development",
    }


@pytest.fixture
def empty_config():
    """Config with demo seeding turned off."""
    from taskflow.config import TaskflowConfig, StoreConfig

    return TaskflowConfig(store=StoreConfig(seed_demo_tasks=False))


@pytest.fixture
def task_service():
    """A TaskService over an empty memory store."""
    from taskflow.services.tasks import TaskService
    from taskflow.store.memory import MemoryTaskStore

    return TaskService(MemoryTaskStore())
