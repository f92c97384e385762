"""
Task storage.

Stores are created by the hosting process and passed to the services that
use them; there is no module-level store.
"""

import logging

from taskflow.models.task import Task
from taskflow.store.interface import TaskStore
from taskflow.store.memory import MemoryTaskStore

logger = logging.getLogger(__name__)

__all__ = [
    "TaskStore",
    "MemoryTaskStore",
    "create_store",
    "demo_tasks",
]


def demo_tasks() -> list[Task]:
    """Sample tasks a fresh process starts with."""
    return [
        Task(
            title="Sample Task 1",
            description="This is a sample task for testing",
            priority="medium",
            category="Development",
        ),
        Task(
            title="Completed Sample Task",
            description="This task is already completed",
            completed=True,
            priority="low",
            category="Testing",
        ),
    ]


def create_store(config=None) -> TaskStore:
    """
    Create the store for a new process.

    Args:
        config: Optional TaskflowConfig. If not provided, loads from default location.

    Returns:
        A MemoryTaskStore, seeded with demo tasks when configured
    """
    if config is None:
        from taskflow.config import get_config
        config = get_config()

    store = MemoryTaskStore()
    if config.store.seed_demo_tasks:
        for task in demo_tasks():
            store.add(task)
        logger.info(f"Seeded memory store with {len(store)} demo task(s)")
    return store
