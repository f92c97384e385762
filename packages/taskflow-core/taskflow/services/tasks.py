"""
Task Service for Taskflow.

CRUD and query operations for tasks over an injected task store.
"""

import builtins
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping

from taskflow.errors import CreationValidationError, UpdateValidationError
from taskflow.models.query import QueryResult, TaskStats
from taskflow.models.task import Task, utcnow
from taskflow.pipeline import compute_stats, run_query
from taskflow.store import TaskStore
from taskflow.validation import validate_create, validate_update

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service for managing tasks.

    Every surface (HTTP API, MCP tools) goes through this service, so they
    all share one validation and query pipeline.
    """

    def __init__(self, store: TaskStore):
        """
        Initialize task service.

        Args:
            store: The TaskStore owned by the hosting process
        """
        self._store = store

    @property
    def store(self) -> TaskStore:
        """Get the task store."""
        return self._store

    async def create(self, data: Any) -> Task:
        """
        Create a new task.

        Args:
            data: Raw creation input with title, priority, and optionally
                description, category, completed, dueDate

        Returns:
            Created Task object

        Raises:
            CreationValidationError: With every violated constraint
        """
        result = validate_create(data)
        if not result.is_valid:
            logger.debug(f"Rejected task creation: {result.errors}")
            raise CreationValidationError(result.errors)

        now = utcnow()
        task = Task(**result.values, created_at=now, updated_at=now)
        self._store.add(task)

        logger.info(f"Created task: {task.id} - {task.title}")
        return task

    async def get(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        return self._store.get(task_id)

    async def update(self, task_id: str, data: Any) -> Task | None:
        """
        Update a task.

        Args:
            task_id: Task ID
            data: Raw partial update (any subset of the creation fields)

        Returns:
            Updated Task or None if not found

        Raises:
            UpdateValidationError: With every violated constraint
        """
        result = validate_update(data)
        if not result.is_valid:
            logger.debug(f"Rejected update of {task_id}: {result.errors}")
            raise UpdateValidationError(result.errors)

        task = self._store.get(task_id)
        if task is None:
            return None

        updated = replace(task, **result.values)
        updated.touch()
        stored = self._store.replace(updated)
        if stored is not None:
            logger.info(f"Updated task: {task_id} ({', '.join(result.values) or 'timestamp only'})")
        return stored

    async def toggle(self, task_id: str) -> Task | None:
        """Flip a task's completion state."""
        task = self._store.get(task_id)
        if task is None:
            return None

        updated = replace(task, completed=not task.completed)
        updated.touch()
        stored = self._store.replace(updated)
        if stored is not None:
            logger.info(f"Toggled task: {task_id} -> completed={updated.completed}")
        return stored

    async def complete(self, task_id: str) -> Task | None:
        """Mark a task as done."""
        return await self.update(task_id, {"completed": True})

    async def delete(self, task_id: str) -> bool:
        """Delete a task."""
        removed = self._store.remove(task_id)
        if removed:
            logger.info(f"Deleted task: {task_id}")
        return removed

    async def clear(self) -> int:
        """Delete every task."""
        return self._store.clear()

    async def list(self) -> builtins.list[Task]:
        """List every task in insertion order."""
        return self._store.all()

    async def query(
        self,
        params: Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> QueryResult:
        """
        List tasks through the query pipeline.

        Args:
            params: Raw query parameters (status, priority, category, search,
                sortBy, sortOrder, page, limit)
            now: Reference time for the overdue count

        Returns:
            QueryResult with ordered items and statistics

        Raises:
            QueryValidationError: If any parameter is invalid
        """
        return run_query(self._store.all(), params, now)

    async def stats(self, now: datetime | None = None) -> TaskStats:
        """Statistics over the whole store."""
        tasks = self._store.all()
        return compute_stats(tasks, tasks, now)
