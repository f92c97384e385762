"""
In-memory task store.

Tasks live only as long as the process. A lock serializes access so the
store is safe to share between the worker threads of an ASGI server.
"""

import copy
import logging
import threading

from taskflow.models.task import Task
from taskflow.store.interface import TaskStore

logger = logging.getLogger(__name__)


class MemoryTaskStore(TaskStore):
    """
    Ordered, non-durable task store.

    Tasks are copied on the way in and on the way out, so no caller can
    change stored state without going through replace().
    """

    def __init__(self, tasks: list[Task] | None = None):
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()
        for task in tasks or []:
            self.add(task)

    def all(self) -> list[Task]:
        with self._lock:
            return [copy.copy(t) for t in self._tasks.values()]

    def get(self, task_id: str) -> Task | None:
        with self._lock:
            task = self._tasks.get(task_id)
            return copy.copy(task) if task else None

    def add(self, task: Task) -> Task:
        with self._lock:
            if task.id in self._tasks:
                raise ValueError(f"Duplicate task id: {task.id}")
            self._tasks[task.id] = copy.copy(task)
        return task

    def replace(self, task: Task) -> Task | None:
        with self._lock:
            if task.id not in self._tasks:
                return None
            self._tasks[task.id] = copy.copy(task)
        return task

    def remove(self, task_id: str) -> bool:
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._tasks)
            self._tasks.clear()
        logger.info(f"Cleared {count} task(s) from memory store")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
