"""
Abstract task store interface.

A store holds the ordered task collection for one running process.
"""

from abc import ABC, abstractmethod

from taskflow.models.task import Task


class TaskStore(ABC):
    """
    Abstract base class for task stores.

    Implementations must:
    - Keep tasks in insertion order
    - Hand out snapshots, so callers never iterate live state
    - Serialize mutations (one writer at a time)
    """

    @abstractmethod
    def all(self) -> list[Task]:
        """Return a snapshot of every task, in insertion order."""
        pass

    @abstractmethod
    def get(self, task_id: str) -> Task | None:
        """Return the task with this id, or None."""
        pass

    @abstractmethod
    def add(self, task: Task) -> Task:
        """
        Append a new task.

        Raises:
            ValueError: If a task with the same id already exists
        """
        pass

    @abstractmethod
    def replace(self, task: Task) -> Task | None:
        """
        Swap in a new version of an existing task, keeping its position.

        Returns:
            The stored task, or None if the id is unknown
        """
        pass

    @abstractmethod
    def remove(self, task_id: str) -> bool:
        """Delete a task. Returns False if the id is unknown."""
        pass

    @abstractmethod
    def clear(self) -> int:
        """Delete every task and return how many were removed."""
        pass

    def __len__(self) -> int:
        return len(self.all())
