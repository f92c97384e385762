"""
Task model for Taskflow.

Tasks are the core work items that can be created, toggled, edited, and deleted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


# Valid priority values, lowest first
TASK_PRIORITIES = ("low", "medium", "high")

# Rank used for ordering; higher rank means more important
PRIORITY_RANK = {priority: rank for rank, priority in enumerate(TASK_PRIORITIES)}


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Task:
    """
    A task or work item.

    Attributes:
        title: Task title (1-100 characters, never blank)
        priority: Priority level (low, medium, high)
        id: Unique identifier (UUID)
        description: Optional details (max 500 characters)
        completed: Whether the task is done
        category: Optional free-text label (max 50 characters)
        due_date: Optional due date
        created_at: When the task was created
        updated_at: When last modified
    """

    title: str
    priority: str = "medium"
    id: str = field(default_factory=lambda: str(uuid4()))
    description: Optional[str] = None
    completed: bool = False
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = utcnow()
        if self.updated_at is None:
            self.updated_at = self.created_at

    @property
    def priority_rank(self) -> int:
        """Numeric rank of the priority (high sorts above low)."""
        return PRIORITY_RANK[self.priority]

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """
        Check if the task is past its due day.

        Completed tasks and tasks without a due date are never overdue.
        Comparison is by calendar day, so a task due today is not overdue.
        """
        if self.completed or self.due_date is None:
            return False
        now = now or utcnow()
        return self.due_date.astimezone(timezone.utc).date() < now.astimezone(timezone.utc).date()

    def touch(self, now: Optional[datetime] = None) -> None:
        """Bump updated_at, never moving it before created_at."""
        now = now or utcnow()
        self.updated_at = max(now, self.created_at)

    def to_dict(self) -> dict:
        """Convert to the camelCase wire representation."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "category": self.category,
            "dueDate": _isoformat(self.due_date),
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }
