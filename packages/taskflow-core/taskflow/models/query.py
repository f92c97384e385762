"""
Query models for Taskflow.

Filter, sort, and page specifications are built fresh for every query and
never mutated. Results bundle the ordered tasks with their statistics.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from taskflow.errors import FieldError
from taskflow.models.task import TASK_PRIORITIES, Task

# Valid completion-status filters
FILTER_STATUSES = ("all", "completed", "pending")

# Sort keys accepted on the wire
SORT_FIELDS = ("priority", "dueDate", "createdAt", "updatedAt", "title")

SORT_ORDERS = ("asc", "desc")

DEFAULT_PAGE_LIMIT = 20


@dataclass(frozen=True)
class FilterSpec:
    """
    Criteria narrowing a task collection.

    Attributes:
        status: all, completed, or pending
        priority: Exact priority to keep, or None for any
        category: Exact (case-sensitive) category to keep, or None for any
        search: Case-insensitive substring of title or description, or None
    """

    status: str = "all"
    priority: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class SortSpec:
    """Explicit sort key and direction."""

    field: str
    order: str = "asc"

    @property
    def descending(self) -> bool:
        return self.order == "desc"


@dataclass(frozen=True)
class PageSpec:
    """1-based page number and page size."""

    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT


@dataclass
class QueryValidation:
    """Outcome of validating raw query parameters."""

    filter: FilterSpec = field(default_factory=FilterSpec)
    sort: Optional[SortSpec] = None
    page: Optional[PageSpec] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class TaskValidation:
    """Outcome of validating task creation or update input."""

    values: Dict[str, object] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class TaskStats:
    """Aggregate counts over the full collection and the filtered subset."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    by_priority: Dict[str, int] = field(
        default_factory=lambda: {p: 0 for p in TASK_PRIORITIES}
    )
    overdue: int = 0
    filtered: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "byPriority": dict(self.by_priority),
            "overdue": self.overdue,
        }


@dataclass
class QueryResult:
    """Ordered tasks returned by a query, with statistics and page info."""

    items: List[Task]
    stats: TaskStats
    page: int = 1
    limit: Optional[int] = None

    @property
    def filtered_count(self) -> int:
        return self.stats.filtered

    @property
    def total_pages(self) -> int:
        if not self.limit:
            return 1
        return max(1, -(-self.filtered_count // self.limit))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self) -> dict:
        return {
            "items": [t.to_dict() for t in self.items],
            "stats": self.stats.to_dict(),
            "filteredCount": self.filtered_count,
        }
