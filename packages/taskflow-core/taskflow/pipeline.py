"""
Task query pipeline.

Pure functions shared by every surface that lists tasks:
validate -> filter -> sort -> aggregate -> paginate.

None of these functions mutate their inputs.
"""

import unicodedata
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from taskflow.errors import FieldError, QueryValidationError
from taskflow.models.query import (
    DEFAULT_PAGE_LIMIT,
    FILTER_STATUSES,
    SORT_FIELDS,
    SORT_ORDERS,
    FilterSpec,
    PageSpec,
    QueryResult,
    QueryValidation,
    SortSpec,
    TaskStats,
)
from taskflow.models.task import TASK_PRIORITIES, Task, utcnow

MAX_SEARCH_LENGTH = 100
MAX_CATEGORY_FILTER_LENGTH = 50
MAX_PAGE = 1000
MAX_PAGE_LIMIT = 100

# Case-insensitive lookup of wire sort keys
_SORT_FIELDS_BY_LOWER = {f.lower(): f for f in SORT_FIELDS}


def _param(raw: Mapping[str, Any], key: str) -> Any:
    """Read a query parameter, treating empty strings as absent."""
    value = raw.get(key)
    if isinstance(value, str) and value == "":
        return None
    return value


def _parse_bounded_int(value: Any, low: int, high: int) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int) or not low <= value <= high:
        return None
    return value


# =============================================================================
# VALIDATION
# =============================================================================

def validate_query(raw: Optional[Mapping[str, Any]]) -> QueryValidation:
    """
    Validate raw query parameters.

    Every rule is checked; the result carries all violations together.

    Args:
        raw: Untyped key/value pairs (e.g. a URL query string)

    Returns:
        QueryValidation with the parsed specs, or with errors if any rule failed
    """
    raw = raw or {}
    errors: List[FieldError] = []

    status = _param(raw, "status")
    if status is not None:
        status = str(status).lower()
        if status not in FILTER_STATUSES:
            errors.append(FieldError(
                "status",
                f"Invalid status: {raw['status']}. Must be one of: {', '.join(FILTER_STATUSES)}",
                raw["status"],
            ))

    priority = _param(raw, "priority")
    if priority is not None:
        priority = str(priority).lower()
        if priority not in TASK_PRIORITIES:
            errors.append(FieldError(
                "priority",
                f"Invalid priority: {raw['priority']}. Must be one of: {', '.join(TASK_PRIORITIES)}",
                raw["priority"],
            ))

    category = _param(raw, "category")
    if category is not None:
        category = str(category)
        if len(category) > MAX_CATEGORY_FILTER_LENGTH:
            errors.append(FieldError(
                "category",
                f"Category must be {MAX_CATEGORY_FILTER_LENGTH} characters or less",
                category,
            ))

    search = _param(raw, "search")
    if search is not None:
        search = str(search)
        if len(search) > MAX_SEARCH_LENGTH:
            errors.append(FieldError(
                "search",
                f"Search term must be {MAX_SEARCH_LENGTH} characters or less",
                search,
            ))

    sort_by = _param(raw, "sortBy")
    if sort_by is not None:
        sort_by = _SORT_FIELDS_BY_LOWER.get(str(sort_by).lower())
        if sort_by is None:
            errors.append(FieldError(
                "sortBy",
                f"Invalid sortBy: {raw['sortBy']}. Must be one of: {', '.join(SORT_FIELDS)}",
                raw["sortBy"],
            ))

    sort_order = _param(raw, "sortOrder")
    if sort_order is not None:
        sort_order = str(sort_order).lower()
        if sort_order not in SORT_ORDERS:
            errors.append(FieldError(
                "sortOrder",
                f"Invalid sortOrder: {raw['sortOrder']}. Must be one of: {', '.join(SORT_ORDERS)}",
                raw["sortOrder"],
            ))

    raw_page = _param(raw, "page")
    page = None
    if raw_page is not None:
        page = _parse_bounded_int(raw_page, 1, MAX_PAGE)
        if page is None:
            errors.append(FieldError(
                "page", f"Page must be an integer between 1 and {MAX_PAGE}", raw_page,
            ))

    raw_limit = _param(raw, "limit")
    limit = None
    if raw_limit is not None:
        limit = _parse_bounded_int(raw_limit, 1, MAX_PAGE_LIMIT)
        if limit is None:
            errors.append(FieldError(
                "limit", f"Limit must be an integer between 1 and {MAX_PAGE_LIMIT}", raw_limit,
            ))

    if errors:
        return QueryValidation(errors=errors)

    sort = None
    if sort_by is not None:
        default_direction = "desc" if sort_by == "priority" else "asc"
        sort = SortSpec(field=sort_by, order=sort_order or default_direction)

    paging = None
    if page is not None or limit is not None:
        paging = PageSpec(page=page or 1, limit=limit or DEFAULT_PAGE_LIMIT)

    return QueryValidation(
        filter=FilterSpec(
            status=status or "all",
            priority=priority,
            category=category,
            search=search,
        ),
        sort=sort,
        page=paging,
    )


# =============================================================================
# FILTERING
# =============================================================================

def _matches(task: Task, spec: FilterSpec, needle: Optional[str]) -> bool:
    if spec.status == "completed" and not task.completed:
        return False
    if spec.status == "pending" and task.completed:
        return False

    if spec.priority and task.priority != spec.priority:
        return False

    if spec.category and task.category != spec.category:
        return False

    if needle:
        in_title = needle in task.title.casefold()
        in_description = bool(task.description) and needle in task.description.casefold()
        if not (in_title or in_description):
            return False

    return True


def filter_tasks(tasks: Iterable[Task], spec: FilterSpec) -> List[Task]:
    """Keep the tasks matching every criterion of spec, in input order."""
    needle = spec.search.casefold() if spec.search else None
    return [t for t in tasks if _matches(t, spec, needle)]


# =============================================================================
# SORTING
# =============================================================================

def collation_key(text: str) -> tuple:
    """
    Locale-style sort key for text.

    Primary key ignores case and accents; the raw text breaks ties so the
    ordering is total.
    """
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base, text)


_SORT_KEYS = {
    "priority": lambda t: t.priority_rank,
    "createdAt": lambda t: t.created_at,
    "updatedAt": lambda t: t.updated_at,
    "title": lambda t: collation_key(t.title),
}


def default_order(tasks: Iterable[Task]) -> List[Task]:
    """
    Order used by list views when no explicit sort is requested.

    Incomplete before completed, then high > medium > low priority,
    then newest first.
    """
    return sorted(
        tasks,
        key=lambda t: (t.completed, -t.priority_rank, -t.created_at.timestamp()),
    )


def sort_tasks(tasks: Iterable[Task], sort: Optional[SortSpec] = None) -> List[Task]:
    """
    Sort tasks by an explicit key, or by the default order when sort is None.

    Sorting is stable in both directions. Tasks without a due date go last
    when sorting by dueDate, whatever the direction.
    """
    if sort is None:
        return default_order(tasks)

    if sort.field == "dueDate":
        tasks = list(tasks)
        dated = [t for t in tasks if t.due_date is not None]
        undated = [t for t in tasks if t.due_date is None]
        return sorted(dated, key=lambda t: t.due_date, reverse=sort.descending) + undated

    return sorted(tasks, key=_SORT_KEYS[sort.field], reverse=sort.descending)


# =============================================================================
# STATISTICS
# =============================================================================

def compute_stats(
    all_tasks: Iterable[Task],
    filtered: Iterable[Task],
    now: Optional[datetime] = None,
) -> TaskStats:
    """
    Count tasks by completion state and priority.

    Args:
        all_tasks: The full, unfiltered collection
        filtered: The filtered subsequence
        now: Reference time for the overdue count

    Returns:
        TaskStats where completed + pending == total
    """
    now = now or utcnow()
    stats = TaskStats()

    for task in all_tasks:
        stats.total += 1
        if task.completed:
            stats.completed += 1
        stats.by_priority[task.priority] += 1
        if task.is_overdue(now):
            stats.overdue += 1

    stats.pending = stats.total - stats.completed
    stats.filtered = sum(1 for _ in filtered)
    return stats


# =============================================================================
# QUERY
# =============================================================================

def paginate(tasks: List[Task], page: Optional[PageSpec]) -> List[Task]:
    """Slice one page out of an ordered list; None returns everything."""
    if page is None:
        return list(tasks)
    start = (page.page - 1) * page.limit
    return tasks[start:start + page.limit]


def execute_query(
    tasks: Iterable[Task],
    validation: QueryValidation,
    now: Optional[datetime] = None,
) -> QueryResult:
    """Run an already-validated query over tasks."""
    if not validation.is_valid:
        raise QueryValidationError(validation.errors)

    all_tasks = list(tasks)
    filtered = filter_tasks(all_tasks, validation.filter)
    ordered = sort_tasks(filtered, validation.sort)
    stats = compute_stats(all_tasks, filtered, now)

    page = validation.page
    return QueryResult(
        items=paginate(ordered, page),
        stats=stats,
        page=page.page if page else 1,
        limit=page.limit if page else None,
    )


def run_query(
    tasks: Iterable[Task],
    raw: Optional[Mapping[str, Any]] = None,
    now: Optional[datetime] = None,
) -> QueryResult:
    """
    Validate raw parameters and run the full pipeline.

    Raises:
        QueryValidationError: If any parameter is invalid; nothing is executed
    """
    return execute_query(tasks, validate_query(raw), now)
