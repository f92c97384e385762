"""
Task tools for the Taskflow MCP server.

Each tool is a thin wrapper around TaskService. Failures come back as
{"error": ...} payloads instead of raised exceptions, so the agent always
gets a readable answer.
"""

from datetime import datetime, timezone
from typing import Optional

from taskflow.errors import ValidationError
from taskflow.services import TaskService


def _validation_failure(exc: ValidationError) -> dict:
    return {"error": exc.summary, "errors": exc.messages}


def _not_found(task_id: str) -> dict:
    return {"error": f"Task not found: {task_id}"}


def _drop_none(**kwargs) -> dict:
    return {k: v for k, v in kwargs.items() if v is not None}


async def list_tasks(
    service: TaskService,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> dict:
    params = _drop_none(
        status=status,
        priority=priority,
        category=category,
        search=search,
        sortBy=sort_by,
        sortOrder=sort_order,
        page=page,
        limit=limit,
    )
    try:
        result = await service.query(params)
    except ValidationError as e:
        return _validation_failure(e)

    data = result.to_dict()
    data["tasks"] = data.pop("items")
    data["count"] = len(result.items)
    return data


async def create_task(
    service: TaskService,
    title: str,
    priority: str,
    description: Optional[str] = None,
    category: Optional[str] = None,
    due_date: Optional[str] = None,
) -> dict:
    payload = _drop_none(
        title=title,
        priority=priority,
        description=description,
        category=category,
        dueDate=due_date,
    )
    try:
        task = await service.create(payload)
    except ValidationError as e:
        return _validation_failure(e)
    return task.to_dict()


async def show_task(service: TaskService, task_id: str) -> dict:
    task = await service.get(task_id)
    if not task:
        return _not_found(task_id)
    return task.to_dict()


async def update_task(
    service: TaskService,
    task_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    priority: Optional[str] = None,
    category: Optional[str] = None,
    completed: Optional[bool] = None,
    due_date: Optional[str] = None,
) -> dict:
    payload = _drop_none(
        title=title,
        description=description,
        priority=priority,
        category=category,
        completed=completed,
        dueDate=due_date,
    )
    try:
        task = await service.update(task_id, payload)
    except ValidationError as e:
        return _validation_failure(e)
    if not task:
        return _not_found(task_id)
    return task.to_dict()


async def toggle_task(service: TaskService, task_id: str) -> dict:
    task = await service.toggle(task_id)
    if not task:
        return _not_found(task_id)
    return task.to_dict()


async def delete_task(service: TaskService, task_id: str) -> dict:
    if not await service.delete(task_id):
        return _not_found(task_id)
    return {"deleted": True, "id": task_id}


async def task_stats(service: TaskService) -> dict:
    stats = await service.stats()
    return stats.to_dict()


def health(config) -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.version,
        "environment": config.environment,
    }


def register_task_tools(mcp, service: TaskService, config):
    """Register task management tools bound to one service."""

    @mcp.tool()
    async def taskflow_list(
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> dict:
        """
        List tasks with optional filters.

        Default order: pending before completed, then high > medium > low
        priority, then newest first.

        Args:
            status: Filter by status (all, completed, pending)
            priority: Filter by priority (low, medium, high)
            category: Exact category to match
            search: Case-insensitive text to find in title or description
            sort_by: priority, dueDate, createdAt, updatedAt, or title
            sort_order: asc or desc
            page: Page number (1-based); enables paging
            limit: Page size (1-100); enables paging

        Returns:
            Tasks, statistics, and filteredCount
        """
        return await list_tasks(
            service, status, priority, category, search, sort_by, sort_order, page, limit,
        )

    @mcp.tool()
    async def taskflow_create(
        title: str,
        priority: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> dict:
        """
        Create a new task.

        Args:
            title: Task title (1-100 characters)
            priority: Priority (low, medium, high)
            description: Task description (max 500 characters)
            category: Category label (max 50 characters)
            due_date: ISO-8601 due date

        Returns:
            Created task details
        """
        return await create_task(service, title, priority, description, category, due_date)

    @mcp.tool()
    async def taskflow_show(task_id: str) -> dict:
        """
        Get detailed information about a task.

        Args:
            task_id: Task UUID

        Returns:
            Full task details
        """
        return await show_task(service, task_id)

    @mcp.tool()
    async def taskflow_update(
        task_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        completed: Optional[bool] = None,
        due_date: Optional[str] = None,
    ) -> dict:
        """
        Update an existing task.

        Args:
            task_id: Task UUID
            title: New title
            description: New description
            priority: New priority
            category: New category
            completed: New completion state
            due_date: New ISO-8601 due date

        Returns:
            Updated task details
        """
        return await update_task(
            service, task_id, title, description, priority, category, completed, due_date,
        )

    @mcp.tool()
    async def taskflow_toggle(task_id: str) -> dict:
        """Flip a task between pending and completed."""
        return await toggle_task(service, task_id)

    @mcp.tool()
    async def taskflow_delete(task_id: str) -> dict:
        """Delete a task permanently."""
        return await delete_task(service, task_id)

    @mcp.tool()
    async def taskflow_stats() -> dict:
        """Counts by completion state and priority across all tasks."""
        return await task_stats(service)

    @mcp.tool()
    async def taskflow_health() -> dict:
        """Check that the server is up."""
        return health(config)
