"""
Tests for the Taskflow MCP server and its task tools.
"""

import pytest


class TestMCPServerStartup:
    """Test that the MCP server starts correctly."""

    def test_server_creates(self, empty_config):
        from taskflow_mcp.server import create_server

        assert create_server(empty_config) is not None

    @pytest.mark.asyncio
    async def test_server_has_tools(self, empty_config):
        from taskflow_mcp.server import create_server

        mcp = create_server(empty_config)
        tool_names = {tool.name for tool in await mcp.list_tools()}

        assert tool_names == {
            "taskflow_list",
            "taskflow_create",
            "taskflow_show",
            "taskflow_update",
            "taskflow_toggle",
            "taskflow_delete",
            "taskflow_stats",
            "taskflow_health",
        }


class TestTaskTools:
    """Tests for the tool implementations."""

    @pytest.mark.asyncio
    async def test_create_and_show(self, task_service):
        from taskflow_mcp.tools.tasks import create_task, show_task

        created = await create_task(task_service, "Buy milk", "medium", category="Home")
        shown = await show_task(task_service, created["id"])

        assert shown == created
        assert created["completed"] is False

    @pytest.mark.asyncio
    async def test_create_invalid_returns_error_payload(self, task_service):
        from taskflow_mcp.tools.tasks import create_task

        result = await create_task(task_service, " ", "URGENT")

        assert result["error"] == "Invalid task data"
        assert len(result["errors"]) == 2

    @pytest.mark.asyncio
    async def test_list_with_filters(self, task_service):
        from taskflow_mcp.tools.tasks import create_task, list_tasks, toggle_task

        await create_task(task_service, "A", "high")
        b = await create_task(task_service, "B", "low")
        await create_task(task_service, "C", "medium")
        await toggle_task(task_service, b["id"])

        result = await list_tasks(task_service, status="pending")

        assert [t["title"] for t in result["tasks"]] == ["A", "C"]
        assert result["count"] == 2
        assert result["filteredCount"] == 2
        assert result["stats"]["completed"] == 1

    @pytest.mark.asyncio
    async def test_list_invalid_params(self, task_service):
        from taskflow_mcp.tools.tasks import list_tasks

        result = await list_tasks(task_service, status="archived", limit=500)

        assert result["error"] == "Invalid query parameters provided"
        assert len(result["errors"]) == 2

    @pytest.mark.asyncio
    async def test_update_and_delete(self, task_service):
        from taskflow_mcp.tools.tasks import create_task, delete_task, update_task

        created = await create_task(task_service, "Draft", "low")

        updated = await update_task(task_service, created["id"], title="Final", completed=True)
        assert updated["title"] == "Final"
        assert updated["completed"] is True

        assert await delete_task(task_service, created["id"]) == {"deleted": True, "id": created["id"]}
        assert "error" in await delete_task(task_service, created["id"])

    @pytest.mark.asyncio
    async def test_unknown_ids(self, task_service):
        from taskflow_mcp.tools.tasks import show_task, toggle_task, update_task

        for result in (
            await show_task(task_service, "ghost"),
            await toggle_task(task_service, "ghost"),
            await update_task(task_service, "ghost", title="x"),
        ):
            assert result == {"error": "Task not found: ghost"}

    @pytest.mark.asyncio
    async def test_stats_and_health(self, task_service, empty_config):
        from taskflow_mcp.tools.tasks import create_task, health, task_stats

        await create_task(task_service, "A", "high")

        stats = await task_stats(task_service)
        assert stats["total"] == 1
        assert stats["byPriority"]["high"] == 1

        assert health(empty_config)["status"] == "ok"
