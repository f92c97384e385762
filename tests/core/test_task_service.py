"""
Tests for Task Service.
"""

import pytest


class TestTaskServiceCreate:
    """Tests for TaskService.create()."""

    @pytest.mark.asyncio
    async def test_create_task_minimal(self, task_service):
        """Test creating a task with minimal data."""
        task = await task_service.create({"title": "Buy milk", "priority": "medium"})

        assert task.title == "Buy milk"
        assert task.priority == "medium"
        assert task.completed is False
        assert task.created_at == task.updated_at
        assert task.id is not None

    @pytest.mark.asyncio
    async def test_create_task_full(self, task_service, sample_task_data):
        """Test creating a task with all fields."""
        task = await task_service.create({**sample_task_data, "dueDate": "2025-05-01"})

        assert task.title == "Test Task"
        assert task.description == "A test task description"
        assert task.category == "Development"
        assert task.due_date is not None

    @pytest.mark.asyncio
    async def test_created_task_is_stored(self, task_service, sample_task_data):
        """Test that the new task is appended to the store."""
        task = await task_service.create(sample_task_data)

        tasks = await task_service.list()
        assert [t.id for t in tasks] == [task.id]

    @pytest.mark.asyncio
    async def test_whitespace_title_rejected(self, task_service):
        """Test that a blank title raises and stores nothing."""
        from taskflow.errors import CreationValidationError

        with pytest.raises(CreationValidationError) as exc:
            await task_service.create({"title": "  ", "priority": "low"})

        assert exc.value.errors[0].field == "title"
        assert await task_service.list() == []

    @pytest.mark.asyncio
    async def test_invalid_priority_rejected(self, task_service):
        """Test that invalid priority raises a ValueError subclass."""
        with pytest.raises(ValueError) as exc:
            await task_service.create({"title": "Test", "priority": "URGENT"})

        assert "priority" in str(exc.value).lower()


class TestTaskServiceGet:
    """Tests for TaskService.get()."""

    @pytest.mark.asyncio
    async def test_get_existing_task(self, task_service, sample_task_data):
        created = await task_service.create(sample_task_data)
        fetched = await task_service.get(created.id)

        assert fetched is not None
        assert fetched.id == created.id

    @pytest.mark.asyncio
    async def test_get_nonexistent_task(self, task_service):
        assert await task_service.get("nonexistent-id") is None


class TestTaskServiceUpdate:
    """Tests for TaskService.update() and toggle()."""

    @pytest.mark.asyncio
    async def test_update_fields(self, task_service, sample_task_data):
        created = await task_service.create(sample_task_data)

        updated = await task_service.update(created.id, {
            "title": "New title",
            "priority": "high",
            "category": None,
        })

        assert updated.title == "New title"
        assert updated.priority == "high"
        assert updated.category is None
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

        stored = await task_service.get(created.id)
        assert stored.title == "New title"

    @pytest.mark.asyncio
    async def test_update_nonexistent_returns_none(self, task_service):
        assert await task_service.update("nonexistent", {"title": "New"}) is None

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_task_untouched(self, task_service, sample_task_data):
        from taskflow.errors import UpdateValidationError

        created = await task_service.create(sample_task_data)

        with pytest.raises(UpdateValidationError):
            await task_service.update(created.id, {"title": "Valid", "priority": "nope"})

        stored = await task_service.get(created.id)
        assert stored.title == "Test Task"
        assert stored.updated_at == created.updated_at

    @pytest.mark.asyncio
    async def test_toggle(self, task_service, sample_task_data):
        created = await task_service.create(sample_task_data)

        toggled = await task_service.toggle(created.id)
        assert toggled.completed is True

        toggled = await task_service.toggle(created.id)
        assert toggled.completed is False

    @pytest.mark.asyncio
    async def test_complete(self, task_service, sample_task_data):
        created = await task_service.create(sample_task_data)

        done = await task_service.complete(created.id)

        assert done.completed is True

    @pytest.mark.asyncio
    async def test_toggle_nonexistent_returns_none(self, task_service):
        assert await task_service.toggle("nonexistent") is None

    @pytest.mark.asyncio
    async def test_task_deleted_before_write_returns_none(self, sample_task_data, caplog):
        """Test that a task removed between read and write is reported missing."""
        import logging

        from taskflow.services.tasks import TaskService
        from taskflow.store.memory import MemoryTaskStore

        class DeletingStore(MemoryTaskStore):
            """Removes the task just before each replace lands."""

            def replace(self, task):
                self.remove(task.id)
                return super().replace(task)

        store = DeletingStore()
        service = TaskService(store)

        first = await service.create(sample_task_data)
        second = await service.create(sample_task_data)

        with caplog.at_level(logging.INFO, logger="taskflow.services.tasks"):
            assert await service.update(first.id, {"title": "Renamed"}) is None
            assert await service.toggle(second.id) is None

        assert "Updated task" not in caplog.text
        assert "Toggled task" not in caplog.text
        assert store.all() == []


class TestTaskServiceDelete:
    """Tests for TaskService.delete() and clear()."""

    @pytest.mark.asyncio
    async def test_delete(self, task_service, sample_task_data):
        created = await task_service.create(sample_task_data)

        assert await task_service.delete(created.id) is True
        assert await task_service.get(created.id) is None
        assert await task_service.delete(created.id) is False

    @pytest.mark.asyncio
    async def test_clear(self, task_service, sample_task_data):
        await task_service.create(sample_task_data)
        await task_service.create(sample_task_data)

        assert await task_service.clear() == 2
        assert await task_service.list() == []


class TestTaskServiceQuery:
    """Tests for TaskService.query() and stats()."""

    @pytest.mark.asyncio
    async def test_query_default_order(self, task_service):
        await task_service.create({"title": "A", "priority": "high"})
        b = await task_service.create({"title": "B", "priority": "low"})
        await task_service.create({"title": "C", "priority": "medium"})
        await task_service.toggle(b.id)

        result = await task_service.query({"status": "pending"})

        assert [t.title for t in result.items] == ["A", "C"]
        assert result.stats.total == 3
        assert result.stats.completed == 1
        assert result.stats.pending == 2
        assert result.filtered_count == 2

    @pytest.mark.asyncio
    async def test_query_invalid_params(self, task_service):
        from taskflow.errors import QueryValidationError

        with pytest.raises(QueryValidationError) as exc:
            await task_service.query({"status": "archived", "search": "x" * 200})

        assert len(exc.value.messages) == 2

    @pytest.mark.asyncio
    async def test_stats(self, task_service):
        await task_service.create({"title": "A", "priority": "high"})
        await task_service.create({"title": "B", "priority": "high"})

        stats = await task_service.stats()

        assert stats.total == 2
        assert stats.by_priority == {"low": 0, "medium": 0, "high": 2}
        assert stats.filtered == 2
