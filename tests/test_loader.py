"""
ReconciliationLoader and TaskBoardClient read tests.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from taskboard_mcp.board import ReconciliationLoader, ReflectionStore
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.exceptions import TaskBoardAPIError, TaskBoardLoadError

if TYPE_CHECKING:
    from tests.conftest import MockDataStore


pytestmark = [pytest.mark.unit]


@pytest.fixture
def store() -> ReflectionStore:
    return ReflectionStore()


@pytest.fixture
def loader(client: TaskBoardClient, store: ReflectionStore) -> ReconciliationLoader:
    return ReconciliationLoader(client, store)


class TestLoad:

    async def test_builds_tree(self, loader, store, mock_store: MockDataStore):
        mock_store.seed_data(projects=2, tasks_per_project=3, items_per_task=2)

        snapshots = await loader.load()

        assert len(snapshots) == 2
        assert all(len(s.tasks) == 3 for s in snapshots)
        assert all(len(t.checklist) == 2 for s in snapshots for t in s.tasks)
        assert [s.project.name for s in store.projects()] == ["Project 1", "Project 2"]

    async def test_ordered_by_creation(self, loader, store, mock_store: MockDataStore):
        # inserted out of creation order on purpose
        mock_store.add_row("projects", name="Later", created_at="2024-06-02T00:00:00+00:00")
        mock_store.add_row("projects", name="Earlier", created_at="2024-06-01T00:00:00+00:00")

        await loader.load()

        assert [s.project.name for s in store.projects()] == ["Earlier", "Later"]

    async def test_checklists_attached_to_their_task(self, loader, store, mock_store: MockDataStore):
        project = mock_store.add_project("Launch")
        design = mock_store.add_task(project["id"], "Design")
        build = mock_store.add_task(project["id"], "Build")
        mock_store.add_checklist_item(build["id"], "Compile")

        await loader.load()

        assert store.task(design["id"]).checklist == []
        assert [i.text for i in store.task(build["id"]).checklist] == ["Compile"]

    async def test_queries_every_level(self, loader, mock_store: MockDataStore):
        mock_store.seed_data(projects=2, tasks_per_project=2, items_per_task=0)

        await loader.load()

        mock_store.assert_called("select", times=1, table="projects")
        mock_store.assert_called("select", times=2, table="tasks")
        mock_store.assert_called("select", times=4, table="checklist_items")
        args, kwargs = mock_store.get_calls("select", "tasks")[0]
        assert kwargs["order_by"] == "created_at"

    async def test_empty_store(self, loader, store):
        assert await loader.load() == []
        assert len(store) == 0


class TestLoadErrors:

    @pytest.mark.parametrize("table", ["projects", "tasks", "checklist_items"])
    async def test_failure_at_any_level_aborts(self, loader, store, mock_store: MockDataStore, table: str):
        mock_store.seed_data(projects=1, tasks_per_project=1, items_per_task=1)
        await loader.load()
        before = [s.model_dump() for s in store.projects()]

        mock_store.add_project("New")
        mock_store.should_fail[f"select:{table}"] = TaskBoardAPIError("down", status_code=503, table=table)

        with pytest.raises(TaskBoardLoadError) as exc_info:
            await loader.load()

        assert exc_info.value.message.startswith("Failed to load projects")
        assert exc_info.value.table == table
        assert [s.model_dump() for s in store.projects()] == before

    async def test_load_error_is_api_error(self, loader, mock_store: MockDataStore):
        mock_store.should_fail["select"] = TaskBoardAPIError("down")
        with pytest.raises(TaskBoardAPIError):
            await loader.load()


class TestClientReads:

    async def test_daily_todos_exact_date(self, client: TaskBoardClient, mock_store: MockDataStore):
        mock_store.add_row("daily_todos", todo_date="2024-06-01", title="A", completed=False)
        mock_store.add_row("daily_todos", todo_date="2024-06-02", title="B", completed=False)

        todos = await client.list_daily_todos(date(2024, 6, 1))

        assert [t.title for t in todos] == ["A"]

    async def test_create_task_defaults(self, client: TaskBoardClient, mock_store: MockDataStore):
        task = await client.create_task("p1", "Design")

        args, _ = mock_store.get_calls("insert", "tasks")[0]
        row = args[1]
        assert row["status"] == "not-started"
        assert row["priority"] == "medium"
        assert row["description"] == row["requirements"] == row["notes"] == ""
        assert task.id
        assert task.created_at is not None

    async def test_disconnect_closes_store(self, mock_store: MockDataStore):
        async with TaskBoardClient(mock_store) as client:
            assert client.is_connected
        assert mock_store.closed
