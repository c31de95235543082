"""
Pytest Configuration and Fixtures for TaskBoard Tests.

This module provides fixtures, mock factories, and shared utilities for
testing the TaskBoard client, board and server.

Architecture:
    - MockDataStore: In-memory DataStore recording every call
    - Factories: Generate rows and models (projects, tasks, checklists, ...)
    - Fixtures: Provide configured clients, boards and mock data
    - Markers: Custom pytest markers for test categorization
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone
from typing import Any, AsyncIterator, Mapping

import pytest

from taskboard_mcp.api import DataStore, Row
from taskboard_mcp.board import DailyTodoList, GoalBoard, TaskBoard
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.constants import Table, TaskPriority, TaskStatus
from taskboard_mcp.exceptions import TaskBoardTableMissingError
from taskboard_mcp.models import ChecklistItem, Project, ProjectSnapshot, Task, to_wire

# Short quiet period so debounced writes land quickly in tests
TEST_DEBOUNCE = 0.05


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "projects: Project-related tests")
    config.addinivalue_line("markers", "tasks: Task-related tests")
    config.addinivalue_line("markers", "checklist: Checklist-related tests")
    config.addinivalue_line("markers", "todos: Daily todo tests")
    config.addinivalue_line("markers", "goals: Goal tests")
    config.addinivalue_line("markers", "persistence: Debounced write tests")
    config.addinivalue_line("markers", "errors: Error handling tests")
    config.addinivalue_line("markers", "server: MCP tool tests")


# =============================================================================
# Time Utilities
# =============================================================================


BASE_TIME = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def created_at(n: int) -> str:
    """Creation timestamp n seconds after the base time."""
    return (BASE_TIME + timedelta(seconds=n)).isoformat()


# =============================================================================
# ID Generators
# =============================================================================


class IDGenerator:
    """Sequential ID generator for test objects."""

    _counter: int = 0

    @classmethod
    def reset(cls) -> None:
        """Reset counter (call in fixtures)."""
        cls._counter = 0

    @classmethod
    def next_id(cls, prefix: str = "") -> str:
        """Generate next unique ID."""
        cls._counter += 1
        hex_part = f"{cls._counter:012x}"
        return f"{prefix}-{hex_part}" if prefix else hex_part

    @classmethod
    def tick(cls) -> int:
        cls._counter += 1
        return cls._counter


# =============================================================================
# Test Data Factories
# =============================================================================


class ProjectFactory:
    """Factory for Project test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        name: str = "Test Project",
        color: str = "#3b82f6",
        **kwargs: Any,
    ) -> Project:
        return Project(
            id=id or IDGenerator.next_id("proj"),
            name=name,
            color=color,
            created_at=kwargs.get("created_at", created_at(IDGenerator.tick())),
        )


class TaskFactory:
    """Factory for Task test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        project_id: str | None = None,
        title: str = "Test Task",
        status: TaskStatus | str = TaskStatus.NOT_STARTED,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        due_date: date | None = None,
        **kwargs: Any,
    ) -> Task:
        return Task(
            id=id or IDGenerator.next_id("task"),
            project_id=project_id or IDGenerator.next_id("proj"),
            title=title,
            status=status,
            priority=priority,
            due_date=due_date,
            description=kwargs.get("description", ""),
            requirements=kwargs.get("requirements", ""),
            notes=kwargs.get("notes", ""),
            assignee=kwargs.get("assignee"),
            created_at=kwargs.get("created_at", created_at(IDGenerator.tick())),
            checklist=kwargs.get("checklist", []),
        )

    @staticmethod
    def create_completed(**kwargs: Any) -> Task:
        return TaskFactory.create(status=TaskStatus.COMPLETED, **kwargs)

    @staticmethod
    def create_batch(count: int, **kwargs: Any) -> list[Task]:
        return [TaskFactory.create(title=f"Task {i + 1}", **kwargs) for i in range(count)]


class ChecklistItemFactory:
    """Factory for ChecklistItem test objects."""

    @staticmethod
    def create(
        task_id: str,
        id: str | None = None,
        text: str = "Check item",
        completed: bool = False,
    ) -> ChecklistItem:
        return ChecklistItem(
            id=id or IDGenerator.next_id("item"),
            task_id=task_id,
            text=text,
            completed=completed,
            created_at=created_at(IDGenerator.tick()),
        )


def make_snapshot(name: str = "Project", statuses: list[str] | None = None) -> ProjectSnapshot:
    """A project snapshot with one task per given status."""
    project = ProjectFactory.create(name=name)
    tasks = [
        TaskFactory.create(project_id=project.id, title=f"{name} task {i + 1}", status=s)
        for i, s in enumerate(statuses or [])
    ]
    return ProjectSnapshot(project=project, tasks=tasks)


# =============================================================================
# Mock Data Store
# =============================================================================


class MockDataStore(DataStore):
    """
    In-memory stand-in for the Supabase REST store.

    Rows get an id and a created_at on insert. Deleting a project removes
    its tasks and deleting a task removes its checklist items, as the
    database foreign keys do.
    """

    def __init__(self):
        self.tables: dict[str, dict[str, Row]] = {t.value: {} for t in Table}
        self.closed = False

        # Track method calls for verification
        self.call_history: list[tuple[str, tuple, dict]] = []

        # Configurable behaviors
        self.should_fail: dict[str, Exception | None] = {}
        self.delays: dict[str, float] = {}
        self.missing_tables: set[str] = set()

    def _record_call(self, method: str, args: tuple, kwargs: dict) -> None:
        """Record method call for verification."""
        self.call_history.append((method, args, kwargs))

    async def _check(self, method: str, table: str) -> None:
        """Apply configured delay and failure for a call."""
        if method in self.delays:
            await asyncio.sleep(self.delays[method])
        if table in self.missing_tables:
            raise TaskBoardTableMissingError(
                f"Table {table} does not exist",
                status_code=404,
                operation=method,
                table=table,
            )
        failure = self.should_fail.get(f"{method}:{table}") or self.should_fail.get(method)
        if failure:
            raise failure

    # -------------------------------------------------------------------------
    # DataStore interface
    # -------------------------------------------------------------------------

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        self._record_call("select", (table,), {"filters": dict(filters or {}), "order_by": order_by})
        await self._check("select", table)
        rows = [
            dict(r)
            for r in self.tables[table].values()
            if all(to_wire(r.get(col)) == to_wire(val) for col, val in (filters or {}).items())
        ]
        if order_by:
            rows.sort(key=lambda r: r.get(order_by) or "", reverse=not ascending)
        return rows

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        self._record_call("insert", (table, dict(row)), {})
        await self._check("insert", table)
        stored = {k: to_wire(v) for k, v in row.items()}
        stored.setdefault("id", IDGenerator.next_id(table))
        stored.setdefault("created_at", created_at(IDGenerator.tick()))
        self.tables[table][stored["id"]] = stored
        return dict(stored)

    async def update(self, table: str, row_id: str, patch: Mapping[str, Any]) -> None:
        self._record_call("update", (table, row_id, dict(patch)), {})
        await self._check("update", table)
        if row_id in self.tables[table]:
            self.tables[table][row_id].update({k: to_wire(v) for k, v in patch.items()})

    async def delete(self, table: str, row_id: str) -> None:
        self._record_call("delete", (table, row_id), {})
        await self._check("delete", table)
        self.tables[table].pop(row_id, None)
        if table == Table.PROJECTS.value:
            for task_id in [t for t, r in self.tables["tasks"].items() if r["project_id"] == row_id]:
                self._cascade_task(task_id)
        elif table == Table.TASKS.value:
            self._cascade_task(row_id)

    def _cascade_task(self, task_id: str) -> None:
        self.tables["tasks"].pop(task_id, None)
        items = self.tables["checklist_items"]
        for item_id in [i for i, r in items.items() if r["task_id"] == task_id]:
            del items[item_id]

    async def close(self) -> None:
        self._record_call("close", (), {})
        self.closed = True

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def add_row(self, table: str, **row: Any) -> Row:
        """Put a row straight into a table, bypassing call tracking."""
        row = {k: to_wire(v) for k, v in row.items()}
        row.setdefault("id", IDGenerator.next_id(table))
        row.setdefault("created_at", created_at(IDGenerator.tick()))
        self.tables[table][row["id"]] = row
        return row

    def add_project(self, name: str, color: str = "#3b82f6") -> Row:
        return self.add_row("projects", name=name, color=color)

    def add_task(self, project_id: str, title: str, status: str = "not-started", **fields: Any) -> Row:
        row = {
            "priority": "medium",
            "due_date": None,
            "description": "",
            "requirements": "",
            "notes": "",
            **fields,
        }
        return self.add_row("tasks", project_id=project_id, title=title, status=status, **row)

    def add_checklist_item(self, task_id: str, text: str, completed: bool = False) -> Row:
        return self.add_row("checklist_items", task_id=task_id, text=text, completed=completed)

    def seed_data(self, projects: int = 2, tasks_per_project: int = 3, items_per_task: int = 2) -> None:
        """Seed mock with test data."""
        for p in range(projects):
            project = self.add_project(f"Project {p + 1}")
            for t in range(tasks_per_project):
                task = self.add_task(project["id"], f"Task {p + 1}.{t + 1}")
                for i in range(items_per_task):
                    self.add_checklist_item(task["id"], f"Item {i + 1}")

    def row(self, table: str, row_id: str) -> Row | None:
        return self.tables[table].get(row_id)

    def clear_call_history(self) -> None:
        """Clear recorded method calls."""
        self.call_history.clear()

    def get_calls(self, method_name: str, table: str | None = None) -> list[tuple[tuple, dict]]:
        """Get all calls to a specific method, optionally on one table."""
        return [
            (args, kwargs)
            for name, args, kwargs in self.call_history
            if name == method_name and (table is None or (args and args[0] == table))
        ]

    def assert_called(self, method_name: str, times: int | None = None, table: str | None = None) -> None:
        """Assert a method was called (optionally a specific number of times)."""
        calls = self.get_calls(method_name, table)
        if times is not None:
            assert len(calls) == times, f"Expected {method_name} to be called {times} times, got {len(calls)}"
        else:
            assert len(calls) > 0, f"Expected {method_name} to be called at least once"

    def assert_not_called(self, method_name: str, table: str | None = None) -> None:
        """Assert a method was not called."""
        calls = self.get_calls(method_name, table)
        assert len(calls) == 0, f"Expected {method_name} not to be called, but was called {len(calls)} times"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def id_generator():
    """Reset and provide ID generator."""
    IDGenerator.reset()
    return IDGenerator


@pytest.fixture
def mock_store() -> MockDataStore:
    """Create a fresh mock data store."""
    return MockDataStore()


@pytest.fixture
def seeded_store() -> MockDataStore:
    """Create a mock data store with seeded test data."""
    store = MockDataStore()
    store.seed_data()
    return store


@pytest.fixture
async def client(mock_store: MockDataStore) -> AsyncIterator[TaskBoardClient]:
    """Create a connected TaskBoardClient over the mock store."""
    client = TaskBoardClient(mock_store)
    await client.connect()
    yield client
    await client.disconnect()


@pytest.fixture
async def board(client: TaskBoardClient) -> AsyncIterator[TaskBoard]:
    """Create a loaded TaskBoard with a short debounce."""
    board = TaskBoard(client, debounce_seconds=TEST_DEBOUNCE)
    await board.load()
    yield board
    await board.close()


@pytest.fixture
def todo_list(client: TaskBoardClient) -> DailyTodoList:
    """Daily todo list fixed on 2024-06-01 as today."""
    return DailyTodoList(client, today=lambda: date(2024, 6, 1))


@pytest.fixture
def goal_board(client: TaskBoardClient) -> GoalBoard:
    return GoalBoard(client)


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def task_factory() -> type[TaskFactory]:
    """Provide TaskFactory class."""
    return TaskFactory


@pytest.fixture
def project_factory() -> type[ProjectFactory]:
    """Provide ProjectFactory class."""
    return ProjectFactory


@pytest.fixture
def checklist_factory() -> type[ChecklistItemFactory]:
    return ChecklistItemFactory


@pytest.fixture
def settle():
    """Coroutine function sleeping past the debounce window plus a margin."""

    async def _settle(delay: float = TEST_DEBOUNCE) -> None:
        await asyncio.sleep(delay * 3)

    return _settle
