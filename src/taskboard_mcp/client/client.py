"""
TaskBoard Client.

This module provides the TaskBoardClient class, the typed entry point for
all remote operations. It owns a DataStore, converts rows into models,
and applies the one ordering the dashboard relies on: ascending creation
time at every level.
"""

from __future__ import annotations

import logging
from datetime import date
from types import TracebackType
from typing import Any, Mapping, TypeVar

from taskboard_mcp.api import DataStore, RestDataStore
from taskboard_mcp.constants import (
    DEFAULT_PROJECT_COLOR,
    ORDER_COLUMN,
    GoalCategory,
    Table,
    TaskPriority,
    TaskStatus,
)
from taskboard_mcp.exceptions import TaskBoardConfigurationError
from taskboard_mcp.models import ChecklistItem, DailyTodo, Goal, Project, Task
from taskboard_mcp.settings import TaskBoardSettings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="TaskBoardClient")


class TaskBoardClient:
    """
    Typed access to the projects, tasks, checklist items, daily todos and
    goals tables.

    Usage:
        async with TaskBoardClient.from_settings() as client:
            projects = await client.list_projects()
            tasks = await client.list_tasks(projects[0].id)
    """

    def __init__(self, store: DataStore) -> None:
        self._store = store
        self._connected = False

    @classmethod
    def from_settings(cls, settings: TaskBoardSettings | None = None) -> TaskBoardClient:
        """
        Build a client talking to the Supabase project named in settings.

        Raises:
            TaskBoardConfigurationError: URL or API key is missing
        """
        settings = settings or get_settings()
        if not settings.is_configured:
            raise TaskBoardConfigurationError(
                "TASKBOARD_SUPABASE_URL and TASKBOARD_SUPABASE_KEY must be set",
            )
        store = RestDataStore(
            url=settings.supabase_url,  # type: ignore[arg-type]
            api_key=settings.supabase_key.get_secret_value(),  # type: ignore[union-attr]
            timeout=settings.timeout,
        )
        return cls(store)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def connect(self) -> None:
        if self._connected:
            return
        self._connected = True
        logger.info("TaskBoard client connected")

    async def disconnect(self) -> None:
        await self._store.close()
        self._connected = False
        logger.info("TaskBoard client disconnected")

    async def __aenter__(self: T) -> T:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def store(self) -> DataStore:
        return self._store

    async def _list(self, table: Table, filters: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        return await self._store.select(
            table.value,
            filters=filters,
            order_by=ORDER_COLUMN,
            ascending=True,
        )

    # =========================================================================
    # Projects
    # =========================================================================

    async def list_projects(self) -> list[Project]:
        """List all projects, oldest first."""
        rows = await self._list(Table.PROJECTS)
        return [Project.from_row(r) for r in rows]

    async def create_project(self, name: str, color: str = DEFAULT_PROJECT_COLOR) -> Project:
        row = await self._store.insert(Table.PROJECTS.value, {"name": name, "color": color})
        return Project.from_row(row)

    async def delete_project(self, project_id: str) -> None:
        await self._store.delete(Table.PROJECTS.value, project_id)

    # =========================================================================
    # Tasks
    # =========================================================================

    async def list_tasks(self, project_id: str) -> list[Task]:
        """List the tasks of a project, oldest first."""
        rows = await self._list(Table.TASKS, {"project_id": project_id})
        return [Task.from_row(r) for r in rows]

    async def create_task(
        self,
        project_id: str,
        title: str,
        *,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        status: TaskStatus | str = TaskStatus.NOT_STARTED,
        due_date: date | None = None,
        assignee: str | None = None,
    ) -> Task:
        """
        Create a task with empty description, requirements and notes.

        Args:
            project_id: Owning project
            title: Task title
            priority: Initial priority
            status: Initial status
            due_date: Optional due date
            assignee: Optional assignee

        Returns:
            The created task as stored remotely
        """
        row: dict[str, Any] = {
            "project_id": project_id,
            "title": title,
            "priority": TaskPriority(priority).value,
            "status": TaskStatus(status).value,
            "due_date": due_date.isoformat() if due_date else None,
            "description": "",
            "requirements": "",
            "notes": "",
        }
        if assignee is not None:
            row["assignee"] = assignee
        created = await self._store.insert(Table.TASKS.value, row)
        return Task.from_row(created)

    async def update_task(self, task_id: str, fields: Mapping[str, Any]) -> None:
        """Patch one or more task columns."""
        await self._store.update(Table.TASKS.value, task_id, fields)

    async def delete_task(self, task_id: str) -> None:
        await self._store.delete(Table.TASKS.value, task_id)

    # =========================================================================
    # Checklist Items
    # =========================================================================

    async def list_checklist_items(self, task_id: str) -> list[ChecklistItem]:
        rows = await self._list(Table.CHECKLIST_ITEMS, {"task_id": task_id})
        return [ChecklistItem.from_row(r) for r in rows]

    async def create_checklist_item(self, task_id: str, text: str) -> ChecklistItem:
        row = await self._store.insert(
            Table.CHECKLIST_ITEMS.value,
            {"task_id": task_id, "text": text, "completed": False},
        )
        return ChecklistItem.from_row(row)

    async def update_checklist_item(self, item_id: str, fields: Mapping[str, Any]) -> None:
        await self._store.update(Table.CHECKLIST_ITEMS.value, item_id, fields)

    async def delete_checklist_item(self, item_id: str) -> None:
        await self._store.delete(Table.CHECKLIST_ITEMS.value, item_id)

    # =========================================================================
    # Daily Todos
    # =========================================================================

    async def list_daily_todos(self, todo_date: date) -> list[DailyTodo]:
        """List the todos of exactly one date, oldest first."""
        rows = await self._list(Table.DAILY_TODOS, {"todo_date": todo_date.isoformat()})
        return [DailyTodo.from_row(r) for r in rows]

    async def create_daily_todo(self, todo_date: date, title: str) -> DailyTodo:
        row = await self._store.insert(
            Table.DAILY_TODOS.value,
            {"todo_date": todo_date.isoformat(), "title": title, "completed": False},
        )
        return DailyTodo.from_row(row)

    async def update_daily_todo(self, todo_id: str, fields: Mapping[str, Any]) -> None:
        await self._store.update(Table.DAILY_TODOS.value, todo_id, fields)

    async def delete_daily_todo(self, todo_id: str) -> None:
        await self._store.delete(Table.DAILY_TODOS.value, todo_id)

    # =========================================================================
    # Goals
    # =========================================================================

    async def list_goals(self) -> list[Goal]:
        rows = await self._list(Table.GOALS)
        return [Goal.from_row(r) for r in rows]

    async def create_goal(self, category: GoalCategory | str, content: str) -> Goal:
        row = await self._store.insert(
            Table.GOALS.value,
            {"category": GoalCategory(category).value, "content": content},
        )
        return Goal.from_row(row)

    async def update_goal(self, goal_id: str, content: str) -> None:
        await self._store.update(Table.GOALS.value, goal_id, {"content": content})

    async def delete_goal(self, goal_id: str) -> None:
        await self._store.delete(Table.GOALS.value, goal_id)
