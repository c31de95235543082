"""
Daily todo list.

Todos are pinned to one calendar date. The list shows a single selected
date at a time and reloads the whole day after every change.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable

from taskboard_mcp.board.dashboard import ConfirmFn, ask, require_text
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.exceptions import TaskBoardAPIError
from taskboard_mcp.models import DailyTodo

logger = logging.getLogger(__name__)


class DailyTodoList:
    """Todos of the selected date."""

    def __init__(
        self,
        client: TaskBoardClient,
        selected_date: date | None = None,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.client = client
        self._today = today
        self.selected_date: date = selected_date or today()
        self.todos: list[DailyTodo] = []

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.todos if t.completed)

    def find(self, todo_id: str) -> DailyTodo | None:
        return next((t for t in self.todos if t.id == todo_id), None)

    async def load(self) -> list[DailyTodo]:
        """Reload the todos of the selected date; keeps the old list on failure."""
        self.todos = await self._fetch(self.selected_date)
        return self.todos

    async def _fetch(self, day: date) -> list[DailyTodo]:
        try:
            return await self.client.list_daily_todos(day)
        except TaskBoardAPIError as e:
            logger.error("Error loading todos for %s: %s", day, e)
            raise

    async def add(self, title: str) -> DailyTodo:
        title = require_text(title, "title", "Todo title is required")
        try:
            todo = await self.client.create_daily_todo(self.selected_date, title)
        except TaskBoardAPIError as e:
            logger.error("Error adding todo: %s", e)
            raise
        await self.load()
        return todo

    async def toggle(self, todo_id: str) -> bool:
        """Flip completion remotely and reload; False if the todo is not listed."""
        todo = self.find(todo_id)
        if todo is None:
            return False
        try:
            await self.client.update_daily_todo(todo_id, {"completed": not todo.completed})
        except TaskBoardAPIError as e:
            logger.error("Error toggling todo: %s", e)
            raise
        await self.load()
        return True

    async def delete(self, todo_id: str, confirm: ConfirmFn) -> bool:
        todo = self.find(todo_id)
        label = todo.title if todo else todo_id
        if not await ask(confirm, f"Delete todo '{label}'?"):
            return False
        try:
            await self.client.delete_daily_todo(todo_id)
        except TaskBoardAPIError as e:
            logger.error("Error deleting todo: %s", e)
            raise
        await self.load()
        return True

    # =========================================================================
    # Date navigation
    # =========================================================================

    async def select_date(self, selected: date) -> list[DailyTodo]:
        """Switch to ``selected``; on a failed read the date and list stay as they were."""
        todos = await self._fetch(selected)
        self.selected_date, self.todos = selected, todos
        return todos

    async def change_date(self, days: int) -> list[DailyTodo]:
        return await self.select_date(self.selected_date + timedelta(days=days))

    def today(self) -> date:
        return self._today()

    async def go_to_today(self) -> list[DailyTodo]:
        return await self.select_date(self.today())

    def is_today(self) -> bool:
        return self.selected_date == self.today()

    def display_label(self) -> str:
        """'Today', 'Yesterday', 'Tomorrow', or e.g. 'Mon, Jun 3'."""
        offset = (self.selected_date - self._today()).days
        if offset == 0:
            return "Today"
        if offset == -1:
            return "Yesterday"
        if offset == 1:
            return "Tomorrow"
        d = self.selected_date
        return f"{d:%a}, {d:%b} {d.day}"
