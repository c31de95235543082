"""
Goal board.

Goals are grouped under five fixed horizons, from one year out down to
this week. Every change reloads the whole table.
"""

from __future__ import annotations

import logging

from taskboard_mcp.board.dashboard import ConfirmFn, ask, require_text
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.constants import GoalCategory
from taskboard_mcp.exceptions import TaskBoardAPIError, TaskBoardTableMissingError
from taskboard_mcp.models import Goal

logger = logging.getLogger(__name__)


def _empty_groups() -> dict[GoalCategory, list[Goal]]:
    return {category: [] for category in GoalCategory}


class GoalBoard:
    """
    Goals grouped by category.

    Attributes:
        goals: Every category in display order, each with its goals oldest first
        table_missing: The remote ``goals`` table does not exist
    """

    def __init__(self, client: TaskBoardClient) -> None:
        self.client = client
        self.goals: dict[GoalCategory, list[Goal]] = _empty_groups()
        self.table_missing = False

    @property
    def total(self) -> int:
        return sum(len(goals) for goals in self.goals.values())

    def find(self, goal_id: str) -> Goal | None:
        for goals in self.goals.values():
            for goal in goals:
                if goal.id == goal_id:
                    return goal
        return None

    async def load(self) -> dict[GoalCategory, list[Goal]]:
        try:
            goals = await self.client.list_goals()
        except TaskBoardTableMissingError:
            logger.warning("goals table does not exist")
            self.table_missing = True
            self.goals = _empty_groups()
            return self.goals
        except TaskBoardAPIError as e:
            logger.error("Goals load error: %s", e)
            raise

        self.table_missing = False
        grouped = _empty_groups()
        for goal in goals:
            grouped[goal.category].append(goal)
        self.goals = grouped
        return grouped

    async def add(self, category: GoalCategory | str, content: str) -> Goal:
        content = require_text(content, "content", "Goal content is required")
        try:
            goal = await self.client.create_goal(GoalCategory(category), content)
        except TaskBoardAPIError as e:
            logger.error("Goal add error: %s", e)
            raise
        await self.load()
        return goal

    async def update(self, goal_id: str, content: str) -> None:
        content = require_text(content, "content", "Goal content is required")
        try:
            await self.client.update_goal(goal_id, content)
        except TaskBoardAPIError as e:
            logger.error("Goal update error: %s", e)
            raise
        await self.load()

    async def delete(self, goal_id: str, confirm: ConfirmFn) -> bool:
        goal = self.find(goal_id)
        label = goal.content if goal else goal_id
        if not await ask(confirm, f"Delete goal '{label}'?"):
            return False
        try:
            await self.client.delete_goal(goal_id)
        except TaskBoardAPIError as e:
            logger.error("Goal delete error: %s", e)
            raise
        await self.load()
        return True
