"""
Goal board tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from taskboard_mcp.board import GoalBoard
from taskboard_mcp.constants import GoalCategory
from taskboard_mcp.exceptions import TaskBoardAPIError, TaskBoardValidationError

if TYPE_CHECKING:
    from tests.conftest import MockDataStore


pytestmark = [pytest.mark.goals, pytest.mark.unit]


class TestGrouping:

    async def test_every_category_present_in_order(self, goal_board: GoalBoard):
        groups = await goal_board.load()

        assert list(groups) == list(GoalCategory)
        assert all(goals == [] for goals in groups.values())
        assert goal_board.total == 0

    async def test_goals_grouped_oldest_first(self, goal_board: GoalBoard, mock_store: MockDataStore):
        mock_store.add_row("goals", category="this_week", content="Ship")
        mock_store.add_row("goals", category="1_year", content="Grow")
        mock_store.add_row("goals", category="this_week", content="Review")

        await goal_board.load()

        assert [g.content for g in goal_board.goals[GoalCategory.THIS_WEEK]] == ["Ship", "Review"]
        assert [g.content for g in goal_board.goals[GoalCategory.ONE_YEAR]] == ["Grow"]
        assert goal_board.total == 3

    async def test_missing_table(self, goal_board: GoalBoard, mock_store: MockDataStore):
        mock_store.missing_tables.add("goals")

        groups = await goal_board.load()

        assert goal_board.table_missing is True
        assert list(groups) == list(GoalCategory)
        assert goal_board.total == 0

    async def test_other_errors_propagate(self, goal_board: GoalBoard, mock_store: MockDataStore):
        mock_store.should_fail["select"] = TaskBoardAPIError("down", status_code=500)

        with pytest.raises(TaskBoardAPIError):
            await goal_board.load()
        assert goal_board.table_missing is False


class TestMutations:

    async def test_add_trims(self, goal_board: GoalBoard, mock_store: MockDataStore):
        goal = await goal_board.add("1_month", "  Run 50km ")

        assert goal.content == "Run 50km"
        assert goal_board.goals[GoalCategory.ONE_MONTH][0].id == goal.id

    async def test_add_empty_rejected(self, goal_board: GoalBoard, mock_store: MockDataStore):
        with pytest.raises(TaskBoardValidationError):
            await goal_board.add(GoalCategory.THIS_WEEK, "  ")
        mock_store.assert_not_called("insert")

    async def test_update(self, goal_board: GoalBoard, mock_store: MockDataStore):
        goal = await goal_board.add("this_week", "Draft")

        await goal_board.update(goal.id, " Final ")

        assert goal_board.find(goal.id).content == "Final"

    async def test_update_empty_rejected(self, goal_board: GoalBoard, mock_store: MockDataStore):
        goal = await goal_board.add("this_week", "Draft")
        with pytest.raises(TaskBoardValidationError):
            await goal_board.update(goal.id, "")
        mock_store.assert_not_called("update")

    async def test_delete(self, goal_board: GoalBoard):
        goal = await goal_board.add("6_months", "Move")

        assert await goal_board.delete(goal.id, lambda prompt: False) is False
        assert goal_board.total == 1

        assert await goal_board.delete(goal.id, lambda prompt: True) is True
        assert goal_board.total == 0
