"""
Model and derived-value tests.

Covers row conversion, progress rounding, status counts and filtering.
"""

from __future__ import annotations

from datetime import date

import pytest

from taskboard_mcp.constants import GoalCategory, TaskPriority, TaskStatus
from taskboard_mcp.models import (
    ChecklistItem,
    DailyTodo,
    Goal,
    Project,
    Task,
    calculate_progress,
    filter_tasks,
    status_count,
    to_wire,
)


pytestmark = [pytest.mark.unit]


def statuses_to_tasks(statuses: list[str]) -> list[Task]:
    return [
        Task(id=f"t{i}", project_id="p1", title=f"Task {i}", status=s)
        for i, s in enumerate(statuses)
    ]


class TestProgress:
    """Completed share of a project's tasks."""

    def test_empty_project_is_zero(self):
        assert calculate_progress([]) == 0

    @pytest.mark.parametrize("statuses,expected", [
        (["completed"], 100),
        (["not-started"], 0),
        (["completed", "not-started"], 50),
        (["completed", "in-progress", "on-hold"], 33),
        (["completed", "completed", "on-hold"], 67),
        (["completed"] * 7 + ["not-started"], 88),
    ])
    def test_rounded_percentage(self, statuses, expected):
        assert calculate_progress(statuses_to_tasks(statuses)) == expected

    def test_halves_round_up(self):
        # 1 of 8 is 12.5%
        tasks = statuses_to_tasks(["completed"] + ["not-started"] * 7)
        assert calculate_progress(tasks) == 13

    def test_only_completed_counts(self):
        tasks = statuses_to_tasks(["in-progress", "on-hold"])
        assert calculate_progress(tasks) == 0


class TestStatusCounts:

    def test_counts_per_status(self):
        tasks = statuses_to_tasks(["completed", "completed", "on-hold"])
        assert status_count(tasks, TaskStatus.COMPLETED) == 2
        assert status_count(tasks, "on-hold") == 1
        assert status_count(tasks, TaskStatus.IN_PROGRESS) == 0

    def test_filter_all_keeps_order(self):
        tasks = statuses_to_tasks(["completed", "on-hold", "not-started"])
        assert [t.id for t in filter_tasks(tasks)] == [t.id for t in tasks]

    def test_filter_by_status(self):
        tasks = statuses_to_tasks(["completed", "on-hold", "completed"])
        filtered = filter_tasks(tasks, "completed")
        assert len(filtered) == 2
        assert all(t.status == TaskStatus.COMPLETED for t in filtered)

    def test_unknown_status_filter_raises(self):
        with pytest.raises(ValueError):
            filter_tasks([], "done")


class TestTask:

    def test_from_row_defaults(self):
        task = Task.from_row({"id": 7, "project_id": "p1", "title": "Design"})

        assert task.id == "7"
        assert task.priority == TaskPriority.MEDIUM
        assert task.status == TaskStatus.NOT_STARTED
        assert task.description == ""
        assert task.due_date is None
        assert task.checklist == []

    def test_from_row_parses_due_date(self):
        task = Task.from_row({
            "id": "t1",
            "project_id": "p1",
            "title": "Ship",
            "priority": "high",
            "status": "in-progress",
            "due_date": "2024-06-30",
            "notes": None,
        })

        assert task.due_date == date(2024, 6, 30)
        assert task.priority == TaskPriority.HIGH
        assert task.notes == ""

    @pytest.mark.parametrize("due,expected", [
        (date(2024, 5, 31), True),
        (date(2024, 6, 1), False),
        (date(2024, 6, 2), False),
        (None, False),
    ])
    def test_overdue_is_strictly_before_today(self, due, expected):
        task = Task(id="t1", project_id="p1", title="A", due_date=due)
        assert task.is_overdue(date(2024, 6, 1)) is expected

    def test_invalid_status_rejected_on_assignment(self):
        task = Task(id="t1", project_id="p1", title="A")
        with pytest.raises(ValueError):
            task.status = "done"

    def test_checklist_done(self):
        task = Task(
            id="t1",
            project_id="p1",
            title="A",
            checklist=[
                ChecklistItem(id="c1", task_id="t1", text="a", completed=True),
                ChecklistItem(id="c2", task_id="t1", text="b"),
            ],
        )
        assert task.checklist_done == 1


class TestOtherModels:

    def test_project_color_default(self):
        project = Project.from_row({"id": "p1", "name": "Launch", "color": None})
        assert project.color == "#3b82f6"

    def test_daily_todo_date(self):
        todo = DailyTodo.from_row({"id": "d1", "todo_date": "2024-06-01", "title": "Call"})
        assert todo.todo_date == date(2024, 6, 1)

    def test_goal_category(self):
        goal = Goal.from_row({"id": "g1", "category": "this_week", "content": "Ship"})
        assert goal.category == GoalCategory.THIS_WEEK
        assert goal.category.label

    def test_unknown_goal_category_rejected(self):
        with pytest.raises(ValueError):
            Goal.from_row({"id": "g1", "category": "someday", "content": "x"})

    def test_to_wire(self):
        assert to_wire(TaskStatus.ON_HOLD) == "on-hold"
        assert to_wire(date(2024, 2, 29)) == "2024-02-29"
        assert to_wire("text") == "text"
        assert to_wire(None) is None
