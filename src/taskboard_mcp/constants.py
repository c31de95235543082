"""
TaskBoard Constants.

Enumerations and defaults shared by the models, the board and the tools.
"""

from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    """Task workflow status."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


class TaskPriority(str, Enum):
    """Task priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        return PRIORITY_LABELS[self]


class GoalCategory(str, Enum):
    """Goal horizon. Declaration order is display order."""

    ONE_YEAR = "1_year"
    SIX_MONTHS = "6_months"
    THREE_MONTHS = "3_months"
    ONE_MONTH = "1_month"
    THIS_WEEK = "this_week"

    @property
    def label(self) -> str:
        return GOAL_CATEGORY_LABELS[self]


STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.NOT_STARTED: "Not started",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.ON_HOLD: "On hold",
}

PRIORITY_LABELS: dict[TaskPriority, str] = {
    TaskPriority.HIGH: "High",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.LOW: "Low",
}

GOAL_CATEGORY_LABELS: dict[GoalCategory, str] = {
    GoalCategory.ONE_YEAR: "1 year",
    GoalCategory.SIX_MONTHS: "6 months",
    GoalCategory.THREE_MONTHS: "3 months",
    GoalCategory.ONE_MONTH: "1 month",
    GoalCategory.THIS_WEEK: "This week",
}


# Remote tables
class Table(str, Enum):
    PROJECTS = "projects"
    TASKS = "tasks"
    CHECKLIST_ITEMS = "checklist_items"
    DAILY_TODOS = "daily_todos"
    GOALS = "goals"


ORDER_COLUMN = "created_at"

DEFAULT_PROJECT_COLOR = "#3b82f6"
DEFAULT_DEBOUNCE_SECONDS = 1.5

# Status filter value that matches every task
FILTER_ALL = "all"

# Task fields that may be edited in place
EDITABLE_TASK_FIELDS: frozenset[str] = frozenset({
    "title",
    "priority",
    "status",
    "due_date",
    "description",
    "requirements",
    "notes",
    "assignee",
})

# Discrete selections are written straight away, free text is debounced
IMMEDIATE_TASK_FIELDS: frozenset[str] = frozenset({"status", "priority", "due_date"})

EDITABLE_CHECKLIST_FIELDS: frozenset[str] = frozenset({"text", "completed"})
