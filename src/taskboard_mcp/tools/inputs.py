"""
Pydantic Input Models for TaskBoard MCP Tools.

This module defines all input validation models used by MCP tools.
Each model includes proper field constraints, descriptions, and examples.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
PRIORITY_PATTERN = r"^(high|medium|low)$"
STATUS_PATTERN = r"^(not-started|in-progress|completed|on-hold)$"
FILTER_PATTERN = r"^(all|not-started|in-progress|completed|on-hold)$"
CATEGORY_PATTERN = r"^(1_year|6_months|3_months|1_month|this_week)$"


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    MARKDOWN = "markdown"
    JSON = "json"


class BaseMCPInput(BaseModel):
    """Base input model with common configuration."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )


class ConfirmedInput(BaseMCPInput):
    """Base for destructive operations that need an explicit confirmation."""

    confirm: bool = Field(
        default=False,
        description="Must be true to carry out the deletion. Ask the user first.",
    )


# =============================================================================
# Project Input Models
# =============================================================================


class ProjectCreateInput(BaseMCPInput):
    """Input for creating a project."""

    name: str = Field(
        ...,
        description="Project name (e.g., 'Launch', 'Website redesign')",
        min_length=1,
        max_length=200,
    )
    color: str = Field(
        default="#3b82f6",
        description="Hex color swatch (e.g., '#3b82f6', '#ef4444')",
        pattern=COLOR_PATTERN,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable, 'json' for machine-readable",
    )


class ProjectGetInput(BaseMCPInput):
    """Input for showing one project with its tasks."""

    project_id: str = Field(
        ...,
        description="Project identifier",
        pattern=ID_PATTERN,
    )
    status_filter: Optional[str] = Field(
        default=None,
        description="Only show tasks with this status ('all' shows everything). Persists for the session.",
        pattern=FILTER_PATTERN,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format",
    )


class ProjectSelectInput(BaseMCPInput):
    """Input for selecting the current project."""

    project_id: Optional[str] = Field(
        default=None,
        description="Project to select. Omit to clear the selection.",
        pattern=ID_PATTERN,
    )


class ProjectDeleteInput(ConfirmedInput):
    """Input for deleting a project."""

    project_id: str = Field(
        ...,
        description="Project identifier to delete",
        pattern=ID_PATTERN,
    )


# =============================================================================
# Task Input Models
# =============================================================================


class TaskCreateInput(BaseMCPInput):
    """Input for creating a new task."""

    project_id: str = Field(
        ...,
        description="Project to create the task in",
        pattern=ID_PATTERN,
    )
    title: str = Field(
        ...,
        description="Task title (e.g., 'Design landing page')",
        min_length=1,
        max_length=500,
    )
    priority: str = Field(
        default="medium",
        description="Priority level: 'high', 'medium', 'low'",
        pattern=PRIORITY_PATTERN,
    )
    due_date: Optional[str] = Field(
        default=None,
        description="Due date in YYYY-MM-DD format",
        pattern=DATE_PATTERN,
    )
    assignee: Optional[str] = Field(
        default=None,
        description="Person responsible for the task",
        max_length=200,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format",
    )

    @field_validator("priority")
    @classmethod
    def normalize_priority(cls, v: str) -> str:
        return v.lower()


class TaskRefInput(BaseMCPInput):
    """Identifies a task on the board."""

    project_id: str = Field(
        ...,
        description="Project the task belongs to",
        pattern=ID_PATTERN,
    )
    task_id: str = Field(
        ...,
        description="Task identifier",
        pattern=ID_PATTERN,
    )


class TaskUpdateInput(TaskRefInput):
    """
    Input for editing task fields.

    Text fields are saved after a short quiet period; priority and due date
    are saved immediately.
    """

    title: Optional[str] = Field(
        default=None,
        description="New task title",
        max_length=500,
    )
    description: Optional[str] = Field(
        default=None,
        description="New description",
        max_length=10000,
    )
    requirements: Optional[str] = Field(
        default=None,
        description="New requirements text",
        max_length=10000,
    )
    notes: Optional[str] = Field(
        default=None,
        description="New notes",
        max_length=10000,
    )
    assignee: Optional[str] = Field(
        default=None,
        description="New assignee",
        max_length=200,
    )
    priority: Optional[str] = Field(
        default=None,
        description="New priority: 'high', 'medium', 'low'",
        pattern=PRIORITY_PATTERN,
    )
    due_date: Optional[str] = Field(
        default=None,
        description="New due date in YYYY-MM-DD format",
        pattern=DATE_PATTERN,
    )
    clear_due_date: bool = Field(
        default=False,
        description="Remove the due date",
    )


class TaskStatusInput(TaskRefInput):
    """Input for changing a task's status."""

    status: str = Field(
        ...,
        description="New status: 'not-started', 'in-progress', 'completed', 'on-hold'",
        pattern=STATUS_PATTERN,
    )


class TaskDeleteInput(TaskRefInput):
    """Input for deleting a task."""

    confirm: bool = Field(
        default=False,
        description="Must be true to carry out the deletion. Ask the user first.",
    )


# =============================================================================
# Checklist Input Models
# =============================================================================


class ChecklistAddInput(TaskRefInput):
    """Input for adding a checklist item to a task."""

    text: str = Field(
        ...,
        description="Checklist item text",
        min_length=1,
        max_length=500,
    )


class ChecklistItemInput(TaskRefInput):
    """Identifies a checklist item."""

    item_id: str = Field(
        ...,
        description="Checklist item identifier",
        pattern=ID_PATTERN,
    )


class ChecklistDeleteInput(ChecklistItemInput):
    """Input for deleting a checklist item."""

    confirm: bool = Field(
        default=False,
        description="Must be true to carry out the deletion. Ask the user first.",
    )


class ChecklistEditInput(ChecklistItemInput):
    """Input for editing a checklist item's text."""

    text: str = Field(
        ...,
        description="New checklist item text",
        max_length=500,
    )


# =============================================================================
# Daily Todo Input Models
# =============================================================================


class TodoListInput(BaseMCPInput):
    """Input for listing the todos of a date."""

    date: Optional[str] = Field(
        default=None,
        description="Date in YYYY-MM-DD format. Defaults to the currently selected date.",
        pattern=DATE_PATTERN,
    )
    offset_days: int = Field(
        default=0,
        description="Move the selected date by this many days (e.g., -1 for the previous day)",
        ge=-366,
        le=366,
    )
    today: bool = Field(
        default=False,
        description="Jump back to today before applying offset_days",
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format",
    )


class TodoAddInput(BaseMCPInput):
    """Input for adding a todo to the selected date."""

    title: str = Field(
        ...,
        description="Todo title",
        min_length=1,
        max_length=500,
    )
    date: Optional[str] = Field(
        default=None,
        description="Date in YYYY-MM-DD format. Defaults to the currently selected date.",
        pattern=DATE_PATTERN,
    )


class TodoToggleInput(BaseMCPInput):
    """Input for toggling a todo."""

    todo_id: str = Field(
        ...,
        description="Todo identifier",
        pattern=ID_PATTERN,
    )


class TodoDeleteInput(ConfirmedInput):
    """Input for deleting a todo."""

    todo_id: str = Field(
        ...,
        description="Todo identifier to delete",
        pattern=ID_PATTERN,
    )


# =============================================================================
# Goal Input Models
# =============================================================================


class GoalAddInput(BaseMCPInput):
    """Input for adding a goal."""

    category: str = Field(
        ...,
        description="Horizon: '1_year', '6_months', '3_months', '1_month', 'this_week'",
        pattern=CATEGORY_PATTERN,
    )
    content: str = Field(
        ...,
        description="Goal text",
        min_length=1,
        max_length=1000,
    )


class GoalUpdateInput(BaseMCPInput):
    """Input for rewording a goal."""

    goal_id: str = Field(
        ...,
        description="Goal identifier",
        pattern=ID_PATTERN,
    )
    content: str = Field(
        ...,
        description="New goal text",
        min_length=1,
        max_length=1000,
    )


class GoalDeleteInput(ConfirmedInput):
    """Input for deleting a goal."""

    goal_id: str = Field(
        ...,
        description="Goal identifier to delete",
        pattern=ID_PATTERN,
    )
