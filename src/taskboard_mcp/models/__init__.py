"""
TaskBoard Data Models.

Pydantic models mirroring the rows of the remote data store. Each model
converts from a remote row with ``from_row``; ``to_wire`` turns field
values back into column values.

Models:
    - Project: Project row
    - ProjectSnapshot: Project with its ordered tasks
    - Task: Task row (with checklist on snapshots)
    - ChecklistItem: Checklist entry of a task
    - DailyTodo: Todo pinned to a calendar date
    - Goal: Goal under a fixed horizon
"""

from taskboard_mcp.models.task import Task, ChecklistItem, to_wire
from taskboard_mcp.models.project import (
    Project,
    ProjectSnapshot,
    calculate_progress,
    filter_tasks,
    status_count,
)
from taskboard_mcp.models.todo import DailyTodo
from taskboard_mcp.models.goal import Goal

__all__ = [
    "Task",
    "ChecklistItem",
    "to_wire",
    "Project",
    "ProjectSnapshot",
    "calculate_progress",
    "filter_tasks",
    "status_count",
    "DailyTodo",
    "Goal",
]
