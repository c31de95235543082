"""
Task and checklist item models.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskboard_mcp.constants import TaskPriority, TaskStatus


def to_wire(value: Any) -> Any:
    """Convert a Python field value to its JSON column representation."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class ChecklistItem(BaseModel):
    """A checklist entry belonging to a task."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    task_id: str
    text: str = ""
    completed: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, data: dict[str, Any]) -> ChecklistItem:
        """Create from a remote row."""
        return cls(
            id=str(data["id"]),
            task_id=str(data["task_id"]),
            text=data.get("text") or "",
            completed=bool(data.get("completed", False)),
            created_at=data.get("created_at"),
        )


class Task(BaseModel):
    """
    A task row.

    ``checklist`` is only filled in on snapshots produced by the board; the
    remote ``tasks`` table has no such column.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    project_id: str
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.NOT_STARTED
    due_date: date | None = None
    description: str = ""
    requirements: str = ""
    notes: str = ""
    assignee: str | None = None
    created_at: datetime | None = None
    checklist: list[ChecklistItem] = Field(default_factory=list)

    @classmethod
    def from_row(cls, data: dict[str, Any]) -> Task:
        """Create from a remote row."""
        return cls(
            id=str(data["id"]),
            project_id=str(data["project_id"]),
            title=data.get("title") or "",
            priority=data.get("priority") or TaskPriority.MEDIUM,
            status=data.get("status") or TaskStatus.NOT_STARTED,
            due_date=data.get("due_date") or None,
            description=data.get("description") or "",
            requirements=data.get("requirements") or "",
            notes=data.get("notes") or "",
            assignee=data.get("assignee"),
            created_at=data.get("created_at"),
        )

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_overdue(self, today: date | None = None) -> bool:
        """True when the due date lies strictly before today."""
        if self.due_date is None:
            return False
        today = today or date.today()
        return self.due_date < today

    @property
    def checklist_done(self) -> int:
        return sum(1 for item in self.checklist if item.completed)
