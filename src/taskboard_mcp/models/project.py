"""
Project models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskboard_mcp.constants import DEFAULT_PROJECT_COLOR, FILTER_ALL, TaskStatus
from taskboard_mcp.models.task import Task


class Project(BaseModel):
    """A project row."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    color: str = DEFAULT_PROJECT_COLOR
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, data: dict[str, Any]) -> Project:
        """Create from a remote row."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            color=data.get("color") or DEFAULT_PROJECT_COLOR,
            created_at=data.get("created_at"),
        )


class ProjectSnapshot(BaseModel):
    """A project together with its ordered tasks."""

    project: Project
    tasks: list[Task] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return self.project.id

    @property
    def progress(self) -> int:
        return calculate_progress(self.tasks)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def calculate_progress(tasks: list[Task]) -> int:
    """
    Percentage of tasks whose status is completed.

    Returns 0 for an empty list. Halves round up.
    """
    if not tasks:
        return 0
    completed = status_count(tasks, TaskStatus.COMPLETED)
    return _round_half_up(completed * 100 / len(tasks))


def status_count(tasks: list[Task], status: TaskStatus | str) -> int:
    """Number of tasks with the given status."""
    status = TaskStatus(status)
    return sum(1 for t in tasks if t.status == status)


def filter_tasks(tasks: list[Task], status_filter: TaskStatus | str = FILTER_ALL) -> list[Task]:
    """Tasks matching a status filter; ``"all"`` keeps everything."""
    if status_filter == FILTER_ALL:
        return list(tasks)
    status = TaskStatus(status_filter)
    return [t for t in tasks if t.status == status]
