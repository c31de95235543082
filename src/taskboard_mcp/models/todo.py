"""
Daily todo model.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class DailyTodo(BaseModel):
    """A todo pinned to one calendar date."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    todo_date: date
    title: str
    completed: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, data: dict[str, Any]) -> DailyTodo:
        return cls(
            id=str(data["id"]),
            todo_date=data["todo_date"],
            title=data.get("title") or "",
            completed=bool(data.get("completed", False)),
            created_at=data.get("created_at"),
        )
