"""
Goal model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from taskboard_mcp.constants import GoalCategory


class Goal(BaseModel):
    """A goal filed under one of the fixed horizons."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    category: GoalCategory
    content: str
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, data: dict[str, Any]) -> Goal:
        return cls(
            id=str(data["id"]),
            category=data["category"],
            content=data.get("content") or "",
            created_at=data.get("created_at"),
        )
