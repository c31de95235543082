"""
TaskBoard MCP Server - project, task and goal dashboard over MCP.

This package exposes a Supabase-backed project/task/goal dashboard as a
Model Context Protocol server. Field edits are applied to a local copy
first and persisted with per-field debouncing; structural changes reload
the whole project tree.

Architecture:
    MCP Tools Layer
         │
         ▼
    Board (TaskBoard / DailyTodoList / GoalBoard)
     ├── ReflectionStore      (local copy)
     ├── PersistenceScheduler (debounced writes)
     └── ReconciliationLoader (full reload)
         │
         ▼
    TaskBoardClient (typed rows)
         │
         ▼
    RestDataStore (Supabase REST)
"""

__version__ = "0.1.0"
__author__ = "TaskBoard MCP Contributors"

from taskboard_mcp.exceptions import (
    TaskBoardError,
    TaskBoardAPIError,
    TaskBoardValidationError,
    TaskBoardNotFoundError,
    TaskBoardConfigurationError,
    TaskBoardTableMissingError,
    TaskBoardLoadError,
)

__all__ = [
    "__version__",
    "TaskBoardError",
    "TaskBoardAPIError",
    "TaskBoardValidationError",
    "TaskBoardNotFoundError",
    "TaskBoardConfigurationError",
    "TaskBoardTableMissingError",
    "TaskBoardLoadError",
]
