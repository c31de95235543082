"""
TaskBoard view state.

    - ReflectionStore: local working copy of projects, tasks and checklists
    - PersistenceScheduler: per-field debounce of remote writes
    - ReconciliationLoader: full reload of the project tree
    - TaskBoard: projects/tasks/checklists for one view
    - DailyTodoList: todos of a selected date
    - GoalBoard: goals grouped by horizon
"""

from taskboard_mcp.board.store import ReflectionStore
from taskboard_mcp.board.scheduler import KeyState, PersistenceScheduler
from taskboard_mcp.board.loader import ReconciliationLoader
from taskboard_mcp.board.dashboard import TaskBoard, WriteFailure, ConfirmFn
from taskboard_mcp.board.todos import DailyTodoList
from taskboard_mcp.board.goals import GoalBoard

__all__ = [
    "ReflectionStore",
    "KeyState",
    "PersistenceScheduler",
    "ReconciliationLoader",
    "TaskBoard",
    "WriteFailure",
    "ConfirmFn",
    "DailyTodoList",
    "GoalBoard",
]
