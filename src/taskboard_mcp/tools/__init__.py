"""
TaskBoard MCP Tools Package.

This package provides the input models and response formatting for the
MCP tools of the TaskBoard server. Tools are organized into groups:
    - Project tools (list, show, create, select, delete, reload)
    - Task tools (create, update, status, delete)
    - Checklist tools (add, toggle, edit, delete)
    - Daily todo tools (list, add, toggle, delete)
    - Goal tools (list, add, update, delete)
"""

from taskboard_mcp.tools.inputs import (
    ResponseFormat,
    ProjectCreateInput,
    ProjectGetInput,
    ProjectSelectInput,
    ProjectDeleteInput,
    TaskCreateInput,
    TaskRefInput,
    TaskUpdateInput,
    TaskStatusInput,
    TaskDeleteInput,
    ChecklistAddInput,
    ChecklistItemInput,
    ChecklistEditInput,
    ChecklistDeleteInput,
    TodoListInput,
    TodoAddInput,
    TodoToggleInput,
    TodoDeleteInput,
    GoalAddInput,
    GoalUpdateInput,
    GoalDeleteInput,
)

__all__ = [
    "ResponseFormat",
    "ProjectCreateInput",
    "ProjectGetInput",
    "ProjectSelectInput",
    "ProjectDeleteInput",
    "TaskCreateInput",
    "TaskRefInput",
    "TaskUpdateInput",
    "TaskStatusInput",
    "TaskDeleteInput",
    "ChecklistAddInput",
    "ChecklistItemInput",
    "ChecklistEditInput",
    "ChecklistDeleteInput",
    "TodoListInput",
    "TodoAddInput",
    "TodoToggleInput",
    "TodoDeleteInput",
    "GoalAddInput",
    "GoalUpdateInput",
    "GoalDeleteInput",
]
