#!/usr/bin/env python3
"""
TaskBoard MCP Server.

This server exposes a project/task/goal dashboard stored in Supabase.
The server session plays the part of the dashboard view: it keeps a local
copy of the project tree, applies edits to it straight away, and saves
text edits after a short quiet period.

Features:
    - Projects with progress and per-status counts
    - Tasks (priority, status, due date, description, requirements, notes)
    - Task checklists
    - Daily todos per calendar date
    - Goals by horizon (1 year down to this week)

Environment Variables Required:
    TASKBOARD_SUPABASE_URL
    TASKBOARD_SUPABASE_KEY

Optional:
    TASKBOARD_DEBOUNCE_SECONDS (default 1.5)
    TASKBOARD_TIMEOUT (default 30)
    TASKBOARD_LOG_LEVEL (default INFO)
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from datetime import date, timedelta
from typing import Any, AsyncIterator

from mcp.server.fastmcp import FastMCP, Context

from taskboard_mcp.board import DailyTodoList, GoalBoard, TaskBoard
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.exceptions import (
    TaskBoardAPIError,
    TaskBoardConfigurationError,
    TaskBoardNotFoundError,
    TaskBoardTableMissingError,
    TaskBoardValidationError,
)
from taskboard_mcp.settings import get_settings
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
from taskboard_mcp.tools.formatting import (
    format_task_markdown,
    format_task_json,
    format_project_markdown,
    format_project_json,
    format_projects_markdown,
    format_projects_json,
    format_todos_markdown,
    format_todos_json,
    format_goals_markdown,
    format_goals_json,
    format_write_failures,
    success_message,
    error_message,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(mcp: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """
    Manage the dashboard lifecycle.

    Loads the board on startup. On shutdown pending writes are discarded
    and the client is disconnected.
    """
    logger.info("Initializing TaskBoard MCP Server...")
    settings = get_settings()
    logging.getLogger("taskboard_mcp").setLevel(settings.log_level)

    client = TaskBoardClient.from_settings(settings)
    board = TaskBoard(client, debounce_seconds=settings.debounce_seconds)
    try:
        await client.connect()
        todos = DailyTodoList(client)
        goals = GoalBoard(client)
        await board.load()
        await todos.load()
        await goals.load()
        logger.info("TaskBoard loaded")
        yield {"client": client, "board": board, "todos": todos, "goals": goals}
    except Exception as e:
        logger.error("Failed to initialize TaskBoard: %s", e)
        raise
    finally:
        await board.close()
        await client.disconnect()
        logger.info("TaskBoard closed")


# Initialize FastMCP server
mcp = FastMCP(
    "taskboard_mcp",
    lifespan=lifespan,
)


def _state(ctx: Context) -> dict[str, Any]:
    return ctx.request_context.lifespan_context


def get_board(ctx: Context) -> TaskBoard:
    """Get the task board from context."""
    return _state(ctx)["board"]


def get_todos(ctx: Context) -> DailyTodoList:
    return _state(ctx)["todos"]


def get_goals(ctx: Context) -> GoalBoard:
    return _state(ctx)["goals"]


# =============================================================================
# Error Handling
# =============================================================================


def handle_error(e: Exception, operation: str) -> str:
    """Handle exceptions and return user-friendly error messages."""
    logger.exception("Error in %s: %s", operation, e)

    if isinstance(e, TaskBoardValidationError):
        return error_message(f"Invalid input: {e.message}")
    if isinstance(e, TaskBoardNotFoundError):
        return error_message(
            f"Not found: {e.message}",
            "The board may be out of date. Run taskboard_reload and try again.",
        )
    if isinstance(e, TaskBoardTableMissingError):
        return error_message(
            f"Missing table: {e.message}",
            "Create the table in Supabase before using this feature.",
        )
    if isinstance(e, TaskBoardAPIError):
        return error_message(f"Data store error: {e.message}", "Nothing was retried; try again.")
    if isinstance(e, TaskBoardConfigurationError):
        return error_message(
            f"Configuration error: {e.message}",
            "Check TASKBOARD_SUPABASE_URL and TASKBOARD_SUPABASE_KEY.",
        )
    return error_message(f"Unexpected error: {e}")


def needs_confirmation(prompt: str) -> str:
    return f"{prompt}\n\nNothing was deleted. Confirm with the user, then call again with confirm=true."


def with_failures(board: TaskBoard, text: str) -> str:
    """Append any write failures collected since the last call."""
    return text + format_write_failures(board.drain_errors())


def _render_project(board: TaskBoard, project_id: str, response_format: ResponseFormat) -> str:
    snapshot = board.store.project(project_id)
    if snapshot is None:
        raise TaskBoardNotFoundError("Project", project_id)
    tasks = board.store.visible_tasks(project_id)
    if response_format == ResponseFormat.MARKDOWN:
        return format_project_markdown(snapshot, tasks, board.store.expanded_task_id)
    return json.dumps(format_project_json(snapshot, tasks), indent=2)


# =============================================================================
# Project Tools
# =============================================================================


@mcp.tool(
    name="taskboard_list_projects",
    annotations={
        "title": "List Projects",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def taskboard_list_projects(ctx: Context, response_format: ResponseFormat = ResponseFormat.MARKDOWN) -> str:
    """
    List all projects with their progress.

    Reads the local board; use taskboard_reload to pick up changes made
    elsewhere.

    Returns:
        Formatted list of projects or error message.
    """
    try:
        board = get_board(ctx)
        projects = board.projects

        if response_format == ResponseFormat.MARKDOWN:
            return with_failures(board, format_projects_markdown(projects, board.store.selected_project_id))
        else:
            return json.dumps(format_projects_json(projects), indent=2)

    except Exception as e:
        return handle_error(e, "list_projects")


@mcp.tool(
    name="taskboard_get_project",
    annotations={
        "title": "Get Project",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def taskboard_get_project(params: ProjectGetInput, ctx: Context) -> str:
    """
    Show a project with its progress, status counts and tasks.

    Args:
        params: Query parameters:
            - project_id (str): Project to show (required)
            - status_filter (str): 'all' or a status; remembered for the session

    Returns:
        Formatted project details or error message.
    """
    try:
        board = get_board(ctx)
        if params.status_filter is not None:
            board.set_status_filter(params.status_filter)
        return with_failures(board, _render_project(board, params.project_id, params.response_format))

    except Exception as e:
        return handle_error(e, "get_project")


@mcp.tool(
    name="taskboard_create_project",
    annotations={
        "title": "Create Project",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def taskboard_create_project(params: ProjectCreateInput, ctx: Context) -> str:
    """
    Create a new project.

    Args:
        params: Project creation parameters:
            - name (str): Project name (required)
            - color (str): Hex color swatch (default '#3b82f6')

    Returns:
        Created project details or error message.

    Examples:
        - name="Launch", color="#3b82f6"
    """
    try:
        board = get_board(ctx)
        project = await board.create_project(params.name, params.color)

        if params.response_format == ResponseFormat.MARKDOWN:
            return f"# Project Created\n\n{_render_project(board, project.id, params.response_format)}"
        else:
            return json.dumps({"success": True, "project": project.model_dump(mode="json")}, indent=2)

    except Exception as e:
        return handle_error(e, "create_project")


@mcp.tool(
    name="taskboard_select_project",
    annotations={
        "title": "Select Project",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def taskboard_select_project(params: ProjectSelectInput, ctx: Context) -> str:
    """
    Select the project shown in detail, or clear the selection.

    Returns:
        The selected project or a confirmation that the selection is cleared.
    """
    try:
        board = get_board(ctx)
        board.select_project(params.project_id)
        if params.project_id is None:
            return success_message("Selection cleared.")
        return _render_project(board, params.project_id, ResponseFormat.MARKDOWN)

    except Exception as e:
        return handle_error(e, "select_project")


@mcp.tool(
    name="taskboard_delete_project",
    annotations={
        "title": "Delete Project",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_delete_project(params: ProjectDeleteInput, ctx: Context) -> str:
    """
    Delete a project and, through the database schema, its tasks.

    This is permanent. The call does nothing unless confirm is true.

    Args:
        params: Deletion parameters:
            - project_id (str): Project to delete (required)
            - confirm (bool): Must be true

    Returns:
        Success confirmation, a confirmation request, or error message.
    """
    try:
        board = get_board(ctx)
        prompts: list[str] = []

        def confirm(prompt: str) -> bool:
            prompts.append(prompt)
            return params.confirm

        if not await board.delete_project(params.project_id, confirm):
            return needs_confirmation(prompts[0])
        return success_message(f"Project `{params.project_id}` deleted.")

    except Exception as e:
        return handle_error(e, "delete_project")


@mcp.tool(
    name="taskboard_reload",
    annotations={
        "title": "Reload Board",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_reload(ctx: Context) -> str:
    """
    Reload every project, task and checklist from the data store.

    Unsaved text edits still waiting for their quiet period are not lost,
    but the reloaded values replace them locally until they are written.

    Returns:
        Summary of the reloaded board or error message.
    """
    try:
        board = get_board(ctx)
        snapshots = await board.load()
        task_count = sum(len(s.tasks) for s in snapshots)
        return with_failures(
            board,
            success_message(f"Reloaded {len(snapshots)} project(s), {task_count} task(s)."),
        )

    except Exception as e:
        return handle_error(e, "reload")


@mcp.tool(
    name="taskboard_pending_writes",
    annotations={
        "title": "Pending Writes",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def taskboard_pending_writes(ctx: Context) -> str:
    """
    Show edits waiting to be saved and any saves that failed.

    Returns:
        List of pending fields and failures.
    """
    try:
        board = get_board(ctx)
        pending = board.scheduler.pending_keys
        lines = ["# Pending Writes", ""]
        if pending:
            lines.extend(f"- `{entity_id}` {field}" for entity_id, field in pending)
        else:
            lines.append("All changes saved.")
        return with_failures(board, "\n".join(lines))

    except Exception as e:
        return handle_error(e, "pending_writes")


# =============================================================================
# Task Tools
# =============================================================================


@mcp.tool(
    name="taskboard_create_task",
    annotations={
        "title": "Create Task",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def taskboard_create_task(params: TaskCreateInput, ctx: Context) -> str:
    """
    Create a new task in a project.

    New tasks start as 'not-started' with empty description, requirements
    and notes.

    Args:
        params: Task creation parameters:
            - project_id (str): Project (required)
            - title (str): Task title (required)
            - priority (str): 'high', 'medium' (default), 'low'
            - due_date (str): YYYY-MM-DD
            - assignee (str): Person responsible

    Returns:
        Created task details or error message.

    Examples:
        - project_id="...", title="Design", priority="high"
    """
    try:
        board = get_board(ctx)
        due = date.fromisoformat(params.due_date) if params.due_date else None
        task = await board.create_task(
            params.project_id,
            params.title,
            priority=params.priority,
            due_date=due,
            assignee=params.assignee,
        )

        if params.response_format == ResponseFormat.MARKDOWN:
            return f"# Task Created\n\n{format_task_markdown(task)}"
        else:
            return json.dumps({"success": True, "task": format_task_json(task)}, indent=2)

    except Exception as e:
        return handle_error(e, "create_task")


@mcp.tool(
    name="taskboard_update_task",
    annotations={
        "title": "Update Task",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_update_task(params: TaskUpdateInput, ctx: Context) -> str:
    """
    Edit task fields.

    The board shows the new values at once. Priority and due date are saved
    immediately; text fields are saved after a short quiet period, and only
    the latest text is saved when the same field is edited repeatedly.
    All values are checked first; if any is invalid, nothing is changed.

    Args:
        params: Update parameters:
            - project_id, task_id (str): Task to edit (required)
            - title, description, requirements, notes, assignee (str)
            - priority (str), due_date (str), clear_due_date (bool)

    Returns:
        Updated task or error message.
    """
    try:
        board = get_board(ctx)
        changes: dict[str, Any] = {}
        for name in ("title", "description", "requirements", "notes", "assignee", "priority"):
            value = getattr(params, name)
            if value is not None:
                changes[name] = value
        if params.clear_due_date:
            changes["due_date"] = None
        elif params.due_date is not None:
            changes["due_date"] = date.fromisoformat(params.due_date)

        if not changes:
            return error_message("No fields to update.")

        if not await board.update_task_fields(params.project_id, params.task_id, changes):
            raise TaskBoardNotFoundError("Task", params.task_id)

        task = board.store.task(params.task_id)
        return with_failures(board, f"# Task Updated\n\n{format_task_markdown(task, detailed=True)}")

    except Exception as e:
        return handle_error(e, "update_task")


@mcp.tool(
    name="taskboard_set_task_status",
    annotations={
        "title": "Set Task Status",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_set_task_status(params: TaskStatusInput, ctx: Context) -> str:
    """
    Change a task's status. Saved immediately.

    Args:
        params: Status parameters:
            - project_id, task_id (str): Task (required)
            - status (str): 'not-started', 'in-progress', 'completed', 'on-hold'

    Returns:
        New status and project progress, or error message.
    """
    try:
        board = get_board(ctx)
        if not await board.update_task_status(params.project_id, params.task_id, params.status):
            raise TaskBoardNotFoundError("Task", params.task_id)
        progress = board.progress(params.project_id)
        return with_failures(
            board,
            success_message(f"Task `{params.task_id}` is now {params.status}. Project progress: {progress}%."),
        )

    except Exception as e:
        return handle_error(e, "set_task_status")


@mcp.tool(
    name="taskboard_expand_task",
    annotations={
        "title": "Expand Task",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
async def taskboard_expand_task(params: TaskRefInput, ctx: Context) -> str:
    """
    Open or close the details of a task. Only one task is open at a time.

    Returns:
        The task's full details when opened.
    """
    try:
        board = get_board(ctx)
        if not board.store.has_task(params.project_id, params.task_id):
            raise TaskBoardNotFoundError("Task", params.task_id)
        expanded = board.expand_task(params.task_id)
        if expanded is None:
            return success_message("Task details closed.")
        return format_task_markdown(board.store.task(expanded), detailed=True)

    except Exception as e:
        return handle_error(e, "expand_task")


@mcp.tool(
    name="taskboard_delete_task",
    annotations={
        "title": "Delete Task",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_delete_task(params: TaskDeleteInput, ctx: Context) -> str:
    """
    Delete a task. Permanent; does nothing unless confirm is true.

    Returns:
        Success confirmation, a confirmation request, or error message.
    """
    try:
        board = get_board(ctx)
        prompts: list[str] = []

        def confirm(prompt: str) -> bool:
            prompts.append(prompt)
            return params.confirm

        if not await board.delete_task(params.project_id, params.task_id, confirm):
            return needs_confirmation(prompts[0])
        return success_message(f"Task `{params.task_id}` deleted.")

    except Exception as e:
        return handle_error(e, "delete_task")


# =============================================================================
# Checklist Tools
# =============================================================================


@mcp.tool(
    name="taskboard_add_checklist_item",
    annotations={
        "title": "Add Checklist Item",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def taskboard_add_checklist_item(params: ChecklistAddInput, ctx: Context) -> str:
    """
    Add an item to a task's checklist.

    Returns:
        The new item or error message.
    """
    try:
        board = get_board(ctx)
        item = await board.add_checklist_item(params.project_id, params.task_id, params.text)
        return success_message(f"Added checklist item `{item.id}`: {item.text}")

    except Exception as e:
        return handle_error(e, "add_checklist_item")


@mcp.tool(
    name="taskboard_toggle_checklist_item",
    annotations={
        "title": "Toggle Checklist Item",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def taskboard_toggle_checklist_item(params: ChecklistItemInput, ctx: Context) -> str:
    """
    Tick or untick a checklist item. Saved immediately.

    Returns:
        New state of the item or error message.
    """
    try:
        board = get_board(ctx)
        if not await board.toggle_checklist_item(params.project_id, params.task_id, params.item_id):
            raise TaskBoardNotFoundError("Checklist item", params.item_id)
        item = board.store.checklist_item(params.item_id)
        state = "done" if item and item.completed else "open"
        return with_failures(board, success_message(f"Checklist item `{params.item_id}` is {state}."))

    except Exception as e:
        return handle_error(e, "toggle_checklist_item")


@mcp.tool(
    name="taskboard_edit_checklist_item",
    annotations={
        "title": "Edit Checklist Item",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_edit_checklist_item(params: ChecklistEditInput, ctx: Context) -> str:
    """
    Reword a checklist item. Saved after a short quiet period.

    Returns:
        Confirmation or error message.
    """
    try:
        board = get_board(ctx)
        if not await board.edit_checklist_item(params.project_id, params.task_id, params.item_id, params.text):
            raise TaskBoardNotFoundError("Checklist item", params.item_id)
        return with_failures(board, success_message(f"Checklist item `{params.item_id}` updated."))

    except Exception as e:
        return handle_error(e, "edit_checklist_item")


@mcp.tool(
    name="taskboard_delete_checklist_item",
    annotations={
        "title": "Delete Checklist Item",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_delete_checklist_item(params: ChecklistDeleteInput, ctx: Context) -> str:
    """
    Remove an item from a task's checklist. Does nothing unless confirm is true.

    Returns:
        Success confirmation, a confirmation request, or error message.
    """
    try:
        board = get_board(ctx)
        prompts: list[str] = []

        def confirm(prompt: str) -> bool:
            prompts.append(prompt)
            return params.confirm

        if not await board.delete_checklist_item(params.project_id, params.task_id, params.item_id, confirm):
            if not prompts:
                raise TaskBoardNotFoundError("Checklist item", params.item_id)
            return needs_confirmation(prompts[0])
        return with_failures(board, success_message(f"Checklist item `{params.item_id}` removed."))

    except Exception as e:
        return handle_error(e, "delete_checklist_item")


# =============================================================================
# Daily Todo Tools
# =============================================================================


@mcp.tool(
    name="taskboard_list_todos",
    annotations={
        "title": "List Daily Todos",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_list_todos(params: TodoListInput, ctx: Context) -> str:
    """
    Show the todos of one date.

    Args:
        params: Query parameters:
            - date (str): YYYY-MM-DD; defaults to the selected date
            - offset_days (int): Move the selected date, e.g. -1 or 1
            - today (bool): Jump to today first

    Returns:
        Formatted todo list or error message.
    """
    try:
        todos = get_todos(ctx)
        if params.date:
            selected = date.fromisoformat(params.date)
        elif params.today:
            selected = todos.today()
        else:
            selected = todos.selected_date
        await todos.select_date(selected + timedelta(days=params.offset_days))

        if params.response_format == ResponseFormat.MARKDOWN:
            return format_todos_markdown(todos)
        else:
            return json.dumps(format_todos_json(todos), indent=2)

    except Exception as e:
        return handle_error(e, "list_todos")


@mcp.tool(
    name="taskboard_add_todo",
    annotations={
        "title": "Add Daily Todo",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def taskboard_add_todo(params: TodoAddInput, ctx: Context) -> str:
    """
    Add a todo to a date (the selected date by default).

    Returns:
        The updated todo list or error message.
    """
    try:
        todos = get_todos(ctx)
        if params.date:
            await todos.select_date(date.fromisoformat(params.date))
        await todos.add(params.title)
        return format_todos_markdown(todos)

    except Exception as e:
        return handle_error(e, "add_todo")


@mcp.tool(
    name="taskboard_toggle_todo",
    annotations={
        "title": "Toggle Daily Todo",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def taskboard_toggle_todo(params: TodoToggleInput, ctx: Context) -> str:
    """
    Mark a todo of the selected date done or not done.

    Returns:
        The updated todo list or error message.
    """
    try:
        todos = get_todos(ctx)
        if not await todos.toggle(params.todo_id):
            raise TaskBoardNotFoundError("Todo", params.todo_id)
        return format_todos_markdown(todos)

    except Exception as e:
        return handle_error(e, "toggle_todo")


@mcp.tool(
    name="taskboard_delete_todo",
    annotations={
        "title": "Delete Daily Todo",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_delete_todo(params: TodoDeleteInput, ctx: Context) -> str:
    """
    Delete a todo. Does nothing unless confirm is true.

    Returns:
        Success confirmation, a confirmation request, or error message.
    """
    try:
        todos = get_todos(ctx)
        prompts: list[str] = []

        def confirm(prompt: str) -> bool:
            prompts.append(prompt)
            return params.confirm

        if not await todos.delete(params.todo_id, confirm):
            return needs_confirmation(prompts[0])
        return success_message(f"Todo `{params.todo_id}` deleted.")

    except Exception as e:
        return handle_error(e, "delete_todo")


# =============================================================================
# Goal Tools
# =============================================================================


@mcp.tool(
    name="taskboard_list_goals",
    annotations={
        "title": "List Goals",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_list_goals(ctx: Context, response_format: ResponseFormat = ResponseFormat.MARKDOWN) -> str:
    """
    Show goals grouped by horizon, from one year out down to this week.

    Returns:
        Formatted goals or error message.
    """
    try:
        goals = get_goals(ctx)
        await goals.load()

        if response_format == ResponseFormat.MARKDOWN:
            return format_goals_markdown(goals)
        else:
            return json.dumps(format_goals_json(goals), indent=2)

    except Exception as e:
        return handle_error(e, "list_goals")


@mcp.tool(
    name="taskboard_add_goal",
    annotations={
        "title": "Add Goal",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def taskboard_add_goal(params: GoalAddInput, ctx: Context) -> str:
    """
    Add a goal under a horizon.

    Args:
        params: Goal parameters:
            - category (str): '1_year', '6_months', '3_months', '1_month', 'this_week'
            - content (str): Goal text

    Returns:
        The updated goals or error message.
    """
    try:
        goals = get_goals(ctx)
        await goals.add(params.category, params.content)
        return format_goals_markdown(goals)

    except Exception as e:
        return handle_error(e, "add_goal")


@mcp.tool(
    name="taskboard_update_goal",
    annotations={
        "title": "Update Goal",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_update_goal(params: GoalUpdateInput, ctx: Context) -> str:
    """
    Reword a goal.

    Returns:
        The updated goals or error message.
    """
    try:
        goals = get_goals(ctx)
        await goals.update(params.goal_id, params.content)
        return format_goals_markdown(goals)

    except Exception as e:
        return handle_error(e, "update_goal")


@mcp.tool(
    name="taskboard_delete_goal",
    annotations={
        "title": "Delete Goal",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def taskboard_delete_goal(params: GoalDeleteInput, ctx: Context) -> str:
    """
    Delete a goal. Does nothing unless confirm is true.

    Returns:
        Success confirmation, a confirmation request, or error message.
    """
    try:
        goals = get_goals(ctx)
        prompts: list[str] = []

        def confirm(prompt: str) -> bool:
            prompts.append(prompt)
            return params.confirm

        if not await goals.delete(params.goal_id, confirm):
            return needs_confirmation(prompts[0])
        return success_message(f"Goal `{params.goal_id}` deleted.")

    except Exception as e:
        return handle_error(e, "delete_goal")


# =============================================================================
# Main Entry Point
# =============================================================================


def main():
    """Main entry point for the TaskBoard MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
