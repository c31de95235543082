"""
Response formatting for TaskBoard MCP tools.

Every entity has a markdown renderer for people and a JSON-ready dict
renderer for machines.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from taskboard_mcp.board import DailyTodoList, GoalBoard, WriteFailure
from taskboard_mcp.constants import GoalCategory, TaskStatus
from taskboard_mcp.models import (
    ChecklistItem,
    DailyTodo,
    Goal,
    ProjectSnapshot,
    Task,
    calculate_progress,
    status_count,
)


def success_message(message: str) -> str:
    return f"✓ {message}"


def error_message(message: str, hint: str | None = None) -> str:
    lines = [f"Error: {message}"]
    if hint:
        lines.append(f"Hint: {hint}")
    return "\n".join(lines)


def _progress_bar(percent: int, width: int = 20) -> str:
    filled = round(width * percent / 100)
    return "█" * filled + "░" * (width - filled)


# =============================================================================
# Tasks
# =============================================================================


def format_checklist_item_markdown(item: ChecklistItem) -> str:
    mark = "x" if item.completed else " "
    return f"- [{mark}] {item.text} (`{item.id}`)"


def format_task_markdown(task: Task, today: date | None = None, detailed: bool = False) -> str:
    lines = [f"### {task.title}", ""]
    lines.append(f"- **ID**: `{task.id}`")
    lines.append(f"- **Status**: {task.status.label}")
    lines.append(f"- **Priority**: {task.priority.label}")
    if task.due_date:
        overdue = " (overdue)" if task.is_overdue(today) and not task.is_completed else ""
        lines.append(f"- **Due**: {task.due_date.isoformat()}{overdue}")
    if task.assignee:
        lines.append(f"- **Assignee**: {task.assignee}")
    if task.checklist:
        lines.append(f"- **Checklist**: {task.checklist_done}/{len(task.checklist)}")

    if detailed:
        for label, text in (
            ("Description", task.description),
            ("Requirements", task.requirements),
            ("Notes", task.notes),
        ):
            if text:
                lines.extend(["", f"**{label}**", "", text])
        if task.checklist:
            lines.extend(["", "**Checklist**", ""])
            lines.extend(format_checklist_item_markdown(i) for i in task.checklist)

    return "\n".join(lines)


def format_task_json(task: Task) -> dict[str, Any]:
    return task.model_dump(mode="json")


# =============================================================================
# Projects
# =============================================================================


def format_project_markdown(
    snapshot: ProjectSnapshot,
    tasks: list[Task] | None = None,
    expanded_task_id: str | None = None,
    today: date | None = None,
) -> str:
    """
    Render a project with its progress and (filtered) tasks.

    Args:
        snapshot: Project with all its tasks
        tasks: Tasks to list, defaults to all of them
        expanded_task_id: Task rendered with full details
        today: Reference date for overdue markers
    """
    project = snapshot.project
    percent = calculate_progress(snapshot.tasks)
    lines = [
        f"## {project.name}",
        "",
        f"- **ID**: `{project.id}`",
        f"- **Color**: {project.color}",
        f"- **Progress**: {_progress_bar(percent)} {percent}%",
        "- **Tasks**: "
        + ", ".join(f"{s.label} {status_count(snapshot.tasks, s)}" for s in TaskStatus),
    ]

    tasks = snapshot.tasks if tasks is None else tasks
    if not tasks:
        lines.extend(["", "_No tasks._"])
        return "\n".join(lines)

    for task in tasks:
        lines.extend(["", format_task_markdown(task, today, detailed=task.id == expanded_task_id)])
    return "\n".join(lines)


def format_project_json(snapshot: ProjectSnapshot, tasks: list[Task] | None = None) -> dict[str, Any]:
    tasks = snapshot.tasks if tasks is None else tasks
    return {
        **snapshot.project.model_dump(mode="json"),
        "progress": calculate_progress(snapshot.tasks),
        "status_counts": {s.value: status_count(snapshot.tasks, s) for s in TaskStatus},
        "tasks": [format_task_json(t) for t in tasks],
    }


def format_projects_markdown(snapshots: list[ProjectSnapshot], selected_id: str | None = None) -> str:
    if not snapshots:
        return "# Projects\n\nNo projects yet."

    lines = ["# Projects", ""]
    for snapshot in snapshots:
        marker = " ◀ selected" if snapshot.id == selected_id else ""
        percent = calculate_progress(snapshot.tasks)
        lines.append(
            f"- **{snapshot.project.name}** (`{snapshot.id}`) "
            f"{percent}% of {len(snapshot.tasks)} task(s){marker}"
        )
    return "\n".join(lines)


def format_projects_json(snapshots: list[ProjectSnapshot]) -> list[dict[str, Any]]:
    return [
        {
            **s.project.model_dump(mode="json"),
            "progress": calculate_progress(s.tasks),
            "task_count": len(s.tasks),
        }
        for s in snapshots
    ]


# =============================================================================
# Daily Todos
# =============================================================================


def format_todo_markdown(todo: DailyTodo) -> str:
    mark = "x" if todo.completed else " "
    return f"- [{mark}] {todo.title} (`{todo.id}`)"


def format_todos_markdown(todo_list: DailyTodoList) -> str:
    todos = todo_list.todos
    header = f"# Todos: {todo_list.display_label()} ({todo_list.selected_date.isoformat()})"
    if not todos:
        return f"{header}\n\nNothing planned."
    lines = [header, "", f"{todo_list.completed_count}/{len(todos)} done", ""]
    lines.extend(format_todo_markdown(t) for t in todos)
    return "\n".join(lines)


def format_todos_json(todo_list: DailyTodoList) -> dict[str, Any]:
    return {
        "date": todo_list.selected_date.isoformat(),
        "completed": todo_list.completed_count,
        "todos": [t.model_dump(mode="json") for t in todo_list.todos],
    }


# =============================================================================
# Goals
# =============================================================================


def format_goal_markdown(goal: Goal) -> str:
    return f"- {goal.content} (`{goal.id}`)"


def format_goals_markdown(goal_board: GoalBoard) -> str:
    if goal_board.table_missing:
        return error_message(
            "The goals table does not exist.",
            "Create the 'goals' table in Supabase before adding goals.",
        )

    lines = [f"# Goals ({goal_board.total})"]
    for category in GoalCategory:
        goals = goal_board.goals.get(category, [])
        lines.extend(["", f"## {category.label}", ""])
        if goals:
            lines.extend(format_goal_markdown(g) for g in goals)
        else:
            lines.append("_None_")
    return "\n".join(lines)


def format_goals_json(goal_board: GoalBoard) -> dict[str, Any]:
    return {
        "table_missing": goal_board.table_missing,
        "total": goal_board.total,
        "goals": {
            category.value: [g.model_dump(mode="json") for g in goal_board.goals.get(category, [])]
            for category in GoalCategory
        },
    }


# =============================================================================
# Write failures
# =============================================================================


def format_write_failures(failures: list[WriteFailure]) -> str:
    """Warn about saves that failed; the local value was kept."""
    if not failures:
        return ""
    lines = ["", "**Warning: some changes could not be saved.** The shown values were kept locally:"]
    for failure in failures:
        lines.append(f"- `{failure.entity_id}` {failure.field}: {failure.message}")
    return "\n".join(lines)
