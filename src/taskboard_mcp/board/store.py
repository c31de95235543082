"""
Local reflection store.

In-memory working copy of projects, tasks and checklist items. Entities
are kept flat, keyed by id, with parent back-references and ordered child
id lists, so a field edit is a dictionary lookup rather than a walk of the
nested tree.

The store never talks to the remote data store. Structural changes only
arrive through ``replace_all`` after a reconciliation load; field edits
are applied in place ahead of their remote write.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from taskboard_mcp.constants import (
    EDITABLE_CHECKLIST_FIELDS,
    EDITABLE_TASK_FIELDS,
    FILTER_ALL,
    TaskStatus,
)
from taskboard_mcp.exceptions import TaskBoardNotFoundError, TaskBoardValidationError
from taskboard_mcp.models import (
    ChecklistItem,
    Project,
    ProjectSnapshot,
    Task,
    calculate_progress,
    filter_tasks,
)

logger = logging.getLogger(__name__)


class ReflectionStore:
    """
    Working copy of the project tree plus the view state that points into it.

    Attributes:
        selected_project_id: Project currently shown in detail, if any
        expanded_task_id: Task whose details are open, if any
        status_filter: ``"all"`` or a TaskStatus value
    """

    def __init__(self) -> None:
        self._projects: dict[str, Project] = {}
        self._project_order: list[str] = []
        self._tasks: dict[str, Task] = {}
        self._task_ids: dict[str, list[str]] = {}
        self._items: dict[str, ChecklistItem] = {}
        self._item_ids: dict[str, list[str]] = {}

        self.selected_project_id: str | None = None
        self.expanded_task_id: str | None = None
        self.status_filter: str = FILTER_ALL

    # =========================================================================
    # Bulk replacement
    # =========================================================================

    def replace_all(self, snapshots: Iterable[ProjectSnapshot]) -> None:
        """
        Swap the whole collection for a freshly loaded one.

        The selection and expansion survive when their ids are still
        present, otherwise they are cleared.
        """
        projects: dict[str, Project] = {}
        project_order: list[str] = []
        tasks: dict[str, Task] = {}
        task_ids: dict[str, list[str]] = {}
        items: dict[str, ChecklistItem] = {}
        item_ids: dict[str, list[str]] = {}

        for snapshot in snapshots:
            project = snapshot.project.model_copy(deep=True)
            projects[project.id] = project
            project_order.append(project.id)
            task_ids[project.id] = []

            for task in snapshot.tasks:
                task_ids[project.id].append(task.id)
                tasks[task.id] = task.model_copy(update={"checklist": []}, deep=True)
                item_ids[task.id] = []
                for item in task.checklist:
                    items[item.id] = item.model_copy(deep=True)
                    item_ids[task.id].append(item.id)

        self._projects = projects
        self._project_order = project_order
        self._tasks = tasks
        self._task_ids = task_ids
        self._items = items
        self._item_ids = item_ids

        if self.selected_project_id not in self._projects:
            self.selected_project_id = None
        if self.expanded_task_id not in self._tasks:
            self.expanded_task_id = None

        logger.debug(
            "Store replaced: %d projects, %d tasks, %d checklist items",
            len(projects),
            len(tasks),
            len(items),
        )

    def clear(self) -> None:
        self.replace_all([])

    # =========================================================================
    # Reads
    # =========================================================================

    def __len__(self) -> int:
        return len(self._project_order)

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._projects

    def projects(self) -> list[ProjectSnapshot]:
        """Nested copy of the whole collection, in load order."""
        return [self._build_snapshot(pid) for pid in self._project_order]

    def project(self, project_id: str) -> ProjectSnapshot | None:
        if project_id not in self._projects:
            return None
        return self._build_snapshot(project_id)

    def task(self, task_id: str) -> Task | None:
        if task_id not in self._tasks:
            return None
        return self._build_task(task_id)

    def tasks_of(self, project_id: str) -> list[Task]:
        return [self._build_task(tid) for tid in self._task_ids.get(project_id, [])]

    def checklist_item(self, item_id: str) -> ChecklistItem | None:
        item = self._items.get(item_id)
        return item.model_copy() if item else None

    def has_task(self, project_id: str, task_id: str) -> bool:
        task = self._tasks.get(task_id)
        return task is not None and task.project_id == project_id

    @property
    def selected_project(self) -> ProjectSnapshot | None:
        if self.selected_project_id is None:
            return None
        return self.project(self.selected_project_id)

    def _build_task(self, task_id: str) -> Task:
        checklist = [self._items[iid].model_copy() for iid in self._item_ids.get(task_id, [])]
        return self._tasks[task_id].model_copy(update={"checklist": checklist})

    def _build_snapshot(self, project_id: str) -> ProjectSnapshot:
        return ProjectSnapshot(
            project=self._projects[project_id].model_copy(),
            tasks=self.tasks_of(project_id),
        )

    # =========================================================================
    # Derived values
    # =========================================================================

    def progress(self, project_id: str) -> int:
        """Completed share of a project's tasks, 0-100."""
        return calculate_progress([self._tasks[tid] for tid in self._task_ids.get(project_id, [])])

    def status_counts(self, project_id: str) -> dict[TaskStatus, int]:
        counts = {status: 0 for status in TaskStatus}
        for tid in self._task_ids.get(project_id, []):
            counts[self._tasks[tid].status] += 1
        return counts

    def visible_tasks(self, project_id: str) -> list[Task]:
        """Tasks of a project that pass the current status filter."""
        return filter_tasks(self.tasks_of(project_id), self.status_filter)

    # =========================================================================
    # View state
    # =========================================================================

    def select_project(self, project_id: str | None) -> None:
        if project_id is not None and project_id not in self._projects:
            raise TaskBoardNotFoundError("Project", project_id)
        self.selected_project_id = project_id

    def expand_task(self, task_id: str | None) -> str | None:
        """Toggle the expanded task; returns the new expansion."""
        if task_id is not None and task_id not in self._tasks:
            raise TaskBoardNotFoundError("Task", task_id)
        self.expanded_task_id = None if task_id == self.expanded_task_id else task_id
        return self.expanded_task_id

    def set_status_filter(self, status_filter: TaskStatus | str) -> None:
        if status_filter == FILTER_ALL:
            self.status_filter = FILTER_ALL
            return
        try:
            self.status_filter = TaskStatus(status_filter).value
        except ValueError as e:
            raise TaskBoardValidationError(
                f"Unknown status filter: {status_filter}",
                field="status_filter",
            ) from e

    # =========================================================================
    # Optimistic mutation
    # =========================================================================

    def apply_field_edit(self, project_id: str, task_id: str, field: str, value: Any) -> bool:
        """
        Overwrite one field of one task.

        Returns:
            False when the project or task is unknown locally (stale copy);
            the caller decides whether to reload.

        Raises:
            TaskBoardValidationError: field is not editable or value is invalid
        """
        if field not in EDITABLE_TASK_FIELDS:
            raise TaskBoardValidationError(f"Task field is not editable: {field}", field=field)

        if project_id not in self._projects or not self.has_task(project_id, task_id):
            logger.debug("Stale task edit ignored: project=%s task=%s", project_id, task_id)
            return False

        _assign(self._tasks[task_id], field, value)
        return True

    def apply_checklist_edit(self, task_id: str, item_id: str, field: str, value: Any) -> bool:
        if field not in EDITABLE_CHECKLIST_FIELDS:
            raise TaskBoardValidationError(f"Checklist field is not editable: {field}", field=field)

        item = self._items.get(item_id)
        if item is None or item.task_id != task_id:
            logger.debug("Stale checklist edit ignored: task=%s item=%s", task_id, item_id)
            return False

        _assign(item, field, value)
        return True

    def apply_checklist_insert(self, task_id: str, item: ChecklistItem) -> bool:
        if task_id not in self._tasks or item.task_id != task_id:
            logger.debug("Stale checklist insert ignored: task=%s", task_id)
            return False

        ids = self._item_ids.setdefault(task_id, [])
        if item.id not in ids:
            ids.append(item.id)
        self._items[item.id] = item.model_copy()
        return True

    def apply_checklist_remove(self, task_id: str, item_id: str) -> bool:
        item = self._items.get(item_id)
        if item is None or item.task_id != task_id:
            logger.debug("Stale checklist removal ignored: task=%s item=%s", task_id, item_id)
            return False

        del self._items[item_id]
        self._item_ids[task_id].remove(item_id)
        return True


def _assign(model: Task | ChecklistItem, field: str, value: Any) -> None:
    try:
        setattr(model, field, value)
    except ValidationError as e:
        raise TaskBoardValidationError(
            f"Invalid value for {field}: {value!r}",
            field=field,
        ) from e
