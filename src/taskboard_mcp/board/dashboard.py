"""
Task board.

The view-level state container for projects, tasks and checklists. One
TaskBoard is owned by one view; it holds the local reflection store, the
persistence scheduler and the reconciliation loader, and exposes the
user actions of the board.

Update policy:
    - Project and task create/delete write first, then reload everything.
    - Task field edits and checklist toggles, edits and removals are applied
      locally first and persisted through the scheduler; they never reload.
    - Every delete asks for confirmation first.
    - Checklist inserts write first and then insert the server row locally.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from datetime import date
from types import TracebackType
from typing import Any, Awaitable, Callable, Hashable, Mapping, TypeVar, Union

from pydantic import ValidationError

from taskboard_mcp.board.loader import ReconciliationLoader
from taskboard_mcp.board.scheduler import PersistenceScheduler
from taskboard_mcp.board.store import ReflectionStore
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.constants import (
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_PROJECT_COLOR,
    EDITABLE_TASK_FIELDS,
    IMMEDIATE_TASK_FIELDS,
    TaskPriority,
    TaskStatus,
)
from taskboard_mcp.exceptions import (
    TaskBoardAPIError,
    TaskBoardNotFoundError,
    TaskBoardValidationError,
)
from taskboard_mcp.models import ChecklistItem, Project, ProjectSnapshot, Task, to_wire

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="TaskBoard")

ConfirmFn = Callable[[str], Union[bool, Awaitable[bool]]]


@dataclass
class WriteFailure:
    """A deferred or immediate field write that the remote store rejected."""

    entity_id: str
    field: str
    error: Exception = field(repr=False)

    @property
    def message(self) -> str:
        return str(self.error)


def require_text(value: str | None, field_name: str, message: str) -> str:
    """Return ``value`` stripped, or raise when nothing is left."""
    text = (value or "").strip()
    if not text:
        raise TaskBoardValidationError(message, field=field_name)
    return text


async def ask(confirm: ConfirmFn, prompt: str) -> bool:
    """Run a confirmation callback that may be sync or async."""
    answer = confirm(prompt)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)


class TaskBoard:
    """
    Projects, tasks and checklists for one view.

    Usage:
        async with TaskBoard(client) as board:
            await board.load()
            project = await board.create_project("Launch")
            ...
    """

    def __init__(
        self,
        client: TaskBoardClient,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_error: Callable[[WriteFailure], None] | None = None,
    ) -> None:
        self.client = client
        self.store = ReflectionStore()
        self.scheduler = PersistenceScheduler(delay=debounce_seconds, on_error=self._record_failure)
        self.loader = ReconciliationLoader(client, self.store)
        self.errors: list[WriteFailure] = []
        self._on_error = on_error

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def load(self) -> list[ProjectSnapshot]:
        """Reconcile the local store with the remote store."""
        return await self.loader.load()

    async def close(self) -> None:
        """Tear down the view: pending writes are discarded."""
        await self.scheduler.close()

    async def __aenter__(self: T) -> T:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def drain_errors(self) -> list[WriteFailure]:
        """Return and forget the write failures collected so far."""
        errors, self.errors = self.errors, []
        return errors

    def _record_failure(self, key: Hashable, error: Exception) -> None:
        entity_id, field_name = key  # type: ignore[misc]
        failure = WriteFailure(entity_id=entity_id, field=field_name, error=error)
        self.errors.append(failure)
        if self._on_error is not None:
            self._on_error(failure)

    # =========================================================================
    # Reads and view state
    # =========================================================================

    @property
    def projects(self) -> list[ProjectSnapshot]:
        return self.store.projects()

    @property
    def selected_project(self) -> ProjectSnapshot | None:
        return self.store.selected_project

    def select_project(self, project_id: str | None) -> None:
        self.store.select_project(project_id)

    def expand_task(self, task_id: str | None) -> str | None:
        return self.store.expand_task(task_id)

    def set_status_filter(self, status_filter: TaskStatus | str) -> None:
        self.store.set_status_filter(status_filter)

    def progress(self, project_id: str) -> int:
        return self.store.progress(project_id)

    # =========================================================================
    # Projects
    # =========================================================================

    async def create_project(self, name: str, color: str = DEFAULT_PROJECT_COLOR) -> Project:
        """
        Create a project and reload.

        Raises:
            TaskBoardValidationError: name is empty
            TaskBoardAPIError: the insert failed
        """
        name = require_text(name, "name", "Project name is required")
        try:
            project = await self.client.create_project(name, color)
        except TaskBoardAPIError as e:
            logger.error("Error adding project: %s", e)
            raise
        logger.info("Project added: %s", project.id)
        await self.load()
        return project

    async def delete_project(self, project_id: str, confirm: ConfirmFn) -> bool:
        """
        Delete a project after confirmation.

        Returns:
            False when the user declined, True once deleted and reloaded
        """
        snapshot = self.store.project(project_id)
        label = snapshot.project.name if snapshot else project_id
        if not await ask(confirm, f"Delete project '{label}'?"):
            return False

        try:
            await self.client.delete_project(project_id)
        except TaskBoardAPIError as e:
            logger.error("Error deleting project: %s", e)
            raise

        tasks = snapshot.tasks if snapshot else []
        task_ids = [t.id for t in tasks]
        self._discard_pending(task_ids + [item.id for t in tasks for item in t.checklist])
        if self.store.selected_project_id == project_id:
            self.store.selected_project_id = None
        if self.store.expanded_task_id in task_ids:
            self.store.expanded_task_id = None
        await self.load()
        return True

    # =========================================================================
    # Tasks
    # =========================================================================

    async def create_task(
        self,
        project_id: str,
        title: str,
        *,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        due_date: date | None = None,
        assignee: str | None = None,
    ) -> Task:
        """
        Create a task in a project and reload.

        Raises:
            TaskBoardValidationError: title is empty
            TaskBoardNotFoundError: project is not on the board
            TaskBoardAPIError: the insert failed
        """
        title = require_text(title, "title", "Task title is required")
        if project_id not in self.store:
            raise TaskBoardNotFoundError("Project", project_id)

        try:
            task = await self.client.create_task(
                project_id,
                title,
                priority=priority,
                status=TaskStatus.NOT_STARTED,
                due_date=due_date,
                assignee=assignee,
            )
        except TaskBoardAPIError as e:
            logger.error("Error adding task: %s", e)
            raise
        logger.info("Task added: %s", task.id)
        await self.load()
        return task

    async def delete_task(self, project_id: str, task_id: str, confirm: ConfirmFn) -> bool:
        task = self.store.task(task_id)
        label = task.title if task else task_id
        if not await ask(confirm, f"Delete task '{label}'?"):
            return False

        try:
            await self.client.delete_task(task_id)
        except TaskBoardAPIError as e:
            logger.error("Error deleting task: %s", e)
            raise

        item_ids = [item.id for item in task.checklist] if task else []
        self._discard_pending([task_id] + item_ids)
        if self.store.expanded_task_id == task_id:
            self.store.expanded_task_id = None
        await self.load()
        return True

    async def update_task_field(
        self,
        project_id: str,
        task_id: str,
        field_name: str,
        value: Any,
        immediate: bool | None = None,
    ) -> bool:
        """
        Apply a field edit locally and schedule its remote write.

        Status, priority and due date are written immediately unless
        ``immediate`` says otherwise; free-text fields are debounced.

        Returns:
            False when the task is unknown locally (nothing scheduled)
        """
        if immediate is None:
            immediate = field_name in IMMEDIATE_TASK_FIELDS

        if not self.store.apply_field_edit(project_id, task_id, field_name, value):
            return False

        task = self.store.task(task_id)
        patch = {field_name: to_wire(getattr(task, field_name))}

        async def write() -> None:
            await self.client.update_task(task_id, patch)

        await self.scheduler.schedule((task_id, field_name), write, immediate=immediate)
        return True

    async def update_task_fields(self, project_id: str, task_id: str, changes: Mapping[str, Any]) -> bool:
        """
        Apply several field edits to one task, all or none.

        Every value is validated against the task before any edit is
        applied or scheduled.

        Returns:
            False when the task is unknown locally (nothing applied)

        Raises:
            TaskBoardValidationError: a field is not editable or a value is invalid
        """
        current = self.store.task(task_id)
        if current is None or current.project_id != project_id:
            return False

        for field_name in changes:
            if field_name not in EDITABLE_TASK_FIELDS:
                raise TaskBoardValidationError(f"Task field is not editable: {field_name}", field=field_name)
        try:
            Task.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            field_name = str(e.errors()[0]["loc"][0])
            raise TaskBoardValidationError(
                f"Invalid value for {field_name}: {changes.get(field_name)!r}",
                field=field_name,
            ) from e

        for field_name, value in changes.items():
            if not await self.update_task_field(project_id, task_id, field_name, value):
                return False
        return True

    async def update_task_status(self, project_id: str, task_id: str, status: TaskStatus | str) -> bool:
        return await self.update_task_field(project_id, task_id, "status", status, immediate=True)

    # =========================================================================
    # Checklist
    # =========================================================================

    async def add_checklist_item(self, project_id: str, task_id: str, text: str) -> ChecklistItem:
        """
        Insert a checklist item remotely, then add the stored row locally.

        Raises:
            TaskBoardValidationError: text is empty
            TaskBoardNotFoundError: task is not on the board
            TaskBoardAPIError: the insert failed
        """
        text = require_text(text, "text", "Checklist item text is required")
        if not self.store.has_task(project_id, task_id):
            raise TaskBoardNotFoundError("Task", task_id)

        try:
            item = await self.client.create_checklist_item(task_id, text)
        except TaskBoardAPIError as e:
            logger.error("Error adding checklist item: %s", e)
            raise
        self.store.apply_checklist_insert(task_id, item)
        return item

    async def toggle_checklist_item(self, project_id: str, task_id: str, item_id: str) -> bool:
        item = self.store.checklist_item(item_id)
        if item is None or not self.store.has_task(project_id, task_id):
            return False
        return await self._edit_checklist(task_id, item_id, "completed", not item.completed, immediate=True)

    async def edit_checklist_item(self, project_id: str, task_id: str, item_id: str, text: str) -> bool:
        if not self.store.has_task(project_id, task_id):
            return False
        return await self._edit_checklist(task_id, item_id, "text", text, immediate=False)

    async def delete_checklist_item(
        self,
        project_id: str,
        task_id: str,
        item_id: str,
        confirm: ConfirmFn,
    ) -> bool:
        """
        Remove a checklist item locally and delete it remotely, after confirmation.

        Returns:
            False when the item is unknown locally (no prompt is shown) or
            the user declined
        """
        item = self.store.checklist_item(item_id)
        if item is None or item.task_id != task_id or not self.store.has_task(project_id, task_id):
            return False
        if not await ask(confirm, f"Delete checklist item '{item.text}'?"):
            return False
        if not self.store.apply_checklist_remove(task_id, item_id):
            return False

        self._discard_pending([item_id])

        async def write() -> None:
            await self.client.delete_checklist_item(item_id)

        await self.scheduler.schedule((item_id, "delete"), write, immediate=True)
        return True

    async def _edit_checklist(
        self,
        task_id: str,
        item_id: str,
        field_name: str,
        value: Any,
        immediate: bool,
    ) -> bool:
        if not self.store.apply_checklist_edit(task_id, item_id, field_name, value):
            return False

        patch = {field_name: value}

        async def write() -> None:
            await self.client.update_checklist_item(item_id, patch)

        await self.scheduler.schedule((item_id, field_name), write, immediate=immediate)
        return True

    def _discard_pending(self, entity_ids: list[str]) -> None:
        ids = set(entity_ids)
        for key in self.scheduler.pending_keys:
            if key[0] in ids:  # type: ignore[index]
                self.scheduler.cancel(key)
