"""
Reconciliation loader.

Fetches the authoritative project tree in three dependent levels
(projects, then the tasks of each project, then the checklist of each
task) and installs it into a ReflectionStore. Reads within a level are
issued concurrently since they target disjoint collections.
"""

from __future__ import annotations

import asyncio
import logging

from taskboard_mcp.board.store import ReflectionStore
from taskboard_mcp.client import TaskBoardClient
from taskboard_mcp.exceptions import TaskBoardAPIError, TaskBoardLoadError
from taskboard_mcp.models import Project, ProjectSnapshot, Task

logger = logging.getLogger(__name__)


class ReconciliationLoader:
    """Rebuilds the local store from the remote store."""

    def __init__(self, client: TaskBoardClient, store: ReflectionStore) -> None:
        self._client = client
        self._store = store

    async def fetch(self) -> list[ProjectSnapshot]:
        """
        Read the whole project tree without touching the store.

        Raises:
            TaskBoardLoadError: any read failed
        """
        try:
            projects = await self._client.list_projects()
            return list(await asyncio.gather(*(self._fetch_project(p) for p in projects)))
        except TaskBoardAPIError as e:
            logger.error("Reconciliation load failed: %s", e)
            raise TaskBoardLoadError(
                f"Failed to load projects: {e.message}",
                status_code=e.status_code,
                operation="load",
                table=e.table,
            ) from e

    async def load(self) -> list[ProjectSnapshot]:
        """
        Fetch the tree and install it with ``replace_all``.

        On failure the store keeps its previous contents.
        """
        snapshots = await self.fetch()
        self._store.replace_all(snapshots)
        logger.info(
            "Loaded %d projects, %d tasks",
            len(snapshots),
            sum(len(s.tasks) for s in snapshots),
        )
        return snapshots

    async def _fetch_project(self, project: Project) -> ProjectSnapshot:
        tasks = await self._client.list_tasks(project.id)
        tasks = list(await asyncio.gather(*(self._fetch_checklist(t) for t in tasks)))
        return ProjectSnapshot(project=project, tasks=tasks)

    async def _fetch_checklist(self, task: Task) -> Task:
        items = await self._client.list_checklist_items(task.id)
        return task.model_copy(update={"checklist": items})
