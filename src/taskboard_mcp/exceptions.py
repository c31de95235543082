"""
TaskBoard Exceptions.

All errors raised by this package derive from TaskBoardError so callers
can catch the whole family with one ``except TaskBoardError`` clause.

Hierarchy::

    TaskBoardError
    ├── TaskBoardValidationError
    ├── TaskBoardConfigurationError
    ├── TaskBoardNotFoundError
    └── TaskBoardAPIError
        ├── TaskBoardTableMissingError
        └── TaskBoardLoadError
"""

from __future__ import annotations

from typing import Any


class TaskBoardError(Exception):
    """Base exception for all TaskBoard errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details: dict[str, Any] = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | details={self.details}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r})"


class TaskBoardValidationError(TaskBoardError):
    """Raised when user input is rejected before any remote call is made."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class TaskBoardConfigurationError(TaskBoardError):
    """Raised when settings are missing or invalid."""


class TaskBoardNotFoundError(TaskBoardError):
    """Raised when an entity is not present in the local board."""

    def __init__(
        self,
        entity: str,
        entity_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{entity} not found: {entity_id}", details)
        self.entity = entity
        self.entity_id = entity_id


class TaskBoardAPIError(TaskBoardError):
    """Raised when the remote data store rejects or fails a request."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        operation: str | None = None,
        table: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
        self.operation = operation
        self.table = table


class TaskBoardTableMissingError(TaskBoardAPIError):
    """Raised when the remote store reports that a table does not exist."""


class TaskBoardLoadError(TaskBoardAPIError):
    """Raised when a reconciliation load is aborted."""
