"""
Abstract data store interface.

The remote store is the single source of truth. Implementations expose
four row-level operations over named tables; every list call returns the
full filtered collection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, Mapping, TypeVar

T = TypeVar("T", bound="DataStore")

Row = dict[str, Any]


class DataStore(ABC):
    """Row-level CRUD over the tables of the remote store."""

    @abstractmethod
    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        """
        List rows of a table.

        Args:
            table: Table name
            filters: Column equality filters
            order_by: Column to sort on
            ascending: Sort direction

        Returns:
            All matching rows
        """

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert one row and return it with server-assigned id and defaults."""

    @abstractmethod
    async def update(self, table: str, row_id: str, patch: Mapping[str, Any]) -> None:
        """Patch the row whose id equals ``row_id``."""

    @abstractmethod
    async def delete(self, table: str, row_id: str) -> None:
        """Hard-delete the row whose id equals ``row_id``."""

    async def close(self) -> None:
        """Release any held resources."""

    async def __aenter__(self: T) -> T:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
