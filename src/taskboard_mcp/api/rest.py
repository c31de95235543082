"""
Supabase REST data store.

Talks to the PostgREST endpoint of a Supabase project::

    GET    /rest/v1/{table}?select=*&{col}=eq.{value}&order={col}.asc
    POST   /rest/v1/{table}               (Prefer: return=representation)
    PATCH  /rest/v1/{table}?id=eq.{id}
    DELETE /rest/v1/{table}?id=eq.{id}
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from taskboard_mcp.api.base import DataStore, Row
from taskboard_mcp.exceptions import TaskBoardAPIError, TaskBoardTableMissingError
from taskboard_mcp.models.task import to_wire

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

# PostgreSQL "undefined_table"
UNDEFINED_TABLE = "42P01"


class RestDataStore(DataStore):
    """
    Data store backed by the Supabase REST API.

    Usage:
        async with RestDataStore(url="https://xyz.supabase.co", api_key="...") as store:
            rows = await store.select("projects", order_by="created_at")
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = url.rstrip("/") + REST_PATH
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        await self._client.aclose()

    # =========================================================================
    # Operations
    # =========================================================================

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        params: dict[str, str] = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{to_wire(value)}"
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"

        response = await self._request("GET", table, "select", params=params)
        return response.json() or []

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        response = await self._request(
            "POST",
            table,
            "insert",
            json=[dict(row)],
            headers={"Prefer": "return=representation"},
        )
        data = response.json()
        if not data:
            raise TaskBoardAPIError(
                f"Insert into {table} returned no row",
                status_code=response.status_code,
                operation="insert",
                table=table,
            )
        return data[0]

    async def update(self, table: str, row_id: str, patch: Mapping[str, Any]) -> None:
        await self._request(
            "PATCH",
            table,
            "update",
            params={"id": f"eq.{row_id}"},
            json={k: to_wire(v) for k, v in patch.items()},
        )

    async def delete(self, table: str, row_id: str) -> None:
        await self._request("DELETE", table, "delete", params={"id": f"eq.{row_id}"})

    # =========================================================================
    # Internals
    # =========================================================================

    async def _request(
        self,
        method: str,
        table: str,
        operation: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, f"/{table}", **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, table, e)
            raise TaskBoardAPIError(
                f"Request to {table} failed: {e}",
                operation=operation,
                table=table,
            ) from e

        if response.is_success:
            return response

        raise self._error_from_response(response, operation, table)

    @staticmethod
    def _error_from_response(
        response: httpx.Response,
        operation: str,
        table: str,
    ) -> TaskBoardAPIError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = body.get("message") or response.text or response.reason_phrase
        code = body.get("code")
        logger.error(
            "%s on %s failed with HTTP %s: %s",
            operation,
            table,
            response.status_code,
            message,
        )

        if code == UNDEFINED_TABLE or "does not exist" in str(message):
            return TaskBoardTableMissingError(
                f"Table {table} does not exist",
                status_code=response.status_code,
                operation=operation,
                table=table,
                details={"code": code} if code else None,
            )

        return TaskBoardAPIError(
            str(message),
            status_code=response.status_code,
            operation=operation,
            table=table,
            details={"code": code} if code else None,
        )
