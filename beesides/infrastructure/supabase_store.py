"""PostgREST Table Store — TableStore implementation over the Supabase REST endpoint.

Invariants:
    - One store per request, authenticated with the caller's session token, so
      row-level security is enforced server-side
    - The admin store (service-role key) is opened only by the signup-time
      profile creation dependency
    - postgrest.APIError and httpx.HTTPError are mapped to PersistenceError;
      nothing else from postgrest leaves this module

Design Decisions:
    - select_one uses limit(1) instead of single()/maybe_single(): absence is a
      normal outcome here, not an error response
"""

import logging
from enum import Enum
from typing import Any

import httpx
from postgrest import AsyncPostgrestClient
from postgrest.exceptions import APIError
from postgrest.types import CountMethod

from beesides.core.errors import ErrorContext, PersistenceError
from beesides.core.repository_protocols import Filters, Ordering, Row

logger = logging.getLogger(__name__)


def _table_name(table: Any) -> str:
    return table.value if isinstance(table, Enum) else str(table)


def apply_filters(query: Any, filters: Filters) -> Any:
    """Apply column filters to a postgrest filter builder."""
    for column, value in filters.items():
        if isinstance(value, (list, tuple, set, frozenset)):
            query = query.in_(column, list(value))
        elif value is None:
            query = query.is_(column, "null")
        else:
            query = query.eq(column, value)
    return query


class PostgrestTableStore:
    """Table-scoped CRUD through postgrest's async client."""

    def __init__(self, client: AsyncPostgrestClient):
        self._client = client

    @classmethod
    def open(
        cls,
        supabase_url: str,
        api_key: str,
        access_token: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> "PostgrestTableStore":
        """Store authenticated as the session user (or anonymous/service role)."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
        }
        client = AsyncPostgrestClient(
            f"{supabase_url}/rest/v1", headers=headers, timeout=timeout_seconds,
        )
        return cls(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def select_one(
        self, table: str, filters: Filters, columns: str = "*",
    ) -> Row | None:
        rows = await self.select_many(table, filters, columns, limit=1)
        return rows[0] if rows else None

    async def select_many(
        self,
        table: str,
        filters: Filters,
        columns: str = "*",
        order_by: Ordering = (),
        limit: int | None = None,
    ) -> list[Row]:
        name = _table_name(table)
        query = apply_filters(self._client.from_(name).select(columns), filters)
        for column, descending in order_by:
            query = query.order(column, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        response = await self._execute(query, name, f"fetch {name}")
        return list(response.data or [])

    async def count(self, table: str, filters: Filters) -> int:
        name = _table_name(table)
        query = apply_filters(
            self._client.from_(name).select("*", count=CountMethod.exact, head=True),
            filters,
        )
        response = await self._execute(query, name, f"count {name}")
        return response.count or 0

    async def insert(self, table: str, row: Row) -> Row:
        name = _table_name(table)
        response = await self._execute(
            self._client.from_(name).insert(row), name, f"insert into {name}",
        )
        if not response.data:
            raise PersistenceError(
                "no row returned", f"insert into {name}",
                ErrorContext(table=name),
            )
        return response.data[0]

    async def update(
        self, table: str, filters: Filters, values: Row,
    ) -> Row | None:
        name = _table_name(table)
        query = apply_filters(self._client.from_(name).update(values), filters)
        response = await self._execute(query, name, f"update {name}")
        return response.data[0] if response.data else None

    async def delete(self, table: str, filters: Filters) -> int:
        name = _table_name(table)
        query = apply_filters(self._client.from_(name).delete(), filters)
        response = await self._execute(query, name, f"delete from {name}")
        return len(response.data or [])

    async def _execute(self, query: Any, table: str, operation: str):
        try:
            return await query.execute()
        except APIError as e:
            logger.warning(
                f"PostgREST rejected {operation}: {e.message}",
                extra={"table": table, "operation": operation, "error_code": e.code},
            )
            raise PersistenceError(
                e.message or "request rejected", operation,
                ErrorContext(table=table, debug_info={"code": e.code, "details": e.details}),
            )
        except httpx.HTTPError as e:
            logger.error(
                f"PostgREST transport error during {operation}: {e}",
                extra={"table": table, "operation": operation},
            )
            raise PersistenceError(
                "data store unavailable", operation, ErrorContext(table=table),
            )
