"""Boundary Protocols — contracts between domain operations and external collaborators.

Invariants:
    - Services depend on these Protocols, never on postgrest/httpx directly
    - Filters are column → value: a list/tuple/set means IN, None means IS NULL,
      anything else means equality
    - Every TableStore failure surfaces as PersistenceError (core/errors.py)

Design Decisions:
    - Protocol over ABC: the in-memory test store and PostgrestTableStore share
      no base class
"""

from typing import Any, Mapping, Protocol, Sequence

from beesides.core.domain_types import Principal

Row = dict[str, Any]
Filters = Mapping[str, Any]
# (column, descending) pairs, applied in order
Ordering = Sequence[tuple[str, bool]]


class TableStore(Protocol):
    """Table-scoped CRUD against the hosted data store (row-level security applies)."""

    async def select_one(
        self, table: str, filters: Filters, columns: str = "*",
    ) -> Row | None: ...

    async def select_many(
        self,
        table: str,
        filters: Filters,
        columns: str = "*",
        order_by: Ordering = (),
        limit: int | None = None,
    ) -> list[Row]: ...

    async def count(self, table: str, filters: Filters) -> int: ...

    async def insert(self, table: str, row: Row) -> Row: ...

    async def update(
        self, table: str, filters: Filters, values: Row,
    ) -> Row | None: ...

    async def delete(self, table: str, filters: Filters) -> int: ...


class AuthGateway(Protocol):
    """Resolves a Principal from a session access token."""

    async def get_principal(self, access_token: str) -> Principal | None: ...


class MetadataProvider(Protocol):
    """Read-only catalog search service."""

    async def search_release_groups(
        self, query: str, limit: int = 10, offset: int = 0,
    ) -> dict: ...

    async def get_release_group(self, mbid: str) -> dict: ...
