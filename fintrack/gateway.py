"""
gateway.py — Remote Data Gateway boundary
Every store reads and writes state through a Gateway. Filters and orderings
are plain values so that any backend (PostgREST, an in-memory fake) can
interpret them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


def _normalize(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_normalize(v) for v in value]
    return value


@dataclass(frozen=True)
class Filter:
    """A single column predicate, e.g. ``Filter("amount", "gte", 100)``."""

    column: str
    op: str  # eq/neq/gt/gte/lt/lte/cs/in/is
    value: Any

    def __post_init__(self):
        object.__setattr__(self, "value", _normalize(self.value))


@dataclass(frozen=True)
class AnyOf:
    """OR of several predicates (e.g. shared default OR owned by the user)."""

    filters: tuple[Filter, ...]


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


def eq(column: str, value) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value) -> Filter:
    return Filter(column, "neq", value)


def gt(column: str, value) -> Filter:
    return Filter(column, "gt", value)


def gte(column: str, value) -> Filter:
    return Filter(column, "gte", value)


def lt(column: str, value) -> Filter:
    return Filter(column, "lt", value)


def lte(column: str, value) -> Filter:
    return Filter(column, "lte", value)


def contains(column: str, values) -> Filter:
    """Array column contains every one of ``values``."""
    return Filter(column, "cs", list(values))


def in_(column: str, values) -> Filter:
    return Filter(column, "in", list(values))


def or_(*filters: Filter) -> AnyOf:
    return AnyOf(tuple(filters))


def asc(column: str) -> Order:
    return Order(column)


def desc(column: str) -> Order:
    return Order(column, descending=True)


class Gateway(ABC):
    """Abstract persistence/auth boundary used by every store."""

    def set_session(self, access_token: str | None) -> None:
        """Act for the session behind ``access_token``. Sessionless gateways ignore it."""

    @abstractmethod
    async def current_user(self) -> str | None:
        """Id of the signed-in user, or None when there is no session."""
        ...

    @abstractmethod
    async def query(
        self,
        table: str,
        filters: tuple | list = (),
        order: tuple | list = (),
        columns: str = "*",
        limit: int | None = None,
    ) -> list[dict]:
        """
        Select rows from a table.

        Args:
            table: Table or view name.
            filters: ``Filter`` / ``AnyOf`` predicates, all of which must hold.
            order: ``Order`` entries, applied in sequence.
            columns: Column list in PostgREST select syntax.
            limit: Optional maximum number of rows.

        Returns:
            list of row dicts, in the requested order.
        """
        ...

    @abstractmethod
    async def insert(self, table: str, record: dict) -> dict:
        """Insert one row and return it as stored (with its generated id)."""
        ...

    @abstractmethod
    async def insert_many(self, table: str, records: list[dict]) -> list[dict]:
        """Insert several rows in one request; all succeed or the call fails."""
        ...

    @abstractmethod
    async def update(self, table: str, record_id, patch: dict, filters: tuple | list = ()) -> dict:
        """Patch the row with ``id == record_id`` (and matching ``filters``)."""
        ...

    @abstractmethod
    async def upsert(self, table: str, record: dict, conflict_keys: tuple | list) -> dict:
        """Insert or merge on the composite ``conflict_keys``."""
        ...

    @abstractmethod
    async def delete(self, table: str, record_id, filters: tuple | list = ()) -> bool:
        """Delete the row with ``id == record_id``; True when a row was removed."""
        ...

    @abstractmethod
    async def call_procedure(self, name: str, params: dict | None = None) -> Any:
        """Call a server-side function (dashboard analytics and other views)."""
        ...
