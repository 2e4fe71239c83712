import copy
import uuid
from datetime import datetime, timezone

import pytest

from fintrack.context import FinTrackContext
from fintrack.errors import GatewayError
from fintrack.gateway import AnyOf, Filter, Gateway

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


def _matches(row: dict, f) -> bool:
    if isinstance(f, AnyOf):
        return any(_matches(row, g) for g in f.filters)
    value = row.get(f.column)
    if f.op == "eq":
        return value == f.value
    if f.op == "neq":
        return value != f.value
    if f.op == "cs":
        return all(v in (value or []) for v in f.value)
    if f.op == "in":
        return value in f.value
    if value is None:
        return False
    if f.op == "gt":
        return value > f.value
    if f.op == "gte":
        return value >= f.value
    if f.op == "lt":
        return value < f.value
    if f.op == "lte":
        return value <= f.value
    raise ValueError(f"unsupported op {f.op}")


class MemoryGateway(Gateway):
    """In-memory Gateway that records every call it receives."""

    def __init__(self, user_id=USER_ID, tables=None, unique=None, procedures=None):
        self.user_id = user_id
        self.tables = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self.unique = unique or {}
        self.procedures = procedures or {}
        self.calls = []
        self.fail = {}
        self.session_token = None

    def set_session(self, access_token):
        self.session_token = access_token

    def _check(self, method):
        if method in self.fail:
            raise self.fail[method]

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def _check_unique(self, table, record, ignore=None):
        for column in self.unique.get(table, ()):
            for row in self.rows(table):
                if row is not ignore and row.get(column) == record.get(column):
                    raise GatewayError("duplicate key value violates unique constraint", status_code=409, code="23505")

    async def current_user(self):
        self.calls.append(("current_user",))
        self._check("current_user")
        return self.user_id

    async def query(self, table, filters=(), order=(), columns="*", limit=None):
        self.calls.append(("query", table, tuple(filters), tuple(order), limit))
        self._check("query")
        rows = [copy.deepcopy(r) for r in self.rows(table) if all(_matches(r, f) for f in filters)]
        for o in reversed(list(order)):
            present = [r for r in rows if r.get(o.column) is not None]
            missing = [r for r in rows if r.get(o.column) is None]
            present.sort(key=lambda r: r[o.column], reverse=o.descending)
            rows = present + missing
        return rows[:limit] if limit is not None else rows

    def _stored(self, table, record):
        row = copy.deepcopy(record)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self._check_unique(table, row)
        self.rows(table).append(row)
        return copy.deepcopy(row)

    async def insert(self, table, record):
        self.calls.append(("insert", table, copy.deepcopy(record)))
        self._check("insert")
        return self._stored(table, record)

    async def insert_many(self, table, records):
        self.calls.append(("insert_many", table, copy.deepcopy(list(records))))
        self._check("insert_many")
        return [self._stored(table, r) for r in records]

    async def update(self, table, record_id, patch, filters=()):
        self.calls.append(("update", table, record_id, copy.deepcopy(patch), tuple(filters)))
        self._check("update")
        for row in self.rows(table):
            if row.get("id") == record_id and all(_matches(row, f) for f in filters):
                self._check_unique(table, {**row, **patch}, ignore=row)
                row.update(copy.deepcopy(patch))
                return copy.deepcopy(row)
        raise GatewayError(f"No matching row in {table}", status_code=404, code="PGRST116")

    async def upsert(self, table, record, conflict_keys):
        self.calls.append(("upsert", table, copy.deepcopy(record), tuple(conflict_keys)))
        self._check("upsert")
        for row in self.rows(table):
            if all(row.get(k) == record.get(k) for k in conflict_keys):
                row.update(copy.deepcopy(record))
                return copy.deepcopy(row)
        return self._stored(table, record)

    async def delete(self, table, record_id, filters=()):
        self.calls.append(("delete", table, record_id, tuple(filters)))
        self._check("delete")
        before = len(self.rows(table))
        self.tables[table] = [
            r for r in self.rows(table)
            if not (r.get("id") == record_id and all(_matches(r, f) for f in filters))
        ]
        return len(self.tables[table]) < before

    async def call_procedure(self, name, params=None):
        self.calls.append(("call_procedure", name, dict(params or {})))
        self._check("call_procedure")
        return self.procedures.get(name, {"name": name, "params": params})

    def methods(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def gateway():
    return MemoryGateway()


@pytest.fixture
def ctx(gateway):
    return FinTrackContext(gateway, USER_ID)
