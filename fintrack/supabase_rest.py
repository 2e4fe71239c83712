"""
supabase_rest.py — Gateway implementation over Supabase's PostgREST API.
Tables live under /rest/v1/<table>, server functions under /rest/v1/rpc/<name>
and the signed-in user is resolved through GoTrue at /auth/v1/user.
Uses only httpx.
"""

import logging

import httpx

from fintrack.config import GATEWAY_TIMEOUT_SECONDS, SUPABASE_ANON_KEY, SUPABASE_URL
from fintrack.errors import GatewayError
from fintrack.gateway import AnyOf, Filter, Gateway

logger = logging.getLogger(__name__)


def _literal(value) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


def _quoted(value) -> str:
    text = _literal(value).replace('"', '\\"')
    return f'"{text}"'


def encode_filter(f: Filter) -> str:
    """Render the ``op.value`` half of a PostgREST predicate."""
    if f.op == "cs":
        return "cs.{" + ",".join(_quoted(v) for v in f.value) + "}"
    if f.op == "in":
        return "in.(" + ",".join(_quoted(v) for v in f.value) + ")"
    if f.op == "eq" and f.value is None:
        return "is.null"
    return f"{f.op}.{_literal(f.value)}"


def encode_params(filters=(), order=(), columns: str | None = None, limit: int | None = None) -> list[tuple[str, str]]:
    """Translate gateway filters/orderings into PostgREST query parameters."""
    params: list[tuple[str, str]] = []
    if columns:
        params.append(("select", columns))
    for f in filters:
        if isinstance(f, AnyOf):
            inner = ",".join(f"{g.column}.{encode_filter(g)}" for g in f.filters)
            params.append(("or", f"({inner})"))
        else:
            params.append((f.column, encode_filter(f)))
    if order:
        params.append(("order", ",".join(
            f"{o.column}.{'desc' if o.descending else 'asc'}" for o in order
        )))
    if limit is not None:
        params.append(("limit", str(limit)))
    return params


class SupabaseRestGateway(Gateway):
    """PostgREST/GoTrue gateway acting on behalf of one session."""

    def __init__(
        self,
        url: str = SUPABASE_URL,
        api_key: str = SUPABASE_ANON_KEY,
        access_token: str | None = None,
        timeout: float = GATEWAY_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not url or not api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment variables")
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self._transport = transport
        self._user_id: str | None = None

    def set_session(self, access_token: str | None) -> None:
        """Switch the session the gateway acts for (None signs out)."""
        self.access_token = access_token
        self._user_id = None

    def _headers(self, prefer: str | None = "return=representation") -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(self, method: str, path: str, params=None, json=None, prefer="return=representation"):
        url = f"{self.url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.request(method, url, params=params, json=json, headers=self._headers(prefer))
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._status_error(e.response) from e
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise GatewayError(f"Request to {path} failed: {e}") from e
        if not resp.content:
            return None
        return resp.json()

    @staticmethod
    def _status_error(resp: httpx.Response) -> GatewayError:
        message, code = resp.text or resp.reason_phrase, None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("msg") or body.get("error_description") or message
            code = body.get("code")
            if code is not None:
                code = str(code)
        logger.error("Gateway returned %s: %s", resp.status_code, message)
        return GatewayError(message, status_code=resp.status_code, code=code)

    @staticmethod
    def _single(result, table: str) -> dict:
        if isinstance(result, list):
            if not result:
                raise GatewayError(f"No matching row in {table}", status_code=404, code="PGRST116")
            return result[0]
        return result or {}

    # ------------------------------------------------------------------
    async def current_user(self) -> str | None:
        if not self.access_token:
            return None
        if self._user_id is not None:
            return self._user_id
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{self.url}/auth/v1/user", headers=self._headers(prefer=None))
        except httpx.HTTPError as e:
            raise GatewayError(f"Auth lookup failed: {e}") from e
        if resp.status_code in (401, 403):
            return None
        if resp.is_error:
            raise self._status_error(resp)
        self._user_id = resp.json().get("id")
        return self._user_id

    async def query(self, table, filters=(), order=(), columns="*", limit=None) -> list[dict]:
        params = encode_params(filters, order, columns, limit)
        logger.debug("select %s %s", table, params)
        return await self._request("GET", f"/rest/v1/{table}", params=params, prefer=None) or []

    async def insert(self, table, record) -> dict:
        result = await self._request("POST", f"/rest/v1/{table}", json=record)
        return self._single(result, table)

    async def insert_many(self, table, records) -> list[dict]:
        if not records:
            return []
        return await self._request("POST", f"/rest/v1/{table}", json=list(records)) or []

    async def update(self, table, record_id, patch, filters=()) -> dict:
        params = encode_params([Filter("id", "eq", record_id), *filters])
        result = await self._request("PATCH", f"/rest/v1/{table}", params=params, json=patch)
        return self._single(result, table)

    async def upsert(self, table, record, conflict_keys) -> dict:
        params = [("on_conflict", ",".join(conflict_keys))]
        result = await self._request(
            "POST", f"/rest/v1/{table}", params=params, json=record,
            prefer="return=representation,resolution=merge-duplicates",
        )
        return self._single(result, table)

    async def delete(self, table, record_id, filters=()) -> bool:
        params = encode_params([Filter("id", "eq", record_id), *filters])
        result = await self._request("DELETE", f"/rest/v1/{table}", params=params)
        return bool(result)

    async def call_procedure(self, name, params=None):
        return await self._request("POST", f"/rest/v1/rpc/{name}", json=params or {}, prefer=None)
