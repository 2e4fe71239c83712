import json
from datetime import date

import httpx
import pytest

from fintrack.errors import GatewayError
from fintrack.gateway import asc, contains, desc, eq, gte, in_, or_
from fintrack.supabase_rest import SupabaseRestGateway, encode_filter, encode_params

URL = "https://example.supabase.co"


def make_gateway(handler, token="user-token"):
    return SupabaseRestGateway(
        url=URL, api_key="anon-key", access_token=token, transport=httpx.MockTransport(handler)
    )


def test_encode_filters():
    assert encode_filter(eq("is_default", True)) == "eq.true"
    assert encode_filter(eq("category_id", None)) == "is.null"
    assert encode_filter(gte("date", date(2026, 4, 1))) == "gte.2026-04-01"
    assert encode_filter(contains("tags", ["food", "weekly"])) == 'cs.{"food","weekly"}'
    assert encode_filter(in_("type", ["income", "expense"])) == 'in.("income","expense")'


def test_encode_params_with_or_and_order():
    params = encode_params(
        [or_(eq("is_default", True), eq("user_id", "u1")), eq("is_active", True)],
        [desc("is_default"), asc("name")],
        columns="*",
        limit=5,
    )
    assert params == [
        ("select", "*"),
        ("or", "(is_default.eq.true,user_id.eq.u1)"),
        ("is_active", "eq.true"),
        ("order", "is_default.desc,name.asc"),
        ("limit", "5"),
    ]


def test_missing_configuration_is_rejected():
    with pytest.raises(ValueError):
        SupabaseRestGateway(url="", api_key="")


async def test_query_sends_filters_and_session_headers():
    seen = {}

    def handler(request: httpx.Request):
        seen["request"] = request
        return httpx.Response(200, json=[{"id": "1"}])

    rows = await make_gateway(handler).query("transactions", [eq("user_id", "u1")], [desc("date")])

    request = seen["request"]
    assert rows == [{"id": "1"}]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/transactions"
    assert request.url.params["user_id"] == "eq.u1"
    assert request.url.params["order"] == "date.desc"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer user-token"


async def test_insert_returns_single_representation():
    def handler(request):
        body = json.loads(request.content)
        assert request.headers["Prefer"] == "return=representation"
        return httpx.Response(201, json=[{**body, "id": "new"}])

    row = await make_gateway(handler).insert("categories", {"name": "Books"})
    assert row == {"name": "Books", "id": "new"}


async def test_upsert_uses_conflict_target():
    def handler(request):
        assert request.url.params["on_conflict"] == "user_id,category_id,financial_year,month"
        assert "resolution=merge-duplicates" in request.headers["Prefer"]
        return httpx.Response(201, json=[{"id": "b1"}])

    row = await make_gateway(handler).upsert(
        "monthly_budgets", {"month": 4}, ("user_id", "category_id", "financial_year", "month")
    )
    assert row == {"id": "b1"}


async def test_update_without_match_is_not_found():
    def handler(request):
        assert request.method == "PATCH"
        assert request.url.params["id"] == "eq.g1"
        assert request.url.params["user_id"] == "eq.u1"
        return httpx.Response(200, json=[])

    with pytest.raises(GatewayError) as info:
        await make_gateway(handler).update("financial_goals", "g1", {"status": "paused"}, [eq("user_id", "u1")])
    assert info.value.status_code == 404


async def test_delete_reports_whether_a_row_went():
    gateway = make_gateway(lambda request: httpx.Response(200, json=[{"id": "x"}]))
    assert await gateway.delete("investments", "x") is True

    gateway = make_gateway(lambda request: httpx.Response(200, json=[]))
    assert await gateway.delete("investments", "x") is False


async def test_postgrest_error_becomes_gateway_error():
    def handler(request):
        return httpx.Response(409, json={"code": "23505", "message": "duplicate key value"})

    with pytest.raises(GatewayError) as info:
        await make_gateway(handler).insert("payment_methods", {"name": "UPI"})
    assert info.value.status_code == 409
    assert info.value.code == "23505"
    assert info.value.message == "duplicate key value"


async def test_network_error_becomes_gateway_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(GatewayError):
        await make_gateway(handler).query("transactions")


async def test_call_procedure_posts_params():
    def handler(request):
        assert request.url.path == "/rest/v1/rpc/get_spending_trends"
        assert json.loads(request.content) == {"p_user_id": "u1", "p_months": 12}
        return httpx.Response(200, json=[{"month": "2026-04", "total": 10}])

    result = await make_gateway(handler).call_procedure("get_spending_trends", {"p_user_id": "u1", "p_months": 12})
    assert result == [{"month": "2026-04", "total": 10}]


async def test_current_user_resolves_and_caches():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json={"id": "u1", "email": "a@example.com"})

    gateway = make_gateway(handler)
    assert await gateway.current_user() == "u1"
    assert await gateway.current_user() == "u1"
    assert calls == ["/auth/v1/user"]


async def test_current_user_with_rejected_token_is_none():
    gateway = make_gateway(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))
    assert await gateway.current_user() is None


async def test_current_user_without_token_makes_no_request():
    def handler(request):
        raise AssertionError("no request expected")

    assert await make_gateway(handler, token=None).current_user() is None
