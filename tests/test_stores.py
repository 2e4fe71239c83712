import asyncio
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from conftest import OTHER_USER_ID, USER_ID, MemoryGateway
from fintrack.context import FinTrackContext
from fintrack.errors import GatewayError, NotAuthenticatedError, ValidationError
from fintrack.gateway import AnyOf, eq
from fintrack.models import (
    CategoryCreate,
    CategoryUpdate,
    GoalCreate,
    InvestmentCreate,
    MonthlyBudgetCreate,
    PaymentMethodCreate,
    TransactionCreate,
    TransactionUpdate,
)
from fintrack.services.reference_data import DEFAULT_CATEGORIES, DEFAULT_PAYMENT_METHODS
from fintrack.stores import AuthStore, TransactionStore


def _transaction(**kw):
    data = {"amount": 250.0, "category_id": "cat-food", "payment_method": "upi", "title": "Lunch"}
    data.update(kw)
    return TransactionCreate(**data)


# ------------------------------------------------------------------
# Transactions

async def test_invalid_transaction_never_reaches_gateway(ctx, gateway):
    with pytest.raises(ValidationError) as info:
        await ctx.transactions.create(TransactionCreate(amount=0))

    assert info.value.errors == [
        "Amount must be greater than 0",
        "Category is required",
        "Payment method is required",
    ]
    assert gateway.calls == []
    assert ctx.transactions.error is not None
    assert ctx.transactions.loading is False


async def test_create_transaction_sends_user_and_defaults(ctx, gateway):
    created = await ctx.transactions.create(_transaction(title=None, description="Coffee", tags=["x", "x", "y"]))

    _, table, record = [c for c in gateway.calls if c[0] == "insert"][0]
    assert table == "transactions"
    assert record["user_id"] == USER_ID
    assert record["title"] == "Coffee"
    assert record["type"] == "expense"
    assert record["tags"] == ["x", "y"]
    assert created.id
    assert ctx.transactions.transactions == [created]
    assert ctx.transactions.total_expenses == 250


async def test_fetch_transactions_is_scoped_and_filtered(ctx, gateway):
    gateway.tables["transactions"] = [
        {"id": "1", "user_id": USER_ID, "amount": 100, "type": "expense", "date": "2026-05-01", "tags": ["food"]},
        {"id": "2", "user_id": USER_ID, "amount": 900, "type": "income", "date": "2026-06-01", "tags": []},
        {"id": "3", "user_id": OTHER_USER_ID, "amount": 50, "type": "expense", "date": "2026-05-02", "tags": []},
    ]

    all_rows = await ctx.transactions.fetch()
    assert [t.id for t in all_rows] == ["2", "1"]
    assert ctx.transactions.current_balance == 800

    tagged = await ctx.transactions.fetch(tags=["food"], date_from=date(2026, 4, 1))
    assert [t.id for t in tagged] == ["1"]


async def test_update_rejects_non_positive_amount(ctx, gateway):
    with pytest.raises(ValidationError):
        await ctx.transactions.update("1", TransactionUpdate(amount=-5))
    assert gateway.calls == []


@pytest.mark.parametrize("amount", [float("nan"), float("inf")])
async def test_non_finite_amount_never_reaches_gateway(ctx, gateway, amount):
    with pytest.raises(ValidationError) as info:
        await ctx.transactions.create(_transaction(amount=amount))
    assert info.value.errors == ["Amount must be greater than 0"]

    with pytest.raises(ValidationError):
        await ctx.transactions.update("1", TransactionUpdate(amount=amount))
    assert gateway.calls == []


@pytest.mark.parametrize("patch, message", [
    ({"category_id": None}, "Category is required"),
    ({"payment_method": ""}, "Payment method is required"),
])
async def test_update_cannot_clear_required_fields(patch, message):
    gateway = MemoryGateway(tables={"transactions": [
        {"id": "t1", "user_id": USER_ID, "amount": 100.0, "date": "2026-10-01",
         "category_id": "cat-food", "payment_method": "upi"},
    ]})
    store = TransactionStore(gateway)

    with pytest.raises(ValidationError) as info:
        await store.update("t1", TransactionUpdate(**patch))

    assert info.value.errors == [message]
    assert gateway.calls == []
    assert gateway.rows("transactions")[0]["category_id"] == "cat-food"
    assert gateway.rows("transactions")[0]["payment_method"] == "upi"


async def test_store_requires_a_session():
    store = TransactionStore(MemoryGateway(user_id=None))
    with pytest.raises(NotAuthenticatedError):
        await store.fetch()
    assert store.error == "User not authenticated"


async def test_gateway_failure_is_recorded_and_reraised(ctx, gateway):
    gateway.fail["query"] = GatewayError("boom", status_code=500)
    with pytest.raises(GatewayError):
        await ctx.transactions.fetch()
    assert ctx.transactions.error == "boom"
    assert ctx.transactions.loading is False


async def test_malformed_row_is_a_gateway_error(ctx, gateway):
    gateway.tables["transactions"] = [{"id": "1", "user_id": USER_ID, "amount": -3, "date": "2026-01-01"}]
    with pytest.raises(GatewayError):
        await ctx.transactions.fetch()


# ------------------------------------------------------------------
# Categories

async def test_category_fetch_uses_default_or_owned_filter(ctx, gateway):
    gateway.tables["categories"] = [
        {"id": "d1", "name": "Salary", "type": "income", "is_default": True, "user_id": None},
        {"id": "u1", "name": "Books", "type": "expense", "is_default": False, "user_id": USER_ID},
        {"id": "o1", "name": "Other", "type": "expense", "is_default": False, "user_id": OTHER_USER_ID},
        {"id": "u2", "name": "Art", "type": "expense", "is_default": False, "user_id": USER_ID},
    ]

    categories = await ctx.categories.fetch()

    filters = [c for c in gateway.calls if c[0] == "query"][0][2]
    assert filters == (AnyOf((eq("is_default", True), eq("user_id", USER_ID))),)
    assert [c.id for c in categories] == ["d1", "u2", "u1"]
    assert [c.id for c in ctx.categories.default_categories] == ["d1"]
    assert [c.id for c in ctx.categories.expense_categories] == ["u2", "u1"]


async def test_default_category_is_read_only(ctx, gateway):
    gateway.tables["categories"] = [
        {"id": "d1", "name": "Salary", "type": "income", "is_default": True, "user_id": None},
    ]
    with pytest.raises(ValidationError):
        await ctx.categories.update("d1", CategoryUpdate(name="Pay"))
    with pytest.raises(ValidationError):
        await ctx.categories.delete("d1")
    assert "update" not in gateway.methods()
    assert "delete" not in gateway.methods()


async def test_category_in_use_cannot_be_deleted(ctx, gateway):
    category = await ctx.categories.create(CategoryCreate(name="Books", type="expense"))
    gateway.tables["transactions"] = [
        {"id": "t1", "user_id": USER_ID, "category_id": category.id, "amount": 10, "date": "2026-01-01"},
    ]
    with pytest.raises(ValidationError, match="existing transactions"):
        await ctx.categories.delete(category.id)

    gateway.tables["transactions"] = []
    assert await ctx.categories.delete(category.id) is True
    assert ctx.categories.categories == []


async def test_seed_defaults_in_batches_of_ten(ctx, gateway):
    inserted = await ctx.categories.seed_defaults()

    batches = [c[2] for c in gateway.calls if c[0] == "insert_many"]
    assert inserted == len(DEFAULT_CATEGORIES)
    total = len(DEFAULT_CATEGORIES)
    assert [len(b) for b in batches] == [min(10, total - i) for i in range(0, total, 10)]

    assert await ctx.categories.seed_defaults() == 0
    assert len([c for c in gateway.calls if c[0] == "insert_many"]) == len(batches)


# ------------------------------------------------------------------
# Payment methods

async def test_duplicate_payment_method_is_a_validation_error():
    gateway = MemoryGateway(unique={"payment_methods": ("name",)})
    ctx = FinTrackContext(gateway, USER_ID)

    await ctx.payment_methods.create(PaymentMethodCreate(name="UPI"))
    with pytest.raises(ValidationError, match="already exists"):
        await ctx.payment_methods.create(PaymentMethodCreate(name="UPI"))


async def test_initialize_payment_methods_only_when_empty(ctx, gateway):
    added = await ctx.payment_methods.initialize_defaults()
    assert len(added) == len(DEFAULT_PAYMENT_METHODS)
    assert await ctx.payment_methods.initialize_defaults() == []


# ------------------------------------------------------------------
# Budgets

async def test_monthly_upsert_uses_composite_key(ctx, gateway):
    body = MonthlyBudgetCreate(category_id="cat-food", month=5, budget_amount=8000, financial_year=2026)
    first = await ctx.budgets.upsert_monthly(body)
    second = await ctx.budgets.upsert_monthly(body.model_copy(update={"budget_amount": 9000}))

    call = [c for c in gateway.calls if c[0] == "upsert"][0]
    assert call[3] == ("user_id", "category_id", "financial_year", "month")
    assert first.id == second.id
    assert len(gateway.tables["monthly_budgets"]) == 1
    assert ctx.budgets.total_monthly_budget == 9000


async def test_budget_utilization_from_performance_view(ctx, gateway):
    gateway.tables["budget_performance"] = [
        {"user_id": USER_ID, "financial_year": 2026, "period_type": "monthly", "period_value": 4,
         "total_income": 1000, "total_expense": 850},
        {"user_id": USER_ID, "financial_year": 2026, "period_type": "monthly", "period_value": 5,
         "total_income": 1000, "total_expense": 100},
    ]
    await ctx.budgets.fetch_performance(2026)
    assert [u.status for u in ctx.budgets.utilization] == ["warning", "on_track"]

    await ctx.budgets.fetch_performance(2026, month=5)
    assert [p.period_value for p in ctx.budgets.performance] == [5]


async def test_budget_rpc_views_pass_user_and_year(ctx, gateway):
    await ctx.budgets.category_budget_analysis("cat-food", 2025)
    assert gateway.calls[-1] == ("call_procedure", "get_category_budget_analysis", {
        "p_user_id": USER_ID, "p_financial_year": 2025, "p_category_id": "cat-food",
    })


# ------------------------------------------------------------------
# Goals

async def test_goal_lifecycle(ctx, gateway):
    goal = await ctx.goals.create(GoalCreate(title="Bike", target_amount=90_000))
    assert goal.status == "active"

    goal = await ctx.goals.contribute(goal.id, 10_000)
    assert goal.current_amount == 10_000

    goal = await ctx.goals.pause(goal.id)
    assert goal.status == "paused"
    with pytest.raises(ValidationError):
        await ctx.goals.complete(goal.id)

    goal = await ctx.goals.activate(goal.id)
    goal = await ctx.goals.complete(goal.id)
    assert goal.status == "completed"
    assert goal.current_amount == 90_000

    with pytest.raises(ValidationError):
        await ctx.goals.activate(goal.id)
    goal = await ctx.goals.cancel(goal.id)
    assert goal.status == "cancelled"


async def test_contribution_must_be_positive(ctx, gateway):
    with pytest.raises(ValidationError):
        await ctx.goals.contribute("g1", 0)
    assert gateway.calls == []


async def test_goals_are_sorted_after_fetch(ctx, gateway):
    gateway.tables["financial_goals"] = [
        {"id": "1", "user_id": USER_ID, "title": "Low", "priority": "low", "target_amount": 10},
        {"id": "2", "user_id": USER_ID, "title": "High", "priority": "high", "target_amount": 10},
    ]
    goals = await ctx.goals.fetch()
    assert [g.title for g in goals] == ["High", "Low"]
    assert [g.title for g in ctx.goals.high_priority_goals] == ["High"]


# ------------------------------------------------------------------
# Investments

async def test_investment_current_value_defaults_to_initial(ctx, gateway):
    created = await ctx.investments.create(InvestmentCreate(type="fd", initial_amount=50_000))
    assert created.current_value == 50_000


async def test_fetch_investments_annotates_portfolio_share(ctx, gateway):
    gateway.tables["investments"] = [
        {"id": "a", "user_id": USER_ID, "type": "stock", "initial_amount": 100, "current_value": 300},
        {"id": "b", "user_id": USER_ID, "type": "fd", "initial_amount": 100, "current_value": 100},
        {"id": "c", "user_id": USER_ID, "type": "fd", "initial_amount": 100, "current_value": 100, "is_active": False},
    ]
    holdings = await ctx.investments.fetch()
    shares = {h.id: h.portfolio_percentage for h in holdings}
    assert shares == {"a": pytest.approx(75), "b": pytest.approx(25), "c": 0}
    assert set(ctx.investments.by_type()) == {"stock", "fd"}


async def test_negative_investment_value_is_rejected(ctx, gateway):
    with pytest.raises(ValidationError):
        await ctx.investments.update_value("a", -1)
    assert gateway.calls == []


# ------------------------------------------------------------------
# Savings

async def test_generate_persists_one_record_per_allocation(ctx, gateway):
    allocations, stored = await ctx.savings.generate(60_000, 40_000, "moderate")

    assert len(stored) == len(allocations) == 6
    assert [r.category for r in stored] == [a.type for a in allocations]
    assert sum(r.recommended_amount for r in stored) == 20_000
    assert all(r.expires_at is not None for r in stored)
    assert ctx.savings.total_recommended == 20_000


async def test_generate_with_shortfall_stores_nothing(ctx, gateway):
    allocations, stored = await ctx.savings.generate(30_000, 45_000)
    assert stored == []
    assert allocations[0].type == "emergency_shortfall"
    assert "insert_many" not in gateway.methods()


async def test_expired_recommendation_cannot_be_accepted(ctx, gateway):
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    gateway.tables["savings_recommendations"] = [
        {"id": "r1", "user_id": USER_ID, "title": "FD", "recommended_amount": 100, "expires_at": past},
    ]
    with pytest.raises(ValidationError, match="expired"):
        await ctx.savings.accept("r1")
    assert "update" not in gateway.methods()


async def test_complete_recommendation_marks_accepted(ctx, gateway):
    _, stored = await ctx.savings.generate(20_000, 10_000, "conservative")
    rec = await ctx.savings.complete(stored[0].id)
    assert rec.is_accepted and rec.is_completed
    assert len(ctx.savings.completed) == 1


# ------------------------------------------------------------------
# Analytics

async def test_spending_trends_default_window(ctx, gateway):
    await ctx.analytics.spending_trends()
    assert gateway.calls[-1] == ("call_procedure", "get_spending_trends", {"p_user_id": USER_ID, "p_months": 12})


# ------------------------------------------------------------------
# Auth

class FakeAuth:
    def __init__(self, session=None, error=None):
        self.session = session
        self.error = error
        self.listeners = []
        self.signed_out = False

    def sign_in_with_password(self, credentials):
        if self.error:
            raise self.error
        user = SimpleNamespace(id="user-9", email=credentials["email"])
        session = SimpleNamespace(user=user, access_token="token-9")
        return SimpleNamespace(user=user, session=session)

    def sign_out(self):
        self.signed_out = True

    def get_session(self):
        return self.session

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return SimpleNamespace(unsubscribe=lambda: None)


def _auth_store(gateway, **kw):
    return AuthStore(gateway, client=SimpleNamespace(auth=FakeAuth(**kw)))


async def test_sign_in_sets_user_and_gateway_session(gateway):
    store = _auth_store(gateway)
    await store.sign_in("a@example.com", "secret")
    assert store.is_authenticated
    assert store.user_id == "user-9"
    assert gateway.session_token == "token-9"

    await store.sign_out()
    assert not store.is_authenticated
    assert gateway.session_token is None


async def test_wait_until_ready_blocks_until_initialized(gateway):
    store = _auth_store(gateway)
    waiter = asyncio.create_task(store.wait_until_ready())
    await asyncio.sleep(0)
    assert not waiter.done()

    await store.initialize()
    assert await asyncio.wait_for(waiter, timeout=1) is None


async def test_sign_in_failure_becomes_gateway_error(gateway):
    store = _auth_store(gateway, error=RuntimeError("Invalid login credentials"))
    with pytest.raises(GatewayError, match="Invalid login credentials"):
        await store.sign_in("a@example.com", "wrong")
    assert store.error == "Invalid login credentials"
    assert not store.is_authenticated


async def test_initialize_resolves_readiness_once(gateway):
    user = SimpleNamespace(id="user-3")
    store = _auth_store(gateway, session=SimpleNamespace(user=user, access_token="t3"))
    assert not store.ready

    assert (await store.initialize()).id == "user-3"
    assert await store.wait_until_ready() is user
    await store.initialize()
    assert len(store.client.auth.listeners) == 1

    store.client.auth.listeners[0]("SIGNED_OUT", None)
    assert store.user is None
    assert gateway.session_token is None
