"""
aggregation.py — Derived views over budgets, goals, investments and transactions
Everything here is pure: no I/O, inputs are never mutated, empty input gives
zero/empty results and relative order is kept unless a sort is the point.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable

from fintrack.models.budget import BudgetPerformance, BudgetUtilization
from fintrack.models.goal import FinancialGoal, GoalWithProgress
from fintrack.models.investment import Investment, InvestmentHolding
from fintrack.models.savings import SavingsRecommendation
from fintrack.models.transaction import Transaction

GOAL_STATUSES = ("active", "completed", "paused", "cancelled")
GOAL_PRIORITIES = ("high", "medium", "low")
_PRIORITY_RANK = {"high": 2, "medium": 1, "low": 0}


# ------------------------------------------------------------------
# Totals and grouping

def total_of(items: Iterable, field: str) -> float:
    """Sum of a numeric attribute across a collection (missing values count as 0)."""
    return float(sum(getattr(item, field, 0) or 0 for item in items))


def group_by(items: Iterable, field: str, keys: Iterable | None = None) -> dict:
    """
    Partition items by the value of ``field``.

    With ``keys`` the result holds exactly those keys (empty lists included)
    and items with any other value are left out; without it keys appear in
    first-seen order.
    """
    grouped: dict = {k: [] for k in keys} if keys is not None else {}
    for item in items:
        value = getattr(item, field, None)
        if keys is not None:
            if value in grouped:
                grouped[value].append(item)
        else:
            grouped.setdefault(value, []).append(item)
    return grouped


def financial_totals(transactions: Iterable[Transaction]) -> dict:
    """Income, expenses and balance. Transfers move money but are neither."""
    income = expenses = 0.0
    for t in transactions:
        if t.type == "income":
            income += t.amount
        elif t.type == "expense":
            expenses += t.amount
    return {"total_income": income, "total_expenses": expenses, "current_balance": income - expenses}


# ------------------------------------------------------------------
# Transactions

def sort_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Newest first; same-day transactions keep their relative order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def filter_transactions(
    transactions: Iterable[Transaction],
    type: str | None = None,
    category_id: str | None = None,
    payment_method: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    amount_min: float | None = None,
    amount_max: float | None = None,
    search: str | None = None,
) -> list[Transaction]:
    result = list(transactions)
    if type:
        result = [t for t in result if t.type == type]
    if category_id:
        result = [t for t in result if t.category_id == category_id]
    if payment_method:
        result = [t for t in result if t.payment_method == payment_method]
    if date_from:
        result = [t for t in result if t.date >= date_from]
    if date_to:
        result = [t for t in result if t.date <= date_to]
    if amount_min is not None:
        result = [t for t in result if t.amount >= amount_min]
    if amount_max is not None:
        result = [t for t in result if t.amount <= amount_max]
    if search:
        term = search.lower()
        result = [
            t for t in result
            if term in t.title.lower()
            or term in (t.description or "").lower()
            or any(term in tag.lower() for tag in t.tags)
        ]
    return sort_transactions(result)


def transactions_in_month(transactions: Iterable[Transaction], year: int, month: int) -> list[Transaction]:
    return [t for t in transactions if t.date.year == year and t.date.month == month]


# ------------------------------------------------------------------
# Goals

def goal_progress(goal: FinancialGoal) -> float:
    """Percent of the target reached; 0 for a zero target."""
    if goal.target_amount == 0:
        return 0.0
    return goal.current_amount / goal.target_amount * 100


def goals_with_progress(goals: Iterable[FinancialGoal]) -> list[GoalWithProgress]:
    return [GoalWithProgress(**g.model_dump(), progress_percentage=goal_progress(g)) for g in goals]


def sort_goals(goals: Iterable[FinancialGoal]) -> list[FinancialGoal]:
    """Highest priority first, then earliest target date; undated goals last."""
    return sorted(goals, key=lambda g: (
        -_PRIORITY_RANK.get(g.priority, 0),
        g.target_date is None,
        g.target_date or date.max,
    ))


def total_progress(goals: Iterable[FinancialGoal]) -> float:
    active = [g for g in goals if g.status == "active"]
    target = total_of(active, "target_amount")
    return total_of(active, "current_amount") / target * 100 if target > 0 else 0.0


def overdue_goals(goals: Iterable[FinancialGoal], today: date | None = None) -> list[FinancialGoal]:
    today = today or date.today()
    return [g for g in goals if g.status == "active" and g.target_date and g.target_date < today]


def goals_due_soon(goals: Iterable[FinancialGoal], days: int = 30, today: date | None = None) -> list[FinancialGoal]:
    today = today or date.today()
    horizon = today + timedelta(days=days)
    return [
        g for g in goals
        if g.status == "active" and g.target_date and today <= g.target_date <= horizon
    ]


def goal_summary(goals: Iterable[FinancialGoal], days: int = 30, today: date | None = None) -> dict:
    goals = list(goals)
    by_status = group_by(goals, "status", GOAL_STATUSES)
    active = by_status["active"]
    return {
        "total": len(goals),
        "active": len(active),
        "completed": len(by_status["completed"]),
        "paused": len(by_status["paused"]),
        "overdue": len(overdue_goals(goals, today)),
        "due_soon": len(goals_due_soon(goals, days, today)),
        "total_progress": total_progress(goals),
        "total_target": total_of(active, "target_amount"),
        "total_current": total_of(active, "current_amount"),
    }


# ------------------------------------------------------------------
# Budgets

def budget_utilization(row: BudgetPerformance) -> float:
    """Expense as a percentage of income; income below 1 is treated as 1."""
    return row.total_expense / max(row.total_income, 1) * 100


def budget_status(utilization_percentage: float) -> str:
    if utilization_percentage >= 100:
        return "over_budget"
    if utilization_percentage >= 80:
        return "warning"
    if utilization_percentage >= 0:
        return "on_track"
    # Only reachable for negative utilization (negative expense totals).
    return "under_budget"


def budget_utilizations(rows: Iterable[BudgetPerformance]) -> list[BudgetUtilization]:
    result = []
    for row in rows:
        pct = budget_utilization(row)
        result.append(BudgetUtilization(**row.model_dump(), utilization_percentage=pct, status=budget_status(pct)))
    return result


# ------------------------------------------------------------------
# Investments

def portfolio_percentage(investment: Investment, active_investments: Iterable[Investment]) -> float:
    """Share of the active portfolio's value held in ``investment``; 0 for an empty portfolio."""
    total = total_of(active_investments, "current_value")
    return investment.current_value / total * 100 if total > 0 else 0.0


def with_portfolio_percentages(investments: Iterable[Investment]) -> list[InvestmentHolding]:
    """Annotate every investment; inactive holdings are not part of the portfolio."""
    investments = list(investments)
    active = [i for i in investments if i.is_active]
    return [
        InvestmentHolding(
            **i.model_dump(),
            portfolio_percentage=portfolio_percentage(i, active) if i.is_active else 0.0,
            returns_amount=i.returns,
        )
        for i in investments
    ]


def investment_performance(investments: Iterable[Investment]) -> dict:
    active = [i for i in investments if i.is_active]
    total_value = total_of(active, "current_value")
    total_initial = total_of(active, "initial_amount")
    total_returns = total_value - total_initial
    return {
        "total_investments": len(active),
        "profitable": len([i for i in active if i.returns > 0]),
        "losing": len([i for i in active if i.returns < 0]),
        "total_value": total_value,
        "total_initial": total_initial,
        "total_returns": total_returns,
        "return_percentage": total_returns / total_initial * 100 if total_initial > 0 else 0.0,
    }


# ------------------------------------------------------------------
# Savings recommendations

def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def is_expired(rec: SavingsRecommendation, now: datetime | None = None) -> bool:
    if rec.expires_at is None or rec.is_completed:
        return False
    now = _aware(now or datetime.now(timezone.utc))
    return _aware(rec.expires_at) < now


def active_recommendations(recs: Iterable[SavingsRecommendation]) -> list[SavingsRecommendation]:
    return [r for r in recs if not r.is_completed]


def expired_recommendations(recs: Iterable[SavingsRecommendation], now: datetime | None = None) -> list[SavingsRecommendation]:
    return [r for r in recs if is_expired(r, now)]


def total_recommended_amount(recs: Iterable[SavingsRecommendation]) -> float:
    return total_of(active_recommendations(recs), "recommended_amount")
