"""
budget_store.py — Monthly and annual budgets, budget performance
Budgets are keyed by (user, category, financial year[, month]); upserts use
that key as the conflict target so re-planning a month overwrites it.
Performance rows come from the backend's precomputed budget_performance view.
"""

import logging

from fintrack.gateway import asc, desc, eq
from fintrack.models.budget import (
    AnnualBudget,
    AnnualBudgetCreate,
    BudgetPerformance,
    BudgetUpdate,
    BudgetUtilization,
    MonthlyBudget,
    MonthlyBudgetCreate,
)
from fintrack.services import aggregation
from fintrack.services.financial_year import current_financial_year
from fintrack.stores.base import BaseStore

logger = logging.getLogger(__name__)

MONTHLY_CONFLICT_KEYS = ("user_id", "category_id", "financial_year", "month")
ANNUAL_CONFLICT_KEYS = ("user_id", "category_id", "financial_year")


class BudgetStore(BaseStore):
    table = "monthly_budgets"
    annual_table = "annual_budgets"
    performance_view = "budget_performance"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.monthly_budgets: list[MonthlyBudget] = []
        self.annual_budgets: list[AnnualBudget] = []
        self.performance: list[BudgetPerformance] = []

    # ------------------------------------------------------------------
    # Monthly budgets

    async def fetch_monthly(self, financial_year: int | None = None) -> list[MonthlyBudget]:
        async with self._action("fetch monthly budgets"):
            user_id = await self._require_user()
            fy = financial_year or current_financial_year()
            rows = await self.gateway.query(
                self.table,
                [eq("user_id", user_id), eq("financial_year", fy)],
                order=[asc("month")],
            )
            self.monthly_budgets = self._parse(MonthlyBudget, rows)
            return self.monthly_budgets

    def _monthly_record(self, user_id: str, data: MonthlyBudgetCreate) -> dict:
        return {
            "user_id": user_id,
            "category_id": data.category_id,
            "financial_year": data.financial_year or current_financial_year(),
            "month": data.month,
            "budget_amount": data.budget_amount,
            "notes": data.notes,
        }

    async def create_monthly(self, data: MonthlyBudgetCreate) -> MonthlyBudget:
        async with self._action("create monthly budget"):
            user_id = await self._require_user()
            row = await self.gateway.insert(self.table, self._monthly_record(user_id, data))
            budget = self._parse(MonthlyBudget, row)
            self.monthly_budgets = self.monthly_budgets + [budget]
            return budget

    async def upsert_monthly(self, data: MonthlyBudgetCreate) -> MonthlyBudget:
        async with self._action("upsert monthly budget"):
            user_id = await self._require_user()
            row = await self.gateway.upsert(
                self.table, self._monthly_record(user_id, data), MONTHLY_CONFLICT_KEYS
            )
            budget = self._parse(MonthlyBudget, row)
            if any(b.id == budget.id for b in self.monthly_budgets):
                self.monthly_budgets = self._replace(self.monthly_budgets, budget)
            else:
                self.monthly_budgets = self.monthly_budgets + [budget]
            return budget

    async def update_monthly(self, budget_id: str, data: BudgetUpdate) -> MonthlyBudget:
        async with self._action("update monthly budget"):
            user_id = await self._require_user()
            row = await self.gateway.update(
                self.table, budget_id, data.model_dump(exclude_unset=True), [eq("user_id", user_id)]
            )
            budget = self._parse(MonthlyBudget, row)
            self.monthly_budgets = self._replace(self.monthly_budgets, budget)
            return budget

    async def delete_monthly(self, budget_id: str) -> bool:
        async with self._action("delete monthly budget"):
            user_id = await self._require_user()
            deleted = await self.gateway.delete(self.table, budget_id, [eq("user_id", user_id)])
            self.monthly_budgets = [b for b in self.monthly_budgets if b.id != budget_id]
            return deleted

    # ------------------------------------------------------------------
    # Annual budgets

    async def fetch_annual(self, financial_year: int | None = None) -> list[AnnualBudget]:
        async with self._action("fetch annual budgets"):
            user_id = await self._require_user()
            fy = financial_year or current_financial_year()
            rows = await self.gateway.query(
                self.annual_table,
                [eq("user_id", user_id), eq("financial_year", fy)],
                order=[desc("created_at")],
            )
            self.annual_budgets = self._parse(AnnualBudget, rows)
            return self.annual_budgets

    def _annual_record(self, user_id: str, data: AnnualBudgetCreate) -> dict:
        return {
            "user_id": user_id,
            "category_id": data.category_id,
            "financial_year": data.financial_year or current_financial_year(),
            "budget_amount": data.budget_amount,
        }

    async def create_annual(self, data: AnnualBudgetCreate) -> AnnualBudget:
        async with self._action("create annual budget"):
            user_id = await self._require_user()
            row = await self.gateway.insert(self.annual_table, self._annual_record(user_id, data))
            budget = self._parse(AnnualBudget, row)
            self.annual_budgets = [budget] + self.annual_budgets
            return budget

    async def upsert_annual(self, data: AnnualBudgetCreate) -> AnnualBudget:
        async with self._action("upsert annual budget"):
            user_id = await self._require_user()
            row = await self.gateway.upsert(
                self.annual_table, self._annual_record(user_id, data), ANNUAL_CONFLICT_KEYS
            )
            budget = self._parse(AnnualBudget, row)
            others = [b for b in self.annual_budgets if b.id != budget.id]
            self.annual_budgets = [budget] + others
            return budget

    # ------------------------------------------------------------------
    # Performance

    async def fetch_performance(self, financial_year: int | None = None, month: int | None = None) -> list[BudgetPerformance]:
        async with self._action("fetch budget performance"):
            user_id = await self._require_user()
            filters = [
                eq("user_id", user_id),
                eq("financial_year", financial_year or current_financial_year()),
                eq("period_type", "monthly"),
            ]
            if month:
                filters.append(eq("period_value", month))
            rows = await self.gateway.query(self.performance_view, filters, order=[asc("period_value")])
            self.performance = self._parse(BudgetPerformance, rows)
            return self.performance

    @property
    def utilization(self) -> list[BudgetUtilization]:
        return aggregation.budget_utilizations(self.performance)

    @property
    def total_monthly_budget(self) -> float:
        return aggregation.total_of(self.monthly_budgets, "budget_amount")

    @property
    def total_annual_budget(self) -> float:
        return aggregation.total_of(self.annual_budgets, "budget_amount")

    # ------------------------------------------------------------------
    # Server-side views

    async def financial_year_summary(self, financial_year: int | None = None):
        async with self._action("financial year summary"):
            user_id = await self._require_user()
            return await self.gateway.call_procedure("get_financial_year_summary", {
                "p_user_id": user_id,
                "p_financial_year": financial_year or current_financial_year(),
            })

    async def category_budget_analysis(self, category_id: str, financial_year: int | None = None):
        async with self._action("category budget analysis"):
            user_id = await self._require_user()
            return await self.gateway.call_procedure("get_category_budget_analysis", {
                "p_user_id": user_id,
                "p_financial_year": financial_year or current_financial_year(),
                "p_category_id": category_id,
            })

    async def budget_vs_actual_chart_data(self, financial_year: int | None = None):
        async with self._action("budget vs actual chart"):
            user_id = await self._require_user()
            return await self.gateway.call_procedure("get_budget_vs_actual_chart_data", {
                "p_user_id": user_id,
                "p_financial_year": financial_year or current_financial_year(),
            })
