"""
analytics_store.py — Dashboard analytics computed by server-side functions
Results are passed through as returned; only the financial year defaulting
happens here.
"""

from fintrack.services.financial_year import current_financial_year
from fintrack.stores.base import BaseStore


class AnalyticsStore(BaseStore):
    def __init__(self, gateway):
        super().__init__(gateway)
        self.dashboard = None
        self.spending_trends_data = None
        self.category_breakdown = None
        self.savings_rate = None

    async def _call(self, name: str, label: str, **params):
        async with self._action(label):
            user_id = await self._require_user()
            return await self.gateway.call_procedure(name, {"p_user_id": user_id, **params})

    async def dashboard_analytics(self, financial_year: int | None = None):
        self.dashboard = await self._call(
            "get_dashboard_analytics", "dashboard analytics",
            p_financial_year=financial_year or current_financial_year(),
        )
        return self.dashboard

    async def spending_trends(self, months: int = 12):
        self.spending_trends_data = await self._call("get_spending_trends", "spending trends", p_months=months)
        return self.spending_trends_data

    async def category_spending_breakdown(self, financial_year: int | None = None):
        self.category_breakdown = await self._call(
            "get_category_spending_breakdown", "category spending breakdown",
            p_financial_year=financial_year or current_financial_year(),
        )
        return self.category_breakdown

    async def savings_rate_analysis(self, financial_year: int | None = None):
        self.savings_rate = await self._call(
            "get_savings_rate_analysis", "savings rate analysis",
            p_financial_year=financial_year or current_financial_year(),
        )
        return self.savings_rate
