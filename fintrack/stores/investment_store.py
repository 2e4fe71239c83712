"""
investment_store.py — Investment holdings and portfolio views
"""

import logging

from fintrack.errors import ValidationError
from fintrack.gateway import desc, eq
from fintrack.models.investment import Investment, InvestmentCreate, InvestmentHolding, InvestmentUpdate
from fintrack.services import aggregation
from fintrack.stores.base import BaseStore

logger = logging.getLogger(__name__)


class InvestmentStore(BaseStore):
    table = "investments"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.investments: list[Investment] = []

    @property
    def holdings(self) -> list[InvestmentHolding]:
        """Every investment annotated with its share of the active portfolio."""
        return aggregation.with_portfolio_percentages(self.investments)

    async def fetch(self) -> list[InvestmentHolding]:
        async with self._action("fetch investments"):
            user_id = await self._require_user()
            rows = await self.gateway.query(self.table, [eq("user_id", user_id)], order=[desc("created_at")])
            self.investments = self._parse(Investment, rows)
            return self.holdings

    async def create(self, data: InvestmentCreate) -> Investment:
        async with self._action("create investment"):
            user_id = await self._require_user()
            record = data.model_dump(mode="json")
            if record["current_value"] is None:
                record["current_value"] = data.initial_amount
            record["user_id"] = user_id
            investment = self._parse(Investment, await self.gateway.insert(self.table, record))
            self.investments = [investment] + self.investments
            return investment

    async def _patch(self, investment_id: str, patch: dict) -> Investment:
        user_id = await self._require_user()
        row = await self.gateway.update(self.table, investment_id, patch, [eq("user_id", user_id)])
        investment = self._parse(Investment, row)
        self.investments = self._replace(self.investments, investment)
        return investment

    async def update(self, investment_id: str, data: InvestmentUpdate) -> Investment:
        async with self._action("update investment"):
            return await self._patch(investment_id, data.model_dump(mode="json", exclude_unset=True))

    async def update_value(self, investment_id: str, current_value: float) -> Investment:
        async with self._action("update investment value"):
            if current_value < 0:
                raise ValidationError("Current value cannot be negative")
            return await self._patch(investment_id, {"current_value": current_value})

    async def delete(self, investment_id: str) -> bool:
        async with self._action("delete investment"):
            user_id = await self._require_user()
            deleted = await self.gateway.delete(self.table, investment_id, [eq("user_id", user_id)])
            self.investments = [i for i in self.investments if i.id != investment_id]
            return deleted

    async def investment_summary(self):
        async with self._action("investment summary"):
            user_id = await self._require_user()
            return await self.gateway.call_procedure("get_investment_summary", {"p_user_id": user_id})

    async def investment_performance(self):
        async with self._action("investment performance"):
            user_id = await self._require_user()
            return await self.gateway.call_procedure("get_investment_performance", {"p_user_id": user_id})

    # ------------------------------------------------------------------
    def get(self, investment_id: str) -> Investment | None:
        return next((i for i in self.investments if i.id == investment_id), None)

    @property
    def active_investments(self) -> list[Investment]:
        return [i for i in self.investments if i.is_active]

    def by_type(self) -> dict:
        return aggregation.group_by(self.investments, "type")

    @property
    def total_value(self) -> float:
        return aggregation.total_of(self.investments, "current_value")

    @property
    def total_initial(self) -> float:
        return aggregation.total_of(self.investments, "initial_amount")

    @property
    def total_returns(self) -> float:
        return self.total_value - self.total_initial

    def performance(self) -> dict:
        return aggregation.investment_performance(self.investments)
