"""
savings_store.py — Savings recommendations
Recommendations are generated from a monthly surplus by the allocation
recommender, then accepted and completed by the user or left to expire.
"""

import logging
from datetime import datetime, timedelta, timezone

from fintrack.config import DEFAULT_RISK_PROFILE, RECOMMENDATION_TTL_DAYS
from fintrack.errors import GatewayError, ValidationError
from fintrack.gateway import desc, eq
from fintrack.models.savings import (
    Allocation,
    RecommendationCreate,
    RecommendationUpdate,
    SavingsRecommendation,
)
from fintrack.services import aggregation
from fintrack.services.allocation_service import SHORTFALL, recommend_allocations, resolve_profile
from fintrack.stores.base import BaseStore

logger = logging.getLogger(__name__)

TITLES = {
    "emergency_fund": "Emergency Fund",
    "fixed_deposit": "Fixed Deposit",
    "recurring_deposit": "Recurring Deposit",
    "debt_fund": "Debt Mutual Funds",
    "equity_fund": "Equity Mutual Funds",
    "stock": "Direct Stocks",
}


def _expiry(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return (now + timedelta(days=RECOMMENDATION_TTL_DAYS)).isoformat()


class SavingsStore(BaseStore):
    table = "savings_recommendations"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.recommendations: list[SavingsRecommendation] = []

    async def fetch(self) -> list[SavingsRecommendation]:
        async with self._action("fetch savings recommendations"):
            user_id = await self._require_user()
            rows = await self.gateway.query(self.table, [eq("user_id", user_id)], order=[desc("created_at")])
            self.recommendations = self._parse(SavingsRecommendation, rows)
            return self.recommendations

    async def create(self, data: RecommendationCreate) -> SavingsRecommendation:
        async with self._action("create savings recommendation"):
            user_id = await self._require_user()
            record = data.model_dump(mode="json")
            record["user_id"] = user_id
            record["expires_at"] = record["expires_at"] or _expiry()
            rec = self._parse(SavingsRecommendation, await self.gateway.insert(self.table, record))
            self.recommendations = [rec] + self.recommendations
            return rec

    async def _patch(self, recommendation_id: str, patch: dict, user_id: str) -> SavingsRecommendation:
        row = await self.gateway.update(self.table, recommendation_id, patch, [eq("user_id", user_id)])
        rec = self._parse(SavingsRecommendation, row)
        self.recommendations = self._replace(self.recommendations, rec)
        return rec

    async def update(self, recommendation_id: str, data: RecommendationUpdate) -> SavingsRecommendation:
        async with self._action("update savings recommendation"):
            user_id = await self._require_user()
            return await self._patch(recommendation_id, data.model_dump(mode="json", exclude_unset=True), user_id)

    async def delete(self, recommendation_id: str) -> bool:
        async with self._action("delete savings recommendation"):
            user_id = await self._require_user()
            deleted = await self.gateway.delete(self.table, recommendation_id, [eq("user_id", user_id)])
            self.recommendations = [r for r in self.recommendations if r.id != recommendation_id]
            return deleted

    async def _live(self, recommendation_id: str, user_id: str) -> SavingsRecommendation:
        rows = await self.gateway.query(
            self.table, [eq("id", recommendation_id), eq("user_id", user_id)], limit=1
        )
        if not rows:
            raise GatewayError("Recommendation not found", status_code=404)
        rec = self._parse(SavingsRecommendation, rows[0])
        if aggregation.is_expired(rec):
            raise ValidationError("Recommendation has expired")
        return rec

    async def accept(self, recommendation_id: str) -> SavingsRecommendation:
        async with self._action("accept savings recommendation"):
            user_id = await self._require_user()
            await self._live(recommendation_id, user_id)
            return await self._patch(recommendation_id, {"is_accepted": True}, user_id)

    async def complete(self, recommendation_id: str) -> SavingsRecommendation:
        async with self._action("complete savings recommendation"):
            user_id = await self._require_user()
            await self._live(recommendation_id, user_id)
            return await self._patch(recommendation_id, {"is_accepted": True, "is_completed": True}, user_id)

    async def generate(
        self,
        monthly_income: float,
        monthly_expenses: float,
        risk_profile: str = DEFAULT_RISK_PROFILE,
    ) -> tuple[list[Allocation], list[SavingsRecommendation]]:
        """
        Allocate this month's surplus and store one recommendation per bucket.

        Args:
            monthly_income: Income for the month.
            monthly_expenses: Expenses for the month.
            risk_profile: conservative / moderate / aggressive.

        Returns:
            (allocations, stored recommendations). On a shortfall the single
            'emergency_shortfall' allocation is returned and nothing is stored.
        """
        async with self._action("generate savings recommendations"):
            if monthly_income < 0 or monthly_expenses < 0:
                raise ValidationError("Income and expenses cannot be negative")
            user_id = await self._require_user()

            profile = resolve_profile(risk_profile)
            allocations = recommend_allocations(monthly_income - monthly_expenses, profile)
            if allocations[0].type == SHORTFALL:
                logger.info("No surplus for user %s, nothing to recommend", user_id)
                return allocations, []

            expires_at = _expiry()
            records = [
                {
                    "user_id": user_id,
                    "title": TITLES.get(a.type, a.type),
                    "description": f"{a.description} ({a.percentage:g}% of surplus, {profile} profile)",
                    "recommended_amount": a.amount,
                    "priority": "high" if a.type == "emergency_fund" else "medium",
                    "category": a.type,
                    "expires_at": expires_at,
                }
                for a in allocations
            ]
            stored = self._parse(SavingsRecommendation, await self.gateway.insert_many(self.table, records))
            self.recommendations = stored + self.recommendations
            return allocations, stored

    # ------------------------------------------------------------------
    def get(self, recommendation_id: str) -> SavingsRecommendation | None:
        return next((r for r in self.recommendations if r.id == recommendation_id), None)

    @property
    def active(self) -> list[SavingsRecommendation]:
        return aggregation.active_recommendations(self.recommendations)

    @property
    def accepted(self) -> list[SavingsRecommendation]:
        return [r for r in self.recommendations if r.is_accepted]

    @property
    def completed(self) -> list[SavingsRecommendation]:
        return [r for r in self.recommendations if r.is_completed]

    @property
    def high_priority(self) -> list[SavingsRecommendation]:
        return [r for r in self.active if r.priority == "high"]

    def expired(self) -> list[SavingsRecommendation]:
        return aggregation.expired_recommendations(self.recommendations)

    def by_category(self) -> dict:
        return aggregation.group_by(self.recommendations, "category")

    @property
    def total_recommended(self) -> float:
        return aggregation.total_recommended_amount(self.recommendations)
