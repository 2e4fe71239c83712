"""
goal_store.py — Financial goals and their lifecycle
Status only changes through the transition actions:
active <-> paused, active -> completed, anything -> cancelled.
"""

import logging

from fintrack.config import GOALS_DUE_SOON_DAYS
from fintrack.errors import GatewayError, ValidationError
from fintrack.gateway import eq
from fintrack.models.goal import FinancialGoal, GoalCreate, GoalUpdate, GoalWithProgress
from fintrack.services import aggregation
from fintrack.stores.base import BaseStore

logger = logging.getLogger(__name__)

TRANSITIONS = {
    "active": {"paused", "completed", "cancelled"},
    "paused": {"active", "cancelled"},
    "completed": {"cancelled"},
    "cancelled": {"cancelled"},
}


class GoalStore(BaseStore):
    table = "financial_goals"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.goals: list[FinancialGoal] = []

    async def fetch(self) -> list[FinancialGoal]:
        async with self._action("fetch goals"):
            user_id = await self._require_user()
            rows = await self.gateway.query(self.table, [eq("user_id", user_id)])
            self.goals = aggregation.sort_goals(self._parse(FinancialGoal, rows))
            return self.goals

    async def create(self, data: GoalCreate) -> FinancialGoal:
        async with self._action("create goal"):
            user_id = await self._require_user()
            record = {**data.model_dump(mode="json"), "user_id": user_id, "status": "active"}
            goal = self._parse(FinancialGoal, await self.gateway.insert(self.table, record))
            self.goals = aggregation.sort_goals(self.goals + [goal])
            return goal

    async def _patch(self, goal_id: str, patch: dict, user_id: str) -> FinancialGoal:
        row = await self.gateway.update(self.table, goal_id, patch, [eq("user_id", user_id)])
        goal = self._parse(FinancialGoal, row)
        self.goals = aggregation.sort_goals(self._replace(self.goals, goal))
        return goal

    async def update(self, goal_id: str, data: GoalUpdate) -> FinancialGoal:
        async with self._action("update goal"):
            user_id = await self._require_user()
            return await self._patch(goal_id, data.model_dump(mode="json", exclude_unset=True), user_id)

    async def delete(self, goal_id: str) -> bool:
        async with self._action("delete goal"):
            user_id = await self._require_user()
            deleted = await self.gateway.delete(self.table, goal_id, [eq("user_id", user_id)])
            self.goals = [g for g in self.goals if g.id != goal_id]
            return deleted

    async def _load(self, goal_id: str, user_id: str) -> FinancialGoal:
        rows = await self.gateway.query(self.table, [eq("id", goal_id), eq("user_id", user_id)], limit=1)
        if not rows:
            raise GatewayError("Goal not found", status_code=404)
        return self._parse(FinancialGoal, rows[0])

    async def contribute(self, goal_id: str, amount: float) -> FinancialGoal:
        """Add ``amount`` to the goal's saved total."""
        async with self._action("contribute to goal"):
            if amount <= 0:
                raise ValidationError("Contribution must be greater than 0")
            user_id = await self._require_user()
            goal = await self._load(goal_id, user_id)
            return await self._patch(goal_id, {"current_amount": goal.current_amount + amount}, user_id)

    async def _transition(self, goal_id: str, status: str) -> FinancialGoal:
        async with self._action(f"set goal {status}"):
            user_id = await self._require_user()
            goal = await self._load(goal_id, user_id)
            if status not in TRANSITIONS[goal.status]:
                raise ValidationError(f"Cannot change a {goal.status} goal to {status}")

            patch = {"status": status}
            if status == "completed":
                patch["current_amount"] = goal.target_amount
            logger.info("Goal %s: %s -> %s", goal_id, goal.status, status)
            return await self._patch(goal_id, patch, user_id)

    async def complete(self, goal_id: str) -> FinancialGoal:
        return await self._transition(goal_id, "completed")

    async def pause(self, goal_id: str) -> FinancialGoal:
        return await self._transition(goal_id, "paused")

    async def activate(self, goal_id: str) -> FinancialGoal:
        return await self._transition(goal_id, "active")

    async def cancel(self, goal_id: str) -> FinancialGoal:
        return await self._transition(goal_id, "cancelled")

    async def progress_summary(self):
        async with self._action("goal progress summary"):
            user_id = await self._require_user()
            return await self.gateway.call_procedure("get_goal_progress_summary", {"p_user_id": user_id})

    # ------------------------------------------------------------------
    def get(self, goal_id: str) -> FinancialGoal | None:
        return next((g for g in self.goals if g.id == goal_id), None)

    def by_status(self) -> dict:
        return aggregation.group_by(self.goals, "status", aggregation.GOAL_STATUSES)

    def by_priority(self) -> dict:
        return aggregation.group_by(self.goals, "priority", aggregation.GOAL_PRIORITIES)

    @property
    def active_goals(self) -> list[FinancialGoal]:
        return self.by_status()["active"]

    @property
    def completed_goals(self) -> list[FinancialGoal]:
        return self.by_status()["completed"]

    @property
    def paused_goals(self) -> list[FinancialGoal]:
        return self.by_status()["paused"]

    @property
    def high_priority_goals(self) -> list[FinancialGoal]:
        return [g for g in self.active_goals if g.priority == "high"]

    @property
    def with_progress(self) -> list[GoalWithProgress]:
        return aggregation.goals_with_progress(self.goals)

    @property
    def total_progress(self) -> float:
        return aggregation.total_progress(self.goals)

    def overdue(self) -> list[FinancialGoal]:
        return aggregation.overdue_goals(self.goals)

    def due_soon(self, days: int = GOALS_DUE_SOON_DAYS) -> list[FinancialGoal]:
        return aggregation.goals_due_soon(self.goals, days)

    def summary(self) -> dict:
        return aggregation.goal_summary(self.goals, GOALS_DUE_SOON_DAYS)
