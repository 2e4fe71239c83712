from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fintrack.auth import get_context
from fintrack.config import GOALS_DUE_SOON_DAYS
from fintrack.context import FinTrackContext
from fintrack.models.goal import GoalCreate, GoalUpdate

router = APIRouter(prefix="/api/v1/goals", tags=["Goals"])


class ContributionRequest(BaseModel):
    amount: float = Field(..., gt=0)


@router.get("")
async def list_goals(ctx: FinTrackContext = Depends(get_context)):
    await ctx.goals.fetch()
    return ctx.goals.with_progress


@router.get("/summary")
async def goal_summary(ctx: FinTrackContext = Depends(get_context)):
    await ctx.goals.fetch()
    return ctx.goals.summary()


@router.get("/overdue")
async def overdue_goals(ctx: FinTrackContext = Depends(get_context)):
    await ctx.goals.fetch()
    return ctx.goals.overdue()


@router.get("/due-soon")
async def goals_due_soon(days: int = GOALS_DUE_SOON_DAYS, ctx: FinTrackContext = Depends(get_context)):
    await ctx.goals.fetch()
    return ctx.goals.due_soon(days)


@router.get("/progress")
async def goal_progress_summary(ctx: FinTrackContext = Depends(get_context)):
    return await ctx.goals.progress_summary()


@router.post("")
async def create_goal(body: GoalCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.goals.create(body)
    return {"status": "success", "data": result}


@router.patch("/{goal_id}")
async def update_goal(goal_id: str, body: GoalUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.goals.update(goal_id, body)
    return {"status": "success", "data": result}


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str, ctx: FinTrackContext = Depends(get_context)):
    await ctx.goals.delete(goal_id)
    return {"status": "success"}


@router.post("/{goal_id}/contribute")
async def contribute_to_goal(goal_id: str, body: ContributionRequest, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.goals.contribute(goal_id, body.amount)
    return {"status": "success", "data": result}


@router.post("/{goal_id}/complete")
async def complete_goal(goal_id: str, ctx: FinTrackContext = Depends(get_context)):
    return {"status": "success", "data": await ctx.goals.complete(goal_id)}


@router.post("/{goal_id}/pause")
async def pause_goal(goal_id: str, ctx: FinTrackContext = Depends(get_context)):
    return {"status": "success", "data": await ctx.goals.pause(goal_id)}


@router.post("/{goal_id}/activate")
async def activate_goal(goal_id: str, ctx: FinTrackContext = Depends(get_context)):
    return {"status": "success", "data": await ctx.goals.activate(goal_id)}


@router.post("/{goal_id}/cancel")
async def cancel_goal(goal_id: str, ctx: FinTrackContext = Depends(get_context)):
    return {"status": "success", "data": await ctx.goals.cancel(goal_id)}
