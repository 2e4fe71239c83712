from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fintrack.auth import get_context
from fintrack.config import DEFAULT_RISK_PROFILE
from fintrack.context import FinTrackContext
from fintrack.models.savings import RecommendationCreate, RecommendationUpdate
from fintrack.services.allocation_service import describe_risk_profile

router = APIRouter(prefix="/api/v1/savings", tags=["Savings"])


class GenerateRequest(BaseModel):
    monthly_income: float = Field(..., ge=0)
    monthly_expenses: float = Field(..., ge=0)
    risk_profile: str = DEFAULT_RISK_PROFILE


@router.get("")
async def list_recommendations(ctx: FinTrackContext = Depends(get_context)):
    return await ctx.savings.fetch()


@router.get("/summary")
async def recommendation_summary(ctx: FinTrackContext = Depends(get_context)):
    await ctx.savings.fetch()
    return {
        "active": len(ctx.savings.active),
        "accepted": len(ctx.savings.accepted),
        "completed": len(ctx.savings.completed),
        "expired": len(ctx.savings.expired()),
        "high_priority": len(ctx.savings.high_priority),
        "total_recommended": ctx.savings.total_recommended,
    }


@router.post("/generate")
async def generate_recommendations(body: GenerateRequest, ctx: FinTrackContext = Depends(get_context)):
    allocations, stored = await ctx.savings.generate(body.monthly_income, body.monthly_expenses, body.risk_profile)
    return {
        "status": "success",
        "allocations": allocations,
        "explanation": describe_risk_profile(body.risk_profile),
        "data": stored,
    }


@router.post("")
async def create_recommendation(body: RecommendationCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.savings.create(body)
    return {"status": "success", "data": result}


@router.patch("/{recommendation_id}")
async def update_recommendation(recommendation_id: str, body: RecommendationUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.savings.update(recommendation_id, body)
    return {"status": "success", "data": result}


@router.post("/{recommendation_id}/accept")
async def accept_recommendation(recommendation_id: str, ctx: FinTrackContext = Depends(get_context)):
    return {"status": "success", "data": await ctx.savings.accept(recommendation_id)}


@router.post("/{recommendation_id}/complete")
async def complete_recommendation(recommendation_id: str, ctx: FinTrackContext = Depends(get_context)):
    return {"status": "success", "data": await ctx.savings.complete(recommendation_id)}


@router.delete("/{recommendation_id}")
async def delete_recommendation(recommendation_id: str, ctx: FinTrackContext = Depends(get_context)):
    await ctx.savings.delete(recommendation_id)
    return {"status": "success"}
