from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fintrack.auth import get_context
from fintrack.context import FinTrackContext
from fintrack.models.investment import InvestmentCreate, InvestmentUpdate

router = APIRouter(prefix="/api/v1/investments", tags=["Investments"])


class ValueUpdate(BaseModel):
    current_value: float = Field(..., ge=0)


@router.get("")
async def list_investments(ctx: FinTrackContext = Depends(get_context)):
    return await ctx.investments.fetch()


@router.get("/performance")
async def investment_performance(ctx: FinTrackContext = Depends(get_context)):
    await ctx.investments.fetch()
    return ctx.investments.performance()


@router.get("/summary")
async def investment_summary(ctx: FinTrackContext = Depends(get_context)):
    return await ctx.investments.investment_summary()


@router.get("/performance/history")
async def investment_performance_history(ctx: FinTrackContext = Depends(get_context)):
    return await ctx.investments.investment_performance()


@router.post("")
async def create_investment(body: InvestmentCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.investments.create(body)
    return {"status": "success", "data": result}


@router.patch("/{investment_id}")
async def update_investment(investment_id: str, body: InvestmentUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.investments.update(investment_id, body)
    return {"status": "success", "data": result}


@router.put("/{investment_id}/value")
async def update_investment_value(investment_id: str, body: ValueUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.investments.update_value(investment_id, body.current_value)
    return {"status": "success", "data": result}


@router.delete("/{investment_id}")
async def delete_investment(investment_id: str, ctx: FinTrackContext = Depends(get_context)):
    await ctx.investments.delete(investment_id)
    return {"status": "success"}
