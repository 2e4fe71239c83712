from typing import Optional

from fastapi import APIRouter, Depends

from fintrack.auth import get_context
from fintrack.context import FinTrackContext
from fintrack.models.budget import AnnualBudgetCreate, BudgetUpdate, MonthlyBudgetCreate

router = APIRouter(prefix="/api/v1/budgets", tags=["Budgets"])


# ── Monthly ───────────────────────────────────────────────────────
@router.get("/monthly")
async def list_monthly_budgets(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.budgets.fetch_monthly(financial_year)


@router.post("/monthly")
async def create_monthly_budget(body: MonthlyBudgetCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.budgets.create_monthly(body)
    return {"status": "success", "data": result}


@router.put("/monthly")
async def upsert_monthly_budget(body: MonthlyBudgetCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.budgets.upsert_monthly(body)
    return {"status": "success", "data": result}


@router.patch("/monthly/{budget_id}")
async def update_monthly_budget(budget_id: str, body: BudgetUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.budgets.update_monthly(budget_id, body)
    return {"status": "success", "data": result}


@router.delete("/monthly/{budget_id}")
async def delete_monthly_budget(budget_id: str, ctx: FinTrackContext = Depends(get_context)):
    await ctx.budgets.delete_monthly(budget_id)
    return {"status": "success"}


# ── Annual ────────────────────────────────────────────────────────
@router.get("/annual")
async def list_annual_budgets(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.budgets.fetch_annual(financial_year)


@router.post("/annual")
async def create_annual_budget(body: AnnualBudgetCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.budgets.create_annual(body)
    return {"status": "success", "data": result}


@router.put("/annual")
async def upsert_annual_budget(body: AnnualBudgetCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.budgets.upsert_annual(body)
    return {"status": "success", "data": result}


# ── Performance and analysis ──────────────────────────────────────
@router.get("/utilization")
async def budget_utilization(
    financial_year: Optional[int] = None,
    month: Optional[int] = None,
    ctx: FinTrackContext = Depends(get_context),
):
    await ctx.budgets.fetch_performance(financial_year, month)
    return ctx.budgets.utilization


@router.get("/summary")
async def financial_year_summary(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.budgets.financial_year_summary(financial_year)


@router.get("/vs-actual")
async def budget_vs_actual(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.budgets.budget_vs_actual_chart_data(financial_year)


@router.get("/categories/{category_id}/analysis")
async def category_budget_analysis(
    category_id: str,
    financial_year: Optional[int] = None,
    ctx: FinTrackContext = Depends(get_context),
):
    return await ctx.budgets.category_budget_analysis(category_id, financial_year)
