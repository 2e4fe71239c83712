from typing import Optional

from fastapi import APIRouter, Depends

from fintrack.auth import get_context
from fintrack.context import FinTrackContext
from fintrack.services import aggregation
from fintrack.services.financial_year import current_financial_year, financial_year_bounds, financial_year_label

router = APIRouter(prefix="/api/v1/analytics", tags=["Analytics"])


@router.get("/dashboard")
async def dashboard(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.analytics.dashboard_analytics(financial_year)


@router.get("/spending-trends")
async def spending_trends(months: int = 12, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.analytics.spending_trends(months)


@router.get("/category-breakdown")
async def category_breakdown(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.analytics.category_spending_breakdown(financial_year)


@router.get("/savings-rate")
async def savings_rate(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    return await ctx.analytics.savings_rate_analysis(financial_year)


@router.get("/overview")
async def overview(financial_year: Optional[int] = None, ctx: FinTrackContext = Depends(get_context)):
    """Locally computed snapshot: year totals, goals, portfolio and open recommendations."""
    fy = financial_year or current_financial_year()
    start, end = financial_year_bounds(fy)

    transactions = await ctx.transactions.fetch(date_from=start, date_to=end)
    goals = await ctx.goals.fetch()
    await ctx.investments.fetch()
    recommendations = await ctx.savings.fetch()

    return {
        "financial_year": fy,
        "label": financial_year_label(fy),
        "totals": aggregation.financial_totals(transactions),
        "goals": aggregation.goal_summary(goals),
        "investments": ctx.investments.performance(),
        "savings": {
            "active": len(aggregation.active_recommendations(recommendations)),
            "total_recommended": aggregation.total_recommended_amount(recommendations),
        },
    }
