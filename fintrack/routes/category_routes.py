from typing import Optional

from fastapi import APIRouter, Depends

from fintrack.auth import get_context
from fintrack.context import FinTrackContext
from fintrack.models.category import CategoryCreate, CategoryUpdate

router = APIRouter(prefix="/api/v1/categories", tags=["Categories"])


@router.get("")
async def list_categories(type: Optional[str] = None, ctx: FinTrackContext = Depends(get_context)):
    await ctx.categories.fetch()
    if type == "income":
        return ctx.categories.income_categories
    if type == "expense":
        return ctx.categories.expense_categories
    return ctx.categories.categories


@router.post("")
async def create_category(body: CategoryCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.categories.create(body)
    return {"status": "success", "data": result}


@router.post("/seed-defaults")
async def seed_default_categories(ctx: FinTrackContext = Depends(get_context)):
    inserted = await ctx.categories.seed_defaults()
    return {"status": "success", "inserted": inserted}


@router.patch("/{category_id}")
async def update_category(category_id: str, body: CategoryUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.categories.update(category_id, body)
    return {"status": "success", "data": result}


@router.delete("/{category_id}")
async def delete_category(category_id: str, ctx: FinTrackContext = Depends(get_context)):
    await ctx.categories.delete(category_id)
    return {"status": "success"}
