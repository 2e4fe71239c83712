from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fintrack.auth import get_context
from fintrack.context import FinTrackContext
from fintrack.models.transaction import TransactionCreate, TransactionUpdate
from fintrack.services import aggregation

router = APIRouter(prefix="/api/v1/transactions", tags=["Transactions"])


@router.get("")
async def list_transactions(
    type: Optional[str] = None,
    category_id: Optional[str] = None,
    payment_method: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    tags: Optional[list[str]] = Query(None),
    amount_min: Optional[float] = None,
    amount_max: Optional[float] = None,
    search: Optional[str] = None,
    ctx: FinTrackContext = Depends(get_context),
):
    await ctx.transactions.fetch(
        type=type,
        category_id=category_id,
        date_from=date_from,
        date_to=date_to,
        payment_method=payment_method,
        tags=tags,
    )
    # Amount range and free-text search are applied locally.
    return ctx.transactions.filtered(amount_min=amount_min, amount_max=amount_max, search=search)


@router.get("/summary")
async def transaction_summary(
    year: Optional[int] = None,
    month: Optional[int] = None,
    ctx: FinTrackContext = Depends(get_context),
):
    transactions = await ctx.transactions.fetch()
    if year and month:
        transactions = ctx.transactions.by_month(year, month)

    totals = aggregation.financial_totals(transactions)
    by_category = aggregation.group_by([t for t in transactions if t.type == "expense"], "category_id")
    return {
        **totals,
        "category_breakdown": [
            {"category_id": cid, "amount": aggregation.total_of(items, "amount")}
            for cid, items in by_category.items()
        ],
    }


@router.post("")
async def create_transaction(body: TransactionCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.transactions.create(body)
    return {"status": "success", "data": result}


@router.patch("/{transaction_id}")
async def update_transaction(transaction_id: str, body: TransactionUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.transactions.update(transaction_id, body)
    return {"status": "success", "data": result}


@router.delete("/{transaction_id}")
async def delete_transaction(transaction_id: str, ctx: FinTrackContext = Depends(get_context)):
    await ctx.transactions.delete(transaction_id)
    return {"status": "success"}
