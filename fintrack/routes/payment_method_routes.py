from fastapi import APIRouter, Depends

from fintrack.auth import get_context
from fintrack.context import FinTrackContext
from fintrack.models.category import PaymentMethodCreate, PaymentMethodUpdate

router = APIRouter(prefix="/api/v1/payment-methods", tags=["Payment Methods"])


@router.get("")
async def list_payment_methods(ctx: FinTrackContext = Depends(get_context)):
    return await ctx.payment_methods.fetch()


@router.post("")
async def create_payment_method(body: PaymentMethodCreate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.payment_methods.create(body)
    return {"status": "success", "data": result}


@router.post("/initialize")
async def initialize_payment_methods(ctx: FinTrackContext = Depends(get_context)):
    added = await ctx.payment_methods.initialize_defaults()
    return {"status": "success", "data": added}


@router.patch("/{payment_method_id}")
async def update_payment_method(payment_method_id: str, body: PaymentMethodUpdate, ctx: FinTrackContext = Depends(get_context)):
    result = await ctx.payment_methods.update(payment_method_id, body)
    return {"status": "success", "data": result}


@router.delete("/{payment_method_id}")
async def delete_payment_method(payment_method_id: str, ctx: FinTrackContext = Depends(get_context)):
    await ctx.payment_methods.delete(payment_method_id)
    return {"status": "success"}
