from datetime import date
from typing import Optional

from fastapi import APIRouter

from fintrack.config import APP_NAME, APP_VERSION, CURRENCY_CODE, CURRENCY_SYMBOL
from fintrack.services.currency import format_compact, format_indian_currency
from fintrack.services.financial_year import (
    current_financial_year,
    financial_year,
    financial_year_bounds,
    financial_year_label,
)
from fintrack.services.reference_data import BANKS, DEFAULT_PAYMENT_METHODS, FINANCIAL_TERMS

router = APIRouter(prefix="/api/v1/reference", tags=["Reference"])


@router.get("/app")
async def app_info():
    return {"name": APP_NAME, "version": APP_VERSION, "currency": CURRENCY_CODE, "symbol": CURRENCY_SYMBOL}


@router.get("/banks")
async def banks():
    return BANKS


@router.get("/payment-methods")
async def payment_methods():
    return DEFAULT_PAYMENT_METHODS


@router.get("/terms")
async def financial_terms():
    return FINANCIAL_TERMS


@router.get("/financial-year")
async def resolve_financial_year(on: Optional[date] = None):
    fy = financial_year(on) if on else current_financial_year()
    start, end = financial_year_bounds(fy)
    return {"financial_year": fy, "label": financial_year_label(fy), "start": start, "end": end}


@router.get("/format")
async def format_amount(amount: float, decimals: int = 0):
    return {
        "formatted": format_indian_currency(amount, decimals),
        "compact": format_compact(amount),
    }
