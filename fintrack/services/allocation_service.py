"""
allocation_service.py — Surplus allocation by risk profile
Splits a monthly surplus across fixed investment buckets using a per-profile
percentage table. Every table sums to 100.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from fintrack.models.savings import Allocation

logger = logging.getLogger(__name__)

ALLOCATION_TYPES = (
    "emergency_fund",
    "fixed_deposit",
    "recurring_deposit",
    "debt_fund",
    "equity_fund",
    "stock",
)

ALLOCATION_TABLES: dict[str, dict[str, int]] = {
    "conservative": {
        "emergency_fund": 40,
        "fixed_deposit": 30,
        "recurring_deposit": 20,
        "debt_fund": 10,
        "equity_fund": 0,
        "stock": 0,
    },
    "moderate": {
        "emergency_fund": 20,
        "fixed_deposit": 20,
        "recurring_deposit": 15,
        "debt_fund": 25,
        "equity_fund": 15,
        "stock": 5,
    },
    "aggressive": {
        "emergency_fund": 10,
        "fixed_deposit": 10,
        "recurring_deposit": 10,
        "debt_fund": 20,
        "equity_fund": 35,
        "stock": 15,
    },
}

DESCRIPTIONS = {
    "emergency_fund": "Emergency fund for unexpected expenses (3-6 months of expenses)",
    "fixed_deposit": "Fixed Deposit - Safe investment with guaranteed returns",
    "recurring_deposit": "Recurring Deposit - Monthly savings with fixed returns",
    "debt_fund": "Debt Mutual Funds - Lower risk, stable returns",
    "equity_fund": "Equity Mutual Funds - Higher risk, higher potential returns",
    "stock": "Direct Stocks - High risk, high return potential",
}

RISK_PROFILE_DESCRIPTIONS = {
    "conservative": "Conservative approach focusing on capital preservation with stable returns",
    "moderate": "Balanced approach mixing safety and growth potential",
    "aggressive": "Growth-focused approach with higher risk for potentially higher returns",
}

SHORTFALL = "emergency_shortfall"


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def resolve_profile(risk_profile: str | None) -> str:
    if risk_profile in ALLOCATION_TABLES:
        return risk_profile
    logger.info("Unknown risk profile %r, using moderate", risk_profile)
    return "moderate"


def recommend_allocations(monthly_surplus: float, risk_profile: str = "moderate") -> list[Allocation]:
    """
    Allocate a monthly surplus across investment buckets.

    A non-positive surplus yields a single zero 'emergency_shortfall' entry.
    Otherwise one entry per bucket with a non-zero share is returned, in
    bucket order, with amounts rounded half-up to whole rupees.
    """
    if monthly_surplus <= 0:
        return [Allocation(
            type=SHORTFALL,
            percentage=0,
            amount=0,
            description="No surplus available for investment. Focus on reducing expenses.",
        )]

    table = ALLOCATION_TABLES[resolve_profile(risk_profile)]
    return [
        Allocation(
            type=kind,
            percentage=table[kind],
            amount=_round_half_up(monthly_surplus * table[kind] / 100),
            description=DESCRIPTIONS[kind],
        )
        for kind in ALLOCATION_TYPES
        if table[kind] > 0
    ]


def describe_risk_profile(risk_profile: str) -> str:
    profile = resolve_profile(risk_profile)
    return (
        f"Based on your {profile} risk profile: {RISK_PROFILE_DESCRIPTIONS[profile]}. "
        "The recommendations allocate your monthly surplus across different investment types "
        "to balance risk and return according to your preferences."
    )
