"""
tax_service.py — Indian income tax by slab
Each regime is an ordered list of contiguous bands; the last band is unbounded.
Tax is the sum over bands of the income falling inside the band times its rate.
"""

import logging
import math

from pydantic import BaseModel

from fintrack.config import DEFAULT_TAX_REGIME
from fintrack.errors import ValidationError

logger = logging.getLogger(__name__)


class TaxSlab(BaseModel):
    min: float
    max: float | None  # None: unbounded above
    rate: float
    description: str


class SlabBreakdown(BaseModel):
    min: float
    max: float | None
    rate: float
    taxable_amount: float
    tax: float


class TaxResult(BaseModel):
    regime: str
    annual_income: float
    tax: float
    effective_rate: float
    net_income: float
    slabs_used: list[SlabBreakdown]


def _slab(lo, hi, rate) -> TaxSlab:
    text = "No tax" if rate == 0 else f"{rate * 100:g}% tax"
    return TaxSlab(min=lo, max=hi, rate=rate, description=text)


TAX_SLABS: dict[str, list[TaxSlab]] = {
    "new": [
        _slab(0, 250_000, 0.0),
        _slab(250_000, 500_000, 0.05),
        _slab(500_000, 750_000, 0.10),
        _slab(750_000, 1_000_000, 0.15),
        _slab(1_000_000, 1_250_000, 0.20),
        _slab(1_250_000, 1_500_000, 0.25),
        _slab(1_500_000, None, 0.30),
    ],
    "old": [
        _slab(0, 250_000, 0.0),
        _slab(250_000, 500_000, 0.05),
        _slab(500_000, 1_000_000, 0.20),
        _slab(1_000_000, None, 0.30),
    ],
}


def slabs_for(regime: str) -> list[TaxSlab]:
    slabs = TAX_SLABS.get(regime)
    if slabs is None:
        logger.warning("Unknown tax regime %r, using 'new'", regime)
        slabs = TAX_SLABS["new"]
    return slabs


def calculate_income_tax(annual_income: float, regime: str = DEFAULT_TAX_REGIME) -> TaxResult:
    """
    Compute income tax for a year's income under the given regime.

    Args:
        annual_income: Gross annual income, must not be negative.
        regime: 'new' or 'old'. Anything else falls back to 'new'.

    Returns:
        TaxResult with the total tax, effective rate (percent), net income and
        the per-band breakdown of every band the income reaches.

    Raises:
        ValidationError: If ``annual_income`` is negative or not a finite number.
    """
    if not math.isfinite(annual_income):
        raise ValidationError("Annual income must be a finite number")
    if annual_income < 0:
        raise ValidationError("Annual income cannot be negative")

    slabs = slabs_for(regime)
    used = []
    tax = 0.0
    for slab in slabs:
        if annual_income > slab.min:
            upper = annual_income if slab.max is None else min(annual_income, slab.max)
            taxable = upper - slab.min
            band_tax = taxable * slab.rate
            tax += band_tax
            used.append(SlabBreakdown(
                min=slab.min, max=slab.max, rate=slab.rate,
                taxable_amount=taxable, tax=band_tax,
            ))

    effective_rate = (tax / annual_income) * 100 if annual_income > 0 else 0.0
    return TaxResult(
        regime=regime if regime in TAX_SLABS else "new",
        annual_income=annual_income,
        tax=tax,
        effective_rate=effective_rate,
        net_income=annual_income - tax,
        slabs_used=used,
    )


def compare_regimes(annual_income: float) -> dict:
    """Tax under both regimes and which one is cheaper."""
    results = {name: calculate_income_tax(annual_income, name) for name in TAX_SLABS}
    best = min(results.values(), key=lambda r: r.tax)
    return {
        "results": results,
        "recommended_regime": best.regime,
        "savings": max(r.tax for r in results.values()) - best.tax,
    }
