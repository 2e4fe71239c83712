from fastapi import APIRouter
from pydantic import BaseModel

from fintrack.config import DEFAULT_RISK_PROFILE, DEFAULT_TAX_REGIME
from fintrack.services.allocation_service import describe_risk_profile, recommend_allocations
from fintrack.services.tax_service import TAX_SLABS, calculate_income_tax, compare_regimes

router = APIRouter(prefix="/api/v1/tax", tags=["Tax"])


class TaxRequest(BaseModel):
    annual_income: float
    regime: str = DEFAULT_TAX_REGIME


class CompareRequest(BaseModel):
    annual_income: float


class AllocationRequest(BaseModel):
    monthly_surplus: float
    risk_profile: str = DEFAULT_RISK_PROFILE


@router.get("/slabs")
async def tax_slabs():
    return TAX_SLABS


@router.post("/calculate")
async def calculate_tax(body: TaxRequest):
    return calculate_income_tax(body.annual_income, body.regime)


@router.post("/compare")
async def compare_tax_regimes(body: CompareRequest):
    return compare_regimes(body.annual_income)


@router.post("/allocation")
async def allocation(body: AllocationRequest):
    """Surplus allocation preview; nothing is stored."""
    return {
        "allocations": recommend_allocations(body.monthly_surplus, body.risk_profile),
        "explanation": describe_risk_profile(body.risk_profile),
    }
