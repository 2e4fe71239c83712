from typing import Literal, Optional

from pydantic import BaseModel, Field

BudgetStatus = Literal["over_budget", "warning", "on_track", "under_budget"]


class MonthlyBudget(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    category_id: Optional[str] = None
    financial_year: int
    month: int = Field(..., ge=1, le=12)
    budget_amount: float = Field(..., ge=0)
    notes: Optional[str] = None


class AnnualBudget(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    category_id: Optional[str] = None
    financial_year: int
    budget_amount: float = Field(..., ge=0)


class MonthlyBudgetCreate(BaseModel):
    category_id: str
    month: int = Field(..., ge=1, le=12)
    budget_amount: float = Field(..., ge=0)
    financial_year: Optional[int] = None
    notes: Optional[str] = None


class AnnualBudgetCreate(BaseModel):
    category_id: str
    budget_amount: float = Field(..., ge=0)
    financial_year: Optional[int] = None


class BudgetUpdate(BaseModel):
    budget_amount: Optional[float] = Field(None, ge=0)
    month: Optional[int] = Field(None, ge=1, le=12)
    notes: Optional[str] = None


class BudgetPerformance(BaseModel):
    """Row of the backend's budget_performance view."""
    user_id: Optional[str] = None
    category_id: Optional[str] = None
    financial_year: int
    period_type: str = "monthly"
    period_value: Optional[int] = None
    total_income: float = 0.0
    total_expense: float = 0.0
    budget_amount: Optional[float] = None


class BudgetUtilization(BudgetPerformance):
    utilization_percentage: float
    status: BudgetStatus
