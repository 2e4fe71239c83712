import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class Investment(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    name: Optional[str] = None
    type: str  # fd/rd/ppf/mutual_fund/stock/gold/...
    provider: Optional[str] = None
    initial_amount: float = Field(..., ge=0)
    current_value: float = Field(..., ge=0)
    purchase_date: Optional[dt.date] = None
    maturity_date: Optional[dt.date] = None
    interest_rate: Optional[float] = None
    is_active: bool = True
    notes: Optional[str] = None

    @property
    def returns(self) -> float:
        return self.current_value - self.initial_amount


class InvestmentCreate(BaseModel):
    type: str
    initial_amount: float = Field(..., ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    name: Optional[str] = None
    provider: Optional[str] = None
    purchase_date: Optional[dt.date] = None
    maturity_date: Optional[dt.date] = None
    interest_rate: Optional[float] = None
    is_active: bool = True
    notes: Optional[str] = None


class InvestmentUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    provider: Optional[str] = None
    initial_amount: Optional[float] = Field(None, ge=0)
    current_value: Optional[float] = Field(None, ge=0)
    maturity_date: Optional[dt.date] = None
    interest_rate: Optional[float] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class InvestmentHolding(Investment):
    portfolio_percentage: float
    returns_amount: float
