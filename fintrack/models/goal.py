import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field

GoalPriority = Literal["low", "medium", "high"]
GoalStatus = Literal["active", "paused", "completed", "cancelled"]


class FinancialGoal(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    target_amount: float = Field(0.0, ge=0)
    current_amount: float = 0.0
    target_date: Optional[dt.date] = None
    priority: GoalPriority = "medium"
    status: GoalStatus = "active"
    auto_contribute: bool = False
    contribution_amount: float = 0.0
    contribution_frequency: str = "monthly"


class GoalCreate(BaseModel):
    title: str
    target_amount: float = Field(..., ge=0)
    current_amount: float = 0.0
    target_date: Optional[dt.date] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    priority: GoalPriority = "medium"
    auto_contribute: bool = False
    contribution_amount: float = 0.0
    contribution_frequency: str = "monthly"


class GoalUpdate(BaseModel):
    # Status is changed only through the transition actions.
    title: Optional[str] = None
    description: Optional[str] = None
    target_amount: Optional[float] = Field(None, ge=0)
    current_amount: Optional[float] = None
    target_date: Optional[dt.date] = None
    priority: Optional[GoalPriority] = None
    auto_contribute: Optional[bool] = None
    contribution_amount: Optional[float] = None
    contribution_frequency: Optional[str] = None


class GoalWithProgress(FinancialGoal):
    progress_percentage: float
