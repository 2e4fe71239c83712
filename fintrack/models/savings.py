import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel

RecommendationPriority = Literal["low", "medium", "high"]


class SavingsRecommendation(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    title: str = "Savings Recommendation"
    description: Optional[str] = None
    recommended_amount: float = 0.0
    priority: RecommendationPriority = "medium"
    category: Optional[str] = None
    is_accepted: bool = False
    is_completed: bool = False
    expires_at: Optional[dt.datetime] = None
    created_at: Optional[dt.datetime] = None


class RecommendationCreate(BaseModel):
    title: str
    recommended_amount: float
    description: Optional[str] = None
    priority: RecommendationPriority = "medium"
    category: Optional[str] = None
    expires_at: Optional[dt.datetime] = None


class RecommendationUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    recommended_amount: Optional[float] = None
    priority: Optional[RecommendationPriority] = None
    category: Optional[str] = None
    expires_at: Optional[dt.datetime] = None


class Allocation(BaseModel):
    """One bucket of a surplus allocation plan."""
    type: str
    percentage: float
    amount: float
    description: str
