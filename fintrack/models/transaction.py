import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

TransactionType = Literal["income", "expense", "transfer"]


def unique_tags(tags: list[str] | None) -> list[str]:
    seen = []
    for tag in tags or []:
        if tag not in seen:
            seen.append(tag)
    return seen


class Transaction(BaseModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    category_id: Optional[str] = None
    title: str = "Transaction"
    description: Optional[str] = None
    amount: float = Field(..., gt=0)
    type: TransactionType = "expense"
    date: dt.date
    payment_method: Optional[str] = None  # cash/upi/debit_card/credit_card/net_banking/...
    bank_name: Optional[str] = None
    reference_number: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_recurring: bool = False
    recurring_interval: Optional[str] = None  # daily/weekly/monthly/yearly
    recurring_end_date: Optional[dt.date] = None
    created_at: Optional[dt.datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def dedupe_tags(cls, value):
        return unique_tags(value)


class TransactionCreate(BaseModel):
    # Left optional so missing fields surface as FinTrack validation messages.
    amount: Optional[float] = None
    type: TransactionType = "expense"
    category_id: Optional[str] = None
    payment_method: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    bank_name: Optional[str] = None
    reference_number: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    receipt_url: Optional[str] = None
    is_recurring: bool = False
    recurring_interval: Optional[str] = None
    recurring_end_date: Optional[dt.date] = None


class TransactionUpdate(BaseModel):
    amount: Optional[float] = None
    type: Optional[TransactionType] = None
    category_id: Optional[str] = None
    payment_method: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    tags: Optional[list[str]] = None
    is_recurring: Optional[bool] = None
    recurring_interval: Optional[str] = None
    recurring_end_date: Optional[dt.date] = None
