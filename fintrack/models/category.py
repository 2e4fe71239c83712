from typing import Literal, Optional

from pydantic import BaseModel

CategoryType = Literal["income", "expense"]


class Category(BaseModel):
    id: Optional[str] = None
    name: str
    type: CategoryType
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    is_default: bool = False
    is_active: bool = True
    user_id: Optional[str] = None  # None for shared defaults


class CategoryCreate(BaseModel):
    name: str
    type: CategoryType
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class PaymentMethod(BaseModel):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None


class PaymentMethodCreate(BaseModel):
    name: str
    description: Optional[str] = None


class PaymentMethodUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
