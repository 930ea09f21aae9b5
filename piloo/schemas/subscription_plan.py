# piloo/schemas/subscription_plan.py
from pydantic import Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from piloo.schemas.base import ApiModel, PatchModel


class SubscriptionPlanCreate(ApiModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    max_cameras: int = Field(ge=1)
    monthly_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    yearly_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    features: Optional[List[str]] = Field(default_factory=list)
    is_popular: Optional[bool] = False
    is_active: Optional[bool] = True


class SubscriptionPlanUpdate(PatchModel):
    required_fields = ("name", "max_cameras", "monthly_price", "yearly_price")

    name: Optional[str] = None
    description: Optional[str] = None
    max_cameras: Optional[int] = Field(default=None, ge=1)
    monthly_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    yearly_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    features: Optional[List[str]] = None
    is_popular: Optional[bool] = None
    is_active: Optional[bool] = None


class SubscriptionPlanOut(ApiModel):
    id: int
    name: str
    description: Optional[str]
    max_cameras: int
    monthly_price: Decimal
    yearly_price: Decimal
    features: Optional[List[str]]
    is_popular: Optional[bool]
    is_active: Optional[bool]
    created_at: Optional[datetime]
