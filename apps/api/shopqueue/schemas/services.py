from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ServiceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    shop_id: UUID = Field(alias="shopId")
    name: str = Field(min_length=1)
    duration_minutes: int = Field(gt=0)
    slack_minutes: int = Field(default=0, ge=0)
    price: Decimal = Field(ge=0)


class ServiceUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID
    is_active: Optional[bool] = None
    name: Optional[str] = Field(default=None, min_length=1)
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    slack_minutes: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0)


class ServiceOut(BaseModel):
    service_id: str
    shop_id: str
    name: str
    duration_minutes: int
    slack_minutes: int
    price: float
    is_active: bool
