from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CustomerDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)
    phone: str = Field(min_length=1)


class BookingCreate(CustomerDetails):
    shop_id: UUID = Field(alias="shopId")
    service_id: UUID = Field(alias="serviceId")
    start_at: datetime = Field(alias="startAt")  # ISO8601; naive values are read as UTC


class BookingOut(BaseModel):
    booking_id: str
    shop_id: str
    service_id: str
    customer_id: str
    start_at: datetime
    end_at: datetime
    status: str


class BookingResponse(BaseModel):
    ok: bool = True
    booking: BookingOut
