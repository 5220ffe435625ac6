from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shopqueue.schemas.bookings import CustomerDetails


class JoinQueueRequest(CustomerDetails):
    shop_id: UUID = Field(alias="shopId")
    service_id: UUID = Field(alias="serviceId")


class JoinQueueResponse(BaseModel):
    ok: bool = True
    customer_id: str
    queue_entry_id: str


class KioskCheckinRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    shop_id: UUID = Field(alias="shopId")
    last_name: str = Field(alias="lastName", min_length=1)
    phone: str = Field(min_length=1)


class KioskCheckinResponse(BaseModel):
    ok: bool = True
    queue_entry_id: str
