from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EmployeeLoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    shop_id: UUID = Field(alias="shopId")
    pin: str = Field(min_length=1)


class EmployeeOut(BaseModel):
    employee_id: str
    name: str
    role: str


class EmployeeLoginResponse(BaseModel):
    ok: bool = True
    access_token: str
    token_type: str = "bearer"
    employee: EmployeeOut
    clocked_in: bool


class ClockRequest(BaseModel):
    action: Literal["in", "out"]


class ClockResponse(BaseModel):
    ok: bool = True
    clocked_in: bool


class StartServiceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    queue_entry_id: Optional[UUID] = Field(default=None, alias="queueEntryId")
    booking_id: Optional[UUID] = Field(default=None, alias="bookingId")
