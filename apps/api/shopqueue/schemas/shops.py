from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TvSettingsUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    shop_id: UUID = Field(alias="shopId")
    # loose on purpose: out-of-range or junk values are clamped, not rejected
    tv_left_percent: Optional[float | str] = None
    tv_ad_rotation_seconds: Optional[float | str] = None


class TvSettingsOut(BaseModel):
    ok: bool = True
    tv_left_percent: int
    tv_ad_rotation_seconds: int
