from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AdCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    shop_id: UUID = Field(alias="shopId")
    title: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    video_url: Optional[str] = Field(default=None, alias="videoUrl")


class AdToggle(BaseModel):
    id: UUID
    is_active: bool


class AdOut(BaseModel):
    ad_id: str
    title: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    is_active: bool
