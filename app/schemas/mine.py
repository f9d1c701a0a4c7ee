from __future__ import annotations
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.coordinates import CoordinateInput
from app.schemas.user import UserBrief


def _check_url(v: str) -> str:
    v = (v or "").strip()
    if not v.lower().startswith(("http://", "https://")):
        raise ValueError("Photo URL must be http(s)")
    return v


# --- Shared read-only pieces (show up in outputs) ---
class PhotoOut(BaseModel):
    id: int
    url: str
    order_index: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# --- Input pieces (what the client sends) ---
class MineCreate(BaseModel):
    # required fields stay Optional here: missing ones get a single 400 from the service
    name: Optional[str] = None
    type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    coordinates: Optional[CoordinateInput] = None
    country: Optional[str] = None
    region: Optional[str] = None
    production: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    photo_urls: List[str] = Field(default_factory=list)

    @field_validator("photo_urls")
    @classmethod
    def _urls(cls, v: List[str]) -> List[str]:
        return [_check_url(u) for u in v]


class PhotosAdd(BaseModel):
    urls: List[str] = Field(min_length=1)

    @field_validator("urls")
    @classmethod
    def _urls(cls, v: List[str]) -> List[str]:
        return [_check_url(u) for u in v]


# --- Mine models ---
class MineOut(BaseModel):
    id: int
    name: str
    type: str
    latitude: float
    longitude: float
    country: str
    region: Optional[str] = None
    production: Optional[str] = None
    status: str
    description: Optional[str] = None
    website: Optional[str] = None
    user_id: Optional[int] = None

    created_at: datetime
    updated_at: datetime

    photos: List[PhotoOut] = []
    user: Optional[UserBrief] = None

    model_config = ConfigDict(from_attributes=True)


class ReferenceOut(BaseModel):
    mine_types: List[str]
    countries: List[str]
    statuses: List[str]
    coordinate_formats: List[str]
    format_examples: dict[str, List[str]]
