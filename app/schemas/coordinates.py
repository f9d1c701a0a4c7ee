from __future__ import annotations
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.services.coordinates import Axis

Raw = Optional[Union[str, float]]


# --- Input pieces (one per form mode) ---
class DecimalCoordinates(BaseModel):
    format: Literal["decimal"]
    latitude: Raw = None
    longitude: Raw = None


class DmsCoordinates(BaseModel):
    # form field names are camelCase (latDegrees); snake_case also accepted
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    format: Literal["dms"]
    lat_degrees: Raw = None
    lat_minutes: Raw = None
    lat_seconds: Raw = None
    lat_direction: Optional[str] = "N"
    lng_degrees: Raw = None
    lng_minutes: Raw = None
    lng_seconds: Raw = None
    lng_direction: Optional[str] = "W"


class StringCoordinates(BaseModel):
    format: Literal["string"]
    latitude: Optional[str] = None
    longitude: Optional[str] = None


CoordinateUnion = Union[DecimalCoordinates, DmsCoordinates, StringCoordinates]

# the Literal `format` tag picks the branch
CoordinateInput = Annotated[CoordinateUnion, Field(discriminator="format")]


def as_payload(coords: BaseModel) -> dict:
    return coords.model_dump(exclude={"format"})


# --- Outputs ---
class DmsOut(BaseModel):
    degrees: int
    minutes: int
    seconds: float
    direction: str


class GeoPositionOut(BaseModel):
    latitude: float
    longitude: float


class NormalizeResponse(GeoPositionOut):
    latitude_dms: DmsOut
    longitude_dms: DmsOut


class ParseRequest(BaseModel):
    text: str
    axis: Axis


class ParseResponse(BaseModel):
    pattern: str
    dms: DmsOut
    decimal: float


class ToDmsRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class ToDmsResponse(BaseModel):
    latitude: DmsOut
    longitude: DmsOut
