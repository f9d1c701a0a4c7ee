from typing import Annotated

from fastapi import APIRouter, Body

from app.schemas.coordinates import (
    CoordinateUnion, DmsOut, NormalizeResponse, ParseRequest, ParseResponse,
    ToDmsRequest, ToDmsResponse, as_payload,
)
from app.services.coordinates import (
    Axis, InvalidFormat, decimal_to_dms, format_hint, match_coordinate_string, normalize,
)

router = APIRouter(prefix="/v1/coordinates", tags=["coordinates"])


def _dms_out(dms) -> DmsOut:
    return DmsOut(**dms._asdict())


@router.post("/normalize", response_model=NormalizeResponse)
def normalize_coordinates(coords: Annotated[CoordinateUnion, Body(discriminator="format")]):
    """
    Validate one of the form's three coordinate modes and return decimal
    degrees plus the DMS rendering of both axes (for the live preview).
    """
    pos = normalize(coords.format, as_payload(coords))
    return NormalizeResponse(
        latitude=pos.latitude,
        longitude=pos.longitude,
        latitude_dms=_dms_out(decimal_to_dms(pos.latitude, Axis.LATITUDE)),
        longitude_dms=_dms_out(decimal_to_dms(pos.longitude, Axis.LONGITUDE)),
    )


@router.post("/parse", response_model=ParseResponse)
def parse_coordinate(req: ParseRequest):
    found = match_coordinate_string(req.text, req.axis)
    if found is None:
        hint = format_hint(req.axis)
        raise InvalidFormat(hint, axis=req.axis, hint=hint)
    pattern, dms = found
    return ParseResponse(pattern=pattern, dms=_dms_out(dms), decimal=dms.to_decimal())


@router.post("/to-dms", response_model=ToDmsResponse)
def to_dms(req: ToDmsRequest):
    return ToDmsResponse(
        latitude=_dms_out(decimal_to_dms(req.latitude, Axis.LATITUDE)),
        longitude=_dms_out(decimal_to_dms(req.longitude, Axis.LONGITUDE)),
    )
