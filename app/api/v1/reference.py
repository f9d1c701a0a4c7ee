from fastapi import APIRouter

from app.core.reference import COUNTRIES, MINE_STATUSES, MINE_TYPES
from app.schemas.mine import ReferenceOut
from app.services.coordinates import FORMAT_EXAMPLES, CoordinateFormat

router = APIRouter(prefix="/v1/reference", tags=["reference"])


@router.get("", response_model=ReferenceOut)
def get_reference():
    return ReferenceOut(
        mine_types=list(MINE_TYPES),
        countries=list(COUNTRIES),
        statuses=list(MINE_STATUSES),
        coordinate_formats=[f.value for f in CoordinateFormat],
        format_examples={axis.value: list(examples) for axis, examples in FORMAT_EXAMPLES.items()},
    )
