from __future__ import annotations
import logging
from typing import List, Optional

from geographiclib.geodesic import Geodesic
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.reference import COUNTRIES, DEFAULT_MINE_STATUS, MINE_STATUSES, MINE_TYPES
from app.models.mine import Mine
from app.models.mine_photo import MinePhoto
from app.schemas.coordinates import as_payload
from app.schemas.mine import MineCreate
from app.services.coordinates import GeoPosition, normalize
from app.utils.strings import norm_str

logger = logging.getLogger(__name__)

geod = Geodesic.WGS84


class MissingRequiredFields(ValueError):
    def __init__(self, fields: List[str]):
        super().__init__("Missing required fields")
        self.fields = fields


class UnknownReferenceValue(ValueError):
    pass


def _lookup(value: str, allowed: tuple, what: str) -> str:
    # case-insensitive match, stored in the canonical spelling
    for item in allowed:
        if item.lower() == value.lower():
            return item
    raise UnknownReferenceValue(f"Unknown {what}: {value}")


def resolve_position(payload: MineCreate) -> Optional[GeoPosition]:
    """
    A coordinates block (any form mode) wins over plain latitude/longitude.
    Returns None when neither is present.
    """
    if payload.coordinates is not None:
        return normalize(payload.coordinates.format, as_payload(payload.coordinates))
    if payload.latitude is None or payload.longitude is None:
        return None
    return normalize("decimal", {"latitude": payload.latitude, "longitude": payload.longitude})


def build_mine(payload: MineCreate, user_id: Optional[int]) -> Mine:
    """
    Validate a create-mine request and return an unsaved Mine.

    Raises MissingRequiredFields, UnknownReferenceValue or a CoordinateError.
    """
    name = norm_str(payload.name)
    mine_type = norm_str(payload.type)
    country = norm_str(payload.country)
    has_coords = payload.coordinates is not None or (
        payload.latitude is not None and payload.longitude is not None
    )

    missing = [
        field for field, ok in (
            ("name", name),
            ("type", mine_type),
            ("latitude", has_coords),
            ("longitude", has_coords),
            ("country", country),
        ) if not ok
    ]
    if missing:
        raise MissingRequiredFields(missing)

    position = resolve_position(payload)
    logger.debug("Resolved %r to %.6f, %.6f", name, position.latitude, position.longitude)
    status = norm_str(payload.status) or DEFAULT_MINE_STATUS

    mine = Mine(
        name=name,
        type=_lookup(mine_type, MINE_TYPES, "mine type"),
        latitude=position.latitude,
        longitude=position.longitude,
        country=_lookup(country, COUNTRIES, "country"),
        region=norm_str(payload.region),
        production=norm_str(payload.production),
        status=_lookup(status, MINE_STATUSES, "status"),
        description=norm_str(payload.description),
        website=norm_str(payload.website),
        user_id=user_id,
    )
    for idx, url in enumerate(payload.photo_urls):
        mine.photos.append(MinePhoto(url=url, order_index=idx))
    return mine


def append_photos(mine: Mine, urls: List[str]) -> None:
    start = max((p.order_index for p in mine.photos), default=-1) + 1
    for offset, url in enumerate(urls):
        mine.photos.append(MinePhoto(url=url, order_index=start + offset))


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return geod.Inverse(lat1, lon1, lat2, lon2)["s12"] / 1000.0


def query_mines(
    db: Session,
    *,
    mine_type: Optional[str] = None,
    country: Optional[str] = None,
    status: Optional[str] = None,
    q: Optional[str] = None,
    near: Optional[GeoPosition] = None,
    radius_km: Optional[float] = None,
) -> List[Mine]:
    query = db.query(Mine)

    mine_type = norm_str(mine_type)
    if mine_type and mine_type.lower() != "all":
        query = query.filter(func.lower(Mine.type) == mine_type.lower())
    if norm_str(country):
        query = query.filter(func.lower(Mine.country) == norm_str(country).lower())
    if norm_str(status):
        query = query.filter(func.lower(Mine.status) == norm_str(status).lower())
    if norm_str(q):
        like = f"%{norm_str(q)}%"
        query = query.filter(or_(
            Mine.name.ilike(like),
            Mine.region.ilike(like),
            Mine.country.ilike(like),
            Mine.description.ilike(like),
        ))

    mines = query.order_by(Mine.created_at.desc(), Mine.id.desc()).all()

    if near is not None and radius_km is not None:
        mines = [
            m for m in mines
            if distance_km(near.latitude, near.longitude, m.latitude, m.longitude) <= radius_km
        ]
    return mines
