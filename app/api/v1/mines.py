from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.core.deps import ensure_owner_or_role, get_current_user
from app.db.session import get_db
from app.models.mine import Mine
from app.models.user import User
from app.schemas.mine import MineCreate, MineOut, PhotosAdd
from app.services.coordinates import GeoPosition
from app.services.mines import (
    MissingRequiredFields, UnknownReferenceValue, append_photos, build_mine, query_mines,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/mines", tags=["mines"])


def _load_mine(db: Session, mine_id: int) -> Mine:
    mine = db.get(Mine, mine_id)
    if not mine:
        raise HTTPException(status_code=404, detail="Mine not found")
    return mine


# --- Endpoints ---

@router.get("", response_model=List[MineOut])
def list_mines(
    mine_type: Optional[str] = Query(None, alias="type", description="Mineral type; 'all' disables the filter"),
    country: Optional[str] = None,
    status_: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None, description="Search in name, region, country and description"),
    near_lat: Optional[float] = Query(None, ge=-90, le=90),
    near_lon: Optional[float] = Query(None, ge=-180, le=180),
    radius_km: Optional[float] = Query(None, gt=0),
    db: Session = Depends(get_db),
):
    near_args = (near_lat, near_lon, radius_km)
    if any(a is not None for a in near_args) and not all(a is not None for a in near_args):
        raise HTTPException(status_code=422, detail="near_lat, near_lon and radius_km go together")

    near = GeoPosition(near_lat, near_lon) if near_lat is not None else None
    return query_mines(
        db,
        mine_type=mine_type,
        country=country,
        status=status_,
        q=q,
        near=near,
        radius_km=radius_km,
    )


@router.get("/{mine_id}", response_model=MineOut)
def get_mine(mine_id: int, db: Session = Depends(get_db)):
    return _load_mine(db, mine_id)


@router.post("", response_model=MineOut, status_code=201)
def create_mine(
    payload: MineCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    # CoordinateError propagates to the app-level handler (400 with a code)
    try:
        mine = build_mine(payload, user_id=user.id)
    except MissingRequiredFields as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UnknownReferenceValue as e:
        raise HTTPException(status_code=422, detail=str(e))

    db.add(mine)
    db.commit()
    db.refresh(mine)
    logger.info("Mine %s (%s) created by user %s", mine.id, mine.name, user.id)
    return mine


@router.post("/{mine_id}/photos", response_model=MineOut)
def add_photos(
    mine_id: int,
    body: PhotosAdd,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    mine = _load_mine(db, mine_id)
    ensure_owner_or_role(user, mine.user_id, "admin")

    append_photos(mine, body.urls)
    db.commit()
    db.refresh(mine)
    return mine


@router.delete("/{mine_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_mine(
    mine_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    mine = _load_mine(db, mine_id)
    ensure_owner_or_role(user, mine.user_id, "admin")

    db.delete(mine)
    db.commit()
    logger.info("Mine %s deleted by user %s", mine_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
