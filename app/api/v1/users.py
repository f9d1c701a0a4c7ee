from __future__ import annotations
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.deps import get_current_user, require_roles
from app.db.session import get_db
from app.models.mine import Mine
from app.models.user import User
from app.schemas.mine import MineOut
from app.schemas.user import UserRead

router = APIRouter(prefix="/v1/users", tags=["users"], dependencies=[Depends(get_current_user)])


@router.get("/me", response_model=UserRead)
def get_me(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.get("/me/mines", response_model=List[MineOut])
def list_my_mines(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return (
        db.query(Mine)
        .filter(Mine.user_id == current_user.id)
        .order_by(Mine.created_at.desc(), Mine.id.desc())
        .all()
    )


# ---- ADMIN ----
@router.get("", response_model=List[UserRead], dependencies=[Depends(require_roles("admin"))])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id).all()
