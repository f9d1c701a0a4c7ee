from __future__ import annotations
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.schemas.user import UserCreate, UserLogin, UserRead, TokenResponse
from app.models.user import User
from app.models.role import Role
from app.core.security import hash_password, verify_password, create_access_token
from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES
from app.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/auth", tags=["auth"])

DEFAULT_ROLE = "user"


def get_or_create_role(db: Session, name: str, desc: str | None = None) -> Role:
    """Fetch a role by name; if missing, create it (keeps environments resilient)."""
    role = db.query(Role).filter(Role.name == name).first()
    if not role:
        role = Role(name=name, description=desc or f"{name} role")
        db.add(role)
        db.flush()  # get role.id without full commit
    return role


def _user_role_name(user: User) -> str:
    return user.role.name if getattr(user, "role", None) else DEFAULT_ROLE


# ----------------- Endpoints -----------------
@router.post("/register", response_model=UserRead, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    # Enforce unique email manually for clearer error (DB also enforces)
    if db.query(User).filter(User.email == payload.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    role = get_or_create_role(db, DEFAULT_ROLE)
    user = User(
        email=payload.email,
        name=(payload.name or "").strip() or None,
        hashed_password=hash_password(payload.password),
        role_id=role.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


@router.post("/login", response_model=TokenResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account disabled")

    return TokenResponse(
        access_token=create_access_token(user.id, _user_role_name(user)),
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
