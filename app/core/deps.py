from __future__ import annotations
from typing import Annotated, Iterable, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose import jwt, JWTError
from pydantic import ValidationError

from app.db.session import get_db
from app.models.user import User
from app.core.config import SECRET_KEY, ALGORITHM
from app.core.security import TokenPayload

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/v1/auth/login")


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Decode the bearer access token and return the active user it names."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        data = TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    if data.type != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")

    user = db.get(User, int(data.sub))
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive or missing user")
    return user


# ---------- Role helpers (string-based) ----------

def has_any_role(user: User, allowed_names: Iterable[str]) -> bool:
    if not user.role:
        return False
    return user.role.name in set(allowed_names)


def ensure_owner_or_role(user: User, owner_id: Optional[int], *allowed_role_names: str) -> None:
    """
    Low-level guard for route handlers: the owner of a record passes,
    otherwise the user needs one of the given roles.
    """
    if owner_id is not None and owner_id == user.id:
        return
    if not has_any_role(user, allowed_role_names):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")


def require_roles(*allowed_role_names: str):
    """
    FastAPI dependency: require that the current user has ANY of the given roles.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(require_roles("admin"))])
    """
    def _checker(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if not has_any_role(current_user, allowed_role_names):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return current_user
    return _checker
