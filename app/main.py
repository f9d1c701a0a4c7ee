from __future__ import annotations
import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.core.config import settings, configure_cors, ADMIN_EMAIL, ADMIN_PASSWORD
from app.core.exceptions import (
    coordinate_exception_handler, unhandled_exception_handler, validation_exception_handler,
)
from app.core.logging import configure_logging
from app.core.security import hash_password
from app.db.session import init_models, SessionLocal
from app.models.user import User
from app.services.catalogue import seed_catalogue
from app.services.coordinates import CoordinateError

# Routers (import once, include once)
from app.api.v1.auth import router as auth_router, get_or_create_role
from app.api.v1.coordinates import router as coordinates_router
from app.api.v1.mines import router as mines_router
from app.api.v1.reference import router as reference_router
from app.api.v1.users import router as users_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
configure_cors(app)

# Global exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(CoordinateError, coordinate_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.on_event("startup")
def on_startup():
    """
    - Create tables
    - Seed roles (user/admin)
    - Ensure a first admin user using ADMIN_* settings (idempotent)
    - Load the starter mine catalogue into an empty directory (SEED_MINES)
    """
    init_models()

    with SessionLocal() as db:
        get_or_create_role(db, "user", "Default role for new users")
        admin_role = get_or_create_role(db, "admin", "Administrator role")

        admin_user = None
        admin_email = (ADMIN_EMAIL or "").strip().lower()
        if settings.seed_admin and admin_email:
            admin_user = db.query(User).filter(User.email == admin_email).first()
            if not admin_user:
                admin_user = User(
                    email=admin_email,
                    name="Admin",
                    hashed_password=hash_password(ADMIN_PASSWORD),
                    role_id=admin_role.id,
                    is_active=True,
                )
                db.add(admin_user)
                logger.info("Seeded admin user %s", admin_email)

        db.commit()

        if settings.seed_mines:
            seed_catalogue(db, admin_user.id if admin_user else None)


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(mines_router)
app.include_router(coordinates_router)
app.include_router(reference_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
