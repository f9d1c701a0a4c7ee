# app/core/config.py
from __future__ import annotations
from typing import Annotated, Optional, List
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, field_validator
from starlette.middleware.cors import CORSMiddleware


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # --- App ---
    app_name: str = Field("MineMap", alias="APP_NAME")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # --- Security / JWT ---
    secret_key: str = Field("dev-super-secret-change-me", alias="SECRET_KEY")
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_EXPIRE_MIN")

    # --- Admin seed ---
    seed_admin: bool = Field(True, alias="SEED_ADMIN")
    admin_email: Optional[str] = Field("admin@minemap.dev", alias="ADMIN_EMAIL")
    admin_password: str = Field("AdminPass123!", alias="ADMIN_PASSWORD")
    seed_mines: bool = Field(True, alias="SEED_MINES")  # starter catalogue into an empty directory

    # --- Database ---
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")  # full URL override
    db_user: str = Field("minemap", alias="DB_USER")
    db_password: str = Field("minemappw1234", alias="DB_PASSWORD")
    db_host: str = Field("127.0.0.1", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_name: str = Field("minemap_db", alias="DB_NAME")

    # --- CORS ---
    # NoDecode: the env value is a comma-separated string, split by the validator below
    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default=[
            "http://localhost",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        alias="ALLOWED_ORIGINS",
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, v):
        # Accept "a,b,c"; pass lists through.
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            "postgresql+psycopg2://"
            f"{self.db_user}:{quote_plus(self.db_password)}@"
            f"{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()

# --- Module-level constants for importers ---
SECRET_KEY = settings.secret_key
ALGORITHM = settings.algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes

ADMIN_EMAIL = settings.admin_email
ADMIN_PASSWORD = settings.admin_password

ALLOWED_ORIGINS = settings.allowed_origins


def configure_cors(app):
    http_origins = [o for o in settings.allowed_origins if o.startswith("http")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=http_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
