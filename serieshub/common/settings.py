# serieshub/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from serieshub.common.strings.splitters import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "serieshub"
    user: str = "serieshub"
    password: str = "serieshub"
    schema_name: str = Field(default="public", alias="DB_SCHEMA")
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class ImageConfig(BaseModel):
    upload_root: Path = Path("uploads/series")
    covers_subdir: str = "img/tarjeta"

    cover_width: int = Field(190, ge=16, le=4096)
    cover_height: int = Field(285, ge=16, le=4096)
    quality: int = Field(90, ge=1, le=95)
    min_quality: int = Field(30, ge=1, le=95)
    max_size_kb: int = Field(20, ge=1)
    max_attempts: int = Field(8, ge=0)

    max_upload_bytes: int = 10 * 1024 * 1024


class ValidationConfig(BaseModel):
    name_min_length: int = 2
    name_max_length: int = 200
    year_min: int = 1900
    year_future_window: int = 5
    qualification_min: float = 0.0
    qualification_max: float = 10.0
    description_max_length: int = 5000


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "serieshub"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Search paging --------
    search_default_limit: int = 50
    search_max_limit: int = 100

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    images: ImageConfig = ImageConfig()
    validation: ValidationConfig = ValidationConfig()

    # -------- Alembic / migrations --------
    alembic_version_table_schema: str = "public"

    # -------- Testcontainers / CI toggles --------
    use_testcontainers: bool = False
    test_db_image: str = "postgres:15-alpine"
    test_database_url: str = "sqlite+pysqlite:///:memory:"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("use_testcontainers", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    # ===== Derived paths =====
    @computed_field  # type: ignore[misc]
    @property
    def covers_root(self) -> Path:
        return self.images.upload_root / self.images.covers_subdir

    # ===== Convenience: DB URL & schema =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url

    @computed_field  # type: ignore[misc]
    @property
    def db_schema(self) -> str:
        return self.db.schema_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from serieshub.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.app_env in ("development", "test"):
        s.covers_root.mkdir(parents=True, exist_ok=True)
    return s
