"""
Service configuration, read from the environment (and `.env`) by pydantic-settings.

Each concern has its own prefix:

    STORAGE_DATA_DIR=/var/lib/matinv   STORAGE_POOL_SIZE=10
    API_PORT=8080                      API_CORS_ORIGINS='["https://ops.example"]'
    AUTH_USER_HEADER=X-Forwarded-User
    INVENTORY_DEFAULT_LEAD_TIME_DAYS=14
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the inventory database lives and how it is pooled."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "inventory.db"
    pool_size: int = Field(default=5, gt=0)
    busy_timeout: int = Field(default=30000, ge=0, description="Milliseconds to wait on a locked database")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = Field(default=8000, gt=0, lt=65536)
    debug: bool = False
    cors_origins: list[str] = ["*"]


class AuthSettings(BaseSettings):
    """The auth proxy in front of the service authenticates users; we only read its header."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    user_header: str = "X-User-Id"

    @field_validator("user_header")
    @classmethod
    def header_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_header must name an HTTP header")
        return v


class InventorySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    # Used when a material is created without its own lead time
    default_lead_time_days: int = Field(default=7, gt=0)
    history_page_size: int = Field(default=20, gt=0, le=500)
    load_sample_data: bool = True


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Materials Inventory"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def no_sample_data_in_production(self) -> "Settings":
        if self.environment == "production" and self.inventory.load_sample_data:
            raise ValueError(
                "INVENTORY_LOAD_SAMPLE_DATA must be false when ENVIRONMENT=production"
            )
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Settings are read once per process; call `reset_settings` to re-read them."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
