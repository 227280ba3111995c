from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./lawfirm.db")

    # File uploads
    upload_dir: str = Field(default="uploads")

    # Passwords
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Appointments
    enforce_unique_slots: bool = Field(default=True)

    # CORS (comma-separated, "*" for any origin)
    cors_origins: str = Field(default="*")

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    log_format: str = Field(default="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @field_validator("database_url")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        # Hosted Postgres URLs come without a driver; the app only speaks asyncio
        if v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql://", 1)
        if v.startswith("postgresql://"):
            v = v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
