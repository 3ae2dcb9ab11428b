"""Application configuration and settings management."""
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".." / ".env"),
        env_file_encoding="utf-8",
        env_prefix="ACCOUNTS_",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = "Account Service"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./accounts.db"

    # Access control
    public_prefixes: Annotated[List[str], NoDecode] = ["/api/users"]
    basic_auth_realm: str = "accounts"
    csrf_protection: bool = False
    csrf_secret_key: str = "change-me"
    csrf_token_max_age_seconds: int = 60 * 60

    # Representation
    expose_password_hash: bool = True

    allowed_origins: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8081",
        "http://127.0.0.1:8081",
    ]

    @field_validator("allowed_origins", "public_prefixes", mode="before")
    @classmethod
    def _split_csv(cls, value: List[str] | str) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
