"""Configuration settings for the Fitness Trainer app."""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/fitness_trainer/config.py
PACKAGE_ROOT = Path(__file__).parent  # src/fitness_trainer/
PROJECT_ROOT = PACKAGE_ROOT.parent.parent  # repository root

DEV_JWT_SECRET_KEY = "dev-only-fitness-trainer-secret-change-me-please"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Persistence
    database_path: Path = PROJECT_ROOT / "fitness.db"

    # JWT
    jwt_secret_key: str = DEV_JWT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_register: str = "5/minute"
    rate_limit_login: str = "10/minute"

    # Security headers
    security_csp: str | None = None
    security_enable_hsts: bool = False

    # Client / CLI
    api_base_url: str = "http://localhost:8000"

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v: str) -> str:
        """Reject secrets too short to sign HS256 tokens safely."""
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret_key == DEV_JWT_SECRET_KEY


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
