"""
Environment-backed service settings.

All variables are read once per process through `get_settings()`. Validation
collects every problem before failing so a misconfigured deployment reports
the complete list in one error.
"""
from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel

from booking.utils.dates import parse_duration

DEFAULT_JWT_SECRET = "dev-jwt-secret-change-me"
DEFAULT_JWT_REFRESH_SECRET = "dev-jwt-refresh-secret-change-me"

ENVIRONMENTS = ("development", "production", "test")

_POSTGRES_VARS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


class Settings(BaseModel):
    environment: str = "development"
    database_url: Optional[str] = None
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_refresh_secret: str = DEFAULT_JWT_REFRESH_SECRET
    jwt_expiration: str = "15m"
    jwt_refresh_expiration: str = "7d"
    frontend_url: Optional[str] = None
    log_level: str = "INFO"
    postal_code_api_url: Optional[str] = None
    postal_code_api_timeout: float = 5.0

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def access_token_ttl(self) -> timedelta:
        return parse_duration(self.jwt_expiration)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return parse_duration(self.jwt_refresh_expiration)

    @property
    def cors_origins(self) -> List[str]:
        origins = [
            "http://localhost",
            "http://localhost:3000",
            "http://localhost:8000",
        ]
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url.rstrip("/"))
        return origins

    def validate_environment(self) -> None:
        """Raise a single ValueError listing every invalid setting."""
        errors: List[str] = []
        if self.environment not in ENVIRONMENTS:
            errors.append(f"ENVIRONMENT must be one of {', '.join(ENVIRONMENTS)} (got '{self.environment}')")
        for name, value in (
            ("JWT_EXPIRATION", self.jwt_expiration),
            ("JWT_REFRESH_EXPIRATION", self.jwt_refresh_expiration),
        ):
            try:
                if parse_duration(value).total_seconds() <= 0:
                    errors.append(f"{name} must be a positive duration")
            except ValueError as exc:
                errors.append(f"{name}: {exc}")
        if self.postal_code_api_timeout <= 0:
            errors.append("POSTAL_CODE_API_TIMEOUT must be greater than zero")
        if self.is_production:
            if self.jwt_secret == DEFAULT_JWT_SECRET:
                errors.append("JWT_SECRET must be set in production")
            if self.jwt_refresh_secret == DEFAULT_JWT_REFRESH_SECRET:
                errors.append("JWT_REFRESH_SECRET must be set in production")
            if self.jwt_secret == self.jwt_refresh_secret:
                errors.append("JWT_SECRET and JWT_REFRESH_SECRET must differ")
            if not self.frontend_url:
                errors.append("FRONTEND_URL must be set in production")
        if errors:
            raise ValueError("Invalid configuration: " + "; ".join(errors))


def database_url_from_env() -> Optional[str]:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")
    values = {name: os.getenv(name) for name in _POSTGRES_VARS}
    if not all(values.values()):
        return None
    return (
        f"postgresql://{values['POSTGRES_USER']}:{values['POSTGRES_PASSWORD']}"
        f"@{values['POSTGRES_HOST']}:{values['POSTGRES_PORT']}/{values['POSTGRES_DB']}"
    )


def load_settings() -> Settings:
    """Build and validate settings from the current environment."""
    timeout_raw = os.getenv("POSTAL_CODE_API_TIMEOUT", "5")
    try:
        timeout = float(timeout_raw)
    except ValueError:
        raise ValueError(f"Invalid configuration: POSTAL_CODE_API_TIMEOUT must be a number (got '{timeout_raw}')")

    settings = Settings(
        environment=os.getenv("ENVIRONMENT", "development").strip().lower(),
        database_url=database_url_from_env(),
        jwt_secret=os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET),
        jwt_refresh_secret=os.getenv("JWT_REFRESH_SECRET", DEFAULT_JWT_REFRESH_SECRET),
        jwt_expiration=os.getenv("JWT_EXPIRATION", "15m"),
        jwt_refresh_expiration=os.getenv("JWT_REFRESH_EXPIRATION", "7d"),
        frontend_url=os.getenv("FRONTEND_URL") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        postal_code_api_url=os.getenv("POSTAL_CODE_API_URL") or None,
        postal_code_api_timeout=timeout,
    )
    settings.validate_environment()
    return settings


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
