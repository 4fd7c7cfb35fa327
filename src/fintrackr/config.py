"""Runtime configuration read from the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "fintrackr-development-secret"
DEFAULT_TOKEN_EXPIRE_MINUTES = 7 * 24 * 60
DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:5500",
    "http://localhost:5000",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:5501",
    "http://127.0.0.1:5501",
)


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    database_url: Optional[str] = None
    database_path: Optional[str] = None
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == DEFAULT_SECRET_KEY


def load_settings(**overrides) -> Settings:
    """Build settings from FINTRACKR_* environment variables.

    Keyword arguments that are not None take precedence over the
    environment (used by CLI options and tests).

    Raises:
        ValueError: If FINTRACKR_TOKEN_EXPIRE_MINUTES is not an integer
    """
    expire = os.environ.get("FINTRACKR_TOKEN_EXPIRE_MINUTES")
    origins = os.environ.get("FINTRACKR_CORS_ORIGINS")

    values = {
        "database_url": os.environ.get("FINTRACKR_DATABASE_URL") or None,
        "database_path": os.environ.get("FINTRACKR_DB_PATH") or None,
        "secret_key": os.environ.get("FINTRACKR_SECRET_KEY") or DEFAULT_SECRET_KEY,
        "algorithm": os.environ.get("FINTRACKR_JWT_ALGORITHM") or "HS256",
        "token_expire_minutes": int(expire) if expire else DEFAULT_TOKEN_EXPIRE_MINUTES,
        "cors_origins": (
            tuple(o.strip() for o in origins.split(",") if o.strip())
            if origins
            else DEFAULT_CORS_ORIGINS
        ),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    settings = Settings(**values)
    if settings.uses_default_secret:
        logger.warning("FINTRACKR_SECRET_KEY is not set; using the development secret")
    return settings
