"""Runtime configuration read from the environment."""

import logging
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

RATING_MODES = ("vote", "set")


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class TrustLensConfig(BaseModel):
    """Configuration of the rating backend."""

    rating_mode: str = Field(default="vote", description="Write contract: 'vote' or 'set'")
    store_backend: str = Field(default="sqlalchemy", description="Rating store backend name")
    database_url: str = "sqlite:///./trustlens.db"
    allowed_origins: List[str] = Field(default_factory=lambda: ["chrome-extension://*"])
    remote_api_url: str = "http://localhost:3000"
    remote_timeout: float = Field(default=5.0, gt=0)
    cache_ttl_seconds: float = Field(default=86400, gt=0)
    cache_maxsize: int = Field(default=10000, gt=0)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    class Config:
        frozen = True

    @field_validator("rating_mode")
    @classmethod
    def _check_mode(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in RATING_MODES:
            raise ValueError(f"rating_mode must be one of {', '.join(RATING_MODES)}")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def allow_all_origins(self) -> bool:
        """Whether CORS accepts any origin."""
        return "*" in self.allowed_origins

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "TrustLensConfig":
        """Build the configuration from environment variables.

        Args:
            load_env_file: Load a ``.env`` file with python-dotenv first

        Returns:
            Configuration with defaults for unset variables
        """
        if load_env_file and load_dotenv():
            logger.info("📁 Environment variables loaded from .env file")

        defaults = cls()
        origins = os.getenv("ALLOWED_ORIGINS")
        return cls(
            rating_mode=os.getenv("RATING_MODE", defaults.rating_mode),
            store_backend=os.getenv("STORE_BACKEND", defaults.store_backend),
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            allowed_origins=_split_origins(origins) if origins else defaults.allowed_origins,
            remote_api_url=os.getenv("REMOTE_API_URL", defaults.remote_api_url),
            remote_timeout=float(os.getenv("REMOTE_TIMEOUT", defaults.remote_timeout)),
            cache_ttl_seconds=float(os.getenv("CACHE_TTL_SECONDS", defaults.cache_ttl_seconds)),
            cache_maxsize=int(os.getenv("CACHE_MAXSIZE", defaults.cache_maxsize)),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", defaults.port)),
        )
