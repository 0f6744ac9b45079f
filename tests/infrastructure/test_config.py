"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError
from unittest.mock import patch

from trust_lens.infrastructure.config import TrustLensConfig


def test_defaults():
    """Test defaults with an empty environment."""
    with patch.dict("os.environ", {}, clear=True):
        config = TrustLensConfig.from_env(load_env_file=False)

    assert config.rating_mode == "vote"
    assert config.store_backend == "sqlalchemy"
    assert config.database_url == "sqlite:///./trustlens.db"
    assert config.allowed_origins == ["chrome-extension://*"]
    assert config.remote_timeout == 5.0
    assert config.cache_ttl_seconds == 86400
    assert config.port == 3000


def test_environment_overrides():
    """Test every variable is read."""
    env = {
        "RATING_MODE": "SET",
        "STORE_BACKEND": "memory",
        "DATABASE_URL": "postgresql://db/ratings",
        "ALLOWED_ORIGINS": "https://a.example, chrome-extension://abc ,",
        "REMOTE_API_URL": "https://api.example",
        "REMOTE_TIMEOUT": "2.5",
        "CACHE_TTL_SECONDS": "60",
        "CACHE_MAXSIZE": "5",
        "LOG_LEVEL": "debug",
        "HOST": "127.0.0.1",
        "PORT": "8080",
    }
    with patch.dict("os.environ", env, clear=True):
        config = TrustLensConfig.from_env(load_env_file=False)

    assert config.rating_mode == "set"
    assert config.store_backend == "memory"
    assert config.allowed_origins == ["https://a.example", "chrome-extension://abc"]
    assert config.remote_timeout == 2.5
    assert config.cache_maxsize == 5
    assert config.log_level == "DEBUG"
    assert config.port == 8080
    assert config.allow_all_origins is False


def test_invalid_rating_mode():
    """Test unknown modes are rejected."""
    with pytest.raises(ValidationError):
        TrustLensConfig(rating_mode="tally")


def test_wildcard_origin():
    """Test the allow-all origin flag."""
    assert TrustLensConfig(allowed_origins=["*"]).allow_all_origins is True
