"""Tests for the service container."""

import pytest

from trust_lens.domain.services.fallback_resolver import FallbackResolver
from trust_lens.domain.services.vote_aggregator import VoteAggregator
from trust_lens.infrastructure.config import TrustLensConfig
from trust_lens.infrastructure.dependencies import ServiceContainer
from trust_lens.infrastructure.storage.memory_store import InMemoryRatingStore
from trust_lens.infrastructure.storage.sqlalchemy_store import SQLAlchemyRatingStore


def test_container_wiring(memory_config):
    """Test services are built from configuration."""
    container = ServiceContainer(memory_config)

    assert isinstance(container.get_vote_aggregator(), VoteAggregator)
    assert isinstance(container.get_fallback_resolver(), FallbackResolver)
    assert isinstance(container.get("rating_store"), InMemoryRatingStore)
    assert container.get("remote_client").base_url == "http://remote.test"
    assert container.get_fallback_resolver().cache.ttl == memory_config.cache_ttl_seconds


def test_sqlalchemy_backend():
    """Test the relational store is built from the database URL."""
    container = ServiceContainer(TrustLensConfig(database_url="sqlite://"))

    assert isinstance(container.get("rating_store"), SQLAlchemyRatingStore)
    container.get("rating_store").close()


def test_injected_store(memory_config):
    """Test a prebuilt store is used as is."""
    store = InMemoryRatingStore()

    assert ServiceContainer(memory_config, store=store).get("rating_store") is store


def test_unknown_service(memory_config):
    """Test unknown service names."""
    with pytest.raises(KeyError):
        ServiceContainer(memory_config).get("nothing")


@pytest.mark.asyncio
async def test_shutdown(memory_config):
    """Test shutdown is safe before any request was made."""
    container = ServiceContainer(memory_config)

    await container.shutdown()
