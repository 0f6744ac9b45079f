"""Test configuration and common fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from trust_lens.domain.services.external_rating_service import ExternalRatingService
from trust_lens.domain.services.lookup_cache import LookupCache
from trust_lens.domain.services.vote_aggregator import VoteAggregator
from trust_lens.infrastructure.config import TrustLensConfig
from trust_lens.infrastructure.mbfc.static_source import StaticBiasFactualSource
from trust_lens.infrastructure.remote.mock_data import MockRatingTable
from trust_lens.infrastructure.storage.memory_store import InMemoryRatingStore


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        """Initialize the clock."""
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        """Move time forward."""
        self.now += seconds


class FakeDateClock:
    """Manually advanced clock returning aware datetimes."""

    def __init__(self, start: datetime = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)):
        """Initialize the clock."""
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        """Move time forward by a ``timedelta``."""
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable epoch clock."""
    return FakeClock()


@pytest.fixture
def date_clock() -> FakeDateClock:
    """Provide a controllable datetime clock."""
    return FakeDateClock()


@pytest.fixture
def memory_store() -> InMemoryRatingStore:
    """Provide an empty in-memory rating store."""
    return InMemoryRatingStore()


@pytest.fixture
def aggregator(memory_store: InMemoryRatingStore, date_clock: FakeDateClock) -> VoteAggregator:
    """Provide a vote aggregator over the in-memory store."""
    return VoteAggregator(memory_store, clock=date_clock)


@pytest.fixture
def lookup_cache(clock: FakeClock) -> LookupCache:
    """Provide a cache driven by the fake clock."""
    return LookupCache(timer=clock)


@pytest.fixture
def external_service(clock: FakeClock) -> ExternalRatingService:
    """Provide the bias/factual service over the static table."""
    return ExternalRatingService(StaticBiasFactualSource(), LookupCache(timer=clock))


@pytest.fixture
def mock_table() -> MockRatingTable:
    """Provide the static fallback table."""
    return MockRatingTable()


@pytest.fixture
def memory_config() -> TrustLensConfig:
    """Provide configuration using the in-memory store."""
    return TrustLensConfig(store_backend="memory", remote_api_url="http://remote.test")
