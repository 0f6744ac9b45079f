"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from ..domain.ports.rating_store import RatingStore
from ..domain.services.engagement_log import EngagementLog
from ..domain.services.extension_messages import ExtensionMessageHandler
from ..domain.services.external_rating_service import ExternalRatingService
from ..domain.services.fallback_resolver import FallbackResolver
from ..domain.services.lookup_cache import LookupCache
from ..domain.services.vote_aggregator import VoteAggregator
from .config import TrustLensConfig
from .mbfc.static_source import StaticBiasFactualSource
from .remote.http_rating_client import HttpRatingClient, HttpRatingClientConfig
from .remote.mock_data import MockRatingTable
from .storage.factory import RatingStoreFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(
        self,
        config: Optional[TrustLensConfig] = None,
        store: Optional[RatingStore] = None,
    ):
        """Initialize service container.

        Args:
            config: Configuration (read from the environment if omitted)
            store: Prebuilt rating store (created from config if omitted)
        """
        self._config = config or TrustLensConfig.from_env()
        self._services: Dict[str, Any] = {}
        self._setup_services(store)

    def _create_store(self) -> RatingStore:
        factory = RatingStoreFactory()
        backend = self._config.store_backend
        if backend == "sqlalchemy":
            return factory.create_store(backend, database_url=self._config.database_url)
        return factory.create_store(backend)

    def _setup_services(self, store: Optional[RatingStore]):
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        # Infrastructure adapters
        if store is None:
            store = self._create_store()
        logger.info(f"✅ Rating store ready: {type(store).__name__}")

        remote = HttpRatingClient(
            HttpRatingClientConfig(
                base_url=self._config.remote_api_url,
                timeout=self._config.remote_timeout,
            )
        )
        mbfc_source = StaticBiasFactualSource()
        mock_table = MockRatingTable()

        # Domain services
        external = ExternalRatingService(
            mbfc_source,
            LookupCache(ttl=self._config.cache_ttl_seconds, maxsize=self._config.cache_maxsize),
        )
        resolver = FallbackResolver(
            remote=remote,
            external=external,
            cache=LookupCache(
                ttl=self._config.cache_ttl_seconds, maxsize=self._config.cache_maxsize
            ),
            mock=mock_table,
        )
        engagement = EngagementLog()

        # Register services
        self._services = {
            "rating_store": store,
            "vote_aggregator": VoteAggregator(store),
            "remote_client": remote,
            "external_rating_service": external,
            "fallback_resolver": resolver,
            "mock_table": mock_table,
            "engagement_log": engagement,
            "extension_handler": ExtensionMessageHandler(resolver, engagement),
        }

        logger.info(f"✅ Service container setup completed (rating mode: {self._config.rating_mode})")

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    @property
    def config(self) -> TrustLensConfig:
        """Active configuration."""
        return self._config

    def get_vote_aggregator(self) -> VoteAggregator:
        """Get vote aggregator."""
        return self.get("vote_aggregator")

    def get_fallback_resolver(self) -> FallbackResolver:
        """Get fallback resolver."""
        return self.get("fallback_resolver")

    def get_external_rating_service(self) -> ExternalRatingService:
        """Get bias/factual rating service."""
        return self.get("external_rating_service")

    def get_extension_handler(self) -> ExtensionMessageHandler:
        """Get extension message handler."""
        return self.get("extension_handler")

    async def shutdown(self) -> None:
        """Release network and database resources."""
        await self.get("remote_client").shutdown()
        self.get("rating_store").close()
        logger.info("👋 Service container shut down")


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_vote_aggregator() -> VoteAggregator:
    """FastAPI dependency for the vote aggregator."""
    return get_service_container().get_vote_aggregator()
