"""Factory for creating rating stores."""

from typing import Any, Callable, Dict

from ...domain.ports.rating_store import RatingStore
from .memory_store import InMemoryRatingStore
from .sqlalchemy_store import SQLAlchemyRatingStore


class RatingStoreFactory:
    """Registry of rating store backends.

    Backends are registered under a name and created on demand with
    backend-specific configuration.
    """

    def __init__(self):
        """Initialize the factory."""
        self._backend_registry: Dict[str, Callable[..., RatingStore]] = {}

        # Register default backends
        self.register_backend("memory", InMemoryRatingStore)
        self.register_backend("sqlalchemy", SQLAlchemyRatingStore)

    def register_backend(self, name: str, backend: Callable[..., RatingStore]) -> None:
        """Register a new store backend.

        Args:
            name: Unique identifier for the backend
            backend: Callable returning a store

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._backend_registry:
            raise ValueError(f"Backend {name} already registered")
        self._backend_registry[name] = backend

    def create_store(self, name: str, **config: Any) -> RatingStore:
        """Create a store instance.

        Args:
            name: Name of the backend
            **config: Backend-specific configuration

        Returns:
            Store instance

        Raises:
            ValueError: If backend not found
        """
        if name not in self._backend_registry:
            raise ValueError(f"Backend {name} not registered")
        return self._backend_registry[name](**config)

    @property
    def available_backends(self) -> Dict[str, bool]:
        """Registered backend names."""
        return {name: True for name in self._backend_registry}
