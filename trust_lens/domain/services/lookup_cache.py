"""Time-boxed memoization of combined ratings keyed by domain."""

import logging
import time
from typing import Any, Callable, Dict, Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_TTL = 24 * 60 * 60  # 24 hours
DEFAULT_MAXSIZE = 10000


class LookupCache:
    """Per-domain cache valid while ``now - inserted_at < ttl``.

    Expired entries read as absent. The clock is injected so callers and tests
    control time; each owner holds its own instance.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        maxsize: int = DEFAULT_MAXSIZE,
        timer: Callable[[], float] = time.time,
    ):
        """Initialize the cache.

        Args:
            ttl: Validity window in seconds
            maxsize: Upper bound on distinct domains held
            timer: Clock returning seconds
        """
        self._ttl = ttl
        self._cache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    def get(self, domain: str) -> Optional[Any]:
        """Get the cached payload for a domain, None if absent or expired."""
        return self._cache.get(domain)

    def put(self, domain: str, payload: Any) -> None:
        """Insert or overwrite the payload for a domain, stamped now."""
        self._cache[domain] = payload

    def clear(self) -> None:
        """Drop every entry."""
        self._cache.clear()
        logger.info("🧹 Lookup cache cleared")

    def stats(self) -> Dict[str, Any]:
        """Size and domains currently held (expired entries excluded)."""
        self._cache.expire()
        domains = list(self._cache.keys())
        return {"size": len(domains), "domains": domains}

    @property
    def ttl(self) -> float:
        """Validity window in seconds."""
        return self._ttl
