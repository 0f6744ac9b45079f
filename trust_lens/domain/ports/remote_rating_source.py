"""Protocol for the live remote rating source."""

from typing import Any, Dict, List, Optional, Protocol

from ..models.rating import DomainRating, VoteOutcome


class RemoteRatingSource(Protocol):
    """Live backend holding community ratings.

    Every failure (transport error, timeout, non-success status) must surface
    as ``RemoteUnavailableError`` so callers can fall through to local data.
    """

    async def fetch_rating(self, domain: str) -> Optional[DomainRating]:
        """Get the rating of a domain, None when the backend has none."""
        ...

    async def submit_vote(
        self,
        domain: str,
        rating: int,
        user_id: Optional[str] = None,
    ) -> VoteOutcome:
        """Submit a vote for a domain."""
        ...

    async def top_rated(self, limit: int = 5) -> List[DomainRating]:
        """Highest rated domains."""
        ...

    async def lowest_rated(self, limit: int = 5) -> List[DomainRating]:
        """Lowest rated domains."""
        ...

    async def ping(self) -> Dict[str, Any]:
        """Probe connectivity, returning a small sample of data."""
        ...

    async def shutdown(self) -> None:
        """Close network resources."""
        ...


class StaticRatingTable(Protocol):
    """Last-resort table of ratings that needs no network."""

    def get(self, domain: str) -> Optional[DomainRating]:
        """Rating of a domain, None if absent."""
        ...

    def top_rated(self, limit: int = 10) -> List[DomainRating]:
        """Highest rated entries."""
        ...

    def lowest_rated(self, limit: int = 10) -> List[DomainRating]:
        """Lowest rated entries."""
        ...
