"""Port interface for rating persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ..models.rating import DomainRating, PlatformStats, Vote, VoteSummary


class RatingStore(ABC):
    """Abstract persistence for votes and per-domain ratings.

    Either an embedded single-file database or an external managed database
    can satisfy this port. Implementations must enforce vote uniqueness on
    (domain, user_id, ip_address) atomically; an absent user_id never
    conflicts with another absent user_id.
    """

    @abstractmethod
    def insert_vote_if_absent(self, vote: Vote) -> bool:
        """Insert a vote unless an identical voter already voted.

        Args:
            vote: Vote to record

        Returns:
            True if inserted, False if the uniqueness constraint rejected it
        """
        pass

    @abstractmethod
    def recompute_aggregate(self, domain: str) -> Tuple[float, int]:
        """Compute (mean rating, vote count) over all votes for a domain."""
        pass

    @abstractmethod
    def upsert_rating(
        self,
        domain: str,
        rating: float,
        total_votes: Optional[int],
        updated_at: datetime,
        keep_vote_count: bool = False,
    ) -> Tuple[DomainRating, bool]:
        """Create or overwrite the rating row of a domain.

        Args:
            domain: Normalized domain
            rating: New rating value
            total_votes: New vote count (None when not tracked)
            updated_at: Timestamp of the change
            keep_vote_count: Leave an existing row's vote count untouched

        Returns:
            Stored rating and whether the row was created
        """
        pass

    @abstractmethod
    def get_rating(self, domain: str) -> Optional[DomainRating]:
        """Get the stored rating of a domain."""
        pass

    @abstractmethod
    def query_ordered(
        self,
        limit: int,
        min_votes: int = 0,
        ascending: bool = False,
        offset: int = 0,
    ) -> List[DomainRating]:
        """List ratings ordered by rating.

        Ties are broken by vote count descending, then domain ascending.
        ``min_votes`` only filters rows whose vote count is tracked.
        """
        pass

    @abstractmethod
    def count_domains(self, min_votes: int = 0) -> int:
        """Count rating rows passing the ``min_votes`` filter."""
        pass

    @abstractmethod
    def search_domains(self, query: str, limit: int) -> List[DomainRating]:
        """Case-insensitive substring search ordered by rating descending."""
        pass

    @abstractmethod
    def vote_summary(self, domain: str) -> Optional[VoteSummary]:
        """Per-domain vote statistics, None if the domain has no rating."""
        pass

    @abstractmethod
    def platform_totals(self) -> PlatformStats:
        """Aggregate counts across the whole store."""
        pass

    def close(self) -> None:
        """Release resources held by the store."""
        pass
