"""In-process implementation of the rating store."""

import threading
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple

from ...domain.models.rating import DomainRating, PlatformStats, Vote, VoteSummary
from ...domain.ports.rating_store import RatingStore


def _passes_min_votes(rating: DomainRating, min_votes: int) -> bool:
    return rating.total_votes is None or rating.total_votes >= min_votes


def _order_key(rating: DomainRating, ascending: bool):
    votes = rating.total_votes or 0
    primary = rating.rating if ascending else -rating.rating
    return (primary, -votes, rating.domain)


class InMemoryRatingStore(RatingStore):
    """Dictionary-backed rating store.

    Holds data for the life of the process. A lock makes the vote uniqueness
    check and insert atomic, and readers iterate snapshots taken under it.
    Like a SQL unique constraint, a vote with an absent voter or address
    never conflicts.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._lock = threading.Lock()
        self._votes: List[Vote] = []
        self._vote_keys: Set[Tuple[str, str, Optional[str]]] = set()
        self._ratings: Dict[str, DomainRating] = {}

    def insert_vote_if_absent(self, vote: Vote) -> bool:
        with self._lock:
            if vote.user_id is not None and vote.ip_address is not None:
                key = (vote.domain, vote.user_id, vote.ip_address)
                if key in self._vote_keys:
                    return False
                self._vote_keys.add(key)
            self._votes.append(vote.model_copy(update={"id": len(self._votes) + 1}))
            return True

    def recompute_aggregate(self, domain: str) -> Tuple[float, int]:
        with self._lock:
            ratings = [vote.rating for vote in self._votes if vote.domain == domain]
        if not ratings:
            return 0.0, 0
        return sum(ratings) / len(ratings), len(ratings)

    def upsert_rating(
        self,
        domain: str,
        rating: float,
        total_votes: Optional[int],
        updated_at: datetime,
        keep_vote_count: bool = False,
    ) -> Tuple[DomainRating, bool]:
        with self._lock:
            existing = self._ratings.get(domain)
            if existing is None:
                stored = DomainRating(
                    domain=domain,
                    rating=rating,
                    total_votes=total_votes,
                    created_at=updated_at,
                    updated_at=updated_at,
                )
                created = True
            else:
                stored = existing.model_copy(
                    update={
                        "rating": rating,
                        "total_votes": existing.total_votes if keep_vote_count else total_votes,
                        "updated_at": updated_at,
                    }
                )
                created = False
            self._ratings[domain] = stored
            return stored, created

    def _rating_snapshot(self) -> List[DomainRating]:
        with self._lock:
            return list(self._ratings.values())

    def get_rating(self, domain: str) -> Optional[DomainRating]:
        with self._lock:
            return self._ratings.get(domain)

    def query_ordered(
        self,
        limit: int,
        min_votes: int = 0,
        ascending: bool = False,
        offset: int = 0,
    ) -> List[DomainRating]:
        rows = [r for r in self._rating_snapshot() if _passes_min_votes(r, min_votes)]
        rows.sort(key=lambda r: _order_key(r, ascending))
        return rows[offset:offset + limit]

    def count_domains(self, min_votes: int = 0) -> int:
        return sum(1 for r in self._rating_snapshot() if _passes_min_votes(r, min_votes))

    def search_domains(self, query: str, limit: int) -> List[DomainRating]:
        needle = query.lower()
        rows = [r for r in self._rating_snapshot() if needle in r.domain.lower()]
        rows.sort(key=lambda r: _order_key(r, ascending=False))
        return rows[:limit]

    def vote_summary(self, domain: str) -> Optional[VoteSummary]:
        with self._lock:
            rating = self._ratings.get(domain)
            votes = [vote for vote in self._votes if vote.domain == domain]
        if rating is None:
            return None

        values = [vote.rating for vote in votes]
        timestamps = [vote.created_at for vote in votes]
        return VoteSummary(
            domain=domain,
            rating=rating.rating,
            total_votes=rating.total_votes,
            min_vote=min(values) if values else None,
            max_vote=max(values) if values else None,
            distribution=dict(sorted(Counter(values).items())),
            first_vote_at=min(timestamps) if timestamps else None,
            last_vote_at=max(timestamps) if timestamps else None,
            updated_at=rating.updated_at,
        )

    def platform_totals(self) -> PlatformStats:
        with self._lock:
            ratings = [r.rating for r in self._ratings.values()]
            votes = list(self._votes)
        users = {vote.user_id for vote in votes if vote.user_id is not None}
        average = sum(ratings) / len(ratings) if ratings else 0.0
        return PlatformStats(
            total_domains=len(ratings),
            total_votes=len(votes),
            total_users=len(users),
            average_rating=round(average, 1),
        )
