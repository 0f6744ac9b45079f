"""Domain service maintaining one community rating per domain."""

import logging
import math
from numbers import Real
from typing import Callable, List, Optional

from ..errors import DuplicateVoteError, NotFoundError, ValidationError
from ..models.rating import (
    DomainPage,
    DomainRating,
    Pagination,
    PlatformStats,
    Vote,
    VoteOutcome,
    VoteSummary,
    utcnow,
)
from ..ports.rating_store import RatingStore
from .domain_names import require_domain

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 10
MIN_SEARCH_LENGTH = 2


def _validate_vote_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, Real):
        raise ValidationError("Rating must be an integer between 1 and 10")
    if not float(rating).is_integer():
        raise ValidationError("Rating must be an integer between 1 and 10")
    value = int(rating)
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError("Rating must be an integer between 1 and 10")
    return value


def _validate_set_rating(rating) -> float:
    if isinstance(rating, bool) or not isinstance(rating, Real):
        raise ValidationError("Rating must be a number between 1 and 10")
    value = float(rating)
    if math.isnan(value) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError("Rating must be a number between 1 and 10")
    return value


def _validate_limit(limit: int, name: str = "limit") -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError(f"{name} must be a positive integer")
    return limit


class VoteAggregator:
    """Aggregate per-user votes into a mean rating per domain.

    Two write modes exist as distinct operations:

    * ``submit_vote``: one vote per (domain, voter, address), the rating is
      the mean of all accepted votes;
    * ``set_rating``: unconditional overwrite, no votes, no idempotence.

    The aggregate is recomputed from the full vote set on every accepted vote.
    Concurrent votes on one domain may leave a slightly stale mean until the
    next vote; the vote insert itself relies on the store's unique constraint.
    """

    def __init__(self, store: RatingStore, clock: Callable = utcnow):
        """Initialize the aggregator.

        Args:
            store: Rating store
            clock: Returns the current aware datetime
        """
        self._store = store
        self._clock = clock

    def submit_vote(
        self,
        domain: str,
        rating,
        user_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> VoteOutcome:
        """Record a vote and recompute the domain's mean.

        Args:
            domain: Domain or URL being rated
            rating: Integer rating 1-10
            user_id: Per-browser voter identifier
            ip_address: Requester network address
            user_agent: Requester user agent

        Returns:
            New mean rating and vote count

        Raises:
            ValidationError: Bad domain or rating
            DuplicateVoteError: Voter already voted for this domain
        """
        domain = require_domain(domain)
        value = _validate_vote_rating(rating)

        vote = Vote(
            domain=domain,
            rating=value,
            user_id=user_id or None,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=self._clock(),
        )
        if not self._store.insert_vote_if_absent(vote):
            logger.info(f"Duplicate vote rejected for {domain}")
            raise DuplicateVoteError()

        mean, count = self._store.recompute_aggregate(domain)
        stored, created = self._store.upsert_rating(
            domain, mean, count, updated_at=self._clock()
        )
        logger.info(f"🗳️ Vote recorded for {domain}: mean={stored.rating:.2f} votes={count}")
        return VoteOutcome(
            domain=domain,
            rating=stored.rating,
            total_votes=count,
            created=created,
        )

    def set_rating(self, domain: str, rating) -> DomainRating:
        """Overwrite a domain's rating without voting semantics.

        Args:
            domain: Domain or URL being rated
            rating: Number between 1 and 10

        Returns:
            Stored rating

        Raises:
            ValidationError: Bad domain or rating
        """
        domain = require_domain(domain)
        value = _validate_set_rating(rating)
        stored, created = self._store.upsert_rating(
            domain,
            value,
            None,
            updated_at=self._clock(),
            keep_vote_count=True,
        )
        logger.info(f"Rating {'created' if created else 'set'} for {domain}: {value}")
        return stored

    def get_rating(self, domain: str) -> DomainRating:
        """Get the stored rating of a domain.

        Raises:
            ValidationError: Bad domain
            NotFoundError: Domain has no rating
        """
        domain = require_domain(domain)
        rating = self._store.get_rating(domain)
        if rating is None:
            raise NotFoundError("Domain not found")
        return rating

    def top_rated(self, limit: int = 10, min_votes: int = 5) -> List[DomainRating]:
        """Domains ordered by rating descending."""
        return self._store.query_ordered(
            _validate_limit(limit), min_votes=max(min_votes, 0), ascending=False
        )

    def lowest_rated(self, limit: int = 10, min_votes: int = 5) -> List[DomainRating]:
        """Domains ordered by rating ascending."""
        return self._store.query_ordered(
            _validate_limit(limit), min_votes=max(min_votes, 0), ascending=True
        )

    def list_domains(self, page: int = 1, limit: int = 20, min_votes: int = 1) -> DomainPage:
        """Page through domains ordered by rating descending."""
        page = _validate_limit(page, "page")
        limit = _validate_limit(limit)
        min_votes = max(min_votes, 0)

        total = self._store.count_domains(min_votes=min_votes)
        data = self._store.query_ordered(
            limit, min_votes=min_votes, ascending=False, offset=(page - 1) * limit
        )
        return DomainPage(
            data=data,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                pages=math.ceil(total / limit),
            ),
        )

    def search(self, query: Optional[str], limit: int = 10) -> List[DomainRating]:
        """Find domains containing ``query``, case-insensitively.

        Raises:
            ValidationError: Query shorter than two characters
        """
        if not query or len(query.strip()) < MIN_SEARCH_LENGTH:
            raise ValidationError("Query must be at least 2 characters long")
        return self._store.search_domains(query.strip().lower(), _validate_limit(limit))

    def domain_stats(self, domain: str) -> VoteSummary:
        """Vote statistics for a domain.

        Raises:
            ValidationError: Bad domain
            NotFoundError: Domain has no rating
        """
        domain = require_domain(domain)
        summary = self._store.vote_summary(domain)
        if summary is None:
            raise NotFoundError("Domain not found")
        return summary

    def platform_stats(self) -> PlatformStats:
        """Aggregate counts and average rating across all domains."""
        return self._store.platform_totals()
