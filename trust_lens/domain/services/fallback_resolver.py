"""Choose the rating to display from live, cached and static sources."""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..errors import RemoteUnavailableError
from ..models.rating import DomainRating, utcnow
from ..models.reliability import RatingSource, ResolvedRating
from ..ports.remote_rating_source import RemoteRatingSource, StaticRatingTable
from .classifier import classify_community
from .domain_names import is_valid_domain, normalize_domain
from .external_rating_service import LOCAL_SOURCE, MBFC_SOURCE, ExternalRatingService
from .lookup_cache import LookupCache
from .score_combiner import combine_community_and_external

logger = logging.getLogger(__name__)

MOCK_SOURCE = "Mock Data"


class ConnectionStatus(BaseModel):
    """Outcome of a connectivity test against the remote source."""

    success: bool
    error: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


def _from_static(rating: DomainRating, source: RatingSource, sources: List[str]) -> ResolvedRating:
    classification = classify_community(rating.rating)
    return ResolvedRating(
        domain=rating.domain,
        rating=rating.rating,
        score=classification.score,
        grade=classification.grade,
        label=classification.label,
        color=classification.color,
        total_votes=rating.total_votes,
        last_updated=rating.updated_at or rating.created_at,
        source=source,
        sources=sources,
    )


class FallbackResolver:
    """Resolve a display rating, never failing hard.

    Order: live remote rating (combined with the external score) -> cached
    combiner output -> static mock table -> None. Each failing step falls
    through to the next.
    """

    def __init__(
        self,
        remote: Optional[RemoteRatingSource] = None,
        external: Optional[ExternalRatingService] = None,
        cache: Optional[LookupCache] = None,
        mock: Optional[StaticRatingTable] = None,
    ):
        """Initialize the resolver.

        Args:
            remote: Live rating source
            external: Bias/factual rating service
            cache: Cache of combined ratings (a fresh 24h cache if omitted)
            mock: Static fallback table
        """
        self._remote = remote
        self._external = external
        self._cache = cache or LookupCache()
        self._mock = mock
        self._skip_remote_once = False

    async def resolve(self, value: Optional[str]) -> Optional[ResolvedRating]:
        """Resolve the rating to display for a URL or domain.

        Args:
            value: Page URL or hostname

        Returns:
            Resolved rating, or None when no source has one
        """
        domain = normalize_domain(value)
        if not is_valid_domain(domain):
            logger.debug(f"No rating for unsupported address: {value!r}")
            return None

        if self._remote is not None and not self._consume_skip():
            try:
                community = await self._remote.fetch_rating(domain)
            except RemoteUnavailableError as e:
                logger.debug(f"Remote lookup failed for {domain}, falling back: {e}")
            else:
                resolved = await self._combine(domain, community)
                if resolved is not None:
                    self._cache.put(domain, resolved)
                    return resolved

        cached = self._cache.get(domain)
        if cached is not None:
            return cached.model_copy(update={"source": RatingSource.CACHE})

        if self._mock is not None:
            mock = self._mock.get(domain)
            if mock is not None:
                return _from_static(mock, RatingSource.MOCK, [MOCK_SOURCE])

        return None

    async def _combine(
        self,
        domain: str,
        community: Optional[DomainRating],
    ) -> Optional[ResolvedRating]:
        external = None
        if self._external is not None:
            try:
                external = await self._external.external_score(domain)
            except RemoteUnavailableError as e:
                logger.debug(f"External lookup failed for {domain}: {e}")

        combined = combine_community_and_external(
            community.rating if community else None, external
        )
        if combined is None:
            return None

        sources = []
        if community is not None:
            sources.append(LOCAL_SOURCE)
        if external is not None:
            sources.append(MBFC_SOURCE)

        if external is None:
            display = community.rating
        else:
            display = combined.score / 10

        return ResolvedRating(
            domain=domain,
            rating=display,
            score=combined.score,
            grade=combined.grade,
            label=combined.label,
            color=combined.color,
            total_votes=community.total_votes if community else None,
            last_updated=(community.updated_at if community else None) or utcnow(),
            source=RatingSource.REMOTE if community else RatingSource.EXTERNAL,
            sources=sources,
        )

    def _consume_skip(self) -> bool:
        skip = self._skip_remote_once
        self._skip_remote_once = False
        return skip

    async def check_connection(self) -> ConnectionStatus:
        """Test connectivity to the remote source.

        A failed test lets the next lookup skip the remote step; the lookup
        after that tries the remote again.
        """
        if self._remote is None:
            return ConnectionStatus(success=False, error="No remote rating source configured")

        try:
            data = await self._remote.ping()
        except RemoteUnavailableError as e:
            logger.warning(f"⚠️ Remote rating source test failed: {e}")
            self._skip_remote_once = True
            return ConnectionStatus(success=False, error=str(e))

        logger.info("✅ Remote rating source reachable")
        self._skip_remote_once = False
        return ConnectionStatus(success=True, data=data)

    async def get_stats(self, limit: int = 5) -> Dict[str, Any]:
        """Top and lowest rated domains, from the remote or the mock table."""
        if self._remote is not None:
            try:
                top = await self._remote.top_rated(limit)
                lowest = await self._remote.lowest_rated(limit)
                return {"top_rated": top, "lowest_rated": lowest, "source": RatingSource.REMOTE.value}
            except RemoteUnavailableError as e:
                logger.debug(f"Remote stats unavailable: {e}")

        if self._mock is not None:
            return {
                "top_rated": self._mock.top_rated(limit),
                "lowest_rated": self._mock.lowest_rated(limit),
                "source": RatingSource.MOCK.value,
            }
        return {"top_rated": [], "lowest_rated": [], "source": None}

    @property
    def cache(self) -> LookupCache:
        """Cache of combined ratings."""
        return self._cache
