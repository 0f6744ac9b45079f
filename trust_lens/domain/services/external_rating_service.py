"""Service building MBFC-style reports and enhanced ratings."""

import logging
from typing import Optional

from ..models.rating import DomainRating, utcnow
from ..models.reliability import CategoryDetail, EnhancedRating, MBFCReport
from ..ports.bias_source import BiasFactualSource
from .lookup_cache import LookupCache
from .score_combiner import (
    combine_bias_factual,
    combine_community_and_external,
    get_bias_rating,
    get_factual_rating,
)

logger = logging.getLogger(__name__)

LOCAL_SOURCE = "Local Database"
MBFC_SOURCE = "MBFC"


class ExternalRatingService:
    """Combine a bias/factual source with community ratings."""

    def __init__(self, source: BiasFactualSource, cache: Optional[LookupCache] = None):
        """Initialize the service.

        Args:
            source: Bias/factual data source
            cache: Cache for built reports (a fresh 24h cache if omitted)
        """
        self._source = source
        self._cache = cache or LookupCache()

    async def get_report(self, domain: str) -> Optional[MBFCReport]:
        """Get the bias/factual report for a domain.

        Args:
            domain: Normalized domain

        Returns:
            Report with the combined composite score, None if the source has
            no entry for the domain
        """
        cached = self._cache.get(domain)
        if cached is not None:
            logger.debug(f"MBFC: using cached data for {domain}")
            return cached

        entry = await self._source.lookup(domain)
        if entry is None:
            return None

        bias = get_bias_rating(entry.bias)
        factual = get_factual_rating(entry.factual)
        report = MBFCReport(
            domain=domain,
            bias=CategoryDetail(rating=entry.bias, **bias.model_dump()),
            factual=CategoryDetail(rating=entry.factual, **factual.model_dump()),
            combined=combine_bias_factual(bias, factual),
            metadata={
                "country": entry.country,
                "language": entry.language,
                "traffic": entry.traffic,
                "credibility": entry.credibility,
                "source": self._source.source_name,
                "last_updated": utcnow().isoformat(),
            },
        )
        self._cache.put(domain, report)
        logger.info(f"MBFC: retrieved data for {domain}")
        return report

    async def external_score(self, domain: str) -> Optional[float]:
        """Composite 0-100 score for a domain, None if unknown."""
        report = await self.get_report(domain)
        return report.combined.score if report else None

    async def get_enhanced_rating(
        self,
        domain: str,
        local_rating: Optional[DomainRating] = None,
    ) -> Optional[EnhancedRating]:
        """Rate a domain from community data, the report, or both.

        Args:
            domain: Normalized domain
            local_rating: Community rating if known

        Returns:
            Enhanced rating, None when neither signal exists
        """
        report = await self.get_report(domain)
        community = local_rating.rating if local_rating else None
        external = report.combined.score if report else None

        combined = combine_community_and_external(community, external)
        if combined is None:
            return None

        if report and local_rating:
            sources = [LOCAL_SOURCE, MBFC_SOURCE]
            last_updated = utcnow()
        elif report:
            sources = [MBFC_SOURCE]
            last_updated = utcnow()
        else:
            sources = [LOCAL_SOURCE]
            last_updated = local_rating.updated_at or local_rating.created_at

        return EnhancedRating(
            domain=domain,
            score=combined.score,
            grade=combined.grade,
            color=combined.color,
            label=combined.label,
            sources=sources,
            last_updated=last_updated,
            details={
                "local": local_rating.model_dump() if local_rating else None,
                "mbfc": report.model_dump() if report else None,
            },
        )

    def clear_cache(self) -> None:
        """Drop cached reports."""
        self._cache.clear()

    @property
    def source(self) -> BiasFactualSource:
        """Underlying bias/factual source."""
        return self._source
