"""Domain listing and search endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from ...domain.services.domain_names import require_domain
from ...domain.services.vote_aggregator import VoteAggregator
from ...infrastructure.dependencies import get_vote_aggregator

router = APIRouter(prefix="/api/domains", tags=["domains"])


def _public(ratings) -> List[Dict[str, Any]]:
    return [rating.to_public_dict() for rating in ratings]


@router.get("/top")
def top_rated(
    limit: int = Query(10),
    min_votes: int = Query(5),
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> List[Dict[str, Any]]:
    """Highest rated domains with at least ``min_votes`` votes."""
    return _public(aggregator.top_rated(limit=limit, min_votes=min_votes))


@router.get("/lowest")
def lowest_rated(
    limit: int = Query(10),
    min_votes: int = Query(5),
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> List[Dict[str, Any]]:
    """Lowest rated domains with at least ``min_votes`` votes."""
    return _public(aggregator.lowest_rated(limit=limit, min_votes=min_votes))


@router.get("/search")
def search_domains(
    q: str = Query(""),
    limit: int = Query(10),
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> List[Dict[str, Any]]:
    """Domains whose name contains ``q``, best rated first."""
    return _public(aggregator.search(q, limit=limit))


@router.get("")
def list_domains(
    page: int = Query(1),
    limit: int = Query(20),
    min_votes: int = Query(1),
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> Dict[str, Any]:
    """Page through domains ordered by rating.

    Returns:
        ``data`` for the page and ``pagination`` totals
    """
    result = aggregator.list_domains(page=page, limit=limit, min_votes=min_votes)
    return {
        "data": _public(result.data),
        "pagination": result.pagination.model_dump(),
    }


@router.get("/{domain}/stats")
def domain_stats(
    domain: str,
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> Dict[str, Any]:
    """Vote statistics for one domain."""
    return aggregator.domain_stats(require_domain(domain)).model_dump(mode="json")
