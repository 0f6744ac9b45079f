"""Platform statistics endpoint."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...domain.services.vote_aggregator import VoteAggregator
from ...infrastructure.dependencies import get_vote_aggregator

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
def platform_stats(
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> Dict[str, Any]:
    """Totals across every domain and vote."""
    return aggregator.platform_stats().model_dump()
