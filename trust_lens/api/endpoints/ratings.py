"""Rating read and write endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, field_validator

from ...domain.services.domain_names import require_domain
from ...domain.services.vote_aggregator import VoteAggregator
from ...infrastructure.dependencies import get_vote_aggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rating", tags=["ratings"])
vote_router = APIRouter(prefix="/api/rating", tags=["ratings"])
set_router = APIRouter(prefix="/api/rating", tags=["ratings"])


def _number_from_string(value: Any) -> Any:
    """Read numeric strings such as ``"5"`` as numbers; leave the rest as is."""
    if not isinstance(value, str):
        return value
    try:
        number = float(value.strip())
    except ValueError:
        return value
    return int(number) if number.is_integer() else number


class VoteRequest(BaseModel):
    """Request model for submitting a vote."""

    domain: str = Field(..., description="Domain or URL being rated")
    rating: Any = Field(..., description="Integer rating from 1 to 10")
    user_id: Optional[str] = Field(None, description="Opaque voter identifier")

    @field_validator("rating", mode="before")
    @classmethod
    def _rating_from_string(cls, value: Any) -> Any:
        return _number_from_string(value)


class VoteResponse(BaseModel):
    """Response model for an accepted vote."""

    message: str
    domain: str
    new_rating: float
    total_votes: int


class SetRatingRequest(BaseModel):
    """Request model for overwriting a rating."""

    domain: str = Field(..., description="Domain or URL being rated")
    rating: Any = Field(..., description="Rating from 1 to 10")

    @field_validator("rating", mode="before")
    @classmethod
    def _rating_from_string(cls, value: Any) -> Any:
        return _number_from_string(value)


class SetRatingResponse(BaseModel):
    """Response model for an overwritten rating."""

    message: str
    domain: str
    rating: float


@router.get("/{domain}")
def get_rating(
    domain: str,
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> Dict[str, Any]:
    """Get the stored rating of a domain.

    Args:
        domain: Domain to look up

    Returns:
        Domain, rating, vote count and last update time
    """
    rating = aggregator.get_rating(require_domain(domain))
    return {
        "domain": rating.domain,
        "rating": rating.rating,
        "total_votes": rating.total_votes,
        "last_updated": rating.updated_at.isoformat() if rating.updated_at else None,
    }


@vote_router.post("", response_model=VoteResponse)
def submit_vote(
    body: VoteRequest,
    request: Request,
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> VoteResponse:
    """Record a vote and return the new mean rating.

    Each (domain, user, address) triple may vote once.
    """
    outcome = aggregator.submit_vote(
        domain=body.domain,
        rating=body.rating,
        user_id=body.user_id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return VoteResponse(
        message="Rating submitted successfully",
        domain=outcome.domain,
        new_rating=outcome.rating,
        total_votes=outcome.total_votes,
    )


@set_router.put("", response_model=SetRatingResponse)
def set_rating(
    body: SetRatingRequest,
    aggregator: VoteAggregator = Depends(get_vote_aggregator),
) -> SetRatingResponse:
    """Overwrite the rating of a domain."""
    rating = aggregator.set_rating(body.domain, body.rating)
    return SetRatingResponse(
        message="Rating updated successfully",
        domain=rating.domain,
        rating=rating.rating,
    )
